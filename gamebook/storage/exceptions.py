"""
Custom exceptions for the storage layer.

Error categories for document store operations:
- DatabaseError: Base exception for all database errors
- ConnectionError: Connection failures
- ConfigurationError: Missing or invalid configuration
- SchemaError: Games table missing or not initialized
- QueryError: Query execution failures

Backends wrap driver exceptions in one of these so the service and API
layers only ever see storage failures as DatabaseError.
"""

from typing import Optional


class DatabaseError(Exception):
    """Base exception for all database errors."""

    def __init__(self, message: str, operation: Optional[str] = None):
        super().__init__(message)
        self.operation = operation

    def __str__(self) -> str:
        message = super().__str__()
        if self.operation:
            return f"{self.operation}: {message}"
        return message


class ConnectionError(DatabaseError):
    """Failed to connect to database."""
    pass


class ConfigurationError(DatabaseError):
    """Missing or invalid database configuration."""
    pass


class SchemaError(DatabaseError):
    """Games table is missing or could not be created."""
    pass


class QueryError(DatabaseError):
    """Error executing a query."""
    pass
