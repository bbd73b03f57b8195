"""
Domain exceptions for game operations.

Storage failures are reported separately through
gamebook.storage.exceptions.DatabaseError. A missing game is not an
exception: service methods return None for it.
"""


class GameError(Exception):
    """Base exception for game operation errors."""
    pass


class GameValidationError(GameError):
    """Caller-supplied game data failed validation."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
