"""
Storage module for game documents.

Provides a unified document store interface over:
- SQLite (local development, self-hosted)
- Supabase (PostgreSQL, free tier)

Usage:
    from gamebook.storage import get_game_store

    store = get_game_store()  # Uses DB_TYPE env var
    games = store.find_many({'teamId': 'T1'})
"""

from .base import GameStoreInterface
from .factory import get_game_store, reset_game_store
from .exceptions import (
    DatabaseError,
    ConnectionError,
    ConfigurationError,
    SchemaError,
    QueryError
)

__all__ = [
    'GameStoreInterface',
    'get_game_store',
    'reset_game_store',
    'DatabaseError',
    'ConnectionError',
    'ConfigurationError',
    'SchemaError',
    'QueryError'
]
