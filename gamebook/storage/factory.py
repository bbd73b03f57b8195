"""
Factory function to create the configured game store.

Reads configuration from environment variables to determine which
storage backend to use.
"""

import logging
import os
from typing import Optional

from .base import GameStoreInterface
from .exceptions import ConfigurationError
from .. import config

logger = logging.getLogger(__name__)

# Singleton instance
_store_instance: Optional[GameStoreInterface] = None


def get_game_store() -> GameStoreInterface:
    """
    Get or create the game store instance.

    Uses the DB_TYPE environment variable to determine which implementation:
    - "sqlite" (default): Local SQLite document store
    - "supabase": Supabase PostgreSQL (jsonb documents)

    Additional environment variables per type:
    - SQLite: DATA_DIR, or uses the "data" directory
    - Supabase: SUPABASE_URL, SUPABASE_KEY

    Returns:
        GameStoreInterface implementation

    Raises:
        ConfigurationError: If DB_TYPE is unknown or required env vars are missing
    """
    global _store_instance

    if _store_instance is not None:
        return _store_instance

    db_type = os.environ.get('DB_TYPE', config.DB_TYPE).lower()
    logger.info("[*] Game store type: %s", db_type)

    if db_type == 'sqlite':
        from .sqlite_db import SQLiteGameStore

        data_dir = os.environ.get('DATA_DIR') or config.DATA_DIR
        db_path = os.path.join(data_dir, 'gamebook.db')

        _store_instance = SQLiteGameStore(db_path=db_path)

    elif db_type == 'supabase':
        from .supabase_db import SupabaseGameStore
        _store_instance = SupabaseGameStore()

    else:
        raise ConfigurationError(
            f"Unknown DB_TYPE: {db_type}. "
            f"Valid options: sqlite, supabase"
        )

    try:
        _store_instance.initialize()
    except Exception:
        _store_instance = None
        raise

    return _store_instance


def reset_game_store() -> None:
    """
    Reset the game store singleton.

    Used for testing or when switching configurations.
    """
    global _store_instance
    if _store_instance is not None:
        _store_instance.close()
        _store_instance = None
