"""
SQLite document store for hockey games.

Each game is stored as a JSON document with indexed columns for the
fields the service filters and sorts on:
- team_id, game_type for list/delete filters
- game_date (fixed-width UTC string) for newest-first ordering

Connections are per thread and use WAL mode for concurrent readers.
This is the SQLite implementation of the GameStoreInterface.
"""

import json
import logging
import sqlite3
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Optional, Iterator, List, Dict, Any

from .base import GameStoreInterface
from .documents import apply_update, filter_columns, index_columns, new_document_id
from .exceptions import QueryError, SchemaError

logger = logging.getLogger(__name__)


class SQLiteGameStore(GameStoreInterface):
    """
    SQLite document store for games.
    Thread-safe with connection per thread.
    """

    SCHEMA_VERSION = 1

    def __init__(self, db_path: str = "data/gamebook.db"):
        """
        Create SQLite store instance.

        Args:
            db_path: Path to the SQLite database file
        """
        self.db_path = Path(db_path)
        self._local = threading.local()
        self._initialized = False

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def initialize(self) -> None:
        """Initialize the database connection and schema."""
        if self._initialized:
            return

        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            self._init_schema()
        except sqlite3.Error as e:
            raise SchemaError(f"Failed to create games table: {e}", operation='initialize')
        self._initialized = True

    def close(self) -> None:
        """Close the calling thread's connection."""
        if getattr(self._local, 'conn', None) is not None:
            self._local.conn.close()
            self._local.conn = None

    def health_check(self) -> bool:
        """Check if the database connection is healthy."""
        try:
            conn = self._get_connection()
            conn.execute("SELECT 1")
            return True
        except sqlite3.Error:
            return False

    # =========================================================================
    # CONNECTION MANAGEMENT
    # =========================================================================

    def _get_connection(self) -> sqlite3.Connection:
        """Get thread-local database connection."""
        if getattr(self._local, 'conn', None) is None:
            self._local.conn = sqlite3.connect(
                str(self.db_path),
                check_same_thread=False,
                timeout=30.0
            )
            self._local.conn.row_factory = sqlite3.Row
            self._local.conn.execute("PRAGMA journal_mode=WAL")
            self._local.conn.execute("PRAGMA synchronous=NORMAL")
        return self._local.conn

    @contextmanager
    def transaction(self) -> Iterator[sqlite3.Connection]:
        """Context manager for database transactions."""
        conn = self._get_connection()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise

    def _init_schema(self) -> None:
        """Initialize database schema."""
        with self.transaction() as conn:
            conn.executescript('''
                CREATE TABLE IF NOT EXISTS games (
                    id TEXT PRIMARY KEY,
                    team_id TEXT,
                    game_type TEXT,
                    game_date TEXT,
                    data JSON NOT NULL,
                    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
                );

                CREATE INDEX IF NOT EXISTS idx_games_team ON games(team_id);
                CREATE INDEX IF NOT EXISTS idx_games_type ON games(game_type);
                CREATE INDEX IF NOT EXISTS idx_games_date ON games(game_date);
            ''')
            conn.execute(f"PRAGMA user_version = {self.SCHEMA_VERSION}")

    @staticmethod
    def _where(conditions: Dict[str, Any]) -> tuple:
        """Build a WHERE clause from column conditions."""
        clause = " WHERE 1=1"
        params: List[Any] = []
        for column, value in conditions.items():
            clause += f" AND {column} = ?"
            params.append(value)
        return clause, params

    # =========================================================================
    # WRITE OPERATIONS
    # =========================================================================

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a new game document."""
        document = dict(data)
        document['id'] = new_document_id()
        columns = index_columns(document)

        try:
            with self.transaction() as conn:
                conn.execute('''
                    INSERT INTO games (id, team_id, game_type, game_date, data)
                    VALUES (?, ?, ?, ?, ?)
                ''', (
                    document['id'],
                    columns['team_id'],
                    columns['game_type'],
                    columns['game_date'],
                    json.dumps(document)
                ))
        except sqlite3.Error as e:
            raise QueryError(str(e), operation='create')

        return document

    def find_by_id_and_update(
        self,
        game_id: str,
        update: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """Apply a partial update inside one transaction."""
        try:
            with self.transaction() as conn:
                row = conn.execute(
                    'SELECT data FROM games WHERE id = ?', (game_id,)
                ).fetchone()
                if row is None:
                    return None

                document = apply_update(json.loads(row['data']), update)
                columns = index_columns(document)
                conn.execute('''
                    UPDATE games
                    SET team_id = ?, game_type = ?, game_date = ?, data = ?,
                        updated_at = CURRENT_TIMESTAMP
                    WHERE id = ?
                ''', (
                    columns['team_id'],
                    columns['game_type'],
                    columns['game_date'],
                    json.dumps(document),
                    game_id
                ))
        except sqlite3.Error as e:
            raise QueryError(str(e), operation='find_by_id_and_update')

        return document

    def find_by_id_and_delete(self, game_id: str) -> Optional[Dict[str, Any]]:
        """Delete one document and return it."""
        try:
            with self.transaction() as conn:
                row = conn.execute(
                    'SELECT data FROM games WHERE id = ?', (game_id,)
                ).fetchone()
                if row is None:
                    return None
                conn.execute('DELETE FROM games WHERE id = ?', (game_id,))
        except sqlite3.Error as e:
            raise QueryError(str(e), operation='find_by_id_and_delete')

        return json.loads(row['data'])

    def delete_many(self, filters: Dict[str, Any]) -> int:
        """Delete every document matching the filter."""
        clause, params = self._where(filter_columns(filters, 'delete_many'))
        try:
            with self.transaction() as conn:
                cursor = conn.execute("DELETE FROM games" + clause, params)
        except sqlite3.Error as e:
            raise QueryError(str(e), operation='delete_many')

        logger.debug("Deleted %s games matching %s", cursor.rowcount, filters)
        return cursor.rowcount

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    def find_many(self, filters: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Get games matching the filter, newest first."""
        clause, params = self._where(filter_columns(filters, 'find_many'))
        query = "SELECT data FROM games" + clause + " ORDER BY game_date DESC"

        try:
            conn = self._get_connection()
            rows = conn.execute(query, params).fetchall()
        except sqlite3.Error as e:
            raise QueryError(str(e), operation='find_many')

        return [json.loads(row['data']) for row in rows]

    def find_by_id(self, game_id: str) -> Optional[Dict[str, Any]]:
        """Get one game by identifier."""
        try:
            conn = self._get_connection()
            row = conn.execute(
                'SELECT data FROM games WHERE id = ?', (game_id,)
            ).fetchone()
        except sqlite3.Error as e:
            raise QueryError(str(e), operation='find_by_id')

        return json.loads(row['data']) if row else None
