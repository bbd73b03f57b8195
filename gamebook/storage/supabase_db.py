"""
Supabase document store for hockey games.

Provides PostgreSQL-based cloud storage using Supabase's REST API.
Key differences from SQLite:
- Uses supabase-py client library (REST API)
- Documents live in a jsonb 'data' column
- delete() needs a filter, so "delete all" uses neq('id', '')
- find_by_id_and_update is a read-modify-write over two REST calls
  (last write wins)
- initialize() verifies the games table exists (doesn't create it)

Requires: pip install supabase
Schema must be created first via scripts/supabase_schema.sql
"""

import logging
import os
from typing import Optional, List, Dict, Any

from .base import GameStoreInterface
from .documents import apply_update, filter_columns, index_columns, new_document_id
from .exceptions import ConfigurationError, ConnectionError, QueryError, SchemaError

logger = logging.getLogger(__name__)

TABLE = 'games'


class SupabaseGameStore(GameStoreInterface):
    """
    Supabase cloud document store implementation.

    Uses PostgreSQL via Supabase's REST API.
    """

    def __init__(self):
        """
        Create Supabase store instance.

        Reads configuration from environment variables:
        - SUPABASE_URL: Project URL (e.g., https://your-project.supabase.co)
        - SUPABASE_KEY: Anon or service key
        """
        self._url = os.environ.get('SUPABASE_URL')
        self._key = os.environ.get('SUPABASE_KEY')
        self._client = None
        self._initialized = False

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def initialize(self) -> None:
        """Initialize the client and verify the games table exists."""
        if self._initialized:
            return

        if not self._url:
            raise ConfigurationError(
                "SUPABASE_URL environment variable is required for Supabase backend"
            )
        if not self._key:
            raise ConfigurationError(
                "SUPABASE_KEY environment variable is required for Supabase backend"
            )

        client = self._get_client()
        try:
            client.table(TABLE).select('id').limit(1).execute()
        except Exception as e:
            raise SchemaError(
                f"Games table not reachable. "
                f"Run scripts/supabase_schema.sql in Supabase SQL Editor first. "
                f"Error: {e}",
                operation='initialize'
            )

        self._initialized = True

    def _get_client(self):
        """Get or create Supabase client."""
        if self._client is None:
            try:
                from supabase import create_client
            except ImportError:
                raise ConfigurationError(
                    "supabase package not installed. "
                    "Install with: pip install supabase"
                )

            try:
                self._client = create_client(self._url, self._key)
            except Exception as e:
                raise ConnectionError(f"Failed to create Supabase client: {e}")

        return self._client

    def close(self) -> None:
        """Close database connection (no-op for Supabase REST API)."""
        self._client = None

    def health_check(self) -> bool:
        """Check if the games table is reachable."""
        try:
            client = self._get_client()
            client.table(TABLE).select('id').limit(1).execute()
            return True
        except Exception:
            return False

    @staticmethod
    def _apply_filter(query, conditions: Dict[str, Any]):
        """Add eq() conditions to a query builder."""
        for column, value in conditions.items():
            query = query.eq(column, value)
        return query

    @staticmethod
    def _row(document: Dict[str, Any]) -> Dict[str, Any]:
        """Build a table row from a game document."""
        row = {'id': document['id'], 'data': document}
        row.update(index_columns(document))
        return row

    # =========================================================================
    # WRITE OPERATIONS
    # =========================================================================

    def create(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Insert a new game document."""
        document = dict(data)
        document['id'] = new_document_id()

        try:
            self._get_client().table(TABLE).insert(self._row(document)).execute()
        except Exception as e:
            raise QueryError(str(e), operation='create')

        return document

    def find_by_id_and_update(
        self,
        game_id: str,
        update: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """Apply a partial update to one document."""
        current = self.find_by_id(game_id)
        if current is None:
            return None

        document = apply_update(current, update)
        try:
            response = (
                self._get_client().table(TABLE)
                .update(self._row(document))
                .eq('id', game_id)
                .execute()
            )
        except Exception as e:
            raise QueryError(str(e), operation='find_by_id_and_update')

        # Deleted between the read and the write
        if not response.data:
            return None
        return document

    def find_by_id_and_delete(self, game_id: str) -> Optional[Dict[str, Any]]:
        """Delete one document and return it."""
        try:
            response = (
                self._get_client().table(TABLE)
                .delete()
                .eq('id', game_id)
                .execute()
            )
        except Exception as e:
            raise QueryError(str(e), operation='find_by_id_and_delete')

        if not response.data:
            return None
        return response.data[0]['data']

    def delete_many(self, filters: Dict[str, Any]) -> int:
        """Delete every document matching the filter."""
        conditions = filter_columns(filters, 'delete_many')
        try:
            query = self._get_client().table(TABLE).delete()
            if conditions:
                query = self._apply_filter(query, conditions)
            else:
                # Use a filter that matches all rows
                query = query.neq('id', '')
            response = query.execute()
        except Exception as e:
            raise QueryError(str(e), operation='delete_many')

        return len(response.data or [])

    # =========================================================================
    # READ OPERATIONS
    # =========================================================================

    def find_many(self, filters: Dict[str, Any]) -> List[Dict[str, Any]]:
        """Get games matching the filter, newest first."""
        conditions = filter_columns(filters, 'find_many')
        try:
            query = self._get_client().table(TABLE).select('data')
            query = self._apply_filter(query, conditions)
            response = query.order('game_date', desc=True).execute()
        except Exception as e:
            raise QueryError(str(e), operation='find_many')

        return [row['data'] for row in response.data or []]

    def find_by_id(self, game_id: str) -> Optional[Dict[str, Any]]:
        """Get one game by identifier."""
        try:
            response = (
                self._get_client().table(TABLE)
                .select('data')
                .eq('id', game_id)
                .limit(1)
                .execute()
            )
        except Exception as e:
            raise QueryError(str(e), operation='find_by_id')

        if not response.data:
            return None
        return response.data[0]['data']
