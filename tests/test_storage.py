"""Tests for storage module."""

import pytest
import os
from unittest.mock import patch, MagicMock

from gamebook.storage import get_game_store, reset_game_store, GameStoreInterface
from gamebook.storage.documents import apply_update, date_sort_key, filter_columns
from gamebook.storage.exceptions import ConfigurationError, DatabaseError, QueryError


def _doc(team_id="T1", game_type="league", game_date="2026-02-10T19:30:00Z", **extra):
    document = {
        'teamId': team_id,
        'gameType': game_type,
        'gameDate': game_date,
        'opponent': {'teamName': 'Towson', 'roster': []},
        'score': {'us': 0, 'them': 0},
        'status': 'scheduled',
    }
    document.update(extra)
    return document


class TestFactory:
    """Tests for factory function."""

    def setup_method(self):
        """Reset singleton before each test."""
        reset_game_store()

    def teardown_method(self):
        """Clean up after each test."""
        reset_game_store()

    def test_sqlite_explicit(self, test_data_dir):
        """Explicit sqlite DB_TYPE works."""
        with patch.dict(os.environ, {'DB_TYPE': 'sqlite', 'DATA_DIR': test_data_dir}, clear=False):
            store = get_game_store()
            assert store.__class__.__name__ == 'SQLiteGameStore'
            assert os.path.exists(os.path.join(test_data_dir, 'gamebook.db'))
            reset_game_store()  # Close before cleanup

    def test_invalid_db_type_raises(self):
        """Invalid DB_TYPE raises ConfigurationError."""
        with patch.dict(os.environ, {'DB_TYPE': 'invalid'}, clear=False):
            with pytest.raises(ConfigurationError):
                get_game_store()

    def test_supabase_without_credentials_raises(self):
        """Supabase backend needs URL and key."""
        env = {'DB_TYPE': 'supabase', 'SUPABASE_URL': '', 'SUPABASE_KEY': ''}
        with patch.dict(os.environ, env, clear=False):
            with pytest.raises(ConfigurationError):
                get_game_store()

            # Failed initialization does not leave a broken singleton behind
            with pytest.raises(ConfigurationError):
                get_game_store()

    def test_singleton_returns_same_instance(self, test_data_dir):
        """Factory returns same instance on subsequent calls."""
        with patch.dict(os.environ, {'DB_TYPE': 'sqlite', 'DATA_DIR': test_data_dir}, clear=False):
            store1 = get_game_store()
            store2 = get_game_store()
            assert store1 is store2
            reset_game_store()  # Close before cleanup


class TestSQLiteGameStore:
    """Tests for SQLite implementation."""

    def test_implements_interface(self, store_fixture):
        """SQLiteGameStore implements GameStoreInterface."""
        assert isinstance(store_fixture, GameStoreInterface)

    def test_health_check(self, store_fixture):
        """Health check returns True for valid connection."""
        assert store_fixture.health_check() is True

    def test_create_assigns_id(self, store_fixture):
        """create() returns the document with a new id."""
        created = store_fixture.create(_doc())

        assert len(created['id']) == 24
        assert store_fixture.find_by_id(created['id']) == created

    def test_ids_are_unique(self, store_fixture):
        """Each create gets its own id."""
        ids = {store_fixture.create(_doc())['id'] for _ in range(20)}
        assert len(ids) == 20

    def test_find_many_filters_and_sorts(self, store_fixture):
        """Filters combine with AND and results are newest first."""
        store_fixture.create(_doc(team_id='T1', game_type='league', game_date='2026-01-01T00:00:00Z'))
        store_fixture.create(_doc(team_id='T1', game_type='playoff', game_date='2026-03-01T00:00:00Z'))
        store_fixture.create(_doc(team_id='T1', game_type='playoff', game_date='2026-02-01T00:00:00Z'))
        store_fixture.create(_doc(team_id='T2', game_type='playoff', game_date='2026-04-01T00:00:00Z'))

        assert len(store_fixture.find_many({})) == 4

        games = store_fixture.find_many({'teamId': 'T1', 'gameType': 'playoff'})
        assert [g['gameDate'] for g in games] == ['2026-03-01T00:00:00Z', '2026-02-01T00:00:00Z']

    def test_filters_keyword(self, store_fixture):
        """find_many and delete_many take their conditions as filters=."""
        store_fixture.create(_doc(team_id='T1'))
        store_fixture.create(_doc(team_id='T2'))

        assert len(store_fixture.find_many(filters={'teamId': 'T1'})) == 1
        assert store_fixture.delete_many(filters={'teamId': 'T2'}) == 1
        assert filter_columns(filters={'gameType': 'final'}, operation='find_many') == {
            'game_type': 'final'
        }

    def test_find_many_unknown_filter_key(self, store_fixture):
        """Unsupported filter keys are query errors."""
        with pytest.raises(QueryError):
            store_fixture.find_many({'status': 'finished'})

    def test_find_by_id_missing(self, store_fixture):
        """Unknown id gives None."""
        assert store_fixture.find_by_id('nope') is None

    def test_update_returns_new_document(self, store_fixture):
        """Update applies fields and returns the result."""
        created = store_fixture.create(_doc())

        updated = store_fixture.find_by_id_and_update(created['id'], {
            'score': {'us': 2, 'them': 1},
            'status': 'in-progress',
        })

        assert updated['score'] == {'us': 2, 'them': 1}
        assert updated['status'] == 'in-progress'
        assert store_fixture.find_by_id(created['id']) == updated

    def test_update_dotted_keys(self, store_fixture):
        """Dotted keys set nested fields only."""
        created = store_fixture.create(_doc())

        updated = store_fixture.find_by_id_and_update(created['id'], {'opponent.teamName': 'Navy'})

        assert updated['opponent'] == {'teamName': 'Navy', 'roster': []}

    def test_update_reindexes(self, store_fixture):
        """Changing gameType/gameDate affects filters and ordering."""
        first = store_fixture.create(_doc(game_date='2026-01-01T00:00:00Z'))
        second = store_fixture.create(_doc(game_date='2026-02-01T00:00:00Z'))

        store_fixture.find_by_id_and_update(first['id'], {
            'gameType': 'final',
            'gameDate': '2026-05-01T00:00:00Z',
        })

        assert [g['id'] for g in store_fixture.find_many({})] == [first['id'], second['id']]
        assert [g['id'] for g in store_fixture.find_many({'gameType': 'final'})] == [first['id']]

    def test_update_missing(self, store_fixture):
        """Updating an unknown id gives None."""
        assert store_fixture.find_by_id_and_update('nope', {'status': 'finished'}) is None

    def test_delete_one(self, store_fixture):
        """Delete returns the removed document once."""
        created = store_fixture.create(_doc())

        assert store_fixture.find_by_id_and_delete(created['id']) == created
        assert store_fixture.find_by_id_and_delete(created['id']) is None

    def test_delete_many(self, store_fixture):
        """delete_many honours the filter; empty filter deletes all."""
        store_fixture.create(_doc(team_id='T1'))
        store_fixture.create(_doc(team_id='T1'))
        store_fixture.create(_doc(team_id='T2'))

        assert store_fixture.delete_many({'teamId': 'T1'}) == 2
        assert store_fixture.delete_many({}) == 1
        assert store_fixture.delete_many({}) == 0
        assert store_fixture.find_many({}) == []

    def test_data_survives_reopen(self, test_data_dir):
        """Documents persist across store instances."""
        with patch.dict(os.environ, {'DB_TYPE': 'sqlite', 'DATA_DIR': test_data_dir}, clear=False):
            reset_game_store()
            created = get_game_store().create(_doc())
            reset_game_store()

            assert get_game_store().find_by_id(created['id']) == created
            reset_game_store()


class TestSupabaseGameStore:
    """Tests for Supabase implementation with a mocked client."""

    def _store(self):
        from gamebook.storage.supabase_db import SupabaseGameStore

        with patch.dict(os.environ, {'SUPABASE_URL': 'https://x.supabase.co', 'SUPABASE_KEY': 'k'}):
            store = SupabaseGameStore()
        store._client = MagicMock()
        return store

    def test_find_many_builds_query(self):
        """Filters map to columns and results are ordered by game_date desc."""
        store = self._store()
        table = store._client.table.return_value
        query = table.select.return_value
        query.eq.return_value = query
        query.order.return_value.execute.return_value = MagicMock(data=[{'data': _doc()}])

        games = store.find_many({'teamId': 'T1'})

        store._client.table.assert_called_with('games')
        query.eq.assert_called_once_with('team_id', 'T1')
        query.order.assert_called_once_with('game_date', desc=True)
        assert games == [_doc()]

    def test_delete_many_without_filter_matches_all(self):
        """An empty filter uses a match-everything condition."""
        store = self._store()
        delete = store._client.table.return_value.delete.return_value
        delete.neq.return_value.execute.return_value = MagicMock(data=[{}, {}])

        assert store.delete_many({}) == 2
        delete.neq.assert_called_once_with('id', '')

    def test_client_errors_wrapped(self):
        """Driver exceptions surface as QueryError."""
        store = self._store()
        store._client.table.side_effect = RuntimeError("network down")

        with pytest.raises(QueryError) as exc_info:
            store.find_by_id('abc')
        assert isinstance(exc_info.value, DatabaseError)
        assert exc_info.value.operation == 'find_by_id'


class TestDocumentHelpers:
    """Tests for shared document helpers."""

    def test_apply_update_does_not_mutate(self):
        """The original document is left alone."""
        original = _doc()
        updated = apply_update(original, {'opponent.roster': [{'number': 1, 'name': 'A'}]})

        assert original['opponent']['roster'] == []
        assert updated['opponent']['roster'] == [{'number': 1, 'name': 'A'}]

    def test_apply_update_keeps_id(self):
        """The id cannot be overwritten."""
        assert apply_update({'id': 'a'}, {'id': 'b'})['id'] == 'a'

    def test_date_sort_key_orders_chronologically(self):
        """Offsets and precision do not break ordering."""
        keys = [
            date_sort_key('2026-02-10T19:30:00Z'),
            date_sort_key('2026-02-10T19:30:00.500000Z'),
            date_sort_key('2026-02-10T15:00:00-05:00'),
        ]
        assert keys[0] < keys[1] < keys[2]

    def test_filter_columns(self):
        """Known keys map to columns."""
        assert filter_columns({'teamId': 'T1', 'gameType': 'final'}, 'find_many') == {
            'team_id': 'T1', 'game_type': 'final'
        }
