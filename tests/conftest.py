"""
Shared test fixtures and configuration.

Provides reusable fixtures for all test files including game store
instances, sample lineups/rosters/payloads and a fixed clock.
"""

import pytest
import os
import shutil
import tempfile
from typing import Dict, Any, List
from unittest.mock import patch

from gamebook.storage import get_game_store, reset_game_store
from gamebook.services.game_service import GameService
from tests.helpers import FIXED_NOW, make_create_payload, make_lineup, make_opponent_roster


# =============================================================================
# STORAGE FIXTURES
# =============================================================================

@pytest.fixture
def test_data_dir():
    """Provide a temporary directory for test data."""
    temp_dir = tempfile.mkdtemp(prefix="gamebook_test_")
    yield temp_dir

    # Cleanup
    if os.path.exists(temp_dir):
        try:
            shutil.rmtree(temp_dir)
        except PermissionError:
            pass  # Windows file locking, ignore


@pytest.fixture
def store_fixture(test_data_dir):
    """Provide a clean SQLite game store."""
    with patch.dict(os.environ, {'DB_TYPE': 'sqlite', 'DATA_DIR': test_data_dir}, clear=False):
        reset_game_store()
        store = get_game_store()
        yield store
        reset_game_store()  # Close connection before cleanup


@pytest.fixture
def game_service(store_fixture):
    """Provide a GameService on the test store with a fixed clock."""
    return GameService(store=store_fixture, clock=lambda: FIXED_NOW)


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================

@pytest.fixture
def sample_lineup() -> List[Dict[str, Any]]:
    """Provide a valid lineup."""
    return make_lineup()


@pytest.fixture
def sample_roster() -> List[Dict[str, Any]]:
    """Provide a valid opponent roster."""
    return make_opponent_roster()


@pytest.fixture
def sample_create_payload() -> Dict[str, Any]:
    """Provide a valid create-game payload."""
    return make_create_payload()
