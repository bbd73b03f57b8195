"""FastAPI dependencies for dependency injection."""

import logging

from fastapi import HTTPException

from gamebook.services.game_service import GameService
from gamebook.storage import get_game_store, DatabaseError

logger = logging.getLogger(__name__)


def get_game_service() -> GameService:
    """Get game service dependency backed by the configured store."""
    try:
        store = get_game_store()
    except DatabaseError as e:
        logger.error(f"Game store unavailable: {e}")
        raise HTTPException(status_code=500, detail="Game store unavailable")
    return GameService(store=store)
