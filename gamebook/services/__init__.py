"""Service layer for the Hockey Gamebook application."""

from gamebook.services.exceptions import GameError, GameValidationError
from gamebook.services.game_service import GameService

__all__ = ["GameService", "GameError", "GameValidationError"]
