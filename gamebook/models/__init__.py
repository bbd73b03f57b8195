"""Data models for the Hockey Gamebook application."""

from gamebook.models.game import (
    GAME_TYPES,
    LINEUP_SIZE,
    ROSTER_SIZE,
    Game,
    GameResult,
    GameStatus,
    LineupEntry,
    Opponent,
    OpponentPlayer,
    Score,
)

__all__ = [
    "GAME_TYPES",
    "LINEUP_SIZE",
    "ROSTER_SIZE",
    "Game",
    "GameResult",
    "GameStatus",
    "LineupEntry",
    "Opponent",
    "OpponentPlayer",
    "Score",
]
