"""Builders for game payloads shared across the test suite."""

from datetime import datetime, timezone
from typing import Dict, Any, List


NAMES = [
    "Fabrizio", "Stuart", "Matt", "Rob", "Ian",
    "Quinn", "Oliver", "Charlie", "Pat", "Alex",
    "Cooper", "Liam", "Louie", "Sean", "Pete",
]

FIXED_NOW = datetime(2026, 2, 10, 12, 0, 0, tzinfo=timezone.utc)


def make_lineup() -> List[Dict[str, Any]]:
    """Fifteen players in slots 1-15."""
    return [
        {"slot": i + 1, "playerId": f"{name}-{100 + i}"}
        for i, name in enumerate(NAMES)
    ]


def make_opponent_roster() -> List[Dict[str, Any]]:
    """Fifteen opponents, numbers as strings like a browser form sends them."""
    return [
        {"number": str(20 + i), "name": f"{name}2"}
        for i, name in enumerate(NAMES)
    ]


def make_create_payload(**overrides) -> Dict[str, Any]:
    """Valid create-game body; keyword overrides replace fields."""
    payload = {
        "teamId": "T1",
        "gameType": "regular-season",
        "gameDate": "2026-02-10T19:30:00Z",
        "lineup": make_lineup(),
        "opponentTeamName": "Towson",
        "opponentRoster": make_opponent_roster(),
    }
    payload.update(overrides)
    return payload
