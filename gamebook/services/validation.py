"""
Validation primitives for game payloads.

Pure functions: each takes an untrusted value and either returns a
normalized value (None when invalid) or a pass/fail boolean.
"""

import math
import re
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any, Optional, Tuple, Union

from pydantic import TypeAdapter, ValidationError

from gamebook.models.game import GAME_TYPES, LINEUP_SIZE, ROSTER_SIZE

Number = Union[int, float]

_datetime_adapter = TypeAdapter(datetime)

# Bare numbers in text; only a four digit year is read as a date
_NUMERIC_TEXT = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
_YEAR_TEXT = re.compile(r"^\d{4}$")


def coerce_number(value: Any) -> Optional[Number]:
    """
    Coerce a value to a finite number.

    Accepts ints, floats and numeric strings (surrounding whitespace
    allowed). Integral values come back as int.

    Returns:
        The number, or None for booleans, blanks, NaN/infinity and
        anything non-numeric
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if not text or "_" in text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        return None

    if isinstance(number, float):
        if not math.isfinite(number):
            return None
        if number.is_integer():
            return int(number)
    return number


def normalize_game_type(value: Any) -> Optional[str]:
    """
    Normalize a game type.

    Returns:
        The trimmed, lowercased type if it is one of GAME_TYPES, else None
    """
    if not isinstance(value, str):
        return None
    normalized = value.strip().lower()
    return normalized if normalized in GAME_TYPES else None


def parse_game_date(value: Any) -> Optional[datetime]:
    """
    Parse a game date into an aware UTC datetime.

    Accepts datetimes, ISO-8601 strings and numeric unix timestamps. Naive
    values are taken as UTC. A four digit string such as "2026" means
    January 1st of that year; other digit-only strings are rejected
    rather than read as timestamps.

    Returns:
        The parsed datetime, or None if the value is not a valid timestamp
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        if _YEAR_TEXT.match(value):
            value = f"{value}-01-01T00:00:00Z"
        elif _NUMERIC_TEXT.match(value):
            return None

    try:
        parsed = _datetime_adapter.validate_python(value)
    except ValidationError:
        return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def is_non_empty_string(value: Any) -> bool:
    """Check for a string with content after trimming."""
    return isinstance(value, str) and len(value.strip()) > 0


def coerce_slot(value: Any) -> Optional[int]:
    """Coerce a lineup slot to an int in [1, LINEUP_SIZE]."""
    slot = coerce_number(value)
    if not isinstance(slot, int) or slot < 1 or slot > LINEUP_SIZE:
        return None
    return slot


def is_valid_lineup(lineup: Any) -> bool:
    """
    Validate a lineup.

    A lineup is exactly LINEUP_SIZE entries, each with a truthy playerId
    and a slot in 1..LINEUP_SIZE. Slots and player ids (compared as
    strings) must be unique. Entry order does not matter.
    """
    if not isinstance(lineup, list) or len(lineup) != LINEUP_SIZE:
        return False

    slots = set()
    players = set()

    for entry in lineup:
        if not isinstance(entry, Mapping) or not entry.get('playerId'):
            return False

        slot = coerce_slot(entry.get('slot'))
        if slot is None:
            return False

        player_id = str(entry['playerId'])
        if player_id in players or slot in slots:
            return False

        players.add(player_id)
        slots.add(slot)

    return True


def is_valid_opponent_roster(roster: Any) -> bool:
    """
    Validate an opponent roster.

    Exactly ROSTER_SIZE entries, each with a numeric 'number' and a
    non-blank 'name'. Duplicate numbers or names are allowed.
    """
    if not isinstance(roster, list) or len(roster) != ROSTER_SIZE:
        return False

    return all(
        isinstance(player, Mapping)
        and coerce_number(player.get('number')) is not None
        and is_non_empty_string(player.get('name'))
        for player in roster
    )


def parse_score(us: Any, them: Any) -> Optional[Tuple[Number, Number]]:
    """
    Parse a pair of score values.

    Returns:
        (us, them) as finite non-negative numbers, or None if either is invalid
    """
    us_value = coerce_number(us)
    them_value = coerce_number(them)
    if us_value is None or us_value < 0:
        return None
    if them_value is None or them_value < 0:
        return None
    return us_value, them_value
