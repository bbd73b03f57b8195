"""
Game record transforms.

Turn parsed request payloads into normalized documents (or partial
updates) ready for the game store. Checks run in a fixed order and the
first failing check raises GameValidationError with its message, before
anything is written.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List

from gamebook.models.game import GameResult, GameStatus
from gamebook.services.exceptions import GameValidationError
from gamebook.services.payloads import GameCreatePayload, GameUpdatePayload
from gamebook.services.validation import (
    Number,
    coerce_number,
    coerce_slot,
    is_non_empty_string,
    is_valid_lineup,
    is_valid_opponent_roster,
    normalize_game_type,
    parse_game_date,
    parse_score,
)

INVALID_GAME_TYPE = 'Invalid game type'
INVALID_GAME_TYPE_FILTER = 'Invalid game type filter'
INVALID_GAME_DATE = 'Invalid game date'
INVALID_LINEUP = 'Lineup must have exactly 15 players with unique slots 1-15'
OPPONENT_NAME_REQUIRED = 'Opponent team name is required'
INVALID_OPPONENT_NAME = 'Invalid opponent team name'
INVALID_OPPONENT_ROSTER = 'Opponent roster must have exactly 15 players (number + name)'
TEAM_ID_REQUIRED = 'Team ID is required'
INVALID_SCORE = 'Invalid score values'


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def to_iso(moment: datetime) -> str:
    """Serialize a datetime the way the Game model does (UTC, 'Z' suffix)."""
    return moment.astimezone(timezone.utc).isoformat().replace('+00:00', 'Z')


def normalize_lineup(lineup: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Convert a validated lineup to stored form."""
    return [
        {'playerId': str(entry['playerId']), 'slot': coerce_slot(entry['slot'])}
        for entry in lineup
    ]


def normalize_roster(roster: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Convert a validated opponent roster to stored form."""
    return [
        {'number': coerce_number(player['number']), 'name': str(player['name']).strip()}
        for player in roster
    ]


def derive_result(us: Number, them: Number) -> str:
    """Win, Loss or Tie from our team's point of view."""
    if us > them:
        return GameResult.WIN
    if them > us:
        return GameResult.LOSS
    return GameResult.TIE


def build_new_game(payload: GameCreatePayload, now: datetime) -> Dict[str, Any]:
    """
    Validate a create payload and build the document to insert.

    Check order: game type, game date, lineup, opponent team name,
    opponent roster, team id.

    Raises:
        GameValidationError: On the first failing check
    """
    game_type = normalize_game_type(payload.game_type)
    if not game_type:
        raise GameValidationError(INVALID_GAME_TYPE)

    game_date = parse_game_date(payload.game_date)
    if game_date is None:
        raise GameValidationError(INVALID_GAME_DATE)

    if not is_valid_lineup(payload.lineup):
        raise GameValidationError(INVALID_LINEUP)

    if not is_non_empty_string(payload.opponent_team_name):
        raise GameValidationError(OPPONENT_NAME_REQUIRED)

    if not is_valid_opponent_roster(payload.opponent_roster):
        raise GameValidationError(INVALID_OPPONENT_ROSTER)

    team_id = payload.team_id
    if isinstance(team_id, bool) or team_id is None or not str(team_id).strip():
        raise GameValidationError(TEAM_ID_REQUIRED)

    return {
        'teamId': str(team_id).strip(),
        'gameType': game_type,
        'gameDate': to_iso(game_date),
        'lineup': normalize_lineup(payload.lineup),
        'opponent': {
            'teamName': payload.opponent_team_name.strip(),
            'roster': normalize_roster(payload.opponent_roster),
        },
        'score': {'us': 0, 'them': 0},
        'status': GameStatus.SCHEDULED,
        'dateCreated': to_iso(now),
    }


def build_game_update(payload: GameUpdatePayload, now: datetime) -> Dict[str, Any]:
    """
    Validate the fields present in an update payload and build the update.

    Only fields the caller sent are checked and written. Opponent fields
    use dotted keys so updating one keeps the other.

    Raises:
        GameValidationError: On the first failing field
    """
    present = payload.present_fields()
    update: Dict[str, Any] = {}

    if 'game_type' in present:
        game_type = normalize_game_type(payload.game_type)
        if not game_type:
            raise GameValidationError(INVALID_GAME_TYPE)
        update['gameType'] = game_type

    if 'game_date' in present:
        game_date = parse_game_date(payload.game_date)
        if game_date is None:
            raise GameValidationError(INVALID_GAME_DATE)
        update['gameDate'] = to_iso(game_date)

    if 'lineup' in present:
        if not is_valid_lineup(payload.lineup):
            raise GameValidationError(INVALID_LINEUP)
        update['lineup'] = normalize_lineup(payload.lineup)

    if 'opponent_team_name' in present:
        if not is_non_empty_string(payload.opponent_team_name):
            raise GameValidationError(INVALID_OPPONENT_NAME)
        update['opponent.teamName'] = payload.opponent_team_name.strip()

    if 'opponent_roster' in present:
        if not is_valid_opponent_roster(payload.opponent_roster):
            raise GameValidationError(INVALID_OPPONENT_ROSTER)
        update['opponent.roster'] = normalize_roster(payload.opponent_roster)

    update['dateUpdated'] = to_iso(now)
    return update


def build_score_update(us: Any, them: Any, now: datetime) -> Dict[str, Any]:
    """
    Build the update for a live score change.

    Raises:
        GameValidationError: If either value is not a finite number >= 0
    """
    score = parse_score(us, them)
    if score is None:
        raise GameValidationError(INVALID_SCORE)

    return {
        'score': {'us': score[0], 'them': score[1]},
        'status': GameStatus.IN_PROGRESS,
        'dateUpdated': to_iso(now),
    }


def build_finish_update(us: Any, them: Any, now: datetime) -> Dict[str, Any]:
    """
    Build the update that finishes a game and fixes its result.

    Raises:
        GameValidationError: If either value is not a finite number >= 0
    """
    score = parse_score(us, them)
    if score is None:
        raise GameValidationError(INVALID_SCORE)

    stamp = to_iso(now)
    return {
        'score': {'us': score[0], 'them': score[1]},
        'result': derive_result(*score),
        'status': GameStatus.FINISHED,
        'dateUpdated': stamp,
        'dateFinished': stamp,
    }
