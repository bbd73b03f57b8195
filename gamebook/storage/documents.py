"""
Document helpers shared by the storage backends.

Both backends keep each game as one JSON document plus a few indexed
columns used for filtering and ordering.
"""

import copy
import secrets
from datetime import datetime, timezone
from typing import Any, Dict

from .exceptions import QueryError


# Filter keys accepted by find_many/delete_many -> indexed column name
FILTER_COLUMNS = {
    'teamId': 'team_id',
    'gameType': 'game_type',
}


def new_document_id() -> str:
    """Generate a 24 character hex identifier."""
    return secrets.token_hex(12)


def filter_columns(filters: Dict[str, Any], operation: str) -> Dict[str, Any]:
    """
    Translate a document filter into column conditions.

    Raises:
        QueryError: If the filter uses an unsupported key
    """
    conditions = {}
    for key, value in (filters or {}).items():
        if key not in FILTER_COLUMNS:
            raise QueryError(f"Unsupported filter key: {key}", operation=operation)
        conditions[FILTER_COLUMNS[key]] = value
    return conditions


def apply_update(document: Dict[str, Any], update: Dict[str, Any]) -> Dict[str, Any]:
    """
    Return a copy of document with update applied.

    Dotted keys address nested fields, so {'opponent.teamName': 'X'}
    changes the name and keeps opponent.roster. The 'id' key is immutable.
    """
    updated = copy.deepcopy(document)
    for key, value in update.items():
        if key == 'id':
            continue
        parts = key.split('.')
        target = updated
        for part in parts[:-1]:
            if not isinstance(target.get(part), dict):
                target[part] = {}
            target = target[part]
        target[parts[-1]] = copy.deepcopy(value)
    return updated


def date_sort_key(value: Any) -> str:
    """
    Normalize a gameDate into a fixed-width UTC string.

    Fixed width keeps lexicographic order equal to chronological order,
    which is what the backends sort on.
    """
    if isinstance(value, datetime):
        moment = value
    else:
        text = str(value or '').strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        try:
            moment = datetime.fromisoformat(text)
        except ValueError:
            return ''
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc).strftime('%Y-%m-%dT%H:%M:%S.%fZ')


def index_columns(document: Dict[str, Any]) -> Dict[str, Any]:
    """Extract the indexed column values from a game document."""
    return {
        'team_id': document.get('teamId'),
        'game_type': document.get('gameType'),
        'game_date': date_sort_key(document.get('gameDate')),
    }
