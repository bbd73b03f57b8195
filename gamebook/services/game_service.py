"""
Game Service - lifecycle operations for hockey game records.

Composes payload parsing, validation and transforms with the game store.
Every operation validates before touching storage and makes a single
store call on the success path.

Outcomes:
- validation failure: GameValidationError, nothing written
- unknown id: None (or False for delete)
- storage failure: DatabaseError propagates unchanged
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from ..models.game import Game
from ..storage import get_game_store, GameStoreInterface
from .exceptions import GameValidationError
from .payloads import GameCreatePayload, GameUpdatePayload, parse_payload
from .transform import (
    INVALID_GAME_TYPE_FILTER,
    build_finish_update,
    build_game_update,
    build_new_game,
    build_score_update,
    utcnow,
)
from .validation import normalize_game_type

logger = logging.getLogger(__name__)


def _team_filter(team_id: Optional[str]) -> Dict[str, Any]:
    """Build the teamId condition; blank or missing means no condition."""
    if isinstance(team_id, str) and team_id.strip():
        return {'teamId': team_id.strip()}
    return {}


class GameService:
    """
    Service layer for game records.
    Uses the game store interface, so any configured backend works.
    """

    def __init__(
        self,
        store: Optional[GameStoreInterface] = None,
        clock: Callable[[], datetime] = utcnow
    ):
        # Get store from factory (respects DB_TYPE env var)
        self.store: GameStoreInterface = store if store is not None else get_game_store()
        self._clock = clock

    # =========================================================================
    # CREATE / READ
    # =========================================================================

    def create_game(
        self,
        payload: Union[GameCreatePayload, Mapping[str, Any]]
    ) -> Game:
        """
        Validate a create payload and store a new scheduled game.

        Returns:
            The stored game including its assigned id

        Raises:
            GameValidationError: First failing check, in create order
        """
        parsed = parse_payload(GameCreatePayload, payload)
        document = build_new_game(parsed, self._clock())

        stored = self.store.create(document)
        game = Game.from_document(stored)
        logger.info("Created game %s for team %s: %s", game.id, game.team_id, game.get_title())
        return game

    def list_games(
        self,
        team_id: Optional[str] = None,
        game_type: Optional[str] = None
    ) -> List[Game]:
        """
        Get games, newest first.

        Args:
            team_id: Only games of this team (ignored when blank)
            game_type: Only games of this type (case-insensitive)

        Raises:
            GameValidationError: If game_type is given but not a known type
        """
        filters = _team_filter(team_id)

        if game_type is not None:
            requested_type = normalize_game_type(game_type)
            if not requested_type:
                raise GameValidationError(INVALID_GAME_TYPE_FILTER)
            filters['gameType'] = requested_type

        return [Game.from_document(doc) for doc in self.store.find_many(filters)]

    def get_game(self, game_id: str) -> Optional[Game]:
        """Get one game, or None if it does not exist."""
        document = self.store.find_by_id(game_id)
        return Game.from_document(document) if document else None

    # =========================================================================
    # MUTATIONS
    # =========================================================================

    def update_score(self, game_id: str, us: Any, them: Any) -> Optional[Game]:
        """
        Record a live score and mark the game in progress.

        Finished games are not protected: their status goes back to
        in-progress and the earlier result stays on the record.
        """
        update = build_score_update(us, them, self._clock())

        document = self.store.find_by_id_and_update(game_id, update)
        if not document:
            return None

        game = Game.from_document(document)
        if game.result is not None:
            logger.warning(
                "Score updated on finished game %s; result '%s' kept from finish",
                game.id, game.result
            )
        return game

    def finish_game(self, game_id: str, us: Any, them: Any) -> Optional[Game]:
        """Set the final score, derive the result and mark the game finished."""
        update = build_finish_update(us, them, self._clock())

        document = self.store.find_by_id_and_update(game_id, update)
        if not document:
            return None

        game = Game.from_document(document)
        logger.info("Finished game %s: %s %s", game.id, game.result, game.get_title())
        return game

    def update_game_info(
        self,
        game_id: str,
        payload: Union[GameUpdatePayload, Mapping[str, Any]]
    ) -> Optional[Game]:
        """
        Update any of type, date, lineup and opponent.

        Only the fields present in the payload are validated and written;
        status and score are left alone.
        """
        parsed = parse_payload(GameUpdatePayload, payload)
        update = build_game_update(parsed, self._clock())

        document = self.store.find_by_id_and_update(game_id, update)
        return Game.from_document(document) if document else None

    # =========================================================================
    # DELETE
    # =========================================================================

    def delete_game(self, game_id: str) -> bool:
        """Delete one game. Returns False if it did not exist."""
        deleted = self.store.find_by_id_and_delete(game_id)
        return deleted is not None

    def delete_games(self, team_id: Optional[str] = None) -> int:
        """
        Delete all games of a team, or every game when team_id is blank.

        Returns:
            Number of games deleted
        """
        filters = _team_filter(team_id)
        count = self.store.delete_many(filters)
        logger.info("Deleted %s games (filter: %s)", count, filters or 'all')
        return count
