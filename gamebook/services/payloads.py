"""
Request payload models.

Request bodies arrive as untyped JSON objects. These models pin down the
accepted field names (camelCase on the wire) at the boundary and keep the
raw values, so the ordered checks in gamebook.services.transform decide
which error message a bad value produces. Unknown keys are ignored.
"""

from typing import Any, Dict, Mapping, Set, Type, TypeVar, Union

from pydantic import BaseModel, Field

PayloadT = TypeVar("PayloadT", bound=BaseModel)


class GameCreatePayload(BaseModel):
    """Body of a create-game request."""

    team_id: Any = Field(None, alias="teamId")
    game_type: Any = Field(None, alias="gameType")
    game_date: Any = Field(None, alias="gameDate")
    lineup: Any = None
    opponent_team_name: Any = Field(None, alias="opponentTeamName")
    opponent_roster: Any = Field(None, alias="opponentRoster")

    class Config:
        """Pydantic configuration."""

        populate_by_name = True
        extra = "ignore"


class GameUpdatePayload(BaseModel):
    """Body of an update-game-info request. Every field is optional."""

    game_type: Any = Field(None, alias="gameType")
    game_date: Any = Field(None, alias="gameDate")
    lineup: Any = None
    opponent_team_name: Any = Field(None, alias="opponentTeamName")
    opponent_roster: Any = Field(None, alias="opponentRoster")

    class Config:
        """Pydantic configuration."""

        populate_by_name = True
        extra = "ignore"

    def present_fields(self) -> Set[str]:
        """
        Get the fields the caller actually sent.

        An explicit null counts as sent and is then rejected by validation.
        """
        return set(self.model_fields_set)


class ScorePayload(BaseModel):
    """Body of a score-update or finish request."""

    us: Any = None
    them: Any = None

    class Config:
        """Pydantic configuration."""

        extra = "ignore"


def parse_payload(
    model: Type[PayloadT],
    payload: Union[PayloadT, Mapping[str, Any], None]
) -> PayloadT:
    """Accept either a parsed payload model or a raw mapping."""
    if isinstance(payload, model):
        return payload
    data: Dict[str, Any] = dict(payload or {})
    return model.model_validate(data)
