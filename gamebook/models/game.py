"""Game data model."""

from datetime import datetime
from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, Field


# Allowed game categories, shared by validation and storage filters
GAME_TYPES = (
    'regular-season',
    'league',
    'out-of-league',
    'playoff',
    'final',
    'tournament',
)

LINEUP_SIZE = 15
ROSTER_SIZE = 15


class GameStatus:
    """Game status values, in lifecycle order."""

    SCHEDULED = 'scheduled'
    IN_PROGRESS = 'in-progress'
    FINISHED = 'finished'

    ALL = (SCHEDULED, IN_PROGRESS, FINISHED)


class GameResult:
    """Final result from our team's point of view."""

    WIN = 'Win'
    LOSS = 'Loss'
    TIE = 'Tie'


class LineupEntry(BaseModel):
    """One of our players assigned to a lineup slot."""

    player_id: str = Field(..., alias="playerId")
    slot: int

    class Config:
        """Pydantic configuration."""

        populate_by_name = True


class OpponentPlayer(BaseModel):
    """Opponent roster entry."""

    number: Union[int, float]
    name: str


class Opponent(BaseModel):
    """Opposing team and its roster."""

    team_name: str = Field(..., alias="teamName")
    roster: List[OpponentPlayer] = []

    class Config:
        """Pydantic configuration."""

        populate_by_name = True


class Score(BaseModel):
    """Running or final score."""

    us: Union[int, float] = 0
    them: Union[int, float] = 0


class Game(BaseModel):
    """Represents a hockey game record."""

    id: str
    team_id: str = Field(..., alias="teamId")
    game_type: str = Field(..., alias="gameType")
    game_date: datetime = Field(..., alias="gameDate")
    lineup: List[LineupEntry] = []
    opponent: Opponent
    score: Score = Field(default_factory=Score)
    status: str = GameStatus.SCHEDULED  # scheduled, in-progress, finished
    result: Optional[str] = None  # Win, Loss, Tie once finished
    date_created: datetime = Field(..., alias="dateCreated")
    date_updated: Optional[datetime] = Field(None, alias="dateUpdated")
    date_finished: Optional[datetime] = Field(None, alias="dateFinished")

    class Config:
        """Pydantic configuration."""

        populate_by_name = True

    @classmethod
    def from_document(cls, document: Dict[str, Any]) -> "Game":
        """Build a Game from a stored document."""
        return cls.model_validate(document)

    def to_response(self) -> Dict[str, Any]:
        """Get the camelCase JSON form, omitting unset optional fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def is_finished(self) -> bool:
        """Check whether the game has been finished."""
        return self.status == GameStatus.FINISHED

    def get_title(self) -> str:
        """Get a short description for log lines."""
        title = f"{self.game_type} vs {self.opponent.team_name}"
        if self.status != GameStatus.SCHEDULED:
            title += f" ({self.score.us}-{self.score.them})"
        return title
