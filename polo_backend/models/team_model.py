# team_model.py
# Defines the Team model. The roster is many-to-many with Player;
# matches are split by the side the team played on.

import uuid
from datetime import datetime
from typing import List, Optional, TYPE_CHECKING

from pydantic import BaseModel
from sqlmodel import SQLModel, Field, Relationship

from polo_backend.core.timeutils import utc_now
from polo_backend.models.enums import Grade
from polo_backend.models.link_model import TeamPlayerLink

if TYPE_CHECKING:
    from .club_model import Club
    from .player_model import Player
    from .match_model import Match
    from .award_model import Award


class Team(SQLModel, table=True):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str
    grade: Grade
    team_color: Optional[str] = None
    is_active: bool = Field(default=True)
    created_date: datetime = Field(default_factory=utc_now)

    club_id: Optional[uuid.UUID] = Field(default=None, foreign_key="club.id")
    club: Optional["Club"] = Relationship(back_populates="teams")

    players: List["Player"] = Relationship(back_populates="teams", link_model=TeamPlayerLink)

    matches_as_team_a: List["Match"] = Relationship(
        back_populates="team_a",
        sa_relationship_kwargs={"foreign_keys": "[Match.team_a_id]"},
    )
    matches_as_team_b: List["Match"] = Relationship(
        back_populates="team_b",
        sa_relationship_kwargs={"foreign_keys": "[Match.team_b_id]"},
    )
    awards: List["Award"] = Relationship(back_populates="team")

    @property
    def all_matches(self) -> List["Match"]:
        """Matches in either role, team A first."""
        return list(self.matches_as_team_a) + list(self.matches_as_team_b)

    @property
    def total_handicap(self) -> float:
        return float(sum(player.handicap for player in self.players))

    @property
    def average_handicap(self) -> float:
        if not self.players:
            return 0.0
        return self.total_handicap / len(self.players)


class TeamCreate(BaseModel):
    name: str
    grade: Grade
    team_color: Optional[str] = None
    is_active: bool = True
    club_id: Optional[uuid.UUID] = None


class TeamUpdate(BaseModel):
    name: Optional[str] = None
    grade: Optional[Grade] = None
    team_color: Optional[str] = None
    is_active: Optional[bool] = None
    club_id: Optional[uuid.UUID] = None
