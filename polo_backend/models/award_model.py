# award_model.py
# Defines the Award model: recognition given in a tournament to a team,
# a player or a horse

import uuid
from datetime import date, datetime
from typing import List, Optional, TYPE_CHECKING

from pydantic import BaseModel
from sqlmodel import SQLModel, Field, Relationship

from polo_backend.core.timeutils import utc_now
from polo_backend.models.enums import AwardType, RecipientCategory

if TYPE_CHECKING:
    from .tournament_model import Tournament
    from .player_model import Player
    from .horse_model import Horse
    from .team_model import Team


class Award(SQLModel, table=True):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str
    award_type: AwardType
    date_awarded: date = Field(default_factory=date.today)
    description: Optional[str] = None
    created_date: datetime = Field(default_factory=utc_now)

    tournament_id: Optional[uuid.UUID] = Field(default=None, foreign_key="tournament.id")
    tournament: Optional["Tournament"] = Relationship(back_populates="awards")

    # Recipient
    player_id: Optional[uuid.UUID] = Field(default=None, foreign_key="player.id")
    player: Optional["Player"] = Relationship(back_populates="awards")
    horse_id: Optional[uuid.UUID] = Field(default=None, foreign_key="horse.id")
    horse: Optional["Horse"] = Relationship(back_populates="awards")
    team_id: Optional[uuid.UUID] = Field(default=None, foreign_key="team.id")
    team: Optional["Team"] = Relationship(back_populates="awards")

    @property
    def recipient_categories(self) -> List[RecipientCategory]:
        """Kinds of recipient currently set on this award."""
        categories = []
        if self.team_id is not None or self.team is not None:
            categories.append(RecipientCategory.TEAM)
        if self.player_id is not None or self.player is not None:
            categories.append(RecipientCategory.PLAYER)
        if self.horse_id is not None or self.horse is not None:
            categories.append(RecipientCategory.HORSE)
        return categories


class AwardCreate(BaseModel):
    name: str
    award_type: AwardType
    date_awarded: Optional[date] = None
    description: Optional[str] = None
    tournament_id: Optional[uuid.UUID] = None
    player_id: Optional[uuid.UUID] = None
    horse_id: Optional[uuid.UUID] = None
    team_id: Optional[uuid.UUID] = None


class AwardUpdate(BaseModel):
    name: Optional[str] = None
    award_type: Optional[AwardType] = None
    date_awarded: Optional[date] = None
    description: Optional[str] = None
    tournament_id: Optional[uuid.UUID] = None
    player_id: Optional[uuid.UUID] = None
    horse_id: Optional[uuid.UUID] = None
    team_id: Optional[uuid.UUID] = None
