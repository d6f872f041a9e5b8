# duty_model.py
# Defines the Duty model: an officiating or support assignment for a player,
# optionally tied to a match or a tournament

import uuid
from datetime import datetime
from typing import Optional, TYPE_CHECKING

from pydantic import BaseModel
from sqlmodel import SQLModel, Field, Relationship

from polo_backend.core.timeutils import utc_now
from polo_backend.models.enums import DutyType

if TYPE_CHECKING:
    from .player_model import Player
    from .match_model import Match
    from .tournament_model import Tournament


class Duty(SQLModel, table=True):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    duty_type: DutyType
    assignment_date: datetime
    is_completed: bool = Field(default=False)
    notes: Optional[str] = None
    created_date: datetime = Field(default_factory=utc_now)

    # Deleted along with the player
    player_id: uuid.UUID = Field(foreign_key="player.id", index=True)
    player: Optional["Player"] = Relationship(back_populates="duties")

    # Context, normally one or the other
    match_id: Optional[uuid.UUID] = Field(default=None, foreign_key="match.id")
    match: Optional["Match"] = Relationship(back_populates="duties")
    tournament_id: Optional[uuid.UUID] = Field(default=None, foreign_key="tournament.id")
    tournament: Optional["Tournament"] = Relationship(back_populates="duties")


class DutyCreate(BaseModel):
    player_id: uuid.UUID
    duty_type: DutyType
    assignment_date: datetime
    match_id: Optional[uuid.UUID] = None
    tournament_id: Optional[uuid.UUID] = None
    notes: Optional[str] = None


class DutyUpdate(BaseModel):
    duty_type: Optional[DutyType] = None
    assignment_date: Optional[datetime] = None
    is_completed: Optional[bool] = None
    notes: Optional[str] = None
    match_id: Optional[uuid.UUID] = None
    tournament_id: Optional[uuid.UUID] = None
