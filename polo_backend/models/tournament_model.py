# tournament_model.py
# Defines the Tournament model

import uuid
from datetime import date, datetime
from typing import List, Optional, TYPE_CHECKING

from pydantic import BaseModel
from sqlmodel import SQLModel, Field, Relationship

from polo_backend.core.timeutils import utc_now, days_between
from polo_backend.models.enums import Grade
from polo_backend.models.link_model import TournamentClubLink, TournamentFieldLink

if TYPE_CHECKING:
    from .club_model import Club
    from .field_model import PlayingField
    from .match_model import Match
    from .award_model import Award
    from .duty_model import Duty


class Tournament(SQLModel, table=True):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str
    grade: Grade
    start_date: date
    end_date: date
    location: Optional[str] = None
    is_active: bool = Field(default=True)
    created_date: datetime = Field(default_factory=utc_now)

    matches: List["Match"] = Relationship(back_populates="tournament")
    awards: List["Award"] = Relationship(back_populates="tournament")
    duties: List["Duty"] = Relationship(back_populates="tournament")
    clubs: List["Club"] = Relationship(back_populates="tournaments", link_model=TournamentClubLink)
    playing_fields: List["PlayingField"] = Relationship(back_populates="tournaments", link_model=TournamentFieldLink)

    @property
    def duration_days(self) -> int:
        return days_between(self.start_date, self.end_date)


class TournamentCreate(BaseModel):
    name: str
    grade: Grade
    start_date: date
    end_date: date
    location: Optional[str] = None
    is_active: bool = True


class TournamentUpdate(BaseModel):
    name: Optional[str] = None
    grade: Optional[Grade] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    location: Optional[str] = None
    is_active: Optional[bool] = None
