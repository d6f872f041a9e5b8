# horse_model.py
# Defines the Horse model and HorseStatistic (one row per match played)

import uuid
from datetime import date, datetime
from typing import List, Optional, TYPE_CHECKING

from pydantic import BaseModel
from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field, Relationship

from polo_backend.core.timeutils import utc_now, age_in_years
from polo_backend.models.enums import HorseColor, HorseGender, HorsePerformance

if TYPE_CHECKING:
    from .user_model import User
    from .award_model import Award
    from .match_model import Match


class Horse(SQLModel, table=True):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str
    birth_date: date
    gender: HorseGender
    color: HorseColor
    registration_number: Optional[str] = None
    notes: Optional[str] = None
    is_active: bool = Field(default=True)
    created_date: datetime = Field(default_factory=utc_now)

    # Pedigree, free text
    sire: Optional[str] = None
    dam: Optional[str] = None

    breeder_id: Optional[uuid.UUID] = Field(default=None, foreign_key="user.id")
    breeder: Optional["User"] = Relationship(back_populates="bred_horses")

    statistics: List["HorseStatistic"] = Relationship(back_populates="horse")
    awards: List["Award"] = Relationship(back_populates="horse")

    @property
    def age(self) -> Optional[int]:
        return age_in_years(self.birth_date)


class HorseStatistic(SQLModel, table=True):
    """A horse's appearance in a single match."""
    __table_args__ = (UniqueConstraint("horse_id", "match_id"),)

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    horse_id: uuid.UUID = Field(foreign_key="horse.id", index=True)
    match_id: uuid.UUID = Field(foreign_key="match.id", index=True)

    performance: HorsePerformance = Field(default=HorsePerformance.GOOD)
    injuries: Optional[str] = None
    notes: Optional[str] = None
    match_date: date = Field(default_factory=date.today)
    created_date: datetime = Field(default_factory=utc_now)

    horse: Optional["Horse"] = Relationship(back_populates="statistics")
    match: Optional["Match"] = Relationship(back_populates="horse_statistics")


class HorseCreate(BaseModel):
    name: str
    birth_date: date
    gender: HorseGender
    color: HorseColor
    registration_number: Optional[str] = None
    notes: Optional[str] = None
    sire: Optional[str] = None
    dam: Optional[str] = None
    is_active: bool = True
    breeder_id: Optional[uuid.UUID] = None


class HorseUpdate(BaseModel):
    name: Optional[str] = None
    birth_date: Optional[date] = None
    gender: Optional[HorseGender] = None
    color: Optional[HorseColor] = None
    registration_number: Optional[str] = None
    notes: Optional[str] = None
    sire: Optional[str] = None
    dam: Optional[str] = None
    is_active: Optional[bool] = None
    breeder_id: Optional[uuid.UUID] = None


class HorseStatisticCreate(BaseModel):
    horse_id: uuid.UUID
    match_id: uuid.UUID
    performance: HorsePerformance = HorsePerformance.GOOD
    injuries: Optional[str] = None
    notes: Optional[str] = None
