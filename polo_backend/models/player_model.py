# polo_backend/models/player_model.py
# Defines the Player model and PlayerStatistic (one row per match played)

import logging
import uuid
from datetime import date, datetime
from typing import List, Optional, TYPE_CHECKING

from pydantic import BaseModel
from sqlalchemy import UniqueConstraint
from sqlalchemy.orm import validates
from sqlmodel import SQLModel, Field, Relationship

from polo_backend.core.config import HANDICAP_MIN, HANDICAP_MAX
from polo_backend.core.timeutils import utc_now, age_in_years
from polo_backend.models.link_model import TeamPlayerLink

if TYPE_CHECKING:
    from .club_model import Club
    from .user_model import User
    from .team_model import Team
    from .duty_model import Duty
    from .award_model import Award
    from .match_model import Match

logger = logging.getLogger(__name__)


def clamp_handicap(value: float) -> float:
    """Pin a handicap into [HANDICAP_MIN, HANDICAP_MAX]. Out-of-range input is corrected, never rejected."""
    value = float(value)
    clamped = max(HANDICAP_MIN, min(HANDICAP_MAX, value))
    if clamped != value:
        logger.info("Handicap %s clamped to %s", value, clamped)
    return clamped


class Player(SQLModel, table=True):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    first_name: str
    last_name: str
    handicap: float = Field(default=0.0)
    birth_date: Optional[date] = None
    nationality: Optional[str] = None
    is_active: bool = Field(default=True)
    created_date: datetime = Field(default_factory=utc_now)

    club_id: Optional[uuid.UUID] = Field(default=None, foreign_key="club.id")
    club: Optional["Club"] = Relationship(back_populates="players")

    user_id: Optional[uuid.UUID] = Field(default=None, foreign_key="user.id", unique=True)
    user: Optional["User"] = Relationship(back_populates="player")

    teams: List["Team"] = Relationship(back_populates="players", link_model=TeamPlayerLink)
    duties: List["Duty"] = Relationship(back_populates="player")
    awards: List["Award"] = Relationship(back_populates="player")
    statistics: List["PlayerStatistic"] = Relationship(back_populates="player")

    @validates("handicap")
    def _validate_handicap(self, key, value):
        # Runs on construction and on every later assignment
        if value is None:
            return value
        return clamp_handicap(value)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def age(self) -> Optional[int]:
        return age_in_years(self.birth_date)


class PlayerStatistic(SQLModel, table=True):
    """
    A player's line for a single match. One row = one match participation.
    """
    __table_args__ = (UniqueConstraint("player_id", "match_id"),)

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    player_id: uuid.UUID = Field(foreign_key="player.id", index=True)
    match_id: uuid.UUID = Field(foreign_key="match.id", index=True)

    goals: int = Field(default=0, ge=0)
    assists: int = Field(default=0, ge=0)
    fouls: int = Field(default=0, ge=0)
    yellow_cards: int = Field(default=0, ge=0)
    red_cards: int = Field(default=0, ge=0)
    match_date: date = Field(default_factory=date.today)  # Copied from the match when recorded
    created_date: datetime = Field(default_factory=utc_now)

    player: Optional["Player"] = Relationship(back_populates="statistics")
    match: Optional["Match"] = Relationship(back_populates="player_statistics")


# -------------------------------
# Pydantic schemas for API requests
# -------------------------------

class PlayerCreate(BaseModel):
    first_name: str
    last_name: str
    handicap: float = 0.0
    birth_date: Optional[date] = None
    nationality: Optional[str] = None
    is_active: bool = True
    club_id: Optional[uuid.UUID] = None
    user_id: Optional[uuid.UUID] = None


class PlayerUpdate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    handicap: Optional[float] = None
    birth_date: Optional[date] = None
    nationality: Optional[str] = None
    is_active: Optional[bool] = None
    club_id: Optional[uuid.UUID] = None
    user_id: Optional[uuid.UUID] = None


class PlayerStatisticCreate(BaseModel):
    player_id: uuid.UUID
    match_id: uuid.UUID
    goals: int = 0
    assists: int = 0
    fouls: int = 0
    yellow_cards: int = 0
    red_cards: int = 0
