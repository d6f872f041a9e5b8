# match_model.py
# Defines the Match model (fixture, live score, result) and ChukkerScore
# (append-only per-chukker snapshots of the running score)

import uuid
from datetime import date, datetime
from typing import List, Optional, TYPE_CHECKING

from pydantic import BaseModel
from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field, Relationship

from polo_backend.core.config import DEFAULT_TOTAL_CHUKKERS
from polo_backend.core.timeutils import utc_now
from polo_backend.models.enums import MatchStatus

if TYPE_CHECKING:
    from .tournament_model import Tournament
    from .field_model import PlayingField
    from .team_model import Team
    from .player_model import PlayerStatistic
    from .horse_model import HorseStatistic
    from .duty_model import Duty


class Match(SQLModel, table=True):
    """
    A match between team A and team B. Tournament, field and teams are all
    optional so a fixture can be entered before it is fully scheduled.
    """
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)

    # Foreign keys
    tournament_id: Optional[uuid.UUID] = Field(default=None, foreign_key="tournament.id", index=True)
    field_id: Optional[uuid.UUID] = Field(default=None, foreign_key="field.id", index=True)
    team_a_id: Optional[uuid.UUID] = Field(default=None, foreign_key="team.id", index=True)
    team_b_id: Optional[uuid.UUID] = Field(default=None, foreign_key="team.id", index=True)

    # Schedule
    match_date: date
    start_time: datetime
    end_time: Optional[datetime] = None
    status: MatchStatus = Field(default=MatchStatus.SCHEDULED)

    # Score tracking
    team_a_score: int = Field(default=0, ge=0)
    team_b_score: int = Field(default=0, ge=0)
    current_chukker: int = Field(default=0, ge=0)
    total_chukkers: int = Field(default=DEFAULT_TOTAL_CHUKKERS, ge=1)

    created_date: datetime = Field(default_factory=utc_now)

    # Relationships
    tournament: Optional["Tournament"] = Relationship(back_populates="matches")
    field: Optional["PlayingField"] = Relationship(back_populates="matches")
    team_a: Optional["Team"] = Relationship(
        back_populates="matches_as_team_a",
        sa_relationship_kwargs={"foreign_keys": "[Match.team_a_id]"},
    )
    team_b: Optional["Team"] = Relationship(
        back_populates="matches_as_team_b",
        sa_relationship_kwargs={"foreign_keys": "[Match.team_b_id]"},
    )
    player_statistics: List["PlayerStatistic"] = Relationship(back_populates="match")
    horse_statistics: List["HorseStatistic"] = Relationship(back_populates="match")
    chukker_scores: List["ChukkerScore"] = Relationship(
        back_populates="match",
        sa_relationship_kwargs={"order_by": "ChukkerScore.chukker_number"},
    )
    duties: List["Duty"] = Relationship(back_populates="match")

    @property
    def resolved_team_a_id(self) -> Optional[uuid.UUID]:
        # Falls back to the relationship for matches not flushed yet
        if self.team_a_id is None and self.team_a is not None:
            return self.team_a.id
        return self.team_a_id

    @property
    def resolved_team_b_id(self) -> Optional[uuid.UUID]:
        if self.team_b_id is None and self.team_b is not None:
            return self.team_b.id
        return self.team_b_id

    @property
    def winner_id(self) -> Optional[uuid.UUID]:
        """Id of the winning team. Only completed, non-tied matches have one."""
        if self.status != MatchStatus.COMPLETED:
            return None
        if self.team_a_score > self.team_b_score:
            return self.resolved_team_a_id
        if self.team_b_score > self.team_a_score:
            return self.resolved_team_b_id
        return None  # Tie

    @property
    def winner(self) -> Optional["Team"]:
        winner_id = self.winner_id
        if winner_id is None:
            return None
        return self.team_a if winner_id == self.resolved_team_a_id else self.team_b

    @property
    def duration(self) -> Optional[float]:
        """Seconds from start to end; None until the match has an end time."""
        if self.end_time is None:
            return None
        return (self.end_time - self.start_time).total_seconds()

    @property
    def is_live(self) -> bool:
        return self.status == MatchStatus.IN_PROGRESS


class ChukkerScore(SQLModel, table=True):
    """
    Running score at the end of one chukker. Rows are appended as play
    progresses and never edited, giving a replayable timeline of the match.
    """
    __table_args__ = (UniqueConstraint("match_id", "chukker_number"),)

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    match_id: uuid.UUID = Field(foreign_key="match.id", index=True)
    chukker_number: int = Field(ge=1)
    team_a_score: int = Field(ge=0)
    team_b_score: int = Field(ge=0)
    timestamp: datetime = Field(default_factory=utc_now)

    match: Optional["Match"] = Relationship(back_populates="chukker_scores")


# -------------------------------
# Pydantic schemas for API requests
# -------------------------------

class MatchCreate(BaseModel):
    tournament_id: Optional[uuid.UUID] = None
    field_id: Optional[uuid.UUID] = None
    team_a_id: Optional[uuid.UUID] = None
    team_b_id: Optional[uuid.UUID] = None
    match_date: date
    start_time: datetime
    total_chukkers: int = DEFAULT_TOTAL_CHUKKERS


class MatchUpdate(BaseModel):
    """Schedule details only. Status and score go through the match lifecycle endpoints."""
    tournament_id: Optional[uuid.UUID] = None
    field_id: Optional[uuid.UUID] = None
    team_a_id: Optional[uuid.UUID] = None
    team_b_id: Optional[uuid.UUID] = None
    match_date: Optional[date] = None
    start_time: Optional[datetime] = None
    total_chukkers: Optional[int] = None


class ScoreUpdate(BaseModel):
    team_a_score: int
    team_b_score: int


class RescheduleRequest(BaseModel):
    match_date: date
    start_time: datetime
