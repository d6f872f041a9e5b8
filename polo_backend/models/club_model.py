# club_model.py
# Defines the Club model and its request schemas

import uuid
from datetime import datetime
from typing import List, Optional, TYPE_CHECKING

from pydantic import BaseModel
from sqlmodel import SQLModel, Field, Relationship

from polo_backend.core.timeutils import utc_now
from polo_backend.models.link_model import TournamentClubLink

if TYPE_CHECKING:
    from .team_model import Team
    from .player_model import Player
    from .tournament_model import Tournament


class Club(SQLModel, table=True):
    """A polo club. Teams and players belong to at most one club."""
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str
    location: str
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    website: Optional[str] = None
    is_active: bool = Field(default=True)
    created_date: datetime = Field(default_factory=utc_now)

    # Relationships (all nullify on delete)
    teams: List["Team"] = Relationship(back_populates="club")
    players: List["Player"] = Relationship(back_populates="club")
    tournaments: List["Tournament"] = Relationship(back_populates="clubs", link_model=TournamentClubLink)


# -------------------------------
# Pydantic schemas for API requests
# -------------------------------

class ClubCreate(BaseModel):
    name: str
    location: str
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    website: Optional[str] = None
    is_active: bool = True


class ClubUpdate(BaseModel):
    name: Optional[str] = None
    location: Optional[str] = None
    contact_email: Optional[str] = None
    contact_phone: Optional[str] = None
    website: Optional[str] = None
    is_active: Optional[bool] = None
