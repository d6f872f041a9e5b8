# field_model.py
# Defines the playing field model. Stored in the "field" table; the class is
# named PlayingField so it does not shadow sqlmodel.Field.

import uuid
from datetime import datetime
from typing import List, Optional, TYPE_CHECKING

from pydantic import BaseModel
from sqlmodel import SQLModel, Field, Relationship

from polo_backend.core.timeutils import utc_now
from polo_backend.models.enums import FieldSurface, Grade
from polo_backend.models.link_model import TournamentFieldLink

if TYPE_CHECKING:
    from .match_model import Match
    from .tournament_model import Tournament


class PlayingField(SQLModel, table=True):
    __tablename__ = "field"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str
    location: str
    grade: Grade
    surface: FieldSurface = Field(default=FieldSurface.GRASS)
    length: Optional[float] = None  # yards
    width: Optional[float] = None  # yards
    notes: Optional[str] = None
    is_active: bool = Field(default=True)
    created_date: datetime = Field(default_factory=utc_now)

    matches: List["Match"] = Relationship(back_populates="field")
    tournaments: List["Tournament"] = Relationship(back_populates="playing_fields", link_model=TournamentFieldLink)


class FieldCreate(BaseModel):
    name: str
    location: str
    grade: Grade
    surface: FieldSurface = FieldSurface.GRASS
    length: Optional[float] = None
    width: Optional[float] = None
    notes: Optional[str] = None
    is_active: bool = True


class FieldUpdate(BaseModel):
    name: Optional[str] = None
    location: Optional[str] = None
    grade: Optional[Grade] = None
    surface: Optional[FieldSurface] = None
    length: Optional[float] = None
    width: Optional[float] = None
    notes: Optional[str] = None
    is_active: Optional[bool] = None
