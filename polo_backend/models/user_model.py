# user_model.py
# Defines the User account model. A user may be linked to one player
# profile and may have bred any number of horses.

import uuid
from datetime import datetime
from typing import List, Optional, TYPE_CHECKING

from pydantic import BaseModel
from sqlmodel import SQLModel, Field, Relationship

from polo_backend.core.timeutils import utc_now
from polo_backend.models.enums import ProfileType

if TYPE_CHECKING:
    from .player_model import Player
    from .horse_model import Horse


class User(SQLModel, table=True):
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    email: str = Field(index=True, unique=True)
    first_name: str
    last_name: str
    phone_number: Optional[str] = None
    profile_type: ProfileType = Field(default=ProfileType.USER)
    is_active: bool = Field(default=True)
    created_date: datetime = Field(default_factory=utc_now)
    last_login_date: Optional[datetime] = None

    player: Optional["Player"] = Relationship(back_populates="user", sa_relationship_kwargs={"uselist": False})
    bred_horses: List["Horse"] = Relationship(back_populates="breeder")

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class UserCreate(BaseModel):
    email: str
    first_name: str
    last_name: str
    phone_number: Optional[str] = None
    profile_type: ProfileType = ProfileType.USER
    is_active: bool = True


class UserUpdate(BaseModel):
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone_number: Optional[str] = None
    profile_type: Optional[ProfileType] = None
    is_active: Optional[bool] = None
    last_login_date: Optional[datetime] = None
