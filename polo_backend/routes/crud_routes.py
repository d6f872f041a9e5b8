# crud_routes.py
# Generic create/read/update/delete routes, one router per entity type

import uuid
from typing import List, Tuple, Type

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlmodel import SQLModel, Session

from polo_backend.core.database import get_session
from polo_backend.core.exceptions import PoloError
from polo_backend.models import (
    Award, AwardCreate, AwardUpdate,
    Club, ClubCreate, ClubUpdate,
    Duty, DutyCreate, DutyUpdate,
    Horse, HorseCreate, HorseUpdate,
    HorseStatistic, HorseStatisticCreate,
    Match, MatchCreate, MatchUpdate,
    PlayingField, FieldCreate, FieldUpdate,
    Player, PlayerCreate, PlayerUpdate,
    PlayerStatistic, PlayerStatisticCreate,
    Team, TeamCreate, TeamUpdate,
    Tournament, TournamentCreate, TournamentUpdate,
    User, UserCreate, UserUpdate,
)
from polo_backend.routes.errors import http_error
from polo_backend.services.repository import Repository


class _NoUpdate(BaseModel):
    """Statistic rows are append-only facts."""
    pass


def build_crud_router(model: Type[SQLModel], create_schema: Type[BaseModel], update_schema: Type[BaseModel]) -> APIRouter:
    router = APIRouter()
    name = model.__name__

    @router.get("/")
    def list_entities(session: Session = Depends(get_session)):
        return Repository(session, model).all()

    @router.get("/{entity_id}")
    def get_entity(entity_id: uuid.UUID, session: Session = Depends(get_session)):
        try:
            return Repository(session, model).get(entity_id)
        except PoloError as exc:
            raise http_error(exc) from exc

    @router.post("/", status_code=201)
    def create_entity(data: create_schema, session: Session = Depends(get_session)):
        try:
            return Repository(session, model).create(**data.model_dump(exclude_none=True))
        except PoloError as exc:
            raise http_error(exc) from exc

    if update_schema is not _NoUpdate:
        @router.patch("/{entity_id}")
        def update_entity(entity_id: uuid.UUID, data: update_schema, session: Session = Depends(get_session)):
            try:
                repo = Repository(session, model)
                return repo.update(repo.get(entity_id), **data.model_dump(exclude_unset=True))
            except PoloError as exc:
                raise http_error(exc) from exc

    @router.delete("/{entity_id}")
    def delete_entity(entity_id: uuid.UUID, session: Session = Depends(get_session)):
        """Deletes the entity and applies cascade/nullify to everything that references it."""
        try:
            return Repository(session, model).delete_by_id(entity_id)
        except PoloError as exc:
            raise http_error(exc) from exc

    return router


# (prefix, tag, router)
ENTITY_ROUTERS: List[Tuple[str, str, APIRouter]] = [
    ("/clubs", "Clubs", build_crud_router(Club, ClubCreate, ClubUpdate)),
    ("/users", "Users", build_crud_router(User, UserCreate, UserUpdate)),
    ("/players", "Players", build_crud_router(Player, PlayerCreate, PlayerUpdate)),
    ("/horses", "Horses", build_crud_router(Horse, HorseCreate, HorseUpdate)),
    ("/teams", "Teams", build_crud_router(Team, TeamCreate, TeamUpdate)),
    ("/fields", "Fields", build_crud_router(PlayingField, FieldCreate, FieldUpdate)),
    ("/tournaments", "Tournaments", build_crud_router(Tournament, TournamentCreate, TournamentUpdate)),
    ("/matches", "Matches", build_crud_router(Match, MatchCreate, MatchUpdate)),
    ("/duties", "Duties", build_crud_router(Duty, DutyCreate, DutyUpdate)),
    ("/awards", "Awards", build_crud_router(Award, AwardCreate, AwardUpdate)),
    ("/player-statistics", "Statistics", build_crud_router(PlayerStatistic, PlayerStatisticCreate, _NoUpdate)),
    ("/horse-statistics", "Statistics", build_crud_router(HorseStatistic, HorseStatisticCreate, _NoUpdate)),
]
