# membership_routes.py
# Team roster and tournament club/field membership

import uuid

from fastapi import APIRouter, Depends
from sqlmodel import Session

from polo_backend.core.database import get_session
from polo_backend.core.exceptions import PoloError
from polo_backend.models import Club, Player, PlayingField, Team, Tournament
from polo_backend.routes.errors import http_error
from polo_backend.services import membership
from polo_backend.services.repository import Repository

router = APIRouter()


# === TEAM ROSTER ===

@router.get("/teams/{team_id}/players")
def list_roster(team_id: uuid.UUID, session: Session = Depends(get_session)):
    try:
        team = Repository(session, Team).get(team_id)
    except PoloError as exc:
        raise http_error(exc) from exc
    return list(team.players)


@router.post("/teams/{team_id}/players/{player_id}")
def add_to_roster(team_id: uuid.UUID, player_id: uuid.UUID, session: Session = Depends(get_session)):
    try:
        team = Repository(session, Team).get(team_id)
        player = Repository(session, Player).get(player_id)
        membership.add_player_to_team(session, team, player)
    except PoloError as exc:
        raise http_error(exc) from exc
    return {"team_id": team.id, "player_ids": [p.id for p in team.players]}


@router.delete("/teams/{team_id}/players/{player_id}")
def remove_from_roster(team_id: uuid.UUID, player_id: uuid.UUID, session: Session = Depends(get_session)):
    try:
        team = Repository(session, Team).get(team_id)
        player = Repository(session, Player).get(player_id)
        membership.remove_player_from_team(session, team, player)
    except PoloError as exc:
        raise http_error(exc) from exc
    return {"team_id": team.id, "player_ids": [p.id for p in team.players]}


# === TOURNAMENT CLUBS ===

@router.post("/tournaments/{tournament_id}/clubs/{club_id}")
def add_club(tournament_id: uuid.UUID, club_id: uuid.UUID, session: Session = Depends(get_session)):
    try:
        tournament = Repository(session, Tournament).get(tournament_id)
        club = Repository(session, Club).get(club_id)
        membership.add_club_to_tournament(session, tournament, club)
    except PoloError as exc:
        raise http_error(exc) from exc
    return {"tournament_id": tournament.id, "club_ids": [c.id for c in tournament.clubs]}


@router.delete("/tournaments/{tournament_id}/clubs/{club_id}")
def remove_club(tournament_id: uuid.UUID, club_id: uuid.UUID, session: Session = Depends(get_session)):
    try:
        tournament = Repository(session, Tournament).get(tournament_id)
        club = Repository(session, Club).get(club_id)
        membership.remove_club_from_tournament(session, tournament, club)
    except PoloError as exc:
        raise http_error(exc) from exc
    return {"tournament_id": tournament.id, "club_ids": [c.id for c in tournament.clubs]}


# === TOURNAMENT FIELDS ===

@router.post("/tournaments/{tournament_id}/fields/{field_id}")
def add_field(tournament_id: uuid.UUID, field_id: uuid.UUID, session: Session = Depends(get_session)):
    try:
        tournament = Repository(session, Tournament).get(tournament_id)
        field = Repository(session, PlayingField).get(field_id)
        membership.add_field_to_tournament(session, tournament, field)
    except PoloError as exc:
        raise http_error(exc) from exc
    return {"tournament_id": tournament.id, "field_ids": [f.id for f in tournament.playing_fields]}


@router.delete("/tournaments/{tournament_id}/fields/{field_id}")
def remove_field(tournament_id: uuid.UUID, field_id: uuid.UUID, session: Session = Depends(get_session)):
    try:
        tournament = Repository(session, Tournament).get(tournament_id)
        field = Repository(session, PlayingField).get(field_id)
        membership.remove_field_from_tournament(session, tournament, field)
    except PoloError as exc:
        raise http_error(exc) from exc
    return {"tournament_id": tournament.id, "field_ids": [f.id for f in tournament.playing_fields]}
