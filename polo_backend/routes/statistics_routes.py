# statistics_routes.py
# Read-only derived statistics, recomputed on every request

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlmodel import Session

from polo_backend.core.database import get_session
from polo_backend.core.exceptions import PoloError
from polo_backend.models import Award, Horse, Match, Player, Team, Tournament
from polo_backend.routes.errors import http_error
from polo_backend.services import statistics
from polo_backend.services.repository import Repository

router = APIRouter()


def _get(session: Session, model, entity_id: uuid.UUID):
    try:
        return Repository(session, model).get(entity_id)
    except PoloError as exc:
        raise http_error(exc) from exc


@router.get("/overview")
def overview(session: Session = Depends(get_session)):
    return statistics.overall_summary(
        Repository(session, Tournament).all(),
        Repository(session, Match).all(),
        Repository(session, Player).all(),
        Repository(session, Horse).all(),
    )


@router.get("/teams/{team_id}")
def team_statistics(team_id: uuid.UUID, session: Session = Depends(get_session)):
    team = _get(session, Team, team_id)
    record = statistics.team_record(team)
    return {
        "team_id": team.id,
        "name": team.name,
        **record.model_dump(),
        "total_handicap": statistics.total_handicap(team.players),
        "average_handicap": statistics.average_handicap(team.players),
        "grade_allows_roster": team.grade.allows(statistics.total_handicap(team.players)),
    }


@router.get("/players/{player_id}")
def player_statistics(player_id: uuid.UUID, session: Session = Depends(get_session)):
    player = _get(session, Player, player_id)
    return {
        "player_id": player.id,
        "full_name": player.full_name,
        "handicap": player.handicap,
        "age": player.age,
        **statistics.player_career_stats(player).model_dump(),
    }


@router.get("/horses/{horse_id}")
def horse_statistics(horse_id: uuid.UUID, session: Session = Depends(get_session)):
    horse = _get(session, Horse, horse_id)
    return {
        "horse_id": horse.id,
        "name": horse.name,
        "age": horse.age,
        **statistics.horse_activity(horse).model_dump(),
    }


@router.get("/tournaments/{tournament_id}")
def tournament_statistics(tournament_id: uuid.UUID, session: Session = Depends(get_session)):
    tournament = _get(session, Tournament, tournament_id)
    return {
        "tournament_id": tournament.id,
        "name": tournament.name,
        "duration_days": tournament.duration_days,
        **statistics.tournament_summary(tournament).model_dump(),
    }


@router.get("/awards/by-type")
def awards_by_type(tournament_id: Optional[uuid.UUID] = None, session: Session = Depends(get_session)):
    """Awards grouped by type label; optionally only one tournament's awards."""
    repo = Repository(session, Award)
    awards = repo.query(Award.tournament_id == tournament_id) if tournament_id else repo.all()
    return [
        {"award_type": award_type, "label": award_type.label, "awards": group}
        for award_type, group in statistics.awards_by_type(awards).items()
    ]


@router.get("/top-scorers")
def top_scorers(limit: int = Query(3, ge=1, le=100), session: Session = Depends(get_session)):
    players = statistics.top_scorers(Repository(session, Player).all(), limit=limit)
    return [
        {"rank": rank, "player_id": p.id, "full_name": p.full_name, "total_goals": statistics.player_career_stats(p).total_goals}
        for rank, p in enumerate(players, start=1)
    ]


@router.get("/most-active-horses")
def most_active_horses(limit: int = Query(3, ge=1, le=100), session: Session = Depends(get_session)):
    horses = statistics.most_active_horses(Repository(session, Horse).all(), limit=limit)
    return [
        {"rank": rank, "horse_id": h.id, "name": h.name, "total_games": statistics.horse_activity(h).total_games}
        for rank, h in enumerate(horses, start=1)
    ]
