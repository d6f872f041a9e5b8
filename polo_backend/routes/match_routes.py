# match_routes.py
# Match lifecycle endpoints: status changes, live scoring, chukker timeline

import uuid

from fastapi import APIRouter, Depends, HTTPException
from sqlmodel import Session

from polo_backend.core.database import get_session
from polo_backend.core.exceptions import PoloError
from polo_backend.models import Match, RescheduleRequest, ScoreUpdate
from polo_backend.routes.errors import http_error
from polo_backend.services import match_service
from polo_backend.services.repository import Repository

router = APIRouter()


def _load(session: Session, match_id: uuid.UUID) -> Match:
    try:
        return Repository(session, Match).get(match_id)
    except PoloError as exc:
        raise http_error(exc) from exc


def _match_state(match: Match) -> dict:
    return {
        "id": match.id,
        "status": match.status,
        "team_a_score": match.team_a_score,
        "team_b_score": match.team_b_score,
        "current_chukker": match.current_chukker,
        "total_chukkers": match.total_chukkers,
        "winner_id": match.winner_id,
        "is_live": match.is_live,
        "end_time": match.end_time,
    }


@router.post("/{match_id}/start")
def start_match(match_id: uuid.UUID, session: Session = Depends(get_session)):
    match = _load(session, match_id)
    try:
        match_service.start_match(session, match)
    except PoloError as exc:
        raise http_error(exc) from exc
    return _match_state(match)


@router.post("/{match_id}/complete")
def complete_match(match_id: uuid.UUID, session: Session = Depends(get_session)):
    match = _load(session, match_id)
    try:
        match_service.complete_match(session, match)
    except PoloError as exc:
        raise http_error(exc) from exc
    return _match_state(match)


@router.post("/{match_id}/postpone")
def postpone_match(match_id: uuid.UUID, session: Session = Depends(get_session)):
    match = _load(session, match_id)
    try:
        match_service.postpone_match(session, match)
    except PoloError as exc:
        raise http_error(exc) from exc
    return _match_state(match)


@router.post("/{match_id}/reschedule")
def reschedule_match(match_id: uuid.UUID, data: RescheduleRequest, session: Session = Depends(get_session)):
    match = _load(session, match_id)
    try:
        match_service.reschedule_match(session, match, data.match_date, data.start_time)
    except PoloError as exc:
        raise http_error(exc) from exc
    return _match_state(match)


@router.post("/{match_id}/cancel")
def cancel_match(match_id: uuid.UUID, session: Session = Depends(get_session)):
    match = _load(session, match_id)
    try:
        match_service.cancel_match(session, match)
    except PoloError as exc:
        raise http_error(exc) from exc
    return _match_state(match)


@router.put("/{match_id}/score")
def set_score(match_id: uuid.UUID, data: ScoreUpdate, session: Session = Depends(get_session)):
    match = _load(session, match_id)
    try:
        match_service.set_score(session, match, data.team_a_score, data.team_b_score)
    except PoloError as exc:
        raise http_error(exc) from exc
    return _match_state(match)


@router.post("/{match_id}/goal/{side}")
def record_goal(match_id: uuid.UUID, side: str, session: Session = Depends(get_session)):
    if side.lower() not in ("a", "b"):
        raise HTTPException(status_code=400, detail="Side must be 'a' or 'b'.")
    match = _load(session, match_id)
    try:
        match_service.record_goal(session, match, side)
    except PoloError as exc:
        raise http_error(exc) from exc
    return _match_state(match)


@router.post("/{match_id}/chukkers/end")
def end_chukker(match_id: uuid.UUID, session: Session = Depends(get_session)):
    match = _load(session, match_id)
    try:
        snapshot = match_service.end_chukker(session, match)
    except PoloError as exc:
        raise http_error(exc) from exc
    return {"snapshot": snapshot, "match": _match_state(match)}


@router.get("/{match_id}/chukkers")
def chukker_timeline(match_id: uuid.UUID, session: Session = Depends(get_session)):
    """Per-chukker running scores in play order."""
    match = _load(session, match_id)
    return list(match.chukker_scores)
