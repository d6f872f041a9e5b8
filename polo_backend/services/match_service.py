# polo_backend/services/match_service.py
# Match lifecycle: status transitions, live scoring and chukker snapshots.
# Every operation re-reads the match under the write lock before deciding,
# so a copy loaded earlier by another request never overwrites newer state.

import logging
from datetime import date, datetime
from typing import Optional

from sqlmodel import Session

from polo_backend.core.exceptions import ChukkerLimitError, MatchStateError, ValidationFailedError
from polo_backend.core.locks import write_lock
from polo_backend.core.timeutils import utc_now
from polo_backend.models import (
    ChukkerScore, Horse, HorsePerformance, HorseStatistic, Match, MatchStatus,
    Player, PlayerStatistic,
)
from polo_backend.services import rules
from polo_backend.services.repository import commit_or_raise

logger = logging.getLogger(__name__)


def _require_live(match: Match, action: str) -> None:
    # Scores and chukkers only move during play; terminal matches are frozen
    if match.status != MatchStatus.IN_PROGRESS:
        raise MatchStateError(f"Cannot {action} match {match.id}: status is {MatchStatus(match.status).label}")


def _closed_chukkers(match: Match) -> set:
    return {snapshot.chukker_number for snapshot in match.chukker_scores}


# ==========================================
# STATUS TRANSITIONS
# ==========================================

def transition(session: Session, match: Match, target: MatchStatus, **changes) -> Match:
    """
    Move a match to `target` status, applying `changes` in the same commit.
    scheduled -> in_progress -> completed
    scheduled -> postponed -> scheduled
    any non-terminal -> cancelled
    """
    target = MatchStatus(target)
    with write_lock(reason=f"match {match.id} -> {target.value}"):
        session.refresh(match)
        current = MatchStatus(match.status)
        if not current.can_transition_to(target):
            raise MatchStateError(f"Match {match.id} cannot go from {current.label} to {target.label}")

        for name, value in changes.items():
            setattr(match, name, value)
        if target == MatchStatus.IN_PROGRESS and match.current_chukker == 0:
            match.current_chukker = 1
        if target == MatchStatus.COMPLETED and match.end_time is None:
            match.end_time = max(utc_now(), match.start_time)

        match.status = target
        session.add(match)
        commit_or_raise(session, "update", match)

    logger.info("Match %s: %s -> %s", match.id, current.label, target.label)
    return match


def start_match(session: Session, match: Match) -> Match:
    return transition(session, match, MatchStatus.IN_PROGRESS)


def complete_match(session: Session, match: Match, end_time: Optional[datetime] = None) -> Match:
    with write_lock(reason=f"complete match {match.id}"):
        session.refresh(match)
        if end_time is None:
            return transition(session, match, MatchStatus.COMPLETED)
        if end_time < match.start_time:
            raise MatchStateError(f"Match {match.id} cannot end before it starts")
        return transition(session, match, MatchStatus.COMPLETED, end_time=end_time)


def postpone_match(session: Session, match: Match) -> Match:
    return transition(session, match, MatchStatus.POSTPONED)


def reschedule_match(session: Session, match: Match, match_date: date, start_time: datetime) -> Match:
    """Back to scheduled from postponed, with a new date and start time."""
    with write_lock(reason=f"reschedule match {match.id}"):
        session.refresh(match)
        if match.status != MatchStatus.POSTPONED:
            raise MatchStateError(
                f"Only postponed matches can be rescheduled (match {match.id} is {MatchStatus(match.status).label})"
            )
        return transition(session, match, MatchStatus.SCHEDULED, match_date=match_date, start_time=start_time)


def cancel_match(session: Session, match: Match) -> Match:
    return transition(session, match, MatchStatus.CANCELLED)


# ==========================================
# LIVE SCORING
# ==========================================

def _write_score(session: Session, match: Match, team_a_score: int, team_b_score: int) -> Match:
    # Caller holds the write lock and has refreshed the match
    _require_live(match, "score")
    if team_a_score < 0 or team_b_score < 0:
        raise ValidationFailedError("update", "Match", match.id, "scores cannot be negative")
    match.team_a_score = team_a_score
    match.team_b_score = team_b_score
    session.add(match)
    commit_or_raise(session, "update", match)
    return match


def set_score(session: Session, match: Match, team_a_score: int, team_b_score: int) -> Match:
    with write_lock(reason=f"score match {match.id}"):
        session.refresh(match)
        return _write_score(session, match, team_a_score, team_b_score)


def record_goal(session: Session, match: Match, side: str) -> Match:
    """Add one goal for side "a" or "b" to the stored score."""
    side = side.lower()
    if side not in ("a", "b"):
        raise ValueError(f"side must be 'a' or 'b', got {side!r}")
    with write_lock(reason=f"goal {side} match {match.id}"):
        session.refresh(match)
        if side == "a":
            return _write_score(session, match, match.team_a_score + 1, match.team_b_score)
        return _write_score(session, match, match.team_a_score, match.team_b_score + 1)


def end_chukker(session: Session, match: Match) -> ChukkerScore:
    """
    Close the current chukker: append a snapshot of the running score and
    move on to the next chukker. The last chukker can be closed once.
    """
    with write_lock(reason=f"end chukker match {match.id}"):
        session.refresh(match)
        _require_live(match, "end a chukker of")
        number = match.current_chukker
        if number in _closed_chukkers(match):
            final = " (final chukker)" if number == match.total_chukkers else ""
            raise ChukkerLimitError(f"Chukker {number} of match {match.id} is already closed{final}")

        snapshot = ChukkerScore(
            match_id=match.id,
            chukker_number=number,
            team_a_score=match.team_a_score,
            team_b_score=match.team_b_score,
        )
        rules.check(session, snapshot, "create")
        session.add(snapshot)
        if match.current_chukker < match.total_chukkers:
            match.current_chukker += 1
        session.add(match)
        commit_or_raise(session, "create", snapshot)

    logger.info("Match %s chukker %s closed at %s-%s", match.id, number, snapshot.team_a_score, snapshot.team_b_score)
    return snapshot


def set_current_chukker(session: Session, match: Match, chukker: int) -> Match:
    """Jump to another open chukker. Closed chukkers cannot be reopened."""
    with write_lock(reason=f"set chukker match {match.id}"):
        session.refresh(match)
        _require_live(match, "change the chukker of")
        if chukker < 1 or chukker > match.total_chukkers:
            raise ChukkerLimitError(f"Chukker {chukker} is outside 1..{match.total_chukkers}")
        closed = _closed_chukkers(match)
        if closed and chukker <= max(closed):
            raise ChukkerLimitError(f"Chukker {chukker} of match {match.id} is already closed")
        match.current_chukker = chukker
        session.add(match)
        commit_or_raise(session, "update", match)
    return match


# ==========================================
# PARTICIPATION
# ==========================================

def record_player_statistic(session: Session, match: Match, player: Player, **counts) -> PlayerStatistic:
    """One row per (player, match); the match date is copied onto the row."""
    with write_lock(reason=f"player stat match {match.id}"):
        row = PlayerStatistic(player_id=player.id, match_id=match.id, **counts)
        rules.check(session, row, "create")
        session.add(row)
        commit_or_raise(session, "create", row)
    return row


def record_horse_statistic(
    session: Session,
    match: Match,
    horse: Horse,
    performance: HorsePerformance = HorsePerformance.GOOD,
    injuries: Optional[str] = None,
    notes: Optional[str] = None,
) -> HorseStatistic:
    """One row per (horse, match); the match date is copied onto the row."""
    with write_lock(reason=f"horse stat match {match.id}"):
        row = HorseStatistic(
            horse_id=horse.id,
            match_id=match.id,
            performance=performance,
            injuries=injuries,
            notes=notes,
        )
        rules.check(session, row, "create")
        session.add(row)
        commit_or_raise(session, "create", row)
    return row
