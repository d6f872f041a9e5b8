# polo_backend/services/rules.py
# Per-entity normalization and validation run before every create/update commit

import logging

from sqlmodel import Session, select

from polo_backend.core.config import ENFORCE_AWARD_CATEGORY
from polo_backend.core.exceptions import ValidationFailedError
from polo_backend.models.award_model import Award
from polo_backend.models.duty_model import Duty
from polo_backend.models.horse_model import HorseStatistic
from polo_backend.models.enums import MatchStatus
from polo_backend.models.match_model import Match, ChukkerScore
from polo_backend.models.player_model import Player, PlayerStatistic, clamp_handicap
from polo_backend.models.tournament_model import Tournament

logger = logging.getLogger(__name__)


def _fail(operation: str, entity, reason: str):
    raise ValidationFailedError(operation, type(entity).__name__, entity.id, reason)


# ==========================================
# NORMALIZATION
# ==========================================

def normalize(session: Session, entity) -> None:
    """Apply silent corrections: handicap clamping and match-date copies."""
    if isinstance(entity, Player):
        entity.handicap = clamp_handicap(entity.handicap)
    elif isinstance(entity, (PlayerStatistic, HorseStatistic)):
        match = session.get(Match, entity.match_id) if entity.match_id else None
        if match is not None:
            entity.match_date = match.match_date


# ==========================================
# VALIDATION
# ==========================================

def validate_match(entity: Match, operation: str) -> None:
    # Status never changes through update, so this is the stored status
    if operation == "update" and MatchStatus(entity.status).is_terminal:
        _fail(operation, entity, f"a {MatchStatus(entity.status).label.lower()} match cannot be edited")
    if entity.team_a_id is not None and entity.team_a_id == entity.team_b_id:
        _fail(operation, entity, "a team cannot play against itself")
    if entity.team_a_score < 0 or entity.team_b_score < 0:
        _fail(operation, entity, "scores cannot be negative")
    if entity.total_chukkers < 1:
        _fail(operation, entity, "a match has at least one chukker")
    if not 0 <= entity.current_chukker <= entity.total_chukkers:
        _fail(operation, entity, f"current chukker {entity.current_chukker} is outside 0..{entity.total_chukkers}")
    if entity.end_time is not None and entity.end_time < entity.start_time:
        _fail(operation, entity, "end time is before start time")


def validate_tournament(entity: Tournament, operation: str) -> None:
    if entity.end_date < entity.start_date:
        _fail(operation, entity, "end date is before start date")


def validate_award(entity: Award, operation: str) -> None:
    """
    At most one recipient, and it must match the award type's category.
    Skipped entirely when ENFORCE_AWARD_CATEGORY is off.
    """
    if not ENFORCE_AWARD_CATEGORY:
        return
    categories = entity.recipient_categories
    if len(categories) > 1:
        _fail(operation, entity, "an award has a single recipient")
    expected = entity.award_type.recipient_category
    if categories and expected is not None and categories[0] != expected:
        _fail(
            operation,
            entity,
            f"{entity.award_type.label} is a {expected.label.lower()} award, "
            f"not a {categories[0].label.lower()} award",
        )


def validate_duty(entity: Duty, operation: str) -> None:
    # Both contexts set is unusual but allowed
    if entity.match_id is not None and entity.tournament_id is not None:
        logger.warning("Duty %s is tied to both match %s and tournament %s", entity.id, entity.match_id, entity.tournament_id)


def validate_counts(entity, operation: str) -> None:
    for name in ("goals", "assists", "fouls", "yellow_cards", "red_cards", "team_a_score", "team_b_score"):
        value = getattr(entity, name, None)
        if value is not None and value < 0:
            _fail(operation, entity, f"{name} cannot be negative")


# One row per participation
UNIQUE_KEYS = {
    PlayerStatistic: ("player_id", "match_id"),
    HorseStatistic: ("horse_id", "match_id"),
    ChukkerScore: ("match_id", "chukker_number"),
}


def validate_unique(session: Session, entity, operation: str) -> None:
    model = type(entity)
    key = UNIQUE_KEYS.get(model)
    if key is None:
        return
    statement = select(model).where(model.id != entity.id)
    for name in key:
        statement = statement.where(getattr(model, name) == getattr(entity, name))
    with session.no_autoflush:
        duplicate = session.exec(statement).first()
    if duplicate is not None:
        _fail(operation, entity, f"a {model.__name__} row already exists for {', '.join(key)}")


_VALIDATORS = {
    Match: [validate_match],
    Tournament: [validate_tournament],
    Award: [validate_award],
    Duty: [validate_duty],
    PlayerStatistic: [validate_counts],
    ChukkerScore: [validate_counts],
}


def check(session: Session, entity, operation: str) -> None:
    """Normalize, then run every validator registered for the entity's type."""
    normalize(session, entity)
    validate_unique(session, entity, operation)
    for validator in _VALIDATORS.get(type(entity), []):
        validator(entity, operation)
