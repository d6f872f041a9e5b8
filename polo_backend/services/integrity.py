# polo_backend/services/integrity.py
# Deletion propagation. Every relationship an entity owns is declared here
# with its policy, and delete_entity() resolves all of them in one transaction.

import logging
from collections import Counter
from enum import Enum
from typing import Dict, List, Set, Tuple, Type

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import RelationshipDirection
from sqlmodel import SQLModel, Session

from polo_backend.core.exceptions import DeleteRejectedError
from polo_backend.core.locks import write_lock
from polo_backend.models import (
    Award, ChukkerScore, Club, Duty, Horse, HorseStatistic, Match, Player,
    PlayerStatistic, PlayingField, Team, Tournament, User,
)

logger = logging.getLogger(__name__)


class DeletePolicy(str, Enum):
    """What happens to dependents when the entity they reference is deleted"""
    CASCADE = "cascade"  # dependents are deleted too, transitively
    NULLIFY = "nullify"  # the reference is cleared, dependents survive


CASCADE = DeletePolicy.CASCADE
NULLIFY = DeletePolicy.NULLIFY


# ==========================================
# DELETE RULES
# relationship attribute on the deleted entity -> policy
# ==========================================

DELETE_RULES: Dict[Type[SQLModel], Dict[str, DeletePolicy]] = {
    Club: {
        "teams": NULLIFY,
        "players": NULLIFY,
        "tournaments": NULLIFY,
    },
    User: {
        "player": NULLIFY,
        "bred_horses": NULLIFY,
    },
    Player: {
        "duties": CASCADE,
        "statistics": CASCADE,
        "teams": NULLIFY,
        "awards": NULLIFY,
    },
    Horse: {
        "statistics": CASCADE,
        "awards": NULLIFY,
    },
    Team: {
        "matches_as_team_a": CASCADE,
        "matches_as_team_b": CASCADE,
        "players": NULLIFY,
        "awards": NULLIFY,
    },
    PlayingField: {
        "matches": CASCADE,
        "tournaments": NULLIFY,
    },
    Tournament: {
        "matches": NULLIFY,
        "awards": NULLIFY,
        "duties": NULLIFY,
        "clubs": NULLIFY,
        "playing_fields": NULLIFY,
    },
    Match: {
        "player_statistics": CASCADE,
        "horse_statistics": CASCADE,
        "chukker_scores": CASCADE,
        "duties": NULLIFY,
    },
    PlayerStatistic: {},
    HorseStatistic: {},
    ChukkerScore: {},
    Duty: {},
    Award: {},
}


def undeclared_relationships() -> List[Tuple[str, str]]:
    """
    Relationships where the model is the referenced side (one-to-many,
    many-to-many, or the inverse of a one-to-one) but no policy is declared.
    Must stay empty.
    """
    missing = []
    for model, rules in DELETE_RULES.items():
        for rel in inspect(model).relationships:
            owns_dependents = rel.direction in (RelationshipDirection.ONETOMANY, RelationshipDirection.MANYTOMANY)
            if owns_dependents and rel.key not in rules:
                missing.append((model.__name__, rel.key))
    return missing


def _resolve(session: Session, entity, seen: Set[Tuple[type, object]], deleted: Counter, nullified: Counter) -> None:
    key = (type(entity), entity.id)
    if key in seen:
        return
    seen.add(key)

    rules = DELETE_RULES.get(type(entity))
    if rules is None:
        raise KeyError(f"No delete rules declared for {type(entity).__name__}")

    for relationship, policy in rules.items():
        value = getattr(entity, relationship)
        if policy is CASCADE:
            dependents = list(value) if isinstance(value, list) else ([value] if value is not None else [])
            for dependent in dependents:
                _resolve(session, dependent, seen, deleted, nullified)
        elif isinstance(value, list):
            if value:
                nullified[f"{type(entity).__name__}.{relationship}"] += len(value)
                value.clear()
        elif value is not None:
            nullified[f"{type(entity).__name__}.{relationship}"] += 1
            setattr(entity, relationship, None)

    session.delete(entity)
    deleted[type(entity).__name__] += 1


def delete_entity(session: Session, entity) -> dict:
    """
    Delete an entity and resolve every relationship it participates in.
    Cascades and nullifications are committed together; if the store rejects
    any part, the whole delete is rolled back and DeleteRejectedError raised.
    """
    entity_type = type(entity).__name__
    entity_id = entity.id
    deleted: Counter = Counter()
    nullified: Counter = Counter()

    with write_lock(reason=f"delete {entity_type} {entity_id}"):
        try:
            _resolve(session, entity, set(), deleted, nullified)
            session.commit()
        except (SQLAlchemyError, KeyError) as exc:
            session.rollback()
            logger.error("Delete of %s %s rolled back: %s", entity_type, entity_id, exc)
            raise DeleteRejectedError("delete", entity_type, entity_id, str(exc)) from exc

    logger.info(
        "Deleted %s %s (removed: %s, references cleared: %s)",
        entity_type, entity_id, dict(deleted), dict(nullified),
    )
    return {
        "entity_type": entity_type,
        "entity_id": entity_id,
        "deleted": dict(deleted),
        "nullified": dict(nullified),
    }
