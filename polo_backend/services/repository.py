# polo_backend/services/repository.py
# Explicit per-entity-type CRUD and query interface over a Session

import logging
import uuid
from typing import Any, Generic, List, Optional, Sequence, Type, TypeVar, Union

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import SQLModel, Session, select

from polo_backend.core.exceptions import EntityNotFoundError, EntityOperationError, ValidationFailedError
from polo_backend.core.locks import write_lock
from polo_backend.services import rules
from polo_backend.services.integrity import delete_entity

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=SQLModel)

# Assigned at creation, never rewritten
IMMUTABLE_FIELDS = frozenset({"id", "created_date"})

# Only changed through services.match_service
LIFECYCLE_FIELDS = {
    "Match": frozenset({"status", "team_a_score", "team_b_score", "current_chukker", "end_time"}),
}


def commit_or_raise(session: Session, operation: str, entity) -> None:
    """Commit, or roll back and report the failed operation with the entity's identity."""
    entity_type = type(entity).__name__
    entity_id = entity.id
    try:
        session.commit()
    except SQLAlchemyError as exc:
        session.rollback()
        logger.error("%s %s %s rolled back: %s", operation, entity_type, entity_id, exc)
        raise EntityOperationError(operation, entity_type, entity_id, str(exc.orig if hasattr(exc, "orig") else exc)) from exc
    session.refresh(entity)


class Repository(Generic[ModelT]):
    """
    CRUD for one entity type.

    Example:
        players = Repository(session, Player)
        p = players.create(first_name="Adolfo", last_name="Cambiaso", handicap=10)
        players.update(p, handicap=12)   # clamped to 10
        players.query(Player.is_active == True, order_by=Player.handicap.desc())
    """

    def __init__(self, session: Session, model: Type[ModelT]):
        self.session = session
        self.model = model

    @property
    def entity_name(self) -> str:
        return self.model.__name__

    def _check_fields(self, operation: str, fields: dict, entity_id=None) -> None:
        unknown = set(fields) - set(self.model.model_fields)
        if unknown:
            raise ValidationFailedError(operation, self.entity_name, entity_id, f"unknown fields: {sorted(unknown)}")

    # ==========================================
    # READ
    # ==========================================

    def get(self, entity_id: Union[uuid.UUID, str]) -> ModelT:
        if isinstance(entity_id, str):
            try:
                entity_id = uuid.UUID(entity_id)
            except ValueError:
                raise EntityNotFoundError(self.entity_name, entity_id)
        entity = self.session.get(self.model, entity_id)
        if entity is None:
            raise EntityNotFoundError(self.entity_name, entity_id)
        return entity

    def query(self, *where: Any, order_by: Optional[Union[Any, Sequence[Any]]] = None, limit: Optional[int] = None) -> List[ModelT]:
        """
        Entities matching every `where` clause. Ties in `order_by` (or the
        whole ordering when none is given) fall back to creation time, then id.
        """
        statement = select(self.model)
        for clause in where:
            statement = statement.where(clause)
        if order_by is not None:
            keys = list(order_by) if isinstance(order_by, (list, tuple)) else [order_by]
            statement = statement.order_by(*keys)
        statement = statement.order_by(self.model.created_date, self.model.id)
        if limit is not None:
            statement = statement.limit(limit)
        return list(self.session.exec(statement).all())

    def all(self) -> List[ModelT]:
        return self.query()

    # ==========================================
    # WRITE
    # ==========================================

    def create(self, **fields) -> ModelT:
        self._check_fields("create", fields)
        try:
            entity = self.model.model_validate(fields)
        except ValidationError as exc:
            raise ValidationFailedError("create", self.entity_name, fields.get("id"), str(exc)) from exc

        with write_lock(reason=f"create {self.entity_name}"):
            rules.check(self.session, entity, "create")
            self.session.add(entity)
            commit_or_raise(self.session, "create", entity)
        logger.info("Created %s %s", self.entity_name, entity.id)
        return entity

    def update(self, entity: ModelT, **fields) -> ModelT:
        """Replace scalar fields in place. Relationship membership goes through services.membership."""
        self._check_fields("update", fields, entity.id)
        frozen = IMMUTABLE_FIELDS & set(fields)
        if frozen:
            raise ValidationFailedError("update", self.entity_name, entity.id, f"read-only fields: {sorted(frozen)}")
        lifecycle = LIFECYCLE_FIELDS.get(self.entity_name, frozenset()) & set(fields)
        if lifecycle:
            raise ValidationFailedError(
                "update", self.entity_name, entity.id, f"{sorted(lifecycle)} change through the match lifecycle only"
            )

        with write_lock(reason=f"update {self.entity_name} {entity.id}"):
            # Merge onto the stored row, not a copy another request may have outdated
            self.session.refresh(entity)
            merged = entity.model_dump()
            merged.update(fields)
            try:
                validated = self.model.model_validate(merged)
            except ValidationError as exc:
                raise ValidationFailedError("update", self.entity_name, entity.id, str(exc)) from exc

            for name in fields:
                setattr(entity, name, getattr(validated, name))
            try:
                rules.check(self.session, entity, "update")
            except ValidationFailedError:
                self.session.rollback()
                raise
            self.session.add(entity)
            commit_or_raise(self.session, "update", entity)
        logger.info("Updated %s %s: %s", self.entity_name, entity.id, sorted(fields))
        return entity

    def delete(self, entity: ModelT) -> dict:
        return delete_entity(self.session, entity)

    def delete_by_id(self, entity_id: Union[uuid.UUID, str]) -> dict:
        return self.delete(self.get(entity_id))
