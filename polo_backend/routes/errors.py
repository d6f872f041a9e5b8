# errors.py
# Maps domain exceptions onto HTTP errors for the routers

from fastapi import HTTPException

from polo_backend.core.exceptions import (
    EntityNotFoundError, EntityOperationError, MatchStateError, PoloError, ValidationFailedError,
)


def http_error(exc: PoloError) -> HTTPException:
    if isinstance(exc, EntityNotFoundError):
        return HTTPException(status_code=404, detail=str(exc))
    if isinstance(exc, MatchStateError):
        return HTTPException(status_code=409, detail=str(exc))
    if isinstance(exc, EntityOperationError):
        detail = {
            "operation": exc.operation,
            "entity_type": exc.entity_type,
            "entity_id": str(exc.entity_id) if exc.entity_id is not None else None,
            "reason": exc.reason,
        }
        status_code = 422 if isinstance(exc, ValidationFailedError) else 400
        return HTTPException(status_code=status_code, detail=detail)
    return HTTPException(status_code=400, detail=str(exc))
