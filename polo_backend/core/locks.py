"""Process-local write serialization.

Deletes, membership changes and match updates all read-modify-write the
entity graph. FastAPI runs sync routes in a threadpool, so every mutation
path takes this lock; readers never do. The lock does not coordinate
separate processes (e.g. several uvicorn workers against one database).
"""

from contextlib import contextmanager
from threading import RLock
from typing import Iterator
import logging

logger = logging.getLogger(__name__)

# Re-entrant: a cascading delete re-enters through nested mutation helpers
_GRAPH_WRITE_LOCK = RLock()


@contextmanager
def write_lock(*, reason: str = "") -> Iterator[None]:
    """Serialize a graph mutation within this process."""
    _GRAPH_WRITE_LOCK.acquire()
    try:
        if reason:
            logger.debug("write lock acquired: %s", reason)
        yield
    finally:
        _GRAPH_WRITE_LOCK.release()
