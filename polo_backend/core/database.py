import logging

from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from polo_backend.core.config import DATABASE_URL, SQL_ECHO

logger = logging.getLogger(__name__)


def make_engine(url: str = DATABASE_URL, echo: bool = SQL_ECHO) -> Engine:
    """Build a sync engine. In-memory SQLite URLs share one connection across threads."""
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        return create_engine(url, echo=echo, **kwargs)
    return create_engine(url, echo=echo)


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ignores FOREIGN KEY constraints unless asked per connection
    if type(dbapi_connection).__module__.startswith("sqlite3"):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# --- Engine ---
engine = make_engine()


# --- Initialize DB tables ---
def init_db(bind: Engine = engine) -> None:
    """Create tables if they don't exist."""
    from polo_backend import models  # noqa: F401  registers every table on the metadata

    SQLModel.metadata.create_all(bind)
    logger.info("Database tables ready (%s)", bind.url)


# --- Sync session for seeding/scripts ---
def get_sync_session() -> Session:
    return Session(engine)


# --- DB session (used in routes) ---
def get_session():
    with Session(engine) as session:
        yield session
