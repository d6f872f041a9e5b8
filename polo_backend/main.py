import logging

from fastapi import FastAPI
from sqlmodel import Session

from polo_backend.core.config import AUTO_SEED, LOG_LEVEL
from polo_backend.core.database import engine, init_db
from polo_backend.seed.seed_all import database_is_empty, seed_all

# --- Routers ---
from polo_backend.routes.crud_routes import ENTITY_ROUTERS
from polo_backend.routes.match_routes import router as match_router
from polo_backend.routes.membership_routes import router as membership_router
from polo_backend.routes.statistics_routes import router as statistics_router

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger("polo_backend")

app = FastAPI(title="Polo Manager")


@app.on_event("startup")
def on_startup():
    # 1. Init DB tables
    init_db(engine)

    # 2. Auto-seed an empty database
    if not AUTO_SEED:
        return
    with Session(engine) as session:
        if database_is_empty(session):
            logger.info("No clubs found. Auto-seeding database...")
            seed_all(session)
        else:
            logger.info("Database already seeded. Skipping auto-seed.")


# Routers
for prefix, tag, entity_router in ENTITY_ROUTERS:
    app.include_router(entity_router, prefix=prefix, tags=[tag])
app.include_router(match_router, prefix="/matches", tags=["Matches"])
app.include_router(membership_router, tags=["Membership"])
app.include_router(statistics_router, prefix="/statistics", tags=["Statistics"])
