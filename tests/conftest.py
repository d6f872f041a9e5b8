import os

# Keep the module-level engine in memory and skip auto-seeding
os.environ.setdefault("POLO_TEST_MODE", "1")
os.environ.setdefault("POLO_DATABASE_URL", "sqlite://")

from datetime import date, datetime, timedelta

import pytest
from sqlmodel import SQLModel, Session

import polo_backend.models  # noqa: F401
from polo_backend.core.database import make_engine
from polo_backend.models import (
    Club, Grade, Horse, HorseColor, HorseGender, Match, Player, PlayingField,
    Team, Tournament,
)
from polo_backend.services import membership
from polo_backend.services.repository import Repository

KICKOFF = datetime(2024, 10, 5, 14, 0)


@pytest.fixture
def engine():
    engine = make_engine("sqlite://", echo=False)
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


class Factory:
    """Creates valid entities through the repository with sensible defaults."""

    def __init__(self, session: Session):
        self.session = session

    def club(self, name="Windsor Park", **fields):
        return Repository(self.session, Club).create(name=name, **fields)

    def player(self, first_name="Jack", last_name="Archer", handicap=2.0, **fields):
        return Repository(self.session, Player).create(
            first_name=first_name, last_name=last_name, handicap=handicap, **fields
        )

    def horse(self, name="Banjo", **fields):
        fields.setdefault("birth_date", date(2016, 10, 1))
        fields.setdefault("gender", HorseGender.GELDING)
        fields.setdefault("color", HorseColor.BAY)
        return Repository(self.session, Horse).create(name=name, **fields)

    def team(self, name="Blue", grade=Grade.MEDIUM, players=(), **fields):
        team = Repository(self.session, Team).create(name=name, grade=grade, **fields)
        for player in players:
            membership.add_player_to_team(self.session, team, player)
        return team

    def field(self, name="Ground 1", **fields):
        fields.setdefault("grade", Grade.MEDIUM)
        return Repository(self.session, PlayingField).create(name=name, **fields)

    def tournament(self, name="Spring Cup", **fields):
        fields.setdefault("grade", Grade.MEDIUM)
        fields.setdefault("start_date", date(2024, 10, 1))
        fields.setdefault("end_date", date(2024, 10, 8))
        return Repository(self.session, Tournament).create(name=name, **fields)

    def match(self, team_a=None, team_b=None, **fields):
        fields.setdefault("match_date", KICKOFF.date())
        fields.setdefault("start_time", KICKOFF)
        if team_a is not None:
            fields["team_a_id"] = team_a.id
        if team_b is not None:
            fields["team_b_id"] = team_b.id
        return Repository(self.session, Match).create(**fields)


@pytest.fixture
def make(session):
    return Factory(session)


@pytest.fixture
def later():
    return KICKOFF + timedelta(hours=2)
