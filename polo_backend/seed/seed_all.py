# seed_all.py
# Populates an empty database with a small demo season, in dependency order.

import logging
from datetime import date, datetime, timedelta
from typing import Optional

from sqlmodel import Session, select

from polo_backend.core.database import engine, init_db
from polo_backend.models import (
    Award, AwardType, Club, Duty, DutyType, FieldSurface, Grade, Horse, HorseColor,
    HorseGender, HorsePerformance, Match, Player, PlayingField, ProfileType, Team,
    Tournament, User,
)
from polo_backend.services import match_service, membership
from polo_backend.services.repository import Repository

logger = logging.getLogger(__name__)

CLUBS = [
    {"name": "Windsor Park Polo Club", "location": "Windsor, NSW", "contact_email": "info@windsorpolo.example"},
    {"name": "Werribee Park Polo Club", "location": "Werribee, VIC"},
]

# (first, last, handicap, club index)
PLAYERS = [
    ("Jack", "Archer", 4.0, 0),
    ("Sophie", "Kerr", 6.0, 0),
    ("Tom", "Hughes", 2.0, 0),
    ("Ella", "Murray", 1.0, 1),
    ("Liam", "Fraser", 3.0, 1),
    ("Grace", "Walsh", 0.0, 1),
]

HORSES = [
    ("Banjo", HorseGender.GELDING, HorseColor.BAY, "Northern Star", "Matilda"),
    ("Clancy", HorseGender.MARE, HorseColor.CHESTNUT, None, None),
    ("Dusty", HorseGender.GELDING, HorseColor.GRAY, "Silver Jet", "Dawn"),
]


def seed_all(session: Optional[Session] = None) -> None:
    if session is None:
        init_db(engine)
        with Session(engine) as own_session:
            return seed_all(own_session)

    logger.info("Starting demo database seeding...")

    logger.info("Step 1: Seeding clubs...")
    clubs = [Repository(session, Club).create(**club) for club in CLUBS]

    logger.info("Step 2: Seeding users...")
    users = Repository(session, User)
    admin = users.create(email="admin@polo.example", first_name="Ada", last_name="Admin", profile_type=ProfileType.ADMINISTRATOR)
    breeder = users.create(email="breeder@polo.example", first_name="Bill", last_name="Breeder", profile_type=ProfileType.BREEDER)

    logger.info("Step 3: Seeding players...")
    players = [
        Repository(session, Player).create(first_name=first, last_name=last, handicap=hcp, club_id=clubs[idx].id)
        for first, last, hcp, idx in PLAYERS
    ]

    logger.info("Step 4: Seeding horses...")
    horses = [
        Repository(session, Horse).create(
            name=name, birth_date=date(2016 + i, 10, 1), gender=gender, color=color,
            sire=sire, dam=dam, breeder_id=breeder.id,
        )
        for i, (name, gender, color, sire, dam) in enumerate(HORSES)
    ]

    logger.info("Step 5: Seeding teams and rosters...")
    teams = Repository(session, Team)
    home = teams.create(name="Windsor Blue", grade=Grade.MEDIUM, team_color="Blue", club_id=clubs[0].id)
    away = teams.create(name="Werribee Red", grade=Grade.LOW, team_color="Red", club_id=clubs[1].id)
    for player in players[:3]:
        membership.add_player_to_team(session, home, player)
    for player in players[3:]:
        membership.add_player_to_team(session, away, player)

    logger.info("Step 6: Seeding field and tournament...")
    field = Repository(session, PlayingField).create(
        name="Ground 1", location="Windsor, NSW", grade=Grade.MEDIUM, surface=FieldSurface.GRASS, length=300, width=160,
    )
    start = date.today() - timedelta(days=3)
    tournament = Repository(session, Tournament).create(
        name="Spring Cup", grade=Grade.MEDIUM, start_date=start, end_date=start + timedelta(days=7), location="Windsor, NSW",
    )
    membership.add_club_to_tournament(session, tournament, clubs[0])
    membership.add_club_to_tournament(session, tournament, clubs[1])
    membership.add_field_to_tournament(session, tournament, field)

    logger.info("Step 7: Playing the opening match...")
    kickoff = datetime.combine(start, datetime.min.time()) + timedelta(hours=14)
    match = Repository(session, Match).create(
        tournament_id=tournament.id, field_id=field.id, team_a_id=home.id, team_b_id=away.id,
        match_date=start, start_time=kickoff, total_chukkers=4,
    )
    match_service.start_match(session, match)
    for a_goals, b_goals in [(2, 1), (4, 3), (6, 4), (8, 6)]:
        match_service.set_score(session, match, a_goals, b_goals)
        match_service.end_chukker(session, match)
    match_service.complete_match(session, match, end_time=kickoff + timedelta(hours=2))

    for player, goals in zip(players, [3, 4, 1, 2, 3, 1]):
        match_service.record_player_statistic(session, match, player, goals=goals)
    for horse, performance in zip(horses, [HorsePerformance.EXCELLENT, HorsePerformance.GOOD, HorsePerformance.AVERAGE]):
        match_service.record_horse_statistic(session, match, horse, performance=performance)

    Repository(session, Match).create(
        tournament_id=tournament.id, field_id=field.id, team_a_id=away.id, team_b_id=home.id,
        match_date=start + timedelta(days=4), start_time=kickoff + timedelta(days=4),
    )

    logger.info("Step 8: Seeding awards and duties...")
    awards = Repository(session, Award)
    awards.create(name="Spring Cup Best Playing Pony", award_type=AwardType.BEST_PLAYING_PONY, tournament_id=tournament.id, horse_id=horses[0].id)
    awards.create(name="Spring Cup MVP", award_type=AwardType.MOST_VALUABLE_PLAYER, tournament_id=tournament.id, player_id=players[1].id)
    Repository(session, Duty).create(
        player_id=players[4].id, duty_type=DutyType.MOUNTED_UMPIRE, assignment_date=kickoff, match_id=match.id,
    )
    Repository(session, Duty).create(
        player_id=players[2].id, duty_type=DutyType.TIMEKEEPER, assignment_date=kickoff, tournament_id=tournament.id,
    )

    logger.info("Database seeding complete (admin user: %s).", admin.email)


def database_is_empty(session: Session) -> bool:
    return session.exec(select(Club)).first() is None


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    seed_all()
