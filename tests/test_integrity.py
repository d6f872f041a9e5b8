from datetime import datetime

import pytest
from sqlmodel import select

from polo_backend.core.exceptions import DeleteRejectedError, EntityNotFoundError
from polo_backend.models import (
    Award, AwardType, ChukkerScore, Club, Duty, DutyType, Horse, HorseStatistic, Match,
    Player, PlayerStatistic, PlayingField, Team, TeamPlayerLink, Tournament,
    TournamentClubLink, TournamentFieldLink, User,
)
from polo_backend.services import match_service, membership
from polo_backend.services.integrity import CASCADE, DELETE_RULES, NULLIFY, delete_entity, undeclared_relationships
from polo_backend.services.repository import Repository


def _count(session, model, *where):
    statement = select(model)
    for clause in where:
        statement = statement.where(clause)
    return len(session.exec(statement).all())


def test_every_owning_relationship_has_a_policy():
    assert undeclared_relationships() == []
    assert set(DELETE_RULES) >= {Club, Player, Team, Match, Tournament}


def test_delete_player_cascades_duties_and_statistics(session, make):
    club = make.club()
    player = make.player(club_id=club.id)
    keeper = make.player(first_name="Sophie", last_name="Kerr")
    team = make.team(players=[player, keeper])
    other = make.team(name="Red")
    match = make.match(team, other)
    match_service.record_player_statistic(session, match, player, goals=2)
    match_service.record_player_statistic(session, match, keeper, goals=1)
    Repository(session, Duty).create(
        player_id=player.id, duty_type=DutyType.SCORER, assignment_date=datetime(2024, 10, 5), match_id=match.id
    )
    award = Repository(session, Award).create(
        name="MVP", award_type=AwardType.MOST_VALUABLE_PLAYER, player_id=player.id
    )
    player_id = player.id

    summary = Repository(session, Player).delete(player)

    assert summary["deleted"] == {"Player": 1, "Duty": 1, "PlayerStatistic": 1}
    assert _count(session, Duty) == 0
    assert _count(session, PlayerStatistic, PlayerStatistic.player_id == player_id) == 0
    assert _count(session, PlayerStatistic) == 1
    assert _count(session, TeamPlayerLink, TeamPlayerLink.player_id == player_id) == 0
    session.refresh(team)
    assert [p.id for p in team.players] == [keeper.id]
    session.refresh(club)
    assert club.players == []
    session.refresh(award)
    assert award.player_id is None


def test_delete_match_cascades_rows_and_clears_back_references(session, make, later):
    tournament = make.tournament()
    field = make.field()
    team_a, team_b = make.team(name="Blue"), make.team(name="Red")
    player, horse = make.player(), make.horse()
    match = make.match(team_a, team_b, tournament_id=tournament.id, field_id=field.id, total_chukkers=2)
    match_service.start_match(session, match)
    match_service.record_goal(session, match, "a")
    match_service.end_chukker(session, match)
    match_service.record_player_statistic(session, match, player, goals=1)
    match_service.record_horse_statistic(session, match, horse)
    duty = Repository(session, Duty).create(
        player_id=player.id, duty_type=DutyType.TIMEKEEPER, assignment_date=later, match_id=match.id
    )

    summary = Repository(session, Match).delete(match)

    assert summary["deleted"] == {"Match": 1, "PlayerStatistic": 1, "HorseStatistic": 1, "ChukkerScore": 1}
    assert _count(session, ChukkerScore) == _count(session, PlayerStatistic) == _count(session, HorseStatistic) == 0
    for owner in (tournament, field, team_a, team_b, player, horse):
        session.refresh(owner)
    assert tournament.matches == [] and field.matches == []
    assert team_a.all_matches == [] and team_b.all_matches == []
    session.refresh(duty)
    assert duty.match_id is None


def test_delete_club_keeps_teams_and_players(session, make):
    club = make.club()
    for name in ("Blue", "White"):
        make.team(name=name, club_id=club.id)
    for i in range(5):
        make.player(first_name=f"Player{i}", club_id=club.id)
    tournament = make.tournament()
    membership.add_club_to_tournament(session, tournament, club)

    summary = Repository(session, Club).delete(club)

    assert summary["deleted"] == {"Club": 1}
    teams = Repository(session, Team).all()
    players = Repository(session, Player).all()
    assert len(teams) == 2 and len(players) == 5
    assert all(t.club_id is None for t in teams)
    assert all(p.club_id is None for p in players)
    assert _count(session, TournamentClubLink) == 0
    session.refresh(tournament)
    assert tournament.clubs == []


def test_delete_team_cascades_matches(session, make):
    team_a, team_b = make.team(name="Blue"), make.team(name="Red")
    player = make.player()
    membership.add_player_to_team(session, team_a, player)
    match = make.match(team_a, team_b)
    match_service.record_player_statistic(session, match, player, goals=3)

    summary = Repository(session, Team).delete(team_a)

    assert summary["deleted"] == {"Team": 1, "Match": 1, "PlayerStatistic": 1}
    assert Repository(session, Player).get(player.id).teams == []
    assert Repository(session, Team).get(team_b.id).all_matches == []


def test_delete_tournament_nullifies_matches(session, make):
    tournament = make.tournament()
    match = make.match(make.team(name="Blue"), make.team(name="Red"), tournament_id=tournament.id)
    Repository(session, Award).create(name="Winner", award_type=AwardType.OTHER, tournament_id=tournament.id)

    Repository(session, Tournament).delete(tournament)

    session.refresh(match)
    assert match.tournament_id is None
    assert Repository(session, Award).all()[0].tournament_id is None


def test_deleting_twice_reports_not_found(session, make):
    player = make.player()
    player_id = player.id
    Repository(session, Player).delete(player)
    with pytest.raises(EntityNotFoundError):
        Repository(session, Player).delete_by_id(player_id)


def test_rejected_delete_rolls_back_everything(session, make, monkeypatch):
    player = make.player()
    team = make.team(players=[player])
    match = make.match(team, make.team(name="Red"))
    match_service.record_player_statistic(session, match, player, goals=1)
    Repository(session, Duty).create(player_id=player.id, duty_type=DutyType.SCORER, assignment_date=datetime(2024, 10, 5))
    player_id = player.id
    # Statistic rows keep a non-null reference the store will not clear
    monkeypatch.setitem(DELETE_RULES, Player, {"duties": CASCADE, "teams": NULLIFY, "awards": NULLIFY})

    with pytest.raises(DeleteRejectedError):
        delete_entity(session, player)

    assert Repository(session, Player).get(player_id).full_name == "Jack Archer"
    assert _count(session, Duty) == 1
    assert _count(session, PlayerStatistic) == 1
    assert _count(session, TeamPlayerLink) == 1


def test_delete_field_cascades_matches(session, make):
    field = make.field()
    tournament = make.tournament()
    membership.add_field_to_tournament(session, tournament, field)
    match = make.match(make.team(name="Blue"), make.team(name="Red"), field_id=field.id)
    match_service.record_horse_statistic(session, match, make.horse())
    match_service.record_player_statistic(session, match, make.player(), goals=1)

    summary = Repository(session, PlayingField).delete(field)

    assert summary["deleted"] == {"PlayingField": 1, "Match": 1, "HorseStatistic": 1, "PlayerStatistic": 1}
    assert _count(session, Match) == _count(session, HorseStatistic) == _count(session, PlayerStatistic) == 0
    assert _count(session, TournamentFieldLink) == 0
    session.refresh(tournament)
    assert tournament.playing_fields == []
    assert len(Repository(session, Team).all()) == 2


def test_delete_horse_cascades_statistics_and_keeps_awards(session, make):
    horse = make.horse()
    match = make.match()
    match_service.record_horse_statistic(session, match, horse)
    award = Repository(session, Award).create(name="Pony", award_type=AwardType.BEST_PLAYING_PONY, horse_id=horse.id)

    summary = Repository(session, Horse).delete(horse)

    assert summary["deleted"] == {"Horse": 1, "HorseStatistic": 1}
    assert summary["nullified"] == {"Horse.awards": 1}
    session.refresh(award)
    assert award.horse_id is None
    assert Repository(session, Match).get(match.id).horse_statistics == []


def test_delete_user_clears_player_and_bred_horses(session, make):
    user = Repository(session, User).create(email="bill@polo.example", first_name="Bill", last_name="Breeder")
    player = make.player(user_id=user.id)
    horses = [make.horse(name=name, breeder_id=user.id) for name in ("Banjo", "Clancy")]

    summary = Repository(session, User).delete(user)

    assert summary["deleted"] == {"User": 1}
    assert summary["nullified"] == {"User.player": 1, "User.bred_horses": 2}
    session.refresh(player)
    assert player.user_id is None
    for horse in horses:
        session.refresh(horse)
        assert horse.breeder_id is None
