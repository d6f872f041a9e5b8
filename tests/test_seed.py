from polo_backend.models import Award, Club, Match, MatchStatus, Player, Team
from polo_backend.seed.seed_all import database_is_empty, seed_all
from polo_backend.services import statistics
from polo_backend.services.integrity import delete_entity
from polo_backend.services.repository import Repository


def test_seed_builds_a_consistent_season(session):
    assert database_is_empty(session)
    seed_all(session)
    assert not database_is_empty(session)

    matches = Repository(session, Match).all()
    assert [m.status for m in matches] == [MatchStatus.COMPLETED, MatchStatus.SCHEDULED]
    opener = matches[0]
    assert (opener.team_a_score, opener.team_b_score) == (8, 6)
    assert [c.chukker_number for c in opener.chukker_scores] == [1, 2, 3, 4]

    home = Repository(session, Team).query(Team.name == "Windsor Blue")[0]
    assert statistics.team_record(home).win_percentage == 100.0
    assert len(Repository(session, Award).all()) == 2


def test_seeded_club_delete_keeps_members(session):
    seed_all(session)
    club = Repository(session, Club).all()[0]
    delete_entity(session, club)
    assert len(Repository(session, Player).all()) == 6
    assert len(Repository(session, Team).all()) == 2
