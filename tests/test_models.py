import uuid
from datetime import date, datetime, timezone

import pytest

from polo_backend.core.timeutils import age_in_years, utc_now
from polo_backend.models import Award, AwardType, Grade, Match, MatchStatus, Player, RecipientCategory, Tournament, clamp_handicap


@pytest.mark.parametrize("raw,expected", [(12, 10.0), (10, 10.0), (-5, -2.0), (3.5, 3.5)])
def test_clamp_handicap(raw, expected):
    assert clamp_handicap(raw) == expected


def test_player_handicap_clamped_on_init_and_assignment():
    player = Player(first_name="Adolfo", last_name="Cambiaso", handicap=14)
    assert player.handicap == 10.0
    player.handicap = -9
    assert player.handicap == -2.0
    assert player.full_name == "Adolfo Cambiaso"


def _completed(a_score, b_score, status=MatchStatus.COMPLETED):
    return Match(
        match_date=date(2024, 10, 5),
        start_time=datetime(2024, 10, 5, 14),
        team_a_id=uuid.uuid4(),
        team_b_id=uuid.uuid4(),
        team_a_score=a_score,
        team_b_score=b_score,
        status=status,
    )


def test_winner_of_completed_match():
    match = _completed(8, 6)
    assert match.winner_id == match.team_a_id
    match = _completed(3, 7)
    assert match.winner_id == match.team_b_id


def test_tie_and_unfinished_matches_have_no_winner():
    assert _completed(5, 5).winner_id is None
    assert _completed(8, 6, status=MatchStatus.IN_PROGRESS).winner_id is None


def test_match_duration():
    match = _completed(1, 0)
    assert match.duration is None
    match.end_time = datetime(2024, 10, 5, 15, 30)
    assert match.duration == 5400


def test_age_in_whole_years():
    assert age_in_years(date(2000, 6, 15), today=date(2024, 6, 14)) == 23
    assert age_in_years(date(2000, 6, 15), today=date(2024, 6, 15)) == 24
    assert age_in_years(None) is None


def test_tournament_duration():
    tournament = Tournament(name="Cup", grade=Grade.LOW, start_date=date(2024, 10, 1), end_date=date(2024, 10, 8))
    assert tournament.duration_days == 7


def test_award_recipient_categories():
    award = Award(name="MVP", award_type=AwardType.MOST_VALUABLE_PLAYER, player_id=uuid.uuid4())
    assert award.recipient_categories == [RecipientCategory.PLAYER]


def test_utc_now_is_naive_utc():
    now = utc_now()
    assert now.tzinfo is None
    assert abs((datetime.now(timezone.utc).replace(tzinfo=None) - now).total_seconds()) < 5
