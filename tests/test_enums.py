import pytest

from polo_backend.models import AwardType, DutyType, Grade, MatchStatus, ProfileType, RecipientCategory


def test_labels_are_title_cased_codes():
    assert MatchStatus.IN_PROGRESS.label == "In Progress"
    assert DutyType.MOUNTED_UMPIRE.label == "Mounted Umpire"
    assert ProfileType.ADMINISTRATOR.display_name == "Administrator"
    assert MatchStatus("completed") is MatchStatus.COMPLETED


def test_grade_handicap_ranges():
    assert Grade.MEDIUM.allows(10.0)
    assert not Grade.LOW.allows(10.0)
    assert Grade.OPEN.allows(0.0)
    assert Grade.HIGH.handicap_range == (16.0, 26.0)


@pytest.mark.parametrize(
    "current,target,allowed",
    [
        (MatchStatus.SCHEDULED, MatchStatus.IN_PROGRESS, True),
        (MatchStatus.SCHEDULED, MatchStatus.COMPLETED, False),
        (MatchStatus.IN_PROGRESS, MatchStatus.COMPLETED, True),
        (MatchStatus.IN_PROGRESS, MatchStatus.POSTPONED, False),
        (MatchStatus.POSTPONED, MatchStatus.SCHEDULED, True),
        (MatchStatus.POSTPONED, MatchStatus.CANCELLED, True),
        (MatchStatus.COMPLETED, MatchStatus.CANCELLED, False),
        (MatchStatus.CANCELLED, MatchStatus.SCHEDULED, False),
    ],
)
def test_match_transitions(current, target, allowed):
    assert current.can_transition_to(target) is allowed


def test_terminal_statuses_have_no_exits():
    for status in MatchStatus:
        assert status.is_terminal == (not status.allowed_transitions)
    assert MatchStatus.IN_PROGRESS.is_live


def test_award_type_categories():
    assert AwardType.TOURNAMENT_WINNER.recipient_category is RecipientCategory.TEAM
    assert AwardType.MOST_VALUABLE_PLAYER.recipient_category is RecipientCategory.PLAYER
    assert AwardType.BEST_PLAYING_PONY.recipient_category is RecipientCategory.HORSE
    assert AwardType.OTHER.recipient_category is None
    flags = [(t.is_team_award, t.is_player_award, t.is_horse_award) for t in AwardType]
    assert all(sum(f) <= 1 for f in flags)


def test_duty_metadata():
    assert DutyType.MOUNTED_UMPIRE.requires_mounting
    assert not DutyType.SCORER.requires_mounting
    assert all(duty.description for duty in DutyType)
