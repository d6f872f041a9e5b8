# polo_backend/models/enums.py
# Enumerated reference types shared by every entity.
# Values are stable storage codes; `label` is the display text.

from enum import Enum
from typing import Optional, Tuple


class LabelledEnum(str, Enum):
    """String enum whose display label is the title-cased code."""

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


class Grade(LabelledEnum):
    """Competitive tier shared by teams, tournaments and fields"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    OPEN = "open"

    @property
    def handicap_range(self) -> Tuple[float, float]:
        """Inclusive range of team handicap totals this grade is played at."""
        return _GRADE_HANDICAP_RANGES[self]

    def allows(self, total_handicap: float) -> bool:
        low, high = self.handicap_range
        return low <= total_handicap <= high


_GRADE_HANDICAP_RANGES = {
    Grade.LOW: (0.0, 8.0),
    Grade.MEDIUM: (8.0, 16.0),
    Grade.HIGH: (16.0, 26.0),
    Grade.OPEN: (0.0, 40.0),
}


class HorseGender(LabelledEnum):
    STALLION = "stallion"
    MARE = "mare"
    GELDING = "gelding"
    COLT = "colt"
    FILLY = "filly"


class HorseColor(LabelledEnum):
    BAY = "bay"
    CHESTNUT = "chestnut"
    BLACK = "black"
    GRAY = "gray"
    BROWN = "brown"
    PALOMINO = "palomino"
    PINTO = "pinto"
    ROAN = "roan"
    OTHER = "other"


class HorsePerformance(LabelledEnum):
    """Rating recorded for a horse in a single match"""
    EXCELLENT = "excellent"
    GOOD = "good"
    AVERAGE = "average"
    POOR = "poor"
    INJURED = "injured"


class MatchStatus(LabelledEnum):
    """Lifecycle of a match. COMPLETED and CANCELLED are terminal."""
    SCHEDULED = "scheduled"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    POSTPONED = "postponed"

    @property
    def is_terminal(self) -> bool:
        return self in (MatchStatus.COMPLETED, MatchStatus.CANCELLED)

    @property
    def is_live(self) -> bool:
        return self is MatchStatus.IN_PROGRESS

    @property
    def allowed_transitions(self) -> frozenset:
        return _MATCH_TRANSITIONS[self]

    def can_transition_to(self, target: "MatchStatus") -> bool:
        return target in _MATCH_TRANSITIONS[self]


_MATCH_TRANSITIONS = {
    MatchStatus.SCHEDULED: frozenset({MatchStatus.IN_PROGRESS, MatchStatus.POSTPONED, MatchStatus.CANCELLED}),
    MatchStatus.IN_PROGRESS: frozenset({MatchStatus.COMPLETED, MatchStatus.CANCELLED}),
    MatchStatus.POSTPONED: frozenset({MatchStatus.SCHEDULED, MatchStatus.CANCELLED}),
    MatchStatus.COMPLETED: frozenset(),
    MatchStatus.CANCELLED: frozenset(),
}


class DutyType(LabelledEnum):
    """Officiating or support role a player is rostered for"""
    MOUNTED_UMPIRE = "mounted_umpire"
    GOAL_UMPIRE = "goal_umpire"
    CENTRE_TABLE = "centre_table"
    TIMEKEEPER = "timekeeper"
    SCORER = "scorer"
    ANNOUNCER = "announcer"
    FIELD_MAINTENANCE = "field_maintenance"

    @property
    def description(self) -> str:
        return _DUTY_DESCRIPTIONS[self]

    @property
    def requires_mounting(self) -> bool:
        return self is DutyType.MOUNTED_UMPIRE


_DUTY_DESCRIPTIONS = {
    DutyType.MOUNTED_UMPIRE: "Mounted umpire responsible for officiating the match on horseback",
    DutyType.GOAL_UMPIRE: "Goal umpire positioned to judge goals and goal attempts",
    DutyType.CENTRE_TABLE: "Centre table official managing match administration",
    DutyType.TIMEKEEPER: "Official responsible for timing chukkers and match duration",
    DutyType.SCORER: "Official responsible for recording match scores and statistics",
    DutyType.ANNOUNCER: "Match announcer providing commentary and information",
    DutyType.FIELD_MAINTENANCE: "Field maintenance crew ensuring field conditions",
}


class RecipientCategory(LabelledEnum):
    """Kind of entity an award is presented to"""
    TEAM = "team"
    PLAYER = "player"
    HORSE = "horse"


class AwardType(LabelledEnum):
    TOURNAMENT_WINNER = "tournament_winner"
    RUNNER_UP = "runner_up"
    MOST_VALUABLE_PLAYER = "most_valuable_player"
    BEST_PLAYING_PONY = "best_playing_pony"
    HIGHEST_GOAL_SCORER = "highest_goal_scorer"
    BEST_YOUNG_PLAYER = "best_young_player"
    SPORTSMANSHIP_AWARD = "sportsmanship_award"
    FAIR_PLAY = "fair_play"
    BEST_TEAM = "best_team"
    OTHER = "other"

    @property
    def is_team_award(self) -> bool:
        return self in (AwardType.TOURNAMENT_WINNER, AwardType.RUNNER_UP, AwardType.BEST_TEAM)

    @property
    def is_player_award(self) -> bool:
        return self in (
            AwardType.MOST_VALUABLE_PLAYER,
            AwardType.HIGHEST_GOAL_SCORER,
            AwardType.BEST_YOUNG_PLAYER,
            AwardType.SPORTSMANSHIP_AWARD,
            AwardType.FAIR_PLAY,
        )

    @property
    def is_horse_award(self) -> bool:
        return self is AwardType.BEST_PLAYING_PONY

    @property
    def recipient_category(self) -> Optional[RecipientCategory]:
        """None for OTHER, which may go to any kind of recipient."""
        if self.is_team_award:
            return RecipientCategory.TEAM
        if self.is_player_award:
            return RecipientCategory.PLAYER
        if self.is_horse_award:
            return RecipientCategory.HORSE
        return None


class FieldSurface(LabelledEnum):
    GRASS = "grass"
    SAND = "sand"
    ARTIFICIAL = "artificial"
    MIXED = "mixed"


class ProfileType(LabelledEnum):
    """Role tag on a user account. Informational only, nothing is gated on it."""
    ADMINISTRATOR = "administrator"
    OPERATOR = "operator"
    PLAYER = "player"
    BREEDER = "breeder"
    USER = "user"

    @property
    def display_name(self) -> str:
        return self.label

