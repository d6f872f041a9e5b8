# polo_backend/models/__init__.py
# Centralized imports for all database models and schemas

# Reference types
from .enums import (
    Grade, HorseGender, HorseColor, HorsePerformance, MatchStatus,
    DutyType, AwardType, RecipientCategory, FieldSurface, ProfileType,
)

# Association tables
from .link_model import TeamPlayerLink, TournamentClubLink, TournamentFieldLink

# Primary entities
from .club_model import Club, ClubCreate, ClubUpdate
from .user_model import User, UserCreate, UserUpdate
from .player_model import Player, PlayerStatistic, PlayerCreate, PlayerUpdate, PlayerStatisticCreate, clamp_handicap
from .horse_model import Horse, HorseStatistic, HorseCreate, HorseUpdate, HorseStatisticCreate
from .team_model import Team, TeamCreate, TeamUpdate
from .field_model import PlayingField, FieldCreate, FieldUpdate
from .tournament_model import Tournament, TournamentCreate, TournamentUpdate

# Event entities
from .match_model import Match, ChukkerScore, MatchCreate, MatchUpdate, ScoreUpdate, RescheduleRequest
from .duty_model import Duty, DutyCreate, DutyUpdate
from .award_model import Award, AwardCreate, AwardUpdate
