# polo_backend/services/statistics.py
# Aggregation engine: derived statistics recomputed from the current graph
# on every call. Nothing here writes, caches or filters; callers pass in the
# collection they want summarized (e.g. only completed matches).

import uuid
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence

from pydantic import BaseModel

from polo_backend.core.timeutils import age_in_years
from polo_backend.models import (
    Award, AwardType, Horse, HorseStatistic, Match, MatchStatus, Player,
    PlayerStatistic, Team, Tournament,
)


# -------------------------------
# Result schemas
# -------------------------------

class TeamRecord(BaseModel):
    wins: int
    losses: int
    draws: int  # completed ties; counted in neither wins nor losses
    win_percentage: float


class PlayerCareer(BaseModel):
    total_goals: int
    total_matches: int
    average_goals_per_match: float


class HorseActivity(BaseModel):
    total_games: int
    total_tournaments: int


class TournamentSummary(BaseModel):
    match_count: int
    distinct_team_count: int
    field_count: int
    award_count: int


class OverallSummary(BaseModel):
    total_tournaments: int
    active_tournaments: int
    total_matches: int
    completed_matches: int
    total_players: int
    active_players: int
    total_horses: int
    active_horses: int
    total_goals: int
    average_goals_per_match: float


def ratio(numerator: float, denominator: float) -> float:
    """numerator / denominator, or 0 when there is nothing to divide by."""
    if not denominator:
        return 0.0
    return numerator / denominator


def win_percentage(wins: int, losses: int) -> float:
    return ratio(wins, wins + losses) * 100


# ==========================================
# TEAMS
# ==========================================

def match_result_for(team_id: uuid.UUID, match: Match) -> Optional[str]:
    """
    "win", "loss", "draw" or None (not involved, or no decided result yet).
    """
    if team_id not in (match.resolved_team_a_id, match.resolved_team_b_id):
        return None
    if match.status != MatchStatus.COMPLETED:
        return None
    winner_id = match.winner_id
    if winner_id is None:
        return "draw"
    return "win" if winner_id == team_id else "loss"


def record_from_matches(team_id: uuid.UUID, matches: Iterable[Match]) -> TeamRecord:
    wins = losses = draws = 0
    for match in matches:
        result = match_result_for(team_id, match)
        if result == "win":
            wins += 1
        elif result == "loss":
            losses += 1
        elif result == "draw":
            draws += 1
    return TeamRecord(wins=wins, losses=losses, draws=draws, win_percentage=win_percentage(wins, losses))


def team_record(team: Team, matches: Optional[Iterable[Match]] = None) -> TeamRecord:
    """Win/loss record over the team's matches in both roles, or over `matches` if given."""
    return record_from_matches(team.id, team.all_matches if matches is None else matches)


def total_handicap(players: Iterable[Player]) -> float:
    return float(sum(player.handicap for player in players))


def average_handicap(players: Iterable[Player]) -> float:
    players = list(players)
    return ratio(total_handicap(players), len(players))


# ==========================================
# PLAYERS
# ==========================================

def career_from_statistics(statistics: Iterable[PlayerStatistic]) -> PlayerCareer:
    rows = list(statistics)
    total_goals = sum(row.goals for row in rows)
    return PlayerCareer(
        total_goals=total_goals,
        total_matches=len(rows),
        average_goals_per_match=ratio(total_goals, len(rows)),
    )


def player_career_stats(player: Player, statistics: Optional[Iterable[PlayerStatistic]] = None) -> PlayerCareer:
    return career_from_statistics(player.statistics if statistics is None else statistics)


# ==========================================
# HORSES
# ==========================================

def activity_from_statistics(statistics: Iterable[HorseStatistic]) -> HorseActivity:
    """Games = rows; tournaments = distinct tournaments reached through the rows' matches."""
    rows = list(statistics)
    tournament_ids = set()
    for row in rows:
        match = row.match
        if match is None:
            continue
        tournament_id = match.tournament_id
        if tournament_id is None and match.tournament is not None:
            tournament_id = match.tournament.id
        if tournament_id is not None:
            tournament_ids.add(tournament_id)
    return HorseActivity(total_games=len(rows), total_tournaments=len(tournament_ids))


def horse_activity(horse: Horse, statistics: Optional[Iterable[HorseStatistic]] = None) -> HorseActivity:
    return activity_from_statistics(horse.statistics if statistics is None else statistics)


def age(subject, today: Optional[date] = None) -> Optional[int]:
    """Whole-year age of a player or horse; None without a birth date."""
    return age_in_years(subject.birth_date, today)


# ==========================================
# TOURNAMENTS & AWARDS
# ==========================================

def distinct_teams(matches: Iterable[Match]) -> set:
    team_ids = set()
    for match in matches:
        for team_id in (match.resolved_team_a_id, match.resolved_team_b_id):
            if team_id is not None:
                team_ids.add(team_id)
    return team_ids


def tournament_summary(tournament: Tournament) -> TournamentSummary:
    matches = list(tournament.matches)
    return TournamentSummary(
        match_count=len(matches),
        distinct_team_count=len(distinct_teams(matches)),
        field_count=len(tournament.playing_fields),
        award_count=len(tournament.awards),
    )


def awards_by_type(awards: Iterable[Award]) -> Dict[AwardType, List[Award]]:
    """
    Group awards by type. Groups come out sorted by type label; awards keep
    their input order within a group.
    """
    groups: Dict[AwardType, List[Award]] = {}
    for award in awards:
        groups.setdefault(AwardType(award.award_type), []).append(award)
    return {award_type: groups[award_type] for award_type in sorted(groups, key=lambda t: t.label)}


# ==========================================
# OVERVIEW & RANKINGS
# ==========================================

def overall_summary(
    tournaments: Sequence[Tournament],
    matches: Sequence[Match],
    players: Sequence[Player],
    horses: Sequence[Horse],
) -> OverallSummary:
    completed = [m for m in matches if m.status == MatchStatus.COMPLETED]
    total_goals = sum(m.team_a_score + m.team_b_score for m in completed)
    return OverallSummary(
        total_tournaments=len(tournaments),
        active_tournaments=sum(1 for t in tournaments if t.is_active),
        total_matches=len(matches),
        completed_matches=len(completed),
        total_players=len(players),
        active_players=sum(1 for p in players if p.is_active),
        total_horses=len(horses),
        active_horses=sum(1 for h in horses if h.is_active),
        total_goals=total_goals,
        average_goals_per_match=ratio(total_goals, len(completed)),
    )


def _creation_order(entities):
    return sorted(entities, key=lambda e: (e.created_date, str(e.id)))


def top_scorers(players: Iterable[Player], limit: Optional[int] = 3) -> List[Player]:
    """Players with at least one goal, most goals first; ties keep creation order."""
    scored = [(player, player_career_stats(player).total_goals) for player in _creation_order(players)]
    ranked = sorted((entry for entry in scored if entry[1] > 0), key=lambda entry: -entry[1])
    ranked_players = [player for player, _ in ranked]
    return ranked_players if limit is None else ranked_players[:limit]


def most_active_horses(horses: Iterable[Horse], limit: Optional[int] = 3) -> List[Horse]:
    """Horses with at least one game, most games first; ties keep creation order."""
    played = [(horse, len(horse.statistics)) for horse in _creation_order(horses)]
    ranked = sorted((entry for entry in played if entry[1] > 0), key=lambda entry: -entry[1])
    ranked_horses = [horse for horse, _ in ranked]
    return ranked_horses if limit is None else ranked_horses[:limit]
