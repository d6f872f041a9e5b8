# polo_backend/services/membership.py
# Relationship membership edits: team rosters and tournament clubs/fields.
# Adding an existing member or removing a non-member is a no-op.

import logging

from sqlmodel import Session

from polo_backend.core.locks import write_lock
from polo_backend.models import Club, Player, PlayingField, Team, Tournament
from polo_backend.services.repository import commit_or_raise

logger = logging.getLogger(__name__)


def _add(session: Session, owner, collection: str, member, operation: str):
    with write_lock(reason=operation):
        members = getattr(owner, collection)
        if member not in members:
            members.append(member)
            session.add(owner)
            commit_or_raise(session, operation, owner)
            logger.info("%s: %s %s <- %s %s", operation, type(owner).__name__, owner.id, type(member).__name__, member.id)
    return owner


def _remove(session: Session, owner, collection: str, member, operation: str):
    with write_lock(reason=operation):
        members = getattr(owner, collection)
        if member in members:
            members.remove(member)
            session.add(owner)
            commit_or_raise(session, operation, owner)
            logger.info("%s: %s %s -> %s %s", operation, type(owner).__name__, owner.id, type(member).__name__, member.id)
    return owner


# === TEAM ROSTER ===

def add_player_to_team(session: Session, team: Team, player: Player) -> Team:
    return _add(session, team, "players", player, "add player to team")


def remove_player_from_team(session: Session, team: Team, player: Player) -> Team:
    """Takes the player off the roster; neither record is deleted."""
    return _remove(session, team, "players", player, "remove player from team")


# === TOURNAMENT CLUBS / FIELDS ===

def add_club_to_tournament(session: Session, tournament: Tournament, club: Club) -> Tournament:
    return _add(session, tournament, "clubs", club, "add club to tournament")


def remove_club_from_tournament(session: Session, tournament: Tournament, club: Club) -> Tournament:
    return _remove(session, tournament, "clubs", club, "remove club from tournament")


def add_field_to_tournament(session: Session, tournament: Tournament, field: PlayingField) -> Tournament:
    return _add(session, tournament, "playing_fields", field, "add field to tournament")


def remove_field_from_tournament(session: Session, tournament: Tournament, field: PlayingField) -> Tournament:
    return _remove(session, tournament, "playing_fields", field, "remove field from tournament")
