# link_model.py
# Association tables for the many-to-many relationships.
# Deleting either side removes the link row only (nullify).

import uuid

from sqlmodel import SQLModel, Field


class TeamPlayerLink(SQLModel, table=True):
    """Team roster membership"""
    team_id: uuid.UUID = Field(foreign_key="team.id", primary_key=True)
    player_id: uuid.UUID = Field(foreign_key="player.id", primary_key=True)


class TournamentClubLink(SQLModel, table=True):
    """Clubs taking part in a tournament"""
    tournament_id: uuid.UUID = Field(foreign_key="tournament.id", primary_key=True)
    club_id: uuid.UUID = Field(foreign_key="club.id", primary_key=True)


class TournamentFieldLink(SQLModel, table=True):
    """Fields a tournament is played on"""
    tournament_id: uuid.UUID = Field(foreign_key="tournament.id", primary_key=True)
    field_id: uuid.UUID = Field(foreign_key="field.id", primary_key=True)
