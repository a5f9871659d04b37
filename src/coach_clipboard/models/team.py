"""Pydantic models for teams and players."""

from datetime import date

from pydantic import BaseModel


class TeamDraft(BaseModel):
    """Team fields as delivered by a form, before an id is assigned."""

    name: str
    age_group: str  # e.g. U7-U8
    coach: str


class Team(TeamDraft):
    """A stored team."""

    id: str


class PlayerDraft(BaseModel):
    """Player fields as delivered by a form, before an id is assigned."""

    name: str
    team_id: str  # Weak reference, not checked against the store
    dob: date
    notes: str = ""


class Player(PlayerDraft):
    """A stored player."""

    id: str
