"""Pydantic models for sessions, attendance and behavior tracking."""

from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class SessionType(str, Enum):
    """Kinds of coaching sessions."""

    TRAINING = "Training"
    MATCH = "Match"
    EVENT = "Event"


class BehaviorStatus(str, Enum):
    """Traffic-light behavior rating."""

    NONE = "None"
    GREEN = "Green"
    YELLOW = "Yellow"
    RED = "Red"


class BehaviorTag(str, Enum):
    """Behavior observations a coach can attach to an entry."""

    LISTENING = "Listening"
    RESPECT = "Respect"
    EFFORT = "Effort"
    AGGRESSION = "Aggression"
    DISTRACTION = "Distraction"


BEHAVIOR_RING: tuple[BehaviorStatus, ...] = (
    BehaviorStatus.GREEN,
    BehaviorStatus.YELLOW,
    BehaviorStatus.RED,
    BehaviorStatus.NONE,
)


def next_behavior_status(status: BehaviorStatus) -> BehaviorStatus:
    """Return the status one step further round the behavior ring."""
    index = BEHAVIOR_RING.index(BehaviorStatus(status))
    return BEHAVIOR_RING[(index + 1) % len(BEHAVIOR_RING)]


class Session(BaseModel):
    """A coaching session. Only ``notes`` changes after creation."""

    id: str
    team_id: str
    training_plan_id: str
    date_time: datetime
    type: SessionType = SessionType.TRAINING
    focus: str
    notes: Optional[str] = None


class Attendance(BaseModel):
    """Whether a player attended a session."""

    session_id: str
    player_id: str
    present: bool = True


class BehaviorEntry(BaseModel):
    """Behavior rating for one player in one session."""

    session_id: str
    player_id: str
    status: BehaviorStatus = BehaviorStatus.GREEN
    tags: list[BehaviorTag] = Field(default_factory=list)
    note: Optional[str] = None
