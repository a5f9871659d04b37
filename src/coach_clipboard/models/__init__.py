"""Pydantic models for Coach Clipboard."""

from coach_clipboard.models.commands import Create, Update
from coach_clipboard.models.drill import (
    Drill,
    DrillCategory,
    DrillDraft,
    DrillFilter,
    PlanDrill,
    SessionFocus,
    TrainingPlan,
    TrainingPlanDraft,
)
from coach_clipboard.models.session import (
    BEHAVIOR_RING,
    Attendance,
    BehaviorEntry,
    BehaviorStatus,
    BehaviorTag,
    Session,
    SessionType,
    next_behavior_status,
)
from coach_clipboard.models.team import Player, PlayerDraft, Team, TeamDraft

__all__ = [
    # Team models
    "TeamDraft",
    "Team",
    "PlayerDraft",
    "Player",
    # Drill and plan models
    "DrillCategory",
    "SessionFocus",
    "DrillDraft",
    "Drill",
    "PlanDrill",
    "TrainingPlanDraft",
    "TrainingPlan",
    "DrillFilter",
    # Session models
    "SessionType",
    "BehaviorStatus",
    "BehaviorTag",
    "BEHAVIOR_RING",
    "next_behavior_status",
    "Session",
    "Attendance",
    "BehaviorEntry",
    # Commands
    "Create",
    "Update",
]
