"""Coaching services: catalog, session lifecycle, history and drill search."""

from coach_clipboard.services.catalog import (
    DrillSelection,
    ResolvedPlanDrill,
    add_drill_to_selection,
    plan_total_duration,
    resolve_plan_drills,
    save_plan_from_selection,
)
from coach_clipboard.services.drill_filter import (
    active_filter_count,
    filter_drills,
    has_active_filters,
    unique_age_groups,
)
from coach_clipboard.services.history import (
    PlayerSessionRecord,
    TeamSessionRecord,
    player_history,
    recent_sessions,
    session_local_date,
    session_summary,
    team_session_history,
    upcoming_sessions,
)
from coach_clipboard.services.session_manager import (
    ActiveDrill,
    CursorDirection,
    RosterRow,
    SessionAction,
    SessionManager,
    SessionStage,
)
from coach_clipboard.services.summary import SessionSummary, SummaryRow

__all__ = [
    # Catalog
    "DrillSelection",
    "ResolvedPlanDrill",
    "add_drill_to_selection",
    "plan_total_duration",
    "resolve_plan_drills",
    "save_plan_from_selection",
    # Drill search
    "filter_drills",
    "unique_age_groups",
    "active_filter_count",
    "has_active_filters",
    # History
    "PlayerSessionRecord",
    "TeamSessionRecord",
    "player_history",
    "team_session_history",
    "session_summary",
    "session_local_date",
    "upcoming_sessions",
    "recent_sessions",
    # Session lifecycle
    "SessionManager",
    "SessionStage",
    "SessionAction",
    "CursorDirection",
    "ActiveDrill",
    "RosterRow",
    "SessionSummary",
    "SummaryRow",
]
