"""JSON-ready views of services output for tool responses."""

from typing import Any, Optional

from coach_clipboard.models import Drill, Player, Session, Team, TrainingPlan
from coach_clipboard.services.catalog import plan_total_duration, resolve_plan_drills
from coach_clipboard.services.history import PlayerSessionRecord, TeamSessionRecord
from coach_clipboard.services.session_manager import SessionManager, SessionStage
from coach_clipboard.services.summary import SessionSummary
from coach_clipboard.storage.entity_store import EntityStore
from coach_clipboard.utils.dates import format_session_date
from coach_clipboard.utils.formatting import format_minutes


def team_view(team: Team) -> dict[str, Any]:
    return team.model_dump(mode="json")


def player_view(player: Player) -> dict[str, Any]:
    return player.model_dump(mode="json")


def drill_view(drill: Drill) -> dict[str, Any]:
    return drill.model_dump(mode="json")


def session_view(session: Session) -> dict[str, Any]:
    view = session.model_dump(mode="json")
    view["date_display"] = format_session_date(session.date_time)
    return view


def plan_view(store: EntityStore, plan: TrainingPlan) -> dict[str, Any]:
    """A plan with its drills resolved. Drills missing from the catalog are left out."""
    total = plan_total_duration(plan)
    return {
        "id": plan.id,
        "name": plan.name,
        "theme": plan.theme,
        "total_minutes": total,
        "total_display": format_minutes(total),
        "drills": [
            {
                "position": item.position,
                "drill_id": item.drill.id,
                "name": item.drill.name,
                "category": item.drill.category.value,
                "duration": item.duration,
                "default_duration": item.drill.duration,
            }
            for item in resolve_plan_drills(store, plan)
        ],
    }


def summary_view(summary: SessionSummary) -> dict[str, Any]:
    return {
        "session": session_view(summary.session),
        "attendance": summary.attendance_label,
        "present_count": summary.present_count,
        "total_count": summary.total_count,
        "notes": summary.notes,
        "players": [
            {
                "player_id": row.player_id,
                "name": row.player_name,
                "present": row.present,
                "behavior": row.label,
                "tags": [tag.value for tag in row.tags],
                "note": row.note,
            }
            for row in summary.rows
        ],
    }


def player_record_view(record: PlayerSessionRecord) -> dict[str, Any]:
    return {
        "session_id": record.session.id,
        "date": format_session_date(record.session.date_time),
        "focus": record.session.focus,
        "present": record.present,
        "behavior": record.label,
        "tags": [tag.value for tag in record.tags],
        "note": record.note,
    }


def team_record_view(record: TeamSessionRecord) -> dict[str, Any]:
    return {
        "session": session_view(record.session),
        "attendance": f"{record.present_count}/{record.total_count}",
        "green": record.green,
        "yellow": record.yellow,
        "red": record.red,
    }


def _drill_name(store: EntityStore, drill_id: str) -> Optional[str]:
    drill = store.get_drill(drill_id)
    return drill.name if drill else None


def session_state_view(manager: SessionManager, store: EntityStore) -> dict[str, Any]:
    """Everything a client needs to render the current session stage."""
    team = store.get_team(manager.selected_team_id)
    state: dict[str, Any] = {
        "stage": manager.stage.value,
        "actions": sorted(action.value for action in manager.actions()),
    }

    if manager.stage == SessionStage.CREATE:
        selection = manager.drill_selection
        state.update(
            {
                "team": team_view(team) if team else None,
                "focus": manager.focus,
                "source_plan_id": manager.source_plan_id,
                "drills": [
                    {
                        "drill_id": entry.drill_id,
                        "name": _drill_name(store, entry.drill_id),
                        "duration": entry.duration,
                    }
                    for entry in selection
                ],
                "total_minutes": sum(entry.duration for entry in selection),
            }
        )
    elif manager.stage == SessionStage.ACTIVE:
        session = manager.current_session
        current = manager.current_drill()
        state.update(
            {
                "session": session_view(session) if session else None,
                "current_drill": None
                if current is None
                else {
                    "position": current.position,
                    "count": current.count,
                    "duration": current.duration,
                    "drill": drill_view(current.drill) if current.drill else None,
                },
                "players": [
                    {
                        "player_id": row.player_id,
                        "name": row.player.name if row.player else None,
                        "present": row.attendance.present,
                        "behavior": row.behavior.status.value,
                        "can_rate": row.can_rate,
                        "tags": [tag.value for tag in row.behavior.tags],
                        "note": row.behavior.note,
                    }
                    for row in manager.roster()
                ],
            }
        )
    else:
        summary = manager.summary()
        state["summary"] = summary_view(summary) if summary else None
        state["notes_draft"] = manager.notes_draft
    return state
