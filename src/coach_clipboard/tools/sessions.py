"""MCP tools that drive the live coaching session."""

import logging
from typing import Any, Callable

from coach_clipboard.app import ClipboardApp
from coach_clipboard.models import BehaviorTag
from coach_clipboard.services.history import session_summary
from coach_clipboard.services.session_manager import (
    CursorDirection,
    SessionAction,
    SessionManager,
    SessionStage,
)
from coach_clipboard.tools.views import session_state_view, summary_view

logger = logging.getLogger(__name__)

_DIRECTIONS = {
    "next": CursorDirection.NEXT,
    "forward": CursorDirection.NEXT,
    "previous": CursorDirection.PREVIOUS,
    "back": CursorDirection.PREVIOUS,
}


def _setup_state(manager: SessionManager) -> tuple:
    """Everything a reset can clear."""
    return (
        manager.stage,
        manager.selected_team_id,
        manager.focus,
        manager.source_plan_id,
        manager.drill_selection,
    )


def register_session_tools(mcp, app: ClipboardApp):
    """Register session lifecycle MCP tools."""

    manager = app.sessions

    def _apply(action: SessionAction, operation: Callable[[], Any]) -> dict[str, Any]:
        if not manager.is_enabled(action):
            return {
                "error": f"'{action.value}' is not available in the {manager.stage.value} stage",
                "data": session_state_view(manager, app.store),
            }
        result = operation()
        app.persist()
        return {"data": session_state_view(manager, app.store), "changed": bool(result)}

    @mcp.tool()
    def get_session_state() -> dict[str, Any]:
        """
        Get the current session stage and everything needed to display it.

        Returns:
            Dictionary with the stage, the enabled actions and stage details:
            team and drill list while setting up; current drill and players
            while active; attendance and behavior summary when finished
        """
        try:
            return {"data": session_state_view(manager, app.store)}
        except Exception as e:
            logger.exception("get_session_state failed")
            return {"error": str(e)}

    @mcp.tool()
    def select_session_team(team_id: str) -> dict[str, Any]:
        """
        Choose the team for the next session.

        Args:
            team_id: The team to coach

        Returns:
            Dictionary with the session state
        """
        try:
            if app.store.get_team(team_id) is None:
                return {"error": f"Team not found: {team_id}"}
            return _apply(SessionAction.SELECT_TEAM, lambda: manager.select_team(team_id))
        except Exception as e:
            logger.exception("select_session_team failed")
            return {"error": str(e)}

    @mcp.tool()
    def set_session_focus(focus: str) -> dict[str, Any]:
        """
        Set the session focus (e.g. "Dribbling", "Teamwork").

        Args:
            focus: Focus for the next session

        Returns:
            Dictionary with the session state
        """
        try:
            return _apply(SessionAction.SET_FOCUS, lambda: manager.set_focus(focus))
        except Exception as e:
            logger.exception("set_session_focus failed")
            return {"error": str(e)}

    @mcp.tool()
    def select_session_plan(plan_id: str) -> dict[str, Any]:
        """
        Load an existing training plan's drills into the session plan.

        The loaded drills can still be added to, removed or re-timed.

        Args:
            plan_id: The plan to start from

        Returns:
            Dictionary with the session state
        """
        try:
            if app.store.get_plan(plan_id) is None:
                return {"error": f"Plan not found: {plan_id}"}
            return _apply(SessionAction.SELECT_PLAN, lambda: manager.select_plan(plan_id))
        except Exception as e:
            logger.exception("select_session_plan failed")
            return {"error": str(e)}

    @mcp.tool()
    def add_drill_to_plan(drill_id: str) -> dict[str, Any]:
        """
        Add a drill to the session plan. Adding a drill twice has no effect.

        Args:
            drill_id: The drill to add

        Returns:
            Dictionary with the session state
        """
        try:
            if app.store.get_drill(drill_id) is None:
                return {"error": f"Drill not found: {drill_id}"}
            return _apply(SessionAction.ADD_DRILL, lambda: manager.add_drill(drill_id))
        except Exception as e:
            logger.exception("add_drill_to_plan failed")
            return {"error": str(e)}

    @mcp.tool()
    def remove_drill_from_plan(drill_id: str) -> dict[str, Any]:
        """
        Remove a drill from the session plan.

        Args:
            drill_id: The drill to remove

        Returns:
            Dictionary with the session state
        """
        try:
            return _apply(SessionAction.REMOVE_DRILL, lambda: manager.remove_drill(drill_id))
        except Exception as e:
            logger.exception("remove_drill_from_plan failed")
            return {"error": str(e)}

    @mcp.tool()
    def set_plan_drill_duration(drill_id: str, minutes: int) -> dict[str, Any]:
        """
        Change how long a drill runs in this session.

        Args:
            drill_id: A drill already in the session plan
            minutes: New duration in minutes (must be positive)

        Returns:
            Dictionary with the session state
        """
        try:
            if minutes <= 0:
                return {"error": "minutes must be positive"}
            return _apply(
                SessionAction.SET_DRILL_DURATION,
                lambda: manager.set_drill_duration(drill_id, minutes),
            )
        except Exception as e:
            logger.exception("set_plan_drill_duration failed")
            return {"error": str(e)}

    @mcp.tool()
    def start_session() -> dict[str, Any]:
        """
        Start the session. Needs a team and at least one drill.

        Every player on the team starts present with a Green rating.

        Returns:
            Dictionary with the session state
        """
        try:
            return _apply(SessionAction.START, manager.start_session)
        except Exception as e:
            logger.exception("start_session failed")
            return {"error": str(e)}

    @mcp.tool()
    def advance_cursor(direction: str = "next") -> dict[str, Any]:
        """
        Move to the next or previous drill.

        Args:
            direction: "next" or "previous" (default: "next")

        Returns:
            Dictionary with the session state
        """
        try:
            step = _DIRECTIONS.get(direction.strip().lower())
            if step is None:
                return {"error": f"Invalid direction: {direction}. Use 'next' or 'previous'"}
            action = SessionAction.NEXT_DRILL if step > 0 else SessionAction.PREVIOUS_DRILL
            before = manager.cursor
            return _apply(action, lambda: manager.advance_cursor(step) != before)
        except Exception as e:
            logger.exception("advance_cursor failed")
            return {"error": str(e)}

    @mcp.tool()
    def toggle_attendance(player_id: str) -> dict[str, Any]:
        """
        Mark a player present or absent.

        Args:
            player_id: A player on the session roster

        Returns:
            Dictionary with the session state
        """
        try:
            return _apply(
                SessionAction.TOGGLE_ATTENDANCE,
                lambda: manager.toggle_attendance(player_id) is not None,
            )
        except Exception as e:
            logger.exception("toggle_attendance failed")
            return {"error": str(e)}

    @mcp.tool()
    def cycle_behavior(player_id: str) -> dict[str, Any]:
        """
        Advance a present player's rating: Green, Yellow, Red, None, then Green.

        Args:
            player_id: A present player on the session roster

        Returns:
            Dictionary with the session state
        """
        try:
            return _apply(
                SessionAction.CYCLE_BEHAVIOR,
                lambda: manager.cycle_behavior(player_id) is not None,
            )
        except Exception as e:
            logger.exception("cycle_behavior failed")
            return {"error": str(e)}

    @mcp.tool()
    def toggle_behavior_tag(player_id: str, tag: str) -> dict[str, Any]:
        """
        Add or remove a behavior tag for a present player.

        Args:
            player_id: A present player on the session roster
            tag: One of "Listening", "Respect", "Effort", "Aggression", "Distraction"

        Returns:
            Dictionary with the session state
        """
        try:
            behavior_tag = BehaviorTag(tag)
            return _apply(
                SessionAction.TAG_BEHAVIOR,
                lambda: manager.toggle_behavior_tag(player_id, behavior_tag) is not None,
            )
        except Exception as e:
            logger.exception("toggle_behavior_tag failed")
            return {"error": str(e)}

    @mcp.tool()
    def set_behavior_note(player_id: str, note: str = "") -> dict[str, Any]:
        """
        Attach a note to a present player's behavior rating. Empty text clears it.

        Args:
            player_id: A present player on the session roster
            note: Note text

        Returns:
            Dictionary with the session state
        """
        try:
            return _apply(
                SessionAction.NOTE_BEHAVIOR,
                lambda: manager.set_behavior_note(player_id, note),
            )
        except Exception as e:
            logger.exception("set_behavior_note failed")
            return {"error": str(e)}

    @mcp.tool()
    def finish_session() -> dict[str, Any]:
        """
        Finish the session and record attendance and behavior.

        Returns:
            Dictionary with the session state, now showing the summary
        """
        try:
            return _apply(SessionAction.FINISH, manager.finish_session)
        except Exception as e:
            logger.exception("finish_session failed")
            return {"error": str(e)}

    @mcp.tool()
    def save_notes(text: str) -> dict[str, Any]:
        """
        Save the coach's notes on the finished session.

        Saving the same text again changes nothing.

        Args:
            text: Notes text

        Returns:
            Dictionary with the session state and whether the notes changed
        """
        try:
            if manager.stage != SessionStage.SUMMARY:
                return _apply(SessionAction.SAVE_NOTES, manager.save_notes)
            manager.edit_notes(text)
            if not manager.is_enabled(SessionAction.SAVE_NOTES):
                return {"data": session_state_view(manager, app.store), "changed": False}
            return _apply(SessionAction.SAVE_NOTES, manager.save_notes)
        except Exception as e:
            logger.exception("save_notes failed")
            return {"error": str(e)}

    @mcp.tool()
    def reset_session() -> dict[str, Any]:
        """
        Discard the session in progress and start setting up a new one.

        Returns:
            Dictionary with the session state
        """
        try:
            before = _setup_state(manager)
            return _apply(
                SessionAction.RESET,
                lambda: manager.reset() or _setup_state(manager) != before,
            )
        except Exception as e:
            logger.exception("reset_session failed")
            return {"error": str(e)}

    @mcp.tool()
    def get_session_summary(session_id: str) -> dict[str, Any]:
        """
        Get the attendance and behavior summary of a recorded session.

        Args:
            session_id: The session to summarize

        Returns:
            Dictionary with the summary
        """
        try:
            summary = session_summary(app.store, session_id)
            if summary is None:
                return {"error": f"Session not found: {session_id}"}
            return {"data": summary_view(summary)}
        except Exception as e:
            logger.exception("get_session_summary failed")
            return {"error": str(e)}
