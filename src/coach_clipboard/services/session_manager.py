"""
Session lifecycle: set up a session, track it live, then review it.

Stages run CREATE -> ACTIVE -> SUMMARY. ``reset()`` discards everything in
progress and returns to CREATE. Each mutation checks ``actions()`` first and
does nothing when its action is not currently enabled, so callers can render
controls from ``actions()`` and never see a rejected call.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum, IntEnum
from typing import Callable, Optional, Union

from coach_clipboard.models import (
    Attendance,
    BehaviorEntry,
    BehaviorStatus,
    BehaviorTag,
    Drill,
    PlanDrill,
    Player,
    Session,
    SessionFocus,
    SessionType,
    TrainingPlanDraft,
    next_behavior_status,
)
from coach_clipboard.services.catalog import DrillSelection, add_drill_to_selection
from coach_clipboard.services.summary import SessionSummary, build_summary_rows
from coach_clipboard.storage.entity_store import EntityStore

logger = logging.getLogger(__name__)

GENERIC_THEME = "General Session"


class SessionStage(str, Enum):
    CREATE = "create"
    ACTIVE = "active"
    SUMMARY = "summary"


class SessionAction(str, Enum):
    """User actions, enabled per stage."""

    SELECT_TEAM = "select_team"
    SET_FOCUS = "set_focus"
    SELECT_PLAN = "select_plan"
    ADD_DRILL = "add_drill"
    REMOVE_DRILL = "remove_drill"
    SET_DRILL_DURATION = "set_drill_duration"
    START = "start"
    NEXT_DRILL = "next_drill"
    PREVIOUS_DRILL = "previous_drill"
    TOGGLE_ATTENDANCE = "toggle_attendance"
    CYCLE_BEHAVIOR = "cycle_behavior"
    TAG_BEHAVIOR = "tag_behavior"
    NOTE_BEHAVIOR = "note_behavior"
    FINISH = "finish"
    SAVE_NOTES = "save_notes"
    RESET = "reset"


class CursorDirection(IntEnum):
    PREVIOUS = -1
    NEXT = 1


@dataclass(frozen=True)
class ActiveDrill:
    """The drill under the cursor during an active session."""

    index: int
    count: int
    plan_drill: PlanDrill
    drill: Optional[Drill]  # None if the drill left the catalog

    @property
    def position(self) -> int:
        return self.index + 1

    @property
    def duration(self) -> int:
        return self.plan_drill.duration

    @property
    def is_last(self) -> bool:
        return self.index >= self.count - 1


@dataclass(frozen=True)
class RosterRow:
    """One player's live tracking state."""

    player_id: str
    player: Optional[Player]
    attendance: Attendance
    behavior: BehaviorEntry

    @property
    def can_rate(self) -> bool:
        return self.attendance.present


class SessionManager:
    """Drives one coaching session at a time against an entity store."""

    def __init__(
        self,
        store: EntityStore,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the manager in the CREATE stage.

        Args:
            store: The entity store sessions are committed to
            clock: Returns the current instant (local aware time by default)
        """
        self._store = store
        self._clock = clock or (lambda: datetime.now().astimezone())
        self._clear()

    def _clear(self) -> None:
        self._stage = SessionStage.CREATE
        self._team_id: Optional[str] = None
        self._focus: str = SessionFocus.DRIBBLING.value
        self._selection = DrillSelection()
        self._source_plan_id: Optional[str] = None
        self._source_theme: Optional[str] = None
        self._session: Optional[Session] = None
        self._attendances: dict[str, Attendance] = {}
        self._behaviors: dict[str, BehaviorEntry] = {}
        self._cursor = 0
        self._notes_draft = ""

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def stage(self) -> SessionStage:
        return self._stage

    @property
    def selected_team_id(self) -> Optional[str]:
        return self._team_id

    @property
    def focus(self) -> str:
        return self._focus

    @property
    def source_plan_id(self) -> Optional[str]:
        return self._source_plan_id

    @property
    def drill_selection(self) -> list[PlanDrill]:
        return self._selection.entries()

    @property
    def cursor(self) -> int:
        if self._stage == SessionStage.ACTIVE:
            return min(self._cursor, max(self._drill_count() - 1, 0))
        return self._cursor

    @property
    def current_session(self) -> Optional[Session]:
        """The session being tracked or reviewed, as currently stored."""
        if self._session is None:
            return None
        if self._stage == SessionStage.SUMMARY:
            return self._store.get_session(self._session.id)
        return self._session

    @property
    def notes_draft(self) -> str:
        return self._notes_draft

    def _drill_count(self) -> int:
        if self._session is None:
            return 0
        plan = self._store.get_plan(self._session.training_plan_id)
        return len(plan.drills) if plan else 0

    def _sync_cursor(self) -> int:
        """Pull the cursor back inside the plan, which may have been shortened."""
        count = self._drill_count()
        self._cursor = min(self._cursor, max(count - 1, 0))
        return count

    def _saved_notes(self) -> str:
        session = self.current_session
        return (session.notes or "") if session else ""

    def can_start(self) -> bool:
        return (
            self._stage == SessionStage.CREATE
            and self._store.get_team(self._team_id) is not None
            and len(self._selection) > 0
        )

    def can_save_notes(self, text: Optional[str] = None) -> bool:
        """Whether saving ``text`` (or the current draft) would change the notes."""
        if self._stage != SessionStage.SUMMARY:
            return False
        candidate = self._notes_draft if text is None else text
        return candidate != self._saved_notes()

    def actions(self) -> frozenset[SessionAction]:
        """Actions available in the current state."""
        enabled = {SessionAction.RESET}
        if self._stage == SessionStage.CREATE:
            enabled |= {
                SessionAction.SELECT_TEAM,
                SessionAction.SET_FOCUS,
                SessionAction.SELECT_PLAN,
            }
            if self._team_id is not None:
                enabled.add(SessionAction.ADD_DRILL)
            if len(self._selection) > 0:
                enabled |= {SessionAction.REMOVE_DRILL, SessionAction.SET_DRILL_DURATION}
            if self.can_start():
                enabled.add(SessionAction.START)
        elif self._stage == SessionStage.ACTIVE:
            enabled |= {
                SessionAction.TOGGLE_ATTENDANCE,
                SessionAction.CYCLE_BEHAVIOR,
                SessionAction.TAG_BEHAVIOR,
                SessionAction.NOTE_BEHAVIOR,
                SessionAction.FINISH,
            }
            count = self._sync_cursor()
            if self._cursor > 0:
                enabled.add(SessionAction.PREVIOUS_DRILL)
            if self._cursor < count - 1:
                enabled.add(SessionAction.NEXT_DRILL)
        elif self.can_save_notes():
            enabled.add(SessionAction.SAVE_NOTES)
        return frozenset(enabled)

    def is_enabled(self, action: SessionAction) -> bool:
        return action in self.actions()

    # ------------------------------------------------------------------
    # CREATE stage
    # ------------------------------------------------------------------

    def select_team(self, team_id: str) -> bool:
        """Choose the team. Unknown teams are ignored."""
        if not self.is_enabled(SessionAction.SELECT_TEAM):
            return False
        if self._store.get_team(team_id) is None:
            return False
        self._team_id = team_id
        return True

    def set_focus(self, focus: str) -> bool:
        if not self.is_enabled(SessionAction.SET_FOCUS):
            return False
        self._focus = focus
        return True

    def select_plan(self, plan_id: str) -> bool:
        """Seed the drill list from an existing plan. The list stays editable."""
        if not self.is_enabled(SessionAction.SELECT_PLAN):
            return False
        plan = self._store.get_plan(plan_id)
        if plan is None:
            return False
        self._selection.load(plan)
        self._source_plan_id = plan.id
        self._source_theme = plan.theme
        return True

    def add_drill(self, drill_id: str) -> bool:
        """Append a catalog drill. Drills already in the list are ignored."""
        if not self.is_enabled(SessionAction.ADD_DRILL):
            return False
        return add_drill_to_selection(self._store, self._selection, drill_id)

    def remove_drill(self, drill_id: str) -> bool:
        if not self.is_enabled(SessionAction.REMOVE_DRILL):
            return False
        return self._selection.remove(drill_id)

    def set_drill_duration(self, drill_id: str, minutes: int) -> bool:
        """Override how long a selected drill runs in this session."""
        if not self.is_enabled(SessionAction.SET_DRILL_DURATION):
            return False
        return self._selection.set_duration(drill_id, minutes)

    def start_session(self) -> Optional[Session]:
        """
        Move to ACTIVE.

        Stores a plan built from the drill list, creates the session and
        snapshots the team roster: every player starts present and rated
        Green. The session itself is only stored by ``finish_session``.

        Returns:
            The new session, or None if starting is not enabled
        """
        if not self.is_enabled(SessionAction.START):
            return None

        started_at = self._clock()
        plan = self._store.add_plan(
            TrainingPlanDraft(
                name=f"Session Plan - {started_at.date().isoformat()}",
                theme=self._source_theme or GENERIC_THEME,
                drills=self._selection.entries(),
            )
        )
        session = Session(
            id=self._store.new_session_id(),
            team_id=self._team_id,
            training_plan_id=plan.id,
            date_time=started_at,
            type=SessionType.TRAINING,
            focus=self._focus,
        )

        roster = self._store.players_for_team(session.team_id)
        self._attendances = {
            p.id: Attendance(session_id=session.id, player_id=p.id, present=True) for p in roster
        }
        self._behaviors = {
            p.id: BehaviorEntry(session_id=session.id, player_id=p.id, status=BehaviorStatus.GREEN)
            for p in roster
        }
        self._session = session
        self._cursor = 0
        self._stage = SessionStage.ACTIVE
        logger.info(
            "session started %s for team %s (%d players, %d drills)",
            session.id,
            session.team_id,
            len(roster),
            len(plan.drills),
            extra={"ctx_session_id": session.id, "ctx_team_id": session.team_id},
        )
        return session

    # ------------------------------------------------------------------
    # ACTIVE stage
    # ------------------------------------------------------------------

    def current_drill(self) -> Optional[ActiveDrill]:
        """The drill under the cursor, or None outside ACTIVE or if the plan is gone."""
        if self._stage != SessionStage.ACTIVE or self._session is None:
            return None
        plan = self._store.get_plan(self._session.training_plan_id)
        if plan is None or not plan.drills:
            return None
        index = min(self._cursor, len(plan.drills) - 1)
        plan_drill = plan.drills[index]
        return ActiveDrill(
            index=index,
            count=len(plan.drills),
            plan_drill=plan_drill,
            drill=self._store.get_drill(plan_drill.drill_id),
        )

    def advance_cursor(self, direction: Union[CursorDirection, int]) -> int:
        """
        Move to the next or previous drill. Moves past either end are ignored.

        Returns:
            The cursor index after the move
        """
        step = CursorDirection(1 if direction > 0 else -1)
        action = SessionAction.NEXT_DRILL if step > 0 else SessionAction.PREVIOUS_DRILL
        if self.is_enabled(action):
            self._cursor += int(step)
        return self._cursor

    def roster(self) -> list[RosterRow]:
        """Tracking rows for the roster snapshot, in roster order."""
        return [
            RosterRow(
                player_id=player_id,
                player=self._store.get_player(player_id),
                attendance=attendance.model_copy(),
                behavior=self._behaviors[player_id].model_copy(deep=True),
            )
            for player_id, attendance in self._attendances.items()
        ]

    def toggle_attendance(self, player_id: str) -> Optional[bool]:
        """
        Flip a player's attendance. Their behavior rating is left as is.

        Returns:
            The new ``present`` value, or None if nothing changed
        """
        if not self.is_enabled(SessionAction.TOGGLE_ATTENDANCE):
            return None
        attendance = self._attendances.get(player_id)
        if attendance is None:
            return None
        present = not attendance.present
        self._attendances[player_id] = attendance.model_copy(update={"present": present})
        return present

    def _rateable(self, action: SessionAction, player_id: str) -> Optional[BehaviorEntry]:
        if not self.is_enabled(action):
            return None
        attendance = self._attendances.get(player_id)
        if attendance is None or not attendance.present:
            return None
        return self._behaviors[player_id]

    def cycle_behavior(self, player_id: str) -> Optional[BehaviorStatus]:
        """
        Advance a present player's status one step: Green, Yellow, Red, None.

        Returns:
            The new status, or None if nothing changed
        """
        behavior = self._rateable(SessionAction.CYCLE_BEHAVIOR, player_id)
        if behavior is None:
            return None
        status = next_behavior_status(behavior.status)
        self._behaviors[player_id] = behavior.model_copy(update={"status": status})
        return status

    def toggle_behavior_tag(self, player_id: str, tag: BehaviorTag) -> Optional[list[BehaviorTag]]:
        """Add or remove a behavior tag for a present player."""
        behavior = self._rateable(SessionAction.TAG_BEHAVIOR, player_id)
        if behavior is None:
            return None
        tag = BehaviorTag(tag)
        tags = [t for t in behavior.tags if t != tag]
        if len(tags) == len(behavior.tags):
            tags.append(tag)
        self._behaviors[player_id] = behavior.model_copy(update={"tags": tags})
        return list(tags)

    def set_behavior_note(self, player_id: str, note: Optional[str]) -> bool:
        """Attach a note to a present player's behavior entry. Empty text clears it."""
        behavior = self._rateable(SessionAction.NOTE_BEHAVIOR, player_id)
        if behavior is None:
            return False
        self._behaviors[player_id] = behavior.model_copy(update={"note": note or None})
        return True

    def finish_session(self) -> Optional[Session]:
        """
        Commit the session, attendance and behavior rows and move to SUMMARY.

        Returns:
            The stored session, or None if finishing is not enabled
        """
        if not self.is_enabled(SessionAction.FINISH) or self._session is None:
            return None
        stored = self._store.record_session(
            self._session,
            list(self._attendances.values()),
            list(self._behaviors.values()),
        )
        self._stage = SessionStage.SUMMARY
        self._notes_draft = stored.notes or ""
        logger.info(
            "session finished %s",
            stored.id,
            extra={"ctx_session_id": stored.id, "ctx_team_id": stored.team_id},
        )
        return stored

    # ------------------------------------------------------------------
    # SUMMARY stage
    # ------------------------------------------------------------------

    def summary(self) -> Optional[SessionSummary]:
        """Attendance and behavior summary of the finished session."""
        session = self.current_session if self._stage == SessionStage.SUMMARY else None
        if session is None:
            return None
        rows = build_summary_rows(
            session.id,
            self._store.attendances_for_session(session.id),
            self._store.behaviors_for_session(session.id),
            self._store.get_player,
        )
        return SessionSummary(session=session, rows=rows)

    def edit_notes(self, text: str) -> bool:
        """Update the unsaved notes text."""
        if self._stage != SessionStage.SUMMARY:
            return False
        self._notes_draft = text
        return True

    def save_notes(self, text: Optional[str] = None) -> bool:
        """
        Store the session notes.

        Args:
            text: New notes text; the current draft is saved when omitted

        Returns:
            True if the stored notes changed
        """
        if text is not None:
            self.edit_notes(text)
        if not self.is_enabled(SessionAction.SAVE_NOTES):
            return False
        return self._store.update_session_notes(self._session.id, self._notes_draft)

    def reset(self) -> None:
        """Discard all in-progress state and return to CREATE with no team."""
        if self._session is not None:
            logger.info(
                "session reset from %s (%s)",
                self._stage.value,
                self._session.id,
                extra={"ctx_session_id": self._session.id, "ctx_stage": self._stage.value},
            )
        self._clear()
