"""Summary view of a single session's attendance and behavior."""

from dataclasses import dataclass
from typing import Callable, Optional

from coach_clipboard.models import (
    Attendance,
    BehaviorEntry,
    BehaviorStatus,
    BehaviorTag,
    Player,
    Session,
)

ABSENT_LABEL = "Absent"


@dataclass(frozen=True)
class SummaryRow:
    """One player's line in a session summary."""

    player_id: str
    player_name: Optional[str]  # None when the player has since been removed
    present: bool
    status: Optional[BehaviorStatus]  # None when absent
    tags: tuple[BehaviorTag, ...] = ()
    note: Optional[str] = None

    @property
    def label(self) -> str:
        if not self.present:
            return ABSENT_LABEL
        return (self.status or BehaviorStatus.NONE).value


@dataclass(frozen=True)
class SessionSummary:
    """Attendance and behavior totals for one session."""

    session: Session
    rows: tuple[SummaryRow, ...]

    @property
    def total_count(self) -> int:
        return len(self.rows)

    @property
    def present_count(self) -> int:
        return sum(1 for row in self.rows if row.present)

    @property
    def attendance_label(self) -> str:
        return f"Attendance: {self.present_count}/{self.total_count}"

    @property
    def notes(self) -> str:
        return self.session.notes or ""

    def status_count(self, status: BehaviorStatus) -> int:
        """Number of attending players rated ``status``."""
        return sum(1 for row in self.rows if row.present and row.status == status)


def build_summary_rows(
    session_id: str,
    attendances: list[Attendance],
    behaviors: list[BehaviorEntry],
    find_player: Callable[[str], Optional[Player]],
) -> tuple[SummaryRow, ...]:
    """
    Join attendance and behavior rows of one session.

    Behavior of absent players is suppressed: behavior rows are written for
    the whole roster at session start, so an absent player still has one.
    """
    behavior_by_player = {b.player_id: b for b in behaviors if b.session_id == session_id}
    rows: list[SummaryRow] = []
    for attendance in attendances:
        if attendance.session_id != session_id:
            continue
        player = find_player(attendance.player_id)
        behavior = behavior_by_player.get(attendance.player_id)
        if attendance.present and behavior is not None:
            rows.append(
                SummaryRow(
                    player_id=attendance.player_id,
                    player_name=player.name if player else None,
                    present=True,
                    status=behavior.status,
                    tags=tuple(behavior.tags),
                    note=behavior.note,
                )
            )
        else:
            rows.append(
                SummaryRow(
                    player_id=attendance.player_id,
                    player_name=player.name if player else None,
                    present=attendance.present,
                    status=None,
                )
            )
    return tuple(rows)
