"""Read-only history views over recorded sessions."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from coach_clipboard.models import BehaviorStatus, BehaviorTag, Session
from coach_clipboard.services.summary import (
    ABSENT_LABEL,
    SessionSummary,
    build_summary_rows,
)
from coach_clipboard.storage.entity_store import EntityStore


@dataclass(frozen=True)
class PlayerSessionRecord:
    """A player's outcome in one of their team's sessions."""

    session: Session
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
class TeamSessionRecord:
    """A team session with attendance and behavior tallies."""

    session: Session
    present_count: int
    total_count: int
    green: int
    yellow: int
    red: int


def session_local_date(session: Session) -> date:
    """Calendar date of a session in local time. Naive datetimes are taken as local."""
    moment = session.date_time
    if moment.tzinfo is not None:
        moment = moment.astimezone()
    return moment.date()


def _newest_first(sessions: list[Session]) -> list[Session]:
    return sorted(sessions, key=lambda s: s.date_time.timestamp(), reverse=True)


def player_history(store: EntityStore, player_id: str) -> list[PlayerSessionRecord]:
    """
    Sessions of a player's team, newest first, with the player's outcome.

    A missing or absent attendance row hides any behavior row for that
    session.

    Args:
        store: The entity store
        player_id: Player to look up

    Returns:
        One record per team session; empty if the player is unknown
    """
    player = store.get_player(player_id)
    if player is None:
        return []

    records: list[PlayerSessionRecord] = []
    for session in _newest_first(store.sessions_for_team(player.team_id)):
        attendance = store.get_attendance(session.id, player.id)
        behavior = store.get_behavior(session.id, player.id)
        if attendance is None or not attendance.present:
            records.append(PlayerSessionRecord(session=session, present=False, status=None))
        elif behavior is None:
            records.append(PlayerSessionRecord(session=session, present=True, status=None))
        else:
            records.append(
                PlayerSessionRecord(
                    session=session,
                    present=True,
                    status=behavior.status,
                    tags=tuple(behavior.tags),
                    note=behavior.note,
                )
            )
    return records


def team_session_history(
    store: EntityStore,
    team_id: str,
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> list[TeamSessionRecord]:
    """
    Sessions of a team within an inclusive date range, newest first.

    Args:
        store: The entity store
        team_id: Team to look up
        start: First calendar date to include (unbounded when None)
        end: Last calendar date to include (unbounded when None)

    Returns:
        Sessions with present/total counts and Green/Yellow/Red tallies of
        attending players
    """
    records: list[TeamSessionRecord] = []
    for session in _newest_first(store.sessions_for_team(team_id)):
        day = session_local_date(session)
        if start is not None and day < start:
            continue
        if end is not None and day > end:
            continue
        summary = session_summary(store, session.id)
        records.append(
            TeamSessionRecord(
                session=session,
                present_count=summary.present_count,
                total_count=summary.total_count,
                green=summary.status_count(BehaviorStatus.GREEN),
                yellow=summary.status_count(BehaviorStatus.YELLOW),
                red=summary.status_count(BehaviorStatus.RED),
            )
        )
    return records


def session_summary(store: EntityStore, session_id: str) -> Optional[SessionSummary]:
    """Summary view of a recorded session, or None if it is unknown."""
    session = store.get_session(session_id)
    if session is None:
        return None
    rows = build_summary_rows(
        session.id,
        store.attendances_for_session(session.id),
        store.behaviors_for_session(session.id),
        store.get_player,
    )
    return SessionSummary(session=session, rows=rows)


def _coach_sessions(store: EntityStore, coach: str) -> list[Session]:
    team_ids = {team.id for team in store.teams() if team.coach == coach}
    return [s for s in store.sessions() if s.team_id in team_ids]


def _as_aware(moment: datetime) -> datetime:
    return moment if moment.tzinfo is not None else moment.astimezone()


def upcoming_sessions(store: EntityStore, coach: str, now: datetime) -> list[Session]:
    """Sessions after ``now`` for teams coached by ``coach``, soonest first."""
    current = _as_aware(now)
    upcoming = [s for s in _coach_sessions(store, coach) if _as_aware(s.date_time) > current]
    return sorted(upcoming, key=lambda s: _as_aware(s.date_time))


def recent_sessions(
    store: EntityStore, coach: str, now: datetime, limit: int = 3
) -> list[Session]:
    """The latest sessions at or before ``now`` for teams coached by ``coach``."""
    current = _as_aware(now)
    past = [s for s in _coach_sessions(store, coach) if _as_aware(s.date_time) <= current]
    return sorted(past, key=lambda s: _as_aware(s.date_time), reverse=True)[:limit]
