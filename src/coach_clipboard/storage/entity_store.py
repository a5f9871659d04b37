"""In-process entity store: the single source of truth for coaching data."""

import logging
from typing import Any, Optional, TypeVar

from pydantic import BaseModel

from coach_clipboard.errors import EntityNotFoundError, StoreError
from coach_clipboard.ids import IdGenerator, SequentialIdGenerator, UuidIdGenerator
from coach_clipboard.models import (
    Attendance,
    BehaviorEntry,
    Create,
    Drill,
    DrillDraft,
    Player,
    PlayerDraft,
    Session,
    Team,
    TeamDraft,
    TrainingPlan,
    TrainingPlanDraft,
    Update,
)
from coach_clipboard.models.commands import SaveCommand

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1

EntityT = TypeVar("EntityT", bound=BaseModel)
RowKey = tuple[str, str]  # (session_id, player_id)


class EntityStore:
    """
    Normalized collections of teams, players, drills, plans and sessions.

    All writes go through the named commands below. Lookups return None on a
    miss. Team and session indexes are rebuilt lazily after every write.
    """

    def __init__(self, id_generator: Optional[IdGenerator] = None):
        """
        Initialize an empty store.

        Args:
            id_generator: Source of new entity ids (random UUIDs by default)
        """
        self._new_id: IdGenerator = id_generator or UuidIdGenerator()
        self._teams: dict[str, Team] = {}
        self._players: dict[str, Player] = {}
        self._drills: dict[str, Drill] = {}
        self._plans: dict[str, TrainingPlan] = {}
        self._sessions: dict[str, Session] = {}
        self._attendances: dict[RowKey, Attendance] = {}
        self._behaviors: dict[RowKey, BehaviorEntry] = {}
        self._indexes: Optional[dict[str, dict[str, list[str]]]] = None
        self.revision = 0

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _changed(self) -> None:
        self.revision += 1
        self._indexes = None

    def _index(self, name: str) -> dict[str, list[str]]:
        if self._indexes is None:
            players_by_team: dict[str, list[str]] = {}
            for player in self._players.values():
                players_by_team.setdefault(player.team_id, []).append(player.id)
            sessions_by_team: dict[str, list[str]] = {}
            for session in self._sessions.values():
                sessions_by_team.setdefault(session.team_id, []).append(session.id)
            rows_by_session: dict[str, list[str]] = {}
            for session_id, player_id in self._attendances:
                rows_by_session.setdefault(session_id, []).append(player_id)
            self._indexes = {
                "players_by_team": players_by_team,
                "sessions_by_team": sessions_by_team,
                "rows_by_session": rows_by_session,
            }
        return self._indexes[name]

    def _save(
        self,
        kind: str,
        collection: dict[str, EntityT],
        entity_cls: type[EntityT],
        command: SaveCommand,
    ) -> EntityT:
        if isinstance(command, Create):
            entity = entity_cls.model_validate(
                {**command.draft.model_dump(), "id": self._new_id(kind)}
            )
            action = "created"
        elif isinstance(command, Update):
            entity_id = command.entity.id
            if entity_id not in collection:
                raise EntityNotFoundError(kind, entity_id)
            entity = entity_cls.model_validate(command.entity.model_dump())
            action = "updated"
        else:
            raise TypeError(f"Expected Create or Update, got {type(command).__name__}")

        collection[entity.id] = entity
        self._changed()
        logger.info("%s %s %s", kind, action, entity.id)
        return entity

    # ------------------------------------------------------------------
    # Teams and players
    # ------------------------------------------------------------------

    def save_team(self, command: SaveCommand) -> Team:
        """Create or update a team."""
        return self._save("team", self._teams, Team, command)

    def add_team(self, draft: TeamDraft) -> Team:
        return self.save_team(Create(draft))

    def update_team(self, team: Team) -> Team:
        return self.save_team(Update(team))

    def save_player(self, command: SaveCommand) -> Player:
        """Create or update a player. ``team_id`` is not checked."""
        return self._save("player", self._players, Player, command)

    def add_player(self, draft: PlayerDraft) -> Player:
        return self.save_player(Create(draft))

    def update_player(self, player: Player) -> Player:
        return self.save_player(Update(player))

    def remove_player(self, player_id: str) -> bool:
        """
        Remove a player.

        Historical attendance and behavior rows for the player are kept.

        Returns:
            True if the player existed
        """
        if self._players.pop(player_id, None) is None:
            return False
        self._changed()
        logger.info("player removed %s", player_id)
        return True

    def get_team(self, team_id: Optional[str]) -> Optional[Team]:
        return self._teams.get(team_id) if team_id else None

    def get_player(self, player_id: Optional[str]) -> Optional[Player]:
        return self._players.get(player_id) if player_id else None

    def teams(self) -> list[Team]:
        return list(self._teams.values())

    def players(self) -> list[Player]:
        return list(self._players.values())

    def players_for_team(self, team_id: str) -> list[Player]:
        """Current roster of a team, in the order players were added."""
        return [self._players[pid] for pid in self._index("players_by_team").get(team_id, [])]

    # ------------------------------------------------------------------
    # Drills and plans
    # ------------------------------------------------------------------

    def add_drill(self, draft: DrillDraft) -> Drill:
        """Add a drill to the catalog. Drills are never edited in place."""
        return self._save("drill", self._drills, Drill, Create(draft))

    def get_drill(self, drill_id: Optional[str]) -> Optional[Drill]:
        return self._drills.get(drill_id) if drill_id else None

    def drills(self) -> list[Drill]:
        return list(self._drills.values())

    def save_plan(self, command: SaveCommand) -> TrainingPlan:
        """Create or update a training plan."""
        return self._save("plan", self._plans, TrainingPlan, command)

    def add_plan(self, draft: TrainingPlanDraft) -> TrainingPlan:
        return self.save_plan(Create(draft))

    def update_plan(self, plan: TrainingPlan) -> TrainingPlan:
        return self.save_plan(Update(plan))

    def get_plan(self, plan_id: Optional[str]) -> Optional[TrainingPlan]:
        return self._plans.get(plan_id) if plan_id else None

    def plans(self) -> list[TrainingPlan]:
        return list(self._plans.values())

    # ------------------------------------------------------------------
    # Sessions
    # ------------------------------------------------------------------

    def new_session_id(self) -> str:
        """Reserve an id for a session that will be recorded later."""
        return self._new_id("session")

    def record_session(
        self,
        session: Session,
        attendances: list[Attendance],
        behaviors: list[BehaviorEntry],
    ) -> Session:
        """
        Append a finished session with its attendance and behavior rows.

        The three collections are written together or not at all.

        Args:
            session: The session to store
            attendances: One row per player in the roster snapshot
            behaviors: One row per player in the roster snapshot

        Returns:
            The stored session

        Raises:
            StoreError: If the session already exists or the rows do not
                cover the same players of this session
        """
        if session.id in self._sessions:
            raise StoreError(f"Session already recorded: {session.id}")

        attendance_rows = {(a.session_id, a.player_id): a for a in attendances}
        behavior_rows = {(b.session_id, b.player_id): b for b in behaviors}
        if len(attendance_rows) != len(attendances) or len(behavior_rows) != len(behaviors):
            raise StoreError(f"Duplicate player rows for session {session.id}")
        if set(attendance_rows) != set(behavior_rows):
            raise StoreError(
                f"Attendance and behavior rows cover different players for session {session.id}"
            )
        if any(session_id != session.id for session_id, _ in attendance_rows):
            raise StoreError(f"Rows reference a different session than {session.id}")

        self._sessions[session.id] = session.model_copy(deep=True)
        for key, row in attendance_rows.items():
            self._attendances[key] = row.model_copy(deep=True)
        for key, row in behavior_rows.items():
            self._behaviors[key] = row.model_copy(deep=True)
        self._changed()
        logger.info(
            "session recorded %s (team %s, %d players)",
            session.id,
            session.team_id,
            len(attendance_rows),
            extra={"ctx_session_id": session.id, "ctx_team_id": session.team_id},
        )
        return self._sessions[session.id]

    def update_session_notes(self, session_id: str, notes: str) -> bool:
        """
        Set the coach's notes on a recorded session.

        Returns:
            True if the notes changed, False if the session is missing or the
            notes are identical
        """
        session = self._sessions.get(session_id)
        if session is None or session.notes == notes:
            return False
        self._sessions[session_id] = session.model_copy(update={"notes": notes})
        self._changed()
        logger.info("session notes updated %s", session_id)
        return True

    def get_session(self, session_id: Optional[str]) -> Optional[Session]:
        return self._sessions.get(session_id) if session_id else None

    def sessions(self) -> list[Session]:
        return list(self._sessions.values())

    def sessions_for_team(self, team_id: str) -> list[Session]:
        """Recorded sessions of a team, in the order they were recorded."""
        return [self._sessions[sid] for sid in self._index("sessions_by_team").get(team_id, [])]

    def get_attendance(self, session_id: str, player_id: str) -> Optional[Attendance]:
        return self._attendances.get((session_id, player_id))

    def get_behavior(self, session_id: str, player_id: str) -> Optional[BehaviorEntry]:
        return self._behaviors.get((session_id, player_id))

    def attendances_for_session(self, session_id: str) -> list[Attendance]:
        player_ids = self._index("rows_by_session").get(session_id, [])
        return [self._attendances[(session_id, pid)] for pid in player_ids]

    def behaviors_for_session(self, session_id: str) -> list[BehaviorEntry]:
        player_ids = self._index("rows_by_session").get(session_id, [])
        return [
            self._behaviors[(session_id, pid)]
            for pid in player_ids
            if (session_id, pid) in self._behaviors
        ]

    # ------------------------------------------------------------------
    # Snapshots
    # ------------------------------------------------------------------

    def to_snapshot(self) -> dict[str, Any]:
        """Serialize the whole store to JSON-compatible data."""
        return {
            "version": SNAPSHOT_VERSION,
            "teams": [t.model_dump(mode="json") for t in self._teams.values()],
            "players": [p.model_dump(mode="json") for p in self._players.values()],
            "drills": [d.model_dump(mode="json") for d in self._drills.values()],
            "training_plans": [p.model_dump(mode="json") for p in self._plans.values()],
            "sessions": [s.model_dump(mode="json") for s in self._sessions.values()],
            "attendances": [a.model_dump(mode="json") for a in self._attendances.values()],
            "behavior_entries": [b.model_dump(mode="json") for b in self._behaviors.values()],
        }

    @classmethod
    def from_snapshot(
        cls, data: dict[str, Any], id_generator: Optional[IdGenerator] = None
    ) -> "EntityStore":
        """
        Rebuild a store from ``to_snapshot`` output.

        Args:
            data: Snapshot data
            id_generator: Id generator for entities created afterwards

        Returns:
            A populated store

        Raises:
            StoreError: If the snapshot version is not supported
        """
        version = data.get("version", SNAPSHOT_VERSION)
        if version != SNAPSHOT_VERSION:
            raise StoreError(f"Unsupported snapshot version: {version}")

        store = cls(id_generator)
        for raw in data.get("teams", []):
            team = Team.model_validate(raw)
            store._teams[team.id] = team
        for raw in data.get("players", []):
            player = Player.model_validate(raw)
            store._players[player.id] = player
        for raw in data.get("drills", []):
            drill = Drill.model_validate(raw)
            store._drills[drill.id] = drill
        for raw in data.get("training_plans", []):
            plan = TrainingPlan.model_validate(raw)
            store._plans[plan.id] = plan
        for raw in data.get("sessions", []):
            session = Session.model_validate(raw)
            store._sessions[session.id] = session
        for raw in data.get("attendances", []):
            attendance = Attendance.model_validate(raw)
            store._attendances[(attendance.session_id, attendance.player_id)] = attendance
        for raw in data.get("behavior_entries", []):
            behavior = BehaviorEntry.model_validate(raw)
            store._behaviors[(behavior.session_id, behavior.player_id)] = behavior

        if isinstance(store._new_id, SequentialIdGenerator):
            store._new_id.skip_past(
                [*store._teams, *store._players, *store._drills, *store._plans, *store._sessions]
            )
        store._changed()
        return store
