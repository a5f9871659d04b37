"""Shared fixtures."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

import pytest

from coach_clipboard.ids import SequentialIdGenerator
from coach_clipboard.models import (
    Attendance,
    BehaviorEntry,
    BehaviorStatus,
    Drill,
    DrillCategory,
    DrillDraft,
    PlanDrill,
    Player,
    PlayerDraft,
    Session,
    Team,
    TeamDraft,
    TrainingPlan,
    TrainingPlanDraft,
)
from coach_clipboard.storage.entity_store import EntityStore

SESSION_START = datetime(2024, 3, 9, 17, 30)


class FakeMCP:
    """Collects functions registered with ``@mcp.tool()``."""

    def __init__(self):
        self.tools = {}

    def tool(self):
        def decorator(fn):
            self.tools[fn.__name__] = fn
            return fn

        return decorator


@dataclass
class Club:
    store: EntityStore
    lions: Team
    tigers: Team
    sam: Player
    mia: Player
    leo: Player
    ava: Player
    gates: Drill
    red_light: Drill
    one_v_one: Drill
    fun_plan: TrainingPlan


@pytest.fixture
def store() -> EntityStore:
    return EntityStore(SequentialIdGenerator())


@pytest.fixture
def club(store: EntityStore) -> Club:
    lions = store.add_team(TeamDraft(name="U6 Lions", age_group="U5-U6", coach="Coach Bob"))
    tigers = store.add_team(TeamDraft(name="U8 Tigers", age_group="U7-U8", coach="Coach Alice"))
    sam = store.add_player(PlayerDraft(name="Sam Jones", team_id=lions.id, dob=date(2018, 5, 10)))
    mia = store.add_player(PlayerDraft(name="Mia Wong", team_id=lions.id, dob=date(2018, 8, 22)))
    leo = store.add_player(PlayerDraft(name="Leo Smith", team_id=lions.id, dob=date(2018, 3, 15)))
    ava = store.add_player(PlayerDraft(name="Ava Chen", team_id=tigers.id, dob=date(2016, 6, 1)))
    gates = store.add_drill(
        DrillDraft(
            name="Dribbling Gates",
            age_groups=["U5-U6", "U7-U8"],
            category=DrillCategory.TECHNICAL,
            duration=10,
            equipment=["Cones", "Balls"],
            tags=["dribbling", "warm-up"],
        )
    )
    red_light = store.add_drill(
        DrillDraft(
            name="Red Light, Green Light",
            age_groups=["U5-U6"],
            category=DrillCategory.SOCIAL,
            duration=5,
            equipment=["Balls"],
            tags=["listening", "fun"],
        )
    )
    one_v_one = store.add_drill(
        DrillDraft(
            name="1v1 to Goal",
            age_groups=["U7-U8"],
            category=DrillCategory.TECHNICAL,
            duration=15,
            equipment=["Balls", "Small Goals"],
            tags=["1v1", "shooting"],
        )
    )
    fun_plan = store.add_plan(
        TrainingPlanDraft(
            name="U6 Fun & Dribbling",
            theme="Ball mastery & listening",
            drills=[
                PlanDrill(drill_id=red_light.id, duration=5),
                PlanDrill(drill_id=gates.id, duration=12),
            ],
        )
    )
    return Club(store, lions, tigers, sam, mia, leo, ava, gates, red_light, one_v_one, fun_plan)


def record_session(
    store: EntityStore,
    team: Team,
    when: datetime,
    outcomes: dict[str, tuple[bool, BehaviorStatus]],
    plan_id: str = "plan_x",
    notes: Optional[str] = None,
) -> Session:
    """Store a finished session with the given (present, status) per player id."""
    session = Session(
        id=store.new_session_id(),
        team_id=team.id,
        training_plan_id=plan_id,
        date_time=when,
        focus="Dribbling",
        notes=notes,
    )
    attendances = [
        Attendance(session_id=session.id, player_id=pid, present=present)
        for pid, (present, _) in outcomes.items()
    ]
    behaviors = [
        BehaviorEntry(session_id=session.id, player_id=pid, status=status)
        for pid, (_, status) in outcomes.items()
    ]
    return store.record_session(session, attendances, behaviors)
