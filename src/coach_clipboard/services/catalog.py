"""Drill and training plan catalog operations."""

from dataclasses import dataclass
from typing import Iterator, Optional

from coach_clipboard.models import (
    Create,
    Drill,
    PlanDrill,
    TrainingPlan,
    TrainingPlanDraft,
    Update,
)
from coach_clipboard.storage.entity_store import EntityStore


class DrillSelection:
    """
    An ordered, editable list of plan drills.

    Used by the plan editor and by session setup. Each drill appears at most
    once; its duration starts at the drill's own duration and can be
    overridden.
    """

    def __init__(self, entries: Optional[list[PlanDrill]] = None):
        self._entries: list[PlanDrill] = []
        for entry in entries or []:
            if not self.contains(entry.drill_id):
                self._entries.append(entry.model_copy())

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[PlanDrill]:
        return iter(self.entries())

    def contains(self, drill_id: str) -> bool:
        return any(entry.drill_id == drill_id for entry in self._entries)

    def entries(self) -> list[PlanDrill]:
        """Copies of the entries, in playback order."""
        return [entry.model_copy() for entry in self._entries]

    def add(self, drill: Drill) -> bool:
        """Append a drill. Returns False if it is already selected."""
        if self.contains(drill.id):
            return False
        self._entries.append(PlanDrill(drill_id=drill.id, duration=drill.duration))
        return True

    def remove(self, drill_id: str) -> bool:
        before = len(self._entries)
        self._entries = [entry for entry in self._entries if entry.drill_id != drill_id]
        return len(self._entries) != before

    def set_duration(self, drill_id: str, minutes: int) -> bool:
        """Override a selected drill's duration. Non-positive values are ignored."""
        if minutes <= 0:
            return False
        for index, entry in enumerate(self._entries):
            if entry.drill_id == drill_id:
                self._entries[index] = entry.model_copy(update={"duration": minutes})
                return True
        return False

    def load(self, plan: TrainingPlan) -> None:
        """Replace the selection with a copy of a plan's drills."""
        self.clear()
        for entry in plan.drills:
            if not self.contains(entry.drill_id):
                self._entries.append(entry.model_copy())

    def clear(self) -> None:
        self._entries = []

    def total_duration(self) -> int:
        return sum(entry.duration for entry in self._entries)


@dataclass(frozen=True)
class ResolvedPlanDrill:
    """A plan drill joined with its catalog drill."""

    position: int  # 1-based playback position
    plan_drill: PlanDrill
    drill: Drill

    @property
    def duration(self) -> int:
        # The plan's duration wins over the drill's default
        return self.plan_drill.duration


def add_drill_to_selection(store: EntityStore, selection: DrillSelection, drill_id: str) -> bool:
    """Add a catalog drill to a selection. Unknown drills are ignored."""
    drill = store.get_drill(drill_id)
    if drill is None:
        return False
    return selection.add(drill)


def save_plan_from_selection(
    store: EntityStore,
    name: str,
    theme: str,
    selection: DrillSelection,
    plan_id: Optional[str] = None,
) -> TrainingPlan:
    """
    Create a plan from a selection, or update an existing one.

    Args:
        store: The entity store
        name: Plan name
        theme: Plan theme
        selection: Drills in playback order
        plan_id: Id of the plan to update; a new plan is created when None

    Returns:
        The stored plan
    """
    if plan_id is None:
        draft = TrainingPlanDraft(name=name, theme=theme, drills=selection.entries())
        return store.save_plan(Create(draft))
    plan = TrainingPlan(id=plan_id, name=name, theme=theme, drills=selection.entries())
    return store.save_plan(Update(plan))


def resolve_plan_drills(store: EntityStore, plan: TrainingPlan) -> list[ResolvedPlanDrill]:
    """Join a plan's drills with the catalog, skipping drills that no longer exist."""
    resolved: list[ResolvedPlanDrill] = []
    for position, plan_drill in enumerate(plan.drills, start=1):
        drill = store.get_drill(plan_drill.drill_id)
        if drill is not None:
            resolved.append(ResolvedPlanDrill(position, plan_drill, drill))
    return resolved


def plan_total_duration(plan: TrainingPlan) -> int:
    """Total minutes of a plan, using the plan's per-drill durations."""
    return sum(entry.duration for entry in plan.drills)
