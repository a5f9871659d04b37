"""Tests for drill selections and training plan helpers."""

from __future__ import annotations

from coach_clipboard.models import PlanDrill, TrainingPlan
from coach_clipboard.services.catalog import (
    DrillSelection,
    add_drill_to_selection,
    plan_total_duration,
    resolve_plan_drills,
    save_plan_from_selection,
)


class TestDrillSelection:
    def test_add_uses_drill_duration(self, club):
        selection = DrillSelection()
        assert selection.add(club.gates)
        assert selection.entries() == [PlanDrill(drill_id=club.gates.id, duration=10)]

    def test_add_is_idempotent(self, club):
        selection = DrillSelection()
        selection.add(club.gates)
        assert not selection.add(club.gates)
        assert len(selection) == 1

    def test_order_is_kept(self, club):
        selection = DrillSelection()
        for drill in (club.one_v_one, club.gates, club.red_light):
            selection.add(drill)
        assert [e.drill_id for e in selection] == [club.one_v_one.id, club.gates.id, club.red_light.id]

    def test_remove(self, club):
        selection = DrillSelection()
        selection.add(club.gates)
        assert selection.remove(club.gates.id)
        assert not selection.remove(club.gates.id)
        assert len(selection) == 0

    def test_duration_override(self, club):
        selection = DrillSelection()
        selection.add(club.gates)
        assert selection.set_duration(club.gates.id, 20)
        assert not selection.set_duration(club.gates.id, 0)
        assert not selection.set_duration("unknown", 5)
        assert selection.total_duration() == 20
        assert club.store.get_drill(club.gates.id).duration == 10

    def test_load_copies_plan(self, club):
        selection = DrillSelection()
        selection.add(club.one_v_one)
        selection.load(club.fun_plan)
        assert [e.drill_id for e in selection] == [club.red_light.id, club.gates.id]
        selection.set_duration(club.gates.id, 30)
        selection.add(club.one_v_one)
        plan = club.store.get_plan(club.fun_plan.id)
        assert [d.duration for d in plan.drills] == [5, 12]
        assert len(plan.drills) == 2

    def test_entries_are_copies(self, club):
        selection = DrillSelection()
        selection.add(club.gates)
        selection.entries()[0].duration = 99
        assert selection.total_duration() == 10


def test_add_unknown_drill_is_ignored(club):
    selection = DrillSelection()
    assert not add_drill_to_selection(club.store, selection, "drill_missing")
    assert add_drill_to_selection(club.store, selection, club.gates.id)
    assert len(selection) == 1


def test_save_plan_creates_then_updates(club):
    selection = DrillSelection()
    selection.add(club.gates)
    plan = save_plan_from_selection(club.store, "Warm-ups", "Touch", selection)
    assert club.store.get_plan(plan.id).drills == [PlanDrill(drill_id=club.gates.id, duration=10)]

    selection.add(club.red_light)
    updated = save_plan_from_selection(club.store, "Warm-ups v2", "Touch", selection, plan.id)
    assert updated.id == plan.id
    assert club.store.get_plan(plan.id).name == "Warm-ups v2"
    assert len(club.store.get_plan(plan.id).drills) == 2


def test_resolve_prefers_plan_duration_and_skips_missing(club):
    plan = TrainingPlan(
        id="plan_tmp",
        name="Mixed",
        theme="Any",
        drills=[
            PlanDrill(drill_id=club.gates.id, duration=25),
            PlanDrill(drill_id="drill_gone", duration=5),
            PlanDrill(drill_id=club.red_light.id, duration=5),
        ],
    )
    resolved = resolve_plan_drills(club.store, plan)
    assert [r.drill.id for r in resolved] == [club.gates.id, club.red_light.id]
    assert [r.position for r in resolved] == [1, 3]
    assert resolved[0].duration == 25
    assert resolved[0].drill.duration == 10


def test_plan_total_duration(club):
    assert plan_total_duration(club.fun_plan) == 17
