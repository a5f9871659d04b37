"""Tests for the entity store."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from coach_clipboard.errors import EntityNotFoundError, StoreError
from coach_clipboard.ids import SequentialIdGenerator, UuidIdGenerator, make_id_generator
from coach_clipboard.models import (
    Attendance,
    BehaviorEntry,
    BehaviorStatus,
    Create,
    Player,
    PlayerDraft,
    Session,
    Team,
    TeamDraft,
    Update,
)
from coach_clipboard.storage.entity_store import EntityStore
from tests.conftest import record_session


class TestIds:
    def test_uuid_ids_are_unique_and_prefixed(self):
        new_id = UuidIdGenerator()
        ids = {new_id("team") for _ in range(100)}
        assert len(ids) == 100
        assert all(i.startswith("team_") for i in ids)

    def test_sequential_ids_never_repeat(self):
        new_id = SequentialIdGenerator()
        assert new_id("team") == "team_1"
        assert new_id("player") == "player_2"

    def test_skip_past_existing_ids(self):
        new_id = SequentialIdGenerator()
        new_id.skip_past(["team_7", "player_3", "custom"])
        assert new_id("team") == "team_8"

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            make_id_generator("time")


class TestSaveCommands:
    def test_create_assigns_id(self, store):
        team = store.save_team(Create(TeamDraft(name="U6 Lions", age_group="U5-U6", coach="Bob")))
        assert team.id == "team_1"
        assert store.get_team(team.id) == team

    def test_create_ignores_id_on_draft(self, store):
        first = store.add_team(TeamDraft(name="A", age_group="U6", coach="Bob"))
        copy = store.save_team(Create(first))
        assert copy.id != first.id
        assert len(store.teams()) == 2

    def test_update_replaces_entity(self, store):
        team = store.add_team(TeamDraft(name="A", age_group="U6", coach="Bob"))
        store.save_team(Update(team.model_copy(update={"coach": "Alice"})))
        assert store.get_team(team.id).coach == "Alice"
        assert len(store.teams()) == 1

    def test_update_of_unknown_id_raises(self, store):
        with pytest.raises(EntityNotFoundError):
            store.update_team(Team(id="team_404", name="A", age_group="U6", coach="Bob"))

    def test_save_rejects_other_values(self, store):
        with pytest.raises(TypeError):
            store.save_team(TeamDraft(name="A", age_group="U6", coach="Bob"))

    def test_every_write_bumps_revision(self, store):
        before = store.revision
        team = store.add_team(TeamDraft(name="A", age_group="U6", coach="Bob"))
        store.update_team(team)
        assert store.revision == before + 2


class TestLookups:
    def test_missing_lookups_return_none(self, store):
        assert store.get_team("nope") is None
        assert store.get_team(None) is None
        assert store.get_player("nope") is None
        assert store.get_drill("nope") is None
        assert store.get_plan("nope") is None
        assert store.get_session("nope") is None
        assert store.get_attendance("s", "p") is None
        assert store.get_behavior("s", "p") is None

    def test_players_for_team_follows_updates(self, club):
        store = club.store
        assert [p.name for p in store.players_for_team(club.lions.id)] == [
            "Sam Jones",
            "Mia Wong",
            "Leo Smith",
        ]
        store.update_player(club.leo.model_copy(update={"team_id": club.tigers.id}))
        assert [p.id for p in store.players_for_team(club.lions.id)] == [club.sam.id, club.mia.id]
        assert club.leo.id in [p.id for p in store.players_for_team(club.tigers.id)]

    def test_remove_player_keeps_history(self, club):
        store = club.store
        session = record_session(
            store, club.lions, datetime(2024, 1, 1), {club.sam.id: (True, BehaviorStatus.GREEN)}
        )
        assert store.remove_player(club.sam.id)
        assert not store.remove_player(club.sam.id)
        assert store.get_player(club.sam.id) is None
        assert club.sam.id not in [p.id for p in store.players_for_team(club.lions.id)]
        assert store.get_attendance(session.id, club.sam.id) is not None
        assert store.get_behavior(session.id, club.sam.id) is not None

    def test_dangling_team_reference_is_allowed(self, store):
        player = store.add_player(PlayerDraft(name="Solo", team_id="team_gone", dob=date(2018, 1, 1)))
        assert store.players_for_team("team_gone") == [player]


class TestRecordSession:
    def _session(self, store, team_id="team_1"):
        return Session(
            id=store.new_session_id(),
            team_id=team_id,
            training_plan_id="plan_1",
            date_time=datetime(2024, 1, 1, 10),
            focus="Dribbling",
        )

    def test_records_all_rows(self, club):
        store = club.store
        session = record_session(
            store,
            club.lions,
            datetime(2024, 1, 1),
            {club.sam.id: (True, BehaviorStatus.GREEN), club.mia.id: (False, BehaviorStatus.GREEN)},
        )
        assert store.get_session(session.id) == session
        assert [a.player_id for a in store.attendances_for_session(session.id)] == [
            club.sam.id,
            club.mia.id,
        ]
        assert len(store.behaviors_for_session(session.id)) == 2
        assert store.sessions_for_team(club.lions.id) == [session]

    def test_rejects_mismatched_players(self, store):
        session = self._session(store)
        attendances = [Attendance(session_id=session.id, player_id="p1")]
        behaviors = [BehaviorEntry(session_id=session.id, player_id="p2")]
        with pytest.raises(StoreError):
            store.record_session(session, attendances, behaviors)
        assert store.sessions() == []
        assert store.get_attendance(session.id, "p1") is None

    def test_rejects_rows_for_other_session(self, store):
        session = self._session(store)
        attendances = [Attendance(session_id="other", player_id="p1")]
        behaviors = [BehaviorEntry(session_id="other", player_id="p1")]
        with pytest.raises(StoreError):
            store.record_session(session, attendances, behaviors)

    def test_rejects_duplicate_session(self, store):
        session = self._session(store)
        store.record_session(session, [], [])
        with pytest.raises(StoreError):
            store.record_session(session, [], [])

    def test_stored_rows_are_copies(self, store):
        session = self._session(store)
        attendance = Attendance(session_id=session.id, player_id="p1")
        store.record_session(session, [attendance], [BehaviorEntry(session_id=session.id, player_id="p1")])
        attendance.present = False
        assert store.get_attendance(session.id, "p1").present is True

    def test_update_notes(self, store):
        session = self._session(store)
        store.record_session(session, [], [])
        assert store.update_session_notes(session.id, "Great energy")
        revision = store.revision
        assert not store.update_session_notes(session.id, "Great energy")
        assert store.revision == revision
        assert store.get_session(session.id).notes == "Great energy"
        assert not store.update_session_notes("missing", "x")


class TestSnapshot:
    def test_round_trip_keeps_everything(self, club):
        store = club.store
        record_session(
            store,
            club.lions,
            datetime(2024, 1, 1, 10),
            {club.sam.id: (True, BehaviorStatus.YELLOW)},
            notes="Windy",
        )
        restored = EntityStore.from_snapshot(store.to_snapshot())
        assert restored.teams() == store.teams()
        assert restored.players() == store.players()
        assert restored.drills() == store.drills()
        assert restored.plans() == store.plans()
        assert restored.sessions() == store.sessions()
        session_id = store.sessions()[0].id
        assert restored.get_behavior(session_id, club.sam.id).status == BehaviorStatus.YELLOW

    def test_sequential_ids_continue_after_restore(self, club):
        restored = EntityStore.from_snapshot(club.store.to_snapshot(), SequentialIdGenerator())
        new_team = restored.add_team(TeamDraft(name="New", age_group="U9", coach="Cy"))
        existing = {t.id for t in club.store.teams()} | {p.id for p in club.store.players()}
        assert new_team.id not in existing

    def test_unknown_version(self):
        with pytest.raises(StoreError):
            EntityStore.from_snapshot({"version": 99})

    def test_player_dob_round_trips_as_date(self, club):
        restored = EntityStore.from_snapshot(club.store.to_snapshot())
        assert isinstance(restored.get_player(club.sam.id), Player)
        assert restored.get_player(club.sam.id).dob == date(2018, 5, 10)
