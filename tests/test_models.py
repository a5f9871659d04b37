"""Tests for model validation and helpers."""

import pytest
from pydantic import ValidationError

from coach_clipboard.models import (
    BehaviorStatus,
    DrillCategory,
    DrillDraft,
    PlanDrill,
    next_behavior_status,
)
from coach_clipboard.utils.formatting import format_minutes, split_csv


@pytest.mark.parametrize(
    "status, expected",
    [
        (BehaviorStatus.GREEN, BehaviorStatus.YELLOW),
        (BehaviorStatus.YELLOW, BehaviorStatus.RED),
        (BehaviorStatus.RED, BehaviorStatus.NONE),
        (BehaviorStatus.NONE, BehaviorStatus.GREEN),
        ("Red", BehaviorStatus.NONE),
    ],
)
def test_next_behavior_status(status, expected):
    assert next_behavior_status(status) == expected


def test_durations_must_be_positive():
    with pytest.raises(ValidationError):
        PlanDrill(drill_id="drill_1", duration=0)
    with pytest.raises(ValidationError):
        DrillDraft(name="Gates", category=DrillCategory.TECHNICAL, duration=-5)


def test_drill_age_groups_and_tags_are_deduplicated():
    draft = DrillDraft(
        name="Gates",
        category="Technical",
        duration=10,
        age_groups=["U5-U6", "U7-U8", "U5-U6"],
        tags=["fun", "fun"],
    )
    assert draft.age_groups == ["U5-U6", "U7-U8"]
    assert draft.tags == ["fun"]
    assert draft.category == DrillCategory.TECHNICAL


def test_unknown_category_is_rejected():
    with pytest.raises(ValidationError):
        DrillDraft(name="Gates", category="Tactical", duration=10)


@pytest.mark.parametrize(
    "minutes, expected", [(5, "5 min"), (59, "59 min"), (60, "1h 00m"), (95, "1h 35m")]
)
def test_format_minutes(minutes, expected):
    assert format_minutes(minutes) == expected


def test_split_csv():
    assert split_csv(" a, b ,,c ") == ["a", "b", "c"]
    assert split_csv("") == []
    assert split_csv(None) == []
