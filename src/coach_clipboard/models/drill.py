"""Pydantic models for drills, training plans and drill search filters."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class DrillCategory(str, Enum):
    """Drill categories."""

    TECHNICAL = "Technical"
    PHYSICAL = "Physical"
    SOCIAL = "Social/Values"


class SessionFocus(str, Enum):
    """Session focus keywords, also used to match drill tags."""

    DRIBBLING = "Dribbling"
    PASSING = "Passing"
    SHOOTING = "Shooting"
    DEFENDING = "Defending"
    COORDINATION = "Coordination"
    TEAMWORK = "Teamwork"
    VALUES = "Social/Values"
    GENERAL = "General Fitness"


class DrillDraft(BaseModel):
    """Drill fields before an id is assigned."""

    name: str
    age_groups: list[str] = Field(default_factory=list)
    category: DrillCategory
    description: str = ""
    duration: int = Field(gt=0)  # minutes
    equipment: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    video_url: Optional[str] = None
    setup: str = ""
    instructions: str = ""

    @field_validator("age_groups", "tags")
    @classmethod
    def _unique(cls, values: list[str]) -> list[str]:
        # Set semantics, first occurrence wins
        return list(dict.fromkeys(values))


class Drill(DrillDraft):
    """A stored drill."""

    id: str


class PlanDrill(BaseModel):
    """A drill slot in a training plan, with its own duration."""

    drill_id: str
    duration: int = Field(gt=0)  # minutes, overrides Drill.duration


class TrainingPlanDraft(BaseModel):
    """Training plan fields before an id is assigned."""

    name: str
    theme: str
    drills: list[PlanDrill] = Field(default_factory=list)  # playback order


class TrainingPlan(TrainingPlanDraft):
    """A stored training plan."""

    id: str


class DrillFilter(BaseModel):
    """Drill library search criteria. Empty criteria match every drill."""

    search_query: str = ""
    age_groups: set[str] = Field(default_factory=set)
    categories: set[DrillCategory] = Field(default_factory=set)
    session_focus: set[str] = Field(default_factory=set)
