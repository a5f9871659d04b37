"""MCP tools for the drill library and training plans."""

import json
import logging
from typing import Any, Optional

from coach_clipboard.app import ClipboardApp
from coach_clipboard.models import DrillCategory, DrillDraft, DrillFilter
from coach_clipboard.services.catalog import (
    DrillSelection,
    add_drill_to_selection,
    save_plan_from_selection,
)
from coach_clipboard.services.drill_filter import (
    active_filter_count,
    filter_drills,
    unique_age_groups,
)
from coach_clipboard.tools.views import drill_view, plan_view
from coach_clipboard.utils.formatting import split_csv

logger = logging.getLogger(__name__)


def register_drill_tools(mcp, app: ClipboardApp):
    """Register drill and training plan MCP tools."""

    store = app.store

    @mcp.tool()
    def add_drill(
        name: str,
        category: str,
        duration: int,
        description: str = "",
        age_groups: str = "",
        equipment: str = "",
        tags: str = "",
        setup: str = "",
        instructions: str = "",
        video_url: Optional[str] = None,
    ) -> dict[str, Any]:
        """
        Add a drill to the library.

        Args:
            name: Drill name
            category: One of "Technical", "Physical", "Social/Values"
            duration: Default duration in minutes
            description: Short description
            age_groups: Comma-separated age groups (e.g. "U5-U6,U7-U8")
            equipment: Comma-separated equipment (e.g. "Cones,Balls")
            tags: Comma-separated tags (e.g. "dribbling,warm-up")
            setup: Setup instructions
            instructions: Coaching instructions
            video_url: Optional video link

        Returns:
            Dictionary with the created drill
        """
        try:
            drill = store.add_drill(
                DrillDraft(
                    name=name,
                    category=DrillCategory(category),
                    duration=duration,
                    description=description,
                    age_groups=split_csv(age_groups),
                    equipment=split_csv(equipment),
                    tags=split_csv(tags),
                    setup=setup,
                    instructions=instructions,
                    video_url=video_url or None,
                )
            )
            app.persist()
            return {"data": drill_view(drill)}
        except Exception as e:
            logger.exception("add_drill failed")
            return {"error": str(e)}

    @mcp.tool()
    def search_drills(
        search_query: str = "",
        age_groups: str = "",
        categories: str = "",
        session_focus: str = "",
    ) -> dict[str, Any]:
        """
        Search the drill library. Every criterion left empty matches all drills.

        Args:
            search_query: Text contained in the drill name (case-insensitive)
            age_groups: Comma-separated age groups; drills sharing any match
            categories: Comma-separated categories; drills in any match
            session_focus: Comma-separated focus keywords matched against drill tags

        Returns:
            Dictionary with matching drills and the available age groups
        """
        try:
            filters = DrillFilter(
                search_query=search_query,
                age_groups=set(split_csv(age_groups)),
                categories={DrillCategory(c) for c in split_csv(categories)},
                session_focus=set(split_csv(session_focus)),
            )
            drills = store.drills()
            matches = filter_drills(drills, filters)
            return {
                "data": {
                    "drills": [drill_view(d) for d in matches],
                    "count": len(matches),
                    "total": len(drills),
                    "active_filters": active_filter_count(filters),
                    "age_groups": unique_age_groups(drills),
                }
            }
        except Exception as e:
            logger.exception("search_drills failed")
            return {"error": str(e)}

    @mcp.tool()
    def list_training_plans() -> dict[str, Any]:
        """
        List all training plans.

        Returns:
            Dictionary containing plans with resolved drills and total minutes
        """
        try:
            plans = [plan_view(store, plan) for plan in store.plans()]
            return {"data": {"plans": plans, "count": len(plans)}}
        except Exception as e:
            logger.exception("list_training_plans failed")
            return {"error": str(e)}

    @mcp.tool()
    def get_training_plan(plan_id: str) -> dict[str, Any]:
        """
        Get a training plan by ID.

        Args:
            plan_id: The plan ID to retrieve

        Returns:
            Dictionary containing the plan with its drills in playback order
        """
        try:
            plan = store.get_plan(plan_id)
            if plan is None:
                return {"error": f"Plan not found: {plan_id}"}
            return {"data": plan_view(store, plan)}
        except Exception as e:
            logger.exception("get_training_plan failed")
            return {"error": str(e)}

    @mcp.tool()
    def save_training_plan(
        name: str, theme: str, drills_json: str, plan_id: Optional[str] = None
    ) -> dict[str, Any]:
        """
        Create a training plan, or replace an existing one.

        Args:
            name: Plan name
            theme: Plan theme
            drills_json: JSON list of {"drill_id": ..., "duration": minutes}
                in playback order; duration defaults to the drill's own
            plan_id: Plan to replace; a new plan is created when omitted

        Returns:
            Dictionary with the saved plan
        """
        try:
            entries = json.loads(drills_json)
        except json.JSONDecodeError as e:
            return {"error": f"Invalid JSON: {e}"}

        try:
            if not isinstance(entries, list):
                return {"error": "drills_json must be a JSON list"}
            if plan_id is not None and store.get_plan(plan_id) is None:
                return {"error": f"Plan not found: {plan_id}"}

            selection = DrillSelection()
            for entry in entries:
                drill_id = entry.get("drill_id") if isinstance(entry, dict) else entry
                if store.get_drill(drill_id) is None:
                    return {"error": f"Drill not found: {drill_id}"}
                add_drill_to_selection(store, selection, drill_id)
                if isinstance(entry, dict) and entry.get("duration") is not None:
                    selection.set_duration(drill_id, int(entry["duration"]))

            plan = save_plan_from_selection(store, name, theme, selection, plan_id)
            app.persist()
            return {"data": plan_view(store, plan)}
        except Exception as e:
            logger.exception("save_training_plan failed")
            return {"error": str(e)}
