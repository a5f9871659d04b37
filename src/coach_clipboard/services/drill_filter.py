"""Drill library search."""

from coach_clipboard.models import Drill, DrillFilter


def _matches_search(drill: Drill, query: str) -> bool:
    return query.lower() in drill.name.lower()


def _matches_age_groups(drill: Drill, age_groups: set[str]) -> bool:
    return not age_groups or any(group in age_groups for group in drill.age_groups)


def _matches_categories(drill: Drill, filters: DrillFilter) -> bool:
    return not filters.categories or drill.category in filters.categories


def _matches_focus(drill: Drill, focus_keywords: set[str]) -> bool:
    if not focus_keywords:
        return True
    return any(
        keyword.lower() in tag.lower() for keyword in focus_keywords for tag in drill.tags
    )


def filter_drills(drills: list[Drill], filters: DrillFilter) -> list[Drill]:
    """
    Drills matching every active criterion, in their original order.

    - search_query: case-insensitive substring of the drill name
    - age_groups: drill shares at least one age group
    - categories: drill category is one of them
    - session_focus: some drill tag contains some keyword (case-insensitive)

    An empty criterion matches every drill.
    """
    return [
        drill
        for drill in drills
        if _matches_search(drill, filters.search_query)
        and _matches_age_groups(drill, filters.age_groups)
        and _matches_categories(drill, filters)
        and _matches_focus(drill, filters.session_focus)
    ]


def unique_age_groups(drills: list[Drill]) -> list[str]:
    """Sorted distinct age groups across drills, for filter choices."""
    return sorted({group for drill in drills for group in drill.age_groups})


def active_filter_count(filters: DrillFilter) -> int:
    """Number of selected age group, category and focus options."""
    return len(filters.age_groups) + len(filters.categories) + len(filters.session_focus)


def has_active_filters(filters: DrillFilter) -> bool:
    return bool(filters.search_query) or active_filter_count(filters) > 0
