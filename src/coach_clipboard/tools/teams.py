"""MCP tools for teams, players and their history."""

import logging
from datetime import datetime
from typing import Any, Optional

from coach_clipboard.app import ClipboardApp
from coach_clipboard.models import PlayerDraft, TeamDraft
from coach_clipboard.services.history import (
    player_history,
    recent_sessions,
    team_session_history,
    upcoming_sessions,
)
from coach_clipboard.tools.views import (
    player_record_view,
    player_view,
    session_view,
    team_record_view,
    team_view,
)
from coach_clipboard.utils.dates import parse_date, parse_optional_date

logger = logging.getLogger(__name__)


def register_team_tools(mcp, app: ClipboardApp):
    """Register team and player MCP tools."""

    store = app.store

    @mcp.tool()
    def create_team(name: str, age_group: str, coach: str) -> dict[str, Any]:
        """
        Create a team.

        Args:
            name: Team name (e.g. "U6 Lions")
            age_group: Age group (e.g. "U5-U6")
            coach: Coach name

        Returns:
            Dictionary with the created team
        """
        try:
            team = store.add_team(TeamDraft(name=name, age_group=age_group, coach=coach))
            app.persist()
            return {"data": team_view(team)}
        except Exception as e:
            logger.exception("create_team failed")
            return {"error": str(e)}

    @mcp.tool()
    def update_team(
        team_id: str,
        name: Optional[str] = None,
        age_group: Optional[str] = None,
        coach: Optional[str] = None,
    ) -> dict[str, Any]:
        """
        Update a team's details. Omitted fields keep their value.

        Args:
            team_id: The team to update
            name: New team name
            age_group: New age group
            coach: New coach name

        Returns:
            Dictionary with the updated team
        """
        try:
            team = store.get_team(team_id)
            if team is None:
                return {"error": f"Team not found: {team_id}"}
            changes = {"name": name, "age_group": age_group, "coach": coach}
            updated = store.update_team(
                team.model_copy(update={k: v for k, v in changes.items() if v is not None})
            )
            app.persist()
            return {"data": team_view(updated)}
        except Exception as e:
            logger.exception("update_team failed")
            return {"error": str(e)}

    @mcp.tool()
    def list_teams() -> dict[str, Any]:
        """
        List all teams.

        Returns:
            Dictionary containing teams with their player counts
        """
        try:
            teams = [
                {**team_view(team), "player_count": len(store.players_for_team(team.id))}
                for team in store.teams()
            ]
            return {"data": {"teams": teams, "count": len(teams)}}
        except Exception as e:
            logger.exception("list_teams failed")
            return {"error": str(e)}

    @mcp.tool()
    def get_team_roster(team_id: str) -> dict[str, Any]:
        """
        Get a team and its current players.

        Args:
            team_id: The team to look up

        Returns:
            Dictionary with the team and its players
        """
        try:
            team = store.get_team(team_id)
            if team is None:
                return {"error": f"Team not found: {team_id}"}
            players = [player_view(p) for p in store.players_for_team(team_id)]
            return {"data": {"team": team_view(team), "players": players}}
        except Exception as e:
            logger.exception("get_team_roster failed")
            return {"error": str(e)}

    @mcp.tool()
    def add_player(team_id: str, name: str, dob: str, notes: str = "") -> dict[str, Any]:
        """
        Add a player to a team.

        Args:
            team_id: The player's team
            name: Player name
            dob: Date of birth (YYYY-MM-DD)
            notes: Coach notes about the player

        Returns:
            Dictionary with the created player
        """
        try:
            if store.get_team(team_id) is None:
                return {"error": f"Team not found: {team_id}"}
            player = store.add_player(
                PlayerDraft(name=name, team_id=team_id, dob=parse_date(dob), notes=notes)
            )
            app.persist()
            return {"data": player_view(player)}
        except Exception as e:
            logger.exception("add_player failed")
            return {"error": str(e)}

    @mcp.tool()
    def update_player(
        player_id: str,
        name: Optional[str] = None,
        dob: Optional[str] = None,
        notes: Optional[str] = None,
        team_id: Optional[str] = None,
    ) -> dict[str, Any]:
        """
        Update a player's details. Omitted fields keep their value.

        Args:
            player_id: The player to update
            name: New name
            dob: New date of birth (YYYY-MM-DD)
            notes: New notes
            team_id: Move the player to another team

        Returns:
            Dictionary with the updated player
        """
        try:
            player = store.get_player(player_id)
            if player is None:
                return {"error": f"Player not found: {player_id}"}
            if team_id is not None and store.get_team(team_id) is None:
                return {"error": f"Team not found: {team_id}"}
            changes: dict[str, Any] = {"name": name, "notes": notes, "team_id": team_id}
            if dob is not None:
                changes["dob"] = parse_date(dob)
            updated = store.update_player(
                player.model_copy(update={k: v for k, v in changes.items() if v is not None})
            )
            app.persist()
            return {"data": player_view(updated)}
        except Exception as e:
            logger.exception("update_player failed")
            return {"error": str(e)}

    @mcp.tool()
    def remove_player(player_id: str) -> dict[str, Any]:
        """
        Remove a player. Their past session records are kept.

        Args:
            player_id: The player to remove

        Returns:
            Dictionary with deletion status
        """
        try:
            if not store.remove_player(player_id):
                return {"error": f"Player not found: {player_id}"}
            app.persist()
            return {"data": {"player_id": player_id, "deleted": True}}
        except Exception as e:
            logger.exception("remove_player failed")
            return {"error": str(e)}

    @mcp.tool()
    def get_player_history(player_id: str) -> dict[str, Any]:
        """
        Get a player's session history, newest first.

        Sessions the player missed show as "Absent" without a behavior rating.

        Args:
            player_id: The player to look up

        Returns:
            Dictionary with the player and one record per team session
        """
        try:
            player = store.get_player(player_id)
            if player is None:
                return {"error": f"Player not found: {player_id}"}
            records = [player_record_view(r) for r in player_history(store, player_id)]
            return {"data": {"player": player_view(player), "sessions": records}}
        except Exception as e:
            logger.exception("get_player_history failed")
            return {"error": str(e)}

    @mcp.tool()
    def get_team_history(
        team_id: str, start_date: Optional[str] = None, end_date: Optional[str] = None
    ) -> dict[str, Any]:
        """
        Get a team's sessions with attendance and behavior tallies, newest first.

        Args:
            team_id: The team to look up
            start_date: First date to include (YYYY-MM-DD, optional)
            end_date: Last date to include (YYYY-MM-DD, optional)

        Returns:
            Dictionary with one record per session in range
        """
        try:
            if store.get_team(team_id) is None:
                return {"error": f"Team not found: {team_id}"}
            records = team_session_history(
                store, team_id, parse_optional_date(start_date), parse_optional_date(end_date)
            )
            sessions = [team_record_view(r) for r in records]
            return {"data": {"sessions": sessions, "count": len(sessions)}}
        except Exception as e:
            logger.exception("get_team_history failed")
            return {"error": str(e)}

    @mcp.tool()
    def get_coach_schedule(coach: str, recent_limit: int = 3) -> dict[str, Any]:
        """
        Get upcoming and recent sessions for a coach's teams.

        Args:
            coach: Coach name as stored on the teams
            recent_limit: How many past sessions to include (default: 3)

        Returns:
            Dictionary with upcoming sessions (soonest first) and recent
            sessions (latest first)
        """
        try:
            if not any(team.coach == coach for team in store.teams()):
                return {"error": f"No teams found for coach: {coach}"}
            now = datetime.now().astimezone()
            return {
                "data": {
                    "upcoming": [session_view(s) for s in upcoming_sessions(store, coach, now)],
                    "recent": [
                        session_view(s) for s in recent_sessions(store, coach, now, recent_limit)
                    ],
                }
            }
        except Exception as e:
            logger.exception("get_coach_schedule failed")
            return {"error": str(e)}
