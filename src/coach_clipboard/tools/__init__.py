"""MCP tools for Coach Clipboard."""

from coach_clipboard.tools.drills import register_drill_tools
from coach_clipboard.tools.sessions import register_session_tools
from coach_clipboard.tools.teams import register_team_tools

__all__ = [
    "register_team_tools",
    "register_drill_tools",
    "register_session_tools",
    "register_all_tools",
]


def register_all_tools(mcp, app):
    """Register all MCP tools with the server."""
    register_team_tools(mcp, app)
    register_drill_tools(mcp, app)
    register_session_tools(mcp, app)
