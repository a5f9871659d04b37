#!/usr/bin/env python3
"""
MCP server for Coach Clipboard.
This server exposes tools to manage teams, drills and training plans and to
run live coaching sessions with attendance and behavior tracking.
"""

import logging
from typing import Optional

from dotenv import load_dotenv
from mcp.server.fastmcp import FastMCP

from coach_clipboard.app import ClipboardApp
from coach_clipboard.config import Settings
from coach_clipboard.logging_config import setup_logging
from coach_clipboard.tools import register_all_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "Coach Clipboard MCP Server"


def create_server(settings: Optional[Settings] = None) -> tuple[FastMCP, ClipboardApp]:
    """
    Build the MCP server and the app state its tools share.

    Args:
        settings: Runtime settings (read from the environment when omitted)

    Returns:
        The FastMCP server and the ClipboardApp
    """
    settings = settings or Settings.from_env()
    app = ClipboardApp.from_settings(settings)
    mcp = FastMCP(SERVER_NAME)
    register_all_tools(mcp, app)
    return mcp, app


def main() -> None:
    """Main function to start the Coach Clipboard MCP server."""
    load_dotenv()
    settings = Settings.from_env()
    setup_logging(settings.log_level)

    mcp, _ = create_server(settings)
    logger.info(
        "Starting Coach Clipboard MCP server (data dir %s, persist %s)",
        settings.data_dir,
        settings.persist,
    )
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
