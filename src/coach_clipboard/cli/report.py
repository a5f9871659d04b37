#!/usr/bin/env python3
"""
Print session history reports from the saved Coach Clipboard data.

Two reports are available:
- team: a team's sessions with attendance and Green/Yellow/Red tallies
- player: a player's sessions with attendance and behavior rating
"""

import argparse
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from coach_clipboard.config import Settings
from coach_clipboard.services.history import player_history, team_session_history
from coach_clipboard.storage.entity_store import EntityStore
from coach_clipboard.storage.snapshot import SnapshotStorage
from coach_clipboard.utils.dates import format_session_date, parse_optional_date


def print_team_report(
    store: EntityStore, team_id: str, start: Optional[str], end: Optional[str]
) -> int:
    """Print a team's session history. Returns the process exit code."""
    team = store.get_team(team_id)
    if team is None:
        print(f"Error: Team not found: {team_id}")
        return 1

    records = team_session_history(
        store, team_id, parse_optional_date(start), parse_optional_date(end)
    )

    print("=" * 80)
    print(f"TEAM HISTORY: {team.name} ({team.age_group}) - Coach {team.coach}")
    if start or end:
        print(f"Range: {start or '...'} to {end or '...'}")
    print("=" * 80)
    print()

    if not records:
        print("No sessions found.")
        return 0

    print(f"{'Date':<22} {'Focus':<18} {'Present':>8} {'Green':>6} {'Yellow':>7} {'Red':>4}")
    print("-" * 80)
    for record in records:
        session = record.session
        attendance = f"{record.present_count}/{record.total_count}"
        print(
            f"{format_session_date(session.date_time):<22} {session.focus:<18} "
            f"{attendance:>8} {record.green:>6} {record.yellow:>7} {record.red:>4}"
        )
        if session.notes:
            print(f"    Notes: {session.notes}")
    print()
    print(f"{len(records)} session(s)")
    return 0


def print_player_report(store: EntityStore, player_id: str) -> int:
    """Print a player's session history. Returns the process exit code."""
    player = store.get_player(player_id)
    if player is None:
        print(f"Error: Player not found: {player_id}")
        return 1

    team = store.get_team(player.team_id)
    records = player_history(store, player_id)

    print("=" * 80)
    print(f"PLAYER HISTORY: {player.name} (DOB {player.dob.isoformat()})")
    if team:
        print(f"Team: {team.name}")
    if player.notes:
        print(f"Notes: {player.notes}")
    print("=" * 80)
    print()

    if not records:
        print("No session history yet.")
        return 0

    for record in records:
        line = f"{format_session_date(record.session.date_time)} - {record.session.focus}: {record.label}"
        if record.tags:
            line += f" [{', '.join(tag.value for tag in record.tags)}]"
        print(line)
        if record.note:
            print(f"    {record.note}")

    attended = sum(1 for record in records if record.present)
    print()
    print(f"Attended {attended} of {len(records)} session(s)")
    return 0


def main() -> int:
    """Main function to print a history report."""
    parser = argparse.ArgumentParser(
        description="Print session history reports from saved Coach Clipboard data"
    )
    parser.add_argument(
        "--data-dir",
        help="Data directory (default: COACH_CLIPBOARD_DATA_DIR or ./data)",
    )
    parser.add_argument(
        "--env-file",
        help="Path to .env file with Coach Clipboard settings",
    )
    subparsers = parser.add_subparsers(dest="report", required=True)

    team_parser = subparsers.add_parser("team", help="Team session history")
    team_parser.add_argument("team_id", help="Team ID")
    team_parser.add_argument("--start", help="First date to include (YYYY-MM-DD)")
    team_parser.add_argument("--end", help="Last date to include (YYYY-MM-DD)")

    player_parser = subparsers.add_parser("player", help="Player session history")
    player_parser.add_argument("player_id", help="Player ID")

    args = parser.parse_args()

    if args.env_file:
        load_dotenv(args.env_file)
    else:
        load_dotenv()

    data_dir = Path(args.data_dir) if args.data_dir else Settings.from_env().data_dir
    store = SnapshotStorage(data_dir).load()
    if store is None:
        print(f"Error: No saved data found in {data_dir}")
        return 1

    try:
        if args.report == "team":
            return print_team_report(store, args.team_id, args.start, args.end)
        return print_player_report(store, args.player_id)
    except ValueError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    exit(main())
