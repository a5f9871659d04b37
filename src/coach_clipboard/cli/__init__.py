"""CLI tools for Coach Clipboard."""

from coach_clipboard.cli.report import main as report_main

__all__ = [
    "report_main",
]
