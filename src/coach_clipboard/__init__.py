"""Coach Clipboard: coaching workflow for youth sports teams."""

__version__ = "0.1.0"
