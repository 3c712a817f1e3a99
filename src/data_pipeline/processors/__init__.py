"""Roster processing."""

from .roster import build_roster, load_roster

__all__ = ["build_roster", "load_roster"]
