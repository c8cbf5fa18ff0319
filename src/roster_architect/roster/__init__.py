"""Roster construction state."""

from .builder import RosterBuilder

__all__ = ["RosterBuilder"]
