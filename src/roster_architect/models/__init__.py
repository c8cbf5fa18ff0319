"""Canonical models shared across ingestion, roster and sharing layers."""

from .player import Player

__all__ = ["Player"]
