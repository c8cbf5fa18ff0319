"""Roster construction engine: CSV ingestion, catalog browsing, roster analytics and sharing."""

__version__ = "0.1.0"
