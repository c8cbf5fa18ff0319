"""Base exception shared by ingestion and sharing errors."""


class RosterArchitectError(RuntimeError):
    """Root of every error this package raises on purpose."""
