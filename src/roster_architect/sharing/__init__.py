"""Snapshot publishing and deep-link resolution."""

from .service import (
    SHARE_QUERY_PARAM,
    PreconditionFailedError,
    PublishInProgressError,
    ShareResult,
    SharingError,
    SharingService,
    Snapshot,
    StorageError,
    build_share_url,
    parse_deep_link,
    snapshot_namespace,
)

__all__ = [
    "SHARE_QUERY_PARAM",
    "PreconditionFailedError",
    "PublishInProgressError",
    "ShareResult",
    "SharingError",
    "SharingService",
    "Snapshot",
    "StorageError",
    "build_share_url",
    "parse_deep_link",
    "snapshot_namespace",
]
