"""Tracking list store and its errors."""

from dotmanager.tracking.store import (
    AlreadyTrackedError,
    ConflictError,
    NotTrackedError,
    PathNotFoundError,
    TrackingError,
    TrackingList,
    TrackingListIOError,
    normalize_path,
)

__all__ = [
    "AlreadyTrackedError",
    "ConflictError",
    "NotTrackedError",
    "PathNotFoundError",
    "TrackingError",
    "TrackingList",
    "TrackingListIOError",
    "normalize_path",
]
