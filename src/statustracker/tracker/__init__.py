"""Tracker - Reconciles tracked items with their live GitHub state."""

from statustracker.tracker.exceptions import InvalidInputError, TrackerError
from statustracker.tracker.models import LOAD_FAILED_TITLE, FetchOutcome, TrackedRecord
from statustracker.tracker.service import TrackerService, UpstreamClient, group_records

__all__ = [
    "LOAD_FAILED_TITLE",
    "FetchOutcome",
    "InvalidInputError",
    "TrackedRecord",
    "TrackerError",
    "TrackerService",
    "UpstreamClient",
    "group_records",
]
