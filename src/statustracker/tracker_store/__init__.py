"""Tracker Store - Persistent storage for categories and tracked items."""

from statustracker.tracker_store.exceptions import (
    CategoryExistsError,
    CategoryNotFoundError,
    StoreError,
    TrackedItemExistsError,
    TrackedItemNotFoundError,
)
from statustracker.tracker_store.models import (
    Category,
    Classification,
    TrackedItem,
)
from statustracker.tracker_store.store import TrackerStore

__all__ = [
    "Category",
    "CategoryExistsError",
    "CategoryNotFoundError",
    "Classification",
    "StoreError",
    "TrackedItem",
    "TrackedItemExistsError",
    "TrackedItemNotFoundError",
    "TrackerStore",
]
