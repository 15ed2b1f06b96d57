"""GitHub client - Live issue and pull request lookups."""

from statustracker.github.client import GitHubClient, parse_reference
from statustracker.github.exceptions import (
    GitHubError,
    InvalidReferenceError,
    ItemNotFoundError,
    RateLimitedError,
    UpstreamError,
)
from statustracker.github.models import (
    ItemKind,
    ItemReference,
    ItemState,
    Label,
    LiveItem,
)

__all__ = [
    "GitHubClient",
    "GitHubError",
    "InvalidReferenceError",
    "ItemKind",
    "ItemNotFoundError",
    "ItemReference",
    "ItemState",
    "Label",
    "LiveItem",
    "RateLimitedError",
    "UpstreamError",
    "parse_reference",
]
