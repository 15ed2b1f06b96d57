"""Data models for the GitHub client."""

from dataclasses import dataclass, field
from enum import StrEnum


class ItemState(StrEnum):
    """Open/closed state of an issue or pull request."""

    OPEN = "open"
    CLOSED = "closed"
    UNKNOWN = "unknown"


class ItemKind(StrEnum):
    """Upstream kind, derived from the API response rather than the URL."""

    ISSUE = "Issue"
    PULL_REQUEST = "Pull Request"


@dataclass(frozen=True)
class ItemReference:
    """Owner, repo and number parsed from an issue or pull request URL."""

    owner: str
    repo: str
    number: int


@dataclass(frozen=True)
class Label:
    """Issue label with its 6-hex-digit color."""

    name: str
    color: str


@dataclass
class LiveItem:
    """Live state of an issue or pull request, fetched fresh on every read."""

    title: str
    state: ItemState
    kind: ItemKind
    url: str
    labels: list[Label] = field(default_factory=list)
    created_at: str | None = None
    updated_at: str | None = None
