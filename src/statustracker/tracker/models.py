"""Data models for the Tracker service."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime  # noqa: TC003
from typing import TYPE_CHECKING

from statustracker.github import GitHubError, ItemState, Label, LiveItem

if TYPE_CHECKING:
    from statustracker.tracker_store import TrackedItem

LOAD_FAILED_TITLE = "load failed"


@dataclass
class TrackedRecord:
    """A tracked item merged with its live state, or a degraded stand-in.

    Attributes:
        id: Tracked item ID.
        github_url: Source URL the item was tracked from.
        category_name: Name of the item's category.
        type: Classification, "Feature" or "Bug".
        owner: Repository owner.
        repo: Repository name.
        item_number: Issue or pull request number.
        tracked_at: When the item was added locally.
        title: Live title, or LOAD_FAILED_TITLE when the fetch failed.
        state: open, closed, or unknown when the fetch failed.
        kind: "Issue" or "Pull Request"; None when the fetch failed.
        url: Canonical html URL reported by GitHub.
        labels: Live labels, empty when the fetch failed.
        created_at: Upstream creation timestamp, verbatim.
        updated_at: Upstream update timestamp, verbatim.
        error: Fetch error message for degraded records.
    """

    id: int
    github_url: str
    category_name: str
    type: str
    owner: str
    repo: str
    item_number: int
    tracked_at: datetime | None
    title: str
    state: str
    kind: str | None = None
    url: str | None = None
    labels: list[Label] = field(default_factory=list)
    created_at: str | None = None
    updated_at: str | None = None
    error: str | None = None

    @classmethod
    def from_live(cls, item: TrackedItem, live: LiveItem) -> TrackedRecord:
        """Merge persisted fields with a successful fetch."""
        return cls(
            id=item.id,
            github_url=item.source_url,
            category_name=item.category_name,
            type=item.classification,
            owner=item.owner,
            repo=item.repo_name,
            item_number=item.item_number,
            tracked_at=item.created_at,
            title=live.title,
            state=live.state.value,
            kind=live.kind.value,
            url=live.url,
            labels=list(live.labels),
            created_at=live.created_at,
            updated_at=live.updated_at,
        )

    @classmethod
    def degraded(cls, item: TrackedItem, message: str) -> TrackedRecord:
        """Stand-in record for an item whose fetch failed."""
        return cls(
            id=item.id,
            github_url=item.source_url,
            category_name=item.category_name,
            type=item.classification,
            owner=item.owner,
            repo=item.repo_name,
            item_number=item.item_number,
            tracked_at=item.created_at,
            title=LOAD_FAILED_TITLE,
            state=ItemState.UNKNOWN.value,
            error=message,
        )

    @property
    def is_degraded(self) -> bool:
        """Whether the live fetch for this record failed."""
        return self.error is not None


@dataclass
class FetchOutcome:
    """Per-item result of a live fetch: a snapshot or the error that replaced it."""

    item: TrackedItem
    live: LiveItem | None = None
    error: GitHubError | None = None

    def to_record(self) -> TrackedRecord:
        """Build the display record for this outcome."""
        if self.live is not None:
            return TrackedRecord.from_live(self.item, self.live)
        return TrackedRecord.degraded(self.item, str(self.error))
