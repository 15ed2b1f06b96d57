"""TrackerService - Reconciles the local record store with live GitHub state."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import TYPE_CHECKING, Protocol

from statustracker.github import GitHubError, parse_reference
from statustracker.logging import get_logger
from statustracker.tracker.exceptions import InvalidInputError
from statustracker.tracker.models import FetchOutcome, TrackedRecord
from statustracker.tracker_store import Classification, TrackedItemExistsError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from statustracker.github import LiveItem
    from statustracker.tracker_store import Category, TrackedItem, TrackerStore

logger = get_logger("tracker")

DEFAULT_MAX_WORKERS = 8


class UpstreamClient(Protocol):
    """Interface for the live state lookup."""

    def fetch_item(self, owner: str, repo: str, number: int) -> LiveItem:
        """Fetch live state of one issue or pull request."""
        ...


def _parse_classification(value: str | Classification | None) -> Classification:
    if value is None or value == "":
        return Classification.BUG
    try:
        return Classification(value)
    except ValueError as e:
        raise InvalidInputError('Type must be "Feature" or "Bug"', field="type") from e


class TrackerService:
    """Category and tracked-item operations with live state reconciliation.

    The store and the upstream client are passed in explicitly; the service
    holds no other state.
    """

    def __init__(
        self,
        store: TrackerStore,
        client: UpstreamClient,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ) -> None:
        """Initialize the service.

        Args:
            store: Record store for categories and tracked items.
            client: Upstream client used to fetch live state.
            max_workers: Upper bound on simultaneous upstream fetches.
        """
        self.store = store
        self.client = client
        self.max_workers = max(1, max_workers)

    # --- Categories ---

    def list_categories(self) -> list[Category]:
        """List all categories, ordered by name."""
        return self.store.list_categories()

    def ensure_category(self, name: str | None) -> tuple[Category, bool]:
        """Return the named category, creating it if absent.

        Returns:
            Tuple of (category, created).

        Raises:
            InvalidInputError: If the name is empty.
        """
        name = (name or "").strip()
        if not name:
            raise InvalidInputError("Category name is required", field="name")
        return self.store.get_or_create_category(name)

    # --- Tracked items ---

    def list_with_live_state(self) -> list[TrackedRecord]:
        """List tracked items merged with freshly fetched GitHub state.

        Items are fetched in parallel. A failed fetch produces a degraded
        record for that item only; the result keeps the store's ordering
        (most recently tracked first).
        """
        items = self.store.list_tracked_items()
        if not items:
            return []

        workers = min(self.max_workers, len(items))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="github-fetch") as executor:
            futures = [executor.submit(self._fetch, item) for item in items]
            outcomes = [future.result() for future in futures]

        failed = sum(1 for outcome in outcomes if outcome.error is not None)
        logger.info("Refreshed %d tracked item(s), %d failed", len(outcomes), failed)
        return [outcome.to_record() for outcome in outcomes]

    def create_tracked(
        self,
        source_url: str | None,
        category_name: str | None,
        classification: str | Classification | None = None,
    ) -> TrackedRecord:
        """Start tracking an issue or pull request.

        The item is fetched before anything is written, so an unreachable
        item is never persisted.

        Args:
            source_url: Issue or pull request URL.
            category_name: Category to file the item under; created if new.
            classification: "Feature" or "Bug"; defaults to "Bug".

        Returns:
            The merged record for the new item.

        Raises:
            InvalidInputError: If URL or category is missing, or type is invalid.
            TrackedItemExistsError: If the URL is already tracked.
            InvalidReferenceError: If the URL is not an issue/pull request URL.
            GitHubError: If the live fetch fails.
        """
        source_url = (source_url or "").strip()
        category_name = (category_name or "").strip()
        if not source_url or not category_name:
            raise InvalidInputError("GitHub URL and category are required")

        item_classification = _parse_classification(classification)

        if self.store.get_tracked_item_by_url(source_url) is not None:
            raise TrackedItemExistsError(source_url)

        reference = parse_reference(source_url)
        live = self.client.fetch_item(reference.owner, reference.repo, reference.number)

        category, _ = self.store.get_or_create_category(category_name)
        item = self.store.create_tracked_item(
            source_url=source_url,
            category_id=category.id,
            owner=reference.owner,
            repo_name=reference.repo,
            item_number=reference.number,
            classification=item_classification,
        )
        logger.info(
            "Tracking %s/%s#%d as %s in %r",
            reference.owner,
            reference.repo,
            reference.number,
            item_classification.value,
            category_name,
        )
        return TrackedRecord.from_live(item, live)

    def delete_tracked(self, item_id: int) -> None:
        """Stop tracking an item.

        Raises:
            TrackedItemNotFoundError: If no item has this ID.
        """
        self.store.delete_tracked_item(item_id)

    def _fetch(self, item: TrackedItem) -> FetchOutcome:
        try:
            live = self.client.fetch_item(item.owner, item.repo_name, item.item_number)
        except GitHubError as e:
            logger.warning("Failed to refresh %s: %s", item.source_url, e)
            return FetchOutcome(item=item, error=e)
        return FetchOutcome(item=item, live=live)


def group_records(
    records: Iterable[TrackedRecord],
) -> dict[str, dict[str, list[TrackedRecord]]]:
    """Group records by classification, then by category name.

    Both classifications are always present (Feature first); categories
    appear in first-seen order and each group keeps the input order.
    """
    grouped: dict[str, dict[str, list[TrackedRecord]]] = {
        classification.value: {} for classification in Classification
    }
    for record in records:
        by_category = grouped.setdefault(record.type, {})
        by_category.setdefault(record.category_name, []).append(record)
    return grouped
