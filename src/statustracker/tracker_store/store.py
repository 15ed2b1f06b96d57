"""TrackerStore - Main API for Tracker Store operations."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from statustracker.logging import get_logger
from statustracker.tracker_store.database import Database
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

logger = get_logger("tracker_store")


# SQLite INTEGER PRIMARY KEY range
_MIN_ROWID = -(2**63)
_MAX_ROWID = 2**63 - 1


def _is_rowid(value: int) -> bool:
    return _MIN_ROWID <= value <= _MAX_ROWID


def _is_unique_violation(error: IntegrityError, column: str) -> bool:
    message = str(error)
    return "UNIQUE constraint failed" in message and column in message


class TrackerStore:
    """Main API for Tracker Store operations.

    Provides CRUD operations for Categories and Tracked Items. Uniqueness of
    category names and source URLs is enforced by the database itself.
    """

    def __init__(self, db_path: str = "data/issues.db") -> None:
        """Initialize Tracker Store with SQLite database.

        Creates database and tables if they don't exist.

        Args:
            db_path: Path to SQLite database file
        """
        self._db = Database(db_path)
        self._db.create_tables()

    def close(self) -> None:
        """Close the database connection."""
        self._db.close()

    @contextmanager
    def _session(self) -> Iterator[Session]:
        """Yield a session, translating driver failures into StoreError."""
        session = self._db.get_session()
        try:
            yield session
        except SQLAlchemyError as e:
            session.rollback()
            logger.error("Database operation failed: %s", e)
            raise StoreError(f"Database operation failed: {e}") from e
        finally:
            session.close()

    # --- Category Operations ---

    def list_categories(self) -> list[Category]:
        """List all categories.

        Returns:
            List of all categories, ordered by name
        """
        with self._session() as session:
            stmt = select(Category).order_by(Category.name)
            return list(session.execute(stmt).scalars().all())

    def get_category(self, category_id: int) -> Category:
        """Get category by ID.

        Raises:
            CategoryNotFoundError: If category doesn't exist
        """
        if not _is_rowid(category_id):
            raise CategoryNotFoundError(f"Category with id '{category_id}' not found")
        with self._session() as session:
            category = session.get(Category, category_id)
            if category is None:
                raise CategoryNotFoundError(f"Category with id '{category_id}' not found")
            return category

    def get_category_by_name(self, name: str) -> Category | None:
        """Get category by its exact name, or None if absent."""
        with self._session() as session:
            stmt = select(Category).where(Category.name == name)
            return session.execute(stmt).scalar_one_or_none()

    def create_category(self, name: str) -> Category:
        """Create a new category.

        Args:
            name: Unique category name

        Returns:
            Created Category with generated ID

        Raises:
            CategoryExistsError: If a category with the same name exists
        """
        with self._session() as session:
            category = Category(name=name)
            session.add(category)
            try:
                session.commit()
            except IntegrityError as e:
                session.rollback()
                if _is_unique_violation(e, "categories.name"):
                    raise CategoryExistsError(name) from e
                raise
            session.refresh(category)
            logger.info("Created category %r (id=%d)", name, category.id)
            return category

    def get_or_create_category(self, name: str) -> tuple[Category, bool]:
        """Return the category with this name, creating it if absent.

        Args:
            name: Category name

        Returns:
            Tuple of (category, created) where created is False when the
            category already existed
        """
        existing = self.get_category_by_name(name)
        if existing is not None:
            return existing, False
        try:
            return self.create_category(name), True
        except CategoryExistsError:
            # Lost a race with a concurrent insert of the same name
            category = self.get_category_by_name(name)
            if category is None:
                raise
            return category, False

    # --- Tracked Item Operations ---

    def list_tracked_items(self) -> list[TrackedItem]:
        """List all tracked items with their category loaded.

        Returns:
            List of tracked items, most recently created first
        """
        with self._session() as session:
            stmt = (
                select(TrackedItem)
                .options(joinedload(TrackedItem.category))
                .order_by(TrackedItem.created_at.desc(), TrackedItem.id.desc())
            )
            return list(session.execute(stmt).scalars().all())

    def get_tracked_item(self, item_id: int) -> TrackedItem:
        """Get tracked item by ID.

        Raises:
            TrackedItemNotFoundError: If item doesn't exist
        """
        if not _is_rowid(item_id):
            raise TrackedItemNotFoundError(item_id)
        with self._session() as session:
            item = self._load_item(session, item_id)
            if item is None:
                raise TrackedItemNotFoundError(item_id)
            return item

    def get_tracked_item_by_url(self, source_url: str) -> TrackedItem | None:
        """Get tracked item by source URL, or None if not tracked."""
        with self._session() as session:
            stmt = (
                select(TrackedItem)
                .options(joinedload(TrackedItem.category))
                .where(TrackedItem.source_url == source_url)
            )
            return session.execute(stmt).scalar_one_or_none()

    def create_tracked_item(
        self,
        source_url: str,
        category_id: int,
        owner: str,
        repo_name: str,
        item_number: int,
        classification: Classification = Classification.BUG,
    ) -> TrackedItem:
        """Create a new tracked item.

        Args:
            source_url: Issue or pull request URL (unique)
            category_id: ID of an existing category
            owner: Repository owner parsed from the URL
            repo_name: Repository name parsed from the URL
            item_number: Issue or pull request number
            classification: Feature or Bug

        Returns:
            Created TrackedItem with its category loaded

        Raises:
            CategoryNotFoundError: If category doesn't exist
            TrackedItemExistsError: If source_url is already tracked
        """
        if not _is_rowid(category_id):
            raise CategoryNotFoundError(f"Category with id '{category_id}' not found")
        with self._session() as session:
            if session.get(Category, category_id) is None:
                raise CategoryNotFoundError(f"Category with id '{category_id}' not found")

            item = TrackedItem(
                source_url=source_url,
                category_id=category_id,
                owner=owner,
                repo_name=repo_name,
                item_number=item_number,
                classification=classification.value,
            )
            session.add(item)
            try:
                session.commit()
            except IntegrityError as e:
                session.rollback()
                if _is_unique_violation(e, "tracked_items.source_url"):
                    raise TrackedItemExistsError(source_url) from e
                raise

            created = self._load_item(session, item.id)
            if created is None:
                raise StoreError(f"Tracked item {item.id} vanished after insert")
            logger.info("Tracking %s (id=%d)", source_url, created.id)
            return created

    def delete_tracked_item(self, item_id: int) -> None:
        """Delete a tracked item. Its category is left in place.

        Raises:
            TrackedItemNotFoundError: If no row matched the ID
        """
        if not _is_rowid(item_id):
            raise TrackedItemNotFoundError(item_id)
        with self._session() as session:
            result = session.execute(delete(TrackedItem).where(TrackedItem.id == item_id))
            session.commit()
            if result.rowcount == 0:
                raise TrackedItemNotFoundError(item_id)
            logger.info("Deleted tracked item %d", item_id)

    def count_tracked_items(self) -> int:
        """Number of tracked items in the store."""
        with self._session() as session:
            return session.execute(select(func.count(TrackedItem.id))).scalar_one()

    @staticmethod
    def _load_item(session: Session, item_id: int) -> TrackedItem | None:
        stmt = (
            select(TrackedItem)
            .options(joinedload(TrackedItem.category))
            .where(TrackedItem.id == item_id)
            .execution_options(populate_existing=True)
        )
        return session.execute(stmt).scalar_one_or_none()
