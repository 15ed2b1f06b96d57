"""Custom exceptions for the Tracker Store."""


class StoreError(Exception):
    """Base exception for Tracker Store errors."""


class CategoryNotFoundError(StoreError):
    """Category with given ID or name does not exist."""


class CategoryExistsError(StoreError):
    """Category with given name already exists."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Category '{name}' already exists")
        self.name = name


class TrackedItemNotFoundError(StoreError):
    """Tracked item with given ID does not exist."""

    def __init__(self, item_id: int) -> None:
        super().__init__(f"Tracked item with id '{item_id}' not found")
        self.item_id = item_id


class TrackedItemExistsError(StoreError):
    """A tracked item with the same source URL already exists."""

    def __init__(self, source_url: str) -> None:
        super().__init__(f"Tracked item for '{source_url}' already exists")
        self.source_url = source_url
