"""SQLAlchemy models for the Tracker Store."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003 - used at runtime for SQLAlchemy
from enum import StrEnum
from typing import Any

from sqlalchemy import (
    DateTime,
    ForeignKey,
    Integer,
    String,
    func,
)
from sqlalchemy.orm import (
    DeclarativeBase,
    Mapped,
    mapped_column,
    relationship,
)


class Classification(StrEnum):
    """User-assigned classification of a tracked item."""

    FEATURE = "Feature"
    BUG = "Bug"


class Base(DeclarativeBase):
    """Base class for all models."""


class Category(Base):
    """Category model - user-defined grouping for tracked items."""

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    # No cascade: deleting tracked items never touches their category
    items: Mapped[list[TrackedItem]] = relationship("TrackedItem", back_populates="category")

    def __init__(self, name: str, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.name = name

    def __repr__(self) -> str:
        return f"<Category(id={self.id!r}, name={self.name!r})>"


class TrackedItem(Base):
    """Tracked item model - one upstream issue or pull request, by URL."""

    __tablename__ = "tracked_items"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    source_url: Mapped[str] = mapped_column(String(500), nullable=False, unique=True)
    category_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("categories.id"), nullable=False
    )
    classification: Mapped[str] = mapped_column(
        String(20), nullable=False, default=Classification.BUG.value
    )
    owner: Mapped[str] = mapped_column(String(255), nullable=False)
    repo_name: Mapped[str] = mapped_column(String(255), nullable=False)
    item_number: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, nullable=False, server_default=func.now()
    )

    # Relationships
    category: Mapped[Category] = relationship("Category", back_populates="items")

    def __init__(
        self,
        source_url: str,
        category_id: int,
        owner: str,
        repo_name: str,
        item_number: int,
        classification: str | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.source_url = source_url
        self.category_id = category_id
        self.owner = owner
        self.repo_name = repo_name
        self.item_number = item_number
        self.classification = (
            classification if classification is not None else Classification.BUG.value
        )

    @property
    def item_classification(self) -> Classification:
        """Get classification as Classification enum."""
        return Classification(self.classification)

    @property
    def category_name(self) -> str:
        """Name of the owning category. Requires the category to be loaded."""
        return self.category.name

    def __repr__(self) -> str:
        return f"<TrackedItem(id={self.id!r}, source_url={self.source_url!r})>"
