"""Pydantic models for REST API."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


class ErrorResponse(BaseModel):
    """Body of every error response."""

    error: str


class HealthResponse(BaseModel):
    """Response model for the health check."""

    status: str
    timestamp: str


# Category models


class CategoryCreate(BaseModel):
    """Request model for creating a category.

    Presence is checked by the service so a missing name yields 400.
    """

    name: str | None = None


class CategoryResponse(BaseModel):
    """Response model for a category."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    created_at: datetime | None = None


def category_to_response(category: Any) -> CategoryResponse:
    """Convert a Category model to CategoryResponse."""
    return CategoryResponse.model_validate(category)


# Tracked item models


class TrackedItemCreate(BaseModel):
    """Request model for tracking an issue or pull request."""

    github_url: str | None = None
    category_name: str | None = None
    type: str | None = None


class LabelResponse(BaseModel):
    """Response model for a label."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    color: str


class TrackedItemResponse(BaseModel):
    """Response model for a tracked item merged with its live state."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    github_url: str
    category_name: str
    type: str
    owner: str
    repo: str
    item_number: int
    tracked_at: datetime | None = None
    title: str
    state: str
    kind: str | None = None
    url: str | None = None
    labels: list[LabelResponse] = []
    created_at: str | None = None
    updated_at: str | None = None
    error: str | None = None


def record_to_response(record: Any) -> TrackedItemResponse:
    """Convert a TrackedRecord to TrackedItemResponse."""
    return TrackedItemResponse.model_validate(record)


class DeleteResponse(BaseModel):
    """Response model for a successful delete."""

    success: bool
    message: str
