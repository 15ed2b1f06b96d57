"""REST API for the status tracker."""

from statustracker.api.app import app, create_app
from statustracker.api.models import (
    CategoryCreate,
    CategoryResponse,
    ErrorResponse,
    TrackedItemCreate,
    TrackedItemResponse,
)

__all__ = [
    "CategoryCreate",
    "CategoryResponse",
    "ErrorResponse",
    "TrackedItemCreate",
    "TrackedItemResponse",
    "app",
    "create_app",
]
