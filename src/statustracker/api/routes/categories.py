"""Category endpoints."""

from fastapi import APIRouter, Response, status

from statustracker.api.dependencies import TrackerServiceDep
from statustracker.api.models import (
    CategoryCreate,
    CategoryResponse,
    ErrorResponse,
    category_to_response,
)

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("", response_model=list[CategoryResponse])
def list_categories(service: TrackerServiceDep) -> list[CategoryResponse]:
    """List all categories, ordered by name."""
    return [category_to_response(c) for c in service.list_categories()]


@router.post(
    "",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_200_OK: {"model": CategoryResponse, "description": "Category already exists"},
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
    },
)
def create_category(
    category: CategoryCreate, response: Response, service: TrackerServiceDep
) -> CategoryResponse:
    """Create a category, or return the existing one with the same name."""
    created_or_existing, created = service.ensure_category(category.name)
    if not created:
        response.status_code = status.HTTP_200_OK
    return category_to_response(created_or_existing)
