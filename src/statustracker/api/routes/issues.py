"""Tracked issue and pull request endpoints."""

from fastapi import APIRouter, status

from statustracker.api.dependencies import TrackerServiceDep
from statustracker.api.models import (
    DeleteResponse,
    ErrorResponse,
    TrackedItemCreate,
    TrackedItemResponse,
    record_to_response,
)
from statustracker.tracker import group_records

router = APIRouter(prefix="/issues", tags=["issues"])


@router.get("", response_model=list[TrackedItemResponse])
def list_issues(service: TrackerServiceDep) -> list[TrackedItemResponse]:
    """List tracked items with their live GitHub state."""
    records = service.list_with_live_state()
    return [record_to_response(r) for r in records]


@router.get("/grouped", response_model=dict[str, dict[str, list[TrackedItemResponse]]])
def list_issues_grouped(
    service: TrackerServiceDep,
) -> dict[str, dict[str, list[TrackedItemResponse]]]:
    """List tracked items grouped by type (Feature/Bug), then by category."""
    grouped = group_records(service.list_with_live_state())
    return {
        item_type: {
            category: [record_to_response(r) for r in records]
            for category, records in categories.items()
        }
        for item_type, categories in grouped.items()
    }


@router.post(
    "",
    response_model=TrackedItemResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_409_CONFLICT: {"model": ErrorResponse},
    },
)
def create_issue(item: TrackedItemCreate, service: TrackerServiceDep) -> TrackedItemResponse:
    """Track an issue or pull request after verifying it on GitHub."""
    record = service.create_tracked(item.github_url, item.category_name, item.type)
    return record_to_response(record)


@router.delete(
    "/{item_id}",
    response_model=DeleteResponse,
    responses={status.HTTP_404_NOT_FOUND: {"model": ErrorResponse}},
)
def delete_issue(item_id: int, service: TrackerServiceDep) -> DeleteResponse:
    """Stop tracking an item."""
    service.delete_tracked(item_id)
    return DeleteResponse(success=True, message="Issue deleted")
