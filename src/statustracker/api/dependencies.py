"""FastAPI dependencies for dependency injection."""

from __future__ import annotations

from collections.abc import Generator  # noqa: TC003
from typing import Annotated

from fastapi import Depends, Request

from statustracker.tracker import TrackerService


def get_tracker_service(request: Request) -> Generator[TrackerService, None, None]:
    """Dependency that provides the TrackerService built at startup.

    The service lives on ``app.state`` so each application instance carries
    its own store and client.
    """
    service: TrackerService | None = getattr(request.app.state, "tracker_service", None)
    if service is None:
        raise RuntimeError("TrackerService not initialized. Is the app lifespan running?")
    yield service


# Type alias for dependency injection
TrackerServiceDep = Annotated[TrackerService, Depends(get_tracker_service)]
