"""Exceptions for the Tracker service."""


class TrackerError(Exception):
    """Base exception for tracker service errors."""


class InvalidInputError(TrackerError):
    """Required input is missing or has a value outside the allowed set."""

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field
