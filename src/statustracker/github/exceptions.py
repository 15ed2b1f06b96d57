"""Custom exceptions for the GitHub client."""

from __future__ import annotations


class GitHubError(Exception):
    """Base exception for GitHub client errors."""


class InvalidReferenceError(GitHubError):
    """URL does not point at a GitHub issue or pull request."""

    def __init__(self, url: str) -> None:
        super().__init__(
            "Invalid GitHub URL. Expected format: https://github.com/owner/repo/issues/123"
        )
        self.url = url


class ItemNotFoundError(GitHubError):
    """GitHub returned 404 for the issue or pull request."""

    def __init__(self, owner: str, repo: str, number: int) -> None:
        super().__init__(f"{owner}/{repo}#{number} not found. Please verify the URL.")
        self.owner = owner
        self.repo = repo
        self.number = number


class RateLimitedError(GitHubError):
    """GitHub refused the request with 403 (rate limit reached)."""

    def __init__(self) -> None:
        super().__init__("GitHub API rate limit reached. Please retry later.")


class UpstreamError(GitHubError):
    """Any other failed request: non-2xx status, transport error or bad body."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
