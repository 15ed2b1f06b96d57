"""GitHubClient - Fetches live issue and pull request state from the REST API."""

from __future__ import annotations

import re
from typing import Any

import httpx

from statustracker.github.exceptions import (
    InvalidReferenceError,
    ItemNotFoundError,
    RateLimitedError,
    UpstreamError,
)
from statustracker.github.models import ItemKind, ItemReference, ItemState, Label, LiveItem
from statustracker.logging import get_logger, sanitize_for_log, truncate_output

logger = get_logger("github")

USER_AGENT = "GitHub-Status-Tracker"
UNEXPECTED_BODY = "GitHub API returned an unexpected body"

# https://github.com/owner/repo/issues/123 or https://github.com/owner/repo/pull/456
_REFERENCE_PATTERN = re.compile(r"github\.com/([^/]+)/([^/]+)/(?:issues|pull)/(\d+)")


def parse_reference(url: str) -> ItemReference:
    """Parse an issue or pull request URL into owner, repo and number.

    The issues/pull segment is not kept: the API serves both kinds under
    the issues endpoint and the kind is read from the response instead.

    Args:
        url: URL such as https://github.com/owner/repo/issues/123

    Returns:
        ItemReference with owner, repo and number

    Raises:
        InvalidReferenceError: If the URL has any other shape
    """
    match = _REFERENCE_PATTERN.search(url)
    if match is None:
        raise InvalidReferenceError(url)

    number = int(match.group(3))
    if number <= 0:
        raise InvalidReferenceError(url)

    return ItemReference(owner=match.group(1), repo=match.group(2), number=number)


class GitHubClient:
    """Client for single issue lookups against the GitHub REST API.

    The token is optional; without it requests are anonymous and subject to
    the lower unauthenticated rate limit. No retries are performed.
    """

    def __init__(
        self,
        token: str | None = None,
        base_url: str = "https://api.github.com",
        timeout: float = 5.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize GitHub client.

        Args:
            token: GitHub token sent as ``Authorization: token <value>``
            base_url: GitHub API base URL (for testing/enterprise)
            timeout: Per-request timeout in seconds
            transport: Custom httpx transport (for testing)
        """
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        """Get or create HTTP client for the REST API."""
        if self._client is None:
            headers = {
                "Accept": "application/vnd.github+json",
                "User-Agent": USER_AGENT,
            }
            if self.token:
                headers["Authorization"] = f"token {self.token}"
            self._client = httpx.Client(
                base_url=self.base_url,
                headers=headers,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def fetch_item(self, owner: str, repo: str, number: int) -> LiveItem:
        """Fetch the live state of an issue or pull request.

        Args:
            owner: Repository owner
            repo: Repository name
            number: Issue or pull request number

        Returns:
            LiveItem with title, state, labels and kind

        Raises:
            ItemNotFoundError: On 404
            RateLimitedError: On 403
            UpstreamError: On any other non-2xx status, timeout or transport failure
        """
        path = f"/repos/{owner}/{repo}/issues/{number}"
        logger.debug("Fetching %s/%s#%d", owner, repo, number)

        try:
            response = self.client.get(path)
        except httpx.TimeoutException as e:
            logger.warning("Timed out fetching %s/%s#%d", owner, repo, number)
            raise UpstreamError(f"GitHub API request timed out after {self.timeout}s") from e
        except httpx.HTTPError as e:
            logger.warning("Request to GitHub failed for %s/%s#%d: %s", owner, repo, number, e)
            raise UpstreamError(f"GitHub API request failed: {e}") from e

        if response.status_code == 404:
            raise ItemNotFoundError(owner, repo, number)
        if response.status_code == 403:
            raise RateLimitedError()
        if not 200 <= response.status_code < 300:
            logger.error(
                "GitHub API error %d for %s: %s",
                response.status_code,
                path,
                sanitize_for_log(truncate_output(response.text)),
            )
            raise UpstreamError(
                f"GitHub API error: {response.status_code}", status_code=response.status_code
            )

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamError("GitHub API returned an invalid JSON body") from e

        if not isinstance(data, dict):
            logger.error("Unexpected body for %s: %s", path, truncate_output(repr(data)))
            raise UpstreamError(UNEXPECTED_BODY)

        try:
            return _to_live_item(data)
        except (KeyError, TypeError, AttributeError) as e:
            logger.error("Could not map body for %s: %r", path, e)
            raise UpstreamError(UNEXPECTED_BODY) from e


def _text(data: dict[str, Any], key: str, required: bool = False) -> str | None:
    value = data.get(key)
    if value is None:
        if required:
            raise KeyError(key)
        return None
    if not isinstance(value, str):
        raise TypeError(f"{key} is {type(value).__name__}, expected str")
    return value


def _to_live_item(data: dict[str, Any]) -> LiveItem:
    """Map an issues endpoint payload to a LiveItem.

    Raises KeyError, TypeError or AttributeError when a field has the wrong shape.
    """
    try:
        state = ItemState(data.get("state") or ItemState.UNKNOWN.value)
    except ValueError:
        state = ItemState.UNKNOWN

    labels = [
        Label(name=_text(label, "name", required=True), color=_text(label, "color") or "")
        for label in data.get("labels") or []
    ]

    return LiveItem(
        title=_text(data, "title") or "",
        state=state,
        kind=ItemKind.PULL_REQUEST if data.get("pull_request") else ItemKind.ISSUE,
        url=_text(data, "html_url") or "",
        labels=labels,
        created_at=_text(data, "created_at"),
        updated_at=_text(data, "updated_at"),
    )
