"""Unit tests for GitHubClient."""

from unittest.mock import MagicMock

import httpx
import pytest

from statustracker.github import (
    GitHubClient,
    ItemKind,
    ItemNotFoundError,
    ItemState,
    Label,
    RateLimitedError,
    UpstreamError,
)


@pytest.fixture
def mock_client() -> MagicMock:
    """Create a mock HTTP client."""
    return MagicMock()


@pytest.fixture
def github(mock_client: MagicMock) -> GitHubClient:
    """Create a GitHubClient instance with mocked client."""
    client = GitHubClient(token="test-token")
    client._client = mock_client
    return client


def _mock_response(status_code: int = 200, data: dict | None = None, text: str = "") -> MagicMock:
    """Create a mock REST response."""
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = data if data is not None else {}
    response.text = text
    return response


@pytest.mark.unit
class TestFetchItem:
    """Tests for fetch_item."""

    def test_fetch_issue(self, github: GitHubClient, mock_client: MagicMock, issue_payload) -> None:
        """Title, state, labels and timestamps are mapped."""
        mock_client.get.return_value = _mock_response(data=issue_payload())

        item = github.fetch_item("acme", "widgets", 42)

        mock_client.get.assert_called_once_with("/repos/acme/widgets/issues/42")
        assert item.title == "Fix crash"
        assert item.state == ItemState.OPEN
        assert item.kind == ItemKind.ISSUE
        assert item.labels == [Label(name="p1", color="ff0000")]
        assert item.url == "https://github.com/acme/widgets/issues/42"
        assert item.created_at == "2024-01-01T00:00:00Z"
        assert item.updated_at == "2024-01-02T00:00:00Z"

    def test_fetch_pull_request_kind(
        self, github: GitHubClient, mock_client: MagicMock, issue_payload
    ) -> None:
        """Presence of pull_request marks the item as a pull request."""
        payload = issue_payload(
            state="closed",
            pull_request={"url": "https://api.github.com/repos/acme/widgets/pulls/7"},
        )
        mock_client.get.return_value = _mock_response(data=payload)

        item = github.fetch_item("acme", "widgets", 7)

        assert item.kind == ItemKind.PULL_REQUEST
        assert item.state == ItemState.CLOSED

    def test_labels_keep_order(
        self, github: GitHubClient, mock_client: MagicMock, issue_payload
    ) -> None:
        payload = issue_payload(
            labels=[
                {"name": "bug", "color": "d73a4a"},
                {"name": "help wanted", "color": "008672"},
            ]
        )
        mock_client.get.return_value = _mock_response(data=payload)

        item = github.fetch_item("acme", "widgets", 42)

        assert [label.name for label in item.labels] == ["bug", "help wanted"]

    def test_unexpected_state_is_unknown(
        self, github: GitHubClient, mock_client: MagicMock, issue_payload
    ) -> None:
        mock_client.get.return_value = _mock_response(data=issue_payload(state="merged"))

        item = github.fetch_item("acme", "widgets", 42)

        assert item.state == ItemState.UNKNOWN

    def test_404_raises_not_found(self, github: GitHubClient, mock_client: MagicMock) -> None:
        mock_client.get.return_value = _mock_response(status_code=404)

        with pytest.raises(ItemNotFoundError) as exc_info:
            github.fetch_item("acme", "widgets", 42)

        assert exc_info.value.number == 42
        assert "acme/widgets#42" in str(exc_info.value)

    def test_403_raises_rate_limited(self, github: GitHubClient, mock_client: MagicMock) -> None:
        mock_client.get.return_value = _mock_response(status_code=403)

        with pytest.raises(RateLimitedError) as exc_info:
            github.fetch_item("acme", "widgets", 42)

        assert "rate limit" in str(exc_info.value)

    def test_other_status_raises_upstream_error(
        self, github: GitHubClient, mock_client: MagicMock
    ) -> None:
        """The raw status code is carried on the error."""
        mock_client.get.return_value = _mock_response(status_code=500, text="boom")

        with pytest.raises(UpstreamError) as exc_info:
            github.fetch_item("acme", "widgets", 42)

        assert exc_info.value.status_code == 500
        assert "500" in str(exc_info.value)

    def test_timeout_raises_upstream_error(
        self, github: GitHubClient, mock_client: MagicMock
    ) -> None:
        mock_client.get.side_effect = httpx.ReadTimeout("timed out")

        with pytest.raises(UpstreamError) as exc_info:
            github.fetch_item("acme", "widgets", 42)

        assert exc_info.value.status_code is None
        assert "timed out" in str(exc_info.value)

    def test_transport_error_raises_upstream_error(
        self, github: GitHubClient, mock_client: MagicMock
    ) -> None:
        mock_client.get.side_effect = httpx.ConnectError("connection refused")

        with pytest.raises(UpstreamError):
            github.fetch_item("acme", "widgets", 42)

    def test_invalid_json_raises_upstream_error(
        self, github: GitHubClient, mock_client: MagicMock
    ) -> None:
        response = _mock_response()
        response.json.side_effect = ValueError("not json")
        mock_client.get.return_value = response

        with pytest.raises(UpstreamError):
            github.fetch_item("acme", "widgets", 42)


@pytest.mark.unit
class TestUnexpectedBody:
    """Valid JSON with the wrong shape becomes UpstreamError."""

    @pytest.mark.parametrize("body", [[], ["not", "an", "object"], None, "text", 42])
    def test_non_object_body(
        self, github: GitHubClient, mock_client: MagicMock, body: object
    ) -> None:
        response = _mock_response()
        response.json.return_value = body
        mock_client.get.return_value = response

        with pytest.raises(UpstreamError, match="unexpected body") as exc_info:
            github.fetch_item("acme", "widgets", 42)

        assert exc_info.value.status_code is None

    @pytest.mark.parametrize(
        "labels",
        [
            [{"color": "ff0000"}],
            [{"name": None, "color": "ff0000"}],
            [{"name": 7, "color": "ff0000"}],
            ["p1"],
            [["p1", "ff0000"]],
            42,
        ],
    )
    def test_malformed_labels(
        self, github: GitHubClient, mock_client: MagicMock, issue_payload, labels: object
    ) -> None:
        mock_client.get.return_value = _mock_response(data=issue_payload(labels=labels))

        with pytest.raises(UpstreamError, match="unexpected body"):
            github.fetch_item("acme", "widgets", 42)

    def test_label_without_color_gets_empty_color(
        self, github: GitHubClient, mock_client: MagicMock, issue_payload
    ) -> None:
        mock_client.get.return_value = _mock_response(data=issue_payload(labels=[{"name": "p1"}]))

        item = github.fetch_item("acme", "widgets", 42)

        assert item.labels == [Label(name="p1", color="")]

    @pytest.mark.parametrize("field", ["title", "html_url", "created_at", "updated_at"])
    def test_non_string_field(
        self, github: GitHubClient, mock_client: MagicMock, issue_payload, field: str
    ) -> None:
        mock_client.get.return_value = _mock_response(data=issue_payload(**{field: {"x": 1}}))

        with pytest.raises(UpstreamError, match="unexpected body"):
            github.fetch_item("acme", "widgets", 42)

    def test_missing_optional_fields_default(
        self, github: GitHubClient, mock_client: MagicMock
    ) -> None:
        mock_client.get.return_value = _mock_response(data={"state": "open"})

        item = github.fetch_item("acme", "widgets", 42)

        assert item.title == ""
        assert item.labels == []
        assert item.created_at is None


@pytest.mark.unit
class TestClientHeaders:
    """Tests for request headers on the real httpx client."""

    def test_token_sent_as_token_scheme(self) -> None:
        client = GitHubClient(token="secret")

        headers = client.client.headers

        assert headers["Authorization"] == "token secret"
        assert headers["User-Agent"] == "GitHub-Status-Tracker"
        client.close()

    def test_no_token_no_authorization(self) -> None:
        """Absence of a token is not an error."""
        client = GitHubClient()

        assert "Authorization" not in client.client.headers
        client.close()

    def test_close_resets_client(self) -> None:
        client = GitHubClient()
        _ = client.client

        client.close()

        assert client._client is None
