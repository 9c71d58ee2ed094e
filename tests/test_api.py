"""Tests for the GitLab API client."""

from __future__ import annotations

import json

import httpx
import pytest
import respx
from labcli.api import (
    GitLabApiError,
    GitLabAuthError,
    GitLabClient,
    GitLabConnectionError,
    GitLabNotFoundError,
)
from labcli.config import LabConfig

BASE = "https://gitlab.example.com/api/v4"
MR_URL = "https://gitlab.example.com/group/project/-/merge_requests/7"


@pytest.fixture
def client():
    client = GitLabClient(LabConfig(url="https://gitlab.example.com", token="test-token"))
    yield client
    client.close()


@pytest.fixture
def mock_api():
    with respx.mock(base_url=BASE) as router:
        yield router


def test_encode_id() -> None:
    assert GitLabClient._encode_id(123) == "123"
    assert GitLabClient._encode_id("group/sub/project") == "group%2Fsub%2Fproject"


def test_create_mr_note_posts_body(client: GitLabClient, mock_api) -> None:
    route = mock_api.post("/projects/123/merge_requests/7/notes").mock(
        return_value=httpx.Response(201, json={"id": 99, "body": "Hello"})
    )

    note = client.create_mr_note(123, 7, "Hello")

    assert note["id"] == 99
    request = route.calls.last.request
    assert json.loads(request.content) == {"body": "Hello"}
    assert request.headers["PRIVATE-TOKEN"] == "test-token"


def test_mr_note_url(client: GitLabClient, mock_api) -> None:
    mock_api.post("/projects/123/merge_requests/7/notes").mock(
        return_value=httpx.Response(201, json={"id": 99})
    )
    mock_api.get("/projects/123/merge_requests/7").mock(
        return_value=httpx.Response(200, json={"iid": 7, "web_url": MR_URL})
    )

    assert client.mr_note_url(123, 7, "Hello") == f"{MR_URL}#note_99"


def test_find_mr_for_branch(client: GitLabClient, mock_api) -> None:
    route = mock_api.get("/projects/123/merge_requests").mock(
        return_value=httpx.Response(200, json=[{"iid": 4, "source_branch": "feature"}])
    )

    mr = client.find_mr_for_branch(123, "feature")

    assert mr is not None and mr["iid"] == 4
    params = route.calls.last.request.url.params
    assert params["source_branch"] == "feature"
    assert params["state"] == "opened"


def test_find_mr_for_branch_none(client: GitLabClient, mock_api) -> None:
    mock_api.get("/projects/123/merge_requests").mock(return_value=httpx.Response(200, json=[]))
    assert client.find_mr_for_branch(123, "feature") is None


def test_auth_error(client: GitLabClient, mock_api) -> None:
    mock_api.post("/projects/123/merge_requests/7/notes").mock(
        return_value=httpx.Response(401, text="401 Unauthorized")
    )
    with pytest.raises(GitLabAuthError) as exc_info:
        client.create_mr_note(123, 7, "Hello")
    assert exc_info.value.status_code == 401


def test_not_found_error(client: GitLabClient, mock_api) -> None:
    mock_api.get("/projects/123/merge_requests/999").mock(
        return_value=httpx.Response(404, text="404 Not Found")
    )
    with pytest.raises(GitLabNotFoundError):
        client.get_merge_request(123, 999)


def test_server_error(client: GitLabClient, mock_api) -> None:
    mock_api.post("/projects/123/merge_requests/7/notes").mock(
        return_value=httpx.Response(500, text="boom")
    )
    with pytest.raises(GitLabApiError) as exc_info:
        client.create_mr_note(123, 7, "Hello")
    assert exc_info.value.status_code == 500
    assert "boom" in str(exc_info.value)


def test_invalid_json(client: GitLabClient, mock_api) -> None:
    mock_api.get("/projects/123/merge_requests/7").mock(
        return_value=httpx.Response(200, text="<html>login</html>")
    )
    with pytest.raises(GitLabApiError, match="JSON parse error"):
        client.get_merge_request(123, 7)


def test_network_error(client: GitLabClient, mock_api) -> None:
    mock_api.post("/projects/123/merge_requests/7/notes").mock(
        side_effect=httpx.ConnectError("connection refused")
    )
    with pytest.raises(GitLabConnectionError, match="connection refused"):
        client.create_mr_note(123, 7, "Hello")


def test_mr_note_url_creates_nothing_when_lookup_fails(client: GitLabClient) -> None:
    with respx.mock(base_url=BASE, assert_all_called=False) as router:
        post = router.post("/projects/123/merge_requests/7/notes").mock(
            return_value=httpx.Response(201, json={"id": 5})
        )
        router.get("/projects/123/merge_requests/7").mock(
            side_effect=httpx.ConnectError("connection refused")
        )

        with pytest.raises(GitLabConnectionError):
            client.mr_note_url(123, 7, "Hello")

        assert not post.called


def test_mr_note_url_creates_nothing_for_missing_mr(client: GitLabClient) -> None:
    with respx.mock(base_url=BASE, assert_all_called=False) as router:
        post = router.post("/projects/123/merge_requests/7/notes").mock(
            return_value=httpx.Response(201, json={"id": 5})
        )
        router.get("/projects/123/merge_requests/7").mock(
            return_value=httpx.Response(404, text="404 Not Found")
        )

        with pytest.raises(GitLabNotFoundError):
            client.mr_note_url(123, 7, "Hello")

        assert not post.called
