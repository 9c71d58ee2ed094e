"""GitLab REST API v4 client using httpx."""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import quote

import httpx

from .config import LabConfig

logger = logging.getLogger(__name__)


class GitLabError(RuntimeError):
    """Base exception for GitLab operations."""


class GitLabConnectionError(GitLabError):
    """Raised when the GitLab instance cannot be reached."""


class GitLabApiError(GitLabError):
    """Raised when the GitLab API returns a non-success response."""

    def __init__(self, status_code: int, status_text: str, body: str = "") -> None:
        self.status_code = status_code
        self.status_text = status_text
        self.body = body
        super().__init__(f"GitLab API Error {status_code} {status_text}: {body}")


class GitLabAuthError(GitLabApiError):
    """Raised on 401/403 authentication failures."""

    def __init__(self, status_code: int, body: str = "") -> None:
        status_text = "Unauthorized" if status_code == 401 else "Forbidden"
        super().__init__(status_code, status_text, body)


class GitLabNotFoundError(GitLabApiError):
    """Raised on 404 responses."""

    def __init__(self, body: str = "") -> None:
        super().__init__(404, "Not Found", body)


class GitLabClient:
    """Synchronous HTTP client for the parts of the GitLab API labcli uses."""

    def __init__(self, config: LabConfig) -> None:
        self.config = config
        self._client = httpx.Client(
            base_url=config.api_url,
            headers={
                "PRIVATE-TOKEN": config.token,
                "Content-Type": "application/json",
            },
            timeout=config.timeout,
            verify=config.ssl_verify,
        )

    def close(self) -> None:
        self._client.close()

    @staticmethod
    def _encode_id(project_id: str | int) -> str:
        """Encode a project ID. Numeric IDs pass through; paths are URL-encoded."""
        if isinstance(project_id, int):
            return str(project_id)
        return quote(project_id, safe="")

    def _request(
        self,
        method: str,
        path: str,
        *,
        json_data: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        logger.debug("%s %s params=%s", method, path, params)
        try:
            resp = self._client.request(method, path, json=json_data, params=params)
        except httpx.RequestError as exc:
            logger.error("Network error for %s %s: %s", method, path, exc)
            raise GitLabConnectionError(
                f"Cannot reach GitLab at {self.config.url}: {exc}"
            ) from exc

        if resp.status_code in (401, 403):
            raise GitLabAuthError(resp.status_code, resp.text)
        if resp.status_code == 404:
            raise GitLabNotFoundError(resp.text)
        if not resp.is_success:
            raise GitLabApiError(resp.status_code, resp.reason_phrase or "", resp.text)

        try:
            return resp.json()
        except ValueError as exc:
            raise GitLabApiError(
                resp.status_code, f"JSON parse error: {exc}", resp.text[:500]
            ) from exc

    def get_merge_request(self, project_id: str | int, mr_iid: int) -> dict[str, Any]:
        enc = self._encode_id(project_id)
        return self._request("GET", f"/projects/{enc}/merge_requests/{mr_iid}")

    def find_mr_for_branch(
        self, project_id: str | int, branch: str
    ) -> dict[str, Any] | None:
        """Return the open merge request whose source branch is ``branch``."""
        enc = self._encode_id(project_id)
        mrs = self._request(
            "GET",
            f"/projects/{enc}/merge_requests",
            params={"state": "opened", "source_branch": branch},
        )
        if not mrs:
            logger.debug("No open MR found for branch '%s'", branch)
            return None
        return mrs[0]

    def create_mr_note(
        self, project_id: str | int, mr_iid: int, body: str
    ) -> dict[str, Any]:
        enc = self._encode_id(project_id)
        logger.info("Creating note on MR !%s in project %s", mr_iid, project_id)
        return self._request(
            "POST",
            f"/projects/{enc}/merge_requests/{mr_iid}/notes",
            json_data={"body": body},
        )

    def mr_note_url(self, project_id: str | int, mr_iid: int, body: str) -> str:
        """Create a note and return its web URL.

        The merge request is fetched first so a failed lookup leaves nothing
        created on the server.
        """
        mr = self.get_merge_request(project_id, mr_iid)
        note = self.create_mr_note(project_id, mr_iid, body)
        return f"{mr['web_url']}#note_{note['id']}"
