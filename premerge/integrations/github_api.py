"""
PreMerge GitHub REST Client

Talks to the GitHub REST API to list the files of a pull request, fetch
their contents at the PR head and post the report comment.
"""

from __future__ import annotations

import base64
import binascii
import logging
from typing import Any, Iterator, Optional
from urllib.parse import quote

import requests

from premerge.core.orchestrator import ChangedFile, FetchError, ScanInput
from premerge.integrations.github import PullRequestContext

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"

# Only files that exist at the PR head are scanned
SCANNED_STATUSES = {"added", "modified"}

PER_PAGE = 100


class GitHubAPIError(Exception):
    """A GitHub API request failed."""


class GitHubClient:
    """Minimal GitHub REST client built on a requests session."""

    def __init__(
        self,
        token: str,
        api_url: str = GITHUB_API_URL,
        session: Optional[requests.Session] = None,
        timeout: float = 10,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            }
        )

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self.api_url}{path}"
        try:
            resp = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as exc:
            raise GitHubAPIError(f"{method} {path} failed: {exc}") from exc

        if resp.status_code >= 400:
            raise GitHubAPIError(f"{method} {path} returned HTTP {resp.status_code}")

        try:
            return resp.json()
        except ValueError as exc:
            raise GitHubAPIError(f"{method} {path} returned invalid JSON") from exc

    def list_pull_request_files(self, pr: PullRequestContext) -> Iterator[dict[str, Any]]:
        """Yield every file entry of a pull request, following pagination."""
        page = 1
        while True:
            entries = self._request(
                "GET",
                f"/repos/{pr.owner}/{pr.repo}/pulls/{pr.number}/files",
                params={"per_page": PER_PAGE, "page": page},
            )
            if not isinstance(entries, list):
                raise GitHubAPIError("Unexpected response listing pull request files")

            yield from entries

            if len(entries) < PER_PAGE:
                return
            page += 1

    def get_file_content(self, pr: PullRequestContext, path: str) -> dict[str, Any]:
        """Fetch a file's content object at the pull request head."""
        return self._request(
            "GET",
            f"/repos/{pr.owner}/{pr.repo}/contents/{quote(path)}",
            params={"ref": f"refs/pull/{pr.number}/head"},
        )

    def create_issue_comment(self, pr: PullRequestContext, body: str) -> dict[str, Any]:
        """Post a comment on the pull request conversation."""
        return self._request(
            "POST",
            f"/repos/{pr.owner}/{pr.repo}/issues/{pr.number}/comments",
            json={"body": body},
        )


class PullRequestFileSource:
    """
    File source over the added and modified files of a pull request.
    """

    def __init__(self, client: GitHubClient, pr: PullRequestContext) -> None:
        self.client = client
        self.pr = pr

    def list_files(self) -> Iterator[ChangedFile]:
        for entry in self.client.list_pull_request_files(self.pr):
            status = entry.get("status", "")
            if status not in SCANNED_STATUSES:
                logger.debug("Skipping %s (%s)", entry.get("filename"), status)
                continue

            yield ChangedFile(
                filename=entry["filename"],
                status=status,
                additions=entry.get("additions", 0),
                deletions=entry.get("deletions", 0),
            )

    def fetch(self, changed: ChangedFile) -> ScanInput:
        try:
            data = self.client.get_file_content(self.pr, changed.filename)
        except GitHubAPIError as exc:
            raise FetchError(str(exc)) from exc

        if not isinstance(data, dict) or data.get("type") != "file":
            raise FetchError("not a regular file")

        # Files over 1 MB come back without inline content
        if data.get("encoding") != "base64" or "content" not in data:
            raise FetchError("content not available inline (file too large?)")

        try:
            raw = base64.b64decode(data["content"])
            content = raw.decode("utf-8")
        except (binascii.Error, UnicodeDecodeError) as exc:
            raise FetchError(f"could not decode content: {exc}") from exc

        return ScanInput(
            filename=changed.filename,
            content=content,
            additions=changed.additions,
            deletions=changed.deletions,
        )
