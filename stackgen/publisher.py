"""Publish a generated project to a new GitHub repository.

Wraps the three GitHub REST calls the publish flow needs (``GET /user``,
``POST /user/repos``, ``PUT /repos/{owner}/{repo}/contents/{path}``) in an
async client.  The calls form a strict chain: identity lookup, repository
creation, then one upload per file in mapping order.  The first failing step
stops the chain; there is no retry and no rollback of what already landed
on GitHub.

Typical usage::

    publisher = GitHubPublisher()
    result = await publisher.publish(token, project, "My App", "demo")
    if not result.success:
        print(result.error)
"""

from __future__ import annotations

import base64
import logging
from urllib.parse import quote

import httpx
from pydantic import BaseModel, Field

from stackgen.scaffolder import GeneratedProject
from stackgen.utils import repo_name

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"


# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class PublishError(Exception):
    """Base class for every publish-flow failure."""


class AuthMissing(PublishError):
    """No access token has been supplied yet."""

    def __init__(self) -> None:
        super().__init__("Hubungkan GitHub dulu")


class NoContentToPublish(PublishError):
    """Publish was attempted before anything was generated."""

    def __init__(self) -> None:
        super().__init__("Tidak ada file untuk dipush")


class IdentityLookupFailed(PublishError):
    """``GET /user`` did not return a usable login."""

    def __init__(self, detail: str) -> None:
        self.detail = detail
        super().__init__(f"Gagal get user: {detail}")


class RepositoryCreationFailed(PublishError):
    """``POST /user/repos`` returned something other than 2xx or 422."""

    def __init__(self, repo: str, detail: str) -> None:
        self.repo = repo
        self.detail = detail
        super().__init__(f"Gagal membuat repo {repo}: {detail}")


class FileUploadFailed(PublishError):
    """A single file upload failed; later files were not attempted."""

    def __init__(self, path: str, detail: str) -> None:
        self.path = path
        self.detail = detail
        super().__init__(f"Gagal commit {path}: {detail}")


# ---------------------------------------------------------------------------
# Result model
# ---------------------------------------------------------------------------


class PublishResult(BaseModel):
    """Outcome of one publish attempt."""

    success: bool = Field(default=True, description="Whether every step succeeded")
    owner: str = Field(default="", description="Login of the authenticated user")
    repo: str = Field(default="", description="Derived repository name")
    uploaded: list[str] = Field(
        default_factory=list, description="Paths uploaded before success or failure"
    )
    error: str | None = Field(default=None, description="Short message on failure")

    @property
    def html_url(self) -> str:
        """Browser URL of the repository (empty until the owner is known)."""
        if not self.owner or not self.repo:
            return ""
        return f"https://github.com/{self.owner}/{self.repo}"


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


class GitHubPublisher:
    """Async client for the subset of the GitHub REST API used to publish.

    A fresh ``httpx.AsyncClient`` is opened per publish so no connection
    state outlives a single operation.
    """

    def __init__(
        self,
        base_url: str = GITHUB_API_URL,
        timeout: int = 30,
        private: bool = False,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.private = private

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _client(self, token: str) -> httpx.AsyncClient:
        """Return a fresh ``AsyncClient`` authorised with *token*."""
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout, connect=10.0),
            headers={
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
            },
        )

    @staticmethod
    def _encode_content(content: str) -> str:
        """Base64 of the UTF-8 bytes of *content*, as the contents API expects."""
        return base64.b64encode(content.encode("utf-8")).decode("ascii")

    @staticmethod
    def _contents_path(owner: str, repo: str, path: str) -> str:
        return f"/repos/{owner}/{repo}/contents/{quote(path, safe='')}"

    # ------------------------------------------------------------------
    # Individual steps
    # ------------------------------------------------------------------

    async def get_login(self, client: httpx.AsyncClient) -> str:
        """Resolve the login handle of the token's owner."""
        try:
            response = await client.get("/user")
        except httpx.HTTPError as exc:
            raise IdentityLookupFailed(str(exc)) from exc
        if not response.is_success:
            raise IdentityLookupFailed(f"HTTP {response.status_code}")
        try:
            data = response.json()
        except ValueError as exc:
            raise IdentityLookupFailed("response is not JSON") from exc
        login = data.get("login") if isinstance(data, dict) else None
        if not login:
            raise IdentityLookupFailed("response has no login")
        return login

    async def create_repository(
        self, client: httpx.AsyncClient, name: str, description: str
    ) -> bool:
        """Create the repository for the authenticated user.

        Returns:
            ``True`` if it was created, ``False`` if GitHub answered 422
            (the repository already exists), which is not an error.
        """
        payload = {"name": name, "description": description, "private": self.private}
        try:
            response = await client.post("/user/repos", json=payload)
        except httpx.HTTPError as exc:
            raise RepositoryCreationFailed(name, str(exc)) from exc
        if response.status_code == 422:
            logger.info("Repository %s already exists; uploading into it", name)
            return False
        if not response.is_success:
            raise RepositoryCreationFailed(name, f"HTTP {response.status_code}")
        return True

    async def upload_file(
        self,
        client: httpx.AsyncClient,
        owner: str,
        repo: str,
        path: str,
        content: str,
    ) -> None:
        """Commit a single file through the contents API."""
        payload = {"message": f"add {path}", "content": self._encode_content(content)}
        try:
            response = await client.put(self._contents_path(owner, repo, path), json=payload)
        except httpx.HTTPError as exc:
            raise FileUploadFailed(path, str(exc)) from exc
        if not response.is_success:
            raise FileUploadFailed(path, f"HTTP {response.status_code}")

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def publish(
        self,
        token: str | None,
        project: GeneratedProject | None,
        app_name: str,
        description: str = "",
    ) -> PublishResult:
        """Push every file of *project* into a repository named after *app_name*.

        Never raises for publish-flow failures: they are logged and returned
        as ``PublishResult(success=False, error=...)`` with ``uploaded``
        listing the files that made it before the failure.
        """
        result = PublishResult(repo=repo_name(app_name))
        try:
            if not token:
                raise AuthMissing()
            if project is None or not project.files:
                raise NoContentToPublish()

            async with self._client(token) as client:
                result.owner = await self.get_login(client)
                await self.create_repository(client, result.repo, description)
                for path, content in project.files.items():
                    await self.upload_file(client, result.owner, result.repo, path, content)
                    result.uploaded.append(path)
        except PublishError as exc:
            logger.error("Publish to GitHub failed: %s", exc)
            result.success = False
            result.error = str(exc)
        return result
