"""Shared pytest fixtures for the stackgen test suite.

Provides reusable fixtures for:
- Temporary settings files and configuration
- Sample generation requests and generated projects
- A stubbed GitHub API built on ``httpx.MockTransport``
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

import httpx
import pytest

from stackgen.config import Config, GitHubConfig
from stackgen.scaffolder import GeneratedProject, GenerationRequest
from stackgen.settings import SettingsStore


# ---------------------------------------------------------------------------
# Paths & configuration
# ---------------------------------------------------------------------------


@pytest.fixture
def settings_path(tmp_path: Path) -> Path:
    """Location of a settings file that does not exist yet."""
    return tmp_path / "stackgen" / "settings.json"


@pytest.fixture
def config(tmp_path: Path, settings_path: Path) -> Config:
    """Configuration pointing every path into ``tmp_path``."""
    return Config(
        settings_path=settings_path,
        output_dir=tmp_path / "output",
        github=GitHubConfig(api_url="https://api.github.test"),
    )


@pytest.fixture
def store(settings_path: Path) -> SettingsStore:
    return SettingsStore(settings_path)


def write_raw_settings(path: Path, values: dict[str, Any]) -> None:
    """Write a settings file the way the store does (JSON string per key)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps({key: json.dumps(value) for key, value in values.items()}),
        encoding="utf-8",
    )


# ---------------------------------------------------------------------------
# Requests & projects
# ---------------------------------------------------------------------------


@pytest.fixture
def demo_request() -> GenerationRequest:
    return GenerationRequest(app_name="Demo", description="test app", stack="HTML")


@pytest.fixture
def three_file_project() -> GeneratedProject:
    """A project with three files, uploaded in insertion order."""
    return GeneratedProject(
        files={
            "package.json": '{"name": "demo"}',
            "index.js": "console.log('hi')\n",
            "README.md": "# Demo\n",
        },
        main_language="javascript",
    )


# ---------------------------------------------------------------------------
# Stubbed GitHub API
# ---------------------------------------------------------------------------


class GitHubStub:
    """Records requests and answers them with per-route status codes.

    ``upload_status`` maps a file path to the status returned for its PUT;
    unlisted paths get 201.
    """

    def __init__(
        self,
        user_status: int = 200,
        login: str | None = "octocat",
        repo_status: int = 201,
        upload_status: dict[str, int] | None = None,
    ) -> None:
        self.user_status = user_status
        self.login = login
        self.repo_status = repo_status
        self.upload_status = upload_status or {}
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if request.method == "GET" and path == "/user":
            body = {"login": self.login} if self.login else {}
            return httpx.Response(self.user_status, json=body)
        if request.method == "POST" and path == "/user/repos":
            return httpx.Response(self.repo_status, json={})
        if request.method == "PUT" and "/contents/" in path:
            file_path = json.loads(request.content)["message"].removeprefix("add ")
            return httpx.Response(self.upload_status.get(file_path, 201), json={})
        return httpx.Response(404, json={"message": "Not Found"})

    @property
    def uploads(self) -> list[dict[str, Any]]:
        return [json.loads(r.content) for r in self.requests if r.method == "PUT"]

    def client_factory(self, base_url: str) -> Callable[[str], httpx.AsyncClient]:
        """Drop-in replacement for ``GitHubPublisher._client``."""

        def _factory(token: str) -> httpx.AsyncClient:
            return httpx.AsyncClient(
                base_url=base_url,
                transport=httpx.MockTransport(self.handler),
                headers={"Authorization": f"Bearer {token}"},
            )

        return _factory


@pytest.fixture
def github_stub() -> GitHubStub:
    return GitHubStub()


@pytest.fixture
def make_github_stub() -> type[GitHubStub]:
    """The stub class itself, for tests that need non-default responses."""
    return GitHubStub


@pytest.fixture
def write_settings() -> Callable[[Path, dict[str, Any]], None]:
    return write_raw_settings


@pytest.fixture
def restore_root_logger():
    """Undo ``setup_logging`` changes to the root logger after a test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
