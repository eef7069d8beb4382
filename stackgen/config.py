"""stackgen configuration.

Typed configuration for the command-line host.  All settings use Pydantic v2
models so they can be validated at construction time and serialised to/from
JSON or environment variables without boiler-plate.  The template generator
itself reads no configuration.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

FREE_CREDITS = 10


class GitHubConfig(BaseModel):
    """Configuration for the GitHub REST API used when publishing."""

    api_url: str = Field(default="https://api.github.com")
    timeout: int = Field(default=30, ge=1, description="Per-request timeout in seconds")
    private: bool = Field(
        default=False, description="Create published repositories as private"
    )


class Config(BaseModel):
    """Global stackgen configuration.

    Created once by the CLI entry point (usually via :meth:`from_env`) and
    passed to ``CodeGeneratorApp``.
    """

    settings_path: Path = Field(default_factory=lambda: Path.home() / ".stackgen" / "settings.json")
    output_dir: Path = Field(default=Path("./output"))
    free_credits: int = Field(
        default=FREE_CREDITS, ge=0, description="Credits granted when no counter is stored yet"
    )
    github: GitHubConfig = Field(default_factory=GitHubConfig)

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a configuration file written as JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        ``STACKGEN_CONFIG`` names an optional JSON file loaded with
        :meth:`load`; the remaining variables override its values.

        Recognised variables (all optional):
            STACKGEN_CONFIG, STACKGEN_SETTINGS_PATH, STACKGEN_OUTPUT_DIR,
            STACKGEN_FREE_CREDITS, STACKGEN_GITHUB_API_URL,
            STACKGEN_GITHUB_TIMEOUT, STACKGEN_PRIVATE_REPOS.
        """
        config_file = os.environ.get("STACKGEN_CONFIG")
        base = cls.load(Path(config_file)) if config_file else cls()

        github_updates: dict[str, Any] = {}
        if os.environ.get("STACKGEN_GITHUB_API_URL"):
            github_updates["api_url"] = os.environ["STACKGEN_GITHUB_API_URL"]
        if os.environ.get("STACKGEN_GITHUB_TIMEOUT"):
            github_updates["timeout"] = int(os.environ["STACKGEN_GITHUB_TIMEOUT"])
        if os.environ.get("STACKGEN_PRIVATE_REPOS"):
            github_updates["private"] = os.environ["STACKGEN_PRIVATE_REPOS"].strip().lower() in (
                "1",
                "true",
                "yes",
            )

        updates: dict[str, Any] = {}
        if os.environ.get("STACKGEN_SETTINGS_PATH"):
            updates["settings_path"] = Path(os.environ["STACKGEN_SETTINGS_PATH"])
        if os.environ.get("STACKGEN_OUTPUT_DIR"):
            updates["output_dir"] = Path(os.environ["STACKGEN_OUTPUT_DIR"])
        if os.environ.get("STACKGEN_FREE_CREDITS"):
            updates["free_credits"] = int(os.environ["STACKGEN_FREE_CREDITS"])

        updates["github"] = base.github.model_copy(update=github_updates)
        return base.model_copy(update=updates)
