"""Stack template generator.

Takes a ``GenerationRequest`` (app name, description, stack, optional custom
language) and synthesises a small, fixed set of starter files for the chosen
stack.  Generation is pure: no filesystem or network access, no randomness,
and the same request always yields the same ``GeneratedProject``.  Writing
the result to disk is a separate step (:func:`write_project`).
"""

from __future__ import annotations

import json
from collections.abc import Callable
from enum import Enum
from pathlib import Path, PurePosixPath
from typing import Any

from pydantic import BaseModel, Field, field_validator

from stackgen.utils import manifest_name

from .templates import TemplateRenderer, write_file


# ---------------------------------------------------------------------------
# Stack identifiers
# ---------------------------------------------------------------------------


class Stack(str, Enum):
    """Supported target stacks.  The value is the display name."""

    REACT = "React"
    NODE = "Node.js"
    PHP = "PHP"
    LARAVEL = "Laravel"
    CODEIGNITER = "CodeIgniter"
    HTML = "HTML"
    GOLANG = "Golang"
    CUSTOM = "Custom"

    @classmethod
    def parse(cls, value: str | Stack | None) -> Stack:
        """Resolve a display name or short alias; anything unknown is Custom."""
        if isinstance(value, Stack):
            return value
        key = (value or "").strip().lower()
        return _STACK_ALIASES.get(key, cls.CUSTOM)


_STACK_ALIASES: dict[str, Stack] = {
    **{stack.value.lower(): stack for stack in Stack},
    "react": Stack.REACT,
    "node": Stack.NODE,
    "nodejs": Stack.NODE,
    "php": Stack.PHP,
    "laravel": Stack.LARAVEL,
    "codeigniter": Stack.CODEIGNITER,
    "ci4": Stack.CODEIGNITER,
    "html": Stack.HTML,
    "go": Stack.GOLANG,
    "golang": Stack.GOLANG,
    "custom": Stack.CUSTOM,
}


# ---------------------------------------------------------------------------
# Request / result models
# ---------------------------------------------------------------------------


class GenerationRequest(BaseModel):
    """What the user asked for.  Values are used verbatim, never sanitised."""

    app_name: str = Field(..., description="Application name, interpolated as-is")
    description: str = Field(default="", description="Short application description")
    stack: Stack = Field(default=Stack.CUSTOM, description="Target stack")
    language: str | None = Field(
        default=None, description="Custom language name (only used for the Custom stack)"
    )

    @field_validator("stack", mode="before")
    @classmethod
    def _coerce_stack(cls, value: Any) -> Stack:
        return Stack.parse(value if isinstance(value, (str, Stack)) else None)

    @field_validator("description", mode="before")
    @classmethod
    def _none_description(cls, value: Any) -> Any:
        return "" if value is None else value


class GeneratedProject(BaseModel):
    """The in-memory result of one generation request."""

    files: dict[str, str] = Field(
        default_factory=dict, description="Relative path -> file content, in display order"
    )
    main_language: str = Field(..., description="Language of the primary file")
    instructions: str | None = Field(
        default=None, description="Follow-up guidance for stacks without full scaffolding"
    )

    def file_paths(self) -> list[str]:
        """Return the file paths in generation order."""
        return list(self.files)

    def main_file(self) -> str:
        """Return the first generated path (the one a viewer opens first)."""
        return next(iter(self.files), "")


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------

LARAVEL_COMMAND = "composer create-project laravel/laravel"
CODEIGNITER_COMMAND = "composer create-project codeigniter4/appstarter"


class StackGenerator:
    """Dispatches a request to the builder for its stack.

    Every stack has exactly one builder; ``Stack.CUSTOM`` doubles as the
    fallback for identifiers outside the supported set, so :meth:`generate`
    never raises for a well-formed request.
    """

    def __init__(self, renderer: TemplateRenderer | None = None) -> None:
        self.renderer = renderer or TemplateRenderer()
        self._builders: dict[Stack, Callable[[GenerationRequest], GeneratedProject]] = {
            Stack.REACT: self._react,
            Stack.NODE: self._node,
            Stack.PHP: self._php,
            Stack.LARAVEL: self._laravel,
            Stack.CODEIGNITER: self._codeigniter,
            Stack.HTML: self._html,
            Stack.GOLANG: self._golang,
            Stack.CUSTOM: self._custom,
        }

    # -- Public API --------------------------------------------------------

    def generate(self, request: GenerationRequest) -> GeneratedProject:
        """Build the file set for *request*."""
        builder = self._builders.get(request.stack, self._custom)
        return builder(request)

    def banner(self, request: GenerationRequest) -> str:
        """Header comment identifying the request that produced a file."""
        return self.renderer.render("banner.j2", self._context(request))

    # -- Per-stack builders ------------------------------------------------

    def _react(self, request: GenerationRequest) -> GeneratedProject:
        ctx = self._context(request, banner=True)
        manifest = {
            "name": manifest_name(request.app_name),
            "version": "1.0.0",
            "private": True,
            "scripts": {"dev": "vite"},
            "devDependencies": {
                "vite": "^5.0.0",
                "react": "^18.0.0",
                "react-dom": "^18.0.0",
            },
        }
        files = {
            "index.html": self.renderer.render("react/index.html.j2", ctx),
            "main.jsx": self.renderer.render("react/main.jsx.j2", ctx),
            "package.json": _dump_manifest(manifest),
        }
        return GeneratedProject(files=files, main_language="jsx")

    def _node(self, request: GenerationRequest) -> GeneratedProject:
        ctx = self._context(request, banner=True)
        manifest = {
            "name": manifest_name(request.app_name),
            "version": "1.0.0",
            "type": "module",
            "scripts": {"start": "node index.js"},
            "dependencies": {"express": "^4.19.2"},
        }
        files = {
            "package.json": _dump_manifest(manifest),
            "index.js": self.renderer.render("node/index.js.j2", ctx),
            "README.md": self.renderer.render("node/README.md.j2", ctx),
        }
        return GeneratedProject(files=files, main_language="javascript")

    def _php(self, request: GenerationRequest) -> GeneratedProject:
        ctx = self._context(request, banner=True)
        files = {"index.php": self.renderer.render("php/index.php.j2", ctx)}
        return GeneratedProject(files=files, main_language="php")

    def _html(self, request: GenerationRequest) -> GeneratedProject:
        files = {"index.html": self.renderer.render("html/index.html.j2", self._context(request))}
        return GeneratedProject(files=files, main_language="html")

    def _golang(self, request: GenerationRequest) -> GeneratedProject:
        ctx = self._context(request, banner=True)
        files = {"main.go": self.renderer.render("golang/main.go.j2", ctx)}
        return GeneratedProject(files=files, main_language="go")

    def _laravel(self, request: GenerationRequest) -> GeneratedProject:
        instructions = (
            f"Gunakan '{LARAVEL_COMMAND} {request.app_name}' "
            "lalu tambahkan controller & route sesuai kebutuhan."
        )
        ctx = self._context(request, instructions=instructions)
        files = {"README.md": self.renderer.render("laravel/README.md.j2", ctx)}
        return GeneratedProject(files=files, main_language="php", instructions=instructions)

    def _codeigniter(self, request: GenerationRequest) -> GeneratedProject:
        instructions = (
            f"Gunakan '{CODEIGNITER_COMMAND} {request.app_name}' lalu buat controller & route."
        )
        ctx = self._context(request, instructions=instructions)
        files = {"README.md": self.renderer.render("codeigniter/README.md.j2", ctx)}
        return GeneratedProject(files=files, main_language="php", instructions=instructions)

    def _custom(self, request: GenerationRequest) -> GeneratedProject:
        # The second comment line keeps the language as typed; the file
        # extension and main_language are lower-cased.
        language = request.language or "txt"
        extension = language.lower() or "txt"
        ctx = self._context(request, banner=True, language=language)
        files = {f"main.{extension}": self.renderer.render("custom/main.j2", ctx)}
        return GeneratedProject(files=files, main_language=language.lower())

    # -- Helpers -----------------------------------------------------------

    def _context(
        self, request: GenerationRequest, *, banner: bool = False, **extra: Any
    ) -> dict[str, Any]:
        context: dict[str, Any] = {
            "app_name": request.app_name,
            "description": request.description,
            **extra,
        }
        if banner:
            context["banner"] = self.banner(request)
        return context


def _dump_manifest(manifest: dict[str, Any]) -> str:
    """Serialise a package manifest with two-space indent and no trailing newline."""
    return json.dumps(manifest, indent=2, ensure_ascii=False)


# ---------------------------------------------------------------------------
# Module-level convenience API
# ---------------------------------------------------------------------------

_default_generator: StackGenerator | None = None


def generate(request: GenerationRequest) -> GeneratedProject:
    """Generate the starter files for *request* with the bundled templates."""
    global _default_generator
    if _default_generator is None:
        _default_generator = StackGenerator()
    return _default_generator.generate(request)


def generate_code(
    app_name: str,
    description: str = "",
    stack: str | Stack = Stack.CUSTOM,
    language: str | None = None,
) -> GeneratedProject:
    """Keyword-argument shortcut for :func:`generate`."""
    return generate(
        GenerationRequest(
            app_name=app_name, description=description, stack=stack, language=language
        )
    )


async def write_project(project: GeneratedProject, output_dir: str | Path) -> list[Path]:
    """Write every file of *project* under *output_dir*.

    Files are written one after another in mapping order.  Paths must stay
    inside *output_dir*: absolute paths and ``..`` segments raise
    ``ValueError`` before anything is written.

    Returns:
        The written file paths, in mapping order.
    """
    base = Path(output_dir)
    for rel in project.files:
        pure = PurePosixPath(rel)
        if not rel or pure.is_absolute() or ".." in pure.parts:
            raise ValueError(f"Refusing to write outside the output directory: {rel!r}")

    written: list[Path] = []
    for rel, content in project.files.items():
        written.append(await write_file(base / rel, content))
    return written
