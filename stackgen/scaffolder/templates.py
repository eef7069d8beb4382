"""Jinja2 template rendering for stack scaffolding.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``stackgen/scaffolder/templates/`` directory and renders them with the
request fields of a generation call.  Output is never autoescaped: app names
and descriptions land in the generated files exactly as the user typed them.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, select_autoescape


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders the per-stack Jinja2 templates.

    Templates are laid out as ``<stack>/<output file name>.j2`` under the
    template directory, plus a shared ``banner.j2`` header.  Trailing
    newlines are significant (some generated files end without one) so the
    environment keeps them exactly as stored.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            keep_trailing_newline=True,
        )

    # -- Single template rendering -----------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"golang/main.go.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)

    # -- Utility -----------------------------------------------------------

    def list_templates(self, prefix: str = "") -> list[str]:
        """Return a sorted list of all ``.j2`` template paths under *prefix*.

        Paths are relative to the template root directory and always use
        forward slashes, since they double as Jinja2 loader keys.
        """
        search_dir = self.template_dir / prefix if prefix else self.template_dir
        if not search_dir.is_dir():
            return []
        return sorted(
            p.relative_to(self.template_dir).as_posix()
            for p in search_dir.rglob("*.j2")
        )


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _write_file(path: Path, content: str) -> None:
    """Synchronous helper: create parent dirs and write content."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


async def write_file(path: str | Path, content: str) -> Path:
    """Write *content* to *path* off the event loop and return the path."""
    out = Path(path)
    await asyncio.to_thread(_write_file, out, content)
    return out
