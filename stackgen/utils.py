"""Shared utility functions for stackgen.

Provides the project-name derivation rules shared by the generator and the
GitHub publisher, Rich-based console notifications, and logging setup.
"""

from __future__ import annotations

import logging
import re

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# String / name helpers
# ---------------------------------------------------------------------------

# Space separators, line breaks, tabs and BOM. Not \x1c-\x1f or \x85, unlike re's \s.
_WHITESPACE_RE = re.compile(
    "[\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff]+"
)
_REPO_UNSAFE_RE = re.compile(r"[^a-z0-9-]")


def manifest_name(name: str) -> str:
    """Derive the package name written into generated manifests.

    Lower-cases the input and replaces each run of whitespace with a single
    hyphen.  No other characters are touched.

    Examples::

        manifest_name("My Cool App!") -> "my-cool-app!"
        manifest_name("Toko  Ku")     -> "toko-ku"
    """
    return _WHITESPACE_RE.sub("-", name.lower())


def repo_name(name: str) -> str:
    """Derive a GitHub repository name from an app name.

    Applies :func:`manifest_name` and then drops every character outside
    ``[a-z0-9-]``, so both names stay recognisably the same project.

    Examples::

        repo_name("My Cool App!") -> "my-cool-app"
        repo_name("Café Bar")     -> "caf-bar"
    """
    return _REPO_UNSAFE_RE.sub("", manifest_name(name))


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(escape(key), escape(str(value)))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{escape(message)}[/bold yellow]")


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


def setup_logging(verbose: bool = False) -> None:
    """Route ``logging`` records through Rich on the shared console.

    Diagnostics (publish failures, unreadable settings) are logged at
    WARNING and above by default; ``verbose`` lowers the threshold to DEBUG.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True,
    )
