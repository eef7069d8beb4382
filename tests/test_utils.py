"""Unit tests for utility functions (stackgen.utils).

Tests cover:
- manifest_name / repo_name derivation
- Rich output helpers (print_summary_table, print_success, ...)
- setup_logging
"""

from __future__ import annotations

import logging

import pytest
from rich.logging import RichHandler

from stackgen.utils import (
    console,
    manifest_name,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
    repo_name,
    setup_logging,
)


# ---------------------------------------------------------------------------
# Name derivation
# ---------------------------------------------------------------------------


class TestManifestName:
    @pytest.mark.unit
    def test_mixed_case_with_punctuation(self):
        assert manifest_name("My Cool App!") == "my-cool-app!"

    @pytest.mark.unit
    def test_collapses_whitespace_runs(self):
        assert manifest_name("Toko \t  Ku\nBaru") == "toko-ku-baru"

    @pytest.mark.unit
    def test_leading_and_trailing_whitespace_become_hyphens(self):
        assert manifest_name(" app ") == "-app-"

    @pytest.mark.unit
    def test_empty(self):
        assert manifest_name("") == ""

    @pytest.mark.unit
    def test_unicode_whitespace_collapses(self):
        assert manifest_name("a\u00a0b\u3000c\ufeffd") == "a-b-c-d"

    @pytest.mark.unit
    @pytest.mark.parametrize("sep", ["\x1c", "\x1d", "\x1e", "\x1f", "\x85"])
    def test_information_separators_are_kept(self, sep):
        assert manifest_name(f"a{sep}b c") == f"a{sep}b-c"


class TestRepoName:
    @pytest.mark.unit
    def test_mixed_case_with_punctuation(self):
        assert repo_name("My Cool App!") == "my-cool-app"

    @pytest.mark.unit
    def test_strips_everything_outside_charset(self):
        assert repo_name("Café_Bar.v2") == "cafbarv2"

    @pytest.mark.unit
    def test_keeps_hyphens_and_digits(self):
        assert repo_name("app-2 go") == "app-2-go"

    @pytest.mark.unit
    def test_is_manifest_name_filtered(self):
        for name in ("A B", "x!!  y", "Proyek Baru"):
            assert repo_name(name) == "".join(
                ch for ch in manifest_name(name) if ch.isascii() and (ch.isalnum() or ch == "-")
            )


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


class TestRichHelpers:
    @pytest.mark.unit
    def test_print_summary_table(self):
        with console.capture() as capture:
            print_summary_table({"Credits": "9", "Stack": "React"}, title="Status")
        out = capture.get()
        assert "Status" in out
        assert "Credits" in out
        assert "React" in out

    @pytest.mark.unit
    @pytest.mark.parametrize("func", [print_success, print_error, print_warning])
    def test_messages_are_printed(self, func):
        with console.capture() as capture:
            func("hello there")
        assert "hello there" in capture.get()

    @pytest.mark.unit
    @pytest.mark.parametrize("func", [print_success, print_error, print_warning])
    def test_messages_are_not_markup(self, func):
        with console.capture() as capture:
            func("Gagal commit main.[/x]: [bold]")
        assert "main.[/x]: [bold]" in capture.get()

    @pytest.mark.unit
    def test_summary_table_values_are_not_markup(self):
        with console.capture() as capture:
            print_summary_table({"App [/b]": "[red]x"})
        out = capture.get()
        assert "App [/b]" in out
        assert "[red]x" in out


@pytest.mark.usefixtures("restore_root_logger")
class TestSetupLogging:
    @pytest.mark.unit
    def test_default_level_is_warning(self):
        setup_logging()
        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert any(isinstance(h, RichHandler) for h in root.handlers)

    @pytest.mark.unit
    def test_verbose_level_is_debug(self):
        setup_logging(verbose=True)
        assert logging.getLogger().level == logging.DEBUG
