"""Host application: preferences, credits, generation and publishing.

``CodeGeneratorApp`` ties the pieces together the way the interactive tool
does: it reads the stored preferences, refuses to generate once the credit
counter reaches zero, keeps the last generated project in memory for display,
export or publishing, and reports every outcome as a console notification.
"""

from __future__ import annotations

import logging
from pathlib import Path

from rich.panel import Panel
from rich.syntax import Syntax
from rich.text import Text

from stackgen.config import Config
from stackgen.publisher import GitHubPublisher, PublishResult
from stackgen.scaffolder import GeneratedProject, GenerationRequest, StackGenerator, write_project
from stackgen.settings import Preferences, SettingsStore
from stackgen.utils import console, print_error, print_success, print_warning

logger = logging.getLogger(__name__)


class CodeGeneratorApp:
    """Command-line host around the stack generator.

    Attributes:
        config: Global configuration.
        store: Persisted preferences (app name, stack, credits, token, ...).
        project: The most recent generated project, or ``None``.
    """

    def __init__(
        self,
        config: Config,
        store: SettingsStore | None = None,
        generator: StackGenerator | None = None,
        publisher: GitHubPublisher | None = None,
    ) -> None:
        self.config = config
        self.store = store or SettingsStore(
            config.settings_path, defaults=Preferences(credits=config.free_credits)
        )
        self.generator = generator or StackGenerator()
        self.publisher = publisher or GitHubPublisher(
            base_url=config.github.api_url,
            timeout=config.github.timeout,
            private=config.github.private,
        )
        self.project: GeneratedProject | None = None

    # ------------------------------------------------------------------
    # Preferences
    # ------------------------------------------------------------------

    @property
    def credits(self) -> int:
        return self.store.prefs.credits

    def update(
        self,
        app_name: str | None = None,
        description: str | None = None,
        stack: str | None = None,
        custom_lang: str | None = None,
    ) -> None:
        """Change any of the request preferences; ``None`` leaves a field as is."""
        changes = {
            "app_name": app_name,
            "app_desc": description,
            "stack": stack,
            "custom_lang": custom_lang,
        }
        changes = {key: value for key, value in changes.items() if value is not None}
        if changes:
            self.store.update(**changes)

    def connect_github(self, token: str | None) -> bool:
        """Store a personal access token.  Blank input is ignored."""
        token = (token or "").strip()
        if not token:
            return False
        self.store.set("gh_token", token)
        print_success("GitHub terhubung")
        return True

    def disconnect_github(self) -> None:
        self.store.set("gh_token", None)

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    def build_request(self) -> GenerationRequest:
        """Assemble a generation request from the stored preferences."""
        prefs = self.store.prefs
        return GenerationRequest(
            app_name=prefs.app_name,
            description=prefs.app_desc,
            stack=prefs.stack,
            language=prefs.custom_lang,
        )

    def generate(self) -> GeneratedProject | None:
        """Generate a project from the stored preferences.

        Returns ``None`` without generating when no credits are left.  A
        credit is only spent once generation has succeeded.
        """
        if self.credits <= 0:
            print_warning("Kredit habis -- hubungi admin untuk upgrade paket.")
            return None

        self.project = self.generator.generate(self.build_request())
        self.store.set("credits", self.credits - 1)
        print_success("Kode berhasil dibuat")
        logger.debug(
            "Generated %d file(s) for %s, %d credit(s) left",
            len(self.project.files),
            self.project.main_language,
            self.credits,
        )
        return self.project

    def render(self) -> None:
        """Print every generated file as a syntax-highlighted panel."""
        if self.project is None:
            console.print('[dim]Belum ada output. Jalankan "generate" terlebih dahulu.[/dim]')
            return
        for path, content in self.project.files.items():
            lexer = Syntax.guess_lexer(path, code=content)
            console.print(Panel(Syntax(content, lexer, line_numbers=True), title=Text(path)))
        if self.project.instructions:
            console.print(Panel(Text(self.project.instructions), title="Instructions", style="cyan"))

    async def export(self, output_dir: str | Path | None = None) -> list[Path] | None:
        """Write the current project to *output_dir* (default: config output dir).

        Returns ``None`` when a generated path would land outside the target
        directory; nothing is written in that case.
        """
        if self.project is None:
            print_warning("Tidak ada file untuk ditulis")
            return []
        target = Path(output_dir) if output_dir is not None else self.config.output_dir
        try:
            written = await write_project(self.project, target)
        except ValueError as exc:
            print_error(f"Ekspor dibatalkan: {exc}")
            return None
        print_success(f"{len(written)} file ditulis ke {target}")
        return written

    # ------------------------------------------------------------------
    # Publishing
    # ------------------------------------------------------------------

    async def publish(self) -> PublishResult:
        """Push the current project to GitHub and report the outcome."""
        prefs = self.store.prefs
        result = await self.publisher.publish(
            prefs.gh_token, self.project, prefs.app_name, prefs.app_desc
        )
        if result.success:
            print_success(f"Sukses push ke GitHub: {result.html_url}")
        else:
            print_error(f"Push ke GitHub gagal: {result.error}")
        return result
