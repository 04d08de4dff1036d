"""Pipeline orchestration for README template updates."""

from __future__ import annotations

import shutil
from pathlib import Path
from typing import List

from .config import UpdaterConfig
from .discovery import discover_data_streams
from .errors import DocumentIOError, GenerationError, SourceNotFoundError
from .layout import PackageLayout
from .llm.base import DocumentRewriter
from .llm.gemini import GeminiRewriter
from .logging import get_logger
from .models import UpdateOutcome
from .patch import generate_patch
from .placeholders import PlaceholderRewriter
from .template import TemplateFetcher


class Orchestrator:
    """Restructures a package README into the template layout and reports the diff.

    Steps run strictly in order and the first failure aborts the run. Work already
    committed to disk, such as seeding the target README, is not rolled back.
    """

    def __init__(
        self,
        config: UpdaterConfig,
        *,
        fetcher: TemplateFetcher | None = None,
        rewriter: DocumentRewriter | None = None,
        placeholder_rewriter: PlaceholderRewriter | None = None,
    ) -> None:
        self.config = config
        self.fetcher = fetcher or TemplateFetcher.from_config(config.template)
        self._rewriter = rewriter
        self.placeholder_rewriter = placeholder_rewriter or PlaceholderRewriter()
        self.logger = get_logger("orchestrator")

    def run(self, path: str | Path | None = None) -> UpdateOutcome:
        """Update the README of the package at ``path`` (defaults to ``config.root``)."""
        layout = PackageLayout.for_path(path if path is not None else self.config.root)
        self.logger.info("Starting template update for %s", layout.root)

        self._ensure_target(layout)

        template = self.fetcher.fetch()
        self.logger.debug("Fetched template (%d chars)", len(template))

        original = self._read(layout.target)

        rewriter = self._resolve_rewriter()
        restructured = rewriter.rewrite(original, template)
        self.logger.debug("Rewrite service returned %d chars", len(restructured))

        data_streams = discover_data_streams(layout.root)
        final = self.placeholder_rewriter.rewrite(restructured, data_streams)

        patch = generate_patch(layout.target, original, final)

        written = False
        if self.config.write:
            self._write(layout.target, final)
            written = True
            self.logger.info("Updated readme written to %s", layout.target)
        else:
            self.logger.info("Dry-run completed; %s not written", layout.target)

        return UpdateOutcome(
            path=layout.target,
            patch=patch,
            data_streams=list(data_streams),
            written=written,
        )

    def _ensure_target(self, layout: PackageLayout) -> None:
        target = layout.target
        self.logger.debug("Checking if target readme exists: %s", target)
        if target.exists():
            return

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise DocumentIOError(
                f"failed to create directory {target.parent}: {exc}"
            ) from exc

        source = layout.source
        if not source.exists():
            raise SourceNotFoundError(f"source README.md not found at {source}")

        self.logger.debug("Copying %s to %s", source, target)
        try:
            shutil.copyfile(source, target)
        except OSError as exc:
            raise DocumentIOError(f"failed to copy README.md: {exc}") from exc

    def _resolve_rewriter(self) -> DocumentRewriter:
        if self._rewriter is not None:
            return self._rewriter
        if not self.config.llm.api_key:
            raise GenerationError(
                "Google API key is required. Set it using the --api-key flag or "
                "GOOGLE_API_KEY environment variable"
            )
        rewriter = GeminiRewriter.from_config(self.config.llm)
        if self.config.verbose:
            self._log_available_models(rewriter)
        self._rewriter = rewriter
        return rewriter

    def _log_available_models(self, rewriter: GeminiRewriter) -> None:
        try:
            models: List[str] = rewriter.list_models()
        except GenerationError as exc:
            self.logger.debug("Error listing models: %s", exc)
            return
        self.logger.debug("Available models:")
        for name in models:
            self.logger.debug("- %s", name)

    @staticmethod
    def _read(path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise DocumentIOError(f"failed to read readme {path}: {exc}") from exc

    @staticmethod
    def _write(path: Path, content: str) -> None:
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise DocumentIOError(f"failed to write updated readme {path}: {exc}") from exc


__all__ = ["Orchestrator"]
