"""Error taxonomy for docs-template-update runs."""

from __future__ import annotations

from typing import Optional


class UpdateError(RuntimeError):
    """Base class for failures surfaced by an update run."""


class SourceNotFoundError(UpdateError, FileNotFoundError):
    """Raised when the source README needed to seed the target is missing."""


class DocumentIOError(UpdateError):
    """Raised when a document or directory cannot be read, listed, or written."""


class FetchError(UpdateError):
    """Raised when the canonical template cannot be retrieved."""

    def __init__(self, message: str, *, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


class GenerationError(UpdateError):
    """Raised when the rewrite service fails or returns an unusable response."""


class GenerationTimeoutError(GenerationError, TimeoutError):
    """Raised when the rewrite service exceeds its wall-clock budget."""


class DiffError(UpdateError):
    """Raised when a patch cannot be computed or applied."""


__all__ = [
    "DiffError",
    "DocumentIOError",
    "FetchError",
    "GenerationError",
    "GenerationTimeoutError",
    "SourceNotFoundError",
    "UpdateError",
]
