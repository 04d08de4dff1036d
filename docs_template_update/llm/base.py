"""Capability contract for the README rewrite service."""

from abc import ABC, abstractmethod


class DocumentRewriter(ABC):
    """Restructures a README so it follows the given template."""

    @abstractmethod
    def rewrite(self, original: str, template: str) -> str:
        """Return the restructured document or raise ``GenerationError``."""
