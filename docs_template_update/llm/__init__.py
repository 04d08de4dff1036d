"""Rewrite service adapters."""

from .base import DocumentRewriter
from .gemini import GeminiRewriter

__all__ = ["DocumentRewriter", "GeminiRewriter"]
