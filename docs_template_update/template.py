"""Retrieval of the canonical package-docs README template."""

from __future__ import annotations

from typing import Optional
from urllib.error import HTTPError, URLError
from urllib.request import Request, urlopen

from .config import DEFAULT_TEMPLATE_TIMEOUT, DEFAULT_TEMPLATE_URL, TemplateConfig
from .errors import FetchError
from .logging import get_logger


class TemplateFetcher:
    """Downloads the README template as raw text over HTTP."""

    def __init__(
        self,
        url: str = DEFAULT_TEMPLATE_URL,
        *,
        timeout: Optional[float] = DEFAULT_TEMPLATE_TIMEOUT,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self.logger = get_logger("template")

    @classmethod
    def from_config(cls, config: TemplateConfig) -> "TemplateFetcher":
        return cls(config.url, timeout=config.timeout)

    def fetch(self) -> str:
        """Return the template body; any non-200 response raises :class:`FetchError`."""
        self.logger.debug("Fetching template from %s", self.url)
        request = Request(self.url, method="GET")
        try:
            with urlopen(request, timeout=self.timeout) as response:  # type: ignore[arg-type]
                status = getattr(response, "status", None) or response.getcode()
                if status != 200:
                    raise FetchError(
                        f"Failed to fetch template, status: {status}", status=status
                    )
                raw = response.read()
        except HTTPError as exc:
            raise FetchError(
                f"Failed to fetch template, status: {exc.code} {exc.reason}",
                status=exc.code,
            ) from exc
        except URLError as exc:
            raise FetchError(f"Failed to fetch template: {exc.reason}") from exc
        except OSError as exc:
            raise FetchError(f"Failed to fetch template: {exc}") from exc

        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise FetchError("Template response is not valid UTF-8") from exc


__all__ = ["TemplateFetcher"]
