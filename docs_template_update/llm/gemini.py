"""Google Gemini adapter for README restructuring."""

from __future__ import annotations

import json
import threading
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional
from urllib.error import HTTPError, URLError
from urllib.parse import quote
from urllib.request import Request, urlopen

from ..config import DEFAULT_BASE_URL, DEFAULT_GENERATION_TIMEOUT, DEFAULT_MODEL, LLMConfig
from ..errors import GenerationError, GenerationTimeoutError
from ..logging import get_logger
from .base import DocumentRewriter
from .prompts import build_prompt

SAFETY_CATEGORIES = (
    "HARM_CATEGORY_HARASSMENT",
    "HARM_CATEGORY_HATE_SPEECH",
    "HARM_CATEGORY_DANGEROUS_CONTENT",
    "HARM_CATEGORY_SEXUALLY_EXPLICIT",
)


@dataclass
class GeminiRequest:
    """A single generateContent call."""

    prompt: str
    model: str
    base_url: str
    api_key: str
    request_timeout: Optional[float]


class GeminiRewriter(DocumentRewriter):
    """Restructures READMEs through the Gemini ``generateContent`` REST API."""

    def __init__(
        self,
        api_key: str,
        *,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        request_timeout: float = DEFAULT_GENERATION_TIMEOUT,
        runner: Callable[[GeminiRequest], str] | None = None,
    ) -> None:
        if not api_key:
            raise GenerationError("A Google API key is required to call Gemini")
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.request_timeout = request_timeout
        self._runner = runner or self._http_runner
        self.logger = get_logger("llm.gemini")

    @classmethod
    def from_config(
        cls, config: LLMConfig, *, api_key: str | None = None
    ) -> "GeminiRewriter":
        return cls(
            api_key or config.api_key or "",
            model=config.model,
            base_url=config.base_url,
            request_timeout=config.request_timeout,
        )

    def rewrite(self, original: str, template: str) -> str:
        request = GeminiRequest(
            prompt=build_prompt(original, template),
            model=self.model,
            base_url=self.base_url,
            api_key=self.api_key,
            request_timeout=self.request_timeout,
        )
        self.logger.debug("Using model: %s", self.model)
        return self._run_with_deadline(request)

    def list_models(self) -> List[str]:
        """Return the model names visible to the configured API key."""
        http_request = Request(
            f"{self.base_url}/models",
            headers={"x-goog-api-key": self.api_key},
            method="GET",
        )
        try:
            with urlopen(http_request, timeout=self.request_timeout) as response:  # type: ignore[arg-type]
                payload = json.loads(response.read().decode("utf-8"))
        except HTTPError as exc:
            raise GenerationError(f"Listing models failed with status {exc.code}") from exc
        except (URLError, OSError) as exc:
            raise GenerationError(f"Listing models failed: {exc}") from exc
        except json.JSONDecodeError as exc:
            raise GenerationError("Listing models returned invalid JSON") from exc
        models = payload.get("models") if isinstance(payload, dict) else None
        if not isinstance(models, list):
            return []
        return [
            str(model["name"])
            for model in models
            if isinstance(model, dict) and model.get("name")
        ]

    def _run_with_deadline(self, request: GeminiRequest) -> str:
        outcome: Dict[str, object] = {}

        def _worker() -> None:
            try:
                outcome["text"] = self._runner(request)
            except Exception as exc:
                outcome["error"] = exc

        thread = threading.Thread(target=_worker, name="gemini-rewrite", daemon=True)
        thread.start()
        thread.join(self.request_timeout)
        if thread.is_alive():
            raise GenerationTimeoutError(
                f"{request.model} did not respond within {self.request_timeout:g}s"
            )

        error = outcome.get("error")
        if isinstance(error, GenerationError):
            raise error
        if isinstance(error, Exception):
            raise GenerationError(
                f"error generating content with {request.model}: {error}"
            ) from error
        text = outcome.get("text")
        if not isinstance(text, str):
            raise GenerationError(f"unexpected response type from {request.model}")
        return text

    @staticmethod
    def _http_runner(request: GeminiRequest) -> str:
        endpoint = f"{request.base_url}/models/{quote(request.model)}:generateContent"
        payload = {
            "contents": [{"role": "user", "parts": [{"text": request.prompt}]}],
            "safetySettings": [
                {"category": category, "threshold": "BLOCK_NONE"}
                for category in SAFETY_CATEGORIES
            ],
        }
        data = json.dumps(payload).encode("utf-8")
        headers = {
            "Content-Type": "application/json",
            "x-goog-api-key": request.api_key,
        }
        http_request = Request(endpoint, data=data, headers=headers, method="POST")

        try:
            with urlopen(http_request, timeout=request.request_timeout) as response:  # type: ignore[arg-type]
                raw = response.read()
        except HTTPError as exc:
            detail = exc.read().decode("utf-8", errors="ignore") if hasattr(exc, "read") else ""
            message = detail.strip() or exc.reason
            raise GenerationError(
                f"error generating content with {request.model}: status {exc.code}: {message}"
            ) from exc
        except URLError as exc:
            raise GenerationError(
                f"error generating content with {request.model}: {exc.reason}"
            ) from exc

        try:
            response_payload = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise GenerationError("Gemini returned invalid JSON") from exc
        return GeminiRewriter._extract_text(response_payload)

    @staticmethod
    def _extract_text(payload: object) -> str:
        candidates = payload.get("candidates") if isinstance(payload, dict) else None
        if not isinstance(candidates, list) or not candidates:
            raise GenerationError("no response received from Gemini")
        first = candidates[0]
        content = first.get("content") if isinstance(first, dict) else None
        parts = content.get("parts") if isinstance(content, dict) else None
        if not isinstance(parts, list) or not parts:
            raise GenerationError("no response received from Gemini")
        part = parts[0]
        text = part.get("text") if isinstance(part, dict) else None
        if not isinstance(text, str):
            raise GenerationError("unexpected response type from Gemini")
        return text


__all__ = ["GeminiRequest", "GeminiRewriter", "SAFETY_CATEGORIES"]
