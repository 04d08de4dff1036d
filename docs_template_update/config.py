"""Configuration loading for docs-template-update (.docs-template-update.yml)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .errors import UpdateError

CONFIG_FILENAME = ".docs-template-update.yml"
API_KEY_ENV = "GOOGLE_API_KEY"

DEFAULT_TEMPLATE_URL = (
    "https://raw.githubusercontent.com/elastic/elastic-package/"
    "89b34ec09f562b2c1c921ba4b465b6ef96ea47de/internal/packages/archetype/"
    "_static/package-docs-readme.md.tmpl"
)
DEFAULT_MODEL = "gemini-2.5-pro"
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_GENERATION_TIMEOUT = 300.0
DEFAULT_TEMPLATE_TIMEOUT = 30.0


class ConfigError(UpdateError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class LLMConfig:
    """Rewrite service settings."""

    model: str = DEFAULT_MODEL
    api_key: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    request_timeout: float = DEFAULT_GENERATION_TIMEOUT


@dataclass
class TemplateConfig:
    """Where the canonical README template is fetched from."""

    url: str = DEFAULT_TEMPLATE_URL
    timeout: float = DEFAULT_TEMPLATE_TIMEOUT


@dataclass
class UpdaterConfig:
    """Effective settings for one update run."""

    root: Path
    llm: LLMConfig = field(default_factory=LLMConfig)
    template: TemplateConfig = field(default_factory=TemplateConfig)
    verbose: bool = False
    write: bool = True
    log_file: Optional[Path] = None


def load_config(base_path: str | Path) -> UpdaterConfig:
    """Load configuration for the package at ``base_path``.

    Missing files yield the defaults; malformed files raise :class:`ConfigError`.
    """
    config_file = _resolve_config_path(Path(base_path))
    root = config_file.parent
    if not config_file.exists():
        return UpdaterConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    llm = LLMConfig()
    llm_data = _as_dict(data.get("llm"))
    if llm_data:
        llm.model = _as_str(llm_data.get("model")) or llm.model
        llm.api_key = _as_str(llm_data.get("api_key"))
        llm.base_url = (_as_str(llm_data.get("base_url")) or llm.base_url).rstrip("/")
        timeout = _as_float(llm_data.get("request_timeout"))
        if timeout is not None:
            llm.request_timeout = timeout

    template = TemplateConfig()
    template_data = _as_dict(data.get("template"))
    if template_data:
        template.url = _as_str(template_data.get("url")) or template.url
        timeout = _as_float(template_data.get("timeout"))
        if timeout is not None:
            template.timeout = timeout

    write = data.get("write")
    verbose = data.get("verbose")
    log_file = _as_str(data.get("log_file"))
    return UpdaterConfig(
        root=root,
        llm=llm,
        template=template,
        verbose=verbose if isinstance(verbose, bool) else False,
        write=write if isinstance(write, bool) else True,
        log_file=root / log_file if log_file else None,
    )


def resolve_api_key(
    flag_value: Optional[str],
    config: UpdaterConfig,
    environ: Mapping[str, str] | None = None,
) -> Optional[str]:
    """Pick the API key from the flag, then the environment, then the config file."""
    if flag_value:
        return flag_value
    env = os.environ if environ is None else environ
    env_value = env.get(API_KEY_ENV)
    if env_value:
        return env_value
    return config.llm.api_key


def _resolve_config_path(path: Path) -> Path:
    path = path.expanduser()
    if path.name == CONFIG_FILENAME:
        return path.resolve()
    return (path / CONFIG_FILENAME).resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


__all__ = [
    "API_KEY_ENV",
    "CONFIG_FILENAME",
    "ConfigError",
    "LLMConfig",
    "TemplateConfig",
    "UpdaterConfig",
    "load_config",
    "resolve_api_key",
]
