"""Tests for docs_template_update.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from docs_template_update.config import (
    DEFAULT_MODEL,
    DEFAULT_TEMPLATE_URL,
    ConfigError,
    UpdaterConfig,
    load_config,
    resolve_api_key,
)


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, UpdaterConfig)
    assert config.root == tmp_path.resolve()
    assert config.llm.model == DEFAULT_MODEL
    assert config.llm.api_key is None
    assert config.llm.request_timeout == pytest.approx(300.0)
    assert config.template.url == DEFAULT_TEMPLATE_URL
    assert config.template.timeout == pytest.approx(30.0)
    assert config.write is True
    assert config.verbose is False


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    (tmp_path / ".docs-template-update.yml").write_text(
        """
llm:
  model: "gemini-2.5-flash"
  api_key: "file-key"
  base_url: "http://localhost:8080/v1beta/"
  request_timeout: 120
template:
  url: "https://example.com/readme.md.tmpl"
  timeout: 5
write: false
""",
        encoding="utf-8",
    )

    config = load_config(tmp_path)

    assert config.llm.model == "gemini-2.5-flash"
    assert config.llm.api_key == "file-key"
    assert config.llm.base_url == "http://localhost:8080/v1beta"
    assert config.llm.request_timeout == pytest.approx(120.0)
    assert config.template.url == "https://example.com/readme.md.tmpl"
    assert config.template.timeout == pytest.approx(5.0)
    assert config.write is False


def test_load_config_rejects_non_mapping_root(tmp_path: Path) -> None:
    (tmp_path / ".docs-template-update.yml").write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_rejects_invalid_yaml(tmp_path: Path) -> None:
    (tmp_path / ".docs-template-update.yml").write_text("llm: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_resolve_api_key_prefers_flag_then_environment_then_file(tmp_path: Path) -> None:
    config = load_config(tmp_path)
    config.llm.api_key = "file-key"

    assert resolve_api_key("flag-key", config, {"GOOGLE_API_KEY": "env-key"}) == "flag-key"
    assert resolve_api_key(None, config, {"GOOGLE_API_KEY": "env-key"}) == "env-key"
    assert resolve_api_key(None, config, {}) == "file-key"
    assert resolve_api_key("", load_config(tmp_path), {}) is None


def test_load_config_reads_logging_settings(tmp_path: Path) -> None:
    (tmp_path / ".docs-template-update.yml").write_text(
        "verbose: true\nlog_file: logs/update.log\n", encoding="utf-8"
    )

    config = load_config(tmp_path)

    assert config.verbose is True
    assert config.log_file == tmp_path.resolve() / "logs" / "update.log"


def test_load_config_ignores_non_boolean_verbose(tmp_path: Path) -> None:
    (tmp_path / ".docs-template-update.yml").write_text("verbose: loud\n", encoding="utf-8")

    config = load_config(tmp_path)

    assert config.verbose is False
    assert config.log_file is None
