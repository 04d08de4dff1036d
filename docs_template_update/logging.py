"""Logging utilities for docs-template-update runs."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .config import UpdaterConfig

_LOGGER_NAME = "docs_template_update"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the docs_template_update hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Configure the package logger with a stderr handler and optional file sink.

    Stdout is reserved for the generated patch, so console output goes to stderr.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers to avoid duplicate output when the CLI runs more than once.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(level)
    stream_handler.setFormatter(
        logging.Formatter("[docs-template-update] %(levelname)s %(message)s")
    )
    logger.addHandler(stream_handler)

    if log_file is not None:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


def configure_from_config(config: "UpdaterConfig") -> logging.Logger:
    """Configure logging for a run and record its effective settings at debug level."""
    logger = configure_logging(verbose=config.verbose, log_file=config.log_file)
    logger.debug(
        "Package %s: model=%s api_key=%s template=%s write=%s",
        config.root,
        config.llm.model,
        mask_secret(config.llm.api_key),
        config.template.url,
        config.write,
    )
    return logger


def mask_secret(value: str | None) -> str:
    """Return a log-safe rendition of a credential."""
    if not value:
        return "(unset)"
    if len(value) <= 8:
        return "****"
    return f"{value[:4]}…{value[-2:]}"


__all__ = ["configure_from_config", "configure_logging", "get_logger", "mask_secret"]
