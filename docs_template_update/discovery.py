"""Data stream discovery for integration packages."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List

from .errors import DocumentIOError
from .layout import DATA_STREAM_DIR
from .logging import get_logger
from .models import is_valid_entity

logger = get_logger("discovery")


def discover_data_streams(base_path: str | Path) -> List[str]:
    """Return the data stream directory names under ``base_path``.

    A package without a ``data_stream`` directory has no data streams, which is
    reported as an empty list. Plain files and symlinks inside the directory are
    ignored and names are returned sorted, as a directory listing would present
    them. Names that cannot appear inside a placeholder are skipped.
    """
    data_stream_path = Path(base_path) / DATA_STREAM_DIR
    try:
        with os.scandir(data_stream_path) as entries:
            names = [
                entry.name for entry in entries if entry.is_dir(follow_symlinks=False)
            ]
    except FileNotFoundError:
        logger.debug("No %s directory found at %s", DATA_STREAM_DIR, data_stream_path)
        return []
    except OSError as exc:
        raise DocumentIOError(
            f"Failed to read {DATA_STREAM_DIR} directory {data_stream_path}: {exc}"
        ) from exc

    valid = sorted(name for name in names if is_valid_entity(name))
    for name in names:
        if not is_valid_entity(name):
            logger.warning("Skipping data stream with unusable name %r", name)

    logger.debug("Found data streams: %s", ", ".join(valid) or "(none)")
    return valid


__all__ = ["discover_data_streams"]
