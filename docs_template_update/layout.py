"""Fixed relative layout of an integration package."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

TARGET_README = Path("_dev") / "build" / "docs" / "readme.md"
SOURCE_README = Path("docs") / "README.md"
DATA_STREAM_DIR = "data_stream"


@dataclass(frozen=True)
class PackageLayout:
    """Resolved document paths for a package rooted at ``root``."""

    root: Path

    @classmethod
    def for_path(cls, path: str | Path) -> "PackageLayout":
        return cls(root=Path(path).expanduser().resolve())

    @property
    def target(self) -> Path:
        return self.root / TARGET_README

    @property
    def source(self) -> Path:
        return self.root / SOURCE_README

    @property
    def data_streams(self) -> Path:
        return self.root / DATA_STREAM_DIR


__all__ = ["DATA_STREAM_DIR", "PackageLayout", "SOURCE_README", "TARGET_README"]
