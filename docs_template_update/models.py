"""Core data models shared across docs-template-update components."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

PLACEHOLDER_KINDS = ("fields", "event")
GENERIC_ENTITY = "data_stream_name"
_FORBIDDEN_ENTITY_CHARS = frozenset({"\"", "\n"})


def is_valid_entity(name: str) -> bool:
    """Return True when ``name`` renders to a placeholder that parses back to it."""
    return bool(name) and not _FORBIDDEN_ENTITY_CHARS.intersection(name)


@dataclass(frozen=True)
class PlaceholderSpec:
    """A mustache placeholder bound to a kind and a data stream name."""

    kind: str
    entity: str

    def __post_init__(self) -> None:
        if self.kind not in PLACEHOLDER_KINDS:
            raise ValueError(f"Unknown placeholder kind: {self.kind!r}")
        if not is_valid_entity(self.entity):
            raise ValueError(
                f"Placeholder entity must be a non-empty name without quotes or newlines: {self.entity!r}"
            )

    @property
    def is_generic(self) -> bool:
        return self.entity == GENERIC_ENTITY

    def render(self) -> str:
        return f'{{{{{self.kind} "{self.entity}"}}}}'

    @classmethod
    def parse(cls, text: str) -> Optional["PlaceholderSpec"]:
        """Recover a spec from rendered placeholder text, or None if it does not match."""
        from .placeholders import PLACEHOLDER_PATTERN

        match = PLACEHOLDER_PATTERN.fullmatch(text.strip())
        if match is None:
            return None
        return cls(kind=match.group("kind"), entity=match.group("entity"))


@dataclass
class UpdateOutcome:
    """Result of restructuring a package README."""

    path: Path
    patch: str
    data_streams: List[str] = field(default_factory=list)
    written: bool = False

    @property
    def changed(self) -> bool:
        return bool(self.patch)


__all__ = [
    "GENERIC_ENTITY",
    "PLACEHOLDER_KINDS",
    "PlaceholderSpec",
    "UpdateOutcome",
    "is_valid_entity",
]
