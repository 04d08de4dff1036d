"""Data stream placeholder rewriting for restructured package READMEs.

The rewrite service emits generic mustache placeholders such as
``{{fields "data_stream_name"}}``. Once the package's data streams are known,
those placeholders are bound to concrete names: a single data stream is
substituted in place, while several data streams get one block per stream
under the field reference and sample event headings.
"""

from __future__ import annotations

import re
from typing import List, Sequence

from .logging import get_logger
from .models import GENERIC_ENTITY, PlaceholderSpec, is_valid_entity

PLACEHOLDER_PATTERN = re.compile(
    r'\{\{\s*(?P<kind>fields|event)\s+"(?P<entity>[^"\n]+)"\s*\}\}'
)

FIELDS_HEADER = "### ECS field Reference"
EVENT_HEADER = "### Sample Event"

_GENERIC_FIELDS = re.compile(r'\{\{\s*fields\s+"' + GENERIC_ENTITY + r'"\s*\}\}')
_GENERIC_EVENT = re.compile(r'\{\{\s*event\s+"' + GENERIC_ENTITY + r'"\s*\}\}')


def render_placeholder(kind: str, entity: str) -> str:
    """Return the rendered placeholder for ``kind`` bound to ``entity``."""
    return PlaceholderSpec(kind=kind, entity=entity).render()


def find_placeholders(document: str) -> List[PlaceholderSpec]:
    """Return every placeholder in ``document`` in order of appearance."""
    return [
        PlaceholderSpec(kind=match.group("kind"), entity=match.group("entity"))
        for match in PLACEHOLDER_PATTERN.finditer(document)
    ]


def is_generic(spec: PlaceholderSpec) -> bool:
    return spec.entity == GENERIC_ENTITY


class PlaceholderRewriter:
    """Binds generic field and event placeholders to discovered data streams."""

    def __init__(self) -> None:
        self.logger = get_logger("placeholders")

    def rewrite(self, document: str, entities: Sequence[str]) -> str:
        """Return ``document`` with generic placeholders bound to ``entities``."""
        names = [name for name in entities if is_valid_entity(name)]
        skipped = len(entities) - len(names)
        if skipped:
            self.logger.warning(
                "Skipping %d data stream name(s) that cannot be placed in a placeholder",
                skipped,
            )
        if not names:
            return document
        if len(names) == 1:
            return self._bind_single(document, names[0])

        sections = document.split(FIELDS_HEADER)
        if len(sections) != 2:
            sections = document.split(EVENT_HEADER)
            if len(sections) != 2:
                self.logger.warning(
                    "Could not identify reference sections for %d data streams; using %s only",
                    len(names),
                    names[0],
                )
                return self._bind_single(document, names[0])

        prefix, remainder = sections
        parts = [prefix, f"{FIELDS_HEADER}\n\n"]
        parts.extend(self._blocks("fields", names))

        event_sections = remainder.split(EVENT_HEADER)
        if len(event_sections) == 2:
            parts.append(f"{EVENT_HEADER}\n\n")
            parts.extend(self._blocks("event", names))
            parts.append(event_sections[1])
        else:
            leftover = len(_GENERIC_EVENT.findall(remainder))
            if leftover:
                self.logger.warning(
                    "No '%s' section found; %d generic event placeholder(s) left unbound",
                    EVENT_HEADER,
                    leftover,
                )
            parts.append(remainder)

        return "".join(parts)

    @staticmethod
    def _bind_single(document: str, entity: str) -> str:
        fields = render_placeholder("fields", entity)
        event = render_placeholder("event", entity)
        # Callables keep backslashes in entity names literal.
        bound = _GENERIC_FIELDS.sub(lambda _: fields, document)
        return _GENERIC_EVENT.sub(lambda _: event, bound)

    @staticmethod
    def _blocks(kind: str, entities: Sequence[str]) -> List[str]:
        return [
            f"#### {name}\n\n{render_placeholder(kind, name)}\n\n" for name in entities
        ]


__all__ = [
    "EVENT_HEADER",
    "FIELDS_HEADER",
    "PLACEHOLDER_PATTERN",
    "PlaceholderRewriter",
    "find_placeholders",
    "is_generic",
    "render_placeholder",
]
