"""Tests for data stream placeholder rewriting."""

from __future__ import annotations

import pytest

from docs_template_update.models import PlaceholderSpec
from docs_template_update.placeholders import (
    PlaceholderRewriter,
    find_placeholders,
    is_generic,
    render_placeholder,
)

GENERIC_FIELDS = '{{fields "data_stream_name"}}'
GENERIC_EVENT = '{{event "data_stream_name"}}'

MULTI_SECTION_README = (
    "# Nginx\n\nCollects nginx logs.\n\n"
    "### ECS field Reference\n\n"
    f"{GENERIC_FIELDS}\n\n"
    "### Sample Event\n\n"
    f"An example event looks as following:\n\n{GENERIC_EVENT}\n"
)


def test_rewrite_without_data_streams_is_identity() -> None:
    document = f"# Title\n\n{GENERIC_FIELDS}\n{GENERIC_EVENT}\n"
    assert PlaceholderRewriter().rewrite(document, []) is document


def test_rewrite_single_data_stream_binds_every_placeholder() -> None:
    document = (
        "# Title\n\n"
        f"{GENERIC_FIELDS}\n\ntext in between\n\n{GENERIC_EVENT}\n\n"
        f"again {GENERIC_FIELDS}\n"
    )

    result = PlaceholderRewriter().rewrite(document, ["access"])

    assert result == (
        "# Title\n\n"
        '{{fields "access"}}\n\ntext in between\n\n{{event "access"}}\n\n'
        'again {{fields "access"}}\n'
    )
    assert not [spec for spec in find_placeholders(result) if is_generic(spec)]


def test_rewrite_tolerates_whitespace_inside_placeholders() -> None:
    document = '{{ fields   "data_stream_name" }} and {{event\t"data_stream_name"}}'

    result = PlaceholderRewriter().rewrite(document, ["error"])

    assert result == '{{fields "error"}} and {{event "error"}}'


def test_rewrite_leaves_bound_placeholders_untouched() -> None:
    document = f'{{{{fields "existing"}}}}\n{GENERIC_FIELDS}\n'

    result = PlaceholderRewriter().rewrite(document, ["access"])

    assert result == '{{fields "existing"}}\n{{fields "access"}}\n'


def test_rewrite_multiple_data_streams_emits_blocks_under_both_headers() -> None:
    result = PlaceholderRewriter().rewrite(MULTI_SECTION_README, ["access", "error"])

    assert result == (
        "# Nginx\n\nCollects nginx logs.\n\n"
        "### ECS field Reference\n\n"
        '#### access\n\n{{fields "access"}}\n\n'
        '#### error\n\n{{fields "error"}}\n\n'
        "### Sample Event\n\n"
        '#### access\n\n{{event "access"}}\n\n'
        '#### error\n\n{{event "error"}}\n\n'
        f"\n\nAn example event looks as following:\n\n{GENERIC_EVENT}\n"
    )


def test_rewrite_multiple_data_streams_preserves_entity_order() -> None:
    names = ["zeta", "alpha", "mid"]

    result = PlaceholderRewriter().rewrite(MULTI_SECTION_README, names)

    fields = [spec.entity for spec in find_placeholders(result) if spec.kind == "fields"]
    events = [
        spec.entity
        for spec in find_placeholders(result)
        if spec.kind == "event" and not is_generic(spec)
    ]
    assert fields == names
    assert events == names
    fields_header = result.index("### ECS field Reference")
    event_header = result.index("### Sample Event")
    assert fields_header < result.index('{{fields "zeta"}}') < event_header
    assert event_header < result.index('{{event "zeta"}}')


def test_rewrite_multiple_data_streams_with_only_sample_event_header() -> None:
    document = f"# Pkg\n\n### Sample Event\n\n{GENERIC_EVENT}\n"

    result = PlaceholderRewriter().rewrite(document, ["a", "b"])

    assert result == (
        "# Pkg\n\n"
        "### ECS field Reference\n\n"
        '#### a\n\n{{fields "a"}}\n\n'
        '#### b\n\n{{fields "b"}}\n\n'
        f"\n\n{GENERIC_EVENT}\n"
    )


def test_rewrite_falls_back_to_first_data_stream_without_headers() -> None:
    document = f"# Pkg\n\n{GENERIC_FIELDS}\n\n{GENERIC_EVENT}\n"
    rewriter = PlaceholderRewriter()

    first = rewriter.rewrite(document, ["one", "two", "three"])
    second = rewriter.rewrite(document, ["one", "two", "three"])

    assert first == '# Pkg\n\n{{fields "one"}}\n\n{{event "one"}}\n'
    assert first == second


def test_rewrite_falls_back_when_header_is_repeated() -> None:
    document = (
        "### ECS field Reference\n\n"
        f"{GENERIC_FIELDS}\n\n"
        "### ECS field Reference\n"
    )

    result = PlaceholderRewriter().rewrite(document, ["x", "y"])

    assert result == document.replace(GENERIC_FIELDS, '{{fields "x"}}')


ROUND_TRIP_ENTITIES = [
    "nginx.access",
    "x-y_z",
    "access logs",
    " padded ",
    "name}}",
    "{{nested",
    "back\\slash",
    "tab\there",
    "ünïcode",
]


@pytest.mark.parametrize("entity", ROUND_TRIP_ENTITIES)
@pytest.mark.parametrize("kind", ["fields", "event"])
def test_rendered_placeholders_round_trip_through_parser(kind: str, entity: str) -> None:
    rendered = render_placeholder(kind, entity)

    assert PlaceholderSpec.parse(rendered) == PlaceholderSpec(kind, entity)
    assert find_placeholders(f"before {rendered} after") == [PlaceholderSpec(kind, entity)]


@pytest.mark.parametrize("entity", ['a"b', "a\nb", "", '"'])
def test_placeholder_spec_rejects_entities_that_cannot_round_trip(entity: str) -> None:
    with pytest.raises(ValueError):
        PlaceholderSpec(kind="fields", entity=entity)


def test_rewrite_skips_names_that_cannot_be_placed(caplog) -> None:
    document = f"# Title\n\n{GENERIC_FIELDS}\n{GENERIC_EVENT}\n"
    rewriter = PlaceholderRewriter()

    with caplog.at_level("WARNING", logger="docs_template_update"):
        assert rewriter.rewrite(document, ['a"b']) is document
        result = rewriter.rewrite(document, ['a"b', "ok", "new\nline"])

    assert result == '# Title\n\n{{fields "ok"}}\n{{event "ok"}}\n'
    assert "cannot be placed in a placeholder" in caplog.text


def test_placeholder_spec_rejects_unknown_kind() -> None:
    with pytest.raises(ValueError):
        PlaceholderSpec(kind="table", entity="access")
    assert PlaceholderSpec.parse("{{table \"access\"}}") is None
