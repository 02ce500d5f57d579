import io
import logging

import pytest

from tests._shared_cases import HAMMER_MAP_SOURCE, WORLD_SIDE_SOURCE
from vmfforge.format import FormatOptions, run_format, serialize, serialize_block, write_document
from vmfforge.model import Block, Document, KeyValue
from vmfforge.parser import ParseMode, parse_result
from vmfforge.pipeline import parse

WORLD_SIDE_CANONICAL = 'world\n{\n\t"id" "1"\n\tside\n\t{\n\t\t"id" "2"\n\t\t"material" "BRICK"\n\t}\n}\n'


def test_serialize_uses_tab_indented_hammer_layout() -> None:
    assert serialize(parse(WORLD_SIDE_SOURCE)) == WORLD_SIDE_CANONICAL


def test_serialize_canonical_source_is_unchanged() -> None:
    assert serialize(parse(HAMMER_MAP_SOURCE)) == HAMMER_MAP_SOURCE


def test_serialize_empty_document_and_empty_block() -> None:
    assert serialize(Document()) == ""
    assert serialize(Document([Block("cameras")])) == "cameras\n{\n}\n"


def test_serialize_empty_strings() -> None:
    document = Document([Block("world", [KeyValue("", "")])])

    assert serialize(document) == 'world\n{\n\t"" ""\n}\n'


def test_format_options_change_indent_and_newline() -> None:
    options = FormatOptions(indent="    ", newline="\r\n")

    text = serialize(parse(WORLD_SIDE_SOURCE), options)

    assert text == WORLD_SIDE_CANONICAL.replace("\t", "    ").replace("\n", "\r\n")
    assert parse(text) == parse(WORLD_SIDE_SOURCE)


@pytest.mark.parametrize(
    ("indent", "newline"),
    [
        ("x", "\n"),
        ("\x0c", "\n"),
        ("\u3000", "\n"),
        ("\t\x0b", "\n"),
        ("\t", "\r"),
        ("\t", ""),
    ],
)
def test_format_options_reject_unreadable_layout(indent: str, newline: str) -> None:
    with pytest.raises(ValueError):
        FormatOptions(indent=indent, newline=newline)


def test_empty_indent_is_allowed() -> None:
    text = serialize(parse(WORLD_SIDE_SOURCE), FormatOptions(indent=""))

    assert "\t" not in text
    assert parse(text) == parse(WORLD_SIDE_SOURCE)


def test_write_document_streams_to_text_sink() -> None:
    sink = io.StringIO()

    write_document(parse(WORLD_SIDE_SOURCE), sink)

    assert sink.getvalue() == WORLD_SIDE_CANONICAL


def test_serialize_block_at_depth() -> None:
    side = Block("side", [KeyValue("id", "2")])

    assert serialize_block(side, depth=1) == '\tside\n\t{\n\t\t"id" "2"\n\t}\n'


def test_quote_in_value_is_written_verbatim_with_warning(caplog: pytest.LogCaptureFixture) -> None:
    document = Document([Block("entity", [KeyValue("message", 'say "hi"')])])

    with caplog.at_level(logging.WARNING, logger="vmfforge.format.serializer"):
        text = serialize(document)

    assert text == 'entity\n{\n\t"message" "say "hi""\n}\n'
    assert any("will not survive a round trip" in record.getMessage() for record in caplog.records)


def test_clean_document_logs_no_warning(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.WARNING, logger="vmfforge.format.serializer"):
        serialize(parse(HAMMER_MAP_SOURCE))

    assert caplog.records == []


def test_serialize_deep_document_without_recursion() -> None:
    root = Block("b")
    current = root
    for _ in range(5_000):
        current = current.append_block(Block("b"))

    text = serialize(Document([root]))

    assert text.count("\n") == 3 * 5_001
    assert text.endswith("\t}\n}\n")


# -------------------------
# Format runner
# -------------------------


def test_run_format_normalizes_layout() -> None:
    result = run_format('world{"id" "1"   side{"id" "2" "material" "BRICK"}}')

    assert result.formatted_text == WORLD_SIDE_CANONICAL
    assert result.changed is True
    assert result.diagnostics == []


def test_run_format_is_unchanged_for_canonical_text() -> None:
    result = run_format(HAMMER_MAP_SOURCE)

    assert result.formatted_text == HAMMER_MAP_SOURCE
    assert result.changed is False


def test_run_format_returns_source_for_invalid_text() -> None:
    source = 'world\n{\n"id"\n}\n'

    result = run_format(source)

    assert result.formatted_text == source
    assert result.changed is False
    assert [diagnostic.code for diagnostic in result.diagnostics] == ["PARSER_EXPECTED_VALUE"]


def test_run_format_reuses_shared_parse() -> None:
    parsed = parse_result("my-block{}", mode=ParseMode.PERMISSIVE)

    result = run_format("ignored", parse=parsed)

    assert result.parse is parsed
    assert result.formatted_text == "my-block\n{\n}\n"


def test_run_format_rejects_parse_with_options() -> None:
    parsed = parse_result("a{}")

    with pytest.raises(ValueError):
        run_format("a{}", mode=ParseMode.STRICT, parse=parsed)
