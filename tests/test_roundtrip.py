import pytest

from tests._shared_cases import PARSER_CASES, VmfCase
from vmfforge.errors import InvalidBlockNameError, VmfSyntaxError
from vmfforge.format import FormatOptions, serialize
from vmfforge.lexer import NameRule
from vmfforge.model import Block, Document, KeyValue
from vmfforge.parser import ParseMode
from vmfforge.pipeline import parse

CLEAN_CASES = tuple(case for case in PARSER_CASES if case.strict_should_parse_cleanly)


def _built_document() -> Document:
    solid = Block("solid", [KeyValue("id", "2")])
    side = solid.append_block(Block("side"))
    side.append_key_value("plane", "(0 0 0) (0 64 0) (64 64 0)")
    side.append_key_value("material", "TOOLS/TOOLSNODRAW")
    solid.append_key_value("id", "duplicate")
    solid.append_block(Block("editor", [KeyValue("color", "0 255 0")]))

    world = Block("world", [KeyValue("classname", "worldspawn"), solid, KeyValue("multi", "a\nb")])
    return Document([Block("versioninfo", [KeyValue("formatversion", "100")]), world, Block("cameras")])


@pytest.mark.parametrize("case", CLEAN_CASES, ids=lambda case: case.name)
def test_parse_serialize_parse_round_trip(case: VmfCase) -> None:
    document = parse(case.source)

    assert parse(serialize(document)) == document


@pytest.mark.parametrize("case", CLEAN_CASES, ids=lambda case: case.name)
def test_serialization_is_idempotent(case: VmfCase) -> None:
    once = serialize(parse(case.source))

    assert serialize(parse(once)) == once


def test_built_document_round_trips() -> None:
    document = _built_document()

    assert parse(serialize(document)) == document


@pytest.mark.parametrize(
    "options",
    [FormatOptions(), FormatOptions(indent="  "), FormatOptions(newline="\r\n"), FormatOptions(indent="")],
)
def test_round_trip_holds_for_every_layout(options: FormatOptions) -> None:
    document = _built_document()

    assert parse(serialize(document, options)) == document


def test_quote_in_value_does_not_round_trip() -> None:
    document = Document([Block("entity", [KeyValue("message", 'say "hi"')])])

    reparsed_or_error: object
    try:
        reparsed_or_error = parse(serialize(document))
    except VmfSyntaxError as exc:
        reparsed_or_error = exc
    assert reparsed_or_error != document


@pytest.mark.parametrize("name", ["func.door", "wörld", "my-block"])
def test_names_that_default_parse_cannot_read_are_refused_up_front(name: str) -> None:
    with pytest.raises(InvalidBlockNameError):
        Document([Block(name)])


def test_every_constructible_default_document_round_trips() -> None:
    document = Document([Block("func_door_2", [KeyValue("k", "v")]), Block("WORLD", [Block("_")])])

    assert parse(serialize(document)) == document


def test_loose_names_round_trip_through_permissive_parse() -> None:
    door = Block("func.door", [KeyValue("id", "1")], name_rule=NameRule.LOOSE)
    door.append_block(Block("wörld", name_rule=NameRule.LOOSE))
    document = Document([door])

    assert parse(serialize(document), mode=ParseMode.PERMISSIVE) == document
    with pytest.raises(VmfSyntaxError):
        parse(serialize(document))
