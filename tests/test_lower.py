import pytest

from tests._debug import debug_dump_document
from tests._shared_cases import HAMMER_MAP_SOURCE, WORLD_SIDE_SOURCE
from vmfforge.cst import GreenNode, GreenToken, from_green
from vmfforge.errors import InternalConsistencyError, InvalidBlockNameError
from vmfforge.lexer import NameRule
from vmfforge.model import Block, Document, KeyValue, lower_syntax_tree, lower_tree
from vmfforge.parser import parse_cst
from vmfforge.syntax import VmfSyntaxKind


def _token(kind: VmfSyntaxKind, text: str) -> GreenToken:
    return GreenToken(kind=kind, text=text, leading_trivia=(), trailing_trivia=())


def _source_file(*children: GreenNode | GreenToken) -> GreenNode:
    return GreenNode(
        kind=VmfSyntaxKind.ROOT,
        children=(GreenNode(kind=VmfSyntaxKind.SOURCE_FILE, children=children),),
    )


def _block(name: str | None, *body: GreenNode) -> GreenNode:
    children: list[GreenNode | GreenToken] = []
    if name is not None:
        children.append(_token(VmfSyntaxKind.NAME, name))
    children.append(_token(VmfSyntaxKind.LBRACE, "{"))
    children.extend(body)
    children.append(_token(VmfSyntaxKind.RBRACE, "}"))
    return GreenNode(kind=VmfSyntaxKind.BLOCK, children=tuple(children))


def _key_value(*strings: str) -> GreenNode:
    return GreenNode(
        kind=VmfSyntaxKind.KEY_VALUE,
        children=tuple(_token(VmfSyntaxKind.STRING, f'"{text}"') for text in strings),
    )


def test_lower_world_with_nested_side() -> None:
    parsed = parse_cst(WORLD_SIDE_SOURCE)

    document = lower_tree(parsed.root, WORLD_SIDE_SOURCE)
    debug_dump_document("lower_world_with_nested_side", document)

    assert document == Document(
        [
            Block(
                "world",
                [
                    KeyValue("id", "1"),
                    Block("side", [KeyValue("id", "2"), KeyValue("material", "BRICK")]),
                ],
            )
        ]
    )


def test_lower_accepts_root_or_source_file() -> None:
    root = from_green(parse_cst(HAMMER_MAP_SOURCE).root, HAMMER_MAP_SOURCE)
    source_file = root.first_child_node(VmfSyntaxKind.SOURCE_FILE)
    assert source_file is not None

    assert lower_syntax_tree(root) == lower_syntax_tree(source_file)


def test_lower_hand_built_tree_without_source() -> None:
    root = _source_file(_block("world", _key_value("id", "1"), _block("side")), _token(VmfSyntaxKind.EOF, ""))

    document = lower_tree(root)

    assert [block.name for block in document.blocks] == ["world"]
    assert document.blocks[0].get("id") == "1"
    assert document.blocks[0].find_block("side") == Block("side")


def test_lower_empty_root_is_empty_document() -> None:
    assert lower_tree(GreenNode(kind=VmfSyntaxKind.ROOT, children=())) == Document()


def test_lower_deep_tree_without_recursion() -> None:
    node = _block("b")
    for _ in range(5_000):
        node = _block("b", node)

    document = lower_tree(_source_file(node))

    assert len(list(document.blocks[0].iter_descendants())) == 5_000


def test_lower_keeps_body_order_across_nested_blocks() -> None:
    root = _source_file(
        _block("a", _key_value("k", "1"), _block("b", _key_value("k", "2")), _key_value("k", "3"), _block("c"))
    )

    document = lower_tree(root)

    assert document == Document(
        [Block("a", [KeyValue("k", "1"), Block("b", [KeyValue("k", "2")]), KeyValue("k", "3"), Block("c")])]
    )


def test_lower_checks_block_names_against_name_rule() -> None:
    root = _source_file(_block("func.door"))

    with pytest.raises(InvalidBlockNameError):
        lower_tree(root)
    document = lower_tree(root, name_rule=NameRule.LOOSE)
    assert document.blocks[0].name == "func.door"
    assert document.blocks[0].name_rule == NameRule.LOOSE



def test_key_value_with_one_string_is_inconsistent() -> None:
    root = _source_file(_block("world", _key_value("id")))

    with pytest.raises(InternalConsistencyError, match="exactly two strings"):
        lower_tree(root)


def test_key_value_with_three_strings_is_inconsistent() -> None:
    root = _source_file(_block("world", _key_value("a", "b", "c")))

    with pytest.raises(InternalConsistencyError):
        lower_tree(root)


def test_block_without_name_is_inconsistent() -> None:
    root = _source_file(_block(None, _key_value("id", "1")))

    with pytest.raises(InternalConsistencyError, match="0 name tokens"):
        lower_tree(root)


def test_unknown_node_kind_in_block_is_inconsistent() -> None:
    error = GreenNode(kind=VmfSyntaxKind.ERROR, children=(_token(VmfSyntaxKind.SKIPPED, "?"),))
    root = _source_file(_block("world", error))

    with pytest.raises(InternalConsistencyError, match="ERROR node in block"):
        lower_tree(root)


def test_top_level_key_value_is_inconsistent() -> None:
    root = _source_file(_key_value("id", "1"))

    with pytest.raises(InternalConsistencyError, match="at top level"):
        lower_tree(root)


def test_skipped_token_at_top_level_is_inconsistent() -> None:
    root = _source_file(_token(VmfSyntaxKind.SKIPPED, "}"))

    with pytest.raises(InternalConsistencyError, match="SKIPPED token"):
        lower_tree(root)
