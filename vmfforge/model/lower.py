"""Lower a VMF CST into the typed document model."""

from __future__ import annotations

from vmfforge.cst import GreenNode, SyntaxNode, SyntaxToken, from_green
from vmfforge.errors import InternalConsistencyError
from vmfforge.lexer import NameRule
from vmfforge.model.model import Block, Document, KeyValue
from vmfforge.syntax import VmfSyntaxKind

# Tokens that may appear directly under a BLOCK besides its entries.
_BLOCK_PUNCTUATION: frozenset[VmfSyntaxKind] = frozenset(
    {VmfSyntaxKind.NAME, VmfSyntaxKind.LBRACE, VmfSyntaxKind.RBRACE}
)


def lower_tree(root: GreenNode, source: str = "", *, name_rule: NameRule = NameRule.STRICT) -> Document:
    return lower_syntax_tree(from_green(root, source), name_rule=name_rule)


def lower_syntax_tree(root: SyntaxNode, *, name_rule: NameRule = NameRule.STRICT) -> Document:
    """Build a `Document` from an error-free syntax tree.

    `name_rule` should match the rule the tree was parsed with. Walks with an
    explicit stack, so nesting depth is bounded only by the parser.

    Raises `InternalConsistencyError` when the tree has a shape the grammar
    never produces.
    """
    source_file = root if root.kind == VmfSyntaxKind.SOURCE_FILE else root.first_child_node(VmfSyntaxKind.SOURCE_FILE)
    if source_file is None:
        return Document()

    document = Document()
    pending: list[tuple[SyntaxNode, Block]] = []
    for child in source_file.children:
        if isinstance(child, SyntaxToken):
            if child.kind != VmfSyntaxKind.EOF:
                raise InternalConsistencyError(f"Unexpected {child.kind.name} token at top level ({child.text_range})")
            continue
        if child.kind != VmfSyntaxKind.BLOCK:
            raise InternalConsistencyError(f"Unexpected {child.kind.name} node at top level ({child.text_range})")
        block = document.append(_new_block(child, name_rule))
        pending.append((child, block))

    while pending:
        node, block = pending.pop()
        for child in node.children:
            if isinstance(child, SyntaxToken):
                if child.kind not in _BLOCK_PUNCTUATION:
                    raise InternalConsistencyError(f"Unexpected {child.kind.name} token in block ({child.text_range})")
                continue

            if child.kind == VmfSyntaxKind.KEY_VALUE:
                block.append(_lower_key_value(child))
            elif child.kind == VmfSyntaxKind.BLOCK:
                pending.append((child, block.append_block(_new_block(child, name_rule))))
            else:
                raise InternalConsistencyError(f"Unexpected {child.kind.name} node in block ({child.text_range})")
    return document


def _new_block(node: SyntaxNode, name_rule: NameRule) -> Block:
    """Empty block named after `node`; the walk fills its body."""
    names = node.child_tokens_of_kind(VmfSyntaxKind.NAME)
    if len(names) != 1:
        raise InternalConsistencyError(f"BLOCK node has {len(names)} name tokens ({node.text_range})")
    return Block(names[0].text, name_rule=name_rule)


def _lower_key_value(node: SyntaxNode) -> KeyValue:
    strings = node.child_tokens_of_kind(VmfSyntaxKind.STRING)
    if len(strings) != 2 or len(node.children) != 2:
        raise InternalConsistencyError(
            f"KEY_VALUE node must hold exactly two strings, found {len(node.children)} children ({node.text_range})"
        )
    key, value = strings
    return KeyValue(key.string_value, value.string_value)


__all__ = ["lower_syntax_tree", "lower_tree"]
