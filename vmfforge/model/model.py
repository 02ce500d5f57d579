"""Typed document model for VMF source."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TypeAlias

from vmfforge.errors import InvalidBlockNameError
from vmfforge.lexer import NameRule, invalid_name_char

if TYPE_CHECKING:
    from vmfforge.model.metadata import VersionInfo, ViewSettings, VisGroups


def validate_block_name(name: str, rule: NameRule = NameRule.STRICT) -> str:
    """Reject names that a parse using `rule` could not read back."""
    if not isinstance(name, str):
        raise InvalidBlockNameError(f"Block name must be a string, got {type(name).__name__}")
    if not name:
        raise InvalidBlockNameError("Block name must not be empty")
    bad = invalid_name_char(name, rule)
    if bad is not None:
        raise InvalidBlockNameError(f"Block name {name!r} contains {bad!r}, which {rule} block names do not allow")
    return name


@dataclass(frozen=True, slots=True)
class KeyValue:
    """One `"key" "value"` pair, both stored without quotes."""

    key: str
    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.key, str) or not isinstance(self.value, str):
            raise TypeError("KeyValue key and value must both be strings")


@dataclass(slots=True)
class Block:
    """Named block whose body mixes key-values and child blocks in source order.

    Keys are a multimap: duplicates are kept as distinct entries, and lookups
    come in a first-match (`get`) and an all-matches (`get_all`) flavour.

    Names follow `name_rule`, STRICT unless a block is built for a
    PERMISSIVE parse. A block has at most one parent; the checked methods
    enforce that, direct edits of `body` bypass it.
    """

    name: str
    body: list[Entry] = field(default_factory=list)
    name_rule: NameRule = field(default=NameRule.STRICT, kw_only=True, repr=False, compare=False)
    _parent: Block | Document | None = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        validate_block_name(self.name, self.name_rule)
        entries = list(self.body)
        self.body = []
        try:
            for entry in entries:
                self.append(entry)
        except Exception:
            for entry in self.body:
                _release(entry)
            raise

    def __setattr__(self, attr: str, value: Any) -> None:
        # Skipped during __init__; __post_init__ validates the initial name.
        if attr == "name" and hasattr(self, "name_rule"):
            validate_block_name(value, self.name_rule)
        object.__setattr__(self, attr, value)

    # -------------------------
    # Whole-body operations
    # -------------------------

    def append(self, entry: Entry) -> None:
        self._check_attachable(entry)
        self.body.append(entry)
        _claim(entry, self)

    def insert(self, index: int, entry: Entry) -> None:
        self._check_attachable(entry)
        self.body.insert(index, entry)
        _claim(entry, self)

    def pop(self, index: int = -1) -> Entry:
        entry = self.body.pop(index)
        _release(entry)
        return entry

    def move(self, source: int, destination: int) -> None:
        """Move the entry at `source` so it ends up at index `destination`."""
        entry = self.body.pop(source)
        self.body.insert(destination, entry)

    # -------------------------
    # Key-values
    # -------------------------

    @property
    def key_values(self) -> tuple[KeyValue, ...]:
        return tuple(entry for entry in self.body if isinstance(entry, KeyValue))

    def keys(self) -> list[str]:
        return [entry.key for entry in self.body if isinstance(entry, KeyValue)]

    def append_key_value(self, key: str, value: str) -> KeyValue:
        pair = KeyValue(key, value)
        self.body.append(pair)
        return pair

    def insert_key_value(self, index: int, key: str, value: str) -> KeyValue:
        pair = KeyValue(key, value)
        self.body.insert(index, pair)
        return pair

    def has_key(self, key: str) -> bool:
        return any(isinstance(entry, KeyValue) and entry.key == key for entry in self.body)

    def get(self, key: str, default: str | None = None) -> str | None:
        for entry in self.body:
            if isinstance(entry, KeyValue) and entry.key == key:
                return entry.value
        return default

    def get_all(self, key: str) -> list[str]:
        return [entry.value for entry in self.body if isinstance(entry, KeyValue) and entry.key == key]

    def set(self, key: str, value: str) -> None:
        """Replace the first pair with `key`, in place, or append a new one."""
        for index, entry in enumerate(self.body):
            if isinstance(entry, KeyValue) and entry.key == key:
                self.body[index] = KeyValue(key, value)
                return
        self.append_key_value(key, value)

    def remove_key_value(self, key: str, value: str | None = None) -> KeyValue:
        for index, entry in enumerate(self.body):
            if not isinstance(entry, KeyValue) or entry.key != key:
                continue
            if value is not None and entry.value != value:
                continue
            del self.body[index]
            return entry
        raise KeyError(key)

    def remove_all(self, key: str) -> int:
        kept = [entry for entry in self.body if not (isinstance(entry, KeyValue) and entry.key == key)]
        removed = len(self.body) - len(kept)
        self.body[:] = kept
        return removed

    # -------------------------
    # Child blocks
    # -------------------------

    @property
    def blocks(self) -> tuple[Block, ...]:
        return tuple(entry for entry in self.body if isinstance(entry, Block))

    def append_block(self, block: Block) -> Block:
        self.append(block)
        return block

    def insert_block(self, index: int, block: Block) -> Block:
        self.insert(index, block)
        return block

    def remove_block(self, block: Block) -> None:
        for index, entry in enumerate(self.body):
            if entry is block:
                del self.body[index]
                _release(block)
                return
        raise ValueError(f"Block {block.name!r} is not a child of {self.name!r}")

    def find_block(self, name: str) -> Block | None:
        for entry in self.body:
            if isinstance(entry, Block) and entry.name == name:
                return entry
        return None

    def find_blocks(self, name: str) -> list[Block]:
        return [entry for entry in self.body if isinstance(entry, Block) and entry.name == name]

    def iter_descendants(self) -> Iterator[Block]:
        """Pre-order walk over every nested block (self excluded)."""
        stack = list(reversed(self.blocks))
        while stack:
            block = stack.pop()
            yield block
            stack.extend(reversed(block.blocks))

    def _check_attachable(self, entry: Entry) -> None:
        if isinstance(entry, KeyValue):
            return
        if not isinstance(entry, Block):
            raise TypeError(f"Block entries must be KeyValue or Block, got {type(entry).__name__}")
        _check_unowned(entry)
        # A block without child blocks cannot contain `self`; skip the ancestor walk.
        if entry is self or any(isinstance(child, Block) for child in entry.body):
            node: Block | Document | None = self
            while isinstance(node, Block):
                if node is entry:
                    raise ValueError(f"Attaching {entry.name!r} to {self.name!r} would create a cycle")
                node = node._parent


Entry: TypeAlias = KeyValue | Block


@dataclass(slots=True)
class Document:
    """Root of a VMF file: the ordered top-level blocks."""

    blocks: list[Block] = field(default_factory=list)

    def __post_init__(self) -> None:
        blocks = list(self.blocks)
        self.blocks = []
        try:
            self.extend(blocks)
        except Exception:
            for block in self.blocks:
                _release(block)
            raise

    def __iter__(self) -> Iterator[Block]:
        return iter(self.blocks)

    def __len__(self) -> int:
        return len(self.blocks)

    def append(self, block: Block) -> Block:
        self._check_attachable(block)
        self.blocks.append(block)
        _claim(block, self)
        return block

    def extend(self, blocks: Iterable[Block]) -> None:
        for block in blocks:
            self.append(block)

    def insert(self, index: int, block: Block) -> Block:
        self._check_attachable(block)
        self.blocks.insert(index, block)
        _claim(block, self)
        return block

    def remove(self, block: Block) -> None:
        for index, existing in enumerate(self.blocks):
            if existing is block:
                del self.blocks[index]
                _release(block)
                return
        raise ValueError(f"Block {block.name!r} is not a top-level block")

    def pop(self, index: int = -1) -> Block:
        block = self.blocks.pop(index)
        _release(block)
        return block

    def move(self, source: int, destination: int) -> None:
        block = self.blocks.pop(source)
        self.blocks.insert(destination, block)

    def find(self, name: str) -> Block | None:
        for block in self.blocks:
            if block.name == name:
                return block
        return None

    def find_all(self, name: str) -> list[Block]:
        return [block for block in self.blocks if block.name == name]

    def version_info(self) -> VersionInfo | None:
        from vmfforge.model.metadata import VersionInfo

        block = self.find("versioninfo")
        return VersionInfo.from_block(block) if block is not None else None

    def visgroups(self) -> VisGroups | None:
        from vmfforge.model.metadata import VisGroups

        block = self.find("visgroups")
        return VisGroups.from_block(block) if block is not None else None

    def view_settings(self) -> ViewSettings | None:
        from vmfforge.model.metadata import ViewSettings

        block = self.find("viewsettings")
        return ViewSettings.from_block(block) if block is not None else None

    def _check_attachable(self, block: Block) -> None:
        if not isinstance(block, Block):
            raise TypeError(f"Document entries must be Block, got {type(block).__name__}")
        _check_unowned(block)


def _check_unowned(block: Block) -> None:
    owner = block._parent
    if owner is None:
        return
    siblings = owner.body if isinstance(owner, Block) else owner.blocks
    # The owner link goes stale when `body`/`blocks` is edited directly.
    if any(entry is block for entry in siblings):
        where = f"block {owner.name!r}" if isinstance(owner, Block) else "the document"
        raise ValueError(f"Block {block.name!r} is already attached to {where}")


def _claim(entry: Entry, owner: Block | Document) -> None:
    if isinstance(entry, Block):
        entry._parent = owner


def _release(entry: Entry) -> None:
    if isinstance(entry, Block):
        entry._parent = None


__all__ = [
    "Block",
    "Document",
    "Entry",
    "KeyValue",
    "validate_block_name",
]
