"""Typed views over the metadata blocks at the top of a VMF file.

`versioninfo`, `visgroups` and `viewsettings` have a fixed, well-known shape.
Each view converts from a generic `Block` (`from_block`) and back
(`to_block`); the block is never modified.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from vmfforge.errors import InvalidValueError, MissingKeyError
from vmfforge.model.model import Block


def _required(block: Block, key: str) -> str:
    value = block.get(key)
    if value is None:
        raise MissingKeyError(block.name, key)
    return value


def _required_int(block: Block, key: str) -> int:
    value = _required(block, key)
    try:
        return int(value)
    except ValueError:
        raise InvalidValueError(block.name, key, value, "an integer") from None


def _flag(value: bool) -> str:
    return "1" if value else "0"


@dataclass(slots=True)
class VersionInfo:
    """Editor and format versions recorded in the `versioninfo` block."""

    editor_version: int = 0
    editor_build: int = 0
    map_version: int = 0
    format_version: int = 0
    prefab: bool = False

    @classmethod
    def from_block(cls, block: Block) -> VersionInfo:
        return cls(
            editor_version=_required_int(block, "editorversion"),
            editor_build=_required_int(block, "editorbuild"),
            map_version=_required_int(block, "mapversion"),
            format_version=_required_int(block, "formatversion"),
            prefab=_required(block, "prefab") == "1",
        )

    def to_block(self) -> Block:
        block = Block("versioninfo")
        block.append_key_value("editorversion", str(self.editor_version))
        block.append_key_value("editorbuild", str(self.editor_build))
        block.append_key_value("mapversion", str(self.map_version))
        block.append_key_value("formatversion", str(self.format_version))
        block.append_key_value("prefab", _flag(self.prefab))
        return block


@dataclass(slots=True)
class VisGroup:
    """An editor visibility group; groups nest."""

    name: str
    id: int
    color: str
    children: list[VisGroup] | None = None

    @classmethod
    def from_block(cls, block: Block) -> VisGroup:
        nested = block.find_blocks("visgroup")
        children = [cls.from_block(child) for child in nested] if nested else None
        return cls(
            name=_required(block, "name"),
            id=_required_int(block, "visgroupid"),
            color=_required(block, "color"),
            children=children,
        )

    def to_block(self) -> Block:
        block = Block("visgroup")
        block.append_key_value("name", self.name)
        block.append_key_value("visgroupid", str(self.id))
        block.append_key_value("color", self.color)
        for child in self.children or ():
            block.append_block(child.to_block())
        return block

    def walk(self) -> Iterator[VisGroup]:
        """Depth-first, pre-order: this group, then its children."""
        stack = [self]
        while stack:
            group = stack.pop()
            yield group
            stack.extend(reversed(group.children or ()))


@dataclass(slots=True)
class VisGroups:
    groups: list[VisGroup] = field(default_factory=list)

    @classmethod
    def from_block(cls, block: Block) -> VisGroups:
        return cls(groups=[VisGroup.from_block(child) for child in block.find_blocks("visgroup")])

    def to_block(self) -> Block:
        block = Block("visgroups")
        for group in self.groups:
            block.append_block(group.to_block())
        return block

    def __iter__(self) -> Iterator[VisGroup]:
        return iter(self.groups)

    def __len__(self) -> int:
        return len(self.groups)

    def walk(self) -> Iterator[VisGroup]:
        for group in self.groups:
            yield from group.walk()

    def find_by_id(self, id: int) -> VisGroup | None:
        for group in self.walk():
            if group.id == id:
                return group
        return None

    def find_by_name(self, name: str) -> VisGroup | None:
        for group in self.walk():
            if group.name == name:
                return group
        return None


@dataclass(slots=True)
class ViewSettings:
    """Hammer grid settings from the `viewsettings` block."""

    snap_to_grid: bool = True
    show_grid: bool = True
    show_logical_grid: bool = False
    grid_spacing: int = 8
    show_3d_grid: bool = False

    @classmethod
    def from_block(cls, block: Block) -> ViewSettings:
        # Hammer omits nGridSpacing/bShow3DGrid in older maps.
        try:
            grid_spacing = int(block.get("nGridSpacing", ""))
        except ValueError:
            grid_spacing = 64
        return cls(
            snap_to_grid=_required(block, "bSnapToGrid") == "1",
            show_grid=_required(block, "bShowGrid") == "1",
            show_logical_grid=_required(block, "bShowLogicalGrid") == "1",
            grid_spacing=grid_spacing,
            show_3d_grid=block.get("bShow3DGrid", "0") == "1",
        )

    def to_block(self) -> Block:
        block = Block("viewsettings")
        block.append_key_value("bSnapToGrid", _flag(self.snap_to_grid))
        block.append_key_value("bShowGrid", _flag(self.show_grid))
        block.append_key_value("bShowLogicalGrid", _flag(self.show_logical_grid))
        block.append_key_value("nGridSpacing", str(self.grid_spacing))
        block.append_key_value("bShow3DGrid", _flag(self.show_3d_grid))
        return block


__all__ = ["VersionInfo", "ViewSettings", "VisGroup", "VisGroups"]
