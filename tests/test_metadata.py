import pytest

from tests._shared_cases import HAMMER_MAP_SOURCE, WORLD_SIDE_SOURCE
from vmfforge.errors import InvalidValueError, MissingKeyError
from vmfforge.model import Block, KeyValue, VersionInfo, ViewSettings, VisGroup, VisGroups
from vmfforge.pipeline import parse


def test_version_info_from_document() -> None:
    info = parse(HAMMER_MAP_SOURCE).version_info()

    assert info == VersionInfo(editor_version=400, editor_build=8864, map_version=3, format_version=100, prefab=False)


def test_version_info_to_block_key_order_and_flags() -> None:
    block = VersionInfo(editor_version=400, editor_build=1, map_version=2, format_version=100, prefab=True).to_block()

    assert block.name == "versioninfo"
    assert block.key_values == (
        KeyValue("editorversion", "400"),
        KeyValue("editorbuild", "1"),
        KeyValue("mapversion", "2"),
        KeyValue("formatversion", "100"),
        KeyValue("prefab", "1"),
    )
    assert VersionInfo.from_block(block).prefab is True


def test_version_info_missing_key() -> None:
    block = Block("versioninfo", [KeyValue("editorversion", "400")])

    with pytest.raises(MissingKeyError) as excinfo:
        VersionInfo.from_block(block)

    assert isinstance(excinfo.value, KeyError)
    assert excinfo.value.block == "versioninfo"
    assert excinfo.value.key == "editorbuild"
    assert str(excinfo.value) == "Block 'versioninfo' is missing required key 'editorbuild'"


def test_version_info_invalid_integer() -> None:
    block = VersionInfo().to_block()
    block.set("mapversion", "three")

    with pytest.raises(InvalidValueError) as excinfo:
        VersionInfo.from_block(block)

    assert isinstance(excinfo.value, ValueError)
    assert (excinfo.value.key, excinfo.value.value) == ("mapversion", "three")


def test_visgroups_nested_lookup() -> None:
    groups = parse(HAMMER_MAP_SOURCE).visgroups()
    assert groups is not None

    assert len(groups) == 2
    assert [group.name for group in groups] == ["Walls", "Lights"]
    assert [group.id for group in groups.walk()] == [1, 4, 2]

    trim = groups.find_by_id(4)
    assert trim is not None
    assert trim.name == "Trim"
    assert trim.color == "100 100 100"
    assert trim.children is None

    walls = groups.find_by_name("Walls")
    assert walls is not None
    assert walls.children == [trim]

    assert groups.find_by_id(99) is None
    assert groups.find_by_name("missing") is None


def test_visgroups_to_block_round_trip() -> None:
    groups = VisGroups(
        [
            VisGroup("Walls", 1, "220 30 220", children=[VisGroup("Trim", 4, "100 100 100")]),
            VisGroup("Lights", 2, "255 255 0"),
        ]
    )

    block = groups.to_block()

    assert block.name == "visgroups"
    assert [child.name for child in block.blocks] == ["visgroup", "visgroup"]
    assert VisGroups.from_block(block) == groups
    assert block == parse(HAMMER_MAP_SOURCE).find("visgroups")


def test_visgroup_missing_color() -> None:
    block = Block("visgroup", [KeyValue("name", "Walls"), KeyValue("visgroupid", "1")])

    with pytest.raises(MissingKeyError):
        VisGroup.from_block(block)


def test_view_settings_from_document() -> None:
    settings = parse(HAMMER_MAP_SOURCE).view_settings()

    assert settings == ViewSettings(
        snap_to_grid=True,
        show_grid=True,
        show_logical_grid=False,
        grid_spacing=16,
        show_3d_grid=False,
    )


def test_view_settings_defaults_for_older_maps() -> None:
    block = Block(
        "viewsettings",
        [KeyValue("bSnapToGrid", "0"), KeyValue("bShowGrid", "1"), KeyValue("bShowLogicalGrid", "1")],
    )

    settings = ViewSettings.from_block(block)

    assert settings.snap_to_grid is False
    assert settings.show_logical_grid is True
    assert settings.grid_spacing == 64
    assert settings.show_3d_grid is False


def test_view_settings_unparsable_spacing_falls_back() -> None:
    block = ViewSettings().to_block()
    block.set("nGridSpacing", "wide")

    assert ViewSettings.from_block(block).grid_spacing == 64


def test_view_settings_to_block() -> None:
    block = ViewSettings().to_block()

    assert block.keys() == ["bSnapToGrid", "bShowGrid", "bShowLogicalGrid", "nGridSpacing", "bShow3DGrid"]
    assert block.get_all("nGridSpacing") == ["8"]
    assert ViewSettings.from_block(block) == ViewSettings()


def test_metadata_lookups_return_none_when_block_is_absent() -> None:
    document = parse(WORLD_SIDE_SOURCE)

    assert document.version_info() is None
    assert document.visgroups() is None
    assert document.view_settings() is None
