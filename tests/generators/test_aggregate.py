"""Tests for struct aggregation."""

from __future__ import annotations

from resgen.generators import AggregatedStructGenerator, ImageStructGenerator, StringsStructGenerator, aggregate
from resgen.models import AssetFolder, ResourceKind, Resources
from resgen.symbols import AccessLevel, Leaf, Origin, Struct, Type


def _leaf(name: str, type_: Type, generator: str = "test") -> Leaf:
    return Leaf(name=name, type=type_, origin=Origin(generator, name))


def test_aggregate_merges_same_named_structs_recursively() -> None:
    first = Struct("image", leaves=[_leaf("logo", Type.IMAGE_RESOURCE)])
    first.ensure_child("icons").leaves.append(_leaf("home", Type.IMAGE_RESOURCE))
    second = Struct("image")
    second.ensure_child("icons").leaves.append(_leaf("back", Type.IMAGE_RESOURCE))

    result = aggregate([first, second, Struct("font")])

    assert result.root.name == "R"
    assert [child.name for child in result.root.structs] == ["image", "font"]
    icons = result.root.find("image.icons")
    assert icons is not None
    assert [leaf.name for leaf in icons.leaves] == ["home", "back"]
    assert result.conflicts == []


def test_aggregate_keeps_conflicting_leaves_and_records_them() -> None:
    first = Struct("file", leaves=[_leaf("data", Type.FILE_RESOURCE, "file")])
    second = Struct("file", leaves=[_leaf("data", Type.STRING, "other")])

    result = aggregate([first, second])

    merged = result.root.child("file")
    assert merged is not None and len(merged.leaves) == 2
    (conflict,) = result.conflicts
    assert conflict.path == ("R", "file")
    assert "data" in conflict.describe()


def test_aggregated_generator_runs_generators_in_order() -> None:
    catalog = AssetFolder(kind=ResourceKind.ASSET_FOLDER, name="Assets", path="Assets.xcassets", image_assets=("logo",))

    tree = AggregatedStructGenerator([ImageStructGenerator(), StringsStructGenerator()]).generate(
        Resources(asset_folders=[catalog]), AccessLevel.PUBLIC
    )

    assert [child.name for child in tree.root.structs] == ["image", "string"]
    assert tree.root.access_level is AccessLevel.PUBLIC
