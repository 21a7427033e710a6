"""Tests for symbol tree validation."""

from __future__ import annotations

import pytest

from resgen.generators import aggregate
from resgen.symbols import Leaf, Origin, Struct, Type
from resgen.validators import INTERNAL_ROOT, StructValidationError, find_collisions, split, validate


def _leaf(name: str, raw: str, type_: Type = Type.IMAGE_RESOURCE, *, internal: bool = False) -> Leaf:
    return Leaf(name=name, type=type_, origin=Origin("image", raw, f"{raw}.png"), internal=internal)


def _tree(*leaves: Leaf) -> Struct:
    return aggregate([Struct("image", leaves=list(leaves))]).root


def test_validate_passes_tree_without_collisions() -> None:
    external, internal = validate(_tree(_leaf("logo", "logo"), _leaf("home", "home")))

    image = external.child("image")
    assert image is not None
    assert [leaf.name for leaf in image.leaves] == ["logo", "home"]
    assert internal.name == INTERNAL_ROOT
    assert internal.is_empty()


def test_validate_reports_every_collision() -> None:
    tree = _tree(
        _leaf("iconHome", "icon-home"),
        _leaf("iconHome", "icon_home"),
        _leaf("logo", "logo"),
        _leaf("settings", "Settings"),
        _leaf("settings", "settings"),
    )

    with pytest.raises(StructValidationError) as excinfo:
        validate(tree)

    collisions = excinfo.value.collisions
    assert [collision.location for collision in collisions] == ["R.image.iconHome", "R.image.settings"]
    raw_names = {entry.origin.raw_name for entry in collisions[0].entries}
    assert raw_names == {"icon-home", "icon_home"}
    assert "icon-home" in str(excinfo.value) and "icon_home" in str(excinfo.value)


def test_validate_folds_exact_duplicates() -> None:
    external, _ = validate(_tree(_leaf("logo", "logo"), _leaf("logo", "logo")))

    image = external.child("image")
    assert image is not None and len(image.leaves) == 1


def test_leaf_and_struct_with_same_name_collide() -> None:
    root = Struct("R")
    image = root.ensure_child("image")
    image.leaves.append(_leaf("icons", "icons"))
    image.ensure_child("icons").leaves.append(_leaf("home", "Icons/home"))

    collisions = find_collisions(root, "external")

    (collision,) = collisions
    assert collision.location == "R.image.icons"
    assert {entry.kind for entry in collision.entries} == {"leaf", "struct"}


def test_split_partitions_by_internal_flag_and_prunes_empty_structs() -> None:
    root = Struct("R")
    strings = root.ensure_child("string").ensure_child("localizable")
    strings.leaves.append(_leaf("hello", "hello", Type.STRING_RESOURCE))
    strings.leaves.append(_leaf("hello", "hello", Type.STRING, internal=True))
    root.ensure_child("image").leaves.append(_leaf("logo", "logo"))

    external, internal = split(root)

    assert [child.name for child in external.structs] == ["string", "image"]
    assert [child.name for child in internal.structs] == ["string"]
    assert all(not leaf.internal for _, leaf in external.walk())
    assert all(leaf.internal for _, leaf in internal.walk())


def test_same_identifier_may_appear_in_both_partitions() -> None:
    root = Struct("R")
    table = root.ensure_child("string").ensure_child("localizable")
    table.leaves.append(_leaf("hello", "hello", Type.STRING_RESOURCE))
    table.leaves.append(_leaf("hello", "hello", Type.STRING, internal=True))

    external, internal = validate(root)

    assert external.find("string.localizable") is not None
    assert internal.find("string.localizable") is not None


def test_validate_reports_same_identifier_with_different_types() -> None:
    image = Leaf(name="foo", type=Type.IMAGE_RESOURCE, origin=Origin("image", "foo", "foo.png"))
    font = Leaf(name="foo", type=Type.FONT_RESOURCE, origin=Origin("font", "Foo", "Foo.ttf"))
    tree = aggregate([Struct("x", leaves=[image]), Struct("x", leaves=[font])])

    with pytest.raises(StructValidationError) as excinfo:
        validate(tree)

    (collision,) = excinfo.value.collisions
    assert collision.location == "R.x.foo"
    assert {entry.type for entry in collision.entries} == {"ImageResource", "FontResource"}
    message = str(excinfo.value)
    assert "image 'foo' (foo.png)" in message and "font 'Foo' (Foo.ttf)" in message
    (conflict,) = excinfo.value.conflicts
    assert (conflict.first, conflict.second) == (image, font)
