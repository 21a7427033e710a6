"""Tests for asset catalog parsing."""

from __future__ import annotations

import pytest

from resgen.resources import ResourceParsingError
from resgen.resources.asset_catalogs import AssetFolderParser
from tests._fixtures.project_builder import ProjectBuilder


def test_asset_folder_parser_collects_images_and_colors(project_builder: ProjectBuilder) -> None:
    catalog = project_builder.asset_catalog(
        "Assets.xcassets",
        images=["logo", "Icons/home", "Flat/star"],
        colors=["brand"],
        namespaces=["Icons"],
    )
    (catalog / "AppIcon.appiconset").mkdir()

    folder = AssetFolderParser().parse(catalog)

    assert folder.name == "Assets"
    assert folder.image_assets == ("Icons/home", "logo", "star")
    assert folder.color_assets == ("brand",)


def test_asset_folder_parser_rejects_invalid_group_contents(project_builder: ProjectBuilder) -> None:
    catalog = project_builder.asset_catalog("Assets.xcassets", images=["Group/inner"])
    (catalog / "Group" / "Contents.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(ResourceParsingError, match="Contents.json"):
        AssetFolderParser().parse(catalog)
