"""Tests for resgen.resources.collect_resources."""

from __future__ import annotations

import pytest

from resgen.resources import ResourceParsingError, collect_resources, parser_for, typed_resource_extensions
from resgen.resources.files import ResourceFileParser
from tests._fixtures.project_builder import ProjectBuilder


def test_typed_resource_extensions_cover_every_parser() -> None:
    extensions = typed_resource_extensions()

    for extension in ("xcassets", "png", "ttf", "strings", "stringsdict", "storyboard", "xib"):
        assert extension in extensions
    assert "json" not in extensions


def test_parser_for_falls_back_to_plain_files(project_builder: ProjectBuilder) -> None:
    assert isinstance(parser_for(project_builder.path("seed.json")), ResourceFileParser)


def test_collect_resources_groups_descriptors_by_kind(project_builder: ProjectBuilder) -> None:
    project_builder.image("Images/logo.png")
    project_builder.image("Images/logo@2x.png")
    project_builder.font("Fonts/Lato.ttf", "Lato-Regular")
    project_builder.asset_catalog("Assets.xcassets", images=["hero"], colors=["tint"])
    project_builder.write(
        {
            "en.lproj/Localizable.strings": '"hello" = "Hello";\n',
            "Data/seed.json": "{}\n",
        }
    )
    paths = [
        project_builder.path("Images/logo.png"),
        project_builder.path("Images/logo@2x.png"),
        project_builder.path("Fonts/Lato.ttf"),
        project_builder.path("Assets.xcassets"),
        project_builder.path("en.lproj/Localizable.strings"),
        project_builder.path("Data/seed.json"),
    ]

    resources = collect_resources(paths)

    assert len(resources) == 6
    assert [image.name for image in resources.images] == ["logo", "logo"]
    assert [font.name for font in resources.fonts] == ["Lato-Regular"]
    assert [folder.name for folder in resources.asset_folders] == ["Assets"]
    assert [table.name for table in resources.localizable_strings] == ["Localizable"]
    assert [item.name for item in resources.resource_files] == ["seed"]
    assert sorted(resources.declared_image_names()) == ["hero", "logo", "logo"]


def test_collect_resources_fails_on_first_broken_resource(project_builder: ProjectBuilder) -> None:
    project_builder.write({"Broken.xib": "<document>", "ok.json": "{}"})

    with pytest.raises(ResourceParsingError) as excinfo:
        collect_resources([project_builder.path("ok.json"), project_builder.path("Broken.xib")])

    assert excinfo.value.path == project_builder.path("Broken.xib")
