"""Tests for resgen.project_scanner."""

from __future__ import annotations

from pathlib import Path

import pytest

from resgen.project_scanner import IgnoreRule, IgnoreRules, ProjectScanner, pattern_matches
from tests._fixtures.project_builder import ProjectBuilder


def _relative(paths: list[Path], root: Path) -> list[str]:
    return [path.relative_to(root).as_posix() for path in paths]


def test_scan_splits_resources_and_sources(project_builder: ProjectBuilder) -> None:
    project_builder.image("Resources/logo@2x.png")
    project_builder.write(
        {
            "Resources/en.lproj/Localizable.strings": '"hello" = "Hello";\n',
            "Resources/Main.storyboard": "<document/>\n",
            "Sources/AppDelegate.swift": "import UIKit\n",
            "Sources/Legacy.m": "@import UIKit;\n",
            "README.md": "# App\n",
            "Info.plist": "<plist/>\n",
        }
    )

    manifest = project_builder.scan()
    root = project_builder.path().resolve()

    assert _relative(manifest.resources, root) == [
        "Resources/Main.storyboard",
        "Resources/en.lproj/Localizable.strings",
        "Resources/logo@2x.png",
    ]
    assert _relative(manifest.sources, root) == ["Sources/AppDelegate.swift", "Sources/Legacy.m"]


def test_scan_treats_asset_catalogs_as_single_resource(project_builder: ProjectBuilder) -> None:
    project_builder.asset_catalog("Assets.xcassets", images=["icon"], colors=["brand"])

    manifest = project_builder.scan()

    assert _relative(manifest.resources, project_builder.path().resolve()) == ["Assets.xcassets"]


def test_scan_honors_ignore_file_and_exclude_paths(project_builder: ProjectBuilder) -> None:
    project_builder.image("Resources/keep.png")
    project_builder.image("Resources/drafts/skip.png")
    project_builder.image("Vendor/lib.png")
    project_builder.image("Pods/Thing/pod.png")
    project_builder.image("Resources/important.png")
    project_builder.write(
        {
            ".resgenignore": "drafts/\nimportant.png\n!Resources/important.png\n",
            ".resgen.yml": "exclude_paths:\n  - Vendor/\n",
        }
    )

    manifest = project_builder.scan()

    assert _relative(manifest.resources, project_builder.path().resolve()) == [
        "Resources/important.png",
        "Resources/keep.png",
    ]


def test_scan_uses_configured_globs(project_builder: ProjectBuilder) -> None:
    project_builder.write(
        {
            ".resgen.yml": 'resources:\n  - "Data/**"\nsources:\n  - "App/*.swift"\n',
            "Data/seed.json": "{}\n",
            "App/Main.swift": "\n",
            "Tests/MainTests.swift": "\n",
        }
    )
    project_builder.image("Other/unlisted.png")

    manifest = project_builder.scan()
    root = project_builder.path().resolve()

    assert _relative(manifest.resources, root) == ["Data/seed.json"]
    assert _relative(manifest.sources, root) == ["App/Main.swift"]


def test_scan_skips_generated_output(project_builder: ProjectBuilder) -> None:
    project_builder.write({"R.generated.swift": "// generated\n", "Sources/View.swift": "\n"})

    manifest = project_builder.scan()

    assert _relative(manifest.sources, project_builder.path().resolve()) == ["Sources/View.swift"]


def test_scan_rejects_missing_path(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        ProjectScanner().scan(tmp_path / "missing")


@pytest.mark.parametrize(
    ("path", "pattern", "expected"),
    [
        ("Resources/a.png", "Resources/**", True),
        ("ResourcesExtra/a.png", "Resources/**", False),
        ("a.png", "**/*.png", True),
        ("deep/nested/a.png", "**/*.png", True),
        ("deep/a.json", "*.json", True),
        ("deep/a.json", "deep/*.png", False),
    ],
)
def test_pattern_matches(path: str, pattern: str, expected: bool) -> None:
    assert pattern_matches(path, pattern) is expected


def test_negated_rule_reincludes_path() -> None:
    rules = IgnoreRules(rule for rule in map(IgnoreRule.parse, ["*.png", "!keep.png"]) if rule is not None)

    assert rules.ignores("a/drop.png", False) is True
    assert rules.ignores("a/keep.png", False) is False


def test_ignore_rule_parse() -> None:
    assert IgnoreRule.parse("  # comment") is None
    assert IgnoreRule.parse("") is None
    assert IgnoreRule.parse("!/build/") == IgnoreRule(pattern="build", negate=True, directory_only=True, rooted=True)
    assert IgnoreRule.parse("*.psd") == IgnoreRule(pattern="*.psd")


def test_directory_rule_skips_files_with_same_name() -> None:
    rules = IgnoreRules([IgnoreRule.parse("Generated/")])

    assert rules.ignores("Sources/Generated", True) is True
    assert rules.ignores("Sources/Generated", False) is False
