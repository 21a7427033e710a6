"""Tests for resgen.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from resgen.config import ConfigError, ResgenConfig, load_config
from resgen.symbols import AccessLevel


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    project = tmp_path / "My-App"
    project.mkdir()

    config = load_config(project)

    assert isinstance(config, ResgenConfig)
    assert config.root == project.resolve()
    assert config.module_name == "My_App"
    assert config.access_level is AccessLevel.INTERNAL
    assert config.output == Path("R.generated.swift")
    assert config.output_path == project.resolve() / "R.generated.swift"
    assert config.resources == []
    assert config.sources == []
    assert config.generators.enabled == []
    assert config.objc_compat is False
    assert config.unused_images is False
    assert config.templates_dir is None


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".resgen.yml"
    config_file.write_text(
        """
module_name: Shop
access_level: public
output: Generated/R.generated.swift
resources:
  - "Resources/**"
sources:
  - "Sources/**/*.swift"
exclude_paths:
  - "Vendor/"
generators:
  enabled: [image, string]
imports: [SnapKit]
objc_compat: yes
unused_images: true
templates_dir: templates
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    assert config.module_name == "Shop"
    assert config.access_level is AccessLevel.PUBLIC
    assert config.output_path == tmp_path.resolve() / "Generated" / "R.generated.swift"
    assert config.resources == ["Resources/**"]
    assert config.sources == ["Sources/**/*.swift"]
    assert config.exclude_paths == ["Vendor/"]
    assert config.generators.enabled == ["image", "string"]
    assert config.imports == ["SnapKit"]
    assert config.objc_compat is True
    assert config.unused_images is True
    assert config.templates_dir == tmp_path.resolve() / "templates"


def test_load_config_accepts_empty_file(tmp_path: Path) -> None:
    (tmp_path / ".resgen.yml").write_text("", encoding="utf-8")

    config = load_config(tmp_path)

    assert config.access_level is AccessLevel.INTERNAL


def test_load_config_rejects_invalid_yaml(tmp_path: Path) -> None:
    (tmp_path / ".resgen.yml").write_text("module_name: [unterminated\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_rejects_non_mapping_root(tmp_path: Path) -> None:
    (tmp_path / ".resgen.yml").write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigError, match="mapping"):
        load_config(tmp_path)


@pytest.mark.parametrize("level", ["private", "fileprivate", "protected"])
def test_load_config_rejects_unsupported_access_levels(tmp_path: Path, level: str) -> None:
    (tmp_path / ".resgen.yml").write_text(f"access_level: {level}\n", encoding="utf-8")

    with pytest.raises(ConfigError):
        load_config(tmp_path)
