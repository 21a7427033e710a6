"""Configuration loading for resgen (.resgen.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .symbols import AccessLevel

CONFIG_FILENAME = ".resgen.yml"
DEFAULT_OUTPUT = "R.generated.swift"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class GeneratorConfig:
    """Generator enablement."""

    enabled: List[str] = field(default_factory=list)


@dataclass
class ResgenConfig:
    """Represents the high-level settings defined in .resgen.yml."""

    root: Path
    module_name: str = ""
    access_level: AccessLevel = AccessLevel.INTERNAL
    output: Path = Path(DEFAULT_OUTPUT)
    resources: List[str] = field(default_factory=list)
    sources: List[str] = field(default_factory=list)
    exclude_paths: List[str] = field(default_factory=list)
    generators: GeneratorConfig = field(default_factory=GeneratorConfig)
    imports: List[str] = field(default_factory=list)
    objc_compat: bool = False
    unused_images: bool = False
    templates_dir: Optional[Path] = None

    def __post_init__(self) -> None:
        if not self.module_name:
            self.module_name = _default_module_name(self.root)

    @property
    def output_path(self) -> Path:
        return self.output if self.output.is_absolute() else self.root / self.output


def load_config(config_path: Path) -> ResgenConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return ResgenConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    access_raw = _as_str(data.get("access_level"))
    try:
        access_level = AccessLevel.parse(access_raw) if access_raw else AccessLevel.INTERNAL
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc
    if access_level not in (AccessLevel.PUBLIC, AccessLevel.INTERNAL):
        raise ConfigError("access_level must be 'public' or 'internal'")

    generators = GeneratorConfig()
    generator_data = _as_dict(data.get("generators"))
    if generator_data:
        generators.enabled = _as_str_list(generator_data.get("enabled"))

    output_str = _as_str(data.get("output"))
    templates_dir_str = _as_str(data.get("templates_dir"))

    return ResgenConfig(
        root=root,
        module_name=_as_str(data.get("module_name")) or "",
        access_level=access_level,
        output=Path(output_str) if output_str else Path(DEFAULT_OUTPUT),
        resources=_as_str_list(data.get("resources")),
        sources=_as_str_list(data.get("sources")),
        exclude_paths=_as_str_list(data.get("exclude_paths")),
        generators=generators,
        imports=_as_str_list(data.get("imports")),
        objc_compat=_as_bool(data.get("objc_compat")) or False,
        unused_images=_as_bool(data.get("unused_images")) or False,
        templates_dir=root / templates_dir_str if templates_dir_str else None,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _default_module_name(root: Path) -> str:
    name = root.name or "App"
    return "".join(char if char.isalnum() or char == "_" else "_" for char in name)


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, str):
        return value.strip() or None
    return str(value)


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value.strip()] if value.strip() else []
    if isinstance(value, (list, tuple)):
        return [str(item).strip() for item in value if str(item).strip()]
    return []


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1", "on"}:
            return True
        if lowered in {"false", "no", "0", "off"}:
            return False
    if isinstance(value, int):
        return bool(value)
    return None


__all__ = ["ConfigError", "GeneratorConfig", "ResgenConfig", "load_config"]
