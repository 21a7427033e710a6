"""Asset catalog (``.xcassets``) folders."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List, Sequence

from .base import ResourceParser, ResourceParsingError
from ..models import AssetFolder, ResourceKind

_IMAGE_SET = ".imageset"
_COLOR_SET = ".colorset"
# Sets that never become accessors; app icons and launch images are looked up by the OS.
_SKIPPED_SETS = {".appiconset", ".launchimage", ".brandassets", ".imagestack", ".iconset", ".dataset", ".symbolset"}


class AssetFolderParser(ResourceParser):
    """Collects image and color set names, honoring ``provides-namespace`` groups."""

    name = "asset-folder"
    extensions = frozenset({"xcassets"})

    def _parse(self, path: Path) -> AssetFolder:
        if not path.is_dir():
            raise ResourceParsingError.parsing_failed(path, "asset catalog is not a directory")

        images: List[str] = []
        colors: List[str] = []
        self._walk(path, (), images, colors)
        return AssetFolder(
            kind=ResourceKind.ASSET_FOLDER,
            name=path.stem,
            path=str(path),
            image_assets=tuple(sorted(images)),
            color_assets=tuple(sorted(colors)),
        )

    def _walk(self, directory: Path, namespace: Sequence[str], images: List[str], colors: List[str]) -> None:
        for child in sorted(directory.iterdir()):
            if not child.is_dir():
                continue
            suffix = child.suffix.lower()
            if suffix == _IMAGE_SET:
                images.append("/".join([*namespace, child.stem]))
            elif suffix == _COLOR_SET:
                colors.append("/".join([*namespace, child.stem]))
            elif suffix in _SKIPPED_SETS:
                continue
            else:
                contents = _read_contents(child)
                properties = contents.get("properties")
                provides_namespace = isinstance(properties, dict) and bool(properties.get("provides-namespace"))
                nested = [*namespace, child.name] if provides_namespace else list(namespace)
                self._walk(child, nested, images, colors)


def _read_contents(directory: Path) -> Dict[str, object]:
    contents_path = directory / "Contents.json"
    if not contents_path.exists():
        return {}
    try:
        payload = json.loads(contents_path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ResourceParsingError.parsing_failed(contents_path, str(exc)) from exc
    return payload if isinstance(payload, dict) else {}
