"""Image and color struct generators."""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, List, Set

from .base import StructGenerator
from ..identifiers import sanitize, sanitize_path
from ..models import Resources
from ..symbols import AccessLevel, Leaf, Origin, Parameter, Struct, Type

_TRAIT_COLLECTION = Type("UIKit", "UITraitCollection", optional=True)


def image_accessor_path(raw_name: str) -> List[str]:
    """Identifier path of an image below the ``image`` struct (``Icons/home`` -> icons.home)."""
    return sanitize_path(component for component in raw_name.split("/") if component) or [sanitize(raw_name)]


class ImageStructGenerator(StructGenerator):
    """One leaf per distinct image name; scale and device variants share it."""

    name = "image"

    def generate(self, resources: Resources, access_level: AccessLevel, prefix: str) -> Struct:
        struct = Struct(name="image", access_level=access_level)

        scales: Dict[str, Set[int]] = defaultdict(set)
        sources: Dict[str, str] = {}
        for image in resources.images:
            scales[image.name].update(image.scales)
            sources.setdefault(image.name, image.path)
        for folder in resources.asset_folders:
            for asset in folder.image_assets:
                sources.setdefault(asset, folder.path)

        for raw_name in sorted(sources):
            path = image_accessor_path(raw_name)
            leaf = Leaf(
                name=path[-1],
                type=Type.IMAGE_RESOURCE,
                origin=Origin(self.name, raw_name, sources[raw_name]),
                accessor=f"{self.qualified(prefix, 'image', *path)} resolves the '{raw_name}' image at lookup time",
                parameters=(Parameter("traitCollection", _TRAIT_COLLECTION, label="compatibleWith"),),
                attributes={"name": raw_name, "scales": sorted(scales.get(raw_name, ()))},
            )
            struct.add_leaf(leaf, path[:-1])
        return struct


class ColorStructGenerator(StructGenerator):
    """One leaf per color set found in asset catalogs."""

    name = "color"

    def generate(self, resources: Resources, access_level: AccessLevel, prefix: str) -> Struct:
        struct = Struct(name="color", access_level=access_level)
        seen: Set[str] = set()
        for folder in resources.asset_folders:
            for raw_name in folder.color_assets:
                if raw_name in seen:
                    continue
                seen.add(raw_name)
                path = image_accessor_path(raw_name)
                struct.add_leaf(
                    Leaf(
                        name=path[-1],
                        type=Type.COLOR_RESOURCE,
                        origin=Origin(self.name, raw_name, folder.path),
                        accessor=f"{self.qualified(prefix, 'color', *path)} returns the '{raw_name}' color",
                        parameters=(Parameter("traitCollection", _TRAIT_COLLECTION, label="compatibleWith"),),
                        attributes={"name": raw_name},
                    ),
                    path[:-1],
                )
        return struct
