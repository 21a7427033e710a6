"""Loose image files with scale and device suffixes."""

from __future__ import annotations

import re
from pathlib import Path

from .base import ResourceParser, locale_of
from ..models import Image, ResourceKind

_VARIANT_PATTERN = re.compile(r"(?:@(?P<scale>[1-9])x)?(?:~(?:ipad|iphone|universal|mac|tv|watch))?$")

IMAGE_EXTENSIONS = frozenset(
    {"tiff", "tif", "jpg", "jpeg", "gif", "png", "bmp", "bmpf", "ico", "cur", "xbm", "heic", "webp"}
)


def split_variant(stem: str) -> tuple[str, int]:
    """Return ``(base_name, scale)`` for names like ``icon@2x~ipad``."""
    match = _VARIANT_PATTERN.search(stem)
    if match is None or match.start() == 0:
        return stem, 1
    scale = int(match.group("scale")) if match.group("scale") else 1
    return stem[: match.start()], scale


class ImageParser(ResourceParser):
    """Parses loose images; ``icon@2x.png`` and ``icon.png`` share the name ``icon``."""

    name = "image"
    extensions = IMAGE_EXTENSIONS

    def _parse(self, path: Path) -> Image:
        base_name, scale = split_variant(path.stem)
        return Image(
            kind=ResourceKind.IMAGE,
            name=base_name,
            path=str(path),
            locale=locale_of(path),
            extension=path.suffix[1:],
            scales=(scale,),
        )
