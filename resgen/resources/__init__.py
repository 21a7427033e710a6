"""Resource parsers and the collector that builds the resource catalogue."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Sequence

from .asset_catalogs import AssetFolderParser
from .base import ResourceParser, ResourceParsingError, extension_of
from .files import ResourceFileParser
from .fonts import FontParser
from .images import ImageParser
from .interface_builder import NibParser, StoryboardParser
from .strings import StringsParser, parse_format_parts
from ..logging import get_logger
from ..models import (
    AssetFolder,
    Font,
    Image,
    LocalizableStrings,
    Nib,
    ResourceDescriptor,
    ResourceFile,
    Resources,
    Storyboard,
)

_LOGGER = get_logger("resources")

# Typed parsers are tried in order; anything unclaimed becomes a plain resource file.
_TYPED_PARSERS: Sequence[ResourceParser] = (
    AssetFolderParser(),
    ImageParser(),
    FontParser(),
    StringsParser(),
    StoryboardParser(),
    NibParser(),
)
_FALLBACK_PARSER = ResourceFileParser()


def typed_resource_extensions() -> List[str]:
    """Return extensions with a dedicated parser (everything but plain files)."""
    return sorted({extension for parser in _TYPED_PARSERS for extension in parser.extensions})


def parser_for(path: Path) -> ResourceParser:
    for parser in _TYPED_PARSERS:
        if parser.supports(path):
            return parser
    return _FALLBACK_PARSER


def collect_resources(paths: Iterable[Path]) -> Resources:
    """Parse every path into a descriptor and group the results by kind.

    Raises :class:`ResourceParsingError` on the first resource that cannot be
    parsed; a partial catalogue is never returned.
    """
    resources = Resources()
    for path in sorted(Path(item) for item in paths):
        parser = parser_for(path)
        descriptor = parser.parse(path)
        _LOGGER.debug("Parsed %s as %s", path, parser.name)
        _add(resources, descriptor)
    return resources


def _add(resources: Resources, descriptor: ResourceDescriptor) -> None:
    if isinstance(descriptor, AssetFolder):
        resources.asset_folders.append(descriptor)
    elif isinstance(descriptor, Image):
        resources.images.append(descriptor)
    elif isinstance(descriptor, Font):
        resources.fonts.append(descriptor)
    elif isinstance(descriptor, LocalizableStrings):
        resources.localizable_strings.append(descriptor)
    elif isinstance(descriptor, Storyboard):
        resources.storyboards.append(descriptor)
    elif isinstance(descriptor, Nib):
        resources.nibs.append(descriptor)
    elif isinstance(descriptor, ResourceFile):
        resources.resource_files.append(descriptor)
    else:  # pragma: no cover - parsers only return the types above
        raise TypeError(f"Unexpected descriptor type {type(descriptor).__name__}")


__all__ = [
    "ResourceParser",
    "ResourceParsingError",
    "collect_resources",
    "extension_of",
    "parse_format_parts",
    "parser_for",
    "typed_resource_extensions",
]
