"""Generic bundled files."""

from __future__ import annotations

from pathlib import Path

from .base import ResourceParser, ResourceParsingError, extension_of, locale_of
from ..models import ResourceFile, ResourceKind

# Compiled or container formats that cannot be read back as plain bundle files.
UNSUPPORTED_EXTENSIONS = frozenset({"xcassets", "lproj", "storyboardc", "xcodeproj", "xcworkspace"})


class ResourceFileParser(ResourceParser):
    """Accepts any file whose extension is not claimed by a container format."""

    name = "file"

    def supports(self, path: Path) -> bool:
        return extension_of(path) not in UNSUPPORTED_EXTENSIONS

    def parse(self, path: Path) -> ResourceFile:
        if not self.supports(path):
            raise ResourceParsingError(
                f"File extension '{extension_of(path)}' of {path.name} cannot be bundled as a plain file",
                path=path,
                extension=extension_of(path),
            )
        return self._parse(path)

    def _parse(self, path: Path) -> ResourceFile:
        return ResourceFile(
            kind=ResourceKind.FILE,
            name=path.stem,
            path=str(path),
            locale=locale_of(path),
            extension=path.suffix[1:],
        )
