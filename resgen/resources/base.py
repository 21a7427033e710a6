"""Base classes for per-format resource parsers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import FrozenSet, Iterable, Optional

from ..models import ResourceDescriptor


class ResourceParsingError(RuntimeError):
    """Raised when a resource cannot be turned into a descriptor."""

    def __init__(
        self,
        message: str,
        *,
        path: Optional[Path] = None,
        extension: Optional[str] = None,
        supported_extensions: Iterable[str] = (),
    ) -> None:
        super().__init__(message)
        self.path = path
        self.extension = extension
        self.supported_extensions = sorted(set(supported_extensions))

    @classmethod
    def unsupported_extension(
        cls, path: Path, supported_extensions: Iterable[str]
    ) -> "ResourceParsingError":
        supported = sorted(set(supported_extensions))
        extension = extension_of(path)
        joined = ", ".join(supported)
        return cls(
            f"File extension '{extension}' of {path.name} is not one of the supported extensions: {joined}",
            path=path,
            extension=extension,
            supported_extensions=supported,
        )

    @classmethod
    def parsing_failed(cls, path: Path, detail: str) -> "ResourceParsingError":
        return cls(f"Failed to parse {path}: {detail}", path=path, extension=extension_of(path))


class ResourceParser(ABC):
    """Contract for parsers that turn one resource path into a descriptor."""

    name: str = "resource"
    extensions: FrozenSet[str] = frozenset()

    def supports(self, path: Path) -> bool:
        """Return True when this parser handles ``path``."""
        return extension_of(path) in self.extensions

    def parse(self, path: Path) -> ResourceDescriptor:
        if not self.supports(path):
            raise ResourceParsingError.unsupported_extension(path, self.extensions)
        return self._parse(path)

    @abstractmethod
    def _parse(self, path: Path) -> ResourceDescriptor:
        """Parse a path already known to carry a supported extension."""


def extension_of(path: Path) -> str:
    return path.suffix[1:].lower() if path.suffix else ""


def locale_of(path: Path) -> Optional[str]:
    """Return the locale of a resource inside an ``<locale>.lproj`` folder."""
    for parent in path.parents:
        if parent.suffix == ".lproj":
            return parent.stem
    return None
