"""Core data models shared across resgen components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .symbols import Reusable, Type


class ResourceKind(str, Enum):
    """Kinds of resources understood by the collector."""

    IMAGE = "image"
    ASSET_FOLDER = "asset-folder"
    FONT = "font"
    FILE = "file"
    STRINGS = "strings"
    STORYBOARD = "storyboard"
    NIB = "nib"


@dataclass(frozen=True)
class ResourceDescriptor:
    """One parsed resource; immutable once built by its parser."""

    kind: ResourceKind
    name: str
    path: str
    locale: Optional[str] = None


@dataclass(frozen=True)
class Image(ResourceDescriptor):
    """Loose image file, possibly with several scale or device variants."""

    extension: str = ""
    scales: Tuple[int, ...] = ()


@dataclass(frozen=True)
class AssetFolder(ResourceDescriptor):
    """An asset catalog with its namespaced image and color set names."""

    image_assets: Tuple[str, ...] = ()
    color_assets: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Font(ResourceDescriptor):
    """Font file identified by its PostScript name (``name``)."""

    filename: str = ""


@dataclass(frozen=True)
class ResourceFile(ResourceDescriptor):
    """Generic bundled file accessed by name and extension."""

    extension: str = ""


@dataclass(frozen=True)
class FormatPart:
    """A single printf-style placeholder parsed from a localized value."""

    spec: str
    position: int

    @property
    def type(self) -> Type:
        return FORMAT_TYPES.get(self.spec[-1], FORMAT_TYPES["@"])


@dataclass(frozen=True)
class StringEntry:
    """Key and value of one localized string with its placeholders."""

    key: str
    value: str
    params: Tuple[FormatPart, ...] = ()

    @property
    def arity(self) -> int:
        return len(self.params)


@dataclass(frozen=True)
class LocalizableStrings(ResourceDescriptor):
    """One string table in one locale; ``name`` is the table name."""

    entries: Tuple[StringEntry, ...] = ()


@dataclass(frozen=True)
class ViewController:
    """View controller declared inside a storyboard."""

    id: str
    storyboard_identifier: Optional[str]
    type: Type


@dataclass(frozen=True)
class Segue:
    """Storyboard segue from one view controller to another."""

    identifier: str
    type: Type
    source: Type
    destination: Type
    kind: str = "show"


@dataclass(frozen=True)
class Storyboard(ResourceDescriptor):
    """Parsed storyboard file."""

    initial_view_controller: Optional[ViewController] = None
    view_controllers: Tuple[ViewController, ...] = ()
    segues: Tuple[Segue, ...] = ()
    reusables: Tuple[Reusable, ...] = ()
    used_image_identifiers: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Nib(ResourceDescriptor):
    """Parsed nib (``.xib``) file."""

    root_views: Tuple[Type, ...] = ()
    reusables: Tuple[Reusable, ...] = ()
    used_image_identifiers: Tuple[str, ...] = ()


@dataclass
class Resources:
    """Catalogue of every parsed descriptor, grouped by kind."""

    images: List[Image] = field(default_factory=list)
    asset_folders: List[AssetFolder] = field(default_factory=list)
    fonts: List[Font] = field(default_factory=list)
    resource_files: List[ResourceFile] = field(default_factory=list)
    localizable_strings: List[LocalizableStrings] = field(default_factory=list)
    storyboards: List[Storyboard] = field(default_factory=list)
    nibs: List[Nib] = field(default_factory=list)

    @property
    def reusables(self) -> List[Reusable]:
        containers = [*self.storyboards, *self.nibs]
        return [reusable for container in containers for reusable in container.reusables]

    def declared_image_names(self) -> List[str]:
        names = [image.name for image in self.images]
        for folder in self.asset_folders:
            names.extend(folder.image_assets)
        return names

    def used_image_names(self) -> List[str]:
        containers = [*self.storyboards, *self.nibs]
        return [name for container in containers for name in container.used_image_identifiers]

    def __len__(self) -> int:
        return (
            len(self.images)
            + len(self.asset_folders)
            + len(self.fonts)
            + len(self.resource_files)
            + len(self.localizable_strings)
            + len(self.storyboards)
            + len(self.nibs)
        )


FORMAT_TYPES = {
    "@": Type.STRING,
    "d": Type.INT,
    "D": Type.INT,
    "i": Type.INT,
    "u": Type.UINT,
    "U": Type.UINT,
    "x": Type.UINT,
    "X": Type.UINT,
    "o": Type.UINT,
    "O": Type.UINT,
    "c": Type.CHARACTER,
    "C": Type.CHARACTER,
    "f": Type.DOUBLE,
    "F": Type.DOUBLE,
    "e": Type.DOUBLE,
    "E": Type.DOUBLE,
    "g": Type.DOUBLE,
    "G": Type.DOUBLE,
    "a": Type.DOUBLE,
    "A": Type.DOUBLE,
    "s": Type.C_STRING_POINTER,
    "S": Type.C_STRING_POINTER,
    "p": Type.VOID_POINTER,
}
