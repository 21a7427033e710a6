"""Symbol tree types: resource types, leaves and nested structs."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import ClassVar, Iterator, List, Mapping, Optional, Sequence, Tuple

STDLIB = "Swift"
RUNTIME = "Rswift"


class AccessLevel(str, Enum):
    """Visibility applied to generated declarations."""

    PUBLIC = "public"
    INTERNAL = "internal"
    FILEPRIVATE = "fileprivate"
    PRIVATE = "private"

    @classmethod
    def parse(cls, value: str) -> "AccessLevel":
        try:
            return cls(value.strip().lower())
        except ValueError as exc:
            choices = ", ".join(level.value for level in cls)
            raise ValueError(f"Unknown access level '{value}'; expected one of: {choices}") from exc


@dataclass(frozen=True)
class Type:
    """A target-language type reference.

    Equality and hashing are structural over the fields, so two types that
    only happen to print the same way never compare equal by accident.
    """

    module: str
    name: str
    generic_args: Tuple["Type", ...] = ()
    optional: bool = False

    STRING: ClassVar["Type"]
    INT: ClassVar["Type"]
    UINT: ClassVar["Type"]
    DOUBLE: ClassVar["Type"]
    CHARACTER: ClassVar["Type"]
    C_STRING_POINTER: ClassVar["Type"]
    VOID_POINTER: ClassVar["Type"]
    CG_FLOAT: ClassVar["Type"]
    LOCALE: ClassVar["Type"]
    UI_VIEW: ClassVar["Type"]
    UI_VIEW_CONTROLLER: ClassVar["Type"]
    UI_STORYBOARD_SEGUE: ClassVar["Type"]
    UI_TABLE_VIEW_CELL: ClassVar["Type"]
    UI_COLLECTION_VIEW_CELL: ClassVar["Type"]
    UI_COLLECTION_REUSABLE_VIEW: ClassVar["Type"]
    IMAGE_RESOURCE: ClassVar["Type"]
    COLOR_RESOURCE: ClassVar["Type"]
    FONT_RESOURCE: ClassVar["Type"]
    FILE_RESOURCE: ClassVar["Type"]
    STRING_RESOURCE: ClassVar["Type"]
    STORYBOARD_RESOURCE: ClassVar["Type"]
    NIB_RESOURCE: ClassVar["Type"]
    VALIDATION: ClassVar["Type"]

    def __str__(self) -> str:
        text = self.name
        if self.generic_args:
            text += "<" + ", ".join(str(arg) for arg in self.generic_args) + ">"
        if self.optional:
            text += "?"
        return text

    @property
    def qualified_name(self) -> str:
        if self.module in ("", STDLIB):
            return str(self)
        return f"{self.module}.{self}"

    def as_optional(self) -> "Type":
        return replace(self, optional=True)

    def with_generic_args(self, *args: "Type") -> "Type":
        return replace(self, generic_args=tuple(args))

    def modules(self) -> Iterator[str]:
        """Yield every module referenced by this type and its generic arguments."""
        if self.module and self.module != STDLIB:
            yield self.module
        for arg in self.generic_args:
            yield from arg.modules()


Type.STRING = Type(STDLIB, "String")
Type.INT = Type(STDLIB, "Int")
Type.UINT = Type(STDLIB, "UInt")
Type.DOUBLE = Type(STDLIB, "Double")
Type.CHARACTER = Type(STDLIB, "Character")
Type.C_STRING_POINTER = Type(STDLIB, "UnsafePointer<unichar>")
Type.VOID_POINTER = Type(STDLIB, "UnsafeRawPointer")
Type.CG_FLOAT = Type("CoreGraphics", "CGFloat")
Type.LOCALE = Type("Foundation", "Locale")
Type.UI_VIEW = Type("UIKit", "UIView")
Type.UI_VIEW_CONTROLLER = Type("UIKit", "UIViewController")
Type.UI_STORYBOARD_SEGUE = Type("UIKit", "UIStoryboardSegue")
Type.UI_TABLE_VIEW_CELL = Type("UIKit", "UITableViewCell")
Type.UI_COLLECTION_VIEW_CELL = Type("UIKit", "UICollectionViewCell")
Type.UI_COLLECTION_REUSABLE_VIEW = Type("UIKit", "UICollectionReusableView")
Type.IMAGE_RESOURCE = Type(RUNTIME, "ImageResource")
Type.COLOR_RESOURCE = Type(RUNTIME, "ColorResource")
Type.FONT_RESOURCE = Type(RUNTIME, "FontResource")
Type.FILE_RESOURCE = Type(RUNTIME, "FileResource")
Type.STRING_RESOURCE = Type(RUNTIME, "StringResource")
Type.STORYBOARD_RESOURCE = Type(RUNTIME, "StoryboardResource")
Type.NIB_RESOURCE = Type(RUNTIME, "NibResource")
Type.VALIDATION = Type(RUNTIME, "Validatable")

REUSE_IDENTIFIER = Type(RUNTIME, "ReuseIdentifier")
SEGUE_INFO = Type(RUNTIME, "TypedStoryboardSegueInfo")
VIEW_CONTROLLER_RESOURCE = Type(RUNTIME, "StoryboardViewControllerResource")


@dataclass(frozen=True)
class Reusable:
    """Reuse identifier declared by a cell or reusable view, paired with its type."""

    identifier: str
    type: Type


@dataclass(frozen=True)
class Origin:
    """Provenance of a leaf: which generator made it from which resource."""

    generator: str
    raw_name: str
    path: Optional[str] = None

    def __str__(self) -> str:
        location = f" ({self.path})" if self.path else ""
        return f"{self.generator} '{self.raw_name}'{location}"


@dataclass(frozen=True)
class Parameter:
    """Named accessor argument."""

    name: str
    type: Type
    label: Optional[str] = None


@dataclass(frozen=True)
class Leaf:
    """A generated accessor: a symbol name with a concrete resource type.

    ``attributes`` carries renderer-facing values (bundle names, keys) and
    does not take part in equality.
    """

    name: str
    type: Type
    origin: Origin
    accessor: str = ""
    parameters: Tuple[Parameter, ...] = ()
    internal: bool = False
    attributes: Mapping[str, object] = field(default_factory=dict, compare=False, hash=False)

    @property
    def identity(self) -> Tuple[Type, str, str]:
        """Key used to fold exact duplicates: type and provenance."""
        return (self.type, self.origin.generator, self.origin.raw_name)


@dataclass
class Struct:
    """A nesting level in the symbol tree."""

    name: str
    access_level: AccessLevel = AccessLevel.INTERNAL
    leaves: List[Leaf] = field(default_factory=list)
    structs: List["Struct"] = field(default_factory=list)
    comments: List[str] = field(default_factory=list)

    def child(self, name: str) -> Optional["Struct"]:
        for struct in self.structs:
            if struct.name == name:
                return struct
        return None

    def ensure_child(self, name: str) -> "Struct":
        existing = self.child(name)
        if existing is not None:
            return existing
        created = Struct(name=name, access_level=self.access_level)
        self.structs.append(created)
        return created

    def add_leaf(self, leaf: Leaf, path: Sequence[str] = ()) -> None:
        target = self
        for component in path:
            target = target.ensure_child(component)
        target.leaves.append(leaf)

    def is_empty(self) -> bool:
        return not self.leaves and all(struct.is_empty() for struct in self.structs)

    def walk(self, path: Tuple[str, ...] = ()) -> Iterator[Tuple[Tuple[str, ...], Leaf]]:
        """Yield ``(path, leaf)`` for every leaf below this struct, depth first."""
        current = path + (self.name,)
        for leaf in self.leaves:
            yield current, leaf
        for struct in self.structs:
            yield from struct.walk(current)

    def find(self, dotted: str) -> Optional["Struct"]:
        node: Optional[Struct] = self
        for component in dotted.split("."):
            if node is None:
                return None
            node = node.child(component)
        return node


__all__ = [
    "AccessLevel",
    "Leaf",
    "Origin",
    "Parameter",
    "Reusable",
    "Struct",
    "Type",
]
