"""Conversion of raw resource names into symbol-safe identifiers.

The output is embedded in generated source that gets diffed against the
previous run, so every transform here must be deterministic.
"""

from __future__ import annotations

import re
import unicodedata
from enum import Enum
from typing import Iterable, List

_SEPARATOR_PATTERN = re.compile(r"[^A-Za-z0-9]+")
_LEADING_UPPER_PATTERN = re.compile(r"^([A-Z]+)(?=[A-Z][a-z]|[^A-Za-z]|$)|^([A-Z])")

ESCAPE_SUFFIX = "_"
EMPTY_IDENTIFIER = "unnamed"

SWIFT_KEYWORDS = frozenset(
    {
        "Any", "Self", "Type", "as", "associatedtype", "associativity", "break", "case",
        "catch", "class", "continue", "convenience", "default", "defer", "deinit",
        "didSet", "do", "dynamic", "else", "enum", "extension", "fallthrough", "false",
        "fileprivate", "final", "for", "func", "get", "guard", "if", "import", "in",
        "indirect", "infix", "init", "inout", "internal", "is", "lazy", "left", "let",
        "mutating", "nil", "none", "nonmutating", "open", "operator", "optional",
        "override", "postfix", "precedence", "prefix", "private", "protocol", "public",
        "repeat", "required", "rethrows", "return", "right", "self", "set", "some",
        "static", "struct", "subscript", "super", "switch", "throw", "throws", "true",
        "try", "typealias", "unowned", "var", "weak", "where", "while", "willSet",
    }
)

OBJC_KEYWORDS = frozenset(
    {
        "BOOL", "Class", "IMP", "NO", "NULL", "Protocol", "SEL", "YES", "auto", "bycopy",
        "byref", "char", "const", "double", "extern", "float", "goto", "id", "inline",
        "int", "long", "oneway", "register", "restrict", "short", "signed", "sizeof",
        "typedef", "union", "unsigned", "void", "volatile",
    }
)

RESERVED_KEYWORDS = SWIFT_KEYWORDS | OBJC_KEYWORDS


class IdentifierStyle(str, Enum):
    """Casing transform: member-like (``lowerCamel``) or type-like (``UpperCamel``)."""

    MEMBER = "member"
    TYPE = "type"


def sanitize(raw: str, style: IdentifierStyle = IdentifierStyle.MEMBER) -> str:
    """Return a symbol-safe identifier for ``raw``.

    Separators split the name into components which are camel-cased and
    joined. Leading digits get an underscore prefix, reserved words get
    ``ESCAPE_SUFFIX`` appended, and a name with nothing usable left becomes
    ``EMPTY_IDENTIFIER``.
    """
    components = _components(raw)
    if not components:
        return EMPTY_IDENTIFIER

    joined = components[0] + "".join(_upper_first(part) for part in components[1:])
    if style is IdentifierStyle.MEMBER:
        identifier = _lower_leading(joined)
    else:
        identifier = _upper_first(joined)

    if identifier[0].isdigit():
        identifier = f"_{identifier}"
    if identifier in RESERVED_KEYWORDS:
        identifier = f"{identifier}{ESCAPE_SUFFIX}"
    return identifier


def sanitize_path(components: Iterable[str], style: IdentifierStyle = IdentifierStyle.MEMBER) -> List[str]:
    """Sanitize each component of a namespaced name (``Icons/home``)."""
    return [sanitize(component, style) for component in components]


def _components(raw: str) -> List[str]:
    ascii_text = _to_ascii(raw)
    return [part for part in _SEPARATOR_PATTERN.split(ascii_text) if part]


def _to_ascii(raw: str) -> str:
    decomposed = unicodedata.normalize("NFKD", raw)
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    return stripped.encode("ascii", "ignore").decode("ascii")


def _upper_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def _lower_leading(text: str) -> str:
    """Lowercase the leading capital run: ``URLSession`` -> ``urlSession``."""
    match = _LEADING_UPPER_PATTERN.match(text)
    if match is None:
        return text
    run = match.group(0)
    return run.lower() + text[len(run):]


__all__ = [
    "EMPTY_IDENTIFIER",
    "ESCAPE_SUFFIX",
    "IdentifierStyle",
    "RESERVED_KEYWORDS",
    "sanitize",
    "sanitize_path",
]
