"""Spelling of types and literals in generated Swift."""

from __future__ import annotations

from ..symbols import STDLIB, AccessLevel, Type


def swift_type(value: Type) -> str:
    """Fully qualified Swift spelling of ``value``."""
    text = value.name
    if value.module and value.module != STDLIB:
        text = f"{value.module}.{text}"
    if value.generic_args:
        text += "<" + ", ".join(swift_type(arg) for arg in value.generic_args) + ">"
    if value.optional:
        text += "?"
    return text


def swift_string(value: object) -> str:
    """Quote ``value`` as a Swift string literal."""
    escaped = (
        str(value)
        .replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
    return f'"{escaped}"'


def access_prefix(level: AccessLevel) -> str:
    return "" if level is AccessLevel.INTERNAL else f"{level.value} "
