"""Localized string table generator."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from .base import StructGenerator
from ..identifiers import sanitize
from ..models import LocalizableStrings, Resources, StringEntry
from ..symbols import AccessLevel, Leaf, Origin, Parameter, Struct, Type

_LOCALE_PARAMETER = Parameter("locale", Type.LOCALE.as_optional())


class StringsConflictError(ValueError):
    """Raised when one key is defined incompatibly across locales."""

    def __init__(self, message: str, *, table: str, key: str, locales: Dict[str, str]) -> None:
        super().__init__(message)
        self.table = table
        self.key = key
        self.locales = locales


class PlaceholderArityMismatch(StringsConflictError):
    """A key has a different number of format arguments in different locales."""


class PlaceholderTypeMismatch(StringsConflictError):
    """A key has format arguments of different types at the same position."""


@dataclass(frozen=True)
class _Localization:
    locale: str
    entry: StringEntry
    path: str


def _locale_label(locale: Optional[str]) -> str:
    return locale or "none"


class StringsStructGenerator(StructGenerator):
    """Groups strings by table then key; each key gets a public accessor and an internal lookup."""

    name = "string"

    def generate(self, resources: Resources, access_level: AccessLevel, prefix: str) -> Struct:
        struct = Struct(name="string", access_level=access_level)

        tables: Dict[str, List[LocalizableStrings]] = defaultdict(list)
        for strings in resources.localizable_strings:
            tables[strings.name].append(strings)

        for table_name in sorted(tables):
            struct.structs.append(self._table_struct(table_name, tables[table_name], access_level, prefix))
        return struct

    def _table_struct(
        self,
        table_name: str,
        tables: Sequence[LocalizableStrings],
        access_level: AccessLevel,
        prefix: str,
    ) -> Struct:
        table_identifier = sanitize(table_name)
        struct = Struct(name=table_identifier, access_level=access_level)

        by_key: Dict[str, List[_Localization]] = defaultdict(list)
        for table in sorted(tables, key=lambda item: _locale_label(item.locale)):
            for entry in table.entries:
                by_key[entry.key].append(_Localization(_locale_label(table.locale), entry, table.path))

        for key in sorted(by_key):
            localizations = by_key[key]
            params = _check_placeholders(table_name, key, localizations)
            identifier = sanitize(key)
            locales = sorted({item.locale for item in localizations})
            origin = Origin(self.name, f"{table_name}.{key}", localizations[0].path)
            parameters = tuple(
                Parameter(f"value{index}", value_type, label="_") for index, value_type in enumerate(params, start=1)
            )
            struct.leaves.append(
                Leaf(
                    name=identifier,
                    type=Type.STRING_RESOURCE,
                    origin=origin,
                    accessor=(
                        f"{self.qualified(prefix, 'string', table_identifier, identifier)} returns the "
                        f"localized '{key}' for the given locale with {len(params)} format argument(s)"
                    ),
                    parameters=parameters + (_LOCALE_PARAMETER,),
                    attributes={
                        "key": key,
                        "table": table_name,
                        "locales": locales,
                        "value": _development_value(localizations),
                    },
                )
            )
            struct.leaves.append(
                Leaf(
                    name=identifier,
                    type=Type.STRING,
                    origin=origin,
                    accessor=f"raw lookup of '{key}' in table '{table_name}'",
                    internal=True,
                    attributes={"key": key, "table": table_name},
                )
            )
        return struct


def _check_placeholders(table: str, key: str, localizations: Sequence[_Localization]) -> Tuple[Type, ...]:
    """Return the argument types shared by every locale, or raise on a conflict."""
    reference = localizations[0]
    reference_types = tuple(part.type for part in reference.entry.params)
    for other in localizations[1:]:
        other_types = tuple(part.type for part in other.entry.params)
        locales = {reference.locale: reference.entry.value, other.locale: other.entry.value}
        if len(other_types) != len(reference_types):
            raise PlaceholderArityMismatch(
                f"String '{key}' in table '{table}' has {len(reference_types)} format argument(s) in "
                f"'{reference.locale}' but {len(other_types)} in '{other.locale}'",
                table=table,
                key=key,
                locales=locales,
            )
        if other_types != reference_types:
            raise PlaceholderTypeMismatch(
                f"String '{key}' in table '{table}' takes ({_describe(reference_types)}) in "
                f"'{reference.locale}' but ({_describe(other_types)}) in '{other.locale}'",
                table=table,
                key=key,
                locales=locales,
            )
    return reference_types


def _describe(types: Sequence[Type]) -> str:
    return ", ".join(str(value_type) for value_type in types)


def _development_value(localizations: Sequence[_Localization]) -> str:
    for preferred in ("Base", "en"):
        for item in localizations:
            if item.locale == preferred:
                return item.entry.value
    return localizations[0].entry.value
