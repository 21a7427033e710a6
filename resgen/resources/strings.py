"""Localized string tables (``.strings`` and ``.stringsdict``)."""

from __future__ import annotations

import plistlib
import re
from pathlib import Path
from typing import Dict, List, Tuple

from .base import ResourceParser, ResourceParsingError, extension_of, locale_of
from ..models import FormatPart, LocalizableStrings, ResourceKind, StringEntry

_FORMAT_PATTERN = re.compile(
    r"%(?:(?P<position>\d+)\$)?"
    r"(?P<flags>[-+ 0#]*)"
    r"(?:\d+|\*)?(?:\.(?:\d+|\*))?"
    r"(?P<length>hh|h|ll|l|q|L|z|t|j)?"
    r"(?P<spec>[@dDiuUxXoOfFeEgGcCsSpaA%])"
)
_VARIABLE_PATTERN = re.compile(r"%(?:(?P<position>\d+)\$)?#@(?P<name>[^@]+)@")
_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", '"': '"', "\\": "\\", "'": "'", "0": "\0"}


def parse_format_parts(value: str) -> Tuple[FormatPart, ...]:
    """Return the placeholders of a printf-style format ordered by argument position.

    Positional specifiers (``%2$@``) may appear in any order and may repeat;
    each position is counted once.
    """
    parts: Dict[int, FormatPart] = {}
    sequential = 0
    for match in _FORMAT_PATTERN.finditer(value):
        spec = match.group("spec")
        if spec == "%":
            continue
        if match.group("position"):
            position = int(match.group("position"))
        else:
            sequential += 1
            position = sequential
        parts.setdefault(position, FormatPart(spec=spec, position=position))
    return tuple(parts[position] for position in sorted(parts))


class StringsParser(ResourceParser):
    """Parses Apple ``.strings`` tables and plural ``.stringsdict`` tables."""

    name = "strings"
    extensions = frozenset({"strings", "stringsdict"})

    def _parse(self, path: Path) -> LocalizableStrings:
        if extension_of(path) == "stringsdict":
            entries = _parse_stringsdict(path)
        else:
            entries = _parse_strings(path, _decode(path))
        return LocalizableStrings(
            kind=ResourceKind.STRINGS,
            name=path.stem,
            path=str(path),
            locale=locale_of(path),
            entries=tuple(entries),
        )


def _decode(path: Path) -> str:
    try:
        data = path.read_bytes()
    except OSError as exc:
        raise ResourceParsingError.parsing_failed(path, str(exc)) from exc
    if data.startswith((b"\xff\xfe", b"\xfe\xff")):
        return data.decode("utf-16")
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise ResourceParsingError.parsing_failed(path, f"not valid UTF-8 or UTF-16: {exc}") from exc


def _parse_strings(path: Path, text: str) -> List[StringEntry]:
    reader = _StringsReader(path, text)
    entries: Dict[str, StringEntry] = {}
    while True:
        reader.skip_trivia()
        if reader.at_end():
            break
        key = reader.read_token()
        reader.skip_trivia()
        reader.expect("=")
        reader.skip_trivia()
        value = reader.read_token()
        reader.skip_trivia()
        reader.expect(";")
        entries[key] = StringEntry(key=key, value=value, params=parse_format_parts(value))
    return list(entries.values())


class _StringsReader:
    """Minimal scanner over the old-style property list syntax of ``.strings`` files."""

    def __init__(self, path: Path, text: str) -> None:
        self.path = path
        self.text = text
        self.index = 0

    def at_end(self) -> bool:
        return self.index >= len(self.text)

    def fail(self, detail: str) -> ResourceParsingError:
        line = self.text.count("\n", 0, self.index) + 1
        return ResourceParsingError.parsing_failed(self.path, f"line {line}: {detail}")

    def skip_trivia(self) -> None:
        text = self.text
        while self.index < len(text):
            if text[self.index].isspace():
                self.index += 1
            elif text.startswith("//", self.index):
                end = text.find("\n", self.index)
                self.index = len(text) if end == -1 else end + 1
            elif text.startswith("/*", self.index):
                end = text.find("*/", self.index + 2)
                if end == -1:
                    raise self.fail("unterminated comment")
                self.index = end + 2
            else:
                break

    def expect(self, char: str) -> None:
        if self.at_end() or self.text[self.index] != char:
            raise self.fail(f"expected '{char}'")
        self.index += 1

    def read_token(self) -> str:
        if self.at_end():
            raise self.fail("unexpected end of file")
        if self.text[self.index] == '"':
            return self._read_quoted()
        start = self.index
        while not self.at_end() and (self.text[self.index].isalnum() or self.text[self.index] in "_.-$:/"):
            self.index += 1
        if start == self.index:
            raise self.fail(f"unexpected character '{self.text[self.index]}'")
        return self.text[start : self.index]

    def _read_quoted(self) -> str:
        self.index += 1
        chunks: List[str] = []
        text = self.text
        while True:
            if self.at_end():
                raise self.fail("unterminated string")
            char = text[self.index]
            if char == '"':
                self.index += 1
                return "".join(chunks)
            if char == "\\":
                self.index += 1
                if self.at_end():
                    raise self.fail("dangling escape")
                escaped = text[self.index]
                if escaped in ("U", "u"):
                    digits = text[self.index + 1 : self.index + 5]
                    try:
                        chunks.append(chr(int(digits, 16)))
                    except ValueError as exc:
                        raise self.fail(f"invalid unicode escape '\\{escaped}{digits}'") from exc
                    self.index += 5
                    continue
                chunks.append(_ESCAPES.get(escaped, escaped))
                self.index += 1
                continue
            chunks.append(char)
            self.index += 1


def _parse_stringsdict(path: Path) -> List[StringEntry]:
    try:
        with path.open("rb") as handle:
            payload = plistlib.load(handle)
    except (OSError, plistlib.InvalidFileException, ValueError) as exc:
        raise ResourceParsingError.parsing_failed(path, str(exc)) from exc
    if not isinstance(payload, dict):
        raise ResourceParsingError.parsing_failed(path, "root element is not a dictionary")

    entries: List[StringEntry] = []
    for key, definition in payload.items():
        if not isinstance(definition, dict):
            continue
        format_key = definition.get("NSStringLocalizedFormatKey")
        if not isinstance(format_key, str):
            raise ResourceParsingError.parsing_failed(path, f"'{key}' has no NSStringLocalizedFormatKey")
        entries.append(
            StringEntry(key=key, value=format_key, params=_stringsdict_params(format_key, definition))
        )
    return entries


def _stringsdict_params(format_key: str, definition: Dict[str, object]) -> Tuple[FormatPart, ...]:
    """Replace ``%#@variable@`` references with the variable's declared value type."""

    def _substitute(match: "re.Match[str]") -> str:
        variable = definition.get(match.group("name"))
        value_type = "@"
        if isinstance(variable, dict) and isinstance(variable.get("NSStringFormatValueTypeKey"), str):
            value_type = variable["NSStringFormatValueTypeKey"] or "@"
        position = match.group("position")
        return f"%{position}${value_type}" if position else f"%{value_type}"

    return parse_format_parts(_VARIABLE_PATTERN.sub(_substitute, format_key))
