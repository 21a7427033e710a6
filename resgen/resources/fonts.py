"""Font files, named by the PostScript name stored in their ``name`` table."""

from __future__ import annotations

import struct
from pathlib import Path
from typing import Optional

from .base import ResourceParser, ResourceParsingError
from ..models import Font, ResourceKind

_SFNT_HEADER = struct.Struct(">IHHHH")
_TABLE_RECORD = struct.Struct(">4sIII")
_NAME_HEADER = struct.Struct(">HHH")
_NAME_RECORD = struct.Struct(">HHHHHH")

_POSTSCRIPT_NAME_ID = 6
_PLATFORM_MACINTOSH = 1
_PLATFORM_WINDOWS = 3


class FontParser(ResourceParser):
    name = "font"
    extensions = frozenset({"ttf", "otf"})

    def _parse(self, path: Path) -> Font:
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise ResourceParsingError.parsing_failed(path, str(exc)) from exc

        postscript_name = read_postscript_name(data)
        if not postscript_name:
            raise ResourceParsingError.parsing_failed(path, "font has no PostScript name")
        return Font(
            kind=ResourceKind.FONT,
            name=postscript_name,
            path=str(path),
            filename=path.name,
        )


def read_postscript_name(data: bytes) -> Optional[str]:
    """Return name record 6 of an sfnt font, preferring the Windows entry."""
    try:
        _version, num_tables, _, _, _ = _SFNT_HEADER.unpack_from(data, 0)
        name_offset = None
        for index in range(num_tables):
            tag, _checksum, offset, _length = _TABLE_RECORD.unpack_from(
                data, _SFNT_HEADER.size + index * _TABLE_RECORD.size
            )
            if tag == b"name":
                name_offset = offset
                break
        if name_offset is None:
            return None

        _format, count, string_offset = _NAME_HEADER.unpack_from(data, name_offset)
        storage = name_offset + string_offset
        fallback: Optional[str] = None
        for index in range(count):
            platform, _encoding, _language, name_id, length, offset = _NAME_RECORD.unpack_from(
                data, name_offset + _NAME_HEADER.size + index * _NAME_RECORD.size
            )
            if name_id != _POSTSCRIPT_NAME_ID:
                continue
            raw = data[storage + offset : storage + offset + length]
            if platform == _PLATFORM_WINDOWS:
                return raw.decode("utf-16-be", errors="replace")
            if platform == _PLATFORM_MACINTOSH and fallback is None:
                fallback = raw.decode("mac_roman", errors="replace")
        return fallback
    except struct.error:
        return None
