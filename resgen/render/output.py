"""Writes generated output only when it changed."""

from __future__ import annotations

import difflib
from dataclasses import dataclass
from pathlib import Path

from ..logging import get_logger

_LOGGER = get_logger("render.output")


@dataclass(frozen=True)
class WriteResult:
    """Outcome of a write attempt."""

    path: Path
    changed: bool
    diff: str


class OutputWriteError(RuntimeError):
    """Raised when the generated file cannot be written."""

    def __init__(self, path: Path, reason: OSError) -> None:
        super().__init__(f"Cannot write {path}: {reason.strerror or reason}")
        self.path = path
        self.reason = reason


def read_existing(path: Path) -> bytes | None:
    try:
        return path.read_bytes()
    except FileNotFoundError:
        return None
    except OSError as exc:
        _LOGGER.debug("Treating unreadable %s as absent: %s", path, exc)
        return None


def render_diff(path: Path, original: bytes | None, updated: bytes) -> str:
    # Lines keep their endings so CRLF-only differences still show up.
    diff = difflib.unified_diff(
        (original or b"").decode("utf-8", errors="replace").splitlines(keepends=True),
        updated.decode("utf-8").splitlines(keepends=True),
        fromfile=f"{path.name} (current)",
        tofile=f"{path.name} (generated)",
    )
    return "".join(diff)


def write_if_changed(path: Path, content: str, *, dry_run: bool = False) -> WriteResult:
    """Write ``content`` unless the file already holds exactly these bytes.

    Raises :class:`OutputWriteError` when the file or its directory cannot be
    written.
    """
    encoded = content.encode("utf-8")
    original = read_existing(path)
    if original == encoded:
        _LOGGER.info("%s is up to date; skipping write", path)
        return WriteResult(path=path, changed=False, diff="")

    diff = render_diff(path, original, encoded)
    if dry_run:
        _LOGGER.info("Dry-run: %s would change", path)
        return WriteResult(path=path, changed=True, diff=diff)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(encoded)
    except OSError as exc:
        raise OutputWriteError(path, exc) from exc
    _LOGGER.info("Wrote %s", path)
    return WriteResult(path=path, changed=True, diff=diff)
