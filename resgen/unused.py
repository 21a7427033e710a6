"""Detection of declared images that nothing references.

Candidates are images that no storyboard or nib uses. Project sources are
then scanned in parallel for the accessor text each candidate would have in
generated code; whatever is never mentioned is reported.
"""

from __future__ import annotations

import os
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, FrozenSet, Generic, Hashable, Iterable, List, Optional, Sequence, Set, TypeVar

from .generators.images import image_accessor_path
from .logging import get_logger

_LOGGER = get_logger("unused")

SWIFT_EXTENSIONS = frozenset({".swift"})
OBJC_EXTENSIONS = frozenset({".m", ".mm"})
GENERATED_STEM = "R.generated"

T = TypeVar("T", bound=Hashable)


class ConcurrentSet(Generic[T]):
    """A set shared by scan workers; ``subtract`` is the only mutation and holds the lock."""

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._items: Set[T] = set(items)
        self._lock = threading.Lock()

    def snapshot(self) -> FrozenSet[T]:
        with self._lock:
            return frozenset(self._items)

    def subtract(self, found: Iterable[T]) -> None:
        with self._lock:
            self._items.difference_update(found)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)


@dataclass(frozen=True)
class CallingConvention:
    """How generated accessors look from one source language."""

    name: str
    extensions: FrozenSet[str]
    marker: str
    render: Callable[[Sequence[str]], str] = field(compare=False)


def swift_convention(root: str = "R") -> CallingConvention:
    marker = f"{root}.image."
    return CallingConvention(
        name="swift",
        extensions=SWIFT_EXTENSIONS,
        marker=marker,
        render=lambda path: marker + ".".join(path),
    )


def objc_convention(module_name: str) -> CallingConvention:
    marker = f"[{module_name}RObjc image_"
    return CallingConvention(
        name="objc",
        extensions=OBJC_EXTENSIONS,
        marker=marker,
        render=lambda path: marker + "_".join(path) + "]",
    )


@dataclass(frozen=True)
class UnusedImageCandidate:
    """A declared image plus its accessor text per calling convention."""

    original_name: str
    accessors: Dict[str, str] = field(compare=False, hash=False)

    @classmethod
    def build(cls, original_name: str, conventions: Sequence[CallingConvention]) -> "UnusedImageCandidate":
        path = image_accessor_path(original_name)
        return cls(original_name, {convention.name: convention.render(path) for convention in conventions})


def source_files_for_scan(
    paths: Iterable[Path],
    conventions: Sequence[CallingConvention],
    *,
    generated_output: Optional[Path] = None,
) -> List[Path]:
    """Keep recognized source files, dropping resgen's own generated output."""
    extensions = {extension for convention in conventions for extension in convention.extensions}
    excluded = generated_output.resolve() if generated_output is not None else None
    selected: List[Path] = []
    for path in paths:
        if path.suffix.lower() not in extensions:
            continue
        if path.name.startswith(GENERATED_STEM + ".") or path.stem == GENERATED_STEM:
            continue
        if excluded is not None and path.resolve() == excluded:
            continue
        selected.append(path)
    return selected


def chunked(items: Sequence[Path], workers: int) -> List[Sequence[Path]]:
    """Split ``items`` into at most ``workers`` slices of roughly equal size."""
    if not items:
        return []
    size = len(items) // max(workers, 1) + 1
    return [items[start : start + size] for start in range(0, len(items), size)]


def _read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="replace")


class UnusedImageAnalyzer:
    """Cross-references declared images against layout files and project sources."""

    def __init__(
        self,
        conventions: Sequence[CallingConvention],
        *,
        workers: Optional[int] = None,
        reader: Callable[[Path], str] = _read_text,
    ) -> None:
        self.conventions = list(conventions)
        self.workers = workers or os.cpu_count() or 1
        self.reader = reader
        self.skipped: List[Path] = []
        self._skipped_lock = threading.Lock()

    def find_unused(
        self,
        declared: Iterable[str],
        used_in_layouts: Iterable[str],
        source_files: Sequence[Path],
    ) -> List[str]:
        candidates = set(declared) - set(used_in_layouts)
        remaining: ConcurrentSet[UnusedImageCandidate] = ConcurrentSet(
            UnusedImageCandidate.build(name, self.conventions) for name in candidates
        )
        self.skipped = []

        for convention in self.conventions:
            files = [path for path in source_files if path.suffix.lower() in convention.extensions]
            chunks = chunked(files, self.workers)
            if not chunks:
                continue
            _LOGGER.debug(
                "Scanning %d %s file(s) in %d chunk(s) for %d candidate(s)",
                len(files),
                convention.name,
                len(chunks),
                len(remaining),
            )
            with ThreadPoolExecutor(max_workers=self.workers, thread_name_prefix="resgen-unused") as executor:
                futures = [executor.submit(self._scan_chunk, chunk, convention, remaining) for chunk in chunks]
                for future in futures:
                    future.result()

        return sorted(candidate.original_name for candidate in remaining.snapshot())

    def _scan_chunk(
        self,
        chunk: Sequence[Path],
        convention: CallingConvention,
        remaining: ConcurrentSet[UnusedImageCandidate],
    ) -> None:
        for path in chunk:
            try:
                contents = self.reader(path)
            except OSError as exc:
                _LOGGER.debug("Skipping unreadable source %s: %s", path, exc)
                with self._skipped_lock:
                    self.skipped.append(path)
                continue
            if convention.marker not in contents:
                continue
            found = [
                candidate
                for candidate in remaining.snapshot()
                if candidate.accessors[convention.name] in contents
            ]
            if found:
                remaining.subtract(found)


def find_unused_images(
    declared: Iterable[str],
    used_in_layouts: Iterable[str],
    source_files: Sequence[Path],
    *,
    module_name: str = "",
    workers: Optional[int] = None,
    reader: Callable[[Path], str] = _read_text,
) -> List[str]:
    """Return declared image names referenced neither by layouts nor by sources, sorted."""
    analyzer = UnusedImageAnalyzer(
        [swift_convention(), objc_convention(module_name)],
        workers=workers,
        reader=reader,
    )
    return analyzer.find_unused(declared, used_in_layouts, source_files)


__all__ = [
    "CallingConvention",
    "ConcurrentSet",
    "UnusedImageAnalyzer",
    "UnusedImageCandidate",
    "chunked",
    "find_unused_images",
    "objc_convention",
    "source_files_for_scan",
    "swift_convention",
]
