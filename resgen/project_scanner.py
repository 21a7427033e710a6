"""Project scanning: finds resource and source files while honoring ignore rules."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from fnmatch import fnmatchcase
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from .config import ResgenConfig, load_config
from .logging import get_logger
from .resources import typed_resource_extensions

IGNORE_FILENAME = ".resgenignore"
SOURCE_EXTENSIONS = frozenset({"swift", "m", "mm"})

# Never project resources: VCS metadata, dependency checkouts and build products.
_SKIPPED_DIRS = frozenset(
    {
        ".git",
        ".hg",
        ".svn",
        ".build",
        ".swiftpm",
        "build",
        "Carthage",
        "DerivedData",
        "Pods",
        "node_modules",
        "xcuserdata",
    }
)
_SKIPPED_FILES = frozenset({".DS_Store", "Thumbs.db"})

# Directories that are bundle resources in their own right.
_BUNDLE_DIR_SUFFIXES = (".xcassets",)


@dataclass(frozen=True)
class IgnoreRule:
    """One gitignore-style line from .resgenignore or ``exclude_paths``."""

    pattern: str
    negate: bool = False
    directory_only: bool = False
    rooted: bool = False

    @classmethod
    def parse(cls, line: str) -> Optional["IgnoreRule"]:
        """Parse ``line``; blank lines and ``#`` comments yield ``None``."""
        text = line.strip()
        if not text or text.startswith("#"):
            return None
        negate = text.startswith("!")
        text = text[1:] if negate else text
        directory_only = text.endswith("/")
        text = text.rstrip("/")
        rooted = text.startswith("/") or "/" in text
        text = text.lstrip("/")
        if not text:
            return None
        return cls(pattern=text, negate=negate, directory_only=directory_only, rooted=rooted)

    def matches(self, rel_path: str, is_dir: bool) -> bool:
        if self.directory_only and not is_dir:
            return False
        if self.rooted:
            return fnmatchcase(rel_path, self.pattern)
        # Unrooted patterns match any single component, like gitignore.
        return any(fnmatchcase(component, self.pattern) for component in rel_path.split("/"))


class IgnoreRules:
    """Ordered ignore rules; the last rule matching a path decides."""

    def __init__(self, rules: Iterable[IgnoreRule] = ()) -> None:
        self.rules: List[IgnoreRule] = list(rules)

    @classmethod
    def for_project(cls, root: Path, exclude_paths: Sequence[str] = ()) -> "IgnoreRules":
        """Rules from ``root/.resgenignore`` followed by configured ``exclude_paths``."""
        lines: List[str] = []
        ignore_file = root / IGNORE_FILENAME
        if ignore_file.is_file():
            lines.extend(ignore_file.read_text(encoding="utf-8").splitlines())
        lines.extend(exclude_paths)
        return cls(rule for rule in map(IgnoreRule.parse, lines) if rule is not None)

    def ignores(self, rel_path: str, is_dir: bool) -> bool:
        verdict = False
        for rule in self.rules:
            if rule.matches(rel_path, is_dir):
                verdict = not rule.negate
        return verdict

    def __len__(self) -> int:
        return len(self.rules)


def pattern_matches(path: str, pattern: str) -> bool:
    """Glob match used for the ``resources`` and ``sources`` selections.

    ``dir/**`` and ``dir/`` select everything below ``dir``; ``**/x`` also
    matches ``x`` at the project root; a pattern without ``/`` matches the
    file name alone.
    """
    normalized = path.replace("\\", "/")
    if pattern.endswith(("/**", "/")):
        directory = pattern[:-3] if pattern.endswith("/**") else pattern[:-1]
        return normalized.startswith(f"{directory}/")
    if pattern.startswith("**/"):
        tail = pattern[3:]
        return fnmatchcase(normalized, tail) or fnmatchcase(normalized, f"*/{tail}")
    if "/" in pattern:
        return fnmatchcase(normalized, pattern)
    return fnmatchcase(normalized.rsplit("/", 1)[-1], pattern)


def _extension(name: str) -> str:
    suffix = Path(name).suffix
    return suffix[1:].lower() if suffix else ""


@dataclass
class ProjectManifest:
    """Files selected for one generation run."""

    root: Path
    resources: List[Path] = field(default_factory=list)
    sources: List[Path] = field(default_factory=list)


class ProjectScanner:
    """Walks the project once to produce a :class:`ProjectManifest`."""

    def __init__(self) -> None:
        self.logger = get_logger("project_scanner")

    def scan(self, root: str | Path, config: ResgenConfig | None = None) -> ProjectManifest:
        root_path = Path(root).expanduser().resolve()
        if not root_path.exists():
            raise FileNotFoundError(f"Project path not found: {root}")
        if not root_path.is_dir():
            raise NotADirectoryError(f"Project path is not a directory: {root}")

        config = config or load_config(root_path)
        rules = IgnoreRules.for_project(root_path, config.exclude_paths)
        self.logger.debug("Loaded %d ignore rule(s)", len(rules))
        typed = frozenset(typed_resource_extensions())
        generated = config.output_path.resolve()

        manifest = ProjectManifest(root=root_path)
        for path, rel_path in self._walk(root_path, rules):
            if path.resolve() == generated:
                continue
            if self._selected(rel_path, config.resources, typed):
                manifest.resources.append(path)
            elif self._selected(rel_path, config.sources, SOURCE_EXTENSIONS):
                manifest.sources.append(path)

        manifest.resources.sort()
        manifest.sources.sort()
        self.logger.info(
            "Scanned %s: %d resource(s), %d source file(s)",
            root_path,
            len(manifest.resources),
            len(manifest.sources),
        )
        return manifest

    @staticmethod
    def _selected(rel_path: str, patterns: Sequence[str], default_extensions: frozenset) -> bool:
        """Configured globs win; without any, fall back to the extension set."""
        if patterns:
            return any(pattern_matches(rel_path, pattern) for pattern in patterns)
        return _extension(rel_path) in default_extensions

    @staticmethod
    def _walk(root: Path, rules: IgnoreRules) -> Iterator[Tuple[Path, str]]:
        """Yield ``(path, posix path relative to root)`` for files and bundle directories."""
        for dirpath, dirnames, filenames in os.walk(root):
            directory = Path(dirpath)
            prefix = directory.relative_to(root).as_posix()
            prefix = "" if prefix == "." else f"{prefix}/"

            descend: List[str] = []
            for name in sorted(dirnames):
                rel_path = prefix + name
                if name in _SKIPPED_DIRS or rules.ignores(rel_path, True):
                    continue
                if name.endswith(_BUNDLE_DIR_SUFFIXES):
                    yield directory / name, rel_path
                else:
                    descend.append(name)
            dirnames[:] = descend

            for name in sorted(filenames):
                rel_path = prefix + name
                if name in _SKIPPED_FILES or rules.ignores(rel_path, False):
                    continue
                yield directory / name, rel_path


__all__ = [
    "IGNORE_FILENAME",
    "IgnoreRule",
    "IgnoreRules",
    "ProjectManifest",
    "ProjectScanner",
    "SOURCE_EXTENSIONS",
    "pattern_matches",
]
