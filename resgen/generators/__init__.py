"""Struct generator implementations and discovery utilities."""

from __future__ import annotations

from importlib import metadata
from typing import Callable, Iterable, List, Sequence, Set

from .aggregate import AggregatedStruct, AggregatedStructGenerator, LeafConflict, aggregate
from .base import StructGenerator
from .files import ResourceFileStructGenerator, ReuseIdentifierStructGenerator
from .fonts import FontStructGenerator
from .images import ColorStructGenerator, ImageStructGenerator, image_accessor_path
from .interface_builder import NibStructGenerator, SegueStructGenerator, StoryboardStructGenerator
from .strings import (
    PlaceholderArityMismatch,
    PlaceholderTypeMismatch,
    StringsConflictError,
    StringsStructGenerator,
)

_ENTRY_POINT_GROUP = "resgen.generators"

# Order matters: it fixes merge order and therefore conflict provenance.
_BUILTIN_FACTORIES: dict[str, Callable[[], StructGenerator]] = {
    "image": ImageStructGenerator,
    "color": ColorStructGenerator,
    "font": FontStructGenerator,
    "segue": SegueStructGenerator,
    "storyboard": StoryboardStructGenerator,
    "nib": NibStructGenerator,
    "reuseidentifier": ReuseIdentifierStructGenerator,
    "file": ResourceFileStructGenerator,
    "string": StringsStructGenerator,
}


def discover_generators(enabled: Sequence[str] | None = None) -> List[StructGenerator]:
    """Return instantiated generators in fixed order, honoring optional enabled names."""

    enabled_set: Set[str] | None = None
    if enabled is not None:
        enabled_set = {name.lower() for name in enabled}

    generators: List[StructGenerator] = []
    seen: Set[str] = set()

    def _add(name: str, factory: Callable[[], StructGenerator]) -> None:
        nonlocal enabled_set
        key = name.lower()
        if enabled_set is not None and key not in enabled_set:
            return
        if key in seen:
            return
        instance = factory()
        if not isinstance(instance, StructGenerator):
            raise TypeError(f"Generator factory for '{name}' did not return a StructGenerator instance")
        generators.append(instance)
        seen.add(key)
        if enabled_set is not None:
            enabled_set.discard(key)

    for name, factory in _BUILTIN_FACTORIES.items():
        _add(name, factory)

    for entry in _iter_entry_points():
        name = entry.name
        try:
            loaded = entry.load()
        except Exception as exc:
            raise RuntimeError(f"Failed to load generator entry point '{name}': {exc}") from exc

        def _factory(obj: object = loaded) -> StructGenerator:
            return _coerce_generator(obj)

        _add(name, _factory)

    if enabled_set:
        missing = ", ".join(sorted(enabled_set))
        raise ValueError(f"Unknown generators requested: {missing}")

    return generators


def _coerce_generator(obj: object) -> StructGenerator:
    if isinstance(obj, StructGenerator):
        return obj
    if isinstance(obj, type) and issubclass(obj, StructGenerator):
        return obj()
    if callable(obj):
        instance = obj()
        if isinstance(instance, StructGenerator):
            return instance
    raise TypeError("Generator entry point must be a StructGenerator subclass or factory")


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    return metadata.entry_points().select(group=_ENTRY_POINT_GROUP)


__all__ = [
    "AggregatedStruct",
    "AggregatedStructGenerator",
    "ColorStructGenerator",
    "FontStructGenerator",
    "ImageStructGenerator",
    "LeafConflict",
    "NibStructGenerator",
    "PlaceholderArityMismatch",
    "PlaceholderTypeMismatch",
    "ResourceFileStructGenerator",
    "ReuseIdentifierStructGenerator",
    "SegueStructGenerator",
    "StoryboardStructGenerator",
    "StringsConflictError",
    "StringsStructGenerator",
    "StructGenerator",
    "aggregate",
    "discover_generators",
    "image_accessor_path",
]
