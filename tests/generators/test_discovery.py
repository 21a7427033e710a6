"""Tests for generator discovery utilities."""

from __future__ import annotations

from types import SimpleNamespace

import pytest

from resgen.generators import StringsStructGenerator, StructGenerator, discover_generators
from resgen.models import Resources
from resgen.symbols import AccessLevel, Struct


class DummyGenerator(StructGenerator):
    """Test generator used for plugin discovery validation."""

    name = "dummy"

    def generate(self, resources: Resources, access_level: AccessLevel, prefix: str) -> Struct:  # pragma: no cover - unused
        return Struct("dummy", access_level=access_level)


def test_discover_generators_returns_builtins_in_fixed_order() -> None:
    names = [generator.name for generator in discover_generators()]

    assert names[:9] == ["image", "color", "font", "segue", "storyboard", "nib", "reuseIdentifier", "file", "string"]


def test_discover_generators_respects_enabled_filter() -> None:
    generators = discover_generators(["string"])

    assert len(generators) == 1
    assert isinstance(generators[0], StringsStructGenerator)


def test_discover_generators_rejects_unknown_names() -> None:
    with pytest.raises(ValueError, match="bogus"):
        discover_generators(["image", "bogus"])


def test_discover_generators_loads_entry_points(monkeypatch) -> None:
    dummy_entry = SimpleNamespace(name="dummy", load=lambda: DummyGenerator)

    class DummyEntryPoints(list):
        def select(self, **kwargs):
            if kwargs.get("group") == "resgen.generators":
                return self
            return []

    monkeypatch.setattr(
        "resgen.generators.metadata.entry_points",
        lambda: DummyEntryPoints([dummy_entry]),
    )

    generators = discover_generators(["dummy"])

    assert len(generators) == 1
    assert isinstance(generators[0], DummyGenerator)
