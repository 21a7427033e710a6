"""Base classes for struct generator plugins."""

from __future__ import annotations

from abc import ABC, abstractmethod

from ..models import Resources
from ..symbols import AccessLevel, Struct


class StructGenerator(ABC):
    """Contract for generators that turn one resource kind into a symbol subtree.

    Generators read only their own kind from the catalogue, keep no state
    between calls and never depend on the order in which they run.
    """

    name: str = "generator"

    @abstractmethod
    def generate(self, resources: Resources, access_level: AccessLevel, prefix: str) -> Struct:
        """Return the struct for this resource kind, nested under ``prefix``."""

    def qualified(self, prefix: str, *components: str) -> str:
        return ".".join(part for part in (prefix, *components) if part)
