"""Core validation data structures."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from ..symbols import Origin


@dataclass(frozen=True)
class CollisionEntry:
    """One of the symbols competing for an identifier."""

    kind: str
    type: str
    origin: Origin | None

    def describe(self) -> str:
        if self.origin is None:
            return f"{self.kind} {self.type}"
        return f"{self.kind} {self.type} from {self.origin}"


@dataclass(frozen=True)
class NamingCollision:
    """Several resources that sanitize to the same identifier within one struct."""

    path: Tuple[str, ...]
    identifier: str
    entries: Tuple[CollisionEntry, ...]
    partition: str = "external"

    @property
    def location(self) -> str:
        return ".".join((*self.path, self.identifier))

    def describe(self) -> str:
        origins = "; ".join(entry.describe() for entry in self.entries)
        return f"{self.location} is generated by {len(self.entries)} resources: {origins}"


class StructValidationError(RuntimeError):
    """Raised when the symbol tree contains naming collisions; lists all of them."""

    def __init__(self, collisions: Sequence[NamingCollision], conflicts: Sequence[object] = ()) -> None:
        self.collisions: List[NamingCollision] = list(collisions)
        # Type conflicts the aggregator recorded while merging, kept for diagnostics.
        self.conflicts: List[object] = list(conflicts)
        lines = [f"Found {len(self.collisions)} naming collision(s); rename the resources involved:"]
        lines.extend(f"  - {collision.describe()}" for collision in self.collisions)
        super().__init__("\n".join(lines))
