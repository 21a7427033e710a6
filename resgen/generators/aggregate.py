"""Merges the output of every struct generator into one tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Tuple

from .base import StructGenerator
from ..logging import get_logger
from ..models import Resources
from ..symbols import AccessLevel, Leaf, Struct

_LOGGER = get_logger("generators.aggregate")


@dataclass(frozen=True)
class LeafConflict:
    """Two leaves that share a path and identifier but not a type."""

    path: Tuple[str, ...]
    name: str
    first: Leaf
    second: Leaf

    def describe(self) -> str:
        location = ".".join((*self.path, self.name))
        return (
            f"{location}: {self.first.type} from {self.first.origin} "
            f"vs {self.second.type} from {self.second.origin}"
        )


@dataclass
class AggregatedStruct:
    """The merged tree plus every leaf conflict noticed while merging."""

    root: Struct
    conflicts: List[LeafConflict] = field(default_factory=list)


def aggregate(nodes: Iterable[Struct], *, name: str = "R", access_level: AccessLevel = AccessLevel.INTERNAL) -> AggregatedStruct:
    """Union sibling structs with the same name, recursively, in the given order.

    Leaves are never dropped or replaced: conflicting leaves stay side by side
    so the validator can report every origin.
    """
    result = AggregatedStruct(root=Struct(name=name, access_level=access_level))
    for node in nodes:
        _merge_child(result.root, node, (name,), result.conflicts)
    for conflict in result.conflicts:
        _LOGGER.debug("Deferred conflict %s", conflict.describe())
    return result


def _merge_child(parent: Struct, incoming: Struct, path: Tuple[str, ...], conflicts: List[LeafConflict]) -> None:
    target = parent.child(incoming.name)
    if target is None:
        target = Struct(name=incoming.name, access_level=incoming.access_level)
        parent.structs.append(target)
    target.comments.extend(comment for comment in incoming.comments if comment not in target.comments)

    child_path = path + (incoming.name,)
    for leaf in incoming.leaves:
        for existing in target.leaves:
            if existing.name == leaf.name and existing.internal == leaf.internal and existing.type != leaf.type:
                conflicts.append(LeafConflict(child_path, leaf.name, existing, leaf))
        target.leaves.append(leaf)
    for struct in incoming.structs:
        _merge_child(target, struct, child_path, conflicts)


class AggregatedStructGenerator:
    """Runs the generators in list order and aggregates their structs under ``R``."""

    def __init__(self, generators: Sequence[StructGenerator], *, root_name: str = "R") -> None:
        self.generators = list(generators)
        self.root_name = root_name

    def generate(self, resources: Resources, access_level: AccessLevel) -> AggregatedStruct:
        structs: List[Struct] = []
        for generator in self.generators:
            _LOGGER.debug("Running generator %s", generator.__class__.__name__)
            structs.append(generator.generate(resources, access_level, self.root_name))
        return aggregate(structs, name=self.root_name, access_level=access_level)
