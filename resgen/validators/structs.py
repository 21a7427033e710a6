"""Validation of the aggregated symbol tree and its public/internal split."""

from __future__ import annotations

from collections import OrderedDict
from typing import Dict, List, Optional, Tuple, Union

from .base import CollisionEntry, NamingCollision, StructValidationError
from ..generators.aggregate import AggregatedStruct
from ..logging import get_logger
from ..symbols import Leaf, Struct

_LOGGER = get_logger("validators.structs")

INTERNAL_ROOT = "_R"


def split(tree: Struct, *, internal_name: str = INTERNAL_ROOT) -> Tuple[Struct, Struct]:
    """Partition a tree by the ``internal`` flag of its leaves, pruning empty structs."""
    external = _filter(tree, internal=False, name=tree.name)
    internal = _filter(tree, internal=True, name=internal_name)
    return external, internal


def _filter(struct: Struct, *, internal: bool, name: str) -> Struct:
    result = Struct(name=name, access_level=struct.access_level, comments=list(struct.comments))
    result.leaves = [leaf for leaf in struct.leaves if leaf.internal == internal]
    for child in struct.structs:
        filtered = _filter(child, internal=internal, name=child.name)
        if not filtered.is_empty():
            result.structs.append(filtered)
    return result


def find_collisions(struct: Struct, partition: str, path: Tuple[str, ...] = ()) -> List[NamingCollision]:
    """Depth-first walk reporting every identifier claimed by more than one distinct symbol.

    Exact duplicates (same type and origin) are not collisions; they are
    folded into one leaf in place.
    """
    current = path + (struct.name,)
    groups: "OrderedDict[str, List[Union[Leaf, Struct]]]" = OrderedDict()
    for leaf in struct.leaves:
        groups.setdefault(leaf.name, []).append(leaf)
    for child in struct.structs:
        groups.setdefault(child.name, []).append(child)

    collisions: List[NamingCollision] = []
    deduplicated: List[Leaf] = []
    for identifier, members in groups.items():
        leaves = _unique_leaves([member for member in members if isinstance(member, Leaf)])
        structs = [member for member in members if isinstance(member, Struct)]
        deduplicated.extend(leaves)
        if len(leaves) + len(structs) > 1:
            entries = [CollisionEntry("leaf", str(leaf.type), leaf.origin) for leaf in leaves]
            entries.extend(CollisionEntry("struct", member.name, _first_origin(member)) for member in structs)
            collisions.append(NamingCollision(current, identifier, tuple(entries), partition))
    struct.leaves = deduplicated

    for child in struct.structs:
        collisions.extend(find_collisions(child, partition, current))
    return collisions


def _unique_leaves(leaves: List[Leaf]) -> List[Leaf]:
    unique: Dict[object, Leaf] = {}
    for leaf in leaves:
        unique.setdefault(leaf.identity, leaf)
    return list(unique.values())


def _first_origin(struct: Struct) -> Optional[object]:
    for _, leaf in struct.walk():
        return leaf.origin
    return None


def validate(tree: Union[Struct, AggregatedStruct]) -> Tuple[Struct, Struct]:
    """Return ``(external, internal)`` or raise :class:`StructValidationError` listing every collision."""
    root = tree.root if isinstance(tree, AggregatedStruct) else tree
    conflicts = tree.conflicts if isinstance(tree, AggregatedStruct) else []
    external, internal = split(root)

    collisions = find_collisions(external, "external") + find_collisions(internal, "internal")
    if collisions:
        for collision in collisions:
            _LOGGER.debug("Naming collision: %s", collision.describe())
        raise StructValidationError(collisions, conflicts)
    return external, internal
