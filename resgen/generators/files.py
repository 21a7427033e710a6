"""Pass-through generators: plain resource files and reuse identifiers."""

from __future__ import annotations

from typing import List

from .base import StructGenerator
from ..identifiers import sanitize
from ..models import Resources
from ..symbols import REUSE_IDENTIFIER, AccessLevel, Leaf, Origin, Reusable, Struct, Type


class ResourceFileStructGenerator(StructGenerator):
    """``data.json`` becomes ``file.dataJson``."""

    name = "file"

    def generate(self, resources: Resources, access_level: AccessLevel, prefix: str) -> Struct:
        struct = Struct(name="file", access_level=access_level)
        seen = set()
        for resource in sorted(resources.resource_files, key=lambda item: (item.name, item.extension)):
            filename = f"{resource.name}.{resource.extension}" if resource.extension else resource.name
            # Localized copies of one file are the same bundle resource.
            if filename in seen:
                continue
            seen.add(filename)
            struct.leaves.append(
                Leaf(
                    name=sanitize(filename),
                    type=Type.FILE_RESOURCE,
                    origin=Origin(self.name, filename, resource.path),
                    accessor=f"{self.qualified(prefix, 'file', sanitize(filename))} locates '{filename}' in the bundle",
                    attributes={"name": resource.name, "extension": resource.extension},
                )
            )
        return struct


class ReuseIdentifierStructGenerator(StructGenerator):
    """One leaf per distinct ``(identifier, type)`` across storyboards and nibs."""

    name = "reuseIdentifier"

    def generate(self, resources: Resources, access_level: AccessLevel, prefix: str) -> Struct:
        struct = Struct(name="reuseIdentifier", access_level=access_level)
        unique: List[Reusable] = []
        for reusable in resources.reusables:
            if reusable not in unique:
                unique.append(reusable)

        for reusable in sorted(unique, key=lambda item: (item.identifier, str(item.type))):
            identifier = sanitize(reusable.identifier)
            struct.leaves.append(
                Leaf(
                    name=identifier,
                    type=REUSE_IDENTIFIER.with_generic_args(reusable.type),
                    origin=Origin(self.name, f"{reusable.identifier}: {reusable.type.qualified_name}"),
                    accessor=f"{self.qualified(prefix, 'reuseIdentifier', identifier)} dequeues {reusable.type}",
                    attributes={"identifier": reusable.identifier},
                )
            )
        return struct
