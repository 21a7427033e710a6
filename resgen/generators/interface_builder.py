"""Storyboard, segue and nib struct generators."""

from __future__ import annotations

from typing import Callable, Dict, List, Tuple

from .base import StructGenerator
from ..identifiers import IdentifierStyle, sanitize
from ..models import Nib, Resources, Segue, Storyboard
from ..symbols import (
    SEGUE_INFO,
    VIEW_CONTROLLER_RESOURCE,
    AccessLevel,
    Leaf,
    Origin,
    Parameter,
    Struct,
    Type,
)

_OWNER = Type("Swift", "AnyObject", optional=True)


def _unique_by_name(items: List, key: Callable[[object], str]) -> List:
    """Keep the first descriptor per name; localized copies describe the same file."""
    seen: Dict[str, object] = {}
    for item in items:
        seen.setdefault(key(item), item)
    return [seen[name] for name in sorted(seen)]


class StoryboardStructGenerator(StructGenerator):
    """Per storyboard: its name, initial and identified view controllers, and a validation helper."""

    name = "storyboard"

    def generate(self, resources: Resources, access_level: AccessLevel, prefix: str) -> Struct:
        struct = Struct(name="storyboard", access_level=access_level)
        for storyboard in _unique_by_name(resources.storyboards, lambda item: item.name):
            struct.structs.append(self._storyboard_struct(storyboard, access_level, prefix))
        return struct

    def _storyboard_struct(self, storyboard: Storyboard, access_level: AccessLevel, prefix: str) -> Struct:
        identifier = sanitize(storyboard.name)
        qualified = self.qualified(prefix, "storyboard", identifier)
        struct = Struct(name=identifier, access_level=access_level)

        def origin(detail: str = "") -> Origin:
            raw = f"{storyboard.name}.{detail}" if detail else storyboard.name
            return Origin(self.name, raw, storyboard.path)

        struct.leaves.append(
            Leaf(
                name="name",
                type=Type.STRING,
                origin=origin("name"),
                accessor=f"{qualified}.name is the storyboard file name",
                attributes={"value": storyboard.name},
            )
        )

        initial = storyboard.initial_view_controller
        if initial is not None:
            struct.leaves.append(
                Leaf(
                    name="instantiateInitialViewController",
                    type=initial.type.as_optional(),
                    origin=origin("initialViewController"),
                    accessor=f"{qualified}.instantiateInitialViewController() instantiates {initial.type}",
                    attributes={"storyboard": storyboard.name},
                )
            )

        for controller in storyboard.view_controllers:
            if not controller.storyboard_identifier:
                continue
            name = sanitize(controller.storyboard_identifier)
            struct.leaves.append(
                Leaf(
                    name=name,
                    type=VIEW_CONTROLLER_RESOURCE.with_generic_args(controller.type),
                    origin=origin(controller.storyboard_identifier),
                    accessor=f"{qualified}.{name} instantiates {controller.type}",
                    attributes={"identifier": controller.storyboard_identifier, "storyboard": storyboard.name},
                )
            )

        struct.leaves.append(
            Leaf(
                name="validate",
                type=Type.VALIDATION,
                origin=origin("validate"),
                accessor=f"{qualified}.validate() checks that every referenced image loads",
                internal=True,
                attributes={
                    "storyboard": storyboard.name,
                    "images": sorted(set(storyboard.used_image_identifiers)),
                },
            )
        )
        return struct


class SegueStructGenerator(StructGenerator):
    """``segue.<sourceViewController>.<identifier>`` typed by segue, source and destination."""

    name = "segue"

    def generate(self, resources: Resources, access_level: AccessLevel, prefix: str) -> Struct:
        struct = Struct(name="segue", access_level=access_level)

        by_source: Dict[Tuple[str, str], List[Tuple[Storyboard, Segue]]] = {}
        for storyboard in resources.storyboards:
            for segue in storyboard.segues:
                by_source.setdefault((segue.source.module, segue.source.name), []).append((storyboard, segue))

        for key in sorted(by_source):
            entries = by_source[key]
            source_name = sanitize(key[1])
            seen: List[Tuple[str, Type]] = []
            for storyboard, segue in sorted(entries, key=lambda entry: entry[1].identifier):
                info_type = SEGUE_INFO.with_generic_args(segue.type, segue.source, segue.destination)
                marker = (segue.identifier, info_type)
                if marker in seen:
                    continue
                seen.append(marker)
                identifier = sanitize(segue.identifier)
                struct.add_leaf(
                    Leaf(
                        name=identifier,
                        type=info_type,
                        origin=Origin(self.name, f"{key[1]}.{segue.identifier}", storyboard.path),
                        accessor=(
                            f"{self.qualified(prefix, 'segue', source_name, identifier)} "
                            f"performs {segue.kind} from {segue.source} to {segue.destination}"
                        ),
                        attributes={"identifier": segue.identifier},
                    ),
                    (source_name,),
                )
        return struct


class NibStructGenerator(StructGenerator):
    """Per nib: an instantiate accessor plus an internal struct holding the nib name."""

    name = "nib"

    def generate(self, resources: Resources, access_level: AccessLevel, prefix: str) -> Struct:
        struct = Struct(name="nib", access_level=access_level)
        for nib in _unique_by_name(resources.nibs, lambda item: item.name):
            self._add_nib(struct, nib, prefix)
        return struct

    def _add_nib(self, struct: Struct, nib: Nib, prefix: str) -> None:
        identifier = sanitize(nib.name)
        root_type = nib.root_views[0] if nib.root_views else Type.UI_VIEW
        struct.leaves.append(
            Leaf(
                name=identifier,
                type=Type.NIB_RESOURCE,
                origin=Origin(self.name, nib.name, nib.path),
                accessor=f"{self.qualified(prefix, 'nib', identifier)}.instantiate(withOwner:) returns {root_type}",
                parameters=(Parameter("owner", _OWNER, label="withOwner"),),
                attributes={
                    "name": nib.name,
                    "root_type": root_type,
                    "internal_struct": sanitize(nib.name, IdentifierStyle.TYPE),
                },
            )
        )
        struct.add_leaf(
            Leaf(
                name="name",
                type=Type.STRING,
                origin=Origin(self.name, f"{nib.name}.name", nib.path),
                accessor=f"raw bundle name of {nib.name}.xib",
                internal=True,
                attributes={"value": nib.name},
            ),
            (sanitize(nib.name, IdentifierStyle.TYPE),),
        )
