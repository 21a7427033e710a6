"""Swift source rendering for validated symbol trees."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Set, Tuple

from jinja2 import Environment, FileSystemLoader

from ..generators.images import image_accessor_path
from ..logging import get_logger
from ..symbols import STDLIB, AccessLevel, Struct, Type
from .declarations import INTERNAL_ROOT, declare
from .swift_text import access_prefix, swift_string, swift_type

TEMPLATE_NAME = "R.generated.swift.j2"
_BUILTIN_TEMPLATES = Path(__file__).with_name("templates")
_ALWAYS_IMPORTED = ("Foundation", "Rswift", "UIKit")


def collect_imports(structs: Iterable[Struct], extra: Iterable[str], exclude: Iterable[str]) -> List[str]:
    """Every module referenced by a leaf, plus the fixed and configured imports, sorted."""
    modules: Set[str] = set(_ALWAYS_IMPORTED)
    modules.update(extra)
    for struct in structs:
        for _, leaf in struct.walk():
            modules.update(leaf.type.modules())
            for parameter in leaf.parameters:
                modules.update(parameter.type.modules())
            for value in leaf.attributes.values():
                if isinstance(value, Type):
                    modules.update(value.modules())
    excluded = set(exclude) | {"", STDLIB}
    return sorted(module for module in modules if module not in excluded)


def validation_paths(internal: Struct) -> List[str]:
    """Dotted paths of every internal ``validate`` helper, relative to the internal root."""
    paths: List[str] = []
    for path, leaf in internal.walk():
        if leaf.type == Type.VALIDATION:
            paths.append(".".join((*path[1:], leaf.name)))
    return paths


def objc_images(external: Struct) -> List[Tuple[str, str]]:
    """``(selector suffix, Swift accessor)`` for every image, for the Objective-C bridge."""
    images = external.child("image")
    if images is None:
        return []
    entries = []
    for path, leaf in images.walk((external.name,)):
        if leaf.type != Type.IMAGE_RESOURCE:
            continue
        raw_name = str(leaf.attributes.get("name", leaf.origin.raw_name))
        entries.append(("_".join(image_accessor_path(raw_name)), ".".join((*path, leaf.name))))
    return sorted(entries)


class SwiftRenderer:
    """Renders the external and internal structs into one Swift source file."""

    def __init__(self, templates_dir: Path | None = None) -> None:
        directories = []
        if templates_dir:
            directories.append(str(templates_dir))
        directories.append(str(_BUILTIN_TEMPLATES))
        self.env = Environment(
            loader=FileSystemLoader(directories),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.env.filters["swift_type"] = swift_type
        self.env.filters["swift_string"] = swift_string
        self.env.globals["declare"] = declare
        self.logger = get_logger("render.swift")

    def render(
        self,
        external: Struct,
        internal: Struct,
        *,
        module_name: str,
        access_level: AccessLevel = AccessLevel.INTERNAL,
        imports: Sequence[str] = (),
        objc_compat: bool = False,
        unused_images: Optional[Sequence[str]] = None,
    ) -> str:
        template = self.env.get_template(TEMPLATE_NAME)
        self.logger.debug("Rendering with template %s", template.filename)
        return template.render(
            external=external,
            internal=internal,
            internal_root=INTERNAL_ROOT,
            module_name=module_name,
            access=access_prefix(access_level),
            imports=collect_imports([external, internal], imports, exclude=[module_name]),
            validations=validation_paths(internal),
            objc_compat=objc_compat,
            objc_images=objc_images(external) if objc_compat else [],
            unused_images=list(unused_images) if unused_images is not None else None,
        )


__all__ = ["SwiftRenderer", "TEMPLATE_NAME", "collect_imports", "objc_images", "validation_paths"]
