"""Font struct generator."""

from __future__ import annotations

from .base import StructGenerator
from ..identifiers import sanitize
from ..models import Resources
from ..symbols import AccessLevel, Leaf, Origin, Parameter, Struct, Type


class FontStructGenerator(StructGenerator):
    name = "font"

    def generate(self, resources: Resources, access_level: AccessLevel, prefix: str) -> Struct:
        struct = Struct(name="font", access_level=access_level)
        for font in sorted(resources.fonts, key=lambda item: item.name):
            identifier = sanitize(font.name)
            struct.leaves.append(
                Leaf(
                    name=identifier,
                    type=Type.FONT_RESOURCE,
                    origin=Origin(self.name, font.name, font.path),
                    accessor=f"{self.qualified(prefix, 'font', identifier)}(size:) returns '{font.name}' at the given size",
                    parameters=(Parameter("size", Type.CG_FLOAT),),
                    attributes={"font_name": font.name, "filename": font.filename},
                )
            )
        return struct
