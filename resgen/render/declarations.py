"""Swift declarations for individual leaves.

Each builder returns the lines of one declaration, unindented, so the
template only has to nest them inside their struct.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Dict, List, Sequence

from ..symbols import REUSE_IDENTIFIER, SEGUE_INFO, VIEW_CONTROLLER_RESOURCE, Leaf, Parameter, Type
from ..validators.structs import INTERNAL_ROOT
from .swift_text import swift_string, swift_type

DeclarationBuilder = Callable[[Leaf, Sequence[str], str], List[str]]


def parameter_list(parameters: Sequence[Parameter]) -> str:
    rendered = []
    for parameter in parameters:
        head = f"{parameter.label} {parameter.name}" if parameter.label else parameter.name
        default = " = nil" if parameter.type.optional else ""
        rendered.append(f"{head}: {swift_type(parameter.type)}{default}")
    return ", ".join(rendered)


def member_path(path: Sequence[str], name: str) -> str:
    return ".".join((*path, name))


def internal_path(path: Sequence[str], name: str) -> str:
    """The same member inside the internal tree (``R.string.x`` -> ``_R.string.x``)."""
    return ".".join((INTERNAL_ROOT, *path[1:], name))


def _doc(leaf: Leaf) -> List[str]:
    return [f"/// {leaf.accessor}"] if leaf.accessor else []


def _image(leaf: Leaf, path: Sequence[str], access: str) -> List[str]:
    name = str(leaf.attributes.get("name", leaf.origin.raw_name))
    return _doc(leaf) + [
        f"{access}static let {leaf.name} = Rswift.ImageResource(bundle: R.hostingBundle, name: {swift_string(name)})",
        f"{access}static func {leaf.name}({parameter_list(leaf.parameters)}) -> UIKit.UIImage? {{",
        f"  return UIKit.UIImage(resource: {member_path(path, leaf.name)}, compatibleWith: traitCollection)",
        "}",
    ]


def _color(leaf: Leaf, path: Sequence[str], access: str) -> List[str]:
    name = str(leaf.attributes.get("name", leaf.origin.raw_name))
    return _doc(leaf) + [
        f"{access}static let {leaf.name} = Rswift.ColorResource(bundle: R.hostingBundle, name: {swift_string(name)})",
        f"{access}static func {leaf.name}({parameter_list(leaf.parameters)}) -> UIKit.UIColor? {{",
        f"  return UIKit.UIColor(resource: {member_path(path, leaf.name)}, compatibleWith: traitCollection)",
        "}",
    ]


def _font(leaf: Leaf, path: Sequence[str], access: str) -> List[str]:
    font_name = str(leaf.attributes.get("font_name", leaf.origin.raw_name))
    return _doc(leaf) + [
        f"{access}static let {leaf.name} = Rswift.FontResource(fontName: {swift_string(font_name)})",
        f"{access}static func {leaf.name}({parameter_list(leaf.parameters)}) -> UIKit.UIFont? {{",
        f"  return UIKit.UIFont(resource: {member_path(path, leaf.name)}, size: size)",
        "}",
    ]


def _file(leaf: Leaf, path: Sequence[str], access: str) -> List[str]:
    name = str(leaf.attributes.get("name", leaf.origin.raw_name))
    extension = str(leaf.attributes.get("extension", ""))
    return _doc(leaf) + [
        (
            f"{access}static let {leaf.name} = Rswift.FileResource(bundle: R.hostingBundle, "
            f"name: {swift_string(name)}, pathExtension: {swift_string(extension)})"
        ),
        f"{access}static func {leaf.name}(_: Void = ()) -> Foundation.URL? {{",
        f"  let fileResource = {member_path(path, leaf.name)}",
        "  return fileResource.bundle.url(forResource: fileResource)",
        "}",
    ]


def _localized_string(leaf: Leaf, path: Sequence[str], access: str) -> List[str]:
    table = str(leaf.attributes.get("table", "Localizable"))
    values = [parameter.name for parameter in leaf.parameters if parameter.type != Type.LOCALE.as_optional()]
    lookup = (
        f"NSLocalizedString({internal_path(path, leaf.name)}, tableName: {swift_string(table)}, "
        'bundle: R.hostingBundle, comment: "")'
    )
    value = str(leaf.attributes.get("value", ""))
    lines = [f"/// Value: {value.splitlines()[0]}"] if value else []
    lines.append(f"{access}static func {leaf.name}({parameter_list(leaf.parameters)}) -> String {{")
    if values:
        lines.append(f"  let format = {lookup}")
        lines.append(f"  return String(format: format, locale: locale ?? Foundation.Locale.current, {', '.join(values)})")
    else:
        lines.append(f"  return {lookup}")
    lines.append("}")
    return lines


def _string_constant(leaf: Leaf, path: Sequence[str], access: str) -> List[str]:
    value = leaf.attributes.get("value", leaf.attributes.get("key", leaf.origin.raw_name))
    return [f"{access}static let {leaf.name} = {swift_string(value)}"]


def _validation(leaf: Leaf, path: Sequence[str], access: str) -> List[str]:
    storyboard = str(leaf.attributes.get("storyboard", leaf.origin.raw_name))
    lines = [f"{access}static func {leaf.name}() throws {{"]
    for image in leaf.attributes.get("images", ()):
        message = f"[resgen] Image named '{image}' is used in storyboard '{storyboard}', but couldn't be loaded."
        lines.extend(
            [
                f"  if UIKit.UIImage(named: {swift_string(image)}, in: R.hostingBundle, compatibleWith: nil) == nil {{",
                f"    throw Rswift.ValidationError(description: {swift_string(message)})",
                "  }",
            ]
        )
    lines.append("}")
    return lines


def _nib(leaf: Leaf, path: Sequence[str], access: str) -> List[str]:
    root_type = leaf.attributes.get("root_type", Type.UI_VIEW)
    internal_struct = str(leaf.attributes.get("internal_struct", leaf.name))
    name_reference = ".".join((INTERNAL_ROOT, *path[1:], internal_struct, "name"))
    return _doc(leaf) + [
        f"{access}static func {leaf.name}({parameter_list(leaf.parameters)}) -> {swift_type(root_type)}? {{",
        f"  let nib = UIKit.UINib(nibName: {name_reference}, bundle: R.hostingBundle)",
        f"  return nib.instantiate(withOwner: owner, options: nil).first as? {swift_type(root_type)}",
        "}",
    ]


def _view_controller(leaf: Leaf, path: Sequence[str], access: str) -> List[str]:
    controller = swift_type(leaf.type.generic_args[0])
    identifier = str(leaf.attributes.get("identifier", leaf.name))
    storyboard = str(leaf.attributes.get("storyboard", ""))
    return _doc(leaf) + [
        f"{access}static let {leaf.name} = {swift_type(leaf.type)}(identifier: {swift_string(identifier)})",
        f"{access}static func {leaf.name}(_: Void = ()) -> {controller}? {{",
        f"  let storyboard = UIKit.UIStoryboard(name: {swift_string(storyboard)}, bundle: R.hostingBundle)",
        f"  return storyboard.instantiateViewController(withIdentifier: {swift_string(identifier)}) as? {controller}",
        "}",
    ]


def _initial_view_controller(leaf: Leaf, path: Sequence[str], access: str) -> List[str]:
    controller = swift_type(replace(leaf.type, optional=False))
    storyboard = str(leaf.attributes.get("storyboard", ""))
    return _doc(leaf) + [
        f"{access}static func {leaf.name}() -> {controller}? {{",
        f"  let storyboard = UIKit.UIStoryboard(name: {swift_string(storyboard)}, bundle: R.hostingBundle)",
        f"  return storyboard.instantiateInitialViewController() as? {controller}",
        "}",
    ]


def _segue(leaf: Leaf, path: Sequence[str], access: str) -> List[str]:
    arguments = ", ".join(swift_type(arg) for arg in leaf.type.generic_args)
    identifier = str(leaf.attributes.get("identifier", leaf.name))
    return _doc(leaf) + [
        (
            f"{access}static let {leaf.name} = Rswift.StoryboardSegueIdentifier<{arguments}>"
            f"(identifier: {swift_string(identifier)})"
        ),
        f"{access}static func {leaf.name}(segue: UIKit.UIStoryboardSegue) -> {swift_type(leaf.type)}? {{",
        f"  return {swift_type(leaf.type)}(segueIdentifier: {member_path(path, leaf.name)}, segue: segue)",
        "}",
    ]


def _reuse_identifier(leaf: Leaf, path: Sequence[str], access: str) -> List[str]:
    identifier = str(leaf.attributes.get("identifier", leaf.name))
    return _doc(leaf) + [
        f"{access}static let {leaf.name}: {swift_type(leaf.type)} = Rswift.ReuseIdentifier(identifier: {swift_string(identifier)})",
    ]


def _unknown(leaf: Leaf, path: Sequence[str], access: str) -> List[str]:
    return [f"// {leaf.name}: {swift_type(leaf.type)} from {leaf.origin} has no Swift rendering"]


_BY_TYPE: Dict[Type, DeclarationBuilder] = {
    Type.IMAGE_RESOURCE: _image,
    Type.COLOR_RESOURCE: _color,
    Type.FONT_RESOURCE: _font,
    Type.FILE_RESOURCE: _file,
    Type.STRING_RESOURCE: _localized_string,
    Type.STRING: _string_constant,
    Type.NIB_RESOURCE: _nib,
    Type.VALIDATION: _validation,
}

_BY_GENERIC: Dict[str, DeclarationBuilder] = {
    VIEW_CONTROLLER_RESOURCE.name: _view_controller,
    SEGUE_INFO.name: _segue,
    REUSE_IDENTIFIER.name: _reuse_identifier,
}


def declare(leaf: Leaf, path: Sequence[str], access: str = "") -> List[str]:
    """Lines declaring ``leaf`` inside the struct at ``path``."""
    builder = _BY_TYPE.get(leaf.type)
    if builder is None and leaf.type.generic_args:
        builder = _BY_GENERIC.get(leaf.type.name)
    if builder is None and leaf.origin.generator == "storyboard" and leaf.name == "instantiateInitialViewController":
        builder = _initial_view_controller
    return (builder or _unknown)(leaf, path, access)
