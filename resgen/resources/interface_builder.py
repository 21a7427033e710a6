"""Interface Builder documents: storyboards and nibs."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from pathlib import Path
from typing import Dict, Iterable, List

from .base import ResourceParser, ResourceParsingError, locale_of
from ..models import Nib, ResourceKind, Segue, Storyboard, ViewController
from ..symbols import Reusable, Type

_UIKIT = "UIKit"

VIEW_CONTROLLER_TYPES: Dict[str, Type] = {
    "viewController": Type.UI_VIEW_CONTROLLER,
    "tableViewController": Type(_UIKIT, "UITableViewController"),
    "collectionViewController": Type(_UIKIT, "UICollectionViewController"),
    "navigationController": Type(_UIKIT, "UINavigationController"),
    "tabBarController": Type(_UIKIT, "UITabBarController"),
    "splitViewController": Type(_UIKIT, "UISplitViewController"),
    "pageViewController": Type(_UIKIT, "UIPageViewController"),
    "glkViewController": Type("GLKit", "GLKViewController"),
    "avPlayerViewController": Type("AVKit", "AVPlayerViewController"),
    "hostingController": Type("SwiftUI", "UIHostingController"),
}

REUSABLE_VIEW_TYPES: Dict[str, Type] = {
    "tableViewCell": Type.UI_TABLE_VIEW_CELL,
    "collectionViewCell": Type.UI_COLLECTION_VIEW_CELL,
    "collectionReusableView": Type.UI_COLLECTION_REUSABLE_VIEW,
    "tableViewHeaderFooterView": Type(_UIKIT, "UITableViewHeaderFooterView"),
}

ROOT_VIEW_TYPES: Dict[str, Type] = {
    "view": Type.UI_VIEW,
    "imageView": Type(_UIKIT, "UIImageView"),
    "label": Type(_UIKIT, "UILabel"),
    "button": Type(_UIKIT, "UIButton"),
    "scrollView": Type(_UIKIT, "UIScrollView"),
    "tableView": Type(_UIKIT, "UITableView"),
    "collectionView": Type(_UIKIT, "UICollectionView"),
    "stackView": Type(_UIKIT, "UIStackView"),
    **REUSABLE_VIEW_TYPES,
}


def _load(path: Path) -> ET.Element:
    try:
        return ET.parse(path).getroot()
    except (OSError, ET.ParseError) as exc:
        raise ResourceParsingError.parsing_failed(path, str(exc)) from exc


def _custom_type(element: ET.Element, default: Type) -> Type:
    custom_class = element.get("customClass")
    if not custom_class:
        return default
    return Type(element.get("customModule") or "", custom_class)


def _reusables(root: ET.Element) -> List[Reusable]:
    found: List[Reusable] = []
    for element in root.iter():
        identifier = element.get("reuseIdentifier")
        if not identifier:
            continue
        default = REUSABLE_VIEW_TYPES.get(element.tag, Type.UI_VIEW)
        reusable = Reusable(identifier=identifier, type=_custom_type(element, default))
        if reusable not in found:
            found.append(reusable)
    return found


def _used_images(root: ET.Element) -> List[str]:
    names: List[str] = []
    for image in root.iterfind("./resources/image"):
        name = image.get("name")
        if name:
            names.append(name)
    for element in root.iter():
        if element.tag in ("image", "resources"):
            continue
        for attribute in ("image", "highlightedImage", "backgroundImage"):
            name = element.get(attribute)
            if name:
                names.append(name)
    return sorted(set(names))


class StoryboardParser(ResourceParser):
    name = "storyboard"
    extensions = frozenset({"storyboard"})

    def _parse(self, path: Path) -> Storyboard:
        root = _load(path)

        controllers: Dict[str, ViewController] = {}
        controller_elements: List[ET.Element] = []
        for element in _iter_view_controllers(root):
            controller_id = element.get("id")
            if not controller_id:
                continue
            default = VIEW_CONTROLLER_TYPES.get(element.tag, Type.UI_VIEW_CONTROLLER)
            controllers[controller_id] = ViewController(
                id=controller_id,
                storyboard_identifier=element.get("storyboardIdentifier"),
                type=_custom_type(element, default),
            )
            controller_elements.append(element)

        segues: List[Segue] = []
        for element in controller_elements:
            source = controllers[element.get("id", "")]
            for segue in element.iterfind("./connections/segue"):
                identifier = segue.get("identifier")
                destination = controllers.get(segue.get("destination", ""))
                if not identifier or destination is None:
                    continue
                segues.append(
                    Segue(
                        identifier=identifier,
                        type=_custom_type(segue, Type.UI_STORYBOARD_SEGUE),
                        source=source.type,
                        destination=destination.type,
                        kind=segue.get("kind", "show"),
                    )
                )

        initial_id = root.get("initialViewController")
        return Storyboard(
            kind=ResourceKind.STORYBOARD,
            name=path.stem,
            path=str(path),
            locale=locale_of(path),
            initial_view_controller=controllers.get(initial_id) if initial_id else None,
            view_controllers=tuple(controllers.values()),
            segues=tuple(segues),
            reusables=tuple(_reusables(root)),
            used_image_identifiers=tuple(_used_images(root)),
        )


class NibParser(ResourceParser):
    name = "nib"
    extensions = frozenset({"xib"})

    def _parse(self, path: Path) -> Nib:
        root = _load(path)
        objects = root.find("./objects")
        root_views: List[Type] = []
        if objects is not None:
            for element in objects:
                if element.tag in ("placeholder", "customObject"):
                    continue
                default = ROOT_VIEW_TYPES.get(element.tag, Type.UI_VIEW)
                root_views.append(_custom_type(element, default))
        return Nib(
            kind=ResourceKind.NIB,
            name=path.stem,
            path=str(path),
            locale=locale_of(path),
            root_views=tuple(root_views),
            reusables=tuple(_reusables(root)),
            used_image_identifiers=tuple(_used_images(root)),
        )


def _iter_view_controllers(root: ET.Element) -> Iterable[ET.Element]:
    for objects in root.iterfind("./scenes/scene/objects"):
        for element in objects:
            if element.tag in VIEW_CONTROLLER_TYPES or element.tag.endswith("Controller"):
                yield element
