"""Tests for storyboard and nib parsing."""

from __future__ import annotations

from pathlib import Path

import pytest

from resgen.resources import ResourceParsingError
from resgen.resources.interface_builder import NibParser, StoryboardParser
from resgen.symbols import Reusable, Type

STORYBOARD = """<?xml version="1.0" encoding="UTF-8"?>
<document type="com.apple.InterfaceBuilder3.CocoaTouch.Storyboard.XIB" version="3.0" initialViewController="nav-1">
  <scenes>
    <scene sceneID="s1">
      <objects>
        <navigationController id="nav-1" sceneMemberID="viewController">
          <connections>
            <segue destination="list-1" kind="relationship" relationship="rootViewController" id="rel-1"/>
          </connections>
        </navigationController>
      </objects>
    </scene>
    <scene sceneID="s2">
      <objects>
        <tableViewController storyboardIdentifier="ProductList" id="list-1" customClass="ProductListViewController" customModule="Shop" sceneMemberID="viewController">
          <tableView key="view" id="tv-1">
            <prototypes>
              <tableViewCell reuseIdentifier="ProductCell" id="cell-1" customClass="ProductCell" customModule="Shop">
                <imageView image="placeholder" id="iv-1"/>
              </tableViewCell>
            </prototypes>
          </tableView>
          <connections>
            <segue destination="detail-1" kind="show" identifier="showDetail" id="seg-1"/>
          </connections>
        </tableViewController>
      </objects>
    </scene>
    <scene sceneID="s3">
      <objects>
        <viewController id="detail-1" sceneMemberID="viewController">
          <view key="view" id="v-1">
            <button id="b-1">
              <state key="normal" image="heart" backgroundImage="button-bg"/>
            </button>
          </view>
        </viewController>
      </objects>
    </scene>
  </scenes>
  <resources>
    <image name="placeholder" width="16" height="16"/>
    <image name="heart" width="16" height="16"/>
  </resources>
</document>
"""

NIB = """<?xml version="1.0" encoding="UTF-8"?>
<document type="com.apple.InterfaceBuilder3.CocoaTouch.XIB" version="3.0">
  <objects>
    <placeholder placeholderIdentifier="IBFilesOwner" id="-1" userLabel="File's Owner"/>
    <placeholder placeholderIdentifier="IBFirstResponder" id="-2" customClass="UIResponder"/>
    <collectionViewCell reuseIdentifier="BadgeCell" id="c-1" customClass="BadgeCell" customModule="Shop">
      <imageView image="badge" id="iv-1"/>
    </collectionViewCell>
    <view id="v-2"/>
  </objects>
  <resources>
    <image name="badge" width="8" height="8"/>
  </resources>
</document>
"""

_LIST = Type("Shop", "ProductListViewController")


def _write(tmp_path: Path, name: str, content: str) -> Path:
    path = tmp_path / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def test_storyboard_parser_reads_controllers_and_initial(tmp_path: Path) -> None:
    storyboard = StoryboardParser().parse(_write(tmp_path, "Main.storyboard", STORYBOARD))

    assert storyboard.name == "Main"
    assert storyboard.initial_view_controller is not None
    assert storyboard.initial_view_controller.type == Type("UIKit", "UINavigationController")
    identified = {vc.storyboard_identifier: vc.type for vc in storyboard.view_controllers if vc.storyboard_identifier}
    assert identified == {"ProductList": _LIST}


def test_storyboard_parser_resolves_segues_by_destination(tmp_path: Path) -> None:
    storyboard = StoryboardParser().parse(_write(tmp_path, "Main.storyboard", STORYBOARD))

    (segue,) = storyboard.segues
    assert segue.identifier == "showDetail"
    assert segue.source == _LIST
    assert segue.destination == Type.UI_VIEW_CONTROLLER
    assert segue.type == Type.UI_STORYBOARD_SEGUE
    assert segue.kind == "show"


def test_storyboard_parser_collects_reusables_and_images(tmp_path: Path) -> None:
    storyboard = StoryboardParser().parse(_write(tmp_path, "Main.storyboard", STORYBOARD))

    assert storyboard.reusables == (Reusable("ProductCell", Type("Shop", "ProductCell")),)
    assert storyboard.used_image_identifiers == ("button-bg", "heart", "placeholder")


def test_storyboard_parser_reads_locale_from_lproj(tmp_path: Path) -> None:
    storyboard = StoryboardParser().parse(_write(tmp_path, "Base.lproj/Main.storyboard", STORYBOARD))

    assert storyboard.locale == "Base"


def test_storyboard_parser_reports_malformed_xml(tmp_path: Path) -> None:
    with pytest.raises(ResourceParsingError, match="Broken.storyboard"):
        StoryboardParser().parse(_write(tmp_path, "Broken.storyboard", "<document><scenes>"))


def test_nib_parser_skips_placeholders(tmp_path: Path) -> None:
    nib = NibParser().parse(_write(tmp_path, "BadgeCell.xib", NIB))

    assert nib.name == "BadgeCell"
    assert nib.root_views == (Type("Shop", "BadgeCell"), Type.UI_VIEW)
    assert nib.reusables == (Reusable("BadgeCell", Type("Shop", "BadgeCell")),)
    assert nib.used_image_identifiers == ("badge",)
