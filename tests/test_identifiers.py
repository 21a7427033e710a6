"""Tests for resgen.identifiers."""

from __future__ import annotations

import pytest

from resgen.identifiers import EMPTY_IDENTIFIER, IdentifierStyle, sanitize, sanitize_path


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("icon-home", "iconHome"),
        ("hello world", "helloWorld"),
        ("settings_gear_icon", "settingsGearIcon"),
        ("Hello", "hello"),
        ("HELLO", "hello"),
        ("URLSession", "urlSession"),
        ("ABC1", "abc1"),
        ("café", "cafe"),
    ],
)
def test_sanitize_camel_cases_member_identifiers(raw: str, expected: str) -> None:
    assert sanitize(raw) == expected


def test_sanitize_prefixes_leading_digit() -> None:
    assert sanitize("2x-logo") == "_2xLogo"


@pytest.mark.parametrize("raw", ["class", "self", "id", "default"])
def test_sanitize_escapes_reserved_words(raw: str) -> None:
    assert sanitize(raw) == f"{raw}_"


@pytest.mark.parametrize("raw", ["", "!!!", "日本"])
def test_sanitize_falls_back_for_names_without_usable_characters(raw: str) -> None:
    assert sanitize(raw) == EMPTY_IDENTIFIER


def test_sanitize_type_style_uppercases_first_letter() -> None:
    assert sanitize("my_cell", IdentifierStyle.TYPE) == "MyCell"
    assert sanitize("profileHeader", IdentifierStyle.TYPE) == "ProfileHeader"


def test_sanitize_is_deterministic() -> None:
    assert {sanitize("Some Résumé-Icon") for _ in range(5)} == {"someResumeIcon"}


def test_distinct_names_can_sanitize_to_the_same_identifier() -> None:
    assert sanitize("icon-home") == sanitize("icon_home") == sanitize("icon home")


def test_sanitize_path_sanitizes_each_component() -> None:
    assert sanitize_path(["Icons", "tab bar", "Home"]) == ["icons", "tabBar", "home"]
