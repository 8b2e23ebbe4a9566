from __future__ import annotations

import pytest

from qrgen.colors import (
    PREDEFINED_COLORS,
    color_names,
    color_to_hex,
    color_to_svg,
    palette_name,
    parse_hex_color,
)
from qrgen.errors import ValidationError


@pytest.mark.parametrize(
    "value, expected",
    [
        ("#FF8000", (255, 128, 0)),
        ("ff8000", (255, 128, 0)),
        ("#000000", (0, 0, 0)),
        ("aBcDeF", (171, 205, 239)),
    ],
)
def test_parse_hex_color_accepts_six_digits(value, expected):
    assert parse_hex_color(value) == expected


@pytest.mark.parametrize("value", ["1a2b3c", "#1A2B3C", "#ffffff", "00ff7f"])
def test_hex_round_trip_normalizes_case_and_hash(value):
    normalized = "#" + value.lstrip("#").upper()
    assert color_to_hex(parse_hex_color(value)) == normalized


@pytest.mark.parametrize("value", ["", "#FFF", "1234567", "#GG0000", "12 456", "##12345"])
def test_parse_hex_color_rejects_malformed_input(value):
    with pytest.raises(ValidationError):
        parse_hex_color(value)


def test_validation_error_is_a_value_error():
    with pytest.raises(ValueError):
        parse_hex_color("nope")


def test_color_to_svg_uses_rgb_function():
    assert color_to_svg((1, 22, 255)) == "rgb(1,22,255)"


def test_palette_order_starts_with_black_and_white():
    names = color_names()

    assert names[:2] == ["Black", "White"]
    assert len(names) == len(PREDEFINED_COLORS) == 12


def test_palette_name_falls_back_to_custom():
    assert palette_name((220, 53, 69)) == "Red"
    assert palette_name((1, 2, 3)) == "Custom"
