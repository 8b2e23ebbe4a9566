"""RGB color helpers and the predefined palette."""
from __future__ import annotations

import string
from typing import Dict, List, Tuple

from .errors import ValidationError

RGB = Tuple[int, int, int]

PREDEFINED_COLORS: Dict[str, RGB] = {
    "Black": (0, 0, 0),
    "White": (255, 255, 255),
    "Red": (220, 53, 69),
    "Green": (40, 167, 69),
    "Blue": (0, 123, 255),
    "Purple": (111, 66, 193),
    "Orange": (253, 126, 20),
    "Cyan": (23, 162, 184),
    "Pink": (232, 62, 140),
    "Yellow": (255, 193, 7),
    "Teal": (32, 201, 151),
    "Indigo": (102, 16, 242),
}
"""Palette offered by the color steps, in display order."""

_HEX_DIGITS = frozenset(string.hexdigits)


def color_names() -> List[str]:
    return list(PREDEFINED_COLORS)


def parse_hex_color(value: str) -> RGB:
    """Parse ``RRGGBB`` or ``#RRGGBB`` into an RGB triple.

    Each channel is exactly two hex digits.  Anything else raises
    :class:`~qrgen.errors.ValidationError`.
    """

    digits = value[1:] if value.startswith("#") else value
    if len(digits) != 6:
        raise ValidationError(
            f"invalid hex color format: {value} (expected 6 characters)"
        )
    if not all(char in _HEX_DIGITS for char in digits):
        raise ValidationError(f"invalid hex color: {value}")

    red, green, blue = (int(digits[index : index + 2], 16) for index in (0, 2, 4))
    return red, green, blue


def color_to_hex(color: RGB) -> str:
    """Return ``color`` as an upper-case ``#RRGGBB`` string."""

    red, green, blue = color
    return f"#{red:02X}{green:02X}{blue:02X}"


def color_to_svg(color: RGB) -> str:
    red, green, blue = color
    return f"rgb({red},{green},{blue})"


def palette_name(color: RGB) -> str:
    """Return the palette name of ``color`` or ``"Custom"``."""

    for name, candidate in PREDEFINED_COLORS.items():
        if candidate == tuple(color):
            return name
    return "Custom"


__all__ = [
    "RGB",
    "PREDEFINED_COLORS",
    "color_names",
    "parse_hex_color",
    "color_to_hex",
    "color_to_svg",
    "palette_name",
]
