"""Terminal QR code preview rendering.

The preview uses the upper half block character (``▀``) so that one
character cell shows two vertically stacked modules: the glyph's foreground
paints the top module and its background paints the bottom one.  Colors are
fixed ANSI black and bright white, independent of the terminal theme, so the
preview stays scannable.
"""
from __future__ import annotations

import logging
from typing import Dict, Optional, Sequence, Tuple

from .config import AppConfig
from .errors import ValidationError

logger = logging.getLogger(__name__)

HALF_BLOCK = "▀"
ANSI_RESET = "\x1b[0m"

# Keyed by (top is dark, bottom is dark).
QR_ANSI_CODES: Dict[Tuple[bool, bool], str] = {
    (False, False): "\x1b[97;107m" + HALF_BLOCK,
    (False, True): "\x1b[97;40m" + HALF_BLOCK,
    (True, False): "\x1b[30;107m" + HALF_BLOCK,
    (True, True): "\x1b[30;40m" + HALF_BLOCK,
}


def render_bitmap(bitmap: Sequence[Sequence[bool]]) -> str:
    """Convert a module bitmap into colored half-block lines.

    Rows are consumed in pairs; when the bitmap has an odd number of rows the
    missing bottom row is treated as light.
    """

    if not bitmap:
        return ""

    rows = len(bitmap)
    cols = len(bitmap[0])
    lines = []
    for y in range(0, rows, 2):
        top = bitmap[y]
        bottom = bitmap[y + 1] if y + 1 < rows else None
        cells = [
            QR_ANSI_CODES[(bool(top[x]), bool(bottom[x]) if bottom is not None else False)]
            for x in range(cols)
        ]
        lines.append("".join(cells) + ANSI_RESET + "\n")
    return "".join(lines)


def render_preview(content: str, config: Optional[AppConfig] = None) -> str:
    """Encode ``content`` and return its terminal preview."""

    if not content:
        raise ValidationError("content cannot be empty")

    from .qr import QRCodeManager

    bitmap = QRCodeManager(config or AppConfig()).bitmap(content)
    logger.debug("Rendering %dx%d preview", len(bitmap), len(bitmap))
    return render_bitmap(bitmap)


__all__ = ["HALF_BLOCK", "ANSI_RESET", "QR_ANSI_CODES", "render_bitmap", "render_preview"]
