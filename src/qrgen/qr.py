"""QR code generation utilities."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List

from .colors import color_to_svg
from .config import AppConfig, OutputFormat, QRConfig
from .errors import GenerationError, ValidationError

logger = logging.getLogger(__name__)

Bitmap = List[List[bool]]


@dataclass(slots=True)
class QRCodeManager:
    """Generate QR codes using :mod:`segno`."""

    config: AppConfig

    def _make(self, content: str):
        try:
            import segno  # type: ignore
        except Exception as exc:  # pragma: no cover - depends on environment
            raise GenerationError("QR generation requires segno") from exc

        try:
            return segno.make_qr(
                content,
                error=self.config.qr_error_correction.lower(),
                boost_error=False,
            )
        except ValueError as exc:
            raise GenerationError(f"failed to create QR code: {exc}") from exc

    def bitmap(self, content: str) -> Bitmap:
        """Return the module grid for ``content`` including the quiet zone."""

        qr = self._make(content)
        return [
            [bool(module) for module in row]
            for row in qr.matrix_iter(scale=1, border=self.config.qr_border)
        ]

    def generate(self, qr_config: QRConfig) -> Path:
        """Write the QR code described by ``qr_config`` and return its path.

        Parent directories are created as needed.  Any failure is reported
        as :class:`~qrgen.errors.GenerationError`.
        """

        try:
            qr_config.validate(self.config)
        except ValidationError as exc:
            raise GenerationError(f"invalid configuration: {exc}") from exc

        path = Path(qr_config.output_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise GenerationError(f"failed to create output directory: {exc}") from exc

        if qr_config.format is OutputFormat.PNG:
            self.save_png(qr_config, path)
        elif qr_config.format is OutputFormat.SVG:
            self.save_svg(qr_config, path)
        else:  # pragma: no cover - guarded by validate()
            raise GenerationError(f"unsupported format: {qr_config.format}")

        logger.info("Wrote %s QR code to %s", qr_config.format.value.upper(), path)
        return path

    def save_png(self, qr_config: QRConfig, path: Path) -> None:
        """Write a ``size``x``size`` PNG with the configured colors."""

        try:
            from PIL import Image
        except Exception as exc:  # pragma: no cover - depends on environment
            raise GenerationError("PNG output requires Pillow") from exc

        bitmap = self.bitmap(qr_config.content)
        modules = len(bitmap)

        image = Image.new("RGB", (modules, modules), tuple(qr_config.background))
        pixels = image.load()
        foreground = tuple(qr_config.foreground)
        for y, row in enumerate(bitmap):
            for x, dark in enumerate(row):
                if dark:
                    pixels[x, y] = foreground

        image = image.resize((qr_config.size, qr_config.size), Image.NEAREST)
        try:
            image.save(path, format="PNG")
        except OSError as exc:
            raise GenerationError(f"failed to write PNG file: {exc}") from exc

    def to_svg(self, qr_config: QRConfig) -> str:
        """Return an SVG document with one ``<rect>`` per dark module."""

        bitmap = self.bitmap(qr_config.content)
        size = qr_config.size
        module_size = size / len(bitmap)

        parts = [
            '<?xml version="1.0" encoding="UTF-8"?>\n',
            f'<svg xmlns="http://www.w3.org/2000/svg" version="1.1" '
            f'viewBox="0 0 {size} {size}" width="{size}" height="{size}">\n',
            f'  <rect width="100%" height="100%" fill="{color_to_svg(qr_config.background)}"/>\n',
            f'  <g fill="{color_to_svg(qr_config.foreground)}">\n',
        ]
        for y, row in enumerate(bitmap):
            for x, dark in enumerate(row):
                if dark:
                    parts.append(
                        f'    <rect x="{x * module_size:.2f}" y="{y * module_size:.2f}" '
                        f'width="{module_size:.2f}" height="{module_size:.2f}"/>\n'
                    )
        parts.append("  </g>\n</svg>")
        return "".join(parts)

    def save_svg(self, qr_config: QRConfig, path: Path) -> None:
        document = self.to_svg(qr_config)
        try:
            path.write_text(document, encoding="utf-8")
        except OSError as exc:
            raise GenerationError(f"failed to write SVG file: {exc}") from exc


__all__ = ["Bitmap", "QRCodeManager"]
