"""Configuration data structures for qrgen."""
from __future__ import annotations

import os
import re
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from .colors import RGB
from .errors import ValidationError


@dataclass(slots=True)
class AppConfig:
    """Static configuration options used across the application."""

    app_name: str = "qrgen"
    repo_owner: str = "DalyChouikh"
    repo_name: str = "qr-code-generator"
    min_size: int = 64
    max_size: int = 4_096
    default_size: int = 256
    default_output_name: str = "qrcode"
    qr_error_correction: str = "M"
    qr_border: int = 4
    picker_visible_rows: int = 12
    history_max_entries: int = 50
    history_file_name: str = "history.json"
    api_timeout_s: float = 15.0
    upgrade_timeout_s: float = 300.0
    blink_interval_s: float = 0.53
    show_preview: bool = True
    record_history: bool = True

    @property
    def repo_url(self) -> str:
        return f"https://github.com/{self.repo_owner}/{self.repo_name}"

    @property
    def latest_release_url(self) -> str:
        return (
            f"https://api.github.com/repos/{self.repo_owner}/{self.repo_name}"
            "/releases/latest"
        )


@dataclass(slots=True)
class StyleConfig:
    """Simple grouping of terminal styling constants."""

    primary: str = "#A78BFA"
    secondary: str = "#34D399"
    accent: str = "#F87171"
    subtle: str = "#9CA3AF"
    text: str = "#F9FAFB"
    background: str = "#1F2937"
    button_text: str = "#FFFFFF"


class OutputFormat(str, Enum):
    """File format written by the generator."""

    PNG = "png"
    SVG = "svg"

    @property
    def extension(self) -> str:
        return f".{self.value}"


@dataclass(slots=True)
class QRConfig:
    """The draft configuration accumulated by the wizard."""

    content: str = ""
    format: OutputFormat = OutputFormat.PNG
    size: int = 256
    foreground: RGB = (0, 0, 0)
    background: RGB = (255, 255, 255)
    output_path: str = "qrcode.png"

    def validate(self, config: Optional[AppConfig] = None) -> None:
        """Raise :class:`ValidationError` unless the draft can be generated."""

        config = config or AppConfig()
        if not self.content:
            raise ValidationError("content cannot be empty")
        if not config.min_size <= self.size <= config.max_size:
            raise ValidationError(
                f"size must be between {config.min_size} and {config.max_size} pixels"
            )
        if self.format not in (OutputFormat.PNG, OutputFormat.SVG):
            raise ValidationError("format must be 'png' or 'svg'")
        if not self.output_path:
            raise ValidationError("output path cannot be empty")

    def set_output_path(self, path: str) -> None:
        """Store ``path`` with the extension of the selected format."""

        self.output_path = with_format_extension(path, self.format)


def with_format_extension(path: str, fmt: OutputFormat) -> str:
    """Replace or append the extension of ``path`` to match ``fmt``."""

    stem, _ext = os.path.splitext(path)
    return stem + OutputFormat(fmt).extension


def normalize_output_path(
    raw: str,
    fmt: OutputFormat,
    *,
    cwd: Optional[str] = None,
    home: Optional[str] = None,
    default_name: str = "qrcode",
) -> str:
    """Turn user input from the output step into an absolute file path.

    A leading ``~`` expands to the home directory, relative paths resolve
    against ``cwd`` and the extension is forced to the format's extension.
    """

    output = raw.strip() or default_name

    if output.startswith("~"):
        home_dir = home if home is not None else str(Path.home())
        output = os.path.join(home_dir, output[1:].lstrip("/\\"))

    if not os.path.isabs(output):
        output = os.path.join(cwd if cwd is not None else os.getcwd(), output)

    return with_format_extension(os.path.normpath(output), fmt)


_INTEGER = re.compile(r"[+-]?[0-9]+")


def parse_size(text: str, config: Optional[AppConfig] = None) -> int:
    """Parse the size step input; empty input selects the default size."""

    config = config or AppConfig()
    text = text.strip()
    if not text:
        return config.default_size
    if not _INTEGER.fullmatch(text):
        raise ValidationError(
            f"size must be a number between {config.min_size} and {config.max_size}"
        )
    size = int(text)
    if not config.min_size <= size <= config.max_size:
        raise ValidationError(
            f"size must be a number between {config.min_size} and {config.max_size}"
        )
    return size


def config_dir(app_name: str = "qrgen") -> Path:
    """Return the per-user directory holding qrgen state.

    Resolution order:

    1. ``QRGEN_CONFIG_DIR`` environment variable
    2. The platform configuration directory (``%APPDATA%``,
       ``~/Library/Application Support`` or ``$XDG_CONFIG_HOME``/``~/.config``)
    """

    override = os.environ.get("QRGEN_CONFIG_DIR")
    if override:
        return Path(override).expanduser()

    if sys.platform == "win32":
        base = Path(os.environ.get("APPDATA") or Path.home() / "AppData" / "Roaming")
    elif sys.platform == "darwin":
        base = Path.home() / "Library" / "Application Support"
    else:
        xdg = os.environ.get("XDG_CONFIG_HOME")
        base = Path(xdg) if xdg else Path.home() / ".config"
    return base / app_name


__all__ = [
    "AppConfig",
    "StyleConfig",
    "OutputFormat",
    "QRConfig",
    "with_format_extension",
    "normalize_output_path",
    "parse_size",
    "config_dir",
]
