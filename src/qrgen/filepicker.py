"""Interactive directory browser for choosing the output location.

The picker lists the current directory, lets the user walk into directories
or up to the parent, pick an existing file, or type a new file name inside
the directory being browsed.  Works with POSIX and Windows path conventions.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

from .outcome import Outcome
from .textfield import (
    KEY_BACKSPACE,
    KEY_DELETE,
    KEY_DOWN,
    KEY_ENTER,
    KEY_ESC,
    KEY_TAB,
    KEY_UP,
    TextField,
)

logger = logging.getLogger(__name__)

PARENT_ENTRY = ".."


@dataclass(frozen=True, slots=True)
class FileEntry:
    name: str
    is_dir: bool

    @property
    def is_parent(self) -> bool:
        return self.name == PARENT_ENTRY


def is_root_dir(path: str) -> bool:
    """Return ``True`` for ``/`` or a drive root such as ``C:\\``."""

    return os.path.dirname(path) == path


def list_directory(path: str) -> List[FileEntry]:
    """Return the visible entries of ``path`` in display order.

    The parent pseudo-entry comes first (except at the filesystem root),
    followed by directories and then files, each sorted by name.  Dotfiles
    are skipped.  ``OSError`` propagates when the directory is unreadable.
    """

    dirs: List[FileEntry] = []
    files: List[FileEntry] = []
    with os.scandir(path) as iterator:
        for item in iterator:
            if item.name.startswith("."):
                continue
            try:
                is_dir = item.is_dir()
            except OSError:
                is_dir = False
            (dirs if is_dir else files).append(FileEntry(item.name, is_dir))

    dirs.sort(key=lambda entry: entry.name)
    files.sort(key=lambda entry: entry.name)

    entries: List[FileEntry] = []
    if not is_root_dir(path):
        entries.append(FileEntry(PARENT_ENTRY, True))
    return entries + dirs + files


def _default_start_dir() -> str:
    try:
        return os.getcwd()
    except OSError:
        home = str(Path.home())
        return home or "."


class FilePicker:
    """Directory browser with an inline "new file name" sub-mode."""

    def __init__(
        self,
        start_dir: Optional[str] = None,
        *,
        max_visible: int = 12,
        home: Optional[str] = None,
    ):
        self.dir = os.path.abspath(start_dir or _default_start_dir())
        self.max_visible = max_visible
        self.entries: List[FileEntry] = []
        self.cursor = 0
        self.offset = 0
        self.error: Optional[str] = None
        self.name_input = TextField(placeholder="myqrcode", char_limit=256)
        self.name_mode = False
        self._home = home
        self.refresh()

    def home_dir(self) -> str:
        return self._home if self._home is not None else str(Path.home())

    def refresh(self) -> None:
        """Reload the listing of the current directory."""

        try:
            self.entries = list_directory(self.dir)
        except OSError as exc:
            logger.debug("Cannot list %s: %s", self.dir, exc)
            self.entries = []
            self.error = exc.strerror or str(exc)
        else:
            self.error = None
        self.cursor = 0
        self.offset = 0

    def navigate_to(self, path: str) -> None:
        self.dir = os.path.abspath(path)
        self.name_mode = False
        self.refresh()

    def reset(self) -> None:
        """Leave the name sub-mode so the picker can be reused."""

        self.name_mode = False
        self.name_input.reset()

    def tick(self) -> None:
        if self.name_mode:
            self.name_input.tick()

    def update(self, key: str) -> Outcome:
        if self.name_mode:
            return self._update_name_mode(key)
        return self._update_browse_mode(key)

    def _update_browse_mode(self, key: str) -> Outcome:
        if key in (KEY_UP, "k"):
            self.move_cursor(-1)
        elif key in (KEY_DOWN, "j"):
            self.move_cursor(1)
        elif key == KEY_ENTER:
            return self._open_selected()
        elif key == "n":
            self.name_mode = True
            self.name_input.set_value("")
            self.name_input.focus()
        elif key == "~":
            self.navigate_to(self.home_dir())
        elif key in (KEY_BACKSPACE, KEY_DELETE):
            parent = os.path.dirname(self.dir)
            if parent != self.dir:
                self.navigate_to(parent)
        elif key in (KEY_ESC, KEY_TAB):
            return Outcome.cancelled()
        return Outcome.active()

    def _open_selected(self) -> Outcome:
        if not self.entries:
            return Outcome.active()

        entry = self.entries[self.cursor]
        if entry.is_parent:
            self.navigate_to(os.path.dirname(self.dir))
        elif entry.is_dir:
            self.navigate_to(os.path.join(self.dir, entry.name))
        else:
            return Outcome.confirmed(os.path.join(self.dir, entry.name))
        return Outcome.active()

    def _update_name_mode(self, key: str) -> Outcome:
        if key == KEY_ENTER:
            name = self.name_input.value.strip()
            if not name:
                return Outcome.active()
            return Outcome.confirmed(os.path.join(self.dir, name))
        if key == KEY_ESC:
            self.name_mode = False
            self.name_input.blur()
            return Outcome.active()
        if key == KEY_TAB:
            return Outcome.cancelled()

        self.name_input.handle_key(key)
        return Outcome.active()

    def move_cursor(self, delta: int) -> None:
        """Move the cursor within bounds and scroll to keep it visible."""

        if not self.entries:
            return
        self.cursor = max(0, min(len(self.entries) - 1, self.cursor + delta))
        if self.cursor < self.offset:
            self.offset = self.cursor
        elif self.cursor >= self.offset + self.max_visible:
            self.offset = self.cursor - self.max_visible + 1

    def visible_range(self) -> Tuple[int, int]:
        return self.offset, min(self.offset + self.max_visible, len(self.entries))

    def display_dir(self) -> str:
        """Return the current directory with the home prefix shown as ``~``."""

        try:
            relative = os.path.relpath(self.dir, self.home_dir())
        except ValueError:
            return self.dir
        if relative == ".":
            return "~"
        if relative == ".." or relative.startswith(".." + os.sep):
            return self.dir
        return "~" + os.sep + relative


__all__ = ["PARENT_ENTRY", "FileEntry", "is_root_dir", "list_directory", "FilePicker"]
