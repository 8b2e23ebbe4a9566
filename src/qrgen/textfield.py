"""Single-line text input model used by every free-text field."""
from __future__ import annotations

from dataclasses import dataclass

# Key tokens understood by the wizard.  Printable keys are passed through as
# the character itself.
KEY_ENTER = "enter"
KEY_ESC = "esc"
KEY_TAB = "tab"
KEY_SHIFT_TAB = "shift+tab"
KEY_UP = "up"
KEY_DOWN = "down"
KEY_LEFT = "left"
KEY_RIGHT = "right"
KEY_HOME = "home"
KEY_END = "end"
KEY_BACKSPACE = "backspace"
KEY_DELETE = "delete"
KEY_INTERRUPT = "ctrl+c"
KEY_SPACE = " "

_LINE_START_KEYS = (KEY_HOME, "ctrl+a")
_LINE_END_KEYS = (KEY_END, "ctrl+e")


def is_printable_key(key: str) -> bool:
    return len(key) == 1 and key.isprintable()


@dataclass(slots=True)
class TextField:
    """Editable value with a cursor, focus flag and blinking caret."""

    placeholder: str = ""
    char_limit: int = 0
    value: str = ""
    cursor: int = 0
    focused: bool = False
    cursor_visible: bool = True

    def focus(self) -> None:
        self.focused = True
        self.cursor_visible = True

    def blur(self) -> None:
        self.focused = False

    def set_value(self, value: str) -> None:
        if self.char_limit:
            value = value[: self.char_limit]
        self.value = value
        self.cursor = len(value)

    def reset(self) -> None:
        self.set_value("")
        self.blur()

    def tick(self) -> None:
        """Advance the caret blink; ignored while unfocused."""

        if self.focused:
            self.cursor_visible = not self.cursor_visible

    def handle_key(self, key: str) -> bool:
        """Apply an editing key and return ``True`` if it was consumed."""

        if not self.focused:
            return False

        if is_printable_key(key):
            if self.char_limit and len(self.value) >= self.char_limit:
                return True
            self.value = self.value[: self.cursor] + key + self.value[self.cursor :]
            self.cursor += 1
        elif key == KEY_BACKSPACE:
            if self.cursor > 0:
                self.value = self.value[: self.cursor - 1] + self.value[self.cursor :]
                self.cursor -= 1
        elif key == KEY_DELETE:
            self.value = self.value[: self.cursor] + self.value[self.cursor + 1 :]
        elif key == KEY_LEFT:
            self.cursor = max(0, self.cursor - 1)
        elif key == KEY_RIGHT:
            self.cursor = min(len(self.value), self.cursor + 1)
        elif key in _LINE_START_KEYS:
            self.cursor = 0
        elif key in _LINE_END_KEYS:
            self.cursor = len(self.value)
        elif key == "ctrl+u":
            self.value = self.value[self.cursor :]
            self.cursor = 0
        elif key == "ctrl+k":
            self.value = self.value[: self.cursor]
        else:
            return False

        self.cursor_visible = True
        return True


__all__ = [
    "KEY_ENTER",
    "KEY_ESC",
    "KEY_TAB",
    "KEY_SHIFT_TAB",
    "KEY_UP",
    "KEY_DOWN",
    "KEY_LEFT",
    "KEY_RIGHT",
    "KEY_HOME",
    "KEY_END",
    "KEY_BACKSPACE",
    "KEY_DELETE",
    "KEY_INTERRUPT",
    "KEY_SPACE",
    "is_printable_key",
    "TextField",
]
