"""Textual front end for the QR code wizard."""
from __future__ import annotations

import logging
from typing import Optional

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.widgets import Static

from .config import AppConfig, StyleConfig
from .textfield import KEY_BACKSPACE, KEY_ESC, KEY_INTERRUPT, KEY_SPACE
from .view import WizardView
from .wizard import Wizard

logger = logging.getLogger(__name__)

# Textual key names that differ from the wizard's key tokens.
KEY_ALIASES = {
    "escape": KEY_ESC,
    "space": KEY_SPACE,
    "ctrl+h": KEY_BACKSPACE,
    "ctrl+i": "tab",
    "ctrl+m": "enter",
}


def translate_key(key: str, character: Optional[str] = None, is_printable: bool = False) -> str:
    """Map a Textual key event onto a wizard key token."""

    if is_printable and character:
        return character
    return KEY_ALIASES.get(key, key)


class WizardScreen(Static, can_focus=True):
    """Single widget that renders the wizard and receives every key."""

    def __init__(self, wizard: Wizard, view: WizardView):
        super().__init__()
        self.wizard = wizard
        self.view = view

    def on_mount(self) -> None:
        self.refresh_view()

    def refresh_view(self) -> None:
        self.update(self.view.render(self.wizard))

    def on_key(self, event: events.Key) -> None:
        event.stop()
        event.prevent_default()
        key = translate_key(event.key, event.character, event.is_printable)
        step = self.wizard.handle_key(key)
        logger.debug("key %r -> %s", key, step.name)
        if self.wizard.quitting:
            self.app.exit(0)
            return
        self.refresh_view()

    def blink(self) -> None:
        self.wizard.tick()
        self.refresh_view()


class QRGenApp(App[int]):
    """Interactive QR code generator."""

    CSS = """
    Screen {
        padding: 1 2;
    }
    """

    BINDINGS = [
        Binding("ctrl+c", "quit", "Quit", priority=True, show=False),
    ]

    def __init__(self, wizard: Optional[Wizard] = None, config: Optional[AppConfig] = None):
        super().__init__()
        self.config = config or (wizard.config if wizard is not None else AppConfig())
        self.wizard = wizard or Wizard(self.config)
        self.wizard_screen = WizardScreen(self.wizard, WizardView(StyleConfig()))

    def compose(self) -> ComposeResult:
        yield self.wizard_screen

    def on_mount(self) -> None:
        self.wizard_screen.focus()
        self.set_interval(self.config.blink_interval_s, self.wizard_screen.blink)

    def action_quit(self) -> None:
        self.wizard.handle_key(KEY_INTERRUPT)
        self.exit(0)


def run(config: Optional[AppConfig] = None) -> int:
    """Run the wizard until the user quits and return the exit code."""

    app = QRGenApp(config=config)
    result = app.run()
    return result if isinstance(result, int) else 0


__all__ = ["KEY_ALIASES", "translate_key", "WizardScreen", "QRGenApp", "run"]
