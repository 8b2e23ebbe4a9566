"""Step-by-step state machine behind the interactive QR code wizard.

:class:`Wizard` receives one key token at a time (see :mod:`qrgen.textfield`
for the token names), routes it to the handler of the current step and
returns the step the wizard is on afterwards.  The sub-state machines for
the file browser and the template forms are only driven while their step
is active; they report back through :class:`~qrgen.outcome.Outcome` values.
"""
from __future__ import annotations

import logging
import os
from typing import Callable, Optional

from .colors import PREDEFINED_COLORS, RGB, color_names, color_to_hex, parse_hex_color
from .config import AppConfig, normalize_output_path, parse_size
from .errors import GenerationError, QRGenError, ValidationError
from .forms import TemplateWizard
from .history import HistoryEntry, HistoryStore
from .qr import QRCodeManager
from .state import FORMATS, ColorChoice, Step, WizardState, previous_step
from .templates import AVAILABLE_TYPES
from .terminal import render_preview
from .textfield import (
    KEY_DOWN,
    KEY_ENTER,
    KEY_ESC,
    KEY_INTERRUPT,
    KEY_LEFT,
    KEY_RIGHT,
    KEY_SPACE,
    KEY_TAB,
    KEY_UP,
    TextField,
)

logger = logging.getLogger(__name__)

_SELECT_KEYS = (KEY_ENTER, KEY_SPACE)
_PREV_KEYS = (KEY_UP, "k")
_NEXT_KEYS = (KEY_DOWN, "j")


class Wizard:
    """Drive a :class:`WizardState` from key tokens."""

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        *,
        generator: Optional[QRCodeManager] = None,
        history_store_factory: Optional[Callable[[], HistoryStore]] = None,
        preview_renderer: Optional[Callable[[str], str]] = None,
        picker_dir: Optional[str] = None,
        home: Optional[str] = None,
        cwd: Optional[str] = None,
    ):
        self.config = config or AppConfig()
        self.generator = generator or QRCodeManager(self.config)
        self.history_store_factory = history_store_factory or (
            lambda: HistoryStore(config=self.config)
        )
        self.preview_renderer = preview_renderer or (
            lambda content: render_preview(content, self.config)
        )
        self._picker_dir = picker_dir
        self._home = home
        self._cwd = cwd
        self.colors = color_names()
        self.state = self._new_state()

    def _new_state(self) -> WizardState:
        return WizardState.new(self.config, start_dir=self._picker_dir, home=self._home)

    @property
    def step(self) -> Step:
        return self.state.step

    @property
    def quitting(self) -> bool:
        return self.state.quitting

    # ------------------------------------------------------------------
    # Event entry points
    # ------------------------------------------------------------------
    def handle_key(self, key: str) -> Step:
        """Process one key token and return the resulting step."""

        state = self.state
        if key == KEY_INTERRUPT or (key == "q" and state.step is Step.COMPLETE):
            state.quitting = True
            return state.step

        if key == KEY_ESC and self._handles_global_back():
            state.step = previous_step(state.step, state.content_type)
            state.error = None
            self._focus_step()
            return state.step

        handler = self._handlers[state.step]
        next_step = handler(self, key)
        # "r" on the last step swaps in a fresh state
        self.state.step = next_step
        self._sync_focus()
        return next_step

    def tick(self) -> None:
        """Forward a caret blink to whichever text input has focus."""

        field = self.focused_input()
        if field is not None:
            field.tick()
        elif self.state.step is Step.TEMPLATE and self.state.template is not None:
            self.state.template.tick()

    def start_over(self) -> None:
        """Discard everything collected so far and return to the first step."""

        self.state = self._new_state()
        logger.debug("Wizard state reset")

    # ------------------------------------------------------------------
    # Focus management
    # ------------------------------------------------------------------
    def _handles_global_back(self) -> bool:
        state = self.state
        if not Step.CONTENT_TYPE < state.step < Step.COMPLETE:
            return False
        if state.step is Step.FOREGROUND and state.foreground.custom:
            return False
        if state.step is Step.BACKGROUND and state.background.custom:
            return False
        if state.step is Step.OUTPUT and state.browser_active:
            return False
        if state.step is Step.TEMPLATE:
            return False
        return True

    def focused_input(self) -> Optional[TextField]:
        """Return the wizard-owned text input that should hold focus."""

        state = self.state
        step = state.step
        if step is Step.URL:
            return state.url_input
        if step is Step.SIZE:
            return state.size_input
        if step is Step.OUTPUT:
            if state.browser_active:
                return state.picker.name_input if state.picker.name_mode else None
            return state.output_input
        if step is Step.FOREGROUND and state.foreground.custom:
            return state.foreground.input
        if step is Step.BACKGROUND and state.background.custom:
            return state.background.input
        return None

    def _sync_focus(self) -> None:
        target = self.focused_input()
        for field in self.state.text_fields():
            if field is target:
                if not field.focused:
                    field.focus()
            else:
                field.blur()

    def _focus_step(self) -> None:
        if self.state.step is Step.TEMPLATE and self.state.template is not None:
            self.state.template.focus_first()
        self._sync_focus()

    # ------------------------------------------------------------------
    # Step handlers
    # ------------------------------------------------------------------
    def _handle_content_type(self, key: str) -> Step:
        state = self.state
        if key in _PREV_KEYS:
            state.content_type_index = max(0, state.content_type_index - 1)
        elif key in _NEXT_KEYS:
            state.content_type_index = min(len(AVAILABLE_TYPES) - 1, state.content_type_index + 1)
        elif key in _SELECT_KEYS:
            state.error = None
            if state.content_type.uses_template:
                state.template = TemplateWizard(state.content_type)
                return Step.TEMPLATE
            state.template = None
            return Step.URL
        return Step.CONTENT_TYPE

    def _handle_url(self, key: str) -> Step:
        state = self.state
        if key == KEY_ENTER:
            content = state.url_input.value.strip()
            if not content:
                state.error = "please enter a URL or text to encode"
                return Step.URL
            state.draft.content = content
            state.error = None
            return Step.FORMAT
        state.url_input.handle_key(key)
        return Step.URL

    def _handle_template(self, key: str) -> Step:
        state = self.state
        if state.template is None:
            return Step.CONTENT_TYPE

        outcome = state.template.update(key)
        if outcome.is_confirmed:
            state.draft.content = outcome.value or ""
            state.error = None
            return Step.FORMAT
        if outcome.is_cancelled:
            state.error = None
            return previous_step(Step.TEMPLATE, state.content_type)
        if outcome.error is not None:
            state.error = outcome.error
        elif key == KEY_ENTER:
            state.error = None
        return Step.TEMPLATE

    def _handle_format(self, key: str) -> Step:
        state = self.state
        if key in (KEY_LEFT, "h"):
            state.format_index = max(0, state.format_index - 1)
        elif key in (KEY_RIGHT, "l"):
            state.format_index = min(len(FORMATS) - 1, state.format_index + 1)
        elif key in ("1", "2"):
            state.format_index = int(key) - 1
            state.draft.format = FORMATS[state.format_index]
        elif key in _SELECT_KEYS:
            state.draft.format = FORMATS[state.format_index]
            state.error = None
            return Step.FOREGROUND
        return Step.FORMAT

    def _handle_color(self, key: str, choice: ColorChoice, current: Step, following: Step) -> Step:
        state = self.state
        if choice.custom:
            if key == KEY_ENTER:
                raw = choice.input.value.strip()
                if not raw:
                    choice.leave_custom()
                    return current
                try:
                    color = parse_hex_color(raw)
                except ValidationError:
                    state.error = f"invalid hex color: {raw}"
                    return current
                self._store_color(current, color)
                state.error = None
                return following
            if key == KEY_ESC:
                choice.leave_custom()
                return current
            choice.input.handle_key(key)
            return current

        if key in _PREV_KEYS:
            choice.index = max(0, choice.index - 1)
        elif key in _NEXT_KEYS:
            choice.index = min(len(self.colors) - 1, choice.index + 1)
        elif key == "c":
            choice.custom = True
            choice.input.focus()
        elif key in _SELECT_KEYS:
            self._store_color(current, PREDEFINED_COLORS[self.colors[choice.index]])
            state.error = None
            return following
        return current

    def _store_color(self, step: Step, color: RGB) -> None:
        if step is Step.FOREGROUND:
            self.state.draft.foreground = color
        else:
            self.state.draft.background = color

    def _handle_foreground(self, key: str) -> Step:
        return self._handle_color(key, self.state.foreground, Step.FOREGROUND, Step.BACKGROUND)

    def _handle_background(self, key: str) -> Step:
        return self._handle_color(key, self.state.background, Step.BACKGROUND, Step.SIZE)

    def _handle_size(self, key: str) -> Step:
        state = self.state
        if key == KEY_ENTER:
            try:
                state.draft.size = parse_size(state.size_input.value, self.config)
            except ValidationError as exc:
                state.error = str(exc)
                return Step.SIZE
            state.error = None
            return Step.OUTPUT
        state.size_input.handle_key(key)
        return Step.SIZE

    def _handle_output(self, key: str) -> Step:
        state = self.state
        if state.browser_active:
            return self._handle_file_browser(key)

        if key == KEY_TAB:
            state.browser_active = True
            state.picker.refresh()
            return Step.OUTPUT
        if key == KEY_ENTER:
            path = normalize_output_path(
                state.output_input.value,
                state.draft.format,
                cwd=self._cwd,
                home=self._home,
                default_name=self.config.default_output_name,
            )
            state.draft.set_output_path(path)
            state.error = None
            return Step.CONFIRM
        state.output_input.handle_key(key)
        return Step.OUTPUT

    def _handle_file_browser(self, key: str) -> Step:
        state = self.state
        picker = state.picker
        if key == KEY_ESC and not picker.name_mode:
            self._close_browser()
            return Step.OUTPUT

        outcome = picker.update(key)
        if outcome.is_confirmed:
            state.draft.set_output_path(outcome.value or "")
            state.error = None
            self._close_browser()
            return Step.CONFIRM
        if outcome.is_cancelled:
            self._close_browser()
        return Step.OUTPUT

    def _close_browser(self) -> None:
        self.state.browser_active = False
        self.state.picker.reset()

    def _handle_confirm(self, key: str) -> Step:
        state = self.state
        if key in (KEY_ENTER, "y", "Y"):
            return self._generate()
        if key in ("n", "N"):
            state.browser_active = False
            state.error = None
            return Step.CONTENT_TYPE
        return Step.CONFIRM

    def _handle_complete(self, key: str) -> Step:
        if key in (KEY_ENTER, KEY_SPACE):
            self.state.quitting = True
        elif key == "r":
            self.start_over()
            return Step.CONTENT_TYPE
        return Step.COMPLETE

    _handlers = {
        Step.CONTENT_TYPE: _handle_content_type,
        Step.URL: _handle_url,
        Step.TEMPLATE: _handle_template,
        Step.FORMAT: _handle_format,
        Step.FOREGROUND: _handle_foreground,
        Step.BACKGROUND: _handle_background,
        Step.SIZE: _handle_size,
        Step.OUTPUT: _handle_output,
        Step.CONFIRM: _handle_confirm,
        Step.COMPLETE: _handle_complete,
    }

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------
    def _generate(self) -> Step:
        state = self.state
        draft = state.draft
        try:
            path = self.generator.generate(draft)
        except GenerationError as exc:
            logger.debug("Generation failed: %s", exc)
            state.error = str(exc)
            return Step.CONFIRM

        state.error = None
        state.success_path = os.fspath(path)

        if self.config.show_preview:
            try:
                state.preview = self.preview_renderer(draft.content)
            except (QRGenError, OSError, ValueError) as exc:
                logger.debug("Skipping terminal preview: %s", exc)
                state.preview = ""

        if self.config.record_history:
            try:
                self.history_store_factory().add(
                    HistoryEntry(
                        content=draft.content,
                        format=draft.format.value,
                        size=draft.size,
                        fg_color=color_to_hex(draft.foreground),
                        bg_color=color_to_hex(draft.background),
                        output_path=state.success_path,
                    )
                )
            except (QRGenError, OSError, ValueError) as exc:
                logger.debug("Could not record history entry: %s", exc)

        return Step.COMPLETE


__all__ = ["Wizard"]
