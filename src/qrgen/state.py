"""Runtime state containers used by the wizard."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Dict, List, Optional

from .config import AppConfig, OutputFormat, QRConfig
from .filepicker import FilePicker
from .forms import TemplateWizard
from .templates import AVAILABLE_TYPES, ContentType, ContentTypeInfo
from .textfield import TextField


class Step(IntEnum):
    CONTENT_TYPE = 0
    URL = 1
    TEMPLATE = 2
    FORMAT = 3
    FOREGROUND = 4
    BACKGROUND = 5
    SIZE = 6
    OUTPUT = 7
    CONFIRM = 8
    COMPLETE = 9


TOTAL_VISIBLE_STEPS = 9

FORMATS: List[OutputFormat] = [OutputFormat.PNG, OutputFormat.SVG]

# Predecessor of every step whose back target does not depend on the
# content type.  FORMAT is resolved through ``BRANCH_PREVIOUS``.
PREVIOUS_STEP: Dict[Step, Step] = {
    Step.CONTENT_TYPE: Step.CONTENT_TYPE,
    Step.URL: Step.CONTENT_TYPE,
    Step.TEMPLATE: Step.CONTENT_TYPE,
    Step.FOREGROUND: Step.FORMAT,
    Step.BACKGROUND: Step.FOREGROUND,
    Step.SIZE: Step.BACKGROUND,
    Step.OUTPUT: Step.SIZE,
    Step.CONFIRM: Step.OUTPUT,
    Step.COMPLETE: Step.COMPLETE,
}

# Keyed by ``ContentType.uses_template``.
BRANCH_PREVIOUS: Dict[bool, Step] = {
    False: Step.URL,
    True: Step.TEMPLATE,
}

DISPLAY_NUMBER: Dict[Step, int] = {
    Step.CONTENT_TYPE: 1,
    Step.URL: 2,
    Step.TEMPLATE: 2,
    Step.FORMAT: 3,
    Step.FOREGROUND: 4,
    Step.BACKGROUND: 5,
    Step.SIZE: 6,
    Step.OUTPUT: 7,
    Step.CONFIRM: 8,
    Step.COMPLETE: 9,
}


def previous_step(step: Step, content_type: ContentType) -> Step:
    """Return the step that ``esc`` leads back to from ``step``."""

    if step is Step.FORMAT:
        return BRANCH_PREVIOUS[content_type.uses_template]
    return PREVIOUS_STEP[step]


def display_number(step: Step) -> int:
    return DISPLAY_NUMBER[step]


@dataclass(slots=True)
class ColorChoice:
    """Palette cursor plus the optional custom hex entry of a color step."""

    input: TextField
    default_index: int = 0
    index: int = 0
    custom: bool = False

    def __post_init__(self) -> None:
        self.index = self.default_index

    def leave_custom(self) -> None:
        self.custom = False
        self.index = self.default_index
        self.input.blur()


def _color_input(placeholder: str) -> TextField:
    return TextField(placeholder=placeholder, char_limit=7)


@dataclass(slots=True)
class WizardState:
    """Everything the wizard knows between two keystrokes."""

    picker: FilePicker
    step: Step = Step.CONTENT_TYPE
    draft: QRConfig = field(default_factory=QRConfig)
    content_type_index: int = 0
    format_index: int = 0
    foreground: ColorChoice = field(default_factory=lambda: ColorChoice(_color_input("#000000")))
    # Starts on "White" so the default pair stays scannable.
    background: ColorChoice = field(
        default_factory=lambda: ColorChoice(_color_input("#FFFFFF"), default_index=1)
    )
    url_input: TextField = field(
        default_factory=lambda: TextField(placeholder="https://example.com", char_limit=2048)
    )
    size_input: TextField = field(
        default_factory=lambda: TextField(placeholder="256", char_limit=4)
    )
    output_input: TextField = field(
        default_factory=lambda: TextField(placeholder="qrcode", char_limit=256)
    )
    browser_active: bool = False
    template: Optional[TemplateWizard] = None
    preview: str = ""
    success_path: str = ""
    error: Optional[str] = None
    quitting: bool = False

    @classmethod
    def new(
        cls,
        config: Optional[AppConfig] = None,
        *,
        start_dir: Optional[str] = None,
        home: Optional[str] = None,
    ) -> "WizardState":
        config = config or AppConfig()
        picker = FilePicker(start_dir, max_visible=config.picker_visible_rows, home=home)
        state = cls(picker=picker)
        state.draft.size = config.default_size
        return state

    @property
    def content_type_info(self) -> ContentTypeInfo:
        return AVAILABLE_TYPES[self.content_type_index]

    @property
    def content_type(self) -> ContentType:
        return self.content_type_info.type

    def text_fields(self) -> List[TextField]:
        """All text inputs owned directly by the wizard."""

        return [
            self.url_input,
            self.size_input,
            self.output_input,
            self.foreground.input,
            self.background.input,
            self.picker.name_input,
        ]


__all__ = [
    "Step",
    "TOTAL_VISIBLE_STEPS",
    "FORMATS",
    "PREVIOUS_STEP",
    "BRANCH_PREVIOUS",
    "DISPLAY_NUMBER",
    "previous_step",
    "display_number",
    "ColorChoice",
    "WizardState",
]
