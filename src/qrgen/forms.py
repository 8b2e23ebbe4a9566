"""Multi-field forms for the structured content types.

Each :class:`TemplateForm` subclass knows its own ordered fields, which of
them are toggles rather than text, and how to validate and encode the
collected values.  :class:`TemplateWizard` drives focus and confirmation for
whichever form is active.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import ClassVar, Dict, List, Optional, Tuple, Type

from .errors import ValidationError
from .outcome import Outcome
from .templates import (
    WIFI_ENCRYPTION_TYPES,
    ContentType,
    EmailData,
    SMSData,
    VCardData,
    WiFiData,
)
from .textfield import (
    KEY_DOWN,
    KEY_ENTER,
    KEY_ESC,
    KEY_LEFT,
    KEY_RIGHT,
    KEY_SHIFT_TAB,
    KEY_SPACE,
    KEY_TAB,
    KEY_UP,
    TextField,
)

# (label, placeholder, character limit)
FieldSpec = Tuple[str, str, int]

_TOGGLE_KEYS = (KEY_LEFT, KEY_RIGHT, KEY_SPACE)


class TemplateForm(ABC):
    """Ordered fields of one content type."""

    content_type: ClassVar[ContentType]
    TEXT_FIELDS: ClassVar[Tuple[FieldSpec, ...]] = ()

    def __init__(self) -> None:
        self.inputs: List[TextField] = [
            TextField(placeholder=placeholder, char_limit=limit)
            for _label, placeholder, limit in self.TEXT_FIELDS
        ]

    def field_count(self) -> int:
        return len(self.inputs)

    def labels(self) -> List[str]:
        return [label for label, _placeholder, _limit in self.TEXT_FIELDS]

    def is_toggle_field(self, index: int) -> bool:
        return False

    def text_input(self, index: int) -> Optional[TextField]:
        if 0 <= index < len(self.inputs):
            return self.inputs[index]
        return None

    def focus(self, index: int) -> None:
        for field in self.inputs:
            field.blur()
        field = self.text_input(index)
        if field is not None:
            field.focus()

    def update_field(self, index: int, key: str) -> bool:
        """Apply ``key`` to the field at ``index``; ``True`` if consumed."""

        field = self.text_input(index)
        if field is None:
            return False
        return field.handle_key(key)

    def value(self, index: int) -> str:
        return self.inputs[index].value.strip()

    @abstractmethod
    def try_encode(self) -> str:
        """Return the QR payload or raise :class:`ValidationError`."""


class WiFiForm(TemplateForm):
    content_type = ContentType.WIFI
    TEXT_FIELDS = (
        ("Network Name (SSID):", "MyNetwork", 64),
        ("Password:", "password123", 128),
    )
    ENCRYPTION_FIELD = 2
    HIDDEN_FIELD = 3

    def __init__(self) -> None:
        super().__init__()
        self.encryption_index = 0
        self.hidden = False

    def field_count(self) -> int:
        return 4

    def labels(self) -> List[str]:
        return super().labels() + ["Encryption:", "Hidden Network:"]

    def is_toggle_field(self, index: int) -> bool:
        return index in (self.ENCRYPTION_FIELD, self.HIDDEN_FIELD)

    def update_field(self, index: int, key: str) -> bool:
        if index == self.ENCRYPTION_FIELD:
            last = len(WIFI_ENCRYPTION_TYPES) - 1
            if key == KEY_LEFT:
                self.encryption_index = max(0, self.encryption_index - 1)
            elif key == KEY_RIGHT:
                self.encryption_index = min(last, self.encryption_index + 1)
            elif key == KEY_SPACE:
                self.encryption_index = (self.encryption_index + 1) % len(WIFI_ENCRYPTION_TYPES)
            else:
                return False
            return True
        if index == self.HIDDEN_FIELD:
            if key not in _TOGGLE_KEYS:
                return False
            self.hidden = not self.hidden
            return True
        return super().update_field(index, key)

    def try_encode(self) -> str:
        ssid = self.value(0)
        if not ssid:
            raise ValidationError("network name (SSID) is required")
        encryption, _label = WIFI_ENCRYPTION_TYPES[self.encryption_index]
        return WiFiData(
            ssid=ssid,
            password=self.inputs[1].value,
            encryption=encryption,
            hidden=self.hidden,
        ).encode()


class ContactForm(TemplateForm):
    content_type = ContentType.CONTACT
    TEXT_FIELDS = (
        ("First Name:", "John", 64),
        ("Last Name:", "Doe", 64),
        ("Phone:", "+1234567890", 20),
        ("Email:", "john@example.com", 128),
        ("Organization:", "Acme Inc.", 128),
        ("Job Title:", "Software Engineer", 128),
        ("Website:", "https://example.com", 256),
    )

    def try_encode(self) -> str:
        first_name, last_name, phone, email, organization, title, url = (
            self.value(index) for index in range(len(self.inputs))
        )
        if not first_name and not last_name:
            raise ValidationError("a first or last name is required")
        return VCardData(
            first_name=first_name,
            last_name=last_name,
            phone=phone,
            email=email,
            organization=organization,
            title=title,
            url=url,
        ).encode()


class EmailForm(TemplateForm):
    content_type = ContentType.EMAIL
    TEXT_FIELDS = (
        ("Email Address:", "user@example.com", 128),
        ("Subject:", "Hello!", 256),
        ("Body:", "I wanted to reach out...", 512),
    )

    def try_encode(self) -> str:
        address = self.value(0)
        if not address:
            raise ValidationError("an email address is required")
        return EmailData(address=address, subject=self.value(1), body=self.value(2)).encode()


class SMSForm(TemplateForm):
    content_type = ContentType.SMS
    TEXT_FIELDS = (
        ("Phone Number:", "+1234567890", 20),
        ("Message:", "Hello!", 256),
    )

    def try_encode(self) -> str:
        phone = self.value(0)
        if not phone:
            raise ValidationError("a phone number is required")
        return SMSData(phone=phone, message=self.value(1)).encode()


FORM_TYPES: Dict[ContentType, Type[TemplateForm]] = {
    form.content_type: form for form in (WiFiForm, ContactForm, EmailForm, SMSForm)
}


def make_form(content_type: ContentType) -> TemplateForm:
    try:
        return FORM_TYPES[content_type]()
    except KeyError as exc:
        raise ValueError(f"{content_type.name} has no template form") from exc


class TemplateWizard:
    """Focus handling and confirmation for a :class:`TemplateForm`."""

    def __init__(self, content_type: ContentType):
        self.content_type = content_type
        self.form = make_form(content_type)
        self.focus_index = 0
        self.result = ""
        self.focus_first()

    def focus_first(self) -> None:
        self.focus_index = 0
        self.form.focus(0)

    def _move_focus(self, delta: int) -> None:
        index = self.focus_index + delta
        if 0 <= index < self.form.field_count():
            self.focus_index = index
            self.form.focus(index)

    def tick(self) -> None:
        field = self.form.text_input(self.focus_index)
        if field is not None:
            field.tick()

    def update(self, key: str) -> Outcome:
        if key in (KEY_TAB, KEY_DOWN):
            self._move_focus(1)
        elif key in (KEY_SHIFT_TAB, KEY_UP):
            self._move_focus(-1)
        elif key == KEY_ENTER:
            try:
                self.result = self.form.try_encode()
            except ValidationError as exc:
                return Outcome.active(error=str(exc))
            return Outcome.confirmed(self.result)
        elif key == KEY_ESC:
            return Outcome.cancelled()
        elif self.form.is_toggle_field(self.focus_index):
            if key in _TOGGLE_KEYS:
                self.form.update_field(self.focus_index, key)
        else:
            self.form.update_field(self.focus_index, key)
        return Outcome.active()


__all__ = [
    "TemplateForm",
    "WiFiForm",
    "ContactForm",
    "EmailForm",
    "SMSForm",
    "FORM_TYPES",
    "make_form",
    "TemplateWizard",
]
