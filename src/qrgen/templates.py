"""Structured content templates encoded into QR payload strings.

Instead of asking users to hand-format WiFi credentials, contact cards or
``mailto:`` links, the wizard collects the individual fields and these
classes produce the string a phone's scanner expects.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple


class ContentType(Enum):
    URL = "url"
    WIFI = "wifi"
    CONTACT = "contact"
    EMAIL = "email"
    SMS = "sms"
    TEXT = "text"

    @property
    def uses_template(self) -> bool:
        """``True`` when the type is entered through a multi-field form."""

        return self not in (ContentType.URL, ContentType.TEXT)


@dataclass(frozen=True, slots=True)
class ContentTypeInfo:
    type: ContentType
    name: str
    icon: str
    description: str


AVAILABLE_TYPES: Tuple[ContentTypeInfo, ...] = (
    ContentTypeInfo(ContentType.URL, "URL", "🔗", "Website link"),
    ContentTypeInfo(ContentType.WIFI, "WiFi", "📶", "WiFi network credentials"),
    ContentTypeInfo(ContentType.CONTACT, "Contact", "👤", "Contact card (vCard)"),
    ContentTypeInfo(ContentType.EMAIL, "Email", "✉️ ", "Email with subject & body"),
    ContentTypeInfo(ContentType.SMS, "SMS", "💬", "Text message"),
    ContentTypeInfo(ContentType.TEXT, "Text", "📝", "Plain text"),
)
"""Content types in the order the wizard lists them."""


def content_type_info(content_type: ContentType) -> ContentTypeInfo:
    for info in AVAILABLE_TYPES:
        if info.type is content_type:
            return info
    raise KeyError(content_type)


class WiFiEncryption(str, Enum):
    WPA = "WPA"
    WEP = "WEP"
    NONE = "nopass"


WIFI_ENCRYPTION_TYPES: Tuple[Tuple[WiFiEncryption, str], ...] = (
    (WiFiEncryption.WPA, "WPA/WPA2/WPA3"),
    (WiFiEncryption.WEP, "WEP"),
    (WiFiEncryption.NONE, "None (Open)"),
)


def escape_wifi_field(value: str) -> str:
    """Backslash-escape the characters reserved by the ``WIFI:`` syntax."""

    for char in ("\\", ";", ":", '"'):
        value = value.replace(char, "\\" + char)
    return value


_URI_ESCAPES: Tuple[Tuple[str, str], ...] = (
    ("%", "%25"),
    (" ", "%20"),
    ("&", "%26"),
    ("=", "%3D"),
    ("#", "%23"),
    ("\n", "%0A"),
)


def uri_encode(value: str) -> str:
    """Escape ``mailto`` parameters with a small fixed substitution table.

    Only ``% space & = #`` and newlines are rewritten; other reserved
    characters such as ``+`` or ``?`` pass through unchanged.
    """

    for char, replacement in _URI_ESCAPES:
        value = value.replace(char, replacement)
    return value


@dataclass(slots=True)
class WiFiData:
    ssid: str
    password: str = ""
    encryption: WiFiEncryption = WiFiEncryption.WPA
    hidden: bool = False

    def encode(self) -> str:
        """Return ``WIFI:T:<enc>;S:<ssid>;P:<password>;H:true;;``."""

        password = ""
        if self.encryption is not WiFiEncryption.NONE:
            password = f"P:{escape_wifi_field(self.password)};"
        hidden = "H:true;" if self.hidden else ""
        return (
            f"WIFI:T:{self.encryption.value};S:{escape_wifi_field(self.ssid)};"
            f"{password}{hidden};"
        )


@dataclass(slots=True)
class VCardData:
    first_name: str = ""
    last_name: str = ""
    phone: str = ""
    email: str = ""
    organization: str = ""
    title: str = ""
    url: str = ""

    def encode(self) -> str:
        """Return a vCard 3.0 block with CRLF line endings."""

        lines: List[str] = ["BEGIN:VCARD", "VERSION:3.0"]

        full_name = f"{self.first_name} {self.last_name}".strip()
        if full_name:
            lines.append(f"FN:{full_name}")
            lines.append(f"N:{self.last_name};{self.first_name};;;")
        if self.organization:
            lines.append(f"ORG:{self.organization}")
        if self.title:
            lines.append(f"TITLE:{self.title}")
        if self.phone:
            lines.append(f"TEL;TYPE=CELL:{self.phone}")
        if self.email:
            lines.append(f"EMAIL:{self.email}")
        if self.url:
            lines.append(f"URL:{self.url}")
        lines.append("END:VCARD")

        return "".join(f"{line}\r\n" for line in lines)


@dataclass(slots=True)
class EmailData:
    address: str
    subject: str = ""
    body: str = ""

    def encode(self) -> str:
        params = []
        if self.subject:
            params.append("subject=" + uri_encode(self.subject))
        if self.body:
            params.append("body=" + uri_encode(self.body))

        result = "mailto:" + self.address
        if params:
            result += "?" + "&".join(params)
        return result


@dataclass(slots=True)
class SMSData:
    phone: str
    message: str = ""

    def encode(self) -> str:
        if self.message:
            return f"smsto:{self.phone}:{self.message}"
        return f"smsto:{self.phone}"


__all__ = [
    "ContentType",
    "ContentTypeInfo",
    "AVAILABLE_TYPES",
    "content_type_info",
    "WiFiEncryption",
    "WIFI_ENCRYPTION_TYPES",
    "escape_wifi_field",
    "uri_encode",
    "WiFiData",
    "VCardData",
    "EmailData",
    "SMSData",
]
