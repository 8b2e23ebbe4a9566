"""Exception types raised by qrgen."""
from __future__ import annotations


class QRGenError(Exception):
    """Base class for all qrgen errors."""


class ValidationError(QRGenError, ValueError):
    """User supplied input that cannot be accepted.

    Raised for empty or out-of-range fields, malformed colors and template
    forms missing their required field.  The wizard reports these inline on
    the current step and does not advance.
    """


class GenerationError(QRGenError, RuntimeError):
    """Writing the QR code image failed."""


class NetworkError(QRGenError, RuntimeError):
    """An HTTP request failed, timed out or returned an unexpected status."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class UpdateError(QRGenError, RuntimeError):
    """Checking for or installing an update failed."""


__all__ = [
    "QRGenError",
    "ValidationError",
    "GenerationError",
    "NetworkError",
    "UpdateError",
]
