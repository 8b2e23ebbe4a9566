"""Interactive terminal QR code generator."""
from __future__ import annotations

from .config import AppConfig, OutputFormat, QRConfig, StyleConfig
from .errors import GenerationError, QRGenError, UpdateError, ValidationError
from .history import HistoryEntry, HistoryStore
from .qr import QRCodeManager
from .state import Step, WizardState
from .wizard import Wizard

__all__ = [
    "AppConfig",
    "StyleConfig",
    "OutputFormat",
    "QRConfig",
    "QRGenError",
    "ValidationError",
    "GenerationError",
    "UpdateError",
    "HistoryEntry",
    "HistoryStore",
    "QRCodeManager",
    "Step",
    "WizardState",
    "Wizard",
]

__version__ = "1.1.0"
