"""Result type returned by the wizard's sub-state machines."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class OutcomeStatus(Enum):
    ACTIVE = "active"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


@dataclass(frozen=True, slots=True)
class Outcome:
    """What happened to a sub-state machine after one key.

    ``ACTIVE`` outcomes may carry a validation ``error`` explaining why a
    confirmation attempt was refused.  ``CONFIRMED`` outcomes carry the
    produced ``value``.
    """

    status: OutcomeStatus
    value: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def active(cls, error: Optional[str] = None) -> "Outcome":
        return cls(OutcomeStatus.ACTIVE, error=error)

    @classmethod
    def confirmed(cls, value: str) -> "Outcome":
        return cls(OutcomeStatus.CONFIRMED, value=value)

    @classmethod
    def cancelled(cls) -> "Outcome":
        return cls(OutcomeStatus.CANCELLED)

    @property
    def is_active(self) -> bool:
        return self.status is OutcomeStatus.ACTIVE

    @property
    def is_confirmed(self) -> bool:
        return self.status is OutcomeStatus.CONFIRMED

    @property
    def is_cancelled(self) -> bool:
        return self.status is OutcomeStatus.CANCELLED


__all__ = ["OutcomeStatus", "Outcome"]
