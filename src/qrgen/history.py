"""Generation history stored as JSON in the qrgen config directory.

The log keeps the most recent generations (newest first) so that users can
review what they created and re-generate a QR code with the same settings.
"""
from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field, replace
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from .config import AppConfig, config_dir

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now().astimezone()


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """Immutable record of one successful generation."""

    content: str
    format: str
    size: int
    fg_color: str
    bg_color: str
    output_path: str
    id: int = 0
    created_at: datetime = field(default_factory=_now)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["created_at"] = self.created_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "HistoryEntry":
        return cls(
            id=int(data["id"]),
            content=str(data["content"]),
            format=str(data["format"]),
            size=int(data["size"]),
            fg_color=str(data["fg_color"]),
            bg_color=str(data["bg_color"]),
            output_path=str(data["output_path"]),
            created_at=datetime.fromisoformat(str(data["created_at"])),
        )


def _display_content(content: str, limit: int = 50) -> str:
    if len(content) > limit:
        content = content[: limit - 3] + "..."
    return content.replace("\r\n", " ").replace("\n", " ")


def format_entry(entry: HistoryEntry) -> str:
    """Return a one-line, human readable summary of ``entry``."""

    return (
        f"#{entry.id:<3d}  {entry.created_at:%Y-%m-%d %H:%M}  "
        f"{entry.format.upper()}  {entry.size}x{entry.size}  "
        f"{_display_content(entry.content)}  {entry.output_path}"
    )


class HistoryStore:
    """Load, append to and persist the generation history."""

    def __init__(self, path: Optional[Path] = None, config: Optional[AppConfig] = None):
        self._config = config or AppConfig()
        self.path = path or config_dir(self._config.app_name) / self._config.history_file_name
        self._entries: List[HistoryEntry] = self._load()

    def _load(self) -> List[HistoryEntry]:
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return []
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable history file %s: %s", self.path, exc)
            return []

        entries = []
        for item in raw if isinstance(raw, list) else []:
            try:
                entries.append(HistoryEntry.from_dict(item))
            except (KeyError, TypeError, ValueError) as exc:
                logger.debug("Skipping malformed history entry %r: %s", item, exc)
        return entries

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = [entry.to_dict() for entry in self._entries]
        self.path.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    def add(self, entry: HistoryEntry) -> HistoryEntry:
        """Record ``entry`` with the next free ID and return the stored copy."""

        next_id = max((existing.id for existing in self._entries), default=0) + 1
        stored = replace(entry, id=next_id, created_at=_now())
        self._entries.insert(0, stored)
        del self._entries[self._config.history_max_entries :]
        self._save()
        logger.debug("Added history entry #%d", stored.id)
        return stored

    def list(self) -> List[HistoryEntry]:
        """Return all entries, newest first."""

        return list(self._entries)

    def get(self, entry_id: int) -> HistoryEntry:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        raise LookupError(f"entry #{entry_id} not found")

    def clear(self) -> None:
        self._entries = []
        self._save()

    def format_table(self) -> str:
        """Return the history as plain text, one entry per line."""

        if not self._entries:
            return "No QR codes generated yet."
        header = f"{'ID':<4s}  {'Created':<16s}  FMT  Size       Content / Output"
        return "\n".join([header] + [format_entry(entry) for entry in self._entries])

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["HistoryEntry", "HistoryStore", "format_entry"]
