"""Run qrgen with ``python -m qrgen``."""
from __future__ import annotations

from .cli import main

if __name__ == "__main__":  # pragma: no cover - manual launch only
    main()
