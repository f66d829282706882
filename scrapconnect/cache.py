"""On-disk session cache."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from .session import SessionState


class LocalCacheStore:
    """Single JSON record holding the session; durability is advisory."""

    def __init__(self, base_dir: str, record: str = "scrapconnect_user") -> None:
        self.base_dir = Path(base_dir)
        self.path = self.base_dir / f"{record}.json"

    def save(self, state: SessionState) -> None:
        try:
            self.base_dir.mkdir(parents=True, exist_ok=True)
            with self.path.open("w", encoding="utf-8") as f:
                json.dump(state.to_dict(), f, ensure_ascii=False, indent=2)
        except (OSError, TypeError, ValueError) as e:
            print(f"  [WARN] Failed to save to storage: {e}")

    def load(self) -> Optional[SessionState]:
        if not self.path.exists():
            return None
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
            return SessionState.from_dict(data)
        except (OSError, ValueError, TypeError, AttributeError, KeyError) as e:
            print(f"  [WARN] Failed to load from storage: {e}")
            return None

    def clear(self) -> None:
        try:
            self.path.unlink(missing_ok=True)
        except OSError as e:
            print(f"  [WARN] Failed to clear storage: {e}")
