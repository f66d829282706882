"""Notification adapters."""

from __future__ import annotations

from typing import List

from .models import Notice


class Notifier:
    def send(self, notice: Notice) -> None:
        print(f"[NOTIFY] {notice.kind}: {notice.message}")


class CollectingNotifier(Notifier):
    """Keeps every notice so callers can inspect the sync outcome."""

    def __init__(self, echo: bool = False) -> None:
        self.notices: List[Notice] = []
        self.echo = echo

    def send(self, notice: Notice) -> None:
        self.notices.append(notice)
        if self.echo:
            super().send(notice)

    @property
    def kinds(self) -> List[str]:
        return [n.kind for n in self.notices]

    def clear(self) -> None:
        self.notices = []
