from __future__ import annotations

from typing import Optional

from .models import Direction


class InputQueue:
    """Holds at most one pending command; a newer push replaces an unread one."""

    def __init__(self) -> None:
        self._latest: Optional[Direction] = None

    def push(self, command: Direction) -> None:
        self._latest = command

    def take(self) -> Optional[Direction]:
        out = self._latest
        self._latest = None
        return out

    def clear(self) -> None:
        self._latest = None


__all__ = ["InputQueue"]
