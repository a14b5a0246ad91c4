from __future__ import annotations

from typing import Iterable, List, Optional

from .models import ActorKind


class ActorRoster:
    def __init__(self, kinds: Iterable[ActorKind], *, initial_id: Optional[str] = None) -> None:
        self.kinds: List[ActorKind] = sorted(list(kinds), key=lambda kind: kind.order)
        if not self.kinds:
            raise ValueError("roster needs at least one actor kind")
        try:
            self.idx = next(i for i, kind in enumerate(self.kinds) if kind.id == initial_id)
        except StopIteration:
            self.idx = 0

    def current(self) -> ActorKind:
        return self.kinds[self.idx]

    def next_index(self, delta: int) -> Optional[int]:
        target = self.idx + (1 if delta > 0 else -1)
        if 0 <= target < len(self.kinds):
            return target
        return None

    def set_index(self, index: int) -> bool:
        if 0 <= index < len(self.kinds) and index != self.idx:
            self.idx = index
            return True
        return False

    def __len__(self) -> int:
        return len(self.kinds)


__all__ = ["ActorRoster"]
