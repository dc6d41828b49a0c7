from __future__ import annotations

from collections import deque
from typing import Deque, List

from ..sim.types.events import CombatEvent


def format_event(event: CombatEvent) -> str:
    return f"{event.winner_code or '?'} kill {event.loser_code or '?'}"


class CombatLog:
    """Keeps the most recent combat outcomes for display. A limit of 0 keeps nothing."""

    def __init__(self, limit: int = 20) -> None:
        self._entries: Deque[CombatEvent] = deque(maxlen=max(0, limit))

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def limit(self) -> int:
        return self._entries.maxlen or 0

    def record(self, event: CombatEvent) -> None:
        self._entries.append(event)

    def clear(self) -> None:
        self._entries.clear()

    def recent(self) -> List[CombatEvent]:
        return list(reversed(self._entries))

    def lines(self) -> List[str]:
        return [format_event(event) for event in self.recent()]
