from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CombatEvent:
    winner_code: str
    loser_code: str
    winner_id: int
    loser_id: int
    loser_removed: bool = True
