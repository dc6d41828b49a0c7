from __future__ import annotations

from dataclasses import dataclass


@dataclass(slots=True)
class TickMetrics:
    tick: int
    population: int
    births: int
    deaths: int
    combats: int
    species: int
    populations: int
    tick_duration_ms: float = 0.0
