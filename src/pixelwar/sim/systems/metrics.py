from __future__ import annotations

from typing import Iterable

from ..core.agent import Pixel
from ..types.events import CombatEvent
from ..types.metrics import TickMetrics


def create_metrics(
    tick: int,
    pixels: Iterable[Pixel],
    births: int,
    events: Iterable[CombatEvent],
    duration_ms: float,
) -> TickMetrics:
    population = 0
    codes = set()
    populations = set()
    for pixel in pixels:
        population += 1
        codes.add(pixel.gene_code)
        populations.add(pixel.population_id)
    combats = 0
    deaths = 0
    for event in events:
        combats += 1
        if event.loser_removed:
            deaths += 1
    return TickMetrics(
        tick=tick,
        population=population,
        births=births,
        deaths=deaths,
        combats=combats,
        species=len(codes),
        populations=len(populations),
        tick_duration_ms=duration_ms,
    )
