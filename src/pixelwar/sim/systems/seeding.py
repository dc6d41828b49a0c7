from __future__ import annotations

from ..core.config import SimulationConfig
from ..core.genes import random_genes
from ..core.rng import DeterministicRng
from ..core.state import SimulationState
from ..utils.gridmath import _clamp_value

SPAWN_SPREAD = 2


def initialise_populations(state: SimulationState, config: SimulationConfig, rng: DeterministicRng) -> int:
    """Scatter each population's clones around a random base cell.

    Clones that land on an occupied cell are dropped. Returns the number placed.
    """

    limit = config.grid_size - 1
    span = 2 * SPAWN_SPREAD + 1
    placed = 0
    for population_id in range(config.populations):
        genes = random_genes(config.genes_per_pixel, rng)
        base_x = rng.next_int(config.grid_size)
        base_y = rng.next_int(config.grid_size)
        for _ in range(config.pixels_per_population):
            x = _clamp_value(base_x + rng.next_int(span) - SPAWN_SPREAD, 0, limit)
            y = _clamp_value(base_y + rng.next_int(span) - SPAWN_SPREAD, 0, limit)
            if state.place(state.spawn(x, y, genes, population_id)):
                placed += 1
    return placed
