from __future__ import annotations

from typing import Optional

from ..core.agent import Pixel
from ..core.genes import mutate_genes
from ..core.rng import DeterministicRng
from ..core.state import SimulationState
from ..utils.gridmath import OFFSPRING_OFFSETS


def create_offspring(
    state: SimulationState, parent: Pixel, rng: DeterministicRng, mutation_chance: float
) -> Optional[Pixel]:
    """Place a mutated copy of ``parent`` on a random free cell near it.

    Returns the child, or ``None`` when every candidate cell is off the board
    or occupied.
    """

    offsets = list(OFFSPRING_OFFSETS)
    rng.shuffle(offsets)
    grid = state.grid
    for dx, dy in offsets:
        x = parent.x + dx
        y = parent.y + dy
        if not grid.in_bounds(x, y) or not grid.is_free(x, y):
            continue
        genes = mutate_genes(parent.genes, mutation_chance, rng)
        child = state.spawn(x, y, genes, parent.population_id)
        state.place(child)
        return child
    return None
