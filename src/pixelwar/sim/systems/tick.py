from __future__ import annotations

from ..core.rng import DeterministicRng
from ..core.state import SimulationState
from .movement import move_pixel


def step_simulation(state: SimulationState, rng: DeterministicRng, mutation_chance: float) -> None:
    order = state.registry.snapshot()
    rng.shuffle(order)
    for pixel in order:
        # Pixels killed earlier in this tick keep their slot in the order but lose their turn.
        if not state.is_alive(pixel.id):
            continue
        move_pixel(state, pixel, rng, mutation_chance)
