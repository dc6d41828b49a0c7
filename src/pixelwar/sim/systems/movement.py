from __future__ import annotations

from ..core.agent import Pixel
from ..core.rng import DeterministicRng
from ..core.state import SimulationState
from ..utils.gridmath import DIRECTIONS, _clamp_value
from .combat import resolve_combat


def move_pixel(
    state: SimulationState, pixel: Pixel, rng: DeterministicRng, mutation_chance: float
) -> None:
    """Run one pixel's turn: up to ``max(1, speed)`` single-cell moves.

    The turn ends early after any combat, whether or not the pixel won.
    """

    limit = state.size - 1
    grid = state.grid
    for _ in range(max(1, pixel.genes.speed)):
        dx, dy = DIRECTIONS[rng.next_int(len(DIRECTIONS))]
        nx = _clamp_value(pixel.x + dx, 0, limit)
        ny = _clamp_value(pixel.y + dy, 0, limit)
        if nx == pixel.x and ny == pixel.y:
            continue

        occupant_id = grid.occupant(nx, ny)
        if occupant_id is None:
            state.move(pixel, nx, ny)
            continue
        if occupant_id == pixel.id:
            continue

        opponent = state.get(occupant_id)
        if opponent is None:
            continue
        if opponent.gene_code == pixel.gene_code:
            continue

        winner = resolve_combat(state, pixel, opponent, rng, mutation_chance)
        # The winner's offspring may already have claimed the vacated cell.
        if winner is not None and winner.id == pixel.id and grid.is_free(nx, ny):
            state.move(pixel, nx, ny)
        break
