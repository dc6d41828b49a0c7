import os
import sys
from pathlib import Path

import pytest

os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

ROOT = Path(__file__).resolve().parents[2]
src_root = ROOT / "src"
if str(src_root) not in sys.path:
    sys.path.insert(0, str(src_root))

from pixelwar.sim.core.genes import Genes  # noqa: E402
from pixelwar.sim.core.rng import DeterministicRng  # noqa: E402
from pixelwar.sim.core.state import SimulationState  # noqa: E402


class ScriptedRng(DeterministicRng):
    """Returns queued values first, then falls back to the seeded stream unless strict."""

    def __init__(self, ints=(), floats=(), seed: int = 0, strict: bool = False):
        super().__init__(seed)
        self.ints = list(ints)
        self.floats = list(floats)
        self.strict = strict

    def next_int(self, max_value: int) -> int:
        if self.ints:
            value = self.ints.pop(0)
            assert 0 <= value < max_value
            return value
        if self.strict:
            raise AssertionError(f"unexpected draw next_int({max_value})")
        return super().next_int(max_value)

    def next_float(self) -> float:
        if self.floats:
            return self.floats.pop(0)
        return super().next_float()


def assert_consistent(state: SimulationState) -> None:
    """Every live pixel sits in its own cell and every occupied cell names a live pixel."""
    for pixel in state.registry:
        assert state.grid.occupant(pixel.x, pixel.y) == pixel.id
        assert 0 < pixel.hp <= pixel.max_hp
    occupied = list(state.grid.occupied())
    for x, y, pixel_id in occupied:
        pixel = state.get(pixel_id)
        assert pixel is not None
        assert (pixel.x, pixel.y) == (x, y)
    assert len(occupied) == len(state.registry)


@pytest.fixture
def state() -> SimulationState:
    return SimulationState(10)


def make_pixel(state: SimulationState, x: int, y: int, genes: Genes, population_id: int = 0):
    pixel = state.spawn(x, y, genes, population_id)
    assert state.place(pixel)
    return pixel
