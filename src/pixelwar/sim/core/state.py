from __future__ import annotations

from typing import List, Optional

from ..types.events import CombatEvent
from .agent import Pixel
from .genes import Genes
from .grid import OccupancyGrid
from .registry import AgentRegistry


class SimulationState:
    """Board and registry for one simulation, passed explicitly to every system.

    A live pixel's id sits in exactly one grid cell, the one at its recorded
    position, and a removed pixel appears in neither structure.
    """

    def __init__(self, grid_size: int) -> None:
        self.grid = OccupancyGrid(grid_size)
        self.registry = AgentRegistry()
        self.events: List[CombatEvent] = []
        self._next_id = 0

    @property
    def size(self) -> int:
        return self.grid.size

    @property
    def next_id(self) -> int:
        return self._next_id

    def allocate_id(self) -> int:
        pixel_id = self._next_id
        self._next_id += 1
        return pixel_id

    def spawn(self, x: int, y: int, genes: Genes, population_id: int) -> Pixel:
        """Create a pixel with a fresh id. The pixel is not placed."""
        return Pixel.spawn(self.allocate_id(), x, y, genes, population_id)

    def place(self, pixel: Pixel) -> bool:
        if not self.grid.is_free(pixel.x, pixel.y):
            return False
        self.grid.set(pixel.x, pixel.y, pixel.id)
        self.registry.insert(pixel)
        return True

    def remove(self, pixel: Pixel) -> None:
        self.grid.clear_cell(pixel.x, pixel.y)
        self.registry.remove(pixel.id)

    def move(self, pixel: Pixel, x: int, y: int) -> None:
        self.grid.clear_cell(pixel.x, pixel.y)
        pixel.x = x
        pixel.y = y
        self.grid.set(x, y, pixel.id)

    def get(self, pixel_id: int) -> Optional[Pixel]:
        return self.registry.get(pixel_id)

    def is_alive(self, pixel_id: int) -> bool:
        return pixel_id in self.registry

    def pixel_at(self, x: int, y: int) -> Optional[Pixel]:
        if not self.grid.in_bounds(x, y):
            return None
        pixel_id = self.grid.occupant(x, y)
        if pixel_id is None:
            return None
        return self.registry.get(pixel_id)

    def drain_events(self) -> List[CombatEvent]:
        events = self.events
        self.events = []
        return events

    def reset(self) -> None:
        self.grid.clear()
        self.registry.clear()
        self.events.clear()
        self._next_id = 0
