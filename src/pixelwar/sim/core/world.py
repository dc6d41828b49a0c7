from __future__ import annotations

import logging
from time import perf_counter
from typing import Any, Callable, Dict, List

from .agent import Pixel
from .config import SimulationConfig
from .rng import DeterministicRng
from .state import SimulationState
from ..systems import metrics as metrics_system, seeding, tick as tick_system
from ..types.events import CombatEvent
from ..types.metrics import TickMetrics
from ..types.snapshot import Snapshot, SnapshotMetadata, SnapshotWorld

logger = logging.getLogger(__name__)

EMPTY_CELL = "empty"

CombatListener = Callable[[CombatEvent], None]


class World:
    def __init__(self, config: SimulationConfig, rng: DeterministicRng | None = None):
        self._config = config
        self._rng = rng if rng is not None else DeterministicRng(config.seed)
        self._state = SimulationState(config.grid_size)
        self._listeners: List[CombatListener] = []
        self._metrics: TickMetrics | None = None
        self._bootstrap_population()

    @property
    def config(self) -> SimulationConfig:
        return self._config

    @property
    def state(self) -> SimulationState:
        return self._state

    @property
    def pixels(self) -> List[Pixel]:
        return self._state.registry.snapshot()

    @property
    def metrics(self) -> TickMetrics | None:
        return self._metrics

    def add_combat_listener(self, listener: CombatListener) -> None:
        self._listeners.append(listener)

    def remove_combat_listener(self, listener: CombatListener) -> None:
        self._listeners.remove(listener)

    def reset(self) -> None:
        self._state.reset()
        self._rng.reset()
        self._metrics = None
        self._bootstrap_population()

    def step(self, tick: int) -> TickMetrics:
        start = perf_counter()
        state = self._state
        first_new_id = state.next_id
        tick_system.step_simulation(state, self._rng, self._config.mutation_chance)
        births = state.next_id - first_new_id
        events = state.drain_events()
        elapsed_ms = (perf_counter() - start) * 1000.0

        for event in events:
            logger.debug("tick %d: %s kill %s", tick, event.winner_code, event.loser_code)
            for listener in self._listeners:
                listener(event)

        metrics = metrics_system.create_metrics(tick, state.registry, births, events, elapsed_ms)
        self._metrics = metrics
        return metrics

    def inspect(self, x: int, y: int) -> str:
        pixel = self._state.pixel_at(x, y)
        if pixel is None:
            return EMPTY_CELL
        return pixel.gene_code

    def snapshot(self, tick: int) -> Snapshot:
        metrics = self._metrics if self._metrics is not None else self._snapshot_metrics_from_state(tick)
        metadata = SnapshotMetadata(
            tick_duration_ms=self._config.tick_duration_ms,
            seed=self._config.seed,
            config_version=self._config.config_version,
        )
        return Snapshot(
            tick=tick,
            metrics=metrics,
            pixels=[self._pixel_snapshot(pixel) for pixel in self._state.registry],
            world=SnapshotWorld(size=self._config.grid_size, cell_size=self._config.cell_size),
            metadata=metadata,
        )

    def _bootstrap_population(self) -> None:
        placed = seeding.initialise_populations(self._state, self._config, self._rng)
        logger.info(
            "seeded %d pixels across %d populations on a %dx%d grid",
            placed,
            self._config.populations,
            self._config.grid_size,
            self._config.grid_size,
        )

    def _snapshot_metrics_from_state(self, tick: int) -> TickMetrics:
        return metrics_system.create_metrics(tick, self._state.registry, 0, (), 0.0)

    @staticmethod
    def _pixel_snapshot(pixel: Pixel) -> Dict[str, Any]:
        color = pixel.color
        return {
            "id": pixel.id,
            "x": pixel.x,
            "y": pixel.y,
            "color": f"rgb({color.r}, {color.g}, {color.b})",
            "gene_code": pixel.gene_code,
            "genes": pixel.genes.as_dict(),
            "population": pixel.population_id,
            "hp": pixel.hp,
            "max_hp": pixel.max_hp,
        }
