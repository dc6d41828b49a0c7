from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import yaml


@dataclass
class SimulationConfig:
    grid_size: int = 50
    cell_size: int = 12
    populations: int = 6
    pixels_per_population: int = 100
    genes_per_pixel: int = 8
    mutation_chance: float = 0.2
    tick_duration_ms: float = 200.0
    seed: int = 42
    config_version: str = "v1"

    @staticmethod
    def from_yaml(path: Path) -> "SimulationConfig":
        data = yaml.safe_load(Path(path).read_text()) or {}
        return load_config(data)


@dataclass
class AppConfig:
    simulation: SimulationConfig = field(default_factory=SimulationConfig)
    broadcast_interval: int = 1
    combat_log_limit: int = 20
    snapshot_queue_limit: int = 32

    @staticmethod
    def from_yaml(path: Path) -> "AppConfig":
        data = yaml.safe_load(Path(path).read_text()) or {}
        return load_app_config(data)


def load_config(raw: dict) -> SimulationConfig:
    # Legacy camelCase keys from the browser build are accepted alongside snake_case.
    aliases = {
        "gridSize": "grid_size",
        "cellSize": "cell_size",
        "pixelsPerPopulation": "pixels_per_population",
        "genesPerPixel": "genes_per_pixel",
        "mutationChance": "mutation_chance",
        "tickDuration": "tick_duration_ms",
    }
    values = {aliases.get(k, k): v for k, v in raw.items()}
    return SimulationConfig(**values)


def load_app_config(raw: dict) -> AppConfig:
    simulation = load_config(raw.get("simulation") or {})
    app_values = {k: v for k, v in raw.items() if k != "simulation"}
    return AppConfig(simulation=simulation, **app_values)
