from __future__ import annotations

import pytest

from pixelwar.sim.core.config import AppConfig, SimulationConfig, load_config


def test_defaults_match_reference_board():
    config = SimulationConfig()
    assert config.grid_size == 50
    assert config.cell_size == 12
    assert config.populations == 6
    assert config.pixels_per_population == 100
    assert config.genes_per_pixel == 8
    assert config.mutation_chance == pytest.approx(0.2)
    assert config.tick_duration_ms == pytest.approx(200.0)


def test_from_yaml_reads_snake_case(tmp_path):
    path = tmp_path / "sim.yaml"
    path.write_text("grid_size: 24\npopulations: 3\nmutation_chance: 0.5\nseed: 9\n")

    config = SimulationConfig.from_yaml(path)

    assert config.grid_size == 24
    assert config.populations == 3
    assert config.mutation_chance == pytest.approx(0.5)
    assert config.seed == 9
    assert config.pixels_per_population == 100


def test_legacy_camel_case_keys_are_accepted():
    config = load_config({"gridSize": 30, "pixelsPerPopulation": 10, "tickDuration": 50})
    assert config.grid_size == 30
    assert config.pixels_per_population == 10
    assert config.tick_duration_ms == 50


def test_unknown_keys_are_rejected():
    with pytest.raises(TypeError):
        load_config({"movement_radius": 3})


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("")
    assert SimulationConfig.from_yaml(path) == SimulationConfig()


def test_app_config_nests_simulation(tmp_path):
    path = tmp_path / "app.yaml"
    path.write_text("combat_log_limit: 5\nsimulation:\n  grid_size: 16\n")

    config = AppConfig.from_yaml(path)

    assert config.combat_log_limit == 5
    assert config.broadcast_interval == 1
    assert config.simulation.grid_size == 16


def test_bare_simulation_key_gives_default_simulation(tmp_path):
    path = tmp_path / "app.yaml"
    path.write_text("broadcast_interval: 3\nsimulation:\n")

    config = AppConfig.from_yaml(path)

    assert config.broadcast_interval == 3
    assert config.simulation == SimulationConfig()
