from __future__ import annotations

from conftest import assert_consistent, make_pixel
from pixelwar.sim.core.genes import Genes, random_genes
from pixelwar.sim.core.rng import DeterministicRng
from pixelwar.sim.core.state import SimulationState
from pixelwar.sim.systems.combat import damage, resolve_combat, turn_order


def test_simple_kill(state: SimulationState):
    rng = DeterministicRng(1)
    a = make_pixel(state, 5, 5, Genes.of(attack=5, defense=0, speed=3, hp=3))
    b = make_pixel(state, 6, 5, Genes.of(attack=1, defense=0, speed=1, hp=1))

    winner = resolve_combat(state, a, b, rng, mutation_chance=0.0)

    assert winner is a
    assert b.hp == -4
    assert not state.is_alive(b.id)
    assert state.grid.occupant(6, 5) != b.id
    assert a.hp == a.max_hp == 3
    assert len(state.events) == 1
    event = state.events[0]
    assert (event.winner_code, event.loser_code) == ("AAAAASSSHHH", "ASH")
    assert (event.winner_id, event.loser_id) == (a.id, b.id)
    assert event.loser_removed
    assert_consistent(state)


def test_winner_spawns_offspring(state: SimulationState):
    rng = DeterministicRng(2)
    a = make_pixel(state, 5, 5, Genes.of(attack=5, speed=3, hp=3), population_id=4)
    b = make_pixel(state, 6, 5, Genes.of(attack=1, speed=1, hp=1), population_id=1)

    resolve_combat(state, a, b, rng, mutation_chance=0.0)

    children = [pixel for pixel in state.registry if pixel.id not in (a.id, b.id)]
    assert len(children) == 1
    child = children[0]
    assert child.population_id == 4
    assert child.genes == a.genes
    assert abs(child.x - a.x) + abs(child.y - a.y) <= 2


def test_speed_tie_defers_to_attacker(state: SimulationState):
    rng = DeterministicRng(3)
    a = make_pixel(state, 2, 2, Genes.of(attack=1, speed=1, hp=1))
    b = make_pixel(state, 3, 2, Genes.of(attack=2, speed=1, hp=1))

    assert turn_order(a, b) == (a, b)
    assert resolve_combat(state, a, b, rng, mutation_chance=0.0) is a


def test_speed_tie_favours_whoever_attacks(state: SimulationState):
    rng = DeterministicRng(3)
    a = make_pixel(state, 2, 2, Genes.of(attack=1, speed=1, hp=1))
    b = make_pixel(state, 3, 2, Genes.of(attack=2, speed=1, hp=1))

    assert resolve_combat(state, b, a, rng, mutation_chance=0.0) is b
    assert not state.is_alive(a.id)


def test_faster_defender_strikes_first(state: SimulationState):
    rng = DeterministicRng(4)
    attacker = make_pixel(state, 2, 2, Genes.of(attack=3, speed=1, hp=1))
    defender = make_pixel(state, 3, 2, Genes.of(attack=1, speed=2, hp=1))

    assert turn_order(attacker, defender) == (defender, attacker)
    assert resolve_combat(state, attacker, defender, rng, mutation_chance=0.0) is defender
    assert not state.is_alive(attacker.id)


def test_damage_floor_when_defense_dominates(state: SimulationState):
    weak = make_pixel(state, 2, 2, Genes.of(attack=0, defense=5, hp=3))
    tank = make_pixel(state, 3, 2, Genes.of(attack=0, defense=5, hp=2))
    assert damage(weak, tank) == 1
    assert damage(tank, weak) == 1


def test_duel_of_tanks_trades_single_points_and_heals_winner(state: SimulationState):
    rng = DeterministicRng(5)
    a = make_pixel(state, 2, 2, Genes.of(attack=0, defense=5, hp=3))
    b = make_pixel(state, 3, 2, Genes.of(defense=6, hp=2))

    # a: b 2->1, b: a 3->2, a: b 1->0
    winner = resolve_combat(state, a, b, rng, mutation_chance=0.0)

    assert winner is a
    assert b.hp == 0
    assert a.hp == 3


def test_stale_combatant_yields_no_winner(state: SimulationState):
    rng = DeterministicRng(6)
    a = make_pixel(state, 2, 2, Genes.of(attack=2, hp=2))
    b = make_pixel(state, 3, 2, Genes.of(defense=2, hp=2))
    state.remove(b)

    assert resolve_combat(state, a, b, rng, mutation_chance=0.0) is None
    assert state.events == []
    assert a.hp == 2


def test_combat_always_terminates_with_one_survivor():
    rng = DeterministicRng(7)
    for _ in range(300):
        state = SimulationState(8)
        a = make_pixel(state, 3, 3, random_genes(8, rng))
        b = make_pixel(state, 4, 3, random_genes(8, rng))

        winner = resolve_combat(state, a, b, rng, mutation_chance=0.2)

        assert winner is not None
        assert winner.id in (a.id, b.id)
        loser = b if winner is a else a
        assert state.is_alive(winner.id)
        assert not state.is_alive(loser.id)
        assert winner.hp == winner.max_hp
        assert_consistent(state)
