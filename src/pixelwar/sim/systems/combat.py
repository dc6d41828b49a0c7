from __future__ import annotations

from typing import Optional

from ..core.agent import Pixel
from ..core.rng import DeterministicRng
from ..core.state import SimulationState
from ..types.events import CombatEvent
from .reproduction import create_offspring


def turn_order(attacker: Pixel, defender: Pixel) -> tuple[Pixel, Pixel]:
    if defender.genes.speed > attacker.genes.speed:
        return defender, attacker
    return attacker, defender


def damage(active: Pixel, target: Pixel) -> int:
    return max(1, active.genes.attack - target.genes.defense)


def resolve_combat(
    state: SimulationState,
    attacker: Pixel,
    defender: Pixel,
    rng: DeterministicRng,
    mutation_chance: float,
) -> Optional[Pixel]:
    if not (state.is_alive(attacker.id) and state.is_alive(defender.id)):
        return None

    active, passive = turn_order(attacker, defender)
    while True:
        passive.hp -= damage(active, passive)
        if passive.hp <= 0:
            break
        active, passive = passive, active

    winner, loser = active, passive
    removed = loser.hp <= 0
    state.events.append(
        CombatEvent(
            winner_code=winner.gene_code,
            loser_code=loser.gene_code,
            winner_id=winner.id,
            loser_id=loser.id,
            loser_removed=removed,
        )
    )
    if removed:
        state.remove(loser)
    winner.hp = winner.max_hp
    create_offspring(state, winner, rng, mutation_chance)
    return winner
