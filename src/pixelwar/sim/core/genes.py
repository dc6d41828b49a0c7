"""Gene vectors and the encodings derived from them.

A pixel's genes are four integer counts indexed by :class:`GeneType`. The
declaration order of :class:`GeneType` is the canonical order: it fixes the
layout of :class:`Genes` and the symbol order of gene codes.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, List, Tuple

from pygame import Color

from ..utils.gridmath import _round_half_up
from .rng import DeterministicRng


class GeneType(IntEnum):
    ATTACK = 0
    DEFENSE = 1
    SPEED = 2
    HP = 3

    @property
    def symbol(self) -> str:
        return _GENE_SYMBOLS[self]

    @property
    def floor(self) -> int:
        """Smallest count this category may be mutated down to."""
        return 1 if self is GeneType.HP else 0


_GENE_SYMBOLS = {
    GeneType.ATTACK: "A",
    GeneType.DEFENSE: "D",
    GeneType.SPEED: "S",
    GeneType.HP: "H",
}

GENE_TYPES: Tuple[GeneType, ...] = tuple(GeneType)


@dataclass(frozen=True, slots=True)
class Genes:
    counts: Tuple[int, int, int, int] = (0, 0, 0, 1)

    @classmethod
    def of(cls, attack: int = 0, defense: int = 0, speed: int = 0, hp: int = 0) -> "Genes":
        return cls((attack, defense, speed, hp))

    def __getitem__(self, gene_type: GeneType) -> int:
        return self.counts[gene_type]

    def __iter__(self) -> Iterator[Tuple[GeneType, int]]:
        return zip(GENE_TYPES, self.counts)

    @property
    def attack(self) -> int:
        return self.counts[GeneType.ATTACK]

    @property
    def defense(self) -> int:
        return self.counts[GeneType.DEFENSE]

    @property
    def speed(self) -> int:
        return self.counts[GeneType.SPEED]

    @property
    def hp(self) -> int:
        return self.counts[GeneType.HP]

    @property
    def total(self) -> int:
        return sum(self.counts)

    def as_dict(self) -> dict[str, int]:
        return {gene_type.name.lower(): count for gene_type, count in self}


def _from_counts(counts: List[int]) -> Genes:
    return Genes((counts[0], counts[1], counts[2], counts[3]))


def random_genes(total: int, rng: DeterministicRng) -> Genes:
    counts = [0] * len(GENE_TYPES)
    for _ in range(total):
        counts[rng.next_int(len(GENE_TYPES))] += 1
    # The forced hp unit is added on top of the budget, so the sum can reach total + 1.
    if counts[GeneType.HP] == 0:
        counts[GeneType.HP] = 1
    return _from_counts(counts)


def genes_to_color(genes: Genes) -> Color:
    total = max(1, genes.total)
    red = _round_half_up(genes.attack / total * 255)
    green = _round_half_up(genes.speed / total * 255)
    blue = _round_half_up(genes.defense / total * 255)
    brightness = 0.4 + min(0.6, genes.hp / total)
    return Color(
        _round_half_up(red * brightness),
        _round_half_up(green * brightness),
        _round_half_up(blue * brightness),
    )


def genes_to_code(genes: Genes) -> str:
    return "".join(gene_type.symbol * count for gene_type, count in genes)


def mutate_genes(genes: Genes, chance: float, rng: DeterministicRng) -> Genes:
    if rng.next_float() >= chance:
        return genes
    sources = [gene_type for gene_type, count in genes if count > gene_type.floor]
    if not sources:
        return genes
    source = sources[rng.next_int(len(sources))]
    targets = [gene_type for gene_type in GENE_TYPES if gene_type is not source]
    target = targets[rng.next_int(len(targets))]
    counts = list(genes.counts)
    counts[source] -= 1
    counts[target] += 1
    return _from_counts(counts)
