from __future__ import annotations

from dataclasses import dataclass

from pygame import Color

from .genes import Genes, genes_to_code, genes_to_color


@dataclass(slots=True)
class Pixel:
    id: int
    x: int
    y: int
    genes: Genes
    population_id: int
    max_hp: int
    hp: int
    color: Color
    gene_code: str

    @classmethod
    def spawn(cls, pixel_id: int, x: int, y: int, genes: Genes, population_id: int) -> "Pixel":
        max_hp = max(1, genes.hp)
        return cls(
            id=pixel_id,
            x=x,
            y=y,
            genes=genes,
            population_id=population_id,
            max_hp=max_hp,
            hp=max_hp,
            color=genes_to_color(genes),
            gene_code=genes_to_code(genes),
        )

    @property
    def position(self) -> tuple[int, int]:
        return (self.x, self.y)
