from __future__ import annotations

from typing import Tuple

# Compass moves: E, W, S, N, then the four diagonals.
DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (1, 0),
    (-1, 0),
    (0, 1),
    (0, -1),
    (1, 1),
    (1, -1),
    (-1, 1),
    (-1, -1),
)


def _build_offspring_offsets(reach: int) -> Tuple[Tuple[int, int], ...]:
    return tuple(
        (dx, dy)
        for dy in range(-reach, reach + 1)
        for dx in range(-reach, reach + 1)
        if 0 < abs(dx) + abs(dy) <= reach
    )


# Every cell within Manhattan distance 2 of the parent, parent excluded (12 cells).
OFFSPRING_OFFSETS = _build_offspring_offsets(2)


def _clamp_value(value: int, min_value: int, max_value: int) -> int:
    return max(min_value, min(max_value, value))


def _round_half_up(value: float) -> int:
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)
