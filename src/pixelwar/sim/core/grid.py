from __future__ import annotations

from typing import Iterator, List, Optional, Tuple


class OccupancyGrid:
    """Square board mapping each cell to at most one pixel id."""

    def __init__(self, size: int) -> None:
        self._size = size
        self._cells: List[List[Optional[int]]] = [[None] * size for _ in range(size)]

    @property
    def size(self) -> int:
        return self._size

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self._size and 0 <= y < self._size

    def occupant(self, x: int, y: int) -> Optional[int]:
        return self._cells[y][x]

    def is_free(self, x: int, y: int) -> bool:
        return self._cells[y][x] is None

    def set(self, x: int, y: int, pixel_id: int) -> None:
        self._cells[y][x] = pixel_id

    def clear_cell(self, x: int, y: int) -> None:
        self._cells[y][x] = None

    def clear(self) -> None:
        for row in self._cells:
            for x in range(self._size):
                row[x] = None

    def occupied(self) -> Iterator[Tuple[int, int, int]]:
        for y, row in enumerate(self._cells):
            for x, pixel_id in enumerate(row):
                if pixel_id is not None:
                    yield x, y, pixel_id
