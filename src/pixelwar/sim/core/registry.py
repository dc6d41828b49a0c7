from __future__ import annotations

from typing import Dict, Iterator, List, Optional

from .agent import Pixel


class AgentRegistry:
    """Owns every live pixel, keyed by id."""

    def __init__(self) -> None:
        self._pixels: Dict[int, Pixel] = {}

    def __len__(self) -> int:
        return len(self._pixels)

    def __contains__(self, pixel_id: object) -> bool:
        return pixel_id in self._pixels

    def __iter__(self) -> Iterator[Pixel]:
        return iter(self._pixels.values())

    def insert(self, pixel: Pixel) -> None:
        self._pixels[pixel.id] = pixel

    def get(self, pixel_id: int) -> Optional[Pixel]:
        return self._pixels.get(pixel_id)

    def remove(self, pixel_id: int) -> None:
        del self._pixels[pixel_id]

    def snapshot(self) -> List[Pixel]:
        return list(self._pixels.values())

    def clear(self) -> None:
        self._pixels.clear()
