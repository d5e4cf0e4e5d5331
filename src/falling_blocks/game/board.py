from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Tuple

import numpy as np

from .pieces import COLORS, Color, Piece


Coordinate = Tuple[int, int]


@dataclass(frozen=True)
class Board:
    """Locked cells of the playfield, keyed by (x, y) with y=0 at the top.

    Boards are values: `lock` and `clear_lines` return new boards and never
    touch the receiver. The falling piece is not part of the board.
    """

    width: int = 10
    height: int = 20
    cells: Mapping[Coordinate, Color] = field(default_factory=dict)

    def __post_init__(self) -> None:
        cells = dict(self.cells)
        for x, y in cells:
            if not self.is_inside(x, y):
                raise ValueError(f"cell {(x, y)} is outside the {self.width}x{self.height} board")
        object.__setattr__(self, "cells", MappingProxyType(cells))

    @classmethod
    def empty(cls, width: int = 10, height: int = 20) -> "Board":
        return cls(width=width, height=height)

    def __len__(self) -> int:
        return len(self.cells)

    def __contains__(self, pos: object) -> bool:
        return pos in self.cells

    def __iter__(self) -> Iterator[Coordinate]:
        return iter(self.cells)

    def color_at(self, x: int, y: int) -> Optional[Color]:
        return self.cells.get((x, y))

    def is_inside(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def is_valid(self, piece: Piece) -> bool:
        for x, y in piece.filled_cells():
            # Walls and floor always apply; rows above the board never collide.
            if x < 0 or x >= self.width or y >= self.height:
                return False
            if y >= 0 and (x, y) in self.cells:
                return False
        return True

    def lock(self, piece: Piece) -> "Board":
        cells: Dict[Coordinate, Color] = dict(self.cells)
        color = piece.color
        for x, y in piece.filled_cells():
            # Cells still above the board are dropped so every key stays on the grid.
            if y < 0:
                continue
            cells[(x, y)] = color
        return Board(self.width, self.height, cells)

    def full_rows(self) -> List[int]:
        return [y for y in range(self.height) if all((x, y) in self.cells for x in range(self.width))]

    def clear_lines(self) -> Tuple["Board", int]:
        full = self.full_rows()
        if not full:
            return self, 0
        removed = set(full)
        cells: Dict[Coordinate, Color] = {}
        for (x, y), color in self.cells.items():
            if y in removed:
                continue
            shift = sum(1 for row in full if row > y)
            cells[(x, y + shift)] = color
        return Board(self.width, self.height, cells), len(full)

    def to_array(self) -> np.ndarray:
        """Return an int8 (height, width) array: 0 for empty, palette index + 1 otherwise."""
        grid = np.zeros((self.height, self.width), dtype=np.int8)
        for (x, y), color in self.cells.items():
            grid[y, x] = _palette_index(color) + 1
        return grid


def _palette_index(color: Color) -> int:
    try:
        return COLORS.index(color)
    except ValueError:
        return len(COLORS)
