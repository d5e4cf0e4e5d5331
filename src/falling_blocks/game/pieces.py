from __future__ import annotations

import random
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import List, Optional, Tuple

import numpy as np


Shape = np.ndarray
Color = Tuple[int, int, int]


class TetrominoType(IntEnum):
    I = 0
    J = 1
    L = 2
    O = 3
    S = 4
    T = 5
    Z = 6


def _frozen(rows: List[List[int]]) -> Shape:
    shape = np.array(rows, dtype=np.int8)
    shape.setflags(write=False)
    return shape


BASE_SHAPES: Tuple[Shape, ...] = (
    _frozen([[1, 1, 1, 1]]),
    _frozen([[1, 0, 0], [1, 1, 1]]),
    _frozen([[0, 0, 1], [1, 1, 1]]),
    _frozen([[1, 1], [1, 1]]),
    _frozen([[0, 1, 1], [1, 1, 0]]),
    _frozen([[0, 1, 0], [1, 1, 1]]),
    _frozen([[1, 1, 0], [0, 1, 1]]),
)

COLORS: Tuple[Color, ...] = (
    (163, 218, 212),
    (168, 207, 255),
    (255, 213, 153),
    (255, 243, 193),
    (191, 216, 184),
    (211, 188, 230),
    (242, 182, 182),
)

SHAPE_COUNT = len(BASE_SHAPES)


def shape_matrix(index: int) -> Shape:
    return BASE_SHAPES[index]


def color_for(index: int) -> Color:
    return COLORS[index]


def _rot90(shape: Shape, k: int) -> Shape:
    k = k % 4
    if k == 0:
        return shape
    return np.rot90(shape, k, axes=(1, 0))  # rotate clockwise when k>0


def rotate_cw(shape: Shape) -> Shape:
    return _rot90(shape, 1)


@dataclass(frozen=True)
class Piece:
    x: int
    y: int
    shape_index: int
    color_index: int
    rotation: int = 0  # 0..3

    @classmethod
    def spawn(cls, shape_index: int, grid_width: int, color_index: Optional[int] = None) -> "Piece":
        cols = shape_matrix(shape_index).shape[1]
        if color_index is None:
            color_index = shape_index
        return cls(x=(grid_width - cols) // 2, y=-1, shape_index=shape_index, color_index=color_index)

    @property
    def kind(self) -> TetrominoType:
        return TetrominoType(self.shape_index)

    @property
    def color(self) -> Color:
        return color_for(self.color_index)

    def cells(self) -> Shape:
        return _rot90(shape_matrix(self.shape_index), self.rotation)

    def filled_cells(self) -> List[Tuple[int, int]]:
        s = self.cells()
        h, w = s.shape
        cells: List[Tuple[int, int]] = []
        for dy in range(h):
            for dx in range(w):
                if s[dy, dx]:
                    cells.append((self.x + dx, self.y + dy))
        return cells

    def translate(self, dx: int, dy: int) -> "Piece":
        return replace(self, x=self.x + dx, y=self.y + dy)

    def with_rotation(self, rotation: int) -> "Piece":
        return replace(self, rotation=rotation % 4)


def random_piece(rng: random.Random, grid_width: int) -> Piece:
    return Piece.spawn(rng.randrange(SHAPE_COUNT), grid_width)
