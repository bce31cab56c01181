from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Tuple

import numpy as np


BOX = 4
ROTATIONS = 4

RGB = Tuple[int, int, int]


class PieceType(IntEnum):
    I = 1
    O = 2
    T = 3
    S = 4
    Z = 5
    J = 6
    L = 7


Shape = np.ndarray


BASE_SHAPES = {
    PieceType.I: [[0, 0, 0, 0], [1, 1, 1, 1], [0, 0, 0, 0], [0, 0, 0, 0]],
    PieceType.O: [[1, 1], [1, 1]],
    PieceType.T: [[0, 1, 0], [1, 1, 1], [0, 0, 0]],
    PieceType.S: [[0, 1, 1], [1, 1, 0], [0, 0, 0]],
    PieceType.Z: [[1, 1, 0], [0, 1, 1], [0, 0, 0]],
    PieceType.J: [[1, 0, 0], [1, 1, 1], [0, 0, 0]],
    PieceType.L: [[0, 0, 1], [1, 1, 1], [0, 0, 0]],
}

PALETTE: Dict[int, RGB] = {
    0: (20, 20, 26),
    PieceType.I: (0, 240, 240),
    PieceType.O: (240, 240, 0),
    PieceType.T: (160, 0, 240),
    PieceType.S: (0, 240, 0),
    PieceType.Z: (240, 0, 0),
    PieceType.J: (0, 0, 240),
    PieceType.L: (240, 160, 0),
}


@dataclass(frozen=True)
class PieceDefinition:
    kind: PieceType
    rotations: Tuple[Shape, Shape, Shape, Shape]
    color: int
    rgb: RGB


def _rot90(shape: Shape, k: int) -> Shape:
    return np.rot90(shape, k % 4, axes=(1, 0))  # clockwise when k>0


def _rotation_states(base: list) -> Tuple[Shape, ...]:
    # Rotate inside the shape's own box, then pad to the 4x4 grid at the top-left
    box = np.array(base, dtype=bool)
    n = box.shape[0]
    states = []
    for k in range(ROTATIONS):
        grid = np.zeros((BOX, BOX), dtype=bool)
        grid[:n, :n] = _rot90(box, k)
        grid.setflags(write=False)
        states.append(grid)
    return tuple(states)


CATALOG: Dict[PieceType, PieceDefinition] = {
    kind: PieceDefinition(
        kind=kind,
        rotations=_rotation_states(base),  # type: ignore[arg-type]
        color=int(kind),
        rgb=PALETTE[kind],
    )
    for kind, base in BASE_SHAPES.items()
}


def _lookup(kind: int) -> PieceDefinition:
    try:
        return CATALOG[PieceType(kind)]
    except ValueError:
        raise ValueError(f"unknown piece kind: {kind!r}") from None


def shape_for(kind: int, rotation: int) -> Shape:
    """Return the read-only 4x4 occupancy grid for ``kind`` at ``rotation``.

    Raises ValueError for an unknown kind or a rotation outside 0..3.
    """
    definition = _lookup(kind)
    if not 0 <= rotation < ROTATIONS:
        raise ValueError(f"rotation must be in 0..3, got {rotation!r}")
    return definition.rotations[rotation]


def color_for(kind: int) -> int:
    return _lookup(kind).color


def rgb_for(value: int) -> RGB:
    return PALETTE.get(int(value), (200, 200, 200))
