from __future__ import annotations

from enum import IntEnum
from typing import Dict, Iterable, NamedTuple, Tuple


class Point(NamedTuple):
    x: int
    y: int


class ShapeKind(IntEnum):
    T = 0
    O = 1
    Z = 2
    S = 3
    L = 4
    J = 5
    I = 6

    @property
    def board_value(self) -> int:
        """Grid cell value for this kind (0 is reserved for empty)."""
        return int(self) + 1


Shape = Tuple[Point, ...]

KIND_COUNT = len(ShapeKind)
POINTS_PER_SHAPE = 4
ROTATION_COUNT = 4


# Offsets around the pivot (0, 0); y grows downward, so y=-1 is the row above.
BASE_SHAPES: Dict[ShapeKind, Shape] = {
    ShapeKind.T: (Point(0, 0), Point(-1, 0), Point(0, -1), Point(1, 0)),
    ShapeKind.O: (Point(0, 0), Point(-1, 0), Point(-1, -1), Point(0, -1)),
    ShapeKind.Z: (Point(0, 0), Point(0, -1), Point(-1, -1), Point(1, 0)),
    ShapeKind.S: (Point(0, 0), Point(0, -1), Point(1, -1), Point(-1, 0)),
    ShapeKind.L: (Point(0, 0), Point(1, 0), Point(1, -1), Point(-1, 0)),
    ShapeKind.J: (Point(0, 0), Point(-1, 0), Point(-1, -1), Point(1, 0)),
    ShapeKind.I: (Point(0, 0), Point(-1, 0), Point(-2, 0), Point(1, 0)),
}


def rotate_points(points: Iterable[Point], clockwise: bool = True) -> Shape:
    """Quarter turn of every offset about the pivot."""
    if clockwise:
        return tuple(Point(-p.y, p.x) for p in points)
    return tuple(Point(p.y, -p.x) for p in points)


def _build_table() -> Dict[ShapeKind, Tuple[Shape, ...]]:
    table: Dict[ShapeKind, Tuple[Shape, ...]] = {}
    for kind, base in BASE_SHAPES.items():
        if kind == ShapeKind.O:
            # Square keeps its base layout in all four states.
            table[kind] = (base,) * ROTATION_COUNT
            continue
        states = [base]
        for _ in range(ROTATION_COUNT - 1):
            states.append(rotate_points(states[-1], clockwise=True))
        table[kind] = tuple(states)
    return table


SHAPES: Dict[ShapeKind, Tuple[Shape, ...]] = _build_table()


def shape_for(kind: ShapeKind, rotation: int) -> Shape:
    return SHAPES[ShapeKind(kind)][rotation % ROTATION_COUNT]


def cells_at(shape: Shape, col: int, row: int) -> Shape:
    return tuple(Point(col + p.x, row + p.y) for p in shape)


def spawn_row(kind: ShapeKind) -> int:
    """Pivot row that puts the topmost cell of rotation 0 on row 0."""
    return -min(p.y for p in SHAPES[ShapeKind(kind)][0])
