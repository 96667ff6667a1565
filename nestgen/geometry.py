"""Hexagonal cube-coordinate geometry for the six neighbours of a cell."""

from __future__ import annotations

POSITIONS: tuple[tuple[int, int, int], ...] = (
    (0, 1, 1),
    (1, 1, 0),
    (1, 0, -1),
    (0, -1, -1),
    (-1, -1, 0),
    (-1, 0, 1),
)
"""Coordinate offsets of the six neighbouring sites, indexed by position."""

NEIGHBOR_COUNT = len(POSITIONS)


def _check_position(position: int) -> None:
    if not 0 <= position < NEIGHBOR_COUNT:
        raise ValueError(f"position must be in 0..{NEIGHBOR_COUNT - 1}, got {position}")


def adjust_coordinates(x: int, y: int, z: int, position: int) -> tuple[int, int, int]:
    """Return the coordinates of the neighbour of (x, y, z) at ``position``."""
    _check_position(position)
    dx, dy, dz = POSITIONS[position]
    return x + dx, y + dy, z + dz


def opposite_position(position: int) -> int:
    """Return the position that faces ``position`` across a shared wall."""
    _check_position(position)
    return position - 3 if position > 2 else position + 3