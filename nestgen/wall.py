"""Walls shared between neighbouring cells and the parents that own them."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Parent:
    """A cell location and the position of a wall on that cell."""

    x: int = 0
    y: int = 0
    z: int = 0
    position: int = 0

    def matches(self, x: int, y: int, z: int, position: int) -> bool:
        return (self.x, self.y, self.z, self.position) == (x, y, z, position)


@dataclass
class Wall:
    """A wall between two parent sites that grows one unit at a time."""

    parent1: Parent
    parent2: Parent
    birth: int
    height: int = field(default=0)

    def find_parent(self, x: int, y: int, z: int, position: int) -> bool:
        """Return whether either parent sits at (x, y, z) facing ``position``."""
        return self.parent1.matches(x, y, z, position) or self.parent2.matches(
            x, y, z, position
        )

    def increment(self) -> None:
        """Grow the wall by one unit."""
        self.height += 1