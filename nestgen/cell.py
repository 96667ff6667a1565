"""A hexagonal cell site bounded by six walls."""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass, field
from typing import Optional

from nestgen.geometry import NEIGHBOR_COUNT
from nestgen.wall import Wall

HEIGHT_SCALE = 40.0
"""Pulp units per coordinate unit of height."""

DEFAULT_BUILD_STEPS = 60


def _empty_walls() -> list[Optional[Wall]]:
    return [None] * NEIGHBOR_COUNT


@dataclass
class Cell:
    """A cell site; ``birth`` is -1 while the site has not been initiated."""

    threshold_height: float
    walls: list[Optional[Wall]] = field(default_factory=_empty_walls)
    index: int = 0
    x: int = 0
    y: int = 0
    z: int = 0
    birth: int = 0
    neighbors: int = 0
    average_height: float = field(default=0.0, init=False)
    max_height: int = field(default=0, init=False)
    min_height: int = field(default=0, init=False)
    cartesian_x: float = field(init=False)
    cartesian_y: float = field(init=False)

    def __post_init__(self) -> None:
        self.walls = list(self.walls)
        if len(self.walls) != NEIGHBOR_COUNT:
            raise ValueError(
                f"a cell needs {NEIGHBOR_COUNT} wall slots, got {len(self.walls)}"
            )
        self.cartesian_x = (self.x + self.y) / 2.0
        self.cartesian_y = self.z / 2.0 * math.sqrt(3)

    @property
    def min_height_scaled(self) -> float:
        """Lowest wall height in coordinate units."""
        return self.min_height / HEIGHT_SCALE

    def _complete_walls(self) -> list[Wall]:
        if any(wall is None for wall in self.walls):
            raise ValueError("cannot build a cell with missing walls")
        return self.walls  # type: ignore[return-value]

    def _calculate_height(self) -> None:
        heights = [wall.height for wall in self._complete_walls()]
        self.min_height = min(heights)
        self.max_height = max(max(heights), 0)
        self.average_height = sum(heights) / HEIGHT_SCALE / NEIGHBOR_COUNT

    def _minimum_wall(self) -> Wall:
        return min(self._complete_walls(), key=lambda wall: wall.height)

    def add_neighbors(self, neighbors: int) -> None:
        """Add ``neighbors`` to the count of built neighbouring cells."""
        self.neighbors += neighbors

    def add_wall(self, wall: Wall, position: int) -> None:
        """Store a copy of ``wall`` at ``position``."""
        self.walls[position] = dataclasses.replace(wall)

    def build(self, steps: int = DEFAULT_BUILD_STEPS) -> bool:
        """Add ``steps`` units to the lowest walls; return whether still buildable."""
        for _ in range(steps):
            self._minimum_wall().increment()
        self._calculate_height()
        return self.min_height_scaled < self.threshold_height

    def wall_exists(self, position: int) -> bool:
        """Return whether a wall stands at ``position``."""
        return self.walls[position] is not None

    def _existing_walls(self) -> list[Wall]:
        return [wall for wall in self.walls if wall is not None]

    def sum_existing_walls(self) -> int:
        """Count the walls that stand."""
        return len(self._existing_walls())

    def sum_wall_ages(self, current_step: int) -> int:
        """Sum the ages of the standing walls at ``current_step``."""
        return sum(current_step - wall.birth for wall in self._existing_walls())

    def sum_wall_heights(self) -> int:
        """Sum the heights of the standing walls."""
        return sum(wall.height for wall in self._existing_walls())