"""Growth of a nest of hexagonal cells and the measurements taken of it."""

from __future__ import annotations

import dataclasses
import math
from typing import Optional

from nestgen.cell import DEFAULT_BUILD_STEPS, HEIGHT_SCALE, Cell
from nestgen.geometry import NEIGHBOR_COUNT, adjust_coordinates, opposite_position
from nestgen.wall import Parent, Wall

UNBORN = -1
"""Birth step of a site that has not been initiated."""


class Nest:
    """A nest grown from a petiole cell at (0, 0, 0) and one of its neighbours."""

    def __init__(self, max_height: float, second_step: int) -> None:
        self._cells: list[Cell] = []
        self._cell_at: dict[tuple[int, int, int], int] = {}
        self._walls: list[Wall] = []
        self._eligible_sites: list[Cell] = []
        self._site_minimum_wall: list[float] = []
        self._buildable_sites: list[int] = [0]
        self._nest: list[int] = []
        self._nest_position: dict[int, int] = {}
        self._build_order: list[int] = []
        self._compactness_2d = 0.0
        self._compactness_3d = 0.0
        self._eccentricity_2d = 0.0
        self._eccentricity_3d = 0.0
        self._max_height = 0.0
        self._eligible_initiation_count = 0
        self._outer_walls = 0
        self._total_walls = 0

        self._add_cell(Cell(max_height))
        self.initiate_cell(0, 0, max_height)

        # The second cell always starts beside the first, whatever the rules say.
        second_index = self.find_cell(*adjust_coordinates(0, 0, 0, second_step))
        if second_index is None:
            raise ValueError(f"no site at position {second_step} of the first cell")
        self.initiate_cell(second_index, 1, max_height)

    # Read-only views

    @property
    def build_order(self) -> list[int]:
        """Position in the nest of the cell built at each step."""
        return list(self._build_order)

    @property
    def nest_indices(self) -> list[int]:
        """Indices of the initiated cells, in the order they were initiated."""
        return list(self._nest)

    @property
    def site_minimum_wall(self) -> list[float]:
        """Scaled lowest wall of the cell built at each step."""
        return list(self._site_minimum_wall)

    @property
    def buildable_sites_count(self) -> int:
        return len(self._buildable_sites)

    @property
    def eligible_sites_count(self) -> int:
        """Number of eligible sites found by the last :meth:`eligible_sites` call."""
        return len(self._eligible_sites)

    @property
    def eligible_initiation_count(self) -> int:
        return self._eligible_initiation_count

    @property
    def outer_walls(self) -> int:
        return self._outer_walls

    @property
    def total_walls(self) -> int:
        return self._total_walls

    @property
    def compactness_2d(self) -> float:
        return self._compactness_2d

    @property
    def compactness_3d(self) -> float:
        return self._compactness_3d

    @property
    def eccentricity_2d(self) -> float:
        return self._eccentricity_2d

    @property
    def eccentricity_3d(self) -> float:
        return self._eccentricity_3d

    @property
    def max_height(self) -> float:
        """Tallest wall of the nest, in coordinate units."""
        return self._max_height

    # Internal growth

    def _add_cell(self, cell: Cell) -> None:
        self._cells.append(cell)
        self._cell_at.setdefault((cell.x, cell.y, cell.z), len(self._cells) - 1)

    def _add_initiation_sites(self, cell_index: int, threshold: float) -> None:
        home = self._cells[cell_index]
        for position in range(NEIGHBOR_COUNT):
            adjusted = adjust_coordinates(home.x, home.y, home.z, position)
            neighbor_index = self.find_cell(*adjusted)
            adjacent = opposite_position(position)

            if neighbor_index is None:
                walls: list[Optional[Wall]] = []
                for side in range(NEIGHBOR_COUNT):
                    work_index = self.find_cell(*adjust_coordinates(*adjusted, side))
                    wall = None
                    if work_index is not None:
                        shared = self._cells[work_index].walls[opposite_position(side)]
                        if shared is not None:
                            wall = dataclasses.replace(shared)
                    walls.append(wall)
                new_index = len(self._cells)
                self._add_cell(
                    Cell(threshold, walls, new_index, *adjusted, birth=UNBORN, neighbors=0)
                )
                self._buildable_sites.append(new_index)
                continue

            neighbor = self._cells[neighbor_index]
            if not neighbor.wall_exists(adjacent):
                wall = home.walls[position]
                if wall is not None:
                    neighbor.add_wall(wall, adjacent)
            else:
                neighbor.add_neighbors(1)

    def _center_of_mass(self) -> tuple[tuple[int, int, int], float]:
        cells = self.nest_cells()
        center = (
            sum(cell.x for cell in cells),
            sum(cell.y for cell in cells),
            sum(cell.z for cell in cells),
        )
        mean_height = sum(cell.average_height for cell in cells) / len(cells)
        return center, mean_height

    def _calculate_compactness(self) -> None:
        (cx, cy, cz), mean_height = self._center_of_mass()
        size = len(self._nest)
        squared = float(size * size)

        compactness_2d = 0.0
        compactness_3d = 0.0
        for cell in self.nest_cells():
            planar = (
                (cell.x * size - cx) ** 2 / squared
                + (cell.y * size - cy) ** 2 / squared
                + (cell.z * size - cz) ** 2 / squared
            ) / 2.0
            height = (cell.average_height - mean_height) ** 2
            compactness_2d += math.sqrt(planar)
            compactness_3d += math.sqrt(planar + height)
        self._compactness_2d = compactness_2d
        self._compactness_3d = compactness_3d

        # The petiole sits at the origin.
        planar = (cx**2 / squared + cy**2 / squared + cz**2 / squared) / 2.0
        height = (self._cells[0].average_height - mean_height) ** 2
        self._eccentricity_2d = math.sqrt(planar)
        self._eccentricity_3d = math.sqrt(planar + height)

    def _calculate_outer_walls(self) -> None:
        self._outer_walls = sum(NEIGHBOR_COUNT - cell.neighbors for cell in self.nest_cells())

    # Public interface

    def calculate_measurements(self) -> None:
        """Update compactness, eccentricity, outer and total wall counts."""
        self._calculate_compactness()
        self._calculate_outer_walls()
        self._total_walls = len(self._walls)

    def cell_initiated(self, cell_index: int) -> bool:
        """Return whether the cell at ``cell_index`` has been initiated."""
        return self._cells[cell_index].birth != UNBORN

    def find_cell(self, x: int, y: int, z: int) -> Optional[int]:
        """Return the index of the site at (x, y, z), or None if there is none."""
        return self._cell_at.get((x, y, z))

    def all_buildable_sites(self) -> list[Cell]:
        """Return every site that may still be built on."""
        return [self._cells[index] for index in self._buildable_sites]

    def eligible_sites(self) -> list[Cell]:
        """Return the buildable sites that the building rules may choose from."""
        eligible: list[Cell] = []
        initiation_count = 0

        for site_index in self._buildable_sites:
            site = self._cells[site_index]
            if site.birth == UNBORN:
                count = sum(
                    1 for wall in site.walls if wall is not None and wall.height > 0
                )
                initiation_count += count
            else:
                count = 0
                for position in range(NEIGHBOR_COUNT):
                    neighbor_index = self.find_cell(
                        *adjust_coordinates(site.x, site.y, site.z, position)
                    )
                    if (
                        neighbor_index is not None
                        and self._cells[neighbor_index].min_height >= site.min_height
                    ):
                        count += 1
            if count > 1:
                eligible.append(site)

        self._eligible_initiation_count = initiation_count
        self._eligible_sites = eligible
        return list(eligible)

    def nest_cells(self) -> list[Cell]:
        """Return the initiated cells in the order they were initiated."""
        return [self._cells[index] for index in self._nest]

    def initiate_cell(self, cell_index: int, step: int, threshold: float) -> None:
        """Close the site at ``cell_index`` with walls and give it its first load."""
        cell = self._cells[cell_index]
        neighbors = NEIGHBOR_COUNT

        for position in range(NEIGHBOR_COUNT):
            if cell.wall_exists(position):
                continue
            other = adjust_coordinates(cell.x, cell.y, cell.z, position)
            wall = Wall(
                Parent(cell.x, cell.y, cell.z, position),
                Parent(*other, opposite_position(position)),
                step,
            )
            self._walls.append(wall)
            neighbors -= 1
            cell.add_wall(wall, position)

        cell.add_neighbors(neighbors)
        cell.birth = step
        self._nest_position.setdefault(cell_index, len(self._nest))
        self._nest.append(cell_index)

        self.lengthen(cell_index, DEFAULT_BUILD_STEPS)
        self._add_initiation_sites(cell_index, threshold)

    def lengthen(self, cell_index: int, material: int = DEFAULT_BUILD_STEPS) -> None:
        """Add ``material`` units to the cell at ``cell_index``."""
        self._build_order.append(self._nest_position.get(cell_index, len(self._nest)))

        cell = self._cells[cell_index]
        buildable = cell.build(material)
        self._site_minimum_wall.append(cell.min_height_scaled)

        if not buildable:
            self._buildable_sites = [
                index for index in self._buildable_sites if index != cell_index
            ]

        self._max_height = max(self._max_height, cell.max_height / HEIGHT_SCALE)