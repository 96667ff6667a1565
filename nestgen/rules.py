"""Rules that choose the next build site of a nest from its eligible sites."""

from __future__ import annotations

from itertools import accumulate
from typing import Callable

from nestgen.cell import Cell
from nestgen.nest import Nest

_UINT64 = 1 << 64


def _eligible(nest: Nest) -> list[Cell]:
    cells = nest.eligible_sites()
    if not cells:
        raise ValueError("the nest has no eligible build sites")
    return cells


def _roll(random: int) -> int:
    return random % _UINT64


def _weighted_step(nest: Nest, random: int, weight: Callable[[Cell], int]) -> int:
    cells = _eligible(nest)
    weights = [weight(cell) for cell in cells]
    total = sum(weights)
    if total <= 0:
        raise ValueError(f"eligible site weights must sum to a positive value, got {total}")
    roll = _roll(random) % total
    return next(
        cell.index
        for cell, cumulative in zip(cells, accumulate(weights))
        if cumulative > roll
    )


def _spread(cell: Cell) -> int:
    return cell.max_height - cell.min_height


def random_step(nest: Nest, random: int) -> int:
    """Choose an eligible site uniformly."""
    cells = _eligible(nest)
    return cells[_roll(random) % len(cells)].index


def max_age_step(nest: Nest, random: int, current_step: int) -> int:
    """Favour sites whose walls are oldest."""
    return _weighted_step(nest, random, lambda cell: cell.sum_wall_ages(current_step))


def max_height_step(nest: Nest, random: int) -> int:
    """Favour sites whose walls are tallest."""
    return _weighted_step(nest, random, lambda cell: cell.sum_wall_heights())


def max_wall_step(nest: Nest, random: int) -> int:
    """Favour sites with the most standing walls."""
    return _weighted_step(nest, random, lambda cell: cell.sum_existing_walls())


def height_difference_step(nest: Nest, random: int) -> int:
    """Favour sites with the most uneven walls."""
    return _weighted_step(nest, random, lambda cell: max(_spread(cell), 1))


def hybrid_height_step(nest: Nest, random: int) -> int:
    """Favour tall and uneven sites."""
    return _weighted_step(
        nest, random, lambda cell: max(cell.sum_wall_heights() + _spread(cell), 1)
    )


def hybrid_age_step(nest: Nest, random: int, current_step: int) -> int:
    """Favour old and uneven sites."""
    return _weighted_step(
        nest,
        random,
        lambda cell: max(cell.sum_wall_ages(current_step) + _spread(cell), 1),
    )


def hybrid_wall_step(nest: Nest, random: int) -> int:
    """Favour well-walled and uneven sites."""
    return _weighted_step(
        nest, random, lambda cell: max(cell.sum_existing_walls() + _spread(cell), 1)
    )


def hybrid_age_wall_step(nest: Nest, random: int, current_step: int) -> int:
    """Favour old, well-walled and uneven sites."""
    return _weighted_step(
        nest,
        random,
        lambda cell: max(
            cell.sum_wall_ages(current_step) + cell.sum_existing_walls() + _spread(cell),
            1,
        ),
    )