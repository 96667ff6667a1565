"""Documents describing grown nests and their storage in MongoDB."""

from __future__ import annotations

from typing import Any, Iterable, Optional

from pymongo import MongoClient

from nestgen.cell import Cell
from nestgen.nest import Nest

RANDOM_TEST_DATABASE = "randomness_validation"
RANDOM_TEST_COLLECTION = "tests"


def _cell_document(cell: Cell) -> dict[str, Any]:
    return {
        "X": cell.x,
        "Y": cell.y,
        "Z": cell.z,
        "Cartesian X": cell.cartesian_x,
        "Cartesian Y": cell.cartesian_y,
        "Height": cell.min_height_scaled,
        "Birth": cell.birth,
    }


def nest_document(nest: Nest, nest_number: int) -> dict[str, Any]:
    """Return the stored form of ``nest``, identified by ``nest_number``."""
    return {
        "Nest ID": nest_number,
        "Total Eligible Sites": nest.eligible_sites_count,
        "Eligible Initiation Sites": nest.eligible_initiation_count,
        "Nest Height": nest.max_height,
        "Total Walls": nest.total_walls,
        "Outer Walls": nest.outer_walls,
        "2D Compactness": nest.compactness_2d,
        "3D Compactness": nest.compactness_3d,
        "2D Eccentricity": nest.eccentricity_2d,
        "3D Eccenctricity": nest.eccentricity_3d,
        "Cells": [_cell_document(cell) for cell in nest.nest_cells()],
        "Build order": nest.build_order,
        "Build height": nest.site_minimum_wall,
    }


def random_test_document(counts: Iterable[int], test_id: int) -> dict[str, Any]:
    """Return the stored form of one generator uniformity test."""
    return {"Test ID": test_id, "Percentages": list(counts)}


class MongoStore:
    """Writes nest and generator-test documents to a MongoDB server."""

    def __init__(self, uri: Optional[str] = None, client: Any = None) -> None:
        self._client = client if client is not None else MongoClient(uri)

    def insert_nest(
        self, nest: Nest, nest_number: int, database: str, collection: str
    ) -> dict[str, Any]:
        """Store ``nest`` in ``database``.``collection`` and return the document."""
        document = nest_document(nest, nest_number)
        self._client[database][collection].insert_one(document)
        return document

    def insert_random_test(self, counts: Iterable[int], test_id: int) -> dict[str, Any]:
        """Store the bucket counts of a generator test and return the document."""
        document = random_test_document(counts, test_id)
        self._client[RANDOM_TEST_DATABASE][RANDOM_TEST_COLLECTION].insert_one(document)
        return document