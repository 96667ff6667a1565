from collections import defaultdict

import pytest

from nestgen.nest import Nest
from nestgen.storage import (
    RANDOM_TEST_COLLECTION,
    RANDOM_TEST_DATABASE,
    MongoStore,
    nest_document,
    random_test_document,
)


class FakeCollection:
    def __init__(self):
        self.documents = []

    def insert_one(self, document):
        self.documents.append(document)


class FakeClient:
    def __init__(self):
        self.databases = defaultdict(lambda: defaultdict(FakeCollection))

    def __getitem__(self, name):
        return self.databases[name]


@pytest.fixture
def nest():
    grown = Nest(6.0, 0)
    grown.eligible_sites()
    grown.calculate_measurements()
    return grown


def test_nest_document_keys_in_order(nest):
    document = nest_document(nest, 7)
    assert list(document) == [
        "Nest ID",
        "Total Eligible Sites",
        "Eligible Initiation Sites",
        "Nest Height",
        "Total Walls",
        "Outer Walls",
        "2D Compactness",
        "3D Compactness",
        "2D Eccentricity",
        "3D Eccenctricity",
        "Cells",
        "Build order",
        "Build height",
    ]
    assert document["Nest ID"] == 7


def test_nest_document_reflects_nest(nest):
    document = nest_document(nest, 1)
    assert document["Total Walls"] == nest.total_walls
    assert document["Outer Walls"] == nest.outer_walls
    assert document["Nest Height"] == nest.max_height
    assert document["Build order"] == nest.build_order
    assert document["Build height"] == nest.site_minimum_wall
    assert document["Total Eligible Sites"] == nest.eligible_sites_count


def test_nest_document_cells(nest):
    cells = nest_document(nest, 1)["Cells"]
    expected = nest.nest_cells()
    assert len(cells) == len(expected)
    for entry, cell in zip(cells, expected):
        assert (entry["X"], entry["Y"], entry["Z"]) == (cell.x, cell.y, cell.z)
        assert entry["Birth"] == cell.birth
        assert entry["Height"] == cell.min_height_scaled
        assert entry["Cartesian X"] == cell.cartesian_x
    assert (cells[0]["X"], cells[0]["Y"], cells[0]["Z"]) == (0, 0, 0)


def test_random_test_document():
    document = random_test_document(iter([3, 1, 4]), 2)
    assert document == {"Test ID": 2, "Percentages": [3, 1, 4]}


def test_insert_nest_uses_database_and_collection(nest):
    client = FakeClient()
    store = MongoStore(client=client)
    returned = store.insert_nest(nest, 3, "random_const", "10")
    stored = client["random_const"]["10"].documents
    assert stored == [returned]
    assert returned == nest_document(nest, 3)


def test_insert_random_test_goes_to_validation_collection():
    client = FakeClient()
    store = MongoStore(client=client)
    store.insert_random_test([5, 5], 1)
    stored = client[RANDOM_TEST_DATABASE][RANDOM_TEST_COLLECTION].documents
    assert stored == [{"Test ID": 1, "Percentages": [5, 5]}]
    assert RANDOM_TEST_DATABASE == "randomness_validation"
    assert RANDOM_TEST_COLLECTION == "tests"