# nestgen

`nestgen` simulates how a paper-wasp comb grows. Cells sit on a hexagonal
lattice in cube coordinates (`nestgen.geometry`). Each cell
(`nestgen.cell.Cell`) has six walls (`nestgen.wall.Wall`), and neighbouring
cells share those walls. A building step adds a load of 60 pulp units, one
unit at a time, to the lowest wall of a cell. A site stops being buildable
once its lowest wall, scaled by 40 units per coordinate unit, reaches the
height threshold.

A `nestgen.nest.Nest` always starts with a cell at the origin and one of its
six neighbours. After growth, `Nest.calculate_measurements()` updates:

- `compactness_2d`, `compactness_3d`
- `eccentricity_2d`, `eccentricity_3d` (measured from the origin cell)
- `outer_walls`, `total_walls`

`max_height` tracks the tallest wall throughout growth.

## Building rules

At each step a rule picks the next site from `Nest.eligible_sites()`. The
rules are functions in `nestgen.rules`, each called with a nest and a random
integer. They return the index of the chosen cell.

| Function | Weight of a site |
|---|---|
| `random_step` | all sites weighted equally |
| `max_age_step` | sum of the ages of its walls at the current step |
| `max_height_step` | sum of its wall heights |
| `max_wall_step` | number of walls it has |
| `height_difference_step` | tallest minus shortest wall (at least 1) |
| `hybrid_height_step` | wall heights plus height difference (at least 1) |
| `hybrid_age_step` | wall ages plus height difference (at least 1) |
| `hybrid_wall_step` | existing walls plus height difference (at least 1) |
| `hybrid_age_wall_step` | wall ages, existing walls and height difference (at least 1) |

A rule raises `ValueError` when the nest has no eligible sites, or when the
weights do not sum to a positive value.

Random numbers come from `nestgen.prng.Xoroshiro128Plus`, which seeds its
state through `nestgen.prng.SplitMix64`. Either generator takes an optional
integer seed. Without a seed it draws one from the operating system.

## Installing

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Running the experiment

```
nestgen
```

For each pulp load and each rule, the command grows a batch of nests. Each
nest gets a freshly seeded generator. By default it uses every load in
`nestgen.cli.default_loads()` (10 to 490 in steps of 10, then 500 to 5000 in
steps of 100), 100 nests per batch, and all rules except
`hybrid_age_wall_const`. It writes one document per nest to MongoDB through
`nestgen.storage.MongoStore`. Each rule's nests go to the database named by
its `nestgen.cli.Rule` value, such as `random_const` or `maximum_age_const`.
Each load's nests go to the collection named by the load.

Options:

- `--rule NAME`: a rule to run, by database name; repeatable
- `--load N`: a number of building steps, at least 2; repeatable
- `--nests N`: nests per rule and load (default 100)
- `--max-height H`: the height threshold (default 6.0)
- `--seed N`: seed for a reproducible run
- `--uri URI`: MongoDB connection URI (default: the local server)
- `--jsonl PATH`: write JSON lines to a file instead of MongoDB. Each line
  has the keys `database`, `collection` and `document`.

For example:

```
nestgen --rule max_wall_const --load 100 --nests 5 --seed 1 --jsonl nests.jsonl
```

## Using the library

```python
from nestgen.cli import Rule, run_nest
from nestgen.prng import Xoroshiro128Plus
from nestgen.storage import nest_document

nest = run_nest(Rule.MAX_HEIGHT, 200, Xoroshiro128Plus(seed=1), 6.0)
document = nest_document(nest, 1)
print(document["2D Compactness"], document["Nest Height"])
```

`run_nest` accepts a `Rule` or its string value. `nest_document` returns a
plain dictionary, so a nest can be inspected or stored without a database.
`nestgen.storage.random_test_document` and `MongoStore.insert_random_test`
record the bucket counts of a generator uniformity test in the
`randomness_validation` database.

## What it does not do

The package does not draw or plot nests. It only produces measurements and
cell coordinates, for other tools to read.