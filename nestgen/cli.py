"""Command that grows batches of nests under each building rule and stores them."""

from __future__ import annotations

import argparse
import json
from enum import Enum
from typing import Any, Callable, Optional, Sequence, TextIO

from nestgen import rules
from nestgen.geometry import NEIGHBOR_COUNT
from nestgen.nest import Nest
from nestgen.prng import SplitMix64, Xoroshiro128Plus
from nestgen.storage import MongoStore, nest_document

DEFAULT_MAX_HEIGHT = 6.0
DEFAULT_NESTS = 100
FIRST_RULE_STEP = 2


class Rule(Enum):
    """Building rules; each value is the database its nests are stored in."""

    RANDOM = "random_const"
    MAX_AGE = "maximum_age_const"
    MAX_HEIGHT = "maximum_height_const"
    HEIGHT_DIFFERENCE = "height_difference_const"
    HYBRID_HEIGHT = "hybrid_height_const"
    HYBRID_AGE = "hybrid_age_const"
    MAX_WALL = "max_wall_const"
    HYBRID_WALL = "hybrid_wall_const"
    HYBRID_AGE_WALL = "hybrid_age_wall_const"


_STEPS: dict[Rule, Callable[[Nest, int, int], int]] = {
    Rule.RANDOM: lambda nest, roll, step: rules.random_step(nest, roll),
    Rule.MAX_AGE: rules.max_age_step,
    Rule.MAX_HEIGHT: lambda nest, roll, step: rules.max_height_step(nest, roll),
    Rule.HEIGHT_DIFFERENCE: lambda nest, roll, step: rules.height_difference_step(nest, roll),
    Rule.HYBRID_HEIGHT: lambda nest, roll, step: rules.hybrid_height_step(nest, roll),
    Rule.HYBRID_AGE: rules.hybrid_age_step,
    Rule.MAX_WALL: lambda nest, roll, step: rules.max_wall_step(nest, roll),
    Rule.HYBRID_WALL: lambda nest, roll, step: rules.hybrid_wall_step(nest, roll),
    Rule.HYBRID_AGE_WALL: rules.hybrid_age_wall_step,
}

DEFAULT_RULES: tuple[Rule, ...] = (
    Rule.RANDOM,
    Rule.MAX_AGE,
    Rule.MAX_HEIGHT,
    Rule.HEIGHT_DIFFERENCE,
    Rule.HYBRID_HEIGHT,
    Rule.HYBRID_AGE,
    Rule.MAX_WALL,
    Rule.HYBRID_WALL,
)


def default_loads() -> list[int]:
    """Return the pulp loads grown by default: 10..490 by 10, then 500..5000 by 100."""
    return [*range(10, 500, 10), *range(500, 5001, 100)]


def _signed_roll(value: int) -> int:
    # The roll is kept as a signed 32-bit integer before the rules see it.
    low = value & 0xFFFFFFFF
    return low - (1 << 32) if low >= 1 << 31 else low


def run_nest(
    rule: Rule | str,
    load: int,
    rng: Xoroshiro128Plus,
    max_height: float = DEFAULT_MAX_HEIGHT,
) -> Nest:
    """Grow one nest of ``load`` building steps under ``rule``."""
    step_rule = _STEPS[Rule(rule)]
    nest = Nest(max_height, rng.next() % NEIGHBOR_COUNT)
    nest.calculate_measurements()

    for step in range(FIRST_RULE_STEP, load):
        build_index = step_rule(nest, _signed_roll(rng.next()), step)
        if nest.cell_initiated(build_index):
            nest.lengthen(build_index)
        else:
            nest.initiate_cell(build_index, step, max_height)

    nest.calculate_measurements()
    return nest


class _JsonLinesSink:
    def __init__(self, stream: TextIO) -> None:
        self._stream = stream

    def insert_nest(
        self, nest: Nest, nest_number: int, database: str, collection: str
    ) -> dict[str, Any]:
        document = nest_document(nest, nest_number)
        record = {"database": database, "collection": collection, "document": document}
        self._stream.write(json.dumps(record) + "\n")
        return document


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nestgen", description="Grow simulated nests and store their measurements."
    )
    parser.add_argument(
        "--rule",
        action="append",
        choices=[rule.value for rule in Rule],
        help="building rule to run (repeatable; default: all but hybrid_age_wall_const)",
    )
    parser.add_argument(
        "--load", action="append", type=int, help="number of building steps (repeatable)"
    )
    parser.add_argument("--nests", type=int, default=DEFAULT_NESTS, help="nests per rule and load")
    parser.add_argument("--max-height", type=float, default=DEFAULT_MAX_HEIGHT)
    parser.add_argument("--seed", type=int, help="seed for reproducible runs")
    parser.add_argument("--uri", help="MongoDB connection URI")
    parser.add_argument("--jsonl", help="write documents to this file instead of MongoDB")
    return parser


def _grow_all(args: argparse.Namespace, sink: Any) -> None:
    selected = [Rule(value) for value in args.rule] if args.rule else list(DEFAULT_RULES)
    loads = args.load if args.load else default_loads()
    seeder = SplitMix64(args.seed) if args.seed is not None else None

    for load in loads:
        for rule in selected:
            for number in range(1, args.nests + 1):
                rng = Xoroshiro128Plus(seeder.next() if seeder is not None else None)
                nest = run_nest(rule, load, rng, args.max_height)
                sink.insert_nest(nest, number, rule.value, str(load))


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = _parser()
    args = parser.parse_args(argv)
    if args.nests < 0:
        parser.error("--nests must not be negative")
    if args.load and any(load < FIRST_RULE_STEP for load in args.load):
        parser.error(f"--load must be at least {FIRST_RULE_STEP}")

    if args.jsonl:
        with open(args.jsonl, "w", encoding="utf-8") as stream:
            _grow_all(args, _JsonLinesSink(stream))
    else:
        _grow_all(args, MongoStore(args.uri))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())