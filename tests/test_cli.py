import json

import pytest

from nestgen.cli import DEFAULT_RULES, Rule, default_loads, main, run_nest
from nestgen.prng import Xoroshiro128Plus


def test_default_loads_bounds_and_order():
    loads = default_loads()
    assert loads[0] == 10
    assert loads[-1] == 5000
    assert 490 in loads and 500 in loads and 495 not in loads
    assert loads == sorted(set(loads))


def test_default_rules_exclude_hybrid_age_wall():
    assert Rule.HYBRID_AGE_WALL not in DEFAULT_RULES
    assert DEFAULT_RULES[0] is Rule.RANDOM
    assert Rule("random_const") is Rule.RANDOM


@pytest.mark.parametrize("rule", list(Rule))
def test_run_nest_records_one_entry_per_step(rule):
    nest = run_nest(rule, 20, Xoroshiro128Plus(11))
    assert len(nest.build_order) == 20
    assert len(nest.site_minimum_wall) == 20
    assert len(nest.nest_cells()) >= 2
    assert all(0 <= position < len(nest.nest_cells()) for position in nest.build_order)


def test_run_nest_is_reproducible():
    first = run_nest("maximum_age_const", 30, Xoroshiro128Plus(5))
    second = run_nest(Rule.MAX_AGE, 30, Xoroshiro128Plus(5))
    assert first.build_order == second.build_order
    assert first.compactness_2d == second.compactness_2d
    assert first.total_walls == second.total_walls


def test_run_nest_rejects_unknown_rule():
    with pytest.raises(ValueError):
        run_nest("no_such_rule", 10, Xoroshiro128Plus(1))


def test_main_writes_json_lines(tmp_path):
    out = tmp_path / "nests.jsonl"
    code = main(
        [
            "--jsonl", str(out),
            "--nests", "2",
            "--load", "6",
            "--rule", "random_const",
            "--rule", "max_wall_const",
            "--seed", "3",
        ]
    )
    assert code == 0
    records = [json.loads(line) for line in out.read_text().splitlines()]
    assert [(r["database"], r["collection"], r["document"]["Nest ID"]) for r in records] == [
        ("random_const", "6", 1),
        ("random_const", "6", 2),
        ("max_wall_const", "6", 1),
        ("max_wall_const", "6", 2),
    ]
    assert all(len(r["document"]["Build order"]) == 6 for r in records)


def test_main_seeded_runs_match(tmp_path):
    first = tmp_path / "a.jsonl"
    second = tmp_path / "b.jsonl"
    args = ["--nests", "1", "--load", "12", "--rule", "hybrid_wall_const", "--seed", "9"]
    main(["--jsonl", str(first), *args])
    main(["--jsonl", str(second), *args])
    assert first.read_text() == second.read_text()


def test_main_rejects_unknown_rule(tmp_path):
    with pytest.raises(SystemExit):
        main(["--jsonl", str(tmp_path / "x.jsonl"), "--rule", "bogus"])


def test_main_rejects_too_small_load(tmp_path):
    with pytest.raises(SystemExit):
        main(["--jsonl", str(tmp_path / "x.jsonl"), "--load", "1"])