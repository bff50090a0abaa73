from __future__ import annotations

import pytest

from targetrun.dag import resolve
from targetrun.dsl import target
from targetrun.errors import CycleError, UnknownTargetError
from targetrun.registry import build_registry
from targetrun.targets import default_registry


def _assert_topological(reg, plan):
    pos = {name: i for i, name in enumerate(plan)}
    assert len(pos) == len(plan), "plan has duplicates"
    for name in plan:
        for need in reg[name].needs:
            assert pos[need] < pos[name], f"{need} must come before {name}"


def diamond():
    return build_registry(
        [
            target("all", needs=["app", "docs"]),
            target("app", "cc app", needs=["lib", "gen"]),
            target("docs", "mkdocs", needs=["gen"]),
            target("lib", "cc lib", needs=["gen"]),
            target("gen", "codegen"),
        ]
    )


def test_default_table_all():
    assert resolve(default_registry(), "all") == ["build", "all"]


def test_default_table_none_picks_all():
    assert resolve(default_registry()) == ["build", "all"]


@pytest.mark.parametrize("name", ["build", "lint", "release", "test", "fmt", "doc", "clean"])
def test_default_table_leaf_targets(name):
    assert resolve(default_registry(), name) == [name]


def test_diamond_dedups_and_orders():
    reg = diamond()
    plan = resolve(reg, "all")
    assert plan == ["gen", "lib", "app", "docs", "all"]
    _assert_topological(reg, plan)


def test_sibling_order_follows_declaration():
    reg = build_registry(
        [target("all", needs=["c", "a", "b"]), target("a"), target("b"), target("c")]
    )
    assert resolve(reg) == ["c", "a", "b", "all"]


def test_resolution_is_deterministic():
    reg = diamond()
    assert resolve(reg, "all") == resolve(reg, "all")


def test_every_target_is_topologically_ordered():
    reg = diamond()
    for name in reg:
        _assert_topological(reg, resolve(reg, name))


def test_unknown_target():
    with pytest.raises(UnknownTargetError) as exc:
        resolve(default_registry(), "bogus")
    assert exc.value.name == "bogus"


def test_empty_registry_has_nothing_to_resolve():
    with pytest.raises(UnknownTargetError):
        resolve(build_registry([]))


def test_self_cycle():
    reg = build_registry([target("all", needs=["all"])])
    with pytest.raises(CycleError) as exc:
        resolve(reg)
    assert exc.value.cycle == ["all", "all"]


def test_mutual_cycle_reports_path():
    reg = build_registry(
        [
            target("all", needs=["a"]),
            target("a", needs=["b"]),
            target("b", needs=["c"]),
            target("c", needs=["a"]),
        ]
    )
    with pytest.raises(CycleError) as exc:
        resolve(reg, "all")
    assert exc.value.cycle == ["a", "b", "c", "a"]
    assert "a -> b -> c -> a" in str(exc.value)


def test_cycle_outside_requested_subgraph_is_ignored():
    reg = build_registry(
        [target("all", needs=["ok"]), target("ok"), target("x", needs=["y"]), target("y", needs=["x"])]
    )
    assert resolve(reg) == ["ok", "all"]


def test_deep_chain_does_not_recurse():
    n = 5000
    items = [target(f"t{i}", needs=[f"t{i + 1}"]) for i in range(n)] + [target(f"t{n}")]
    reg = build_registry(items, default="t0")
    plan = resolve(reg)
    assert plan[0] == f"t{n}"
    assert plan[-1] == "t0"
    assert len(plan) == n + 1
