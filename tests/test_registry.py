from __future__ import annotations

import pytest

from targetrun.dsl import target
from targetrun.errors import DuplicateTargetError, UnknownTargetError
from targetrun.registry import build_registry


def test_preserves_declaration_order():
    reg = build_registry([target("all", needs=["b"]), target("b"), target("a")])
    assert reg.names() == ["all", "b", "a"]
    assert list(reg) == ["all", "b", "a"]
    assert len(reg) == 3
    assert reg.default == "all"


def test_duplicate_names_rejected():
    with pytest.raises(DuplicateTargetError) as exc:
        build_registry([target("all"), target("x"), target("x")])
    assert exc.value.names == ["x"]
    assert exc.value.exit_code == 2


def test_missing_prerequisite_rejected():
    with pytest.raises(UnknownTargetError) as exc:
        build_registry([target("all", needs=["nope"])])
    assert exc.value.name == "nope"
    assert exc.value.target == "all"
    assert "needs missing target 'nope'" in exc.value.message


def test_default_must_exist():
    with pytest.raises(UnknownTargetError):
        build_registry([target("build")])
    reg = build_registry([target("build")], default="build")
    assert reg.default == "build"


def test_empty_registry_has_no_default():
    reg = build_registry([])
    assert reg.default is None
    assert len(reg) == 0


def test_lookup_of_unknown_name_raises():
    reg = build_registry([target("all")])
    with pytest.raises(UnknownTargetError) as exc:
        reg["bogus"]
    assert "no such target 'bogus'" in str(exc.value)
    assert reg.get("bogus") is None
    assert "bogus" not in reg


def test_registry_is_read_only():
    reg = build_registry([target("all")])
    with pytest.raises(TypeError):
        reg["x"] = target("x")


def test_cycles_are_allowed_at_build_time():
    reg = build_registry([target("all", needs=["all"])])
    assert "all" in reg
