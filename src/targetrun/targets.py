# targets.py
# Built-in target table for a cargo crate: what `targetrun run` uses when no
# target file is given.
from __future__ import annotations

from .dsl import sh, table, target
from .registry import DEFAULT_TARGET, Registry, build_registry

TEST_FLAGS = "-- --nocapture --test-threads=1"

DEFAULT_TARGETS = table(
    target("all", needs=["build"]),
    target("build", sh("cargo build")),
    target(
        "lint",
        sh("cargo clippy"),
        sh("cargo clippy --tests"),
    ),
    target("release", sh("cargo build --release")),
    # same suite twice: default features, then the alternate feature set
    target(
        "test",
        sh(f"cargo test {TEST_FLAGS}"),
        sh(f"cargo test --no-default-features=false {TEST_FLAGS}"),
    ),
    target("fmt", sh("@cargo fmt")),
    target("doc", sh("cargo doc --open")),
    target("clean", sh("@cargo clean")),
)


def default_registry() -> Registry:
    return build_registry(DEFAULT_TARGETS, default=DEFAULT_TARGET)
