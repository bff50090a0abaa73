# registry.py
from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Dict, Iterable, Iterator, List

from .errors import DuplicateTargetError, UnknownTargetError
from .model import Target

DEFAULT_TARGET = "all"


class Registry(Mapping):
    """
    Read-only name -> Target mapping, built once per invocation.

    Iteration follows declaration order. Use build_registry() to construct
    one; it validates names and prerequisites.
    """

    def __init__(self, targets: Dict[str, Target], default: str | None):
        self._targets = MappingProxyType(dict(targets))
        self._default = default

    @property
    def default(self) -> str | None:
        return self._default

    def names(self) -> List[str]:
        return list(self._targets)

    def __getitem__(self, name: str) -> Target:
        try:
            return self._targets[name]
        except KeyError:
            raise UnknownTargetError(name, known=self.names()) from None

    def get(self, name: str, default: Target | None = None) -> Target | None:
        return self._targets.get(name, default)

    def __contains__(self, name: object) -> bool:
        return name in self._targets

    def __iter__(self) -> Iterator[str]:
        return iter(self._targets)

    def __len__(self) -> int:
        return len(self._targets)

    def __repr__(self) -> str:
        return f"Registry({self.names()!r}, default={self._default!r})"


def build_registry(targets: Iterable[Target], default: str | None = DEFAULT_TARGET) -> Registry:
    """
    Build a Registry from Target objects.

    Requires:
      - target.name: str (unique)
      - target.needs: names of targets that exist in the same table

    Cycles are left for resolution to report, so a bad table can still be
    listed and inspected.
    """
    targets = list(targets)
    names = [t.name for t in targets]
    if len(set(names)) != len(names):
        dupes = sorted({n for n in names if names.count(n) > 1})
        raise DuplicateTargetError(dupes)

    by_name: Dict[str, Target] = {t.name: t for t in targets}

    for t in targets:
        for need in t.needs:
            if need not in by_name:
                raise UnknownTargetError(need, known=sorted(by_name), needed_by=t.name)

    if not by_name:
        default = None
    elif default is not None and default not in by_name:
        raise UnknownTargetError(default, known=names)

    return Registry(by_name, default)
