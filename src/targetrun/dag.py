# dag.py
from __future__ import annotations

from typing import Dict, List, Set

from .errors import CycleError, UnknownTargetError
from .registry import Registry


def resolve(registry: Registry, name: str | None = None) -> List[str]:
    """
    Turn a requested target into a linear execution plan.

    Depth-first over `needs`, prerequisites first, siblings in declaration
    order. Each target appears once even when reachable through several
    paths. `name=None` picks the registry's default target.

    Raises:
      UnknownTargetError: the name (or the default) isn't registered
      CycleError: a target is reached again while still on the current path
    """
    if name is None:
        name = registry.default
        if name is None:
            raise UnknownTargetError("<default>", known=registry.names())
    if name not in registry:
        raise UnknownTargetError(name, known=registry.names())

    plan: List[str] = []
    done: Set[str] = set()
    on_path: Dict[str, int] = {}  # name -> index in path

    # explicit stack of (target name, index of next prerequisite to visit)
    path: List[str] = [name]
    cursor: List[int] = [0]
    on_path[name] = 0

    while path:
        current = path[-1]
        needs = registry[current].needs
        i = cursor[-1]

        if i < len(needs):
            cursor[-1] = i + 1
            child = needs[i]
            if child in done:
                continue
            if child in on_path:
                raise CycleError(path[on_path[child]:] + [child])
            on_path[child] = len(path)
            path.append(child)
            cursor.append(0)
            continue

        # all prerequisites handled -> target can run
        path.pop()
        cursor.pop()
        del on_path[current]
        done.add(current)
        plan.append(current)

    return plan
