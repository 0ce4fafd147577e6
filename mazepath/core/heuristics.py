# mazepath/core/heuristics.py
#!/usr/bin/env python3
"""
Distance estimates to the destination and the cost strategies built on them.

Every step costs 1, diagonal included, so distances are step counts. On an
8-connected grid both estimates can exceed the true remaining step count and
A* may then return a longer path than Dijkstra. This is kept as is.
"""

import math
from typing import Callable, Dict, Optional

from mazepath.core.errors import ConfigError
from mazepath.core.types import Cell

Heuristic = Callable[[Cell, Cell], float]
CostFunction = Callable[[int, Cell], float]


def euclidean(dest: Cell, p: Cell) -> float:
    dx = dest[0] - p[0]
    dy = dest[1] - p[1]
    return math.sqrt(dx * dx + dy * dy)


def manhattan(dest: Cell, p: Cell) -> float:
    return float(abs(dest[0] - p[0]) + abs(dest[1] - p[1]))


HEURISTICS: Dict[str, Heuristic] = {
    "manhattan": manhattan,
    "euclidian": euclidean,
}


def resolve_heuristic(name: Optional[str]) -> Optional[Heuristic]:
    """
    Map a user-supplied name to a heuristic.

    Matching is case-insensitive and accepts any unique prefix ("man", "E").
    ``None`` or "none" selects plain Dijkstra and returns None.
    """
    if name is None:
        return None
    key = name.strip().lower()
    if key == "none":
        return None
    matches = [full for full in HEURISTICS if key and full.startswith(key)]
    if len(matches) != 1:
        known = ", ".join(sorted(HEURISTICS))
        raise ConfigError(f"couldn't parse heuristic function {name!r} (known: {known}, none)")
    return HEURISTICS[matches[0]]


def heuristic_name(h: Optional[Heuristic]) -> str:
    for name, fn in HEURISTICS.items():
        if fn is h:
            return name
    return "none"


def cost_function(heuristic: Optional[Heuristic], dest: Cell) -> CostFunction:
    """g alone for Dijkstra, g + h(dest, cell) for A*."""
    if heuristic is None:
        def dijkstra_cost(g: int, cell: Cell) -> float:
            return g
        return dijkstra_cost

    def astar_cost(g: int, cell: Cell) -> float:
        return g + heuristic(dest, cell)
    return astar_cost
