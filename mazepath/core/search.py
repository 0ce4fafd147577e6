# mazepath/core/search.py
#!/usr/bin/env python3
"""
Best-first search over an implicit grid graph (Dijkstra / A*), run to completion.

- search(ctx)              -> SearchResult (status, distances, predecessors, order)
- reconstruct_path(...)    -> origin..destination inclusive
- find_path(grid, ...)     -> convenience wrapper used by the CLI and viewer

Queue entries are bare cells ordered by ctx.cost(distances[cell], cell), read
live at every comparison. A cell is pushed again whenever its distance
improves; older entries are dropped when popped after the cell was finalized.
"""

import logging
from typing import Callable, Dict, List, Optional, Tuple

from mazepath.core.errors import BrokenChainError
from mazepath.core.heuristics import Heuristic, cost_function, heuristic_name
from mazepath.core.pqueue import Empty, PriorityQueue
from mazepath.core.types import (
    REACHED, UNREACHABLE, Cell, Grid, SearchContext, SearchResult,
)

logger = logging.getLogger(__name__)


def search(ctx: SearchContext) -> SearchResult:
    distances: Dict[Cell, int] = {ctx.origin: 0}
    predecessors: Dict[Cell, Cell] = {}
    finalized: set = set()
    order: List[Cell] = []
    cost = ctx.cost

    def less(a: Cell, b: Cell) -> bool:
        return cost(distances[a], a) < cost(distances[b], b)

    pq: PriorityQueue[Cell] = PriorityQueue(less)
    pq.push(ctx.origin)
    pushed = 1
    stale = 0
    status = UNREACHABLE

    while True:
        try:
            p = pq.pop()
        except Empty:
            break

        # Ignore stale pops
        if p in finalized:
            stale += 1
            continue

        finalized.add(p)
        order.append(p)
        if ctx.on_finalize is not None:
            ctx.on_finalize(p)

        if p == ctx.destination:
            status = REACHED
            break

        alt = distances[p] + 1
        lowered = False
        for n in ctx.neighbors(p):
            # finalized distances stay fixed even when h is inconsistent (8 moves)
            if n in finalized:
                continue
            known = distances.get(n)
            if known is not None and known <= alt:
                continue
            if known is not None:
                lowered = True
            predecessors[n] = p
            distances[n] = alt
            pq.push(n)
            pushed += 1
        if lowered:
            pq.reheapify()

    metrics = {
        "algo": ctx.name,
        "popped": len(order),
        "pushed": pushed,
        "stale": stale,
        "closed_count": len(finalized),
        "open_size": len(pq),
        "path_len": distances[ctx.destination] + 1 if status == REACHED else 0,
    }
    logger.debug("%s finished: %s after %d pops", ctx.name, status, len(order))
    return SearchResult(status=status, distances=distances, predecessors=predecessors,
                        order=order, metrics=metrics)


def reconstruct_path(predecessors: Dict[Cell, Cell], origin: Cell, destination: Cell) -> List[Cell]:
    path: List[Cell] = [destination]
    cur = destination
    while cur != origin:
        try:
            cur = predecessors[cur]
        except KeyError:
            raise BrokenChainError(cur, origin) from None
        path.append(cur)
    path.reverse()
    return path


def algo_label(heuristic: Optional[Heuristic]) -> str:
    if heuristic is None:
        return "Dijkstra"
    return f"A* ({heuristic_name(heuristic)})"


def find_path(grid: Grid, heuristic: Optional[Heuristic] = None,
              on_finalize: Optional[Callable[[Cell], None]] = None) -> Tuple[SearchResult, Optional[List[Cell]]]:
    """Search ``grid`` from start to goal; the path is None when unreachable."""
    ctx = SearchContext(
        origin=grid.start,
        destination=grid.goal,
        neighbors=grid.neighbors,
        cost=cost_function(heuristic, grid.goal),
        on_finalize=on_finalize,
        name=algo_label(heuristic),
    )
    result = search(ctx)
    if not result.reached:
        logger.info("%s: no path from %s to %s (%d cells explored)",
                    ctx.name, grid.start, grid.goal, len(result.order))
        return result, None
    path = reconstruct_path(result.predecessors, grid.start, grid.goal)
    logger.info("%s: path of %d steps from %s to %s (%d cells explored)",
                ctx.name, result.distances[grid.goal], grid.start, grid.goal, len(result.order))
    return result, path
