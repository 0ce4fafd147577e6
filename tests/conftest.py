# tests/conftest.py
import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

from collections import deque
from typing import Dict, List, Sequence

import pytest

from mazepath.core.types import Cell, Grid


def rows_to_grid(rows: Sequence[str], move: int = 4) -> Grid:
    """'#' is a wall, 'S' start, 'G' goal, anything else open."""
    cells: List[List[int]] = []
    start = goal = None
    for y, row in enumerate(rows):
        cells.append([1 if ch == "#" else 0 for ch in row])
        for x, ch in enumerate(row):
            if ch == "S":
                start = (x, y)
            elif ch == "G":
                goal = (x, y)
    return Grid(len(rows[0]), len(rows), cells, start, goal, move)


def bfs_distances(grid: Grid, source: Cell) -> Dict[Cell, int]:
    dist = {source: 0}
    queue = deque([source])
    while queue:
        cur = queue.popleft()
        for n in grid.neighbors(cur):
            if n not in dist:
                dist[n] = dist[cur] + 1
                queue.append(n)
    return dist


@pytest.fixture
def open_grid():
    def make(width: int = 5, height: int = 5, move: int = 4) -> Grid:
        cells = [[0] * width for _ in range(height)]
        return Grid(width, height, cells, (0, 0), (width - 1, height - 1), move)
    return make
