# mazepath/core/types.py
#!/usr/bin/env python3
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from mazepath.core.errors import ConfigError

Cell = Tuple[int, int]  # (col, row)

# status values carried by SearchResult
REACHED = "reached"
UNREACHABLE = "unreachable"

ORTHOGONAL: Tuple[Cell, ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
DIAGONAL: Tuple[Cell, ...] = ((-1, -1), (1, -1), (1, 1), (-1, 1))


@dataclass
class Grid:
    width: int
    height: int
    cells: List[List[int]]             # [row][col], 1 = wall
    start: Cell
    goal: Cell
    move: int = 4

    def __post_init__(self) -> None:
        if self.move not in (4, 8):
            raise ConfigError(f"move must be 4 or 8, got {self.move!r}")

    def in_bounds(self, c: Cell) -> bool:
        x, y = c
        return 0 <= x < self.width and 0 <= y < self.height

    def is_block(self, c: Cell) -> bool:
        x, y = c
        return self.cells[y][x] == 1

    def neighbors(self, c: Cell) -> List[Cell]:
        """Passable in-bounds neighbours of ``c``, orthogonal first."""
        x, y = c
        offsets = ORTHOGONAL + DIAGONAL if self.move == 8 else ORTHOGONAL
        out: List[Cell] = []
        for dx, dy in offsets:
            n = (x + dx, y + dy)
            if self.in_bounds(n) and not self.is_block(n):
                out.append(n)
        return out

    def with_move(self, move: int) -> "Grid":
        return Grid(self.width, self.height, self.cells, self.start, self.goal, move)


@dataclass(frozen=True)
class SearchContext:
    """Everything one search invocation needs; no ambient state."""
    origin: Cell
    destination: Cell
    neighbors: Callable[[Cell], List[Cell]]
    cost: Callable[[int, Cell], float]
    on_finalize: Optional[Callable[[Cell], None]] = None
    name: str = "Dijkstra"


@dataclass
class SearchResult:
    status: str                   # "reached" | "unreachable"
    distances: Dict[Cell, int] = field(default_factory=dict)
    predecessors: Dict[Cell, Cell] = field(default_factory=dict)
    order: List[Cell] = field(default_factory=list)   # finalize order
    metrics: Dict[str, object] = field(default_factory=dict)

    @property
    def reached(self) -> bool:
        return self.status == REACHED
