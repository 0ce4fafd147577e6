# mazepath/app/maps.py
#!/usr/bin/env python3
"""
Grid loaders.

- Bitmap images (PNG/JPEG/GIF/BMP, anything pygame decodes): pure black
  pixels are walls. Start is the first open pixel of the top row, goal the
  first open pixel of the bottom row.
- JSON maps: {"width", "height", "cells" [row][col], "start", "goal", "move"?}
"""

import json
import logging
from pathlib import Path
from typing import List, Optional

import pygame

from mazepath.core.errors import MapError
from mazepath.core.types import Cell, Grid

logger = logging.getLogger(__name__)

WALL_RGB = (0, 0, 0)


def _first_open(row: List[int]) -> Optional[int]:
    for x, v in enumerate(row):
        if v != 1:
            return x
    return None


def grid_from_surface(surface: pygame.Surface, move: int = 4) -> Grid:
    width, height = surface.get_size()
    if width == 0 or height == 0:
        raise MapError("image has no pixels")
    cells: List[List[int]] = []
    for y in range(height):
        row = []
        for x in range(width):
            r, g, b, _ = surface.get_at((x, y))
            row.append(1 if (r, g, b) == WALL_RGB else 0)
        cells.append(row)

    sx = _first_open(cells[0])
    if sx is None:
        raise MapError("no open pixel on the top row to start from")
    gx = _first_open(cells[height - 1])
    if gx is None:
        raise MapError("no open pixel on the bottom row to finish at")
    return Grid(width, height, cells, (sx, 0), (gx, height - 1), move)


def load_image(path: Path, move: int = 4) -> Grid:
    try:
        surface = pygame.image.load(str(path))
    except pygame.error as ex:
        raise MapError(f"cannot decode image {path}: {ex}") from ex
    grid = grid_from_surface(surface, move)
    logger.debug("loaded %s: %dx%d start=%s goal=%s", path, grid.width, grid.height, grid.start, grid.goal)
    return grid


def load_map(path: Path, move: Optional[int] = None) -> Grid:
    with open(path, "r") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as ex:
            raise MapError(f"{path} is not valid JSON: {ex}") from ex
    try:
        width  = int(data["width"])
        height = int(data["height"])
        start: Cell = tuple(int(v) for v in data["start"])
        goal: Cell  = tuple(int(v) for v in data["goal"])
        cells  = data["cells"]
        if move is None:
            move = int(data.get("move", 4))
    except (KeyError, TypeError, ValueError, AttributeError) as ex:
        raise MapError(f"malformed map {path}: {ex}") from ex

    if not isinstance(cells, list) or not all(isinstance(r, list) for r in cells):
        raise MapError(f"{path}: cells must be a list of rows")
    if len(cells) != height or any(len(r) != width for r in cells):
        raise MapError(f"{path}: cells size mismatch")
    grid = Grid(width, height, [[1 if v == 1 else 0 for v in r] for r in cells], start, goal, move)
    for label, c in (("start", start), ("goal", goal)):
        if len(c) != 2 or not grid.in_bounds(c):
            raise MapError(f"{path}: {label} {c} out of bounds")
        if grid.is_block(c):
            raise MapError(f"{path}: {label} {c} is a wall")
    return grid


def load_grid(path: Path, move: Optional[int] = None) -> Grid:
    """Load ``path`` as a JSON map or an image depending on its suffix."""
    path = Path(path)
    if path.suffix.lower() == ".json":
        return load_map(path, move)
    return load_image(path, 4 if move is None else move)
