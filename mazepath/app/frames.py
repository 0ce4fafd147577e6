# mazepath/app/frames.py
#!/usr/bin/env python3
"""
Frame rasterization and GIF / PNG output.

One pixel per cell (times ``scale``), four colours:
walls black, open cells white, finalized cells blue, path red.
"""

import logging
from pathlib import Path
from typing import Iterable, List, Sequence

import pygame
from PIL import Image

from mazepath.core.types import Cell, Grid

logger = logging.getLogger(__name__)

# Colors
BLACK = (  0,   0,   0)
WHITE = (255, 255, 255)
RED   = (255,   0,   0)
BLUE  = (  0,   0, 255)

PALETTE = (BLACK, WHITE, RED, BLUE)


def _base_surface(grid: Grid) -> pygame.Surface:
    surf = pygame.Surface((grid.width, grid.height))
    surf.fill(WHITE)
    for row in range(grid.height):
        for col in range(grid.width):
            if grid.cells[row][col] == 1:
                surf.set_at((col, row), BLACK)
    return surf


def render_frame(grid: Grid, visited: Iterable[Cell] = (), path: Iterable[Cell] = (),
                 scale: int = 1) -> pygame.Surface:
    surf = _base_surface(grid)
    for c in visited:
        surf.set_at(c, BLUE)
    for c in path:
        surf.set_at(c, RED)
    if scale > 1:
        surf = pygame.transform.scale(surf, (grid.width * scale, grid.height * scale))
    return surf


class FrameRecorder:
    """
    Finalize callback that snapshots the exploration.

    A frame is taken every ``stride`` finalized cells. The wall/background
    surface is drawn once and copied, visited cells are painted incrementally.
    """

    def __init__(self, grid: Grid, stride: int = 1, scale: int = 1):
        self.grid = grid
        self.stride = max(1, int(stride))
        self.scale = max(1, int(scale))
        self.frames: List[pygame.Surface] = []
        self.visited: List[Cell] = []
        self._base = _base_surface(grid)
        self._canvas = self._base.copy()

    def __call__(self, cell: Cell) -> None:
        self.visited.append(cell)
        self._canvas.set_at(cell, BLUE)
        if len(self.visited) % self.stride == 0:
            self.frames.append(self._scaled(self._canvas.copy()))

    def add_path_frame(self, path: Sequence[Cell]) -> pygame.Surface:
        if len(self.visited) % self.stride != 0:
            self.frames.append(self._scaled(self._canvas.copy()))
        frame = self._base.copy()
        for c in path:
            frame.set_at(c, RED)
        frame = self._scaled(frame)
        self.frames.append(frame)
        return frame

    def _scaled(self, surf: pygame.Surface) -> pygame.Surface:
        if self.scale == 1:
            return surf
        w, h = surf.get_size()
        return pygame.transform.scale(surf, (w * self.scale, h * self.scale))


def to_pil(surface: pygame.Surface) -> Image.Image:
    data = pygame.image.tobytes(surface, "RGB")
    return Image.frombytes("RGB", surface.get_size(), data)


def _palette_image() -> Image.Image:
    pal = Image.new("P", (1, 1))
    flat = [v for rgb in PALETTE for v in rgb]
    pal.putpalette(flat + [0] * (768 - len(flat)))
    return pal


def save_gif(frames: Sequence[pygame.Surface], path: Path, delay_ms: int = 100) -> Path:
    """Write ``frames`` as an animated GIF that plays once."""
    if not frames:
        raise ValueError("no frames to write")
    pal = _palette_image()
    images = [to_pil(f).quantize(palette=pal, dither=Image.Dither.NONE) for f in frames]
    path = Path(path)
    images[0].save(path, format="GIF", save_all=True, append_images=images[1:],
                   duration=delay_ms, optimize=False)
    logger.info("wrote %d frame(s) to %s", len(images), path)
    return path


def save_png(surface: pygame.Surface, path: Path) -> Path:
    path = Path(path)
    pygame.image.save(surface, str(path))
    logger.info("wrote %s", path)
    return path
