import json
from pathlib import Path

import pygame
import pytest

from mazepath.app.maps import grid_from_surface, load_grid, load_image, load_map
from mazepath.core.errors import ConfigError, MapError
from mazepath.core.search import find_path

MAPS_DIR = Path(__file__).resolve().parents[1] / "maps"


def _maze_surface(rows):
    """'#' black, anything else white-ish (non-black pixels are open)."""
    surf = pygame.Surface((len(rows[0]), len(rows)))
    surf.fill((255, 255, 255))
    for y, row in enumerate(rows):
        for x, ch in enumerate(row):
            if ch == "#":
                surf.set_at((x, y), (0, 0, 0))
            elif ch == "r":
                surf.set_at((x, y), (200, 10, 10))
    return surf


def test_grid_from_surface_walls_and_endpoints():
    surf = _maze_surface([
        "#.###",
        "#...#",
        "###r#",
    ])
    grid = grid_from_surface(surf)
    assert (grid.width, grid.height) == (5, 3)
    assert grid.start == (1, 0)
    assert grid.goal == (3, 2)
    assert grid.is_block((0, 0))
    assert not grid.is_block((3, 2))
    result, path = find_path(grid)
    assert path == [(1, 0), (1, 1), (2, 1), (3, 1), (3, 2)]


def test_load_image_from_png(tmp_path):
    path = tmp_path / "maze.png"
    pygame.image.save(_maze_surface([
        "..##",
        "#..#",
        "##..",
    ]), str(path))
    grid = load_image(path, move=8)
    assert grid.move == 8
    assert grid.start == (0, 0)
    assert grid.goal == (2, 2)
    result, _ = find_path(grid)
    assert result.distances[grid.goal] == 2


def test_load_image_without_open_top_row(tmp_path):
    path = tmp_path / "closed.png"
    pygame.image.save(_maze_surface(["###", "...", "..."]), str(path))
    with pytest.raises(MapError):
        load_image(path)


def test_load_image_rejects_non_image(tmp_path):
    path = tmp_path / "bogus.png"
    path.write_text("not an image")
    with pytest.raises(MapError):
        load_image(path)


def test_load_bundled_json_map():
    grid = load_map(MAPS_DIR / "intro.json")
    assert (grid.width, grid.height) == (9, 7)
    result, path = find_path(grid)
    assert result.distances[grid.goal] == 34
    assert len(path) == 35


def test_load_map_validation(tmp_path):
    base = {"width": 2, "height": 2, "start": [0, 0], "goal": [1, 1],
            "cells": [[0, 0], [0, 0]]}

    def write(**over):
        data = dict(base, **over)
        p = tmp_path / "m.json"
        p.write_text(json.dumps(data))
        return p

    assert load_map(write()).goal == (1, 1)
    with pytest.raises(MapError):
        load_map(write(cells=[[0, 0]]))
    with pytest.raises(MapError):
        load_map(write(goal=[2, 1]))
    with pytest.raises(MapError):
        load_map(write(cells=[[1, 0], [0, 0]]))
    with pytest.raises(ConfigError):
        load_map(write(move=6))
    with pytest.raises(MapError):
        load_map(write(cells=[5, 5]))
    with pytest.raises(MapError):
        load_map(write(start=["a", 0]))
    with pytest.raises(MapError):
        load_map(write(goal=None))

    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    with pytest.raises(MapError):
        load_map(broken)


def test_load_grid_dispatches_on_suffix(tmp_path):
    png = tmp_path / "m.png"
    pygame.image.save(_maze_surface(["..", ".."]), str(png))
    assert load_grid(png).move == 4
    assert load_grid(png, 8).move == 8
    grid = load_grid(MAPS_DIR / "intro.json", 8)
    assert grid.move == 8
