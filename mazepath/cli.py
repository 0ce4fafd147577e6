# mazepath/cli.py
#!/usr/bin/env python3
"""Command line entry point: solve a maze image and write the animation."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from mazepath.config import CONFIG_PATH, Config, load_config
from mazepath.core.errors import MazepathError
from mazepath.core.heuristics import resolve_heuristic
from mazepath.core.search import find_path
from mazepath.app.frames import FrameRecorder, save_gif, save_png
from mazepath.app.maps import load_grid

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_UNREACHABLE = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mazepath",
        description="Find a shortest path through a maze image (black pixels are walls).",
    )
    parser.add_argument("image", type=Path, help="maze image, or a .json map")
    parser.add_argument("-d", "--diagonals", action="store_true", default=None,
                        help="allow diagonal moves")
    parser.add_argument("-s", "--steps", action="store_true", default=None,
                        help="write search steps as gif frames")
    parser.add_argument("-H", "--heuristic", default=None,
                        help="heuristic function to use [manhattan|euclidian|none]")
    parser.add_argument("-o", "--output", type=Path, default=None, help="gif output path")
    parser.add_argument("--png", type=Path, default=None, help="also write the final frame as png")
    parser.add_argument("--stride", type=int, default=None,
                        help="with --steps, keep one frame every N finalized cells")
    parser.add_argument("--scale", type=int, default=None, help="pixels per cell in output")
    parser.add_argument("--config", type=Path, default=CONFIG_PATH, help="yaml configuration file")
    parser.add_argument("--view", action="store_true", help="open the interactive replay viewer")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def configure_logging(cfg: Config, verbose: bool = False) -> None:
    numeric_level = logging.DEBUG if verbose else getattr(logging, cfg.logging.global_level, logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        force=True,
    )
    for module_name, level_str in cfg.logging.module_levels.items():
        logging.getLogger(module_name).setLevel(getattr(logging, level_str))


def _merge_args(cfg: Config, args: argparse.Namespace) -> Config:
    if args.diagonals is not None:
        cfg.search.diagonals = True
    if args.heuristic is not None:
        cfg.search.heuristic = args.heuristic
    if args.steps is not None:
        cfg.output.steps = True
    if args.output is not None:
        cfg.output.gif = str(args.output)
    if args.png is not None:
        cfg.output.png = str(args.png)
    if args.stride is not None:
        cfg.output.stride = args.stride
    if args.scale is not None:
        cfg.output.scale = args.scale
    return cfg


def run(cfg: Config, image: Path, view: bool = False) -> int:
    # heuristic is resolved before anything is loaded or searched
    heuristic = resolve_heuristic(cfg.search.heuristic)
    grid = load_grid(image, cfg.search.move if cfg.search.diagonals else None)
    logger.info("%s: %dx%d, start %s, goal %s, %d-connected",
                image, grid.width, grid.height, grid.start, grid.goal, grid.move)

    if view:
        from mazepath.app.viewer import view as open_viewer
        open_viewer(grid, heuristic)
        return EXIT_OK

    recorder = FrameRecorder(grid, stride=cfg.output.stride, scale=cfg.output.scale)
    result, path = find_path(grid, heuristic, on_finalize=recorder if cfg.output.steps else None)
    if path is None:
        logger.warning("destination %s is unreachable from %s", grid.goal, grid.start)
        return EXIT_UNREACHABLE

    final = recorder.add_path_frame(path)
    if cfg.output.gif:
        save_gif(recorder.frames, Path(cfg.output.gif), delay_ms=cfg.output.frame_delay_ms)
    if cfg.output.png:
        save_png(final, Path(cfg.output.png))
    print(f"distance {result.distances[grid.goal]}, {result.metrics['popped']} cells explored")
    return EXIT_OK


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        cfg = _merge_args(load_config(args.config), args)
        configure_logging(cfg, args.verbose)
        return run(cfg, args.image, view=args.view)
    except (MazepathError, OSError) as ex:
        logger.error("%s", ex)
        return EXIT_ERROR


if __name__ == "__main__":
    sys.exit(main())
