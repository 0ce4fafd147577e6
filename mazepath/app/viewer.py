# mazepath/app/viewer.py
#!/usr/bin/env python3
"""
Search replay viewer: minimal controls + metrics

The search runs to completion up front; the window then replays the
finalize order one cell per step.

- Keyboard:
    [D]/[A]      -> Dijkstra / A*
    [H]          -> cycle A* heuristic (manhattan, euclidian)
    [G]          -> toggle diagonal moves
    [SPACE]      -> run/pause
    [N]          -> single step
    [R]          -> reset
    [+]/[-]      -> steps/sec
    [Q]/[ESC]    -> quit
"""

import logging
import sys
import time
from typing import Dict, List, Optional

import pygame

from mazepath.core.heuristics import HEURISTICS, Heuristic, heuristic_name
from mazepath.core.search import algo_label, find_path
from mazepath.core.types import Cell, Grid

logger = logging.getLogger(__name__)

PANEL_W = 320            # right band: metrics + buttons
GRID_MARGIN = 16
MAX_WINDOW_H = 720
FONT_NAME = None  # default pygame font

# Colors
WHITE       = (255,255,255)
BLACK       = (  0,  0,  0)
BLUE        = ( 70,130,180)
RED         = (220, 50, 47)
FLOOR_GRAY  = (200,200,200)
CLOSED_A    = (255,0,120,90)
NEON_MINT   = (0,255,200)

CARD_BG     = (24,28,36,220)
CARD_HI     = (255,255,255,18)
TEXT_LIGHT  = (230,235,240)
ACCENT_GOLD = (255,210,0)


# ---------- Replay state (no display needed) ----------
class Playback:
    def __init__(self, grid: Grid, heuristic: Optional[Heuristic] = None):
        self.grid = grid
        self.heuristic = heuristic
        self.order: List[Cell] = []
        self.closed: List[Cell] = []
        self.path: List[Cell] = []
        self.status = "idle"       # "idle" | "running" | "done" | "no_path"
        self.reset()

    @property
    def name(self) -> str:
        return algo_label(self.heuristic)

    def reset(self) -> None:
        result, path = find_path(self.grid, self.heuristic)
        self._result = result
        self._full_path = path or []
        self.order = result.order
        self.closed = []
        self.path = []
        self.status = "idle"

    def configure(self, grid: Optional[Grid] = None, heuristic: Optional[Heuristic] = None) -> None:
        if grid is not None:
            self.grid = grid
        self.heuristic = heuristic
        self.reset()

    def step(self) -> str:
        if self.status in ("done", "no_path"):
            return self.status
        i = len(self.closed)
        if i < len(self.order):
            self.closed.append(self.order[i])
        if len(self.closed) < len(self.order):
            self.status = "running"
        elif self._result.reached:
            self.path = list(self._full_path)
            self.status = "done"
        else:
            self.status = "no_path"
        return self.status

    def metrics(self) -> Dict[str, object]:
        m = dict(self._result.metrics)
        m["popped"] = len(self.closed)
        m["path_len"] = len(self.path)
        return m


# ---------- Simple UI Button ----------
class UIButton:
    def __init__(self, label: str, rect: pygame.Rect, callback, *, togglable: bool = False):
        self.label = label
        self.rect = rect
        self.callback = callback
        self.hover = False
        self.togglable = togglable
        self.active = False  # highlight state

    def set_active(self, value: bool):
        self.active = bool(value)

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        base = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        if self.active and self.togglable:
            bg = (58, 86, 160, 235)
        elif self.hover:
            bg = (46, 50, 60, 230)
        else:
            bg = (36, 40, 48, 220)
        pygame.draw.rect(base, bg, base.get_rect(), border_radius=10)
        screen.blit(base, self.rect.topleft)

        if self.active and self.togglable:
            pygame.draw.rect(screen, (120, 170, 255, 255), self.rect, width=2, border_radius=10)

        text = font.render(self.label, True, (235,238,242))
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event):
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.callback()


# ---------- Viewer ----------
class Viewer:
    def __init__(self, grid: Grid, heuristic: Optional[Heuristic] = None):
        pygame.init()

        self.playback = Playback(grid, heuristic)
        self._last_heuristic = heuristic or HEURISTICS["manhattan"]
        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 22)

        self.cell_size = self._auto_cell_size(grid)
        win_w = GRID_MARGIN*2 + grid.width * self.cell_size + PANEL_W
        win_h = max(GRID_MARGIN*2 + grid.height * self.cell_size, 560)
        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption("mazepath")

        self.running = False
        self.clock = pygame.time.Clock()
        self.steps_per_sec = 30
        self.state = "Idle"
        self._last_step_t = 0.0

        self._buttons: List[UIButton] = []
        self._layout(win_w, win_h)

    @property
    def grid(self) -> Grid:
        return self.playback.grid

    # ---------- layout ----------
    def _auto_cell_size(self, grid: Grid) -> int:
        target_h = MAX_WINDOW_H - GRID_MARGIN*2
        return max(1, min(24, target_h // grid.height))

    def _layout(self, win_w: int, win_h: int):
        """Compute integer cell_size that fits window, grid on the left."""
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)
        self.cell_size = max(1, min(avail_w // self.grid.width, avail_h // self.grid.height))
        self._grid_origin = (GRID_MARGIN, GRID_MARGIN)
        right_x = GRID_MARGIN*2 + self.grid.width * self.cell_size
        self._right_band = pygame.Rect(right_x, 0, max(PANEL_W, win_w - right_x), win_h)
        self._build_buttons()

    def run(self):
        while True:
            self._handle_events()
            if self.running:
                self._tick_algorithm()
            self._draw()
            self.clock.tick(60)

    def _tick_algorithm(self):
        t0 = time.time()
        if t0 - self._last_step_t >= 1.0 / max(1, self.steps_per_sec):
            self._last_step_t = t0
            self._do_step()

    def _do_step(self):
        status = self.playback.step()
        if status == "done":
            self.state = "Done"; self.running = False
        elif status == "no_path":
            self.state = "No path"; self.running = False
        else:
            self.state = "Running" if self.running else "Paused"
        self._refresh_active_states()

    def _quit(self):
        pygame.quit()
        sys.exit(0)

    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                self._quit()
            elif e.type == pygame.KEYDOWN:
                if e.key in (pygame.K_ESCAPE, pygame.K_q):
                    self._quit()
                elif e.key == pygame.K_SPACE:
                    self._toggle_run()
                elif e.key == pygame.K_r:
                    self._reset()
                elif e.key == pygame.K_n:
                    self._do_step()
                elif e.key in (pygame.K_PLUS, pygame.K_EQUALS):
                    self._bump_speed(+5)
                elif e.key in (pygame.K_MINUS, pygame.K_UNDERSCORE):
                    self._bump_speed(-5)
                elif e.key == pygame.K_d:
                    self._switch_heuristic(None)
                elif e.key == pygame.K_a:
                    self._switch_heuristic(self._last_heuristic)
                elif e.key == pygame.K_h:
                    self._cycle_heuristic()
                elif e.key == pygame.K_g:
                    self._toggle_diagonals()
            elif e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((e.w, e.h), pygame.RESIZABLE)
                self._layout(e.w, e.h)
            elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN):
                for b in self._buttons:
                    b.handle_mouse(e)

    def _switch_heuristic(self, heuristic: Optional[Heuristic]):
        if heuristic is not None:
            self._last_heuristic = heuristic
        self.playback.configure(heuristic=heuristic)
        self._reset_state()

    def _cycle_heuristic(self):
        names = list(HEURISTICS)
        i = names.index(heuristic_name(self._last_heuristic))
        self._switch_heuristic(HEURISTICS[names[(i + 1) % len(names)]])

    def _toggle_diagonals(self):
        move = 4 if self.grid.move == 8 else 8
        self.playback.configure(grid=self.grid.with_move(move), heuristic=self.playback.heuristic)
        self._reset_state()

    def _reset(self):
        self.playback.reset()
        self._reset_state()

    def _reset_state(self):
        self.running = False
        self.state = "Idle"
        self._refresh_active_states()
        logger.debug("viewer reset: %s, move=%d", self.playback.name, self.grid.move)

    def _toggle_run(self):
        if self.state in ("Done", "No path"):
            return
        self.running = not self.running
        self.state = "Running" if self.running else "Paused"
        self._refresh_active_states()

    def _bump_speed(self, dv: int):
        self.steps_per_sec = int(max(1, min(240, self.steps_per_sec + dv)))

    # ---------- drawing ----------
    def _draw(self):
        self.screen.fill((24, 26, 32))
        self._draw_grid()
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    def _cell_rect(self, cell: Cell) -> pygame.Rect:
        cs = self.cell_size
        ox, oy = self._grid_origin
        col, row = cell
        return pygame.Rect(ox + col*cs, oy + row*cs, cs, cs)

    def _draw_grid(self):
        cs = self.cell_size
        for row in range(self.grid.height):
            for col in range(self.grid.width):
                rect = self._cell_rect((col, row))
                color = BLACK if self.grid.cells[row][col] == 1 else FLOOR_GRAY
                pygame.draw.rect(self.screen, color, rect)
                if cs >= 8:
                    pygame.draw.rect(self.screen, BLACK, rect, 1)

        overlay = pygame.Surface((cs, cs), pygame.SRCALPHA)
        overlay.fill(CLOSED_A)
        for cell in self.playback.closed:
            self.screen.blit(overlay, self._cell_rect(cell).topleft)

        if len(self.playback.path) >= 2:
            pts = [self._cell_rect(c).center for c in self.playback.path]
            pygame.draw.lines(self.screen, NEON_MINT, False, pts, max(1, cs // 4))

        for cell, color in ((self.grid.start, BLUE), (self.grid.goal, RED)):
            pygame.draw.circle(self.screen, color, self._cell_rect(cell).center, max(2, cs // 2 - 1))

    # ---------- buttons + metrics ----------
    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 230  # leaves space for metrics card above
        w = max(160, rb.width - 32)
        h = 34
        gap = 8

        def add(label, cb, *, togglable=False, store_as: Optional[str] = None):
            nonlocal y
            btn = UIButton(label, pygame.Rect(x, y, w, h), cb, togglable=togglable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)
            y += h + gap

        add("Run / Pause", self._toggle_run, togglable=True, store_as="btn_run")
        add("Step Once", self._do_step)
        add("Reset", self._reset)
        add("Algo: Dijkstra", lambda: self._switch_heuristic(None), togglable=True, store_as="btn_algo_d")
        add("Algo: A*", lambda: self._switch_heuristic(self._last_heuristic), togglable=True, store_as="btn_algo_a")
        add("Cycle heuristic", self._cycle_heuristic)
        add("Diagonals", self._toggle_diagonals, togglable=True, store_as="btn_diag")
        self._refresh_active_states()

    def _refresh_active_states(self):
        if hasattr(self, "btn_run"):
            self.btn_run.set_active(self.running)
        dijkstra = self.playback.heuristic is None
        if hasattr(self, "btn_algo_d"):
            self.btn_algo_d.set_active(dijkstra)
        if hasattr(self, "btn_algo_a"):
            self.btn_algo_a.set_active(not dijkstra)
        if hasattr(self, "btn_diag"):
            self.btn_diag.set_active(self.grid.move == 8)

    def _draw_metrics_and_buttons(self):
        rb = self._right_band
        card = pygame.Surface((rb.width - 20, 210), pygame.SRCALPHA)
        pygame.draw.rect(card, CARD_BG, card.get_rect(), border_radius=14)
        hi = pygame.Surface((card.get_width(), 24), pygame.SRCALPHA)
        pygame.draw.rect(hi, CARD_HI, hi.get_rect(), border_radius=14)
        card.blit(hi, (0,0))
        self.screen.blit(card, (rb.x + 10, rb.y + 10))

        x0 = rb.x + 24
        y0 = rb.y + 18

        def line(text, big=False, color=TEXT_LIGHT):
            nonlocal y0
            f = self.font_big if big else self.font
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 6

        m = self.playback.metrics()
        line("Metrics", big=True, color=ACCENT_GOLD)
        line(f"Finalized: {m.get('popped', 0)} / {len(self.playback.order)}")
        line(f"Pushed: {m.get('pushed', 0)}  Stale: {m.get('stale', 0)}")
        line(f"Path Len: {m.get('path_len', 0)}")
        line("-" * 26)
        line(f"Algo: {self.playback.name}")
        line(f"Moves: {self.grid.move}-connected")
        line(f"{self.state}, {self.steps_per_sec} steps/s")

        for b in self._buttons:
            b.draw(self.screen, self.font)


def view(grid: Grid, heuristic: Optional[Heuristic] = None) -> None:
    Viewer(grid, heuristic).run()
