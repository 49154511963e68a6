# src/gridsearch/app/viewer.py
#!/usr/bin/env python3
"""
Grid Search Viewer: edit a grid, pick an algorithm, watch it search.

- Keyboard:
    [1]/[2]/[3]      -> load map
    [A]/[B]/[D]/[J]  -> select algorithm (A* / BFS / DFS / Dijkstra)
    [SPACE]          -> run/pause
    [N]              -> single step
    [R]              -> reset search (keeps walls, start, end)
    [C]              -> clear grid
    [W]/[S]/[E]      -> brush: wall / start / end
    [G]              -> path glow on/off (each re-enable speeds the pulse up)
    [+]/[-]          -> steps/sec
    [Q]/[ESC]        -> quit
- Mouse: left button paints with the brush, right button erases.

Algorithm:
- ENV: GRIDSEARCH_ALGO=A*|BFS|DFS|Dijkstra
- CLI: --algo=<label>  --map=<path.json>
"""

# --- bootstrap import path so `from gridsearch...` works when run as a script ---
import sys, time, math, logging
from pathlib import Path
_SRC_ROOT = Path(__file__).resolve().parents[2]
if str(_SRC_ROOT) not in sys.path:
    sys.path.insert(0, str(_SRC_ROOT))
# -------------------------------------------------------------------------------

from typing import List, Tuple, Optional, Dict
import pygame

from gridsearch.core.errors import GridSearchError
from gridsearch.core.grid import Grid, DEFAULT_ROWS, DEFAULT_COLS
from gridsearch.core.maps import MAP_FILES, load_map
from gridsearch.core.runner import (ALGORITHMS, READY, RunConfig, SearchRun, StatusChannel,
                                    resolve_algorithm)
from gridsearch.core.types import CellState, Coord

logger = logging.getLogger(__name__)

# ---------- Config ----------
PANEL_W = 360            # right band: metrics + buttons
GRID_MARGIN = 16
CELL_SIZE_DEFAULT = 24
FONT_NAME = None  # default pygame font
MAX_STEPS_PER_SEC = 600

# Colors
WHITE       = (255,255,255)
GRID_LINE   = ( 55, 60, 70)
TEXT_LIGHT  = (230,235,240)
ACCENT_GOLD = (255,210,0)
CARD_BG     = (24,28,36,220)
CARD_HI     = (255,255,255,18)

STATE_COLORS: Dict[CellState, Tuple[int,int,int]] = {
    CellState.EMPTY:   (235,238,242),
    CellState.WALL:    ( 31, 41, 55),
    CellState.START:   ( 16,185,129),
    CellState.END:     (239, 68, 68),
    CellState.VISITED: ( 96,165,250),
    CellState.PATH:    (251,191, 36),
}
PATH_GLOW = (253,230,138)

ALGO_KEYS = {
    pygame.K_a: "A*",
    pygame.K_b: "BFS",
    pygame.K_d: "DFS",
    pygame.K_j: "Dijkstra",
}
BRUSH_KEYS = {
    pygame.K_w: CellState.WALL,
    pygame.K_s: CellState.START,
    pygame.K_e: CellState.END,
}


def resolve_map(argv: Optional[List[str]] = None) -> Optional[Path]:
    argv = sys.argv if argv is None else argv
    for arg in argv:
        if arg.startswith("--map="):
            return Path(arg.split("=", 1)[1])
    return None


def path_glow_color(t: float, index: int, speed: float = 1.0) -> Tuple[int,int,int]:
    """Pulse between base and light yellow; the crest travels from the start cell (index 0) outward."""
    k = 0.5 * (1.0 + math.sin(t * 4.0 * speed - index * 0.5))
    base = STATE_COLORS[CellState.PATH]
    return tuple(int(base[i] * (1 - k) + PATH_GLOW[i] * k) for i in range(3))


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
        bg_idle   = (36, 40, 48, 220)
        bg_hover  = (46, 50, 60, 230)
        bg_active = (58, 86, 160, 235)
        border_active = (120, 170, 255, 255)

        if self.active and self.togglable:
            bg = bg_active
        elif self.hover:
            bg = bg_hover
        else:
            bg = bg_idle
        pygame.draw.rect(base, bg, base.get_rect(), border_radius=10)
        screen.blit(base, self.rect.topleft)

        if self.active and self.togglable:
            pygame.draw.rect(screen, border_active, self.rect, width=2, border_radius=10)

        text = font.render(self.label, True, (235,238,242))
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.callback()
                return True
        return False


# ---------- Viewer ----------
class Viewer:
    def __init__(self, grid: Grid, algorithm: str = "A*"):
        pygame.init()

        self.grid = grid
        self.font_small = pygame.font.Font(FONT_NAME, 14)
        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 22)

        cs = self._auto_cell_size(grid)
        win_w = GRID_MARGIN*2 + grid.cols * cs + PANEL_W
        win_h = max(GRID_MARGIN*2 + grid.rows * cs, 640)
        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption("Grid Search")

        self._buttons: list[UIButton] = []
        self._layout(win_w, win_h)

        self.status = StatusChannel()
        self.status.subscribe(lambda msg: logger.debug("status: %s", msg))
        self.selected_algo = algorithm
        self.search: Optional[SearchRun] = None
        self.running = False
        self.clock = pygame.time.Clock()
        self.steps_per_sec = 100
        self._step_debt = 0.0
        self._last_tick_t = time.time()
        self.brush = CellState.WALL
        self.glow_enabled = True
        self.glow_speed = 1.0
        self._last_metrics: dict = {}

    # ---------- layout ----------
    def _layout(self, win_w: int, win_h: int):
        """Compute integer cell_size that fits window and place the grid at the left."""
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)
        self.cell_size = int(max(6, min(avail_w // self.grid.cols, avail_h // self.grid.rows)))

        grid_plate_w = self.grid.cols * self.cell_size + 2 * GRID_MARGIN
        grid_plate_h = self.grid.rows * self.cell_size + 2 * GRID_MARGIN
        top_y = max(0, (win_h - grid_plate_h) // 2)

        self.canvas_rect = pygame.Rect(0, top_y, grid_plate_w, grid_plate_h)
        self._grid_origin = (self.canvas_rect.x + GRID_MARGIN, self.canvas_rect.y + GRID_MARGIN)
        self._right_band = pygame.Rect(self.canvas_rect.right, 0,
                                       max(PANEL_W, win_w - self.canvas_rect.right), win_h)
        self._build_buttons()

    def _auto_cell_size(self, grid: Grid) -> int:
        target_h = 720 - GRID_MARGIN*2
        return max(10, min(CELL_SIZE_DEFAULT, target_h // grid.rows))

    def _cell_at(self, pos: Tuple[int, int]) -> Optional[Coord]:
        ox, oy = self._grid_origin
        col = (pos[0] - ox) // self.cell_size
        row = (pos[1] - oy) // self.cell_size
        if self.grid.in_bounds((row, col)):
            return (row, col)
        return None

    # ---------- main loop ----------
    def run(self):
        while True:
            self._handle_events()
            if self.running:
                self._tick_algorithm()
            self._draw()
            self.clock.tick(60)

    def _tick_algorithm(self):
        now = time.time()
        self._step_debt += (now - self._last_tick_t) * self.steps_per_sec
        self._last_tick_t = now
        while self._step_debt >= 1.0 and self.running:
            self._step_debt -= 1.0
            self._do_step()

    def _ensure_search(self) -> bool:
        if self.search is not None:
            return True
        try:
            self.search = SearchRun(self.grid, config=RunConfig(self.selected_algo, self.status))
        except GridSearchError as ex:
            self.status.message = str(ex)
            logger.warning("cannot start %s: %s", self.selected_algo, ex)
            return False
        return True

    def _do_step(self):
        if not self._ensure_search():
            self.running = False
            return
        res = self.search.step()
        if res.metrics:
            self._last_metrics = res.metrics
        if res.status in ("done", "no_path", "aborted"):
            self.running = False
        self._refresh_active_states()

    @property
    def editing_locked(self) -> bool:
        return self.search is not None and not self.search.finished

    # ---------- events ----------
    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit(0)
            elif e.type == pygame.KEYDOWN:
                self._handle_key(e.key)
            elif e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((max(640, e.w), max(480, e.h)), pygame.RESIZABLE)
                self._layout(*self.screen.get_size())
            elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN):
                if any(b.handle_mouse(e) for b in self._buttons):
                    continue
                self._handle_paint(e)

    def _handle_key(self, key: int):
        if key in (pygame.K_ESCAPE, pygame.K_q):
            pygame.quit(); sys.exit(0)
        elif key == pygame.K_SPACE:
            self._toggle_run()
        elif key == pygame.K_n:
            self.running = False
            self._do_step()
        elif key == pygame.K_r:
            self._reset()
        elif key == pygame.K_c:
            self._clear()
        elif key == pygame.K_g:
            self._toggle_glow()
        elif key in (pygame.K_PLUS, pygame.K_EQUALS):
            self._bump_speed(+1)
        elif key in (pygame.K_MINUS, pygame.K_UNDERSCORE):
            self._bump_speed(-1)
        elif key in (pygame.K_1, pygame.K_2, pygame.K_3):
            self._switch_map(list(MAP_FILES)[key - pygame.K_1])
        elif key in ALGO_KEYS:
            self._switch_algo(ALGO_KEYS[key])
        elif key in BRUSH_KEYS:
            self.brush = BRUSH_KEYS[key]

    def _handle_paint(self, e: pygame.event.Event):
        if self.editing_locked:
            return
        buttons = pygame.mouse.get_pressed()
        if e.type == pygame.MOUSEBUTTONDOWN:
            left, right = e.button == 1, e.button == 3
        else:
            left, right = buttons[0], buttons[2]
        if not (left or right):
            return
        cell = self._cell_at(e.pos)
        if cell is None:
            return
        if self.search is not None:
            # first edit after a finished run wipes its overlay
            self.grid.reset_search_state()
            self.search = None
            self.status.message = READY
        if right:
            self.grid.set_cell_state(*cell, CellState.EMPTY)
        elif self.brush is CellState.WALL and cell in (self.grid.start, self.grid.end):
            return
        else:
            self.grid.set_cell_state(*cell, self.brush)

    # ---------- actions ----------
    def _toggle_run(self):
        if self.search is not None and self.search.finished:
            return
        self.running = not self.running
        self._last_tick_t = time.time()
        self._step_debt = 0.0
        self._refresh_active_states()

    def _reset(self):
        self.running = False
        self.search = None
        self.grid.reset_search_state()
        self.status.message = READY
        self._last_metrics = {}
        self._refresh_active_states()

    def _clear(self):
        self._reset()
        self.grid.reset_all()

    def _toggle_glow(self):
        self.glow_enabled = not self.glow_enabled
        if self.glow_enabled:
            self.glow_speed *= 1.5

    def _bump_speed(self, direction: int):
        step = max(1, self.steps_per_sec // 5)
        self.steps_per_sec = int(max(1, min(MAX_STEPS_PER_SEC, self.steps_per_sec + direction * step)))

    def _switch_algo(self, label: str):
        self.selected_algo = label
        self._reset()

    def _switch_map(self, key: str):
        try:
            grid = load_map(MAP_FILES[key])
        except GridSearchError as ex:
            self.status.message = f"Failed to load map {key}"
            logger.error("Failed to load map %s: %s", key, ex)
            return
        self.grid = grid
        pygame.display.set_caption(f"Grid Search - {key}")
        self._reset()
        self._layout(*self.screen.get_size())

    # ---------- drawing ----------
    def _draw(self):
        self._draw_backdrop()
        self._draw_grid()
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    def _draw_backdrop(self):
        w, h = self.screen.get_size()
        top = (24, 26, 32); bot = (36, 40, 48)
        for y in range(h):
            t = y / max(1, h-1)
            c = (
                int(top[0] + (bot[0]-top[0]) * t),
                int(top[1] + (bot[1]-top[1]) * t),
                int(top[2] + (bot[2]-top[2]) * t),
            )
            pygame.draw.line(self.screen, c, (0, y), (w, y))

    def _draw_grid(self):
        cs = self.cell_size
        ox, oy = self._grid_origin
        glow_order = self._path_glow_order()

        for cell in self.grid.iter_cells():
            rect = pygame.Rect(ox + cell.col*cs, oy + cell.row*cs, cs, cs)
            color = STATE_COLORS[cell.state]
            if cell.state is CellState.PATH and cell.coord in glow_order:
                color = path_glow_color(time.time(), glow_order[cell.coord], self.glow_speed)
            pygame.draw.rect(self.screen, color, rect)
            pygame.draw.rect(self.screen, GRID_LINE, rect, 1)

        for coord, label in ((self.grid.start, "S"), (self.grid.end, "E")):
            if coord is None:
                continue
            row, col = coord
            txt = self.font_small.render(label, True, WHITE)
            self.screen.blit(txt, txt.get_rect(center=(ox + col*cs + cs//2, oy + row*cs + cs//2)))

    def _path_glow_order(self) -> Dict[Coord, int]:
        """Index of each path cell counted from the start, once a finished path is shown."""
        if not self.glow_enabled or self.search is None or not self.search.finished:
            return {}
        return {c: i for i, c in enumerate(self.search.algo.path or [])}


    # ---------- buttons + metrics ----------
    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 230  # leaves space for metrics card above
        w = max(160, rb.width - 32)
        h = 34
        gap = 8
        half = (w - 8) // 2

        def add(label, cb, rect, *, togglable=False, store_as: Optional[str] = None):
            btn = UIButton(label, rect, cb, togglable=togglable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)

        add("Run / Pause", self._toggle_run, pygame.Rect(x, y, w, h), togglable=True, store_as="btn_run"); y += h + gap
        add("Step Once", lambda: self._handle_key(pygame.K_n), pygame.Rect(x, y, half, h))
        add("Reset", self._reset, pygame.Rect(x + half + 8, y, half, h)); y += h + gap
        add("Speed -", lambda: self._bump_speed(-1), pygame.Rect(x, y, half, h))
        add("Speed +", lambda: self._bump_speed(+1), pygame.Rect(x + half + 8, y, half, h)); y += h + gap

        self._algo_buttons: Dict[str, UIButton] = {}
        for i, label in enumerate(ALGORITHMS):
            rect = pygame.Rect(x + (i % 2) * (half + 8), y, half, h)
            add(f"Algo: {label}", lambda lb=label: self._switch_algo(lb), rect, togglable=True)
            self._algo_buttons[label] = self._buttons[-1]
            if i % 2:
                y += h + gap

        for i, key in enumerate(MAP_FILES):
            add(f"Map {i + 1}", lambda k=key: self._switch_map(k),
                pygame.Rect(x + i * ((w - 16) // 3 + 8), y, (w - 16) // 3, h))
        y += h + gap
        add("Clear Grid", self._clear, pygame.Rect(x, y, w, h))

        self._refresh_active_states()

    def _refresh_active_states(self):
        if hasattr(self, "btn_run"):
            self.btn_run.set_active(getattr(self, "running", False))
        for label, btn in getattr(self, "_algo_buttons", {}).items():
            btn.set_active(label == getattr(self, "selected_algo", None))

    def _draw_metrics_and_buttons(self):
        rb = self._right_band

        card_h = 210
        card = pygame.Surface((rb.width - 20, card_h), pygame.SRCALPHA)
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

        line("Metrics", big=True, color=ACCENT_GOLD)
        m = self._last_metrics
        line(f"Nodes visited: {m.get('nodes_visited', 0)}")
        line(f"Open: {m.get('open_size', 0)}   Closed: {m.get('closed_count', 0)}")
        line(f"Path Len: {m.get('path_len', 0)}")
        line("-" * 26)
        line(f"Algo: {self.selected_algo}   Brush: {self.brush.value}")
        line(f"Speed: {self.steps_per_sec} steps/s")
        line(self.status.message, color=ACCENT_GOLD)

        for b in self._buttons:
            b.draw(self.screen, self.font)


# ---------- main ----------
def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    algorithm = resolve_algorithm()
    if algorithm not in ALGORITHMS:
        print(f"Unknown algorithm {algorithm!r}; choose from {', '.join(ALGORITHMS)}")
        sys.exit(2)

    map_path = resolve_map()
    if map_path is None:
        grid = Grid(DEFAULT_ROWS, DEFAULT_COLS)
    else:
        try:
            grid = load_map(map_path)
        except GridSearchError as ex:
            print(f"Failed to load map {map_path}: {ex}")
            sys.exit(1)
    Viewer(grid, algorithm).run()


if __name__ == "__main__":
    main()
