# gridpath/app/viewer.py
#!/usr/bin/env python3
"""
Grid Pathfinder Viewer — paint walls, place start/end, watch A* step by step.

- Mouse: left click on the grid applies the current mode (walls / start / end)
- Keyboard:
    [W]/[S]/[E]  -> mode: walls / set start / set end
    [A]/[D]      -> algorithm (A* / Dijkstra)
    [SPACE]      -> run/pause
    [N]          -> single step
    [R]          -> reset search (walls kept)
    [C]          -> clear grid (walls removed, endpoints to corners)
    [+]/[-]      -> steps/sec
    [Q]/[ESC]    -> quit

Settings: see gridpath/app/config.py (env GRIDPATH_* or --key=value).
"""

import logging
import time
from typing import Dict, List, Optional, Tuple

import pygame

from gridpath.app.config import ViewerConfig, as_dict, resolve_config
from gridpath.core.controller import InteractionController, MODE_WALL, MODE_START, MODE_END
from gridpath.core.errors import GridPathError, InvalidDimensions, InvalidEndpoints, InvalidState, OutOfBounds
from gridpath.core.types import Cell, Snapshot, StepResult, FOUND, UNREACHABLE, IDLE

logger = logging.getLogger(__name__)

# ---------- Layout ----------
PANEL_W = 320            # right band: metrics + buttons
GRID_MARGIN = 16
FONT_NAME = None  # default pygame font

# Colors
WHITE       = (255,255,255)
BLACK       = (  0,  0,  0)
CELL_BG     = ( 30, 45, 64)
WALL_GRAY   = ( 68, 68, 68)
START_GREEN = ( 40,167, 69)
END_TOMATO  = (255, 99, 71)
OPEN_CYAN_A = (0,255,255, 76)
CLOSED_YEL_A= (255,255,0, 76)
PATH_CYAN   = (0,240,255)

CARD_BG     = (24,28,36,220)
CARD_HI     = (255,255,255,18)
TEXT_LIGHT  = (230,235,240)
ACCENT_GOLD = (255,210,0)

# user-facing text for core errors
ERROR_MESSAGES: Dict[type, str] = {
    InvalidEndpoints:  "Start and end must be different, open cells.",
    OutOfBounds:       "That cell is outside the grid.",
    InvalidState:      "The grid changed; the search was reset.",
    InvalidDimensions: "The grid needs at least one row and one column.",
}

MODE_HINTS = {
    MODE_WALL:  "Click cells to draw or erase walls.",
    MODE_START: "Click an empty cell to set the start.",
    MODE_END:   "Click an empty cell to set the end.",
}


def message_for(err: GridPathError) -> str:
    for cls in type(err).__mro__:
        if cls in ERROR_MESSAGES:
            return ERROR_MESSAGES[cls]
    return "Something went wrong."


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
        bg_active = (58, 86, 160, 235)  # bluish active
        border_active = (120, 170, 255, 255)

        if self.active and self.togglable:
            bg = bg_active
        elif self.hover:
            bg = bg_hover
        else:
            bg = bg_idle

        pygame.draw.rect(base, bg, base.get_rect(), border_radius=10)

        # subtle highlight top band
        hi = pygame.Surface((self.rect.width, 18), pygame.SRCALPHA)
        pygame.draw.rect(hi, (255,255,255,20), hi.get_rect(), border_radius=10)
        base.blit(hi, (0,0))

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
    def __init__(self, controller: InteractionController, cfg: Optional[ViewerConfig] = None):
        pygame.init()

        self.ctl = controller
        self.cfg = cfg or ViewerConfig()
        self.cell_size = self.cfg.cell_size
        self.font_small = pygame.font.Font(FONT_NAME, 14)
        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 22)

        grid = self.ctl.grid
        win_w = GRID_MARGIN*2 + grid.width * self.cell_size + PANEL_W
        win_h = max(GRID_MARGIN*2 + grid.height * self.cell_size, 600)

        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption("Grid Pathfinder")

        self._buttons: List[UIButton] = []
        self._layout(win_w, win_h)

        self.running = False
        self.quit_requested = False
        self.clock = pygame.time.Clock()
        self.steps_per_sec = self.cfg.steps_per_sec
        self._last_step_t = 0.0
        self.state = "Idle"
        self.status_message = MODE_HINTS[self.ctl.mode]
        self.snap: Snapshot = self.ctl.snapshot()

    # ---------- layout ----------
    def _layout(self, win_w: int, win_h: int):
        """Compute integer cell_size that fits window and place the grid plate."""
        grid = self.ctl.grid
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)
        self.cell_size = int(max(6, min(avail_w // grid.width, avail_h // grid.height)))

        plate_w = grid.width * self.cell_size + 2 * GRID_MARGIN
        plate_h = grid.height * self.cell_size + 2 * GRID_MARGIN
        top_y = max(0, (win_h - plate_h) // 2)

        self.canvas_rect = pygame.Rect(0, top_y, plate_w, plate_h)
        self._grid_origin = (self.canvas_rect.x + GRID_MARGIN, self.canvas_rect.y + GRID_MARGIN)
        self._right_band = pygame.Rect(self.canvas_rect.right, 0,
                                       max(PANEL_W, win_w - self.canvas_rect.right), win_h)
        self._build_buttons()

    def cell_at(self, pos: Tuple[int, int]) -> Optional[Cell]:
        ox, oy = self._grid_origin
        x, y = pos
        if x < ox or y < oy:
            return None
        c = ((x - ox) // self.cell_size, (y - oy) // self.cell_size)
        return c if self.ctl.grid.in_bounds(c) else None

    # ---------- loop ----------
    def run(self):
        while not self.quit_requested:
            self.handle_events(pygame.event.get())
            if self.running:
                self._tick_algorithm()
            self._draw()
            self.clock.tick(60)
        pygame.quit()

    def _tick_algorithm(self):
        t0 = time.time()
        step_interval = 1.0 / max(1, self.steps_per_sec)
        if t0 - self._last_step_t >= step_interval:
            self._last_step_t = t0
            self.do_step()

    def do_step(self) -> Optional[StepResult]:
        if self.ctl.finished:
            return None
        try:
            res = self.ctl.step()
        except GridPathError as err:
            logger.warning("step failed: %s", err)
            self.ctl.reset_search()
            self.running = False
            self.state = "Idle"
            self.status_message = message_for(err)
            self.snap = self.ctl.snapshot()
            return None
        self.snap = self.ctl.snapshot()
        if res.status == FOUND:
            self.state = "Done"; self.running = False
            self.status_message = f"Path found: {len(res.path)} cells."
        elif res.status == UNREACHABLE:
            self.state = "No path"; self.running = False
            self.status_message = "No path. Move some walls or reset the grid."
        else:
            self.state = "Running" if self.running else "Paused"
            self.status_message = "Searching for a path..."
        self._refresh_active_states()
        return res

    # ---------- input ----------
    def handle_events(self, events):
        for e in events:
            if e.type == pygame.QUIT:
                self.quit_requested = True
            elif e.type == pygame.KEYDOWN:
                self._handle_key(e.key)
            elif e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((e.w, e.h), pygame.RESIZABLE)
                self._layout(e.w, e.h)
            elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN):
                consumed = False
                for b in self._buttons:
                    consumed = b.handle_mouse(e) or consumed
                if not consumed and e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
                    cell = self.cell_at(e.pos)
                    if cell is not None:
                        self.click_cell(cell)

    def _handle_key(self, key: int):
        if key in (pygame.K_ESCAPE, pygame.K_q):
            self.quit_requested = True
        elif key == pygame.K_SPACE:
            self._toggle_run()
        elif key == pygame.K_n:
            self.do_step()
        elif key == pygame.K_r:
            self._reset()
        elif key == pygame.K_c:
            self._clear()
        elif key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
            self._bump_speed(+1)
        elif key in (pygame.K_MINUS, pygame.K_UNDERSCORE, pygame.K_KP_MINUS):
            self._bump_speed(-1)
        elif key == pygame.K_w:
            self._set_mode(MODE_WALL)
        elif key == pygame.K_s:
            self._set_mode(MODE_START)
        elif key == pygame.K_e:
            self._set_mode(MODE_END)
        elif key == pygame.K_a:
            self._switch_algo("A*")
        elif key == pygame.K_d:
            self._switch_algo("Dijkstra")

    def click_cell(self, cell: Cell):
        if self.running:
            return  # no edits while the search animates
        try:
            changed = self.ctl.click(*cell)
        except GridPathError as err:
            self.status_message = message_for(err)
            return
        if changed:
            self._after_edit()
            self.status_message = MODE_HINTS[self.ctl.mode]

    def _after_edit(self):
        self.state = "Idle"
        self.snap = self.ctl.snapshot()
        self._refresh_active_states()

    def _set_mode(self, mode: str):
        if self.running:
            return
        self.ctl.set_mode(mode)
        self.status_message = MODE_HINTS[mode]
        self._refresh_active_states()

    def _switch_algo(self, label: str):
        self.running = False
        self.ctl.set_algo(label)
        self._after_edit()

    def _toggle_run(self):
        if self.state in ("Done", "No path"):
            return
        self.running = not self.running
        self.state = "Running" if self.running else "Paused"
        self._refresh_active_states()

    def _reset(self):
        self.running = False
        self.ctl.reset_search()
        self._after_edit()
        self.status_message = MODE_HINTS[self.ctl.mode]

    def _clear(self):
        self.running = False
        self.ctl.clear_grid()
        self._after_edit()
        self.status_message = "Grid cleared. " + MODE_HINTS[self.ctl.mode]

    def _bump_speed(self, dv: int):
        self.steps_per_sec = int(max(1, min(60, self.steps_per_sec + dv)))

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

    def _cell_rect(self, cell: Cell) -> pygame.Rect:
        cs = self.cell_size
        ox, oy = self._grid_origin
        col, row = cell
        return pygame.Rect(ox + col*cs, oy + row*cs, cs - 1, cs - 1)

    def _draw_grid(self):
        grid = self.ctl.grid
        for row in range(grid.height):
            for col in range(grid.width):
                color = WALL_GRAY if grid.is_wall(col, row) else CELL_BG
                pygame.draw.rect(self.screen, color, self._cell_rect((col, row)))

        cs = self.cell_size
        overlay = pygame.Surface((cs - 1, cs - 1), pygame.SRCALPHA)
        overlay.fill(CLOSED_YEL_A)
        for cell in self.snap.closed_cells:
            self.screen.blit(overlay, self._cell_rect(cell).topleft)
        overlay.fill(OPEN_CYAN_A)
        for cell in self.snap.open_cells:
            self.screen.blit(overlay, self._cell_rect(cell).topleft)

        if self.snap.status != IDLE:
            for cell in self.snap.path:
                pygame.draw.rect(self.screen, PATH_CYAN, self._cell_rect(cell))

        self._draw_badge(self.ctl.start, START_GREEN, "S")
        self._draw_badge(self.ctl.end, END_TOMATO, "E")

    def _draw_badge(self, cell: Cell, color: Tuple[int,int,int], label: str):
        rect = self._cell_rect(cell)
        pygame.draw.rect(self.screen, color, rect)
        txt = self.font_small.render(label, True, WHITE)
        self.screen.blit(txt, txt.get_rect(center=rect.center))

    # ---------- buttons + metrics ----------
    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 250  # leaves space for metrics card above
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
        add("Step Once", self.do_step, pygame.Rect(x, y, w, h)); y += h + gap
        add("Reset Search", self._reset, pygame.Rect(x, y, half, h))
        add("Clear Grid", self._clear, pygame.Rect(x + half + 8, y, half, h)); y += h + gap
        add("Speed −", lambda: self._bump_speed(-1), pygame.Rect(x, y, half, h))
        add("Speed +", lambda: self._bump_speed(+1), pygame.Rect(x + half + 8, y, half, h)); y += h + gap

        third = (w - 16) // 3
        add("Walls", lambda: self._set_mode(MODE_WALL), pygame.Rect(x, y, third, h), togglable=True, store_as="btn_mode_wall")
        add("Start", lambda: self._set_mode(MODE_START), pygame.Rect(x + third + 8, y, third, h), togglable=True, store_as="btn_mode_start")
        add("End", lambda: self._set_mode(MODE_END), pygame.Rect(x + 2*(third + 8), y, third, h), togglable=True, store_as="btn_mode_end"); y += h + gap

        add("Algo: A*", lambda: self._switch_algo("A*"), pygame.Rect(x, y, half, h), togglable=True, store_as="btn_algo_a")
        add("Algo: Dijkstra", lambda: self._switch_algo("Dijkstra"), pygame.Rect(x + half + 8, y, half, h), togglable=True, store_as="btn_algo_d")

        self._refresh_active_states()

    def _refresh_active_states(self):
        if hasattr(self, "btn_run"):
            self.btn_run.set_active(getattr(self, "running", False))
        if hasattr(self, "btn_mode_wall"):
            self.btn_mode_wall.set_active(self.ctl.mode == MODE_WALL)
            self.btn_mode_start.set_active(self.ctl.mode == MODE_START)
            self.btn_mode_end.set_active(self.ctl.mode == MODE_END)
        if hasattr(self, "btn_algo_a"):
            self.btn_algo_a.set_active(self.ctl.algo == "A*")
            self.btn_algo_d.set_active(self.ctl.algo == "Dijkstra")

    def _draw_metrics_and_buttons(self):
        rb = self._right_band

        card_h = 230
        card = pygame.Surface((rb.width - 20, card_h), pygame.SRCALPHA)
        pygame.draw.rect(card, CARD_BG, card.get_rect(), border_radius=14)
        hi = pygame.Surface((card.get_width(), 24), pygame.SRCALPHA)
        pygame.draw.rect(hi, CARD_HI, hi.get_rect(), border_radius=14)
        card.blit(hi, (0,0))
        self.screen.blit(card, (rb.x + 10, rb.y + 10))

        x0 = rb.x + 24
        y0 = rb.y + 18

        def line(text, big=False, color=TEXT_LIGHT, font=None):
            nonlocal y0
            f = font or (self.font_big if big else self.font)
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 6

        line("Metrics", big=True, color=ACCENT_GOLD)
        m = self.snap.metrics
        line(f"Popped: {m.get('popped', 0)}")
        line(f"Open: {m.get('open_size', 0)}")
        line(f"Closed: {m.get('closed_count', 0)}")
        line(f"Path Len: {m.get('path_len', 0)}")
        line("-" * 26)
        line(f"Algo: {self.ctl.algo}   State: {self.state}")
        line(f"Speed: {self.steps_per_sec} steps/s")
        line(self.status_message, font=self.font_small)

        for b in self._buttons:
            b.draw(self.screen, self.font)


# ---------- main ----------
def main(argv=None):
    try:
        cfg = resolve_config(argv)
    except ValueError as ex:
        logging.basicConfig(level=logging.WARNING)
        logger.error("Bad configuration: %s", ex)
        raise SystemExit(2)
    logging.basicConfig(level=cfg.log_level,
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logger.info("starting viewer with %s", as_dict(cfg))
    try:
        ctl = InteractionController.create(cfg.cols, cfg.rows, algo=cfg.algo, selection=cfg.selection)
    except GridPathError:
        logger.exception("Failed to build the grid")
        raise SystemExit(1)
    Viewer(ctl, cfg).run()


if __name__ == "__main__":
    main()
