from enum import Enum

import numpy as np
import pygame


# --- Colors ---
BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
YELLOW = (255, 255, 0)
RED = (255, 0, 0)
NAVY = (0, 0, 128)


class Key(Enum):
    P = "p"
    Q = "q"
    SPACE = "space"


KEY_MAP = {
    pygame.K_p: Key.P,
    pygame.K_q: Key.Q,
    pygame.K_SPACE: Key.SPACE,
}


class CellSurface:
    """
    A character-cell frame plus the per-tick input the game reads from it.

    The run loop sets `frame_time_ms` and `key` before each tick and checks
    `quitting` afterwards. Drawing outside the grid is silently clipped.
    """

    def __init__(self, width=80, height=50):
        if width <= 0 or height <= 0:
            raise ValueError(f"Surface dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height

        self.glyphs = np.full((height, width), " ", dtype="<U1")
        self.fg = np.zeros((height, width, 3), dtype=np.uint8)
        self.bg = np.zeros((height, width, 3), dtype=np.uint8)

        self.frame_time_ms = 0.0
        self.key = None
        self.quitting = False

        self.cls()

    def cls(self):
        self.cls_bg(BLACK)

    def cls_bg(self, color):
        self.glyphs[:, :] = " "
        self.fg[:, :] = WHITE
        self.bg[:, :] = color

    def in_bounds(self, x, y):
        return 0 <= x < self.width and 0 <= y < self.height

    def set(self, x, y, fg, bg, glyph):
        if not self.in_bounds(x, y):
            return
        self.glyphs[y, x] = glyph
        self.fg[y, x] = fg
        self.bg[y, x] = bg

    def print(self, x, y, text):
        for i, ch in enumerate(text):
            self.set(x + i, y, WHITE, BLACK, ch)

    def print_centered(self, y, text):
        self.print((self.width - len(text)) // 2, y, text)

    def quit(self):
        self.quitting = True

    def row_text(self, y):
        return "".join(self.glyphs[y])


class CellRenderer:
    """Rasterises a CellSurface onto a pygame surface."""

    def __init__(self, cell_size=8):
        self.cell_size = cell_size
        pygame.font.init()
        try:
            self.font = pygame.font.SysFont("monospace", cell_size + 2, bold=True)
        except pygame.error:
            self.font = pygame.font.Font(None, cell_size + 4)
        self._glyph_cache = {}

    def size_for(self, cells):
        return cells.width * self.cell_size, cells.height * self.cell_size

    def _glyph(self, glyph, fg):
        key = (glyph, fg)
        if key not in self._glyph_cache:
            self._glyph_cache[key] = self.font.render(glyph, True, fg)
        return self._glyph_cache[key]

    def draw(self, cells, screen):
        cs = self.cell_size
        # Background: upscale the (h, w, 3) colour grid to pixels in one blit
        pixels = np.repeat(np.repeat(cells.bg, cs, axis=0), cs, axis=1)
        pygame.surfarray.blit_array(screen, np.transpose(pixels, (1, 0, 2)))

        ys, xs = np.nonzero(cells.glyphs != " ")
        for y, x in zip(ys, xs):
            fg = tuple(int(c) for c in cells.fg[y, x])
            surf = self._glyph(str(cells.glyphs[y, x]), fg)
            rect = surf.get_rect(center=(x * cs + cs // 2, y * cs + cs // 2))
            screen.blit(surf, rect)
