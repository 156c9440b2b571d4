"""
Pygame renderer for the game.

Draws the board grid, active piece, drop shadow, next piece preview, held
piece preview, and a sidebar with score / lines information. The renderer
only reads TetrisGame.get_state(); it never mutates the game.
"""

from __future__ import annotations

from typing import Any

try:
    import pygame
except ImportError:
    pygame = None  # type: ignore[assignment]

from src.game.pieces import Piece, iter_mask_cells
from src.game.tetris import GameState, TetrisGame


# ── Color constants ───────────────────────────────────────────────────────
BACKGROUND_COLOR = (30, 30, 30)
GRID_LINE_COLOR = (60, 60, 60)
BORDER_COLOR = (200, 200, 200)
TEXT_COLOR = (255, 255, 255)
SIDEBAR_BG_COLOR = (20, 20, 20)
EMPTY_CELL_COLOR = (40, 40, 40)


def _darker(color: tuple[int, int, int]) -> tuple[int, int, int]:
    return tuple(max(0, c - 40) for c in color)  # type: ignore[return-value]


def shadow_visible(piece: Piece | None, shadow_y: int | None) -> bool:
    """Whether a drop shadow should be drawn for `piece` resting at `shadow_y`.

    Nothing is drawn when the piece already rests there, or when it overlaps
    the stack (a held piece swapped back in can do that), in which case
    the shadow row lies above the piece.
    """
    if piece is None or shadow_y is None:
        return False
    return shadow_y > piece.y


class TetrisRenderer:
    """Pygame-based renderer for a TetrisGame.

    The window is divided into:
      - Left: board area (cell_size * board width) x (cell_size * board height)
      - Right: sidebar with next piece, held piece, score and lines

    Attributes:
        game: The TetrisGame being rendered.
        cell_size: Pixel size of each grid cell.
        screen: Pygame display surface (created on first render).
    """

    SIDEBAR_WIDTH_CELLS: int = 7

    def __init__(self, game: TetrisGame, cell_size: int = 30) -> None:
        """Initialize the renderer.

        Does NOT create the Pygame window yet; that happens on the first
        call to render().

        Raises:
            ImportError: If pygame is not installed.
        """
        if pygame is None:
            raise ImportError("pygame is required for rendering. Install it: pip install pygame")

        self.game = game
        self.cell_size = cell_size

        self.board_pixel_width = cell_size * game.board.width
        self.board_pixel_height = cell_size * game.board.height
        self.sidebar_width = cell_size * self.SIDEBAR_WIDTH_CELLS
        self.window_width = self.board_pixel_width + self.sidebar_width
        self.window_height = self.board_pixel_height

        self.screen: pygame.Surface | None = None
        self._clock: pygame.time.Clock | None = None
        self._font: pygame.font.Font | None = None
        self._initialized: bool = False

    def render(self, fps: int = 60) -> None:
        """Draw the current game state and cap the frame rate."""
        if not self._initialized:
            self._init_pygame()

        view = self.game.get_state()

        self.screen.fill(BACKGROUND_COLOR)
        self._draw_board(view)
        self._draw_drop_shadow(view)
        self._draw_current_piece(view)
        self._draw_sidebar(view)

        pygame.draw.rect(
            self.screen,
            BORDER_COLOR,
            (0, 0, self.board_pixel_width, self.board_pixel_height),
            2,
        )

        if view["state"] is GameState.NOT_STARTED:
            self._draw_banner("TETRIS", "Press ENTER to start")
        elif view["state"] is GameState.GAME_OVER:
            self._draw_banner("GAME OVER", "Press ENTER to restart")

        pygame.display.flip()
        self._clock.tick(fps)

    def _init_pygame(self) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode((self.window_width, self.window_height))
        pygame.display.set_caption("Tetris")
        self._clock = pygame.time.Clock()
        self._font = pygame.font.SysFont("monospace", 20)
        self._big_font = pygame.font.SysFont("monospace", 36, bold=True)
        self._initialized = True

    def _draw_cell(self, x: int, y: int, size: int, color: tuple[int, int, int]) -> None:
        pygame.draw.rect(self.screen, color, (x, y, size, size))
        # Slightly darker border for 3D effect
        pygame.draw.rect(self.screen, _darker(color), (x, y, size, size), 1)

    def _draw_board(self, view: dict[str, Any]) -> None:
        """Draw locked cells and grid lines."""
        board = self.game.board
        rows, cols = view["board_grid"].shape

        for row in range(rows):
            for col in range(cols):
                color = board.color_at(col, row)
                x = col * self.cell_size
                y = row * self.cell_size

                if color is not None:
                    self._draw_cell(x, y, self.cell_size, color)
                else:
                    pygame.draw.rect(
                        self.screen, EMPTY_CELL_COLOR, (x, y, self.cell_size, self.cell_size)
                    )

                pygame.draw.rect(
                    self.screen, GRID_LINE_COLOR, (x, y, self.cell_size, self.cell_size), 1
                )

    def _draw_current_piece(self, view: dict[str, Any]) -> None:
        piece: Piece | None = view["current_piece"]
        if piece is None:
            return
        for col, row in piece.cells():
            if self.game.board.in_bounds(col, row):
                self._draw_cell(col * self.cell_size, row * self.cell_size, self.cell_size, piece.color)

    def _draw_drop_shadow(self, view: dict[str, Any]) -> None:
        """Outline where the active piece would land if hard-dropped."""
        piece: Piece | None = view["current_piece"]
        shadow_y = view["drop_shadow_y"]
        if not shadow_visible(piece, shadow_y):
            return

        for col, row in piece.cells(y=shadow_y):
            if self.game.board.in_bounds(col, row):
                pygame.draw.rect(
                    self.screen,
                    piece.color,
                    (col * self.cell_size, row * self.cell_size, self.cell_size, self.cell_size),
                    1,
                )

    def _draw_sidebar(self, view: dict[str, Any]) -> None:
        """Draw the sidebar with next piece, held piece, score and lines."""
        sidebar_x = self.board_pixel_width
        pygame.draw.rect(
            self.screen,
            SIDEBAR_BG_COLOR,
            (sidebar_x, 0, self.sidebar_width, self.window_height),
        )
        pygame.draw.line(
            self.screen,
            BORDER_COLOR,
            (sidebar_x, 0),
            (sidebar_x, self.window_height),
            2,
        )

        x_left = sidebar_x + 15

        self._draw_piece_preview(view["next_piece"], x_left, 20, "NEXT")

        hold_label = "HOLD (used)" if view["has_held"] else "HOLD"
        self._draw_piece_preview(view["held_piece"], x_left, 160, hold_label)

        text_y = 310
        self._draw_text("SCORE", x_left, text_y)
        self._draw_text(str(view["score"]), x_left, text_y + 25)

        text_y += 65
        self._draw_text("LINES", x_left, text_y)
        self._draw_text(str(view["lines_cleared"]), x_left, text_y + 25)

    def _draw_piece_preview(
        self,
        piece: Piece | None,
        x_offset: int,
        y_offset: int,
        label: str,
    ) -> None:
        """Draw a small piece preview box (next / held piece).

        The piece is drawn in its current rotation, centred on its kind's
        bounding square (4 for I, 2 for O, 3 otherwise).
        """
        preview_cell = self.cell_size * 2 // 3
        box_size = preview_cell * 5

        self._draw_text(label, x_offset, y_offset)

        box_y = y_offset + 25
        pygame.draw.rect(self.screen, EMPTY_CELL_COLOR, (x_offset, box_y, box_size, box_size))
        pygame.draw.rect(self.screen, BORDER_COLOR, (x_offset, box_y, box_size, box_size), 1)

        if piece is None:
            return

        margin = (box_size - piece.kind.size * preview_cell) // 2
        for dx, dy in iter_mask_cells(piece.mask):
            px = x_offset + margin + dx * preview_cell
            py = box_y + margin + dy * preview_cell
            self._draw_cell(px, py, preview_cell, piece.color)

    def _draw_banner(self, title: str, subtitle: str) -> None:
        """Draw a semi-transparent overlay with a title and a hint line."""
        overlay = pygame.Surface(
            (self.board_pixel_width, self.board_pixel_height), pygame.SRCALPHA
        )
        overlay.fill((0, 0, 0, 150))
        self.screen.blit(overlay, (0, 0))

        text_title = self._big_font.render(title, True, (255, 50, 50))
        text_hint = self._font.render(subtitle, True, TEXT_COLOR)

        cx = self.board_pixel_width // 2
        cy = self.board_pixel_height // 2
        self.screen.blit(text_title, (cx - text_title.get_width() // 2, cy - 40))
        self.screen.blit(text_hint, (cx - text_hint.get_width() // 2, cy + 10))

    def _draw_text(self, text: str, x: int, y: int, color: tuple[int, int, int] = TEXT_COLOR) -> None:
        surface = self._font.render(text, True, color)
        self.screen.blit(surface, (x, y))

    def close(self) -> None:
        """Shut down Pygame and close the window."""
        if self._initialized:
            pygame.quit()
            self._initialized = False
