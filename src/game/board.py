"""
Board logic for a 10x20 grid.

The board is a 2D numpy array (height x width) of int8 values:
  - 0 = empty cell
  - 1-7 = PieceKind id of the piece that filled it (used for coloring)

Cells are addressed as (x, y) = (column, row) in the public API and stored
as grid[y, x]. Row 0 is the top of the board.
"""

from __future__ import annotations

import numpy as np

from src.game.pieces import Piece, PieceKind

BOARD_WIDTH = 10
BOARD_HEIGHT = 20

EMPTY = 0


class Board:
    """Tetris board with collision detection and line clearing.

    Attributes:
        width: Number of columns (10).
        height: Number of rows (20).
        grid: 2D numpy array of shape (height, width), dtype int8.
    """

    def __init__(self, width: int = BOARD_WIDTH, height: int = BOARD_HEIGHT) -> None:
        self.width = width
        self.height = height
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> PieceKind | None:
        """Return the kind occupying (x, y), or None if the cell is empty."""
        assert self.in_bounds(x, y), f"cell ({x}, {y}) outside board"
        value = int(self.grid[y, x])
        if value == EMPTY:
            return None
        return PieceKind(value)

    def set(self, x: int, y: int, kind: PieceKind | None) -> None:
        """Fill (x, y) with `kind`, or empty it when `kind` is None."""
        assert self.in_bounds(x, y), f"cell ({x}, {y}) outside board"
        self.grid[y, x] = EMPTY if kind is None else int(kind)

    def color_at(self, x: int, y: int) -> tuple[int, int, int] | None:
        kind = self.get(x, y)
        return None if kind is None else kind.color

    def is_occupied(self, x: int, y: int) -> bool:
        return self.grid[y, x] != EMPTY

    def clear(self) -> None:
        """Reset every cell to empty."""
        self.grid = np.zeros((self.height, self.width), dtype=np.int8)

    def check_collision(self, piece: Piece, x: int, y: int, rotation: int | None = None) -> bool:
        """Check whether `piece` placed at (x, y) would collide.

        A candidate position collides if any filled cell of the piece's mask:
          - Lies outside the board (x < 0, x >= width, y < 0, y >= height).
            Cells above the top row count as out of bounds.
          - Overlaps an occupied board cell.

        Args:
            piece: The piece whose mask is tested.
            x: Candidate anchor column.
            y: Candidate anchor row.
            rotation: Rotation state to test (defaults to the piece's current).

        Returns:
            True if the position collides, False if it is free.
        """
        for cx, cy in piece.cells(x, y, rotation):
            if not self.in_bounds(cx, cy):
                return True
            if self.is_occupied(cx, cy):
                return True
        return False

    def place_piece(self, piece: Piece) -> None:
        """Lock a piece onto the board at its current position.

        Does NOT check for collisions first. The caller must ensure the
        position is valid.
        """
        for cx, cy in piece.cells():
            self.set(cx, cy, piece.kind)

    def is_row_full(self, y: int) -> bool:
        return bool(np.all(self.grid[y] != EMPTY))

    def remove_row(self, y: int) -> None:
        """Drop every row above `y` down by one; row 0 becomes empty."""
        self.grid[1:y + 1] = self.grid[0:y].copy()
        self.grid[0] = EMPTY

    def clear_lines(self) -> int:
        """Remove all full rows, scanning from the bottom row upward.

        After a row is removed the rows above have moved down, so the same
        row index is examined again before moving on.

        Returns:
            The number of rows cleared (0-4 for a single lock).
        """
        cleared = 0
        y = self.height - 1
        while y >= 0:
            if self.is_row_full(y):
                self.remove_row(y)
                cleared += 1
            else:
                y -= 1
        return cleared

    def get_grid(self) -> np.ndarray:
        """Return a copy of the board grid."""
        return self.grid.copy()
