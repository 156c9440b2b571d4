"""
Tetromino definitions: kinds, colors, and 16-bit rotation masks.

Each kind has 4 rotation states (0=spawn, 1=right, 2=180, 3=left). A rotation
state is a 16-bit mask describing a 4x4 bounding box scanned row-major, with
the most significant bit as cell (0, 0):

    bit index i  ->  (dx, dy) = (i % 4, i // 4)
    mask bit     ->  0x8000 >> i

Coordinate convention:
  - A piece's (x, y) is the top-left corner of its 4x4 box on the board.
  - Row 0 is the top of the board and y increases downward.
"""

from __future__ import annotations

import dataclasses
import enum
from typing import Iterator

import numpy as np

# =============================================================================
# Piece Colors (RGB)
# =============================================================================

COLOR_CYAN   = (0, 255, 255)    # I
COLOR_BLUE   = (0, 0, 255)      # J
COLOR_ORANGE = (255, 165, 0)    # L
COLOR_YELLOW = (255, 255, 0)    # O
COLOR_GREEN  = (0, 255, 0)      # S
COLOR_PURPLE = (128, 0, 128)    # T
COLOR_RED    = (255, 0, 0)      # Z

# Fixed spawn anchor for every new active piece
SPAWN_X = 4
SPAWN_Y = 0

MASK_SIZE = 4
MASK_CELLS = MASK_SIZE * MASK_SIZE


class PieceKind(enum.IntEnum):
    """The seven tetromino kinds.

    Values start at 1 so that 0 can mark an empty board cell.
    """
    I = 1
    J = 2
    L = 3
    O = 4
    S = 5
    T = 6
    Z = 7

    @property
    def masks(self) -> tuple[int, int, int, int]:
        return PIECE_MASKS[self]

    @property
    def color(self) -> tuple[int, int, int]:
        return PIECE_COLORS[self]

    @property
    def size(self) -> int:
        """Side of the smallest square box the piece rotates within."""
        return PIECE_SIZES[self]


# =============================================================================
# Rotation masks
# =============================================================================
# Rotation order: [0=spawn, 1=right, 2=180, 3=left]

PIECE_MASKS: dict[PieceKind, tuple[int, int, int, int]] = {
    PieceKind.I: (0x00F0, 0x2222, 0x00F0, 0x2222),
    PieceKind.J: (0x44C0, 0x8E00, 0x6440, 0x0E20),
    PieceKind.L: (0x4460, 0x0E80, 0xC440, 0x2E00),
    PieceKind.O: (0xCC00, 0xCC00, 0xCC00, 0xCC00),
    PieceKind.S: (0x06C0, 0x4620, 0x06C0, 0x4620),
    PieceKind.T: (0x0E40, 0x4C40, 0x4E00, 0x4640),
    PieceKind.Z: (0x0C60, 0x2640, 0x0C60, 0x2640),
}

PIECE_COLORS: dict[PieceKind, tuple[int, int, int]] = {
    PieceKind.I: COLOR_CYAN,
    PieceKind.J: COLOR_BLUE,
    PieceKind.L: COLOR_ORANGE,
    PieceKind.O: COLOR_YELLOW,
    PieceKind.S: COLOR_GREEN,
    PieceKind.T: COLOR_PURPLE,
    PieceKind.Z: COLOR_RED,
}

PIECE_SIZES: dict[PieceKind, int] = {
    PieceKind.I: 4,
    PieceKind.J: 3,
    PieceKind.L: 3,
    PieceKind.O: 2,
    PieceKind.S: 3,
    PieceKind.T: 3,
    PieceKind.Z: 3,
}

# Ordered list used by the randomizer: index n of rng.integers(0, 7)
PIECE_TYPES: list[PieceKind] = [
    PieceKind.I,
    PieceKind.J,
    PieceKind.L,
    PieceKind.O,
    PieceKind.S,
    PieceKind.T,
    PieceKind.Z,
]


def iter_mask_cells(mask: int) -> Iterator[tuple[int, int]]:
    """Yield the (dx, dy) offset of every set bit in a 4x4 rotation mask.

    Bits are visited from the most significant (index 0, top-left) to the
    least significant (index 15, bottom-right).

    Args:
        mask: 16-bit occupancy mask.

    Yields:
        (dx, dy) offsets inside the 4x4 box.
    """
    for index in range(MASK_CELLS):
        if mask & (0x8000 >> index):
            yield index % MASK_SIZE, index // MASK_SIZE


@dataclasses.dataclass(frozen=True)
class Piece:
    """A tetromino instance: kind, rotation state and anchor position.

    Pieces are immutable values; movement and rotation build new pieces.
    """
    kind: PieceKind
    rotation: int = 0
    x: int = SPAWN_X
    y: int = SPAWN_Y

    def __post_init__(self) -> None:
        object.__setattr__(self, "rotation", self.rotation % 4)

    @property
    def mask(self) -> int:
        return self.kind.masks[self.rotation]

    @property
    def color(self) -> tuple[int, int, int]:
        return self.kind.color

    def cells(
        self,
        x: int | None = None,
        y: int | None = None,
        rotation: int | None = None,
    ) -> Iterator[tuple[int, int]]:
        """Yield absolute board cells covered by this piece.

        Args:
            x: Anchor column to evaluate at (defaults to the piece's own).
            y: Anchor row to evaluate at (defaults to the piece's own).
            rotation: Rotation state to evaluate (defaults to the current one).

        Yields:
            (column, row) board coordinates. May lie outside the board.
        """
        x = self.x if x is None else x
        y = self.y if y is None else y
        mask = self.mask if rotation is None else self.kind.masks[rotation % 4]
        for dx, dy in iter_mask_cells(mask):
            yield x + dx, y + dy

    def moved(self, dx: int, dy: int) -> Piece:
        return dataclasses.replace(self, x=self.x + dx, y=self.y + dy)

    def rotated(self, steps: int) -> Piece:
        """Return this piece turned by `steps` quarter turns (+1 = right)."""
        return dataclasses.replace(self, rotation=(self.rotation + steps) % 4)

    def at_spawn(self) -> Piece:
        """Return this piece with its anchor reset to the spawn position."""
        return dataclasses.replace(self, x=SPAWN_X, y=SPAWN_Y)


def get_piece(rng: np.random.Generator) -> Piece:
    """Draw a fresh piece of uniformly random kind at the spawn anchor.

    Args:
        rng: Injected numpy random generator.

    Returns:
        A new Piece with rotation 0 at (SPAWN_X, SPAWN_Y).
    """
    kind = PIECE_TYPES[int(rng.integers(0, len(PIECE_TYPES)))]
    return Piece(kind)
