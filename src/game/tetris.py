"""
Game orchestrator: movement, rotation, drops, locking, hold, and game state.

This module ties the Board and Piece definitions together into the rules of
the game:

  - Naive rotation: the new orientation is tried at the same position and
    simply rejected if it collides (no wall kicks).
  - Uniform randomizer: every piece kind is drawn with probability 1/7.
  - Scoring: +10 per soft-drop tick while the key is held, +10 per cell of a
    hard drop plus a final +10, and lines^2 * 100 per lock that clears lines.
  - Gravity: the piece falls one row whenever the gravity clock exceeds the
    current interval, which shrinks as lines are cleared.
"""

from __future__ import annotations

import enum
from typing import Any

import numpy as np

from src.game.board import Board
from src.game.gravity import Clock, GravitySettings
from src.game.pieces import Piece, get_piece


class Action(enum.IntEnum):
    """Logical inputs accepted by the game."""
    LEFT = 0
    RIGHT = 1
    DOWN = 2
    HARD_DROP = 3
    ROTATE_LEFT = 4
    ROTATE_RIGHT = 5
    HOLD = 6
    START = 7


class GameState(enum.Enum):
    NOT_STARTED = "not_started"
    PLAYING = "playing"
    GAME_OVER = "game_over"


# (dx, dy) applied by each movement input
MOVE_OFFSETS: dict[Action, tuple[int, int]] = {
    Action.LEFT: (-1, 0),
    Action.RIGHT: (1, 0),
    Action.DOWN: (0, 1),
}

# Quarter turns applied by each rotation input (left = +3 mod 4)
ROTATION_STEPS: dict[Action, int] = {
    Action.ROTATE_LEFT: 3,
    Action.ROTATE_RIGHT: 1,
}

DROP_POINTS = 10
LINE_CLEAR_POINTS = 100


def line_clear_score(lines: int) -> int:
    """Points for clearing `lines` rows in one lock: 100 / 400 / 900 / 1600."""
    if lines <= 0:
        return 0
    return lines * lines * LINE_CLEAR_POINTS


class TetrisGame:
    """Full game with naive rotation, hold, scoring, and gravity.

    Attributes:
        board: The game board.
        state: Current GameState.
        score: Current score.
        lines_cleared: Total lines cleared since the game started.
        pieces_locked: Number of pieces locked since the game started.
        current_piece: Active piece, or None before the first start.
        next_piece: Single lookahead piece, or None before the first start.
        held_piece: Piece in the hold slot, or None.
        has_held: Whether hold was used since the active piece spawned.
        clock: Gravity clock.
        gravity: Drop-interval ramp settings.
    """

    def __init__(
        self,
        rng: np.random.Generator | None = None,
        clock: Clock | None = None,
        gravity: GravitySettings | None = None,
    ) -> None:
        """Initialize a game in the NOT_STARTED state.

        Args:
            rng: Random generator used to draw pieces (fresh entropy if None).
            clock: Gravity clock (wall-clock based if None).
            gravity: Drop-interval ramp (defaults if None).
        """
        self.rng = rng if rng is not None else np.random.default_rng()
        self.clock = clock if clock is not None else Clock()
        self.gravity = gravity if gravity is not None else GravitySettings()

        self.board = Board()
        self.state = GameState.NOT_STARTED
        self.score: int = 0
        self.lines_cleared: int = 0
        self.pieces_locked: int = 0
        self.current_piece: Piece | None = None
        self.next_piece: Piece | None = None
        self.held_piece: Piece | None = None
        self.has_held: bool = False

    @property
    def is_playing(self) -> bool:
        return self.state is GameState.PLAYING

    def start(self) -> None:
        """Reset everything and begin a new game."""
        self.board.clear()
        self.score = 0
        self.lines_cleared = 0
        self.pieces_locked = 0
        self.held_piece = None
        self.has_held = False
        self.current_piece = get_piece(self.rng)
        self.next_piece = get_piece(self.rng)
        self.clock.restart()
        self.state = GameState.PLAYING

    def handle_input(self, action: Action) -> bool:
        """Apply one logical input.

        START is only honoured outside PLAYING; every other input is only
        honoured while PLAYING. Ignored inputs return False.

        Args:
            action: The logical input.

        Returns:
            The result of the dispatched operation, or False if ignored.
        """
        if not self.is_playing:
            if action == Action.START:
                self.start()
                return True
            return False

        if action in (Action.LEFT, Action.RIGHT):
            return self.move(action)
        if action == Action.DOWN:
            return self.soft_drop(is_held=True)
        if action in ROTATION_STEPS:
            return self.rotate(action)
        if action == Action.HARD_DROP:
            return self.hard_drop()
        if action == Action.HOLD:
            return self.hold()
        return False

    def tick(self) -> bool:
        """Apply gravity if the drop interval has elapsed.

        Returns:
            True if a gravity drop was performed this tick.
        """
        if not self.is_playing:
            return False
        if self.clock.elapsed_ms() > self.gravity.interval_ms(self.lines_cleared):
            self.soft_drop(is_held=False)
            self.clock.restart()
            return True
        return False

    # ------------------------------------------------------------------
    # Movement and rotation
    # ------------------------------------------------------------------

    def move(self, direction: Action) -> bool:
        """Try to shift the active piece one cell left, right or down.

        Returns:
            True if the move succeeded, False if blocked.
        """
        if self.current_piece is None:
            return False
        dx, dy = MOVE_OFFSETS[direction]
        piece = self.current_piece
        if self.board.check_collision(piece, piece.x + dx, piece.y + dy):
            return False
        self.current_piece = piece.moved(dx, dy)
        return True

    def rotate(self, direction: Action) -> bool:
        """Try to rotate the active piece in place.

        The new orientation is kept only if it fits at the same (x, y);
        otherwise the piece is left unchanged. The attempt itself always
        reports success.
        """
        if self.current_piece is None:
            return False
        piece = self.current_piece
        rotation = (piece.rotation + ROTATION_STEPS[direction]) % 4
        if not self.board.check_collision(piece, piece.x, piece.y, rotation):
            self.current_piece = piece.rotated(ROTATION_STEPS[direction])
        return True

    def drop_shadow_y(self) -> int | None:
        """Return the row the active piece would come to rest on.

        Returns None when there is no active piece.
        """
        piece = self.current_piece
        if piece is None:
            return None
        y = piece.y
        while not self.board.check_collision(piece, piece.x, y):
            y += 1
        return y - 1

    # ------------------------------------------------------------------
    # Drops and locking
    # ------------------------------------------------------------------

    def soft_drop(self, is_held: bool) -> bool:
        """Move the active piece down one row, locking it if it cannot move.

        Args:
            is_held: Whether the player is holding the down input (+10 points).

        Returns:
            True if the piece moved down, False if it locked instead.
        """
        if self.current_piece is None:
            return False
        if is_held:
            self.score += DROP_POINTS
        if self.move(Action.DOWN):
            return True
        self._lock()
        return False

    def hard_drop(self) -> bool:
        """Drop the active piece to its resting row and lock it."""
        if self.current_piece is None:
            return False
        while self.move(Action.DOWN):
            self.score += DROP_POINTS
        self.score += DROP_POINTS
        self._lock()
        return True

    def _lock(self) -> None:
        """Commit the active piece, clear lines and spawn the next piece."""
        assert self.current_piece is not None and self.next_piece is not None
        self.board.place_piece(self.current_piece)
        self.pieces_locked += 1

        cleared = self.board.clear_lines()
        if cleared > 0:
            self.lines_cleared += cleared
            self.score += line_clear_score(cleared)

        self._promote_next()
        self.has_held = False

        piece = self.current_piece
        if self.board.check_collision(piece, piece.x, piece.y):
            self.state = GameState.GAME_OVER

    def _promote_next(self) -> None:
        self.current_piece = self.next_piece
        self.next_piece = get_piece(self.rng)

    # ------------------------------------------------------------------
    # Hold
    # ------------------------------------------------------------------

    def hold(self) -> bool:
        """Swap the active piece with the hold slot, once per spawned piece.

        With an empty slot the active piece is stored and the next piece is
        promoted. With a held piece the two trade places and the incoming
        piece is moved back to the spawn anchor. No spawn check is made.

        Returns:
            True, including when the hold was already used for this piece.
        """
        if self.current_piece is None:
            return False
        if self.has_held:
            return True

        self.has_held = True
        if self.held_piece is None:
            self.held_piece = self.current_piece
            self._promote_next()
        else:
            self.held_piece, self.current_piece = (
                self.current_piece,
                self.held_piece.at_spawn(),
            )
        return True

    # ------------------------------------------------------------------
    # Read-only view
    # ------------------------------------------------------------------

    def get_state(self) -> dict[str, Any]:
        """Return a dict describing the observable game state.

        Returns:
            Dict with keys:
              - board_grid: np.ndarray (height x width, int8)
              - current_piece: Piece or None
              - drop_shadow_y: int or None
              - next_piece: Piece or None
              - held_piece: Piece or None
              - has_held: bool
              - score: int
              - lines_cleared: int
              - state: GameState
        """
        return {
            "board_grid": self.board.get_grid(),
            "current_piece": self.current_piece,
            "drop_shadow_y": self.drop_shadow_y(),
            "next_piece": self.next_piece,
            "held_piece": self.held_piece,
            "has_held": self.has_held,
            "score": self.score,
            "lines_cleared": self.lines_cleared,
            "state": self.state,
        }
