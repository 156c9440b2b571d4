from __future__ import annotations

from typing import Iterable

from src.game.gravity import Clock
from src.game.pieces import PIECE_TYPES, PieceKind
from src.game.tetris import Action, TetrisGame


class ScriptedRng:
    """Stand-in for numpy's Generator that deals a fixed sequence of kinds.

    Once the script runs out the last kind is repeated.
    """

    def __init__(self, kinds: Iterable[PieceKind]) -> None:
        self._indices = [PIECE_TYPES.index(kind) for kind in kinds]
        self._position = 0

    def integers(self, low: int, high: int) -> int:
        index = self._indices[min(self._position, len(self._indices) - 1)]
        self._position += 1
        assert low <= index < high
        return index


class FakeTime:
    def __init__(self) -> None:
        self.value = 0.0

    def advance(self, amount: float) -> None:
        self.value += amount

    def __call__(self) -> float:
        return self.value


def make_game(*kinds: PieceKind, time_source: FakeTime | None = None, start: bool = True) -> TetrisGame:
    """Build a game dealing `kinds` in order (active first, then next, ...)."""
    game = TetrisGame(
        rng=ScriptedRng(kinds or [PieceKind.O]),
        clock=Clock(time_source or FakeTime()),
    )
    if start:
        game.handle_input(Action.START)
    return game


def fill_row(game: TetrisGame, y: int, gaps: Iterable[int] = ()) -> None:
    skip = set(gaps)
    for x in range(game.board.width):
        if x not in skip:
            game.board.set(x, y, PieceKind.Z)
