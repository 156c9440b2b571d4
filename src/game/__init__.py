"""Game logic: pieces, board, gravity, and game orchestrator."""

from src.game.pieces import PIECE_TYPES, Piece, PieceKind, get_piece
from src.game.board import Board
from src.game.gravity import Clock, GravitySettings
from src.game.tetris import TetrisGame, Action, GameState

__all__ = [
    "PIECE_TYPES",
    "Piece",
    "PieceKind",
    "get_piece",
    "Board",
    "Clock",
    "GravitySettings",
    "TetrisGame",
    "Action",
    "GameState",
]
