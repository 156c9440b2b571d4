import numpy as np
import pytest

from src.game.pieces import (
    PIECE_TYPES,
    SPAWN_X,
    SPAWN_Y,
    Piece,
    PieceKind,
    get_piece,
    iter_mask_cells,
)
from tests.helpers import ScriptedRng


@pytest.mark.parametrize("kind", list(PieceKind))
@pytest.mark.parametrize("steps", [1, 3])
def test_four_rotations_return_to_starting_mask(kind, steps):
    for rotation in range(4):
        piece = Piece(kind, rotation=rotation)
        turned = piece
        for _ in range(4):
            turned = turned.rotated(steps)
        assert turned.rotation == piece.rotation
        assert turned.mask == piece.mask


@pytest.mark.parametrize("kind", list(PieceKind))
def test_every_mask_has_four_cells(kind):
    for mask in kind.masks:
        assert len(list(iter_mask_cells(mask))) == 4


def test_no_two_kinds_share_a_mask_set():
    mask_sets = {kind.masks for kind in PieceKind}
    assert len(mask_sets) == len(PieceKind)


def test_iter_mask_cells_scans_row_major_from_top_left():
    assert list(iter_mask_cells(0x00F0)) == [(0, 2), (1, 2), (2, 2), (3, 2)]
    assert list(iter_mask_cells(0x8E00)) == [(0, 0), (0, 1), (1, 1), (2, 1)]
    assert list(iter_mask_cells(0x0001)) == [(3, 3)]


def test_rotation_index_is_taken_modulo_four():
    assert Piece(PieceKind.T, rotation=5).rotation == 1
    assert Piece(PieceKind.T, rotation=-1).rotation == 3
    assert Piece(PieceKind.T, rotation=3).rotated(1).rotation == 0


def test_cells_offsets_follow_anchor_and_rotation():
    piece = Piece(PieceKind.I, rotation=1, x=2, y=5)
    assert list(piece.cells()) == [(4, 5), (4, 6), (4, 7), (4, 8)]
    assert list(piece.cells(y=10, rotation=0)) == [(2, 12), (3, 12), (4, 12), (5, 12)]


def test_moved_and_at_spawn_return_new_values():
    piece = Piece(PieceKind.S, rotation=2)
    moved = piece.moved(-3, 7)
    assert (moved.x, moved.y) == (SPAWN_X - 3, SPAWN_Y + 7)
    assert (piece.x, piece.y) == (SPAWN_X, SPAWN_Y)
    back = moved.at_spawn()
    assert (back.x, back.y, back.rotation) == (SPAWN_X, SPAWN_Y, 2)


def test_get_piece_uses_injected_rng():
    piece = get_piece(ScriptedRng([PieceKind.L]))
    assert piece == Piece(PieceKind.L, rotation=0, x=4, y=0)


def test_get_piece_is_reproducible_and_covers_every_kind():
    rng_a = np.random.default_rng(7)
    rng_b = np.random.default_rng(7)
    assert [get_piece(rng_a) for _ in range(20)] == [get_piece(rng_b) for _ in range(20)]

    rng = np.random.default_rng(123)
    kinds = {get_piece(rng).kind for _ in range(500)}
    assert kinds == set(PIECE_TYPES)


def test_kind_colors_and_sizes():
    assert PieceKind.I.color == (0, 255, 255)
    assert PieceKind.O.size == 2
    assert PieceKind.I.size == 4
    assert len({kind.color for kind in PieceKind}) == 7


@pytest.mark.parametrize("kind", list(PieceKind))
def test_every_orientation_fits_the_kind_bounding_square(kind):
    for mask in kind.masks:
        for dx, dy in iter_mask_cells(mask):
            assert dx < kind.size and dy < kind.size
