import numpy as np
import pytest

from falling_block_rl.game import (
    Piece,
    RandomPieceGenerator,
    SequencePieceGenerator,
    TetrominoType,
    piece_for,
    rotate_clockwise,
)


def test_color_id_matches_kind():
    for kind in TetrominoType:
        piece = piece_for(kind)
        assert piece.color_id == int(kind)
        assert int(piece.shape.sum()) == 4


def test_rotate_clockwise_matches_numpy():
    shape = piece_for(TetrominoType.T).shape
    rotated = rotate_clockwise(shape)
    assert rotated.tolist() == [[True, False], [True, True], [True, False]]
    assert np.array_equal(rotated, np.rot90(shape, -1))


def test_four_rotations_restore_every_shape():
    for kind in TetrominoType:
        piece = piece_for(kind)
        turned = piece
        for _ in range(4):
            turned = turned.rotated()
        assert turned.same_shape(piece)
        assert turned.kind == kind


def test_o_rotation_keeps_shape():
    piece = piece_for(TetrominoType.O)
    assert piece.rotated().same_shape(piece)


def test_i_rotation_swaps_bounding_box():
    piece = piece_for(TetrominoType.I)
    once = piece.rotated()
    twice = once.rotated()
    assert (piece.height, piece.width) == (1, 4)
    assert (once.height, once.width) == (4, 1)
    assert (twice.height, twice.width) == (1, 4)


def test_shapes_are_read_only():
    piece = piece_for(TetrominoType.S)
    with pytest.raises(ValueError):
        piece.shape[0, 0] = True
    with pytest.raises(ValueError):
        piece.rotated().shape[0, 0] = True


def test_cells_at_offsets_occupied_cells():
    piece = piece_for(TetrominoType.J)
    assert piece.cells_at(3, -1) == [(3, -1), (3, 0), (4, 0), (5, 0)]


def test_random_generator_is_reproducible_and_covers_all_kinds():
    a = RandomPieceGenerator(seed=7)
    b = RandomPieceGenerator(seed=7)
    kinds_a = [a().kind for _ in range(200)]
    kinds_b = [b().kind for _ in range(200)]
    assert kinds_a == kinds_b
    assert set(kinds_a) == set(TetrominoType)


def test_sequence_generator_wraps():
    gen = SequencePieceGenerator([TetrominoType.I, 2])
    assert [gen().kind for _ in range(5)] == [
        TetrominoType.I,
        TetrominoType.O,
        TetrominoType.I,
        TetrominoType.O,
        TetrominoType.I,
    ]
    gen.seed(None)
    assert gen().kind == TetrominoType.I


def test_sequence_generator_rejects_empty_and_unknown():
    with pytest.raises(ValueError):
        SequencePieceGenerator([])
    with pytest.raises(ValueError):
        SequencePieceGenerator([8])


def test_piece_equality_ignores_shape_identity():
    assert piece_for(TetrominoType.L) == Piece(TetrominoType.L, piece_for(TetrominoType.L).shape.copy())
