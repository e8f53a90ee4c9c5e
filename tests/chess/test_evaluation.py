"""Unit tests for src/chess/evaluation.py"""

import pytest

from src.chess.board import Board
from src.chess.evaluation import CENTIPAWN_VALUES, PIECE_VALUES, evaluate, material
from src.chess.pieces import Color, PieceType


def test_starting_position_is_balanced() -> None:
    board = Board.starting_position()
    assert evaluate(board) == 0
    assert evaluate(board, Color.WHITE) == 0


def test_material_totals() -> None:
    """8 pawns, 2 knights, 2 bishops, 2 rooks, a queen and a king per side"""
    totals = material(Board.starting_position())
    assert totals == {Color.WHITE: 1290, Color.BLACK: 1290}

    totals = material(Board.starting_position(), CENTIPAWN_VALUES)
    assert totals == {Color.WHITE: 24000, Color.BLACK: 24000}


def test_empty_board() -> None:
    assert evaluate(Board.empty()) == 0
    assert material(Board.empty()) == {Color.WHITE: 0, Color.BLACK: 0}


def test_default_perspective_is_black() -> None:
    """Black is a queen down"""
    board = Board.from_fen("rnb1kbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR")
    assert evaluate(board) == -PIECE_VALUES[PieceType.QUEEN]
    assert evaluate(board, Color.BLACK) == -90
    assert evaluate(board, Color.WHITE) == 90


@pytest.mark.parametrize(
    "placement",
    [
        "8/8/8/3q4/8/8/8/3R4",
        "r3k2r/ppp2ppp/2n1bn2/3pp3/3PP3/2N1BN2/PPP2PPP/R3K2R",
        "8/8/8/8/8/8/8/4K3",
    ],
)
def test_perspectives_are_opposite(placement: str) -> None:
    board = Board.from_fen(placement)
    for values in (PIECE_VALUES, CENTIPAWN_VALUES):
        assert evaluate(board, Color.WHITE, values) == -evaluate(board, Color.BLACK, values)


def test_centipawn_scale() -> None:
    board = Board.from_fen("8/8/8/3b4/8/8/8/3N4")
    assert evaluate(board, Color.WHITE) == 0
    assert evaluate(board, Color.WHITE, CENTIPAWN_VALUES) == -10


def test_evaluation_ignores_position() -> None:
    """Material only: where the pieces stand does not matter"""
    centre = Board.from_fen("8/8/8/3N4/8/8/8/8")
    corner = Board.from_fen("8/8/8/8/8/8/8/7N")
    assert evaluate(centre, Color.WHITE) == evaluate(corner, Color.WHITE) == 30
