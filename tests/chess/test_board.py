"""Unit tests for /src/chess/board.py"""

from typing import Callable

import pytest

from src.chess.board import NUM_SQUARES, STARTING_PLACEMENT, Board
from src.chess.moves import Move
from src.chess.pieces import PIECE_TO_FEN, Color, Piece, PieceType
from src.chess.square import Square
from src.core.exceptions import MalformedFENError

EMPTY_FEN = "/".join(["8"] * 8)


@pytest.fixture
def board_with_single_piece() -> Callable[[PieceType, Color, str], Board]:
    """Call the inner function that will be returned with the desired piece type, color, and square"""

    def _create_board(
        piece_type: PieceType,
        color: Color,
        square_name: str = "d4",
    ) -> Board:
        fen_char = PIECE_TO_FEN[piece_type]
        fen_char = fen_char.upper() if color == Color.WHITE else fen_char.lower()

        square = Square.from_algebraic(square_name)
        fen_rows = ["8"] * 8
        left, right = square.col, 7 - square.col
        fen_rows[square.row] = f"{left or ''}{fen_char}{right or ''}"
        return Board.from_fen("/".join(fen_rows))

    return _create_board


# --- DECODING ---
def test_decode_starting_position() -> None:
    """Black's back rank is row 0, white's back rank is row 7, the middle of the board is empty"""
    rows = Board.from_fen(STARTING_PLACEMENT).to_rows()
    assert rows[0] == ["r", "n", "b", "q", "k", "b", "n", "r"]
    assert rows[1] == ["p"] * 8
    for row in rows[2:6]:
        assert row == [None] * 8
    assert rows[6] == ["P"] * 8
    assert rows[7] == ["R", "N", "B", "Q", "K", "B", "N", "R"]


def test_decode_empty_board() -> None:
    board = Board.from_fen(EMPTY_FEN)
    assert board == Board.empty()
    assert list(board.occupied_squares()) == []


@pytest.mark.parametrize(
    "piece_type, color, square_name",
    [
        (PieceType.KING, Color.WHITE, "a1"),
        (PieceType.QUEEN, Color.BLACK, "h8"),
        (PieceType.KNIGHT, Color.WHITE, "e4"),
        (PieceType.PAWN, Color.BLACK, "b7"),
    ],
)
def test_decode_single_piece(
    board_with_single_piece: Callable[[PieceType, Color, str], Board],
    piece_type: PieceType,
    color: Color,
    square_name: str,
) -> None:
    board = board_with_single_piece(piece_type, color, square_name)
    assert board.piece(Square.from_algebraic(square_name)) == Piece(piece_type, color)
    assert len(list(board.occupied_squares())) == 1


@pytest.mark.parametrize(
    "invalid_placement",
    [
        "/".join(["8"] * 7),  # too few ranks
        "/".join(["8"] * 9),  # too many ranks
        "/".join(["7"] + ["8"] * 7),  # rank too short
        "/".join(["9"] + ["8"] * 7),  # invalid run of empty squares
        "/".join(["r8"] + ["8"] * 7),  # rank too long
        "/".join(["rnbqkbnrr"] + ["8"] * 7),  # rank too long, letters only
        "/".join(["x7"] + ["8"] * 7),  # unknown piece
        "/".join(["8"] * 7 + ["RNBQKBN²"]),  # superscript two is a digit, but not a FEN digit
        "/".join(["٨"] + ["8"] * 7),  # arabic-indic eight
        "",
    ],
)
def test_decode_malformed_placement(invalid_placement: str) -> None:
    """Fail fast instead of producing a corrupt board"""
    with pytest.raises(MalformedFENError):
        Board.from_fen(invalid_placement)


def test_board_must_have_64_squares() -> None:
    with pytest.raises(ValueError):
        Board((None,) * (NUM_SQUARES - 1))


# --- ENCODING ---
@pytest.mark.parametrize(
    "placement",
    [
        STARTING_PLACEMENT,
        EMPTY_FEN,
        "rnbqkbnr/pp1ppppp/8/2p5/4P3/5N2/PPPP1PPP/RNBQKB1R",
        "8/8/8/3k4/8/8/8/4K3",
        "K7/8/8/8/8/8/8/7k",
        "r6r/1b2k1bq/8/8/7B/8/8/R3K2R",
        # no piece count invariant: no kings, or several
        "KKKK4/8/8/8/8/8/8/kkkk4",
    ],
)
def test_placement_round_trip(placement: str) -> None:
    """Decoding then encoding gives back the same placement field"""
    assert Board.from_fen(placement).to_fen() == placement


def test_empty_runs_are_collapsed() -> None:
    board = Board.empty()
    cells = list(board.cells)
    cells[Square.from_algebraic("c5").index] = Piece(PieceType.ROOK, Color.BLACK)
    board = Board(tuple(cells))
    assert board.to_fen() == "8/8/8/2r5/8/8/8/8"


def test_rows_round_trip() -> None:
    board = Board.starting_position()
    assert Board.from_rows(board.to_rows()) == board


def test_from_rows_requires_8x8() -> None:
    with pytest.raises(MalformedFENError):
        Board.from_rows([[None] * 8] * 7)


# --- MOVING PIECES ---
def test_after_move_returns_new_board() -> None:
    """The original board is untouched: sibling search branches rely on this"""
    board = Board.starting_position()
    new_board = board.after_move(Move.from_uci("e2e4"))

    assert board.to_fen() == STARTING_PLACEMENT
    assert new_board.to_fen() == "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR"


def test_after_move_captures() -> None:
    board = Board.from_fen("8/8/8/3p4/8/8/8/3R4")
    new_board = board.after_move(Move.from_uci("d1d5"))
    assert new_board.piece(Square.from_algebraic("d5")) == Piece(PieceType.ROOK, Color.WHITE)
    assert new_board.is_empty(Square.from_algebraic("d1"))
    assert len(list(new_board.occupied_squares())) == 1


def test_after_moves() -> None:
    board = Board.starting_position().after_moves(
        [Move.from_uci("e2e4"), Move.from_uci("e7e5"), Move.from_uci("g1f3")]
    )
    assert board.to_fen() == "rnbqkbnr/pppp1ppp/8/4p3/4P3/5N2/PPPP1PPP/RNBQKB1R"


def test_locate_color_in_row_major_order() -> None:
    board = Board.from_fen("8/8/8/8/8/8/1P6/R6K")
    squares = [square.to_algebraic() for square in board.locate_color(Color.WHITE)]
    assert squares == ["b2", "a1", "h1"]
    assert board.locate_color(Color.BLACK) == []


def test_locate_pieces() -> None:
    board = Board.starting_position()
    kings = {square.to_algebraic() for square in board.locate_pieces(PieceType.KING)}
    assert kings == {"e1", "e8"}
