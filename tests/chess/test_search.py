"""Unit tests for src/chess/search.py"""

import pytest

from src.chess.board import Board
from src.chess.evaluation import CENTIPAWN_VALUES, evaluate
from src.chess.moves import Move, all_moves
from src.chess.pieces import Color
from src.chess.search import INFINITY, best_move, minimax, search

HANGING_QUEEN = "8/8/8/3q4/8/8/8/3R4"
# white takes the pawn on d4 and loses the rook to the rook on d8
PROTECTED_PAWN = "3r4/8/8/8/3p4/8/8/3R4"
MIDDLEGAME = "r3k2r/ppp2ppp/2n1bn2/3pp3/3PP3/2N1BN2/PPP2PPP/R3K2R"


def one_ply_choice(board: Board, side: Color) -> tuple[Move, int]:
    """First move with the best static score after it is played"""
    best, best_score = None, None
    for move in all_moves(board, side):
        score = evaluate(board.after_move(move), side)
        if best_score is None or score > best_score:
            best, best_score = move, score
    return best, best_score


@pytest.mark.parametrize("depth", [1, 2, 3])
def test_white_captures_hanging_piece(depth: int) -> None:
    """The side to move is the maximizing side, whatever its color"""
    result = search(Board.from_fen(HANGING_QUEEN), Color.WHITE, depth)
    assert result.move == Move.from_uci("d1d5")
    assert result.score == 50


@pytest.mark.parametrize("depth", [1, 2, 3])
def test_black_captures_hanging_piece(depth: int) -> None:
    result = search(Board.from_fen("3r4/8/8/8/8/8/8/3Q4"), Color.BLACK, depth)
    assert result.move == Move.from_uci("d8d1")
    assert result.score == 50


def test_deeper_search_sees_the_recapture() -> None:
    board = Board.from_fen(PROTECTED_PAWN)

    greedy = search(board, Color.WHITE, 1)
    assert greedy.move == Move.from_uci("d1d4")
    assert greedy.score == 0

    careful = search(board, Color.WHITE, 2)
    assert careful.move != Move.from_uci("d1d4")
    assert careful.score == -10


@pytest.mark.parametrize(
    "placement, side",
    [
        (HANGING_QUEEN, Color.WHITE),
        (HANGING_QUEEN, Color.BLACK),
        (PROTECTED_PAWN, Color.WHITE),
        (MIDDLEGAME, Color.BLACK),
    ],
)
def test_depth_zero_is_a_one_ply_static_choice(placement: str, side: Color) -> None:
    board = Board.from_fen(placement)
    move, score = one_ply_choice(board, side)

    result = search(board, side, 0)
    assert result.move == move
    assert result.score == score
    # the root plus one leaf per move
    assert result.nodes == 1 + len(all_moves(board, side))
    # a depth of 1 looks exactly as far
    assert search(board, side, 1).move == move


@pytest.mark.parametrize(
    "placement, side, depth",
    [
        (HANGING_QUEEN, Color.WHITE, 3),
        (PROTECTED_PAWN, Color.WHITE, 3),
        (PROTECTED_PAWN, Color.BLACK, 3),
        ("8/8/3k4/8/8/2N5/8/4K2R", Color.WHITE, 3),
        ("rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR", Color.WHITE, 2),
        (MIDDLEGAME, Color.WHITE, 1),
        (MIDDLEGAME, Color.BLACK, 2),
    ],
)
def test_pruning_does_not_change_the_result(placement: str, side: Color, depth: int) -> None:
    """Alpha-beta only skips work: same move, same score as plain minimax"""
    board = Board.from_fen(placement)
    pruned = search(board, side, depth, prune=True)
    full = search(board, side, depth, prune=False)

    assert pruned.move == full.move
    assert pruned.score == full.score
    assert pruned.nodes <= full.nodes


def test_pruning_skips_nodes() -> None:
    board = Board.starting_position()
    assert search(board, Color.WHITE, 3).nodes < search(board, Color.WHITE, 3, prune=False).nodes


def test_ties_keep_the_first_generated_move() -> None:
    """A lone king scores the same wherever it goes: the first king direction wins"""
    board = Board.from_fen("8/8/8/8/8/8/8/4K3")
    for depth in (0, 1, 2):
        result = search(board, Color.WHITE, depth)
        assert result.move == all_moves(board, Color.WHITE)[0]
        assert result.move == Move.from_uci("e1d2")
        assert result.score == 900


def test_no_moves() -> None:
    """The side without pieces gets no move and the static score"""
    board = Board.from_fen("8/8/8/8/8/8/8/4K3")
    result = search(board, Color.BLACK, 3)
    assert result.move is None
    assert result.score == -900
    assert result.nodes == 1
    assert best_move(board, Color.BLACK, 3) is None


def test_negative_depth() -> None:
    with pytest.raises(ValueError):
        search(Board.starting_position(), Color.WHITE, -1)


def test_search_does_not_touch_the_board() -> None:
    board = Board.from_fen(MIDDLEGAME)
    search(board, Color.WHITE, 2)
    assert board.to_fen() == MIDDLEGAME


def test_centipawn_values() -> None:
    result = search(Board.from_fen(HANGING_QUEEN), Color.WHITE, 1, values=CENTIPAWN_VALUES)
    assert result.move == Move.from_uci("d1d5")
    assert result.score == 500


def test_best_move() -> None:
    assert best_move(Board.from_fen(HANGING_QUEEN), Color.WHITE, 2) == Move.from_uci("d1d5")


def test_minimax_leaf_and_terminal_scores() -> None:
    """Depth 0 and positions without moves are scored from the perspective side"""
    board = Board.from_fen(HANGING_QUEEN)
    assert minimax(board, Color.WHITE, 0, -INFINITY, INFINITY, True, Color.WHITE) == -40
    assert minimax(board, Color.WHITE, 0, -INFINITY, INFINITY, True, Color.BLACK) == 40

    lone_king = Board.from_fen("8/8/8/8/8/8/8/4K3")
    assert minimax(lone_king, Color.BLACK, 2, -INFINITY, INFINITY, False, Color.WHITE) == 900
