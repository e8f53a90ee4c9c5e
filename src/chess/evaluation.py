"""
Static position evaluation: material balance only.

Scores are signed integers relative to a `perspective` color: positive is good for that side.
The default perspective is black, the side the computer plays in a default game.
"""

from src.chess.board import Board
from src.chess.pieces import Color, PieceType

PieceValues = dict[PieceType, int]

# The lighter scale, used by default.
PIECE_VALUES: PieceValues = {
    PieceType.PAWN: 10,
    PieceType.KNIGHT: 30,
    PieceType.BISHOP: 30,
    PieceType.ROOK: 50,
    PieceType.QUEEN: 90,
    PieceType.KING: 900,
}

# Centipawn scale. Pick one table per search; mixing them makes scores meaningless.
CENTIPAWN_VALUES: PieceValues = {
    PieceType.PAWN: 100,
    PieceType.KNIGHT: 320,
    PieceType.BISHOP: 330,
    PieceType.ROOK: 500,
    PieceType.QUEEN: 900,
    PieceType.KING: 20000,
}


def material(board: Board, values: PieceValues = PIECE_VALUES) -> dict[Color, int]:
    """Tally the points of material each player has on the board"""
    totals = {color: 0 for color in Color}
    for _, piece in board.occupied_squares():
        totals[piece.color] += values[piece.type]
    return totals


def evaluate(
    board: Board,
    perspective: Color = Color.BLACK,
    values: PieceValues = PIECE_VALUES,
) -> int:
    """Material of `perspective` minus the material of its opponent."""
    score = 0
    for _, piece in board.occupied_squares():
        value = values[piece.type]
        score += value if piece.color == perspective else -value
    return score
