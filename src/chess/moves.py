"""
Geometry/Base movement and capturing rules

Key idea: Use strategy pattern to define pseudo-legal move sets for each piece type.

Moves are NOT filtered for leaving your own king in check: the engine plays by the simplified rules
(no check detection, castling, en passant or promotion).

Move order is part of the contract: pieces are visited in row-major board order, and each piece's moves
follow the fixed direction order of its rule below. The search keeps the first of equally scored moves,
so changing an order here changes which move the computer picks.
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Protocol, Self

from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import BOARD_DIMENSIONS, Square
from src.core.exceptions import IllegalMoveError, MalformedFENError


class Board(Protocol):
    """Just the parts the movement strategies need"""

    def piece(self, square: Square) -> Optional[Piece]: ...
    def is_empty(self, square: Square) -> bool: ...
    def occupied_squares(self) -> Iterable[tuple[Square, Piece]]: ...


Vector = tuple[int, int]  # (delta row, delta column)


@dataclass(frozen=True)
class Move:
    """basic definition of a move to be made"""

    from_square: Square
    to_square: Square

    @classmethod
    def from_uci(cls, uci: str) -> Self:
        """
        Coordinate notation (as used by UCI engines):
        ---
        <file><rank><file><rank>

        examples:
        * "e2e4": move the piece that was on e2 to e4
        * "g8f6": move the piece on g8 to f6

        NOTE: a 5th promotion character is not supported (no promotion in these rules).
        """
        if len(uci) != 4:
            raise IllegalMoveError(f"Cannot interpret {uci!r} as a move in coordinate notation")
        try:
            from_sq = Square.from_algebraic(uci[:2])
            to_sq = Square.from_algebraic(uci[2:4])
        except MalformedFENError as e:
            raise IllegalMoveError(f"Cannot interpret {uci!r} as a move: {e}") from e
        return cls(from_sq, to_sq)

    def to_uci(self) -> str:
        """Convert into coordinate notation"""
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}"

    def __str__(self) -> str:
        return self.to_uci()


# --- DIRECTIONS ---
# NOTE: rows grow DOWN the board (row 0 is the 8th rank)
KNIGHT_DELTAS: list[Vector] = [
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
]
DIAGONALS: list[Vector] = [(1, 1), (1, -1), (-1, 1), (-1, -1)]
STRAIGHTS: list[Vector] = [(1, 0), (-1, 0), (0, 1), (0, -1)]
KING_DELTAS: list[Vector] = [
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
]

# White pawns move up the board (towards row 0), black pawns move down.
PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: -1, Color.BLACK: 1}
PAWN_STARTING_ROW: dict[Color, int] = {
    Color.WHITE: BOARD_DIMENSIONS[0] - 2,
    Color.BLACK: 1,
}


def _is_opponent(board: Board, square: Square, color: Color) -> bool:
    target = board.piece(square)
    return target is not None and target.color != color


# --- MOVEMENT RULES ---
def raycasting_move(
    square: Square, board: Board, directions: list[Vector]
) -> list[Move]:
    """
    Raycasting algorithm
    -----

    ---
    The main trick we use to check the 'line of sight of a piece'.
    We define move directions and move along them until we hit another piece or
    the edge of the board.
    """
    piece = board.piece(square)
    if piece is None:
        return []

    moves: list[Move] = []
    for drow, dcol in directions:
        target_square = square.offset(drow, dcol)
        while target_square.is_within_bounds():
            if not board.is_empty(target_square):
                # only need to add the first occupied square found if it is the opponent's: then it can be captured.
                if _is_opponent(board, target_square, piece.color):
                    moves.append(Move(from_square=square, to_square=target_square))
                break

            moves.append(Move(from_square=square, to_square=target_square))
            target_square = target_square.offset(drow, dcol)
    return moves


def single_step_move(square: Square, board: Board, deltas: list[Vector]) -> list[Move]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just jump a single step along a direction"""
    piece = board.piece(square)
    if piece is None:
        return []

    moves: list[Move] = []
    for drow, dcol in deltas:
        target_square = square.offset(drow, dcol)
        if not target_square.is_within_bounds():
            continue

        target = board.piece(target_square)
        square_available = target is None or target.color != piece.color
        if square_available:
            moves.append(Move(from_square=square, to_square=target_square))

    return moves


def candidate_pawn_moves(square: Square, board: Board) -> list[Move]:
    """
    A pawn:
    - moves by a single square forward, onto an empty square only.
    - It can move by two in their first move (so when on their starting row), if both squares are empty
    - takes diagonally (forward-left, then forward-right), only when an opponent's piece stands there
    """
    piece = board.piece(square)
    if piece is None:
        return []

    moves: list[Move] = []
    direction = PAWN_DIRECTION[piece.color]

    one_step = square.offset(direction, 0)
    if one_step.is_within_bounds() and board.is_empty(one_step):
        moves.append(Move(from_square=square, to_square=one_step))

        two_steps = square.offset(2 * direction, 0)
        if square.row == PAWN_STARTING_ROW[piece.color] and board.is_empty(two_steps):
            moves.append(Move(from_square=square, to_square=two_steps))

    # pawns take diagonally:
    for dcol in (-1, 1):
        target_square = square.offset(direction, dcol)
        if target_square.is_within_bounds() and _is_opponent(
            board, target_square, piece.color
        ):
            moves.append(Move(from_square=square, to_square=target_square))
    return moves


def candidate_knight_moves(square: Square, board: Board) -> list[Move]:
    """Knights always move such that |delta_row| + |delta_col| = 3"""
    return single_step_move(square, board, KNIGHT_DELTAS)


def candidate_bishop_moves(square: Square, board: Board) -> list[Move]:
    """Bishops move diagonally: |delta_row| = |delta_col|"""
    return raycasting_move(square, board, DIAGONALS)


def candidate_rook_moves(square: Square, board: Board) -> list[Move]:
    """Rooks move either horizontally or vertically"""
    return raycasting_move(square, board, STRAIGHTS)


def candidate_queen_moves(square: Square, board: Board) -> list[Move]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return raycasting_move(square, board, STRAIGHTS + DIAGONALS)


def candidate_king_moves(square: Square, board: Board) -> list[Move]:
    """
    The king can move by a single square at the time. No castling, and no check whether the square is attacked.
    """
    return single_step_move(square, board, KING_DELTAS)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Square, Board], list[Move]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}


def piece_moves(board: Board, square: Square) -> list[Move]:
    """All pseudo-legal moves of the piece on `square`. An empty square has no moves."""
    piece = board.piece(square)
    if piece is None:
        return []
    movement_rule: CandidateMovesFn = MOVEMENT_RULES[piece.type]
    return movement_rule(square, board)


def destinations(board: Board, square: Square) -> list[Square]:
    """The squares the piece on `square` may move to (empty for an empty square)."""
    return [move.to_square for move in piece_moves(board, square)]


def all_moves(board: Board, color: Color) -> list[Move]:
    """
    Every pseudo-legal move for the side playing `color`.

    Pieces are visited row-major (a8 ... h8, a7 ... h1), so the result order is deterministic.
    A list is built fresh on every call: nothing is cached.
    """
    moves: list[Move] = []
    for square, piece in board.occupied_squares():
        if piece.color != color:
            continue
        moves.extend(MOVEMENT_RULES[piece.type](square, board))
    return moves
