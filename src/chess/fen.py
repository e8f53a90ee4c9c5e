"""
Full FEN strings: the placement field plus the metadata fields.

FEN, or Forsyth-Edwards Notation, is a standard notation for describing a particular board position of a chess game.

<board position string> <active color> <castling rights> <en passant square> <# half move clock> <number turns played>

ex) The standard starting position has a FEN
rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1

Only the placement and the active color are used by the engine. Castling rights, en passant square and move counters
are not tracked, so encoding always writes the placeholders `KQkq - 0 1` (a known fidelity gap of the simplified rules).
"""

from string import ascii_lowercase

from src.chess.board import STARTING_PLACEMENT, Board
from src.chess.pieces import Color
from src.chess.square import BOARD_DIMENSIONS
from src.core.exceptions import MalformedFENError

STARTING_FEN = f"{STARTING_PLACEMENT} w KQkq - 0 1"
UNTRACKED_FIELDS = "KQkq - 0 1"
VALID_CASTLING_ENCODINGS = [
    "-",
    "K",
    "Q",
    "k",
    "q",
    "KQ",
    "Kk",
    "Kq",
    "Qk",
    "Qq",
    "kq",
    "KQk",
    "KQq",
    "Kkq",
    "Qkq",
    "KQkq",
]


def is_valid_fen(fen: str) -> bool:
    """
    Check if given string follows proper (6 field) FEN notation.
    """

    # there should be 6 parts to the string
    parts = fen.split(" ")
    if len(parts) != 6:
        return False

    position, color, castling, en_passant, half_move_counter, full_move_counter = parts
    return (
        is_valid_position(position)
        and is_valid_color_code(color)
        and is_valid_castling_rights(castling)
        and is_valid_en_passant(en_passant)
        and is_valid_move_counter(half_move_counter)
        and is_valid_move_counter(full_move_counter)
    )


def is_valid_position(position: str) -> bool:
    """Only check the part of the FEN encoding for the board position."""
    try:
        Board.from_fen(position)
    except MalformedFENError:
        return False
    return True


def is_valid_color_code(color: str) -> bool:
    return color in {"w", "b"}


def is_valid_castling_rights(castling: str) -> bool:
    """A valid castling encoding has either KQkq, KQk, etc. or a '-' if all rights have been revoked."""
    return castling in VALID_CASTLING_ENCODINGS


def is_valid_en_passant(en_passant: str) -> bool:
    """Valid en passant square encoding should be a square that exists on the board or a '-'"""
    return (en_passant == "-") or is_valid_square(en_passant)


def is_valid_square(square: str) -> bool:
    """Valid square should be a letter for the file + a number for the rank"""
    num_ranks, num_files = BOARD_DIMENSIONS

    if len(square) < 2:
        return False
    file_char, rank_char = square[0], square[1:]
    allowed_file_names = ascii_lowercase[:num_files]
    if file_char not in allowed_file_names:
        return False

    if not (rank_char.isascii() and rank_char.isdigit()):
        return False

    return 1 <= int(rank_char) <= num_ranks


def is_valid_move_counter(counter: str) -> bool:
    return counter.isascii() and counter.isdigit()


def decode(fen: str) -> tuple[Board, Color]:
    """
    Parse a FEN string into a board and the side to move.

    Accepted forms:
    * the placement field alone (white to move)
    * placement + active color
    * a full 6 field FEN. The trailing fields are validated, then ignored.
    """
    parts = fen.strip().split()
    if not parts:
        raise MalformedFENError("Empty FEN string")
    if len(parts) not in (1, 2, 6):
        raise MalformedFENError(
            f"Expected the placement field, placement + color, or 6 fields. Got {len(parts)} fields: {fen!r}"
        )

    board = Board.from_fen(parts[0])
    side_to_move = Color.from_fen_code(parts[1]) if len(parts) > 1 else Color.WHITE

    if len(parts) == 6 and not is_valid_fen(" ".join(parts)):
        raise MalformedFENError(f"Cannot interpret supplied string as FEN: {fen}")
    return board, side_to_move


def encode(board: Board, side_to_move: Color) -> str:
    """Write a full FEN string. The untracked fields are emitted as fixed placeholders."""
    return f"{board.to_fen()} {side_to_move.fen_code} {UNTRACKED_FIELDS}"


def placement_part(fen: str) -> str:
    """The board layout portion of a FEN string"""
    return fen.strip().split(" ")[0]
