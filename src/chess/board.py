"""The Game board: an 8x8 grid of optional pieces, and the codec between that grid and the placement field of a FEN string"""

from dataclasses import dataclass
from typing import Iterator, Optional, Self

from src.chess.moves import Move
from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import BOARD_DIMENSIONS, Square
from src.core.exceptions import MalformedFENError

STARTING_PLACEMENT = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
NUM_SQUARES = BOARD_DIMENSIONS[0] * BOARD_DIMENSIONS[1]

Cells = tuple[Optional[Piece], ...]


@dataclass(frozen=True)
class Board:
    """
    Cells are stored row-major in a flat tuple (index = row * 8 + col), `None` for an empty square.

    The board is immutable: applying a move returns a new Board. Copying is a single tuple copy,
    and the Piece values themselves are frozen and shared between copies.
    """

    cells: Cells

    def __post_init__(self) -> None:
        if len(self.cells) != NUM_SQUARES:
            raise ValueError(
                f"A board holds exactly {NUM_SQUARES} squares, got {len(self.cells)}"
            )

    @classmethod
    def empty(cls) -> Self:
        return cls((None,) * NUM_SQUARES)

    @classmethod
    def starting_position(cls) -> Self:
        return cls.from_fen(STARTING_PLACEMENT)

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a board using the placement field of a FEN string.

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank (row 0), read from the a-file to the h-file
        * pawns cover 7th rank entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 are the white pawns (capital letters)
        * 1st rank are the white pieces.

        Raises MalformedFENError when there are not exactly 8 ranks, or a rank does not add up to exactly 8 squares.
        """
        num_rows, num_cols = BOARD_DIMENSIONS
        fen_by_ranks = fen_str.split("/")
        if len(fen_by_ranks) != num_rows:
            raise MalformedFENError(
                f"Expected {num_rows} ranks separated by '/', got {len(fen_by_ranks)}: {fen_str!r}"
            )

        cells: list[Optional[Piece]] = []
        for fen_one_rank in fen_by_ranks:
            row = cls._parse_rank(fen_one_rank)
            if len(row) != num_cols:
                raise MalformedFENError(
                    f"Rank {fen_one_rank!r} describes {len(row)} squares instead of {num_cols}"
                )
            cells.extend(row)
        return cls(tuple(cells))

    @staticmethod
    def _parse_rank(fen_one_rank: str) -> list[Optional[Piece]]:
        row: list[Optional[Piece]] = []
        for character in fen_one_rank:
            if character.isascii() and character.isdigit():
                # A number denotes the amount of empty squares after each other
                run = int(character)
                if not (1 <= run <= BOARD_DIMENSIONS[1]):
                    raise MalformedFENError(f"Invalid run of empty squares: {character!r}")
                row.extend([None] * run)
            else:
                # a letter directly denotes the piece that should be created
                row.append(Piece.from_fen(character))
        return row

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(self._rank_to_fen(row) for row in range(BOARD_DIMENSIONS[0]))

    def _rank_to_fen(self, row: int) -> str:
        """FEN string of a single rank"""
        fen_characters: list[str] = []
        empty_count = 0
        for col in range(BOARD_DIMENSIONS[1]):
            piece = self.piece(Square(row, col))

            if piece is not None:
                if empty_count > 0:
                    fen_characters.append(str(empty_count))
                    empty_count = 0
                fen_characters.append(piece.to_fen())
            else:
                empty_count += 1

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    @classmethod
    def from_rows(cls, rows: list[list[Optional[str]]]) -> Self:
        """Inverse of `to_rows()`: the grid of single-character piece codes a front end renders."""
        if len(rows) != BOARD_DIMENSIONS[0] or any(
            len(row) != BOARD_DIMENSIONS[1] for row in rows
        ):
            raise MalformedFENError("Board rows must form an 8x8 grid")
        return cls(
            tuple(
                Piece.from_fen(code) if code else None for row in rows for code in row
            )
        )

    def to_rows(self) -> list[list[Optional[str]]]:
        return [
            [
                piece.to_fen() if piece else None
                for piece in self.cells[row * BOARD_DIMENSIONS[1] : (row + 1) * BOARD_DIMENSIONS[1]]
            ]
            for row in range(BOARD_DIMENSIONS[0])
        ]

    def piece(self, square: Square) -> Optional[Piece]:
        return self.cells[square.index]

    def is_empty(self, square: Square) -> bool:
        return self.cells[square.index] is None

    def occupied_squares(self) -> Iterator[tuple[Square, Piece]]:
        """Row-major scan over the occupied squares (the order move generation relies on)"""
        num_cols = BOARD_DIMENSIONS[1]
        for index, piece in enumerate(self.cells):
            if piece is not None:
                yield Square(index // num_cols, index % num_cols), piece

    def locate_color(self, color: Color) -> list[Square]:
        return [square for square, piece in self.occupied_squares() if piece.color == color]

    def locate_pieces(self, piece_type: PieceType) -> list[Square]:
        return [
            square for square, piece in self.occupied_squares() if piece.type == piece_type
        ]

    def after_move(self, move: Move) -> Self:
        """A copy of the board with the piece moved (capturing whatever stood on the target square)."""
        cells = list(self.cells)
        cells[move.to_square.index] = cells[move.from_square.index]
        cells[move.from_square.index] = None
        return type(self)(tuple(cells))

    def after_moves(self, moves: list[Move]) -> Self:
        """convenience method to apply multiple moves (to quickly reach a position after some moves)"""
        board = self
        for move in moves:
            board = board.after_move(move)
        return board

    def __str__(self) -> str:
        return "\n".join(
            " ".join(code or "." for code in row) for row in self.to_rows()
        )
