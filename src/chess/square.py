"""
A square on the board

(placed in its own module as multiple other modules need to import it)

Squares are addressed the way the board grid is stored: row 0 is the 8th rank (top of the board as white sees it),
row 7 is the 1st rank, column 0 is the a-file.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.core.exceptions import MalformedFENError

# Chess board is always 8x8. Just in case we want to try some funky stuff, make it adjustable
BOARD_DIMENSIONS = (8, 8)  # (rows, columns)
FILES = "abcdefgh"
RANKS = "12345678"


@dataclass(frozen=True)
class Square:
    row: int
    col: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a8' - 'h1' get converted to (0,0) - (7,7)"""
        if len(sq) != 2 or sq[0] not in FILES or sq[1] not in RANKS:
            raise MalformedFENError(f"Cannot interpret {sq!r} as a square name.")
        col = FILES.index(sq[0])
        row = BOARD_DIMENSIONS[0] - int(sq[1])
        square = cls(row, col)
        if not square.is_within_bounds():
            raise MalformedFENError(f"Square {sq!r} is not on the board.")
        return square

    def to_algebraic(self) -> str:
        return f"{FILES[self.col]}{BOARD_DIMENSIONS[0] - self.row}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.row < BOARD_DIMENSIONS[0]) and (
            0 <= self.col < BOARD_DIMENSIONS[1]
        )

    def offset(self, drow: int, dcol: int) -> Square:
        """The square a (drow, dcol) step away. May fall off the board: check `is_within_bounds()`."""
        return Square(self.row + drow, self.col + dcol)

    @property
    def index(self) -> int:
        """Position in the flat, row-major cell storage of the Board"""
        return self.row * BOARD_DIMENSIONS[1] + self.col
