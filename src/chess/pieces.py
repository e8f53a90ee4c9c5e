"""Defines the types of chess pieces"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Self

from src.core.exceptions import MalformedFENError


class PieceType(Enum):
    PAWN = auto()
    KNIGHT = auto()
    BISHOP = auto()
    ROOK = auto()
    QUEEN = auto()
    KING = auto()


class Color(Enum):
    WHITE = auto()
    BLACK = auto()

    @property
    def opponent(self) -> "Color":
        return Color.BLACK if self == Color.WHITE else Color.WHITE

    @property
    def fen_code(self) -> str:
        """Active color as written in a FEN string"""
        return "w" if self == Color.WHITE else "b"

    @classmethod
    def from_fen_code(cls, code: str) -> "Color":
        if code not in FEN_TO_COLOR:
            raise MalformedFENError(f"Active color must be 'w' or 'b', got {code!r}")
        return FEN_TO_COLOR[code]


FEN_TO_COLOR: dict[str, Color] = {"w": Color.WHITE, "b": Color.BLACK}

FEN_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_FEN: dict[PieceType, str] = {value: key for key, value in FEN_TO_PIECE.items()}


@dataclass(frozen=True)
class Piece:
    """
    A tagged piece value. Position is not part of the piece: it is implied by where the board stores it.

    NOTE: frozen, so the same instance can be shared between board copies.
    """

    type: PieceType
    color: Color

    @classmethod
    def from_fen(cls, character: str) -> Self:
        # lower case: Black pieces, upper case: White pieces
        if character.lower() not in FEN_TO_PIECE:
            raise MalformedFENError(f"Unknown piece character: {character!r}")
        color = Color.WHITE if character.isupper() else Color.BLACK
        piece_type = FEN_TO_PIECE[character.lower()]
        return cls(piece_type, color)

    def to_fen(self) -> str:
        return (
            PIECE_TO_FEN[self.type].upper()
            if self.color == Color.WHITE
            else PIECE_TO_FEN[self.type].lower()
        )
