"""Unit tests for /src/chess/pieces.py"""

from dataclasses import FrozenInstanceError

import pytest

from src.chess.pieces import FEN_TO_PIECE, PIECE_TO_FEN, Color, Piece, PieceType
from src.core.exceptions import MalformedFENError


@pytest.mark.parametrize("char", [char.upper() for char in FEN_TO_PIECE.keys()])
def test_creating_white_piece_from_fen(char: str) -> None:
    """Capital letters are used for white pieces"""
    piece = Piece.from_fen(char)
    assert piece.type == FEN_TO_PIECE[char.lower()]
    assert piece.color == Color.WHITE


@pytest.mark.parametrize("char", [char.lower() for char in FEN_TO_PIECE.keys()])
def test_creating_black_piece_from_fen(char: str) -> None:
    """Lower case letters are used for black pieces"""
    piece = Piece.from_fen(char)
    assert piece.type == FEN_TO_PIECE[char.lower()]
    assert piece.color == Color.BLACK


@pytest.mark.parametrize("piece_type", list(PieceType))
def test_white_pieces_to_fen(piece_type: PieceType) -> None:
    """Capital letters are used for the white pieces"""
    piece = Piece(piece_type, Color.WHITE)
    assert piece.to_fen() == PIECE_TO_FEN[piece_type].upper()


@pytest.mark.parametrize("piece_type", list(PieceType))
def test_black_pieces_to_fen(piece_type: PieceType) -> None:
    """Lower case letters are used for the black pieces"""
    piece = Piece(piece_type, Color.BLACK)
    assert piece.to_fen() == PIECE_TO_FEN[piece_type].lower()


@pytest.mark.parametrize("char", ["x", "1", "/", " ", "Z"])
def test_unknown_piece_character(char: str) -> None:
    with pytest.raises(MalformedFENError):
        Piece.from_fen(char)


def test_pieces_are_values() -> None:
    """Pieces compare by value and cannot be changed (boards share them between copies)"""
    assert Piece(PieceType.ROOK, Color.WHITE) == Piece.from_fen("R")
    piece = Piece(PieceType.PAWN, Color.BLACK)
    with pytest.raises(FrozenInstanceError):
        piece.type = PieceType.QUEEN  # type: ignore[misc]


def test_color_helpers() -> None:
    assert Color.WHITE.opponent == Color.BLACK
    assert Color.BLACK.opponent == Color.WHITE
    assert Color.WHITE.fen_code == "w"
    assert Color.from_fen_code("b") == Color.BLACK
    with pytest.raises(MalformedFENError):
        Color.from_fen_code("x")
