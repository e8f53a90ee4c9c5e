"""Requests and Response models"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from src.chess import fen
from src.chess.difficulty import DEFAULT_SKILL_LEVEL, is_valid_skill_level
from src.core.exceptions import InvalidRequestError, MalformedFENError
from src.core.shared_types import Color, Status

SquareName = str
PieceCode = Optional[str]


def _is_algebraic_notation(value: str) -> bool:
    if len(value) != 2:
        return False
    return value[0] in "abcdefgh" and value[1] in "12345678"


# --- REQUEST MODELS ---
class CreateGameRequest(BaseModel):
    human_color: Color = Color.WHITE
    skill_level: int = DEFAULT_SKILL_LEVEL
    starting_fen: Optional[str] = None

    @field_validator("starting_fen")
    @classmethod
    def validate_starting_fen(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value

        try:
            fen.decode(value)
        except MalformedFENError as e:
            raise InvalidRequestError(f"Cannot use {value!r} as starting position: {e}") from e
        return value.strip()

    @field_validator("skill_level")
    @classmethod
    def validate_skill_level(cls, value: int) -> int:
        if not is_valid_skill_level(value):
            raise InvalidRequestError(f"Skill level must be between 0 and 20, got {value}")
        return value


class GetGameRequest(BaseModel):
    game_id: UUID


class ValidMovesRequest(BaseModel):
    game_id: UUID
    square: SquareName

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        if not _is_algebraic_notation(value):
            raise InvalidRequestError(f"Cannot interpret square: {value!r} as a valid square name.")
        return value


class MoveRequest(BaseModel):
    game_id: UUID
    from_square: SquareName
    to_square: SquareName

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        if not _is_algebraic_notation(value):
            raise InvalidRequestError(f"Cannot interpret square: {value!r} as a valid square name.")
        return value


class ComputerMoveRequest(BaseModel):
    game_id: UUID


class UndoRequest(BaseModel):
    game_id: UUID
    plies: int = 1


class DifficultyRequest(BaseModel):
    """Out-of-range levels are not rejected here: the game falls back to the default level."""

    game_id: UUID
    skill_level: int


class DeleteGameRequest(BaseModel):
    game_id: UUID


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    game_id: UUID
    fen: str
    board: list[list[PieceCode]]
    turn: Color
    history: list[str]
    skill_level: int
    human_color: Color
    status: Status
    computer_move: Optional[str] = None


class ValidMovesResponse(BaseModel):
    game_id: UUID
    square: SquareName
    destinations: list[SquareName]
