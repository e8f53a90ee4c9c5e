"""Where play-the-computer sessions are kept. The service only depends on this protocol, never on SQLAlchemy."""

from typing import Protocol
from uuid import UUID

from src.core.models import GameModel


class GameRepository(Protocol):
    """
    Storage of session records: `{board, turn, history}` plus the starting FEN, skill level and computer color.

    Lookups of an unknown id return None; raising is left to the caller.
    """

    def get_game(self, game_id: UUID) -> GameModel | None: ...

    def create_game(self, game: GameModel) -> tuple[GameModel, UUID]:
        """Store a new session. Returns the record as stored and its freshly issued id."""
        ...

    def update_game(self, game_id: UUID, game: GameModel) -> GameModel | None:
        """Overwrite the whole record (after a move, an undo or a difficulty change)."""
        ...

    def delete_game(self, game_id: UUID) -> GameModel | None:
        """Remove the session and hand back its last state."""
        ...
