"""Orchestration of communication from API router to business logic and persistence layers (and the reverse direction)."""

import logging
from typing import Optional
from uuid import UUID

from src.api.models import (
    ComputerMoveRequest,
    CreateGameRequest,
    DeleteGameRequest,
    DifficultyRequest,
    GameResponse,
    GetGameRequest,
    MoveRequest,
    UndoRequest,
    ValidMovesRequest,
    ValidMovesResponse,
)
from src.chess.fen import STARTING_FEN
from src.chess.game import Game
from src.chess.pieces import Color as PieceColor
from src.core.exceptions import RepositoryError
from src.core.models import GameModel
from src.core.shared_types import Color, Status
from src.db.repository import GameRepository
from src.engine.opponents import Opponent, SearchOpponent

logger = logging.getLogger(__name__)


class ChessService:
    """Orchestration of layers for a game against the computer."""

    def __init__(self, repository: GameRepository, opponent: Optional[Opponent] = None) -> None:
        self.repo = repository
        self.opponent = opponent or SearchOpponent()

    # -- API routes logic ---
    def create_new_game(self, request: CreateGameRequest) -> GameResponse:
        """Player requested a new game against the computer. If the computer has the first move, it plays it right away."""

        human_color = PieceColor[request.human_color.name]
        game = Game(
            starting_fen=request.starting_fen or STARTING_FEN,
            skill_level=request.skill_level,
            computer_color=human_color.opponent,
            opponent=self.opponent,
        )
        computer_move = self._reply_if_computer_to_move(game)

        stored_game, game_id = self.repo.create_game(game.to_model())
        logger.info("Created game %s (human plays %s)", game_id, request.human_color)
        return self._create_game_response(game_id, stored_game, computer_move)

    def get_game_state(self, request: GetGameRequest) -> GameResponse:
        """
        Retrieve current game state.
        ----
        Used by the frontend to redraw the board after a reload.
        """
        game_model = self._fetch_game(request.game_id)
        return self._create_game_response(request.game_id, game_model)

    def valid_moves(self, request: ValidMovesRequest) -> ValidMovesResponse:
        """Destination squares of the piece the player picked up (to highlight them)."""
        game = self._load_game(request.game_id)
        return ValidMovesResponse(
            game_id=request.game_id,
            square=request.square,
            destinations=game.valid_moves(request.square),
        )

    def make_move(self, request: MoveRequest) -> GameResponse:
        """Make the player's move, then let the computer answer."""

        game = self._load_game(request.game_id)

        # Attempt the move
        move_uci = f"{request.from_square}{request.to_square}"
        game.make_move(move_uci, color=game.human_color)

        computer_move = self._reply_if_computer_to_move(game)
        return self._store(request.game_id, game, computer_move)

    def computer_move(self, request: ComputerMoveRequest) -> GameResponse:
        """Explicitly ask the computer to move (e.g. after undoing only its last move)."""
        game = self._load_game(request.game_id)
        computer_move = game.computer_move()
        return self._store(request.game_id, game, computer_move)

    def undo_move(self, request: UndoRequest) -> GameResponse:
        game = self._load_game(request.game_id)
        game.undo(request.plies)
        return self._store(request.game_id, game)

    def new_game(self, request: GetGameRequest) -> GameResponse:
        """Restart an existing session from its starting position."""
        game = self._load_game(request.game_id)
        game.new_game()
        computer_move = self._reply_if_computer_to_move(game)
        return self._store(request.game_id, game, computer_move)

    def set_difficulty(self, request: DifficultyRequest) -> GameResponse:
        game = self._load_game(request.game_id)
        game.set_difficulty(request.skill_level)
        return self._store(request.game_id, game)

    def delete_game(self, request: DeleteGameRequest) -> None:
        """Handle a request to delete a Game record."""
        self.repo.delete_game(request.game_id)

    # -- Internal helpers --
    def _reply_if_computer_to_move(self, game: Game) -> Optional[str]:
        if game.status != Status.IN_PROGRESS or game.turn != game.computer_color:
            return None
        return game.computer_move()

    def _store(self, game_id: UUID, game: Game, computer_move: Optional[str] = None) -> GameResponse:
        """Capture updated state in a GameModel, store it, and answer with it"""
        model = game.to_model()
        self.repo.update_game(game_id, model)
        return self._create_game_response(game_id, model, computer_move)

    def _create_game_response(
        self, game_id: UUID, model: GameModel, computer_move: Optional[str] = None
    ) -> GameResponse:
        """Convert info in GameModel to a GameResponse (for game with given ID.)"""
        game = Game.from_model(model, opponent=self.opponent)
        state = game.current_state()
        return GameResponse(
            game_id=game_id,
            fen=state.fen,
            board=state.board.to_rows(),
            turn=Color[state.turn.name],
            history=list(state.history),
            skill_level=state.skill_level,
            human_color=Color[game.human_color.name],
            status=state.status,
            computer_move=computer_move,
        )

    def _load_game(self, game_id: UUID) -> Game:
        """Create a new Game instance from the persisted GameModel"""
        return Game.from_model(self._fetch_game(game_id), opponent=self.opponent)

    def _fetch_game(self, game_id: UUID) -> GameModel:
        """Attempt to find the game in the repository and raise error if it fails."""
        game_model = self.repo.get_game(game_id)
        if game_model is None:
            raise RepositoryError(f"Game with {game_id=} not found.")
        return game_model
