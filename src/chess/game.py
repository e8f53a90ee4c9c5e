"""
The Game class will be the entrypoint into the domain layer for the service layer.
It owns the state of one session (board, side to move, history, difficulty) and is the only thing that changes it.

* pull: `current_state()` returns an immutable snapshot
* push: `subscribe(listener)` calls the listener with a fresh snapshot after every change

Undo does not reverse moves: the position is rebuilt by replaying the shortened history from the starting FEN.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional, Self

from src.chess import fen
from src.chess.board import Board
from src.chess.difficulty import DEFAULT_SKILL_LEVEL, is_valid_skill_level
from src.chess.moves import Move, all_moves, destinations
from src.chess.pieces import Color
from src.chess.square import Square
from src.core.exceptions import (
    GameStateError,
    IllegalMoveError,
    InvalidSkillLevelError,
    NotYourTurnError,
)
from src.core.models import GameModel
from src.core.shared_types import Status
from src.engine.opponents import Opponent, SearchOpponent

logger = logging.getLogger(__name__)

COLOR_NAMES: dict[Color, str] = {Color.WHITE: "white", Color.BLACK: "black"}


@dataclass(frozen=True)
class GameState:
    """Snapshot handed to the outside world. Changing the game never changes an existing snapshot."""

    board: Board
    turn: Color
    history: tuple[str, ...]
    skill_level: int
    status: Status

    @property
    def fen(self) -> str:
        return fen.encode(self.board, self.turn)


Listener = Callable[[GameState], None]
Unsubscribe = Callable[[], None]


class Game:
    def __init__(
        self,
        starting_fen: str = fen.STARTING_FEN,
        skill_level: int = DEFAULT_SKILL_LEVEL,
        computer_color: Color = Color.BLACK,
        opponent: Optional[Opponent] = None,
    ) -> None:
        if not is_valid_skill_level(skill_level):
            raise InvalidSkillLevelError(f"Invalid skill level: {skill_level}")

        self.starting_fen = starting_fen
        self._initial_board, self._initial_turn = fen.decode(starting_fen)
        self.board = self._initial_board
        self.turn = self._initial_turn
        self.history: list[str] = []
        self.skill_level = skill_level
        self.computer_color = computer_color
        self.opponent: Opponent = opponent or SearchOpponent()
        self.status = Status.IN_PROGRESS
        self._listeners: list[Listener] = []
        self._update_status()

    # --- PERSISTENCE ---
    @classmethod
    def from_model(cls, model: GameModel, opponent: Optional[Opponent] = None) -> Self:
        """Rebuild a game by replaying the stored history from the stored starting position"""
        game = cls(
            starting_fen=model.starting_fen,
            skill_level=model.skill_level,
            computer_color=Color[model.computer_color.upper()],
            opponent=opponent,
        )
        game._replay(list(model.history))
        return game

    def to_model(self) -> GameModel:
        """Encode back into a format the Service layer uses"""
        return GameModel(
            starting_fen=self.starting_fen,
            board=self.board.to_fen(),
            turn=self.turn.fen_code,
            history=list(self.history),
            skill_level=self.skill_level,
            computer_color=COLOR_NAMES[self.computer_color],
            status=str(self.status),
        )

    # --- STATE ---
    def current_state(self) -> GameState:
        return GameState(
            board=self.board,
            turn=self.turn,
            history=tuple(self.history),
            skill_level=self.skill_level,
            status=self.status,
        )

    @property
    def fen(self) -> str:
        return fen.encode(self.board, self.turn)

    @property
    def human_color(self) -> Color:
        return self.computer_color.opponent

    def subscribe(self, listener: Listener) -> Unsubscribe:
        """Register a listener; call the returned function to stop listening."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # --- ACTIONS ---
    def valid_moves(self, square_name: str) -> list[str]:
        """
        Destination squares for the piece on `square_name`.

        An empty square, or a piece of the side that is not to move, simply has no moves (no exception).
        """
        square = Square.from_algebraic(square_name)
        piece = self.board.piece(square)
        if piece is None or piece.color != self.turn:
            return []
        return [target.to_algebraic() for target in destinations(self.board, square)]

    def make_move(self, move_uci: str, color: Optional[Color] = None) -> None:
        """
        Play a move for the side to move.

        `color`, when given, is the side that asks to move: it has to be the side to move.
        """
        if color is not None and color != self.turn:
            raise NotYourTurnError(
                f"It is not your turn. Waiting for {COLOR_NAMES[self.turn]} to make a move first."
            )

        move = Move.from_uci(move_uci)
        if move not in all_moves(self.board, self.turn):
            raise IllegalMoveError(f"Move not allowed: {move_uci}")

        self._apply(move)
        logger.info("%s played %s", COLOR_NAMES[self.turn.opponent], move_uci)
        self._notify()

    def computer_move(self) -> Optional[str]:
        """Let the opponent move. Returns the move played, or None when the computer cannot move."""
        if self.turn != self.computer_color:
            raise NotYourTurnError(
                f"The computer plays {COLOR_NAMES[self.computer_color]}, but it is {COLOR_NAMES[self.turn]} to move."
            )

        move = self.opponent.choose_move(self.board, self.turn, self.skill_level)
        if move is None:
            logger.info("Computer (%s) has no moves", COLOR_NAMES[self.turn])
            self.status = Status.NO_MOVES
            self._notify()
            return None

        if move not in all_moves(self.board, self.turn):
            raise IllegalMoveError(f"Opponent suggested a move not allowed here: {move}")

        self._apply(move)
        logger.info("Computer (%s) played %s", COLOR_NAMES[self.turn.opponent], move)
        self._notify()
        return move.to_uci()

    def undo(self, plies: int = 1) -> None:
        """Take back the last `plies` moves (2 = your move and the computer's answer)."""
        if plies < 1:
            raise GameStateError(f"Can only undo a positive number of moves, got {plies}")
        if plies > len(self.history):
            raise GameStateError(
                f"Cannot undo {plies} moves: only {len(self.history)} played"
            )

        self._replay(self.history[:-plies])
        logger.info("Undid %d move(s)", plies)
        self._notify()

    def new_game(self) -> None:
        """Back to the starting position. The difficulty is kept."""
        self._replay([])
        logger.info("New game from %s", self.starting_fen)
        self._notify()

    def set_difficulty(self, level: int) -> None:
        """Out-of-range levels fall back to the default level instead of failing."""
        if not is_valid_skill_level(level):
            logger.warning(
                "Skill level must be between 0 and 20, got %d. Defaulting to %d.",
                level,
                DEFAULT_SKILL_LEVEL,
            )
            level = DEFAULT_SKILL_LEVEL
        self.skill_level = level
        self._notify()

    # -- PRIVATE HELPERS ---
    def _apply(self, move: Move) -> None:
        self.board = self.board.after_move(move)
        self.history.append(move.to_uci())
        self.turn = self.turn.opponent
        self._update_status()

    def _replay(self, history: list[str]) -> None:
        """Rebuild board and turn from the starting position"""
        self.board = self._initial_board
        self.turn = self._initial_turn
        self.history = []
        self._update_status()
        for move_uci in history:
            move = Move.from_uci(move_uci)
            if move not in all_moves(self.board, self.turn):
                raise GameStateError(f"Stored history contains an illegal move: {move_uci}")
            self._apply(move)

    def _update_status(self) -> None:
        """NOTE without check detection, 'no moves' stands for checkmate, stalemate and being blocked alike."""
        has_moves = bool(all_moves(self.board, self.turn))
        self.status = Status.IN_PROGRESS if has_moves else Status.NO_MOVES

    def _notify(self) -> None:
        state = self.current_state()
        for listener in list(self._listeners):
            listener(state)
