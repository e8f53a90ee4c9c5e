"""
The computer opponent: something that picks a move for a side at a given skill level.

* SearchOpponent: the built-in minimax search (skill level -> depth)
* UCIOpponent: delegates to an external UCI engine through UCIEngineClient
"""

import logging
import shlex
from typing import Optional, Protocol

from src.chess import fen
from src.chess.board import Board
from src.chess.difficulty import to_depth
from src.chess.moves import Move
from src.chess.pieces import Color
from src.chess.search import search
from src.core.config import Settings
from src.engine.client import UCIEngineClient
from src.engine.transport import SubprocessTransport

logger = logging.getLogger(__name__)


class Opponent(Protocol):
    def choose_move(self, board: Board, side: Color, skill_level: int) -> Optional[Move]:
        """The move to play, or None when `side` cannot move."""
        ...

    def close(self) -> None:
        """Release whatever the opponent holds on to (e.g. an engine process)."""
        ...


class SearchOpponent:
    """Built-in engine: depth-limited minimax with alpha-beta pruning."""

    def close(self) -> None:
        pass

    def choose_move(self, board: Board, side: Color, skill_level: int) -> Optional[Move]:
        depth = to_depth(skill_level)
        result = search(board, side, depth)
        logger.info(
            "Search picked %s for %s (skill %d, depth %d, %d nodes)",
            result.move,
            side.name.lower(),
            skill_level,
            depth,
            result.nodes,
        )
        return result.move


class UCIOpponent:
    """
    External engine. The skill level is forwarded as the engine's `Skill Level` option and the engine searches for a fixed time.

    Engine failures (EngineError) propagate to the caller.
    """

    def __init__(self, client: UCIEngineClient, movetime_ms: int = 1000) -> None:
        self.client = client
        self.movetime_ms = movetime_ms
        self._skill_level: Optional[int] = None

    def choose_move(self, board: Board, side: Color, skill_level: int) -> Optional[Move]:
        if skill_level != self._skill_level:
            self.client.set_skill_level(skill_level).result()
            self._skill_level = skill_level

        response = self.client.request_best_move(
            fen.encode(board, side), movetime_ms=self.movetime_ms
        ).result()
        logger.info("Engine answered request %s with %s", response.request_id, response.move)
        if response.move is None:
            return None
        # drop a promotion suffix: promotion is not part of these rules
        return Move.from_uci(response.move[:4])

    def close(self) -> None:
        """Quit the engine and release its transport."""
        self.client.close()


def opponent_from_settings(settings: Settings) -> Opponent:
    """External engine when `engine_command` is configured, the built-in search otherwise."""
    if not settings.engine_command:
        return SearchOpponent()

    transport = SubprocessTransport(shlex.split(settings.engine_command))
    client = UCIEngineClient(transport, timeout_s=settings.engine_timeout_s)
    return UCIOpponent(client, movetime_ms=settings.engine_movetime_ms)
