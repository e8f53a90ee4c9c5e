"""
UCI front end for the built-in search.

Lets the built-in engine stand in wherever an external UCI engine is expected
(run it as `python -m src.engine.server`), and gives the UCI client something real to talk to in-process.

Supported commands: uci, isready, ucinewgame, setoption name Skill Level value <n>,
position startpos|fen <fen> [moves <m1> <m2> ...], go [depth <n>] [movetime <ms>], stop, quit
"""

import logging
import sys
from typing import Optional, TextIO

from src.chess import fen
from src.chess.board import Board
from src.chess.difficulty import DEFAULT_SKILL_LEVEL, is_valid_skill_level, to_depth
from src.chess.evaluation import CENTIPAWN_VALUES
from src.chess.moves import Move
from src.chess.pieces import Color
from src.chess.search import search
from src.core.config import Settings
from src.core.exceptions import GameError
from src.core.log_config import configure_logging
from src.engine import uci

logger = logging.getLogger(__name__)

ENGINE_NAME = "SimpleChessEngine 1.0"
ENGINE_AUTHOR = "chess-vs-computer"
# Deeper `go depth` requests are searched at this depth
MAX_SEARCH_DEPTH = 20


class UCIEngine:
    """
    Command handler: one command line in, the list of response lines out.

    The position is kept between commands, like a real engine process does.
    """

    def __init__(self, skill_level: int = DEFAULT_SKILL_LEVEL) -> None:
        self.board = Board.starting_position()
        self.side_to_move = Color.WHITE
        self.skill_level = skill_level
        self.running = True

    def handle(self, command: str) -> list[str]:
        command = command.strip()
        logger.debug("<< %s", command)
        if not command:
            return []

        keyword, _, arguments = command.partition(" ")
        handlers = {
            uci.UCI: self._handle_uci,
            uci.IS_READY: self._handle_isready,
            uci.NEW_GAME: self._handle_new_game,
            "setoption": self._handle_setoption,
            "position": self._handle_position,
            "go": self._handle_go,
            uci.STOP: self._handle_stop,
            uci.QUIT: self._handle_quit,
        }
        handler = handlers.get(keyword)
        if handler is None:
            responses = [f"info string Unknown command: {command}"]
        else:
            responses = handler(arguments)

        for response in responses:
            logger.debug(">> %s", response)
        return responses

    # --- COMMAND HANDLERS ---
    def _handle_uci(self, _: str) -> list[str]:
        return [
            f"id name {ENGINE_NAME}",
            f"id author {ENGINE_AUTHOR}",
            "option name Skill Level type spin default 5 min 0 max 20",
            uci.UCI_OK,
        ]

    def _handle_isready(self, _: str) -> list[str]:
        return [uci.READY_OK]

    def _handle_new_game(self, _: str) -> list[str]:
        self.board = Board.starting_position()
        self.side_to_move = Color.WHITE
        return ["info string New game started"]

    def _handle_setoption(self, arguments: str) -> list[str]:
        """Only `setoption name Skill Level value <n>` is understood"""
        name, _, value = arguments.removeprefix("name ").partition(" value ")
        if name.strip().lower() != "skill level":
            return [f"info string Unknown option: {name.strip()}"]
        level = parse_int(value.strip())
        if level is None or not is_valid_skill_level(level):
            return [f"info string Invalid skill level: {value.strip()}"]
        self.skill_level = level
        return []

    def _handle_position(self, arguments: str) -> list[str]:
        position, _, moves_part = arguments.partition(" moves ")
        position = position.strip()
        try:
            if position == "startpos":
                board, side = Board.starting_position(), Color.WHITE
            elif position.startswith("fen "):
                board, side = fen.decode(position.removeprefix("fen "))
            else:
                return [f"info string Invalid position: {arguments}"]

            for move_uci in moves_part.split():
                board = board.after_move(Move.from_uci(move_uci))
                side = side.opponent
        except GameError as e:
            logger.warning("Rejected position %r: %s", arguments, e)
            return [f"info string Invalid position: {e}"]

        self.board, self.side_to_move = board, side
        return []

    def _handle_go(self, arguments: str) -> list[str]:
        """
        `go depth <n>` searches to that depth, capped at MAX_SEARCH_DEPTH.
        Otherwise (movetime, infinite, ...) the skill level decides the depth.
        """
        tokens = arguments.split()
        depth = to_depth(self.skill_level)
        if "depth" in tokens:
            index = tokens.index("depth")
            requested = parse_int(tokens[index + 1]) if index + 1 < len(tokens) else None
            if requested is not None and requested >= 0:
                if requested > MAX_SEARCH_DEPTH:
                    logger.warning("Depth %d requested, searching %d", requested, MAX_SEARCH_DEPTH)
                depth = min(requested, MAX_SEARCH_DEPTH)

        result = search(self.board, self.side_to_move, depth, values=CENTIPAWN_VALUES)
        if result.move is None:
            return [f"{uci.BEST_MOVE} {uci.NULL_MOVE}"]
        return [
            f"info depth {depth} score cp {int(result.score)} nodes {result.nodes}",
            f"{uci.BEST_MOVE} {result.move.to_uci()}",
        ]

    def _handle_stop(self, _: str) -> list[str]:
        """Searches run synchronously, so there is never anything to stop"""
        return []

    def _handle_quit(self, _: str) -> list[str]:
        self.running = False
        return []


def parse_int(token: str) -> Optional[int]:
    """ASCII decimal integer with an optional minus sign; None for anything else"""
    digits = token.removeprefix("-")
    if not (digits.isascii() and digits.isdigit()):
        return None
    return int(token)


def run(engine: UCIEngine, stdin: TextIO, stdout: TextIO) -> None:
    """Main loop: read commands until `quit` (or end of input)."""
    for line in stdin:
        for response in engine.handle(line):
            stdout.write(response + "\n")
        stdout.flush()
        if not engine.running:
            break


def main() -> None:
    settings = Settings.from_env()
    # stdout is reserved for the protocol
    configure_logging(settings.log_level, stream=sys.stderr)
    run(UCIEngine(skill_level=settings.default_skill_level), sys.stdin, sys.stdout)


if __name__ == "__main__":
    main()
