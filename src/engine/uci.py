"""
Universal Chess Interface (UCI): the text protocol spoken with engine processes.

Commands (GUI -> engine): uci, isready, ucinewgame, setoption, position fen <fen>, go depth <n> / go movetime <ms>, stop, quit
Responses (engine -> GUI): uciok, readyok, info ..., bestmove <move> [ponder <move>]

Only builders and parsers live here. No I/O.
"""

from dataclasses import dataclass
from typing import Optional

from src.core.exceptions import EngineProtocolError

UCI = "uci"
UCI_OK = "uciok"
IS_READY = "isready"
READY_OK = "readyok"
NEW_GAME = "ucinewgame"
STOP = "stop"
QUIT = "quit"
BEST_MOVE = "bestmove"
NULL_MOVE = "(none)"


@dataclass(frozen=True)
class BestMove:
    """Parsed `bestmove` line. `move` is None when the engine reports it has no move."""

    move: Optional[str]
    ponder: Optional[str] = None


def position_command(fen: str, moves: Optional[list[str]] = None) -> str:
    command = f"position fen {fen}"
    if moves:
        command += " moves " + " ".join(moves)
    return command


def go_command(depth: Optional[int] = None, movetime_ms: Optional[int] = None) -> str:
    """Exactly one of depth / movetime should be given"""
    if (depth is None) == (movetime_ms is None):
        raise ValueError("Specify either a search depth or a move time")
    if depth is not None:
        return f"go depth {depth}"
    return f"go movetime {movetime_ms}"


def skill_level_command(level: int) -> str:
    return f"setoption name Skill Level value {level}"


def is_bestmove(line: str) -> bool:
    return line.split(" ", 1)[0] == BEST_MOVE


def is_valid_coordinate_move(token: str) -> bool:
    """<file><rank><file><rank>, e.g. e2e4 (an optional 5th promotion character is tolerated from external engines)"""
    if len(token) not in (4, 5):
        return False
    files_ok = token[0] in "abcdefgh" and token[2] in "abcdefgh"
    ranks_ok = token[1] in "12345678" and token[3] in "12345678"
    return files_ok and ranks_ok


def parse_bestmove(line: str) -> Optional[BestMove]:
    """
    Parse `bestmove <move> [ponder <move>]`.

    Returns None for any other line. Raises EngineProtocolError for a `bestmove` line that cannot be understood.
    """
    tokens = line.split()
    if not tokens or tokens[0] != BEST_MOVE:
        return None
    if len(tokens) < 2:
        raise EngineProtocolError(f"bestmove without a move: {line!r}")

    move_token = tokens[1]
    if move_token in (NULL_MOVE, "0000"):
        return BestMove(move=None)
    if not is_valid_coordinate_move(move_token):
        raise EngineProtocolError(f"Cannot interpret {move_token!r} as a move")

    ponder: Optional[str] = None
    if len(tokens) >= 4 and tokens[2] == "ponder":
        ponder = tokens[3]
    return BestMove(move=move_token, ponder=ponder)
