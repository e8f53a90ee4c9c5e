"""
Minimax search with alpha-beta pruning
-----

The search looks `depth` plies ahead and scores the leaves with the material evaluator.
Scores are always taken from the perspective of the side that is searching (the root side):
the root side maximizes, its opponent minimizes.

Alpha-beta: alpha is the best score the maximizer is already guaranteed, beta the best the minimizer is guaranteed.
Once alpha >= beta the remaining siblings cannot change the outcome and are skipped.

NOTE: there is no check detection. A side without pseudo-legal moves is scored statically,
the same way whether it is blocked, stalemated or mated. No transposition table either: repeated positions are searched again.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

from src.chess.board import Board
from src.chess.evaluation import PIECE_VALUES, PieceValues, evaluate
from src.chess.moves import Move, all_moves
from src.chess.pieces import Color

logger = logging.getLogger(__name__)

INFINITY = math.inf


@dataclass
class SearchStats:
    nodes: int = 0


@dataclass(frozen=True)
class SearchResult:
    move: Optional[Move]
    score: float
    nodes: int


def minimax(
    board: Board,
    side: Color,
    depth: int,
    alpha: float,
    beta: float,
    maximizing: bool,
    perspective: Color,
    values: PieceValues = PIECE_VALUES,
    prune: bool = True,
    stats: Optional[SearchStats] = None,
) -> float:
    """
    Score of `board` with `side` to move, searched `depth` plies deep.

    Every child is searched on its own copy of the board, so siblings never see each other's trial moves.
    """
    if stats is not None:
        stats.nodes += 1

    if depth <= 0:
        return evaluate(board, perspective, values)

    moves = all_moves(board, side)
    if not moves:
        return evaluate(board, perspective, values)

    if maximizing:
        best_score = -INFINITY
        for move in moves:
            score = minimax(
                board.after_move(move),
                side.opponent,
                depth - 1,
                alpha,
                beta,
                False,
                perspective,
                values,
                prune,
                stats,
            )
            best_score = max(best_score, score)
            alpha = max(alpha, score)
            if prune and alpha >= beta:
                break
        return best_score

    best_score = INFINITY
    for move in moves:
        score = minimax(
            board.after_move(move),
            side.opponent,
            depth - 1,
            alpha,
            beta,
            True,
            perspective,
            values,
            prune,
            stats,
        )
        best_score = min(best_score, score)
        beta = min(beta, score)
        if prune and alpha >= beta:
            break
    return best_score


def search(
    board: Board,
    side: Color,
    depth: int,
    prune: bool = True,
    values: PieceValues = PIECE_VALUES,
) -> SearchResult:
    """
    Pick the best move for `side`.

    * Moves are tried in generation order, and a move only replaces the incumbent when it scores strictly better:
      of equally good moves the first generated one wins.
    * Depth 0 still looks one ply ahead: every immediate move is scored by the static evaluation of the board it leads to.
    * `prune=False` runs plain minimax (same move and score, more nodes).
    """
    if depth < 0:
        raise ValueError(f"Search depth must not be negative, got {depth}")

    stats = SearchStats(nodes=1)
    moves = all_moves(board, side)
    if not moves:
        logger.debug("No moves available for %s", side.name.lower())
        return SearchResult(None, evaluate(board, side, values), stats.nodes)

    child_depth = max(depth - 1, 0)
    alpha = -INFINITY
    best_move: Optional[Move] = None
    best_score = -INFINITY
    for move in moves:
        score = minimax(
            board.after_move(move),
            side.opponent,
            child_depth,
            alpha,
            INFINITY,
            False,
            side,
            values,
            prune,
            stats,
        )
        if score > best_score:
            best_score = score
            best_move = move
        if prune:
            alpha = max(alpha, best_score)

    logger.debug(
        "Searched %s to depth %d: best %s (score %s, %d nodes)",
        side.name.lower(),
        depth,
        best_move,
        best_score,
        stats.nodes,
    )
    return SearchResult(best_move, best_score, stats.nodes)


def best_move(board: Board, side: Color, depth: int) -> Optional[Move]:
    """The move `search` settles on, or None when `side` cannot move."""
    return search(board, side, depth).move
