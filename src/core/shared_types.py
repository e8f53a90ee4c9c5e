"""
Type definitions used across layers
"""

from enum import StrEnum


class Status(StrEnum):
    IN_PROGRESS = "in progress"
    # The side to move has no pseudo-legal move. Without check detection this covers
    # checkmate, stalemate and a side that simply has nothing left to move.
    NO_MOVES = "no moves"


# --- The domain layer (src/chess) has its own Color enum carrying behavior.
# --- This string version is what crosses the API / persistence boundary.
class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"
