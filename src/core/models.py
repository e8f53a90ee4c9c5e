"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Hence, both the API layer (higher) and domain/db layers (lower) will use model(s) defined here to send to/receive from the Service
(Decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field

# Type aliases to make GameModel easier to read
PlacementFEN = str
MoveUCI = str


@dataclass
class GameModel:
    """Transport-safe representation of a game session: the `{board, turn, history}` record plus what is needed to rebuild it."""

    starting_fen: str
    board: PlacementFEN
    turn: str  # "w" or "b"
    history: list[MoveUCI] = field(default_factory=list)
    skill_level: int = 5
    computer_color: str = "black"
    status: str = "in progress"
