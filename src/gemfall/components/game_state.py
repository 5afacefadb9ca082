"""Game state resource describing the active high-level mode."""
from dataclasses import dataclass
from enum import Enum, auto


class GameMode(Enum):
    """High-level game modes that drive which systems run."""
    TITLE = auto()
    INSTRUCTIONS = auto()
    PLAYING = auto()
    GAME_OVER = auto()


@dataclass
class GameState:
    """Singleton component storing the active mode and the round countdown."""
    mode: GameMode = GameMode.TITLE
    time_left: float = 0.0
