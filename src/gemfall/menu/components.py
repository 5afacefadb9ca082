"""Components used by the menu screens."""
from dataclasses import dataclass
from enum import Enum, auto


class MenuAction(Enum):
    """Actions that a menu button can trigger."""
    PLAY = auto()
    INSTRUCTIONS = auto()
    BACK = auto()


@dataclass
class MenuButton:
    """Interactive button displayed on a menu screen."""
    label: str
    action: MenuAction
    x: float
    y: float
    width: float = 240.0
    height: float = 64.0
    enabled: bool = True


@dataclass
class MenuTag:
    """Marker component so menu entities can be cleaned up together."""
    pass
