from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Tuple

Position = Tuple[int, int]

# Type value of a cell with no tile in it.
EMPTY = -1


class BlockState(Enum):
    IDLE = auto()
    SWAPPING = auto()
    CLEARING = auto()
    FALLING = auto()


@dataclass(slots=True)
class Block:
    """Content and animation state of one board cell.

    ``row``/``col`` are authoritative: they always name the cell the block
    occupies in ``Board.grid``. ``render_row``/``render_col`` are float grid
    units used only for drawing and equal the grid position once idle.
    ``origin`` is the render position the current swap or fall started from.
    """
    type: int
    row: int
    col: int
    render_row: float
    render_col: float
    state: BlockState = BlockState.IDLE
    progress: float = 0.0
    origin: Tuple[float, float] | None = None

    @classmethod
    def empty(cls, row: int, col: int) -> "Block":
        return cls(type=EMPTY, row=row, col=col, render_row=float(row), render_col=float(col))

    @property
    def is_empty(self) -> bool:
        return self.type == EMPTY

    @property
    def position(self) -> Position:
        return self.row, self.col

    def begin(self, state: BlockState) -> None:
        """Start a new animation from the current render position."""
        self.state = state
        self.progress = 0.0
        self.origin = (self.render_row, self.render_col)

    def settle(self) -> None:
        self.state = BlockState.IDLE
        self.progress = 0.0
        self.origin = None
        self.render_row = float(self.row)
        self.render_col = float(self.col)

    def view(self) -> "BlockView":
        return BlockView(
            type=self.type,
            state=self.state,
            render_row=self.render_row,
            render_col=self.render_col,
            progress=self.progress,
        )


@dataclass(frozen=True, slots=True)
class BlockView:
    """Read-only copy of a block handed to rendering code."""
    type: int
    state: BlockState
    render_row: float
    render_col: float
    progress: float
