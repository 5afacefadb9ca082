from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from gemfall.components.block import Block, BlockState, BlockView, Position
from gemfall.utils.runs import find_runs


@dataclass(slots=True)
class Board:
    """Single board aggregate: the grid plus the session's score and difficulty.

    ``grid[row][col]`` always holds exactly one Block; row 0 is the top row and
    gravity pulls toward higher row indices. The shape never changes after
    creation.
    """
    rows: int
    cols: int
    match_length: int = 3
    type_count: int = 4
    fall_speed: float = 8.0
    level: int = 0
    score: int = 0
    grid: List[List[Block]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.grid:
            self.grid = [[Block.empty(r, c) for c in range(self.cols)] for r in range(self.rows)]

    def in_bounds(self, pos: Position) -> bool:
        row, col = pos
        return 0 <= row < self.rows and 0 <= col < self.cols

    def block_at(self, pos: Position) -> Block:
        row, col = pos
        return self.grid[row][col]

    def blocks(self):
        for row in self.grid:
            yield from row

    def types(self) -> List[List[int]]:
        return [[block.type for block in row] for row in self.grid]

    def is_animating(self) -> bool:
        return any(block.state != BlockState.IDLE for block in self.blocks())

    def has_empty(self) -> bool:
        return any(block.is_empty for block in self.blocks())

    def is_settled(self) -> bool:
        """True when nothing animates and no empty cell or match is left to resolve."""
        if self.is_animating() or self.has_empty():
            return False
        return not find_runs(self.types(), self.match_length)

    def snapshot(self) -> Tuple[Tuple[BlockView, ...], ...]:
        return tuple(tuple(block.view() for block in row) for row in self.grid)
