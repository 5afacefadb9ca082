from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Dict, List, Sequence

from gemfall.components.block import Block, BlockState, Position
from gemfall.components.board import Board
from gemfall.config import DifficultyStep
from gemfall.constants import MAX_BOARD_ATTEMPTS
from gemfall.systems.board_ops import find_matches

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DifficultyChange:
    level: int
    type_count: int
    fall_speed: float


class SpawnDirector:
    """Chooses types for new blocks and phases in difficulty as the score grows.

    ``steps[0]`` describes the starting level; each later step is reached when
    the score crosses its ``score_threshold``, one level per call.
    """

    def __init__(
        self,
        board: Board,
        steps: Sequence[DifficultyStep],
        *,
        base_fall_speed: float,
        max_type_count: int,
        rng: random.Random | None = None,
    ):
        self.board = board
        self.steps = list(steps)
        self.base_fall_speed = base_fall_speed
        self.max_type_count = max_type_count
        self.rng = rng or random.Random()
        # Outcome of the new-type roll for each level already reached.
        self._type_rolls: Dict[int, bool] = {}

    def reset(self) -> None:
        self._type_rolls.clear()

    def next_type(self) -> int:
        return self.rng.randrange(self.board.type_count)

    def spawn_block(self, row: int, col: int, drop_rows: int) -> Block:
        """New block landing at (row, col), starting ``drop_rows`` above it."""
        block = Block(
            type=self.next_type(),
            row=row,
            col=col,
            render_row=float(row - drop_rows),
            render_col=float(col),
        )
        if drop_rows > 0:
            block.begin(BlockState.FALLING)
        return block

    def fill_empty_cells(self, board: Board) -> List[Position]:
        spawned: List[Position] = []
        for col in range(board.cols):
            empty_rows = [row for row in range(board.rows) if board.grid[row][col].is_empty]
            for row in empty_rows:
                board.grid[row][col] = self.spawn_block(row, col, len(empty_rows))
                spawned.append((row, col))
        return spawned

    def populate(self, board: Board, *, drop_in: bool = False, max_attempts: int = MAX_BOARD_ATTEMPTS) -> None:
        """Fill the whole board with fresh blocks that form no match."""
        drop_rows = board.rows if drop_in else 0
        for row in range(board.rows):
            for col in range(board.cols):
                board.grid[row][col] = self.spawn_block(row, col, drop_rows)
        for _ in range(max_attempts):
            matches = find_matches(board)
            if not matches:
                return
            for row, col in matches:
                board.grid[row][col].type = self.next_type()
        raise RuntimeError("Unable to build a board without matches")

    def maybe_advance_difficulty(self, score: int, level: int) -> DifficultyChange:
        """Advance at most one level when ``score`` reaches the next threshold.

        The result is written to the board and returned. A threshold already
        crossed is never applied again, so the type-count increment happens at
        most once per level.
        """
        board = self.board
        next_level = level + 1
        if next_level >= len(self.steps) or score < self.steps[next_level].score_threshold:
            return DifficultyChange(level, board.type_count, board.fall_speed)
        step = self.steps[next_level]
        fall_speed = self.base_fall_speed * step.fall_speed_multiplier
        if next_level in self._type_rolls:
            board.level = max(board.level, next_level)
            board.fall_speed = fall_speed
            return DifficultyChange(next_level, board.type_count, fall_speed)
        self._type_rolls[next_level] = self.rng.random() < step.new_type_chance
        if self._type_rolls[next_level] and board.type_count < self.max_type_count:
            board.type_count += 1
        board.level = next_level
        board.fall_speed = fall_speed
        logger.info(
            "Difficulty increased to level %d: %d block types, fall speed %.2f",
            next_level, board.type_count, fall_speed,
        )
        return DifficultyChange(next_level, board.type_count, fall_speed)
