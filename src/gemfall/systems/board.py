from __future__ import annotations

import logging
import math
from typing import List, Sequence

from esper import World

from gemfall.components.block import EMPTY, Block, BlockState
from gemfall.components.board import Board
from gemfall.components.game_state import GameMode
from gemfall.constants import MAX_BOARD_ATTEMPTS
from gemfall.events.bus import (
    EventBus,
    EVENT_TICK,
    EVENT_BOARD_RESHUFFLED,
    EVENT_CASCADE_COMPLETE,
    EVENT_CASCADE_STEP,
    EVENT_DIFFICULTY_CHANGED,
    EVENT_GRAVITY_APPLIED,
    EVENT_MATCH_CLEARED,
    EVENT_MATCH_FOUND,
    EVENT_REFILL_COMPLETED,
    EVENT_SCORE_CHANGED,
)
from gemfall.systems.board_ops import (
    apply_gravity_moves,
    compute_gravity_moves,
    find_match_groups,
    find_matches,
    find_valid_swaps,
)
from gemfall.systems.spawn import SpawnDirector
from gemfall.systems.swap import SwapController
from gemfall.world import get_config, get_game_state

logger = logging.getLogger(__name__)


class BoardSystem:
    """Owns the board and runs its per-tick resolution loop.

    Each tick first advances every block animation. Only when nothing is
    animating does it resolve the board: empty cells get gravity and refill,
    otherwise matches are scored and start clearing. Re-entering once per tick
    is what drives cascades until the board settles.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        rows: int | None = None,
        cols: int | None = None,
        *,
        drop_in: bool = False,
        reshuffle_on_stalemate: bool = True,
    ):
        self.world = world
        self.event_bus = event_bus
        self.config = get_config(world)
        self.reshuffle_on_stalemate = reshuffle_on_stalemate
        board = Board(
            rows=rows or self.config.rows,
            cols=cols or self.config.cols,
            match_length=self.config.match_length,
            type_count=self.config.initial_type_count,
            fall_speed=self.config.base_fall_speed,
        )
        self.board_entity = self.world.create_entity(board)
        self.spawner = SpawnDirector(
            board,
            self.config.difficulty_steps,
            base_fall_speed=self.config.base_fall_speed,
            max_type_count=self.config.max_type_count,
            rng=getattr(world, "random", None),
        )
        self.swap_controller = SwapController(board, event_bus)
        self._cascade_depth = 0
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)
        self.new_game(drop_in=drop_in)

    @property
    def board(self) -> Board:
        return self.world.component_for_entity(self.board_entity, Board)

    def new_game(self, *, drop_in: bool = False) -> None:
        """Reset score and difficulty and deal a fresh board without matches."""
        board = self.board
        steps = self.config.difficulty_steps
        multiplier = steps[0].fall_speed_multiplier if steps else 1.0
        board.score = 0
        board.level = 0
        board.type_count = self.config.initial_type_count
        board.fall_speed = self.config.base_fall_speed * multiplier
        self.spawner.reset()
        self.swap_controller.cancel()
        self._cascade_depth = 0
        self.spawner.populate(board, drop_in=drop_in)
        self.check_stalemate()
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=0, delta=0)

    def load_layout(self, types: Sequence[Sequence[int]]) -> None:
        """Replace every cell with an idle block of the given type."""
        board = self.board
        if len(types) != board.rows or any(len(row) != board.cols for row in types):
            raise ValueError(f"layout must be {board.rows}x{board.cols}")
        self.swap_controller.cancel()
        self._cascade_depth = 0
        for r, row in enumerate(types):
            for c, tval in enumerate(row):
                tval = int(tval)
                if tval != EMPTY and not 0 <= tval < board.type_count:
                    raise ValueError(f"invalid block type {tval} at {(r, c)}")
                board.grid[r][c] = Block(type=tval, row=r, col=c, render_row=float(r), render_col=float(c))

    def check_stalemate(self) -> bool:
        """Reshuffle when no swap can form a match. Returns True if the board was re-dealt."""
        if not self.reshuffle_on_stalemate or find_valid_swaps(self.board):
            return False
        return self.reshuffle()

    def reshuffle(self, max_attempts: int = MAX_BOARD_ATTEMPTS) -> bool:
        """Deal a new match-free board that has at least one valid swap.

        When no such board turns up within ``max_attempts`` the previous blocks
        are put back unchanged.
        """
        board = self.board
        previous = [list(row) for row in board.grid]
        for _ in range(max_attempts):
            self.spawner.populate(board)
            if find_valid_swaps(board):
                self.event_bus.emit(EVENT_BOARD_RESHUFFLED)
                return True
        board.grid[:] = previous
        logger.warning("No playable %dx%d layout found; keeping the current board", board.rows, board.cols)
        return False

    def is_settled(self) -> bool:
        return not self.swap_controller.in_flight and self.board.is_settled()

    def on_tick(self, sender, **kwargs):
        if not self._playing():
            return
        self.tick(kwargs.get('dt', 1/60))

    def tick(self, dt: float) -> None:
        try:
            dt = float(dt)
        except (TypeError, ValueError):
            logger.debug("Ignoring tick with non-numeric dt %r", dt)
            return
        if not math.isfinite(dt) or dt < 0:
            logger.debug("Ignoring tick with invalid dt %r", dt)
            return
        board = self.board
        self._advance_blocks(board, dt)
        self.swap_controller.update()
        if board.is_animating():
            return
        if board.has_empty():
            self._resolve_gravity(board)
        else:
            self._resolve_matches(board)

    def _advance_blocks(self, board: Board, dt: float) -> None:
        cleared: List[tuple[int, int]] = []
        for block in board.blocks():
            state = block.state
            if state == BlockState.IDLE:
                continue
            if state == BlockState.SWAPPING:
                # Completion is decided by the swap controller.
                block.progress = min(1.0, block.progress + self.config.swap_rate * dt)
                self._interpolate(block)
            elif state == BlockState.CLEARING:
                block.progress += self.config.clear_rate * dt
                if block.progress >= 1.0:
                    block.type = EMPTY
                    block.settle()
                    cleared.append(block.position)
            elif state == BlockState.FALLING:
                start_row = block.origin[0] if block.origin else block.render_row
                distance = block.row - start_row
                if distance > 0:
                    block.progress += board.fall_speed * dt / distance
                if distance <= 0 or block.progress >= 1.0:
                    block.settle()
                else:
                    self._interpolate(block)
        if cleared:
            self.event_bus.emit(EVENT_MATCH_CLEARED, positions=sorted(cleared))

    @staticmethod
    def _interpolate(block: Block) -> None:
        if block.origin is None:
            return
        origin_row, origin_col = block.origin
        p = block.progress
        block.render_row = origin_row + (block.row - origin_row) * p
        block.render_col = origin_col + (block.col - origin_col) * p

    def _resolve_gravity(self, board: Board) -> None:
        moves = compute_gravity_moves(board)
        apply_gravity_moves(board, moves)
        new_tiles = self.spawner.fill_empty_cells(board)
        self.event_bus.emit(EVENT_GRAVITY_APPLIED, moves=moves)
        if new_tiles:
            self.event_bus.emit(EVENT_REFILL_COMPLETED, new_tiles=new_tiles)

    def _resolve_matches(self, board: Board) -> None:
        matches = find_matches(board)
        if not matches:
            if self._cascade_depth:
                depth = self._cascade_depth
                self._cascade_depth = 0
                self.event_bus.emit(EVENT_CASCADE_COMPLETE, depth=depth)
                self.check_stalemate()
            return
        self._cascade_depth += 1
        positions = sorted(matches)
        points = len(positions) * self.config.points_per_block
        board.score += points
        self.event_bus.emit(EVENT_SCORE_CHANGED, score=board.score, delta=points)
        previous_level = board.level
        change = self.spawner.maybe_advance_difficulty(board.score, board.level)
        if change.level != previous_level:
            self.event_bus.emit(
                EVENT_DIFFICULTY_CHANGED,
                level=change.level,
                type_count=change.type_count,
                fall_speed=change.fall_speed,
            )
        for pos in positions:
            board.block_at(pos).begin(BlockState.CLEARING)
        self.event_bus.emit(
            EVENT_MATCH_FOUND,
            positions=positions,
            groups=find_match_groups(board),
            size=len(positions),
            points=points,
        )
        self.event_bus.emit(EVENT_CASCADE_STEP, depth=self._cascade_depth, positions=positions)

    def _playing(self) -> bool:
        state = get_game_state(self.world)
        if state is None:
            return True
        return state.mode == GameMode.PLAYING
