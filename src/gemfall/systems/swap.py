from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from gemfall.components.block import BlockState, Position
from gemfall.components.board import Board
from gemfall.events.bus import (
    EventBus,
    EVENT_TILE_SWAP_FINALIZE,
    EVENT_TILE_SWAP_INVALID,
    EVENT_TILE_SWAP_REQUEST,
    EVENT_TILE_SWAP_VALID,
)
from gemfall.systems.board_ops import find_matches, is_adjacent, swap_cells

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class PendingSwap:
    src: Position
    dst: Position
    phase: str = 'forward'  # 'forward' or 'reverse'


class SwapController:
    """Two-phase swap: provisional grid swap, then commit or revert.

    The grid contents are exchanged the moment a swap is accepted. When both
    blocks finish their animation the board is checked for matches; without
    one, the blocks are swapped back and animate home. Only one swap may be in
    flight and none is accepted while any block animates.
    """

    def __init__(self, board: Board, event_bus: EventBus):
        self.board = board
        self.event_bus = event_bus
        self.pending: Optional[PendingSwap] = None

    @property
    def in_flight(self) -> bool:
        return self.pending is not None

    def attempt_swap(self, a: Position, b: Position) -> bool:
        if not (self._valid_position(a) and self._valid_position(b)):
            logger.debug("Rejected swap %r <-> %r: out of range", a, b)
            return False
        a = (a[0], a[1])
        b = (b[0], b[1])
        if not is_adjacent(a, b):
            logger.debug("Rejected swap %r <-> %r: not adjacent", a, b)
            return False
        if self.pending is not None or self.board.is_animating():
            logger.debug("Rejected swap %r <-> %r: board is animating", a, b)
            return False
        if self.board.block_at(a).is_empty or self.board.block_at(b).is_empty:
            return False
        self.pending = PendingSwap(src=a, dst=b)
        self._start_swap(a, b)
        self.event_bus.emit(EVENT_TILE_SWAP_REQUEST, src=a, dst=b)
        return True

    def update(self) -> None:
        """Resolve the pending swap once both blocks reached their target cell."""
        swap = self.pending
        if swap is None:
            return
        block_a = self.board.block_at(swap.src)
        block_b = self.board.block_at(swap.dst)
        if any(block.state == BlockState.SWAPPING and block.progress < 1.0 for block in (block_a, block_b)):
            return
        block_a.settle()
        block_b.settle()
        if swap.phase == 'reverse':
            self.pending = None
            self.event_bus.emit(EVENT_TILE_SWAP_FINALIZE, src=swap.src, dst=swap.dst, reverted=True)
            return
        matches = find_matches(self.board)
        if matches:
            self.pending = None
            self.event_bus.emit(EVENT_TILE_SWAP_VALID, src=swap.src, dst=swap.dst, positions=sorted(matches))
            self.event_bus.emit(EVENT_TILE_SWAP_FINALIZE, src=swap.src, dst=swap.dst, reverted=False)
            return
        swap.phase = 'reverse'
        self._start_swap(swap.src, swap.dst)
        self.event_bus.emit(EVENT_TILE_SWAP_INVALID, src=swap.src, dst=swap.dst)

    def cancel(self) -> None:
        self.pending = None

    def _start_swap(self, a: Position, b: Position) -> None:
        swap_cells(self.board, a, b)
        for pos in (a, b):
            self.board.block_at(pos).begin(BlockState.SWAPPING)

    def _valid_position(self, pos) -> bool:
        try:
            row, col = pos
        except (TypeError, ValueError):
            return False
        if isinstance(row, bool) or isinstance(col, bool):
            return False
        if not isinstance(row, int) or not isinstance(col, int):
            return False
        return self.board.in_bounds((row, col))
