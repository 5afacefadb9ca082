from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, List, Sequence, Set, Tuple

from gemfall.components.block import EMPTY, Block, BlockState, Position
from gemfall.utils.runs import find_runs

if TYPE_CHECKING:
    from gemfall.components.board import Board


@dataclass(frozen=True, slots=True)
class GravityMove:
    col: int
    from_row: int
    to_row: int


def is_adjacent(a: Position, b: Position) -> bool:
    ar, ac = a
    br, bc = b
    return abs(ar - br) + abs(ac - bc) == 1


def find_matches(board: Board) -> Set[Position]:
    """Cells belonging to any qualifying run. Only block types are considered."""
    return {pos for run in find_runs(board.types(), board.match_length) for pos in run}


def find_match_groups(board: Board) -> List[List[Position]]:
    """Runs merged into connected groups (an L or T shape is one group)."""
    groups = [set(run) for run in find_runs(board.types(), board.match_length)]
    merged: List[Set[Position]] = []
    while groups:
        first = groups.pop()
        changed = True
        while changed:
            changed = False
            for g in groups[:]:
                if first & g:
                    first |= g
                    groups.remove(g)
                    changed = True
        merged.append(first)
    return sorted(sorted(group) for group in merged)


def compact_column(column: Sequence[int]) -> List[Tuple[int, int]]:
    """Downward resettlement of one column, top row first in ``column``.

    Returns ``(from_row, to_row)`` pairs from a single bottom-up sweep: each
    filled cell drops into the lowest empty slot below it, keeping order.
    """
    moves: List[Tuple[int, int]] = []
    target = len(column) - 1
    for row in range(len(column) - 1, -1, -1):
        if column[row] == EMPTY:
            continue
        if row != target:
            moves.append((row, target))
        target -= 1
    return moves


def compute_gravity_moves(board: Board) -> List[GravityMove]:
    moves: List[GravityMove] = []
    for col in range(board.cols):
        column = [board.grid[row][col].type for row in range(board.rows)]
        moves.extend(GravityMove(col, src, dst) for src, dst in compact_column(column))
    return moves


def apply_gravity_moves(board: Board, moves: Sequence[GravityMove]) -> None:
    """Move blocks to their landing rows and start their fall animation.

    Moves must be applied in the bottom-up order ``compact_column`` produces so
    every target cell is empty when its block arrives.
    """
    for move in moves:
        block = board.grid[move.from_row][move.col]
        board.grid[move.to_row][move.col] = block
        board.grid[move.from_row][move.col] = Block.empty(move.from_row, move.col)
        block.row = move.to_row
        block.begin(BlockState.FALLING)


def swap_cells(board: Board, a: Position, b: Position) -> None:
    """Exchange the blocks at a and b in the grid, keeping their render positions."""
    block_a = board.block_at(a)
    block_b = board.block_at(b)
    board.grid[a[0]][a[1]] = block_b
    board.grid[b[0]][b[1]] = block_a
    block_a.row, block_a.col = b
    block_b.row, block_b.col = a


def predict_swap_creates_match(board: Board, src: Position, dst: Position) -> bool:
    """Return True if swapping src/dst would create a match (board left untouched)."""
    types = board.types()
    (sr, sc), (dr, dc) = src, dst
    types[sr][sc], types[dr][dc] = types[dr][dc], types[sr][sc]
    return bool(find_runs(types, board.match_length))


def find_valid_swaps(board: Board) -> List[Tuple[Position, Position]]:
    """Enumerate adjacent swaps that would produce a match."""
    swaps: List[Tuple[Position, Position]] = []
    for row in range(board.rows):
        for col in range(board.cols):
            pos = (row, col)
            if board.grid[row][col].is_empty:
                continue
            for other in ((row, col + 1), (row + 1, col)):
                if not board.in_bounds(other) or board.block_at(other).is_empty:
                    continue
                if predict_swap_creates_match(board, pos, other):
                    swaps.append((pos, other))
    return swaps
