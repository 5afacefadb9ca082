from __future__ import annotations

from typing import List, Sequence, Tuple

from gemfall.components.block import EMPTY, Position


def find_runs(types: Sequence[Sequence[int]], match_length: int) -> List[List[Position]]:
    """Return every maximal horizontal or vertical run of >= match_length equal types."""
    rows = len(types)
    cols = len(types[0]) if rows else 0
    runs: List[List[Position]] = []

    def _scan(line: List[Tuple[Position, int]]) -> None:
        run: List[Position] = []
        last_type = EMPTY
        for pos, tval in line:
            if tval != EMPTY and tval == last_type:
                run.append(pos)
                continue
            if len(run) >= match_length:
                runs.append(run)
            run = [pos] if tval != EMPTY else []
            last_type = tval
        if len(run) >= match_length:
            runs.append(run)

    # Horizontal runs
    for r in range(rows):
        _scan([((r, c), types[r][c]) for c in range(cols)])
    # Vertical runs
    for c in range(cols):
        _scan([((r, c), types[r][c]) for r in range(rows)])
    return runs
