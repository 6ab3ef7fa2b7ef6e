"""Entry numbering for grid-string sources."""

from __future__ import annotations

from typing import Dict, List, Sequence

from ..core.constants import BLOCK, GRID_STRING_BLOCK, Bounds, Direction
from ..core.exceptions import MalformedInputError
from ..core.models import Coordinate, GridPair, NumberedGrid, PuzzleCell
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

STEPS = {Direction.ACROSS: (0, 1), Direction.DOWN: (1, 0)}


def normalize_rows(rows: Sequence[Sequence[str]]) -> List[List[str]]:
    """Split string rows into cells and check the grid is rectangular."""

    normalized = [list(row) for row in rows]
    if normalized:
        width = len(normalized[0])
        for index, row in enumerate(normalized):
            if len(row) != width:
                raise MalformedInputError(
                    f"Row {index} has {len(row)} cells, expected {width}"
                )
    return normalized


def _is_letter(rows: List[List[str]], bounds: Bounds, row: int, col: int, block: str) -> bool:
    return bounds.contains(row, col) and rows[row][col] != block


def is_entry_start(
    rows: List[List[str]], row: int, col: int, direction: Direction, block: str = GRID_STRING_BLOCK
) -> bool:
    """A letter cell with a wall or edge before it and a letter after it."""

    bounds = Bounds(rows=len(rows), cols=len(rows[0]) if rows else 0)
    if not _is_letter(rows, bounds, row, col, block):
        return False
    dr, dc = STEPS[direction]
    if _is_letter(rows, bounds, row - dr, col - dc, block):
        return False
    return _is_letter(rows, bounds, row + dr, col + dc, block)


def collect_run(
    rows: List[List[str]], row: int, col: int, direction: Direction, block: str = GRID_STRING_BLOCK
) -> str:
    """Letters from ``(row, col)`` up to the next block or grid edge."""

    bounds = Bounds(rows=len(rows), cols=len(rows[0]) if rows else 0)
    dr, dc = STEPS[direction]
    letters: List[str] = []
    r, c = row, col
    while _is_letter(rows, bounds, r, c, block):
        letters.append(rows[r][c])
        r += dr
        c += dc
    return "".join(letters)


def number_grid(rows: Sequence[Sequence[str]], block: str = GRID_STRING_BLOCK) -> NumberedGrid:
    """Number entry starts in row-major order and build the IPUZ grids.

    Start predicates only ever read the source rows, never the grids being
    built. A cell starting both an across and a down entry gets one number.
    Isolated single letters are never numbered.
    """

    cells = normalize_rows(rows)
    puzzle: List[List[PuzzleCell]] = []
    solution: List[List[str]] = []
    numbering: Dict[Coordinate, int] = {}
    next_number = 1

    for r, source_row in enumerate(cells):
        puzzle_row: List[PuzzleCell] = []
        solution_row: List[str] = []
        for c, value in enumerate(source_row):
            if value == block:
                puzzle_row.append(BLOCK)
                solution_row.append(BLOCK)
                continue
            starts = is_entry_start(cells, r, c, Direction.ACROSS, block) or is_entry_start(
                cells, r, c, Direction.DOWN, block
            )
            if starts:
                numbering[(c, r)] = next_number
                puzzle_row.append(next_number)
                next_number += 1
            else:
                puzzle_row.append(0)
            solution_row.append(value)
        puzzle.append(puzzle_row)
        solution.append(solution_row)

    LOGGER.debug(
        "Numbered %d entry starts in %dx%d grid",
        len(numbering),
        len(cells[0]) if cells else 0,
        len(cells),
    )
    return NumberedGrid(
        rows=cells,
        grids=GridPair(puzzle=puzzle, solution=solution),
        numbering=numbering,
        block=block,
    )
