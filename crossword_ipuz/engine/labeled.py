"""Grid conversion for sources that already carry cell labels."""

from __future__ import annotations

from typing import List, Optional, Sequence

from ..core.constants import BLOCK
from ..core.exceptions import MalformedInputError
from ..core.models import CellRecord, GridPair, PuzzleCell


def parse_label(label: Optional[str]) -> int:
    """Return the integer label, or 0 for unlabeled cells."""

    if label is None or label == "":
        return 0
    try:
        return int(label)
    except (TypeError, ValueError) as exc:
        raise MalformedInputError(f"Cell label is not an integer: {label!r}") from exc


def convert_labeled_cells(
    cells: Sequence[Optional[CellRecord]], width: int, height: int
) -> GridPair:
    """Lay a row-major cell array out as IPUZ puzzle and solution grids.

    Labels are trusted verbatim; no numbering is inferred.
    """

    if width < 0 or height < 0:
        raise MalformedInputError(f"Invalid dimensions {width}x{height}")
    if len(cells) != width * height:
        raise MalformedInputError(
            f"Expected {width * height} cells for {width}x{height} grid, got {len(cells)}"
        )

    puzzle: List[List[PuzzleCell]] = []
    solution: List[List[str]] = []
    for row in range(height):
        puzzle_row: List[PuzzleCell] = []
        solution_row: List[str] = []
        for col in range(width):
            cell = cells[row * width + col]
            if cell is None or not cell.answer:
                puzzle_row.append(BLOCK)
                solution_row.append(BLOCK)
            else:
                puzzle_row.append(parse_label(cell.label))
                solution_row.append(cell.answer)
        puzzle.append(puzzle_row)
        solution.append(solution_row)
    return GridPair(puzzle=puzzle, solution=solution)
