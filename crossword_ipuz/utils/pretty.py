"""Pretty-print helpers for IPUZ documents."""

from __future__ import annotations

import sys
from typing import Any, Dict, List, Sequence

from ..core.constants import BLOCK, Direction


def cell_symbol(value: Any) -> str:
    if value == BLOCK:
        return BLOCK
    if value in (0, None, ""):
        return "."
    return str(value)


def format_rows(rows: Sequence[Sequence[Any]]) -> List[str]:
    width = len(rows[0]) if rows else 0
    header_cells = [f"{c:>2}" for c in range(width)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * width - 1))
    for r, row in enumerate(rows):
        row_render = " ".join(f"{cell_symbol(value):>2}" for value in row)
        lines.append(f"{r:>2} | {row_render}")
    return lines


def format_puzzle(document: Dict[str, Any]) -> str:
    """Render title, both grids and clue lists as plain text."""

    lines: List[str] = []
    heading = " / ".join(
        str(document[key]) for key in ("title", "author", "date") if document.get(key)
    )
    if heading:
        lines.append(heading)
    lines.append("--- Puzzle ---")
    lines.extend(format_rows(document.get("puzzle", [])))
    lines.append("--- Solution ---")
    lines.extend(format_rows(document.get("solution", [])))
    clues = document.get("clues", {})
    for direction in Direction:
        lines.append(f"--- {direction.value} ---")
        for number, text in clues.get(direction.value, []):
            lines.append(f"  {number:>3}. {text}")
    return "\n".join(lines)


def pretty_print_puzzle(document: Dict[str, Any], *, stream=None) -> None:
    stream = stream or sys.stdout
    print(format_puzzle(document), file=stream)
