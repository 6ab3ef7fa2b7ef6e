"""Clue assembly for both source formats."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Sequence

from ..core.constants import Direction
from ..core.exceptions import MalformedClueError
from ..core.models import ClueEntry, ClueLists, ClueReference, LabeledClue, NumberedGrid
from ..utils.logger import get_logger
from .labeled import parse_label
from .numbering import collect_run, is_entry_start


LOGGER = get_logger(__name__)


def sort_clues(entries: Iterable[ClueEntry]) -> List[ClueEntry]:
    """Ascending by number; equal numbers keep their input order."""
    return sorted(entries, key=lambda entry: entry.number)


def resolve_references(
    references: Sequence[ClueReference], numbered: NumberedGrid, direction: Direction
) -> List[ClueEntry]:
    """Attach clue text to numbered cells, dropping stale references."""

    entries: List[ClueEntry] = []
    for reference in references:
        if reference.position not in numbered.positions:
            LOGGER.warning(
                "Skipping %s clue %s: no cell carries that number",
                direction.value.lower(),
                reference.position,
            )
            continue
        entries.append(ClueEntry(number=reference.position, text=reference.text or ""))
    return entries


def derive_answers(numbered: NumberedGrid, direction: Direction) -> List[ClueEntry]:
    """Blank clues for every entry in ``direction``, answers read off the grid."""

    entries: List[ClueEntry] = []
    for (col, row), number in numbered.numbering.items():
        if not is_entry_start(numbered.rows, row, col, direction, numbered.block):
            continue
        word = collect_run(numbered.rows, row, col, direction, numbered.block)
        if len(word) > 1:
            entries.append(ClueEntry(number=number, text="", answer=word))
    return entries


def assemble_grid_clues(
    clue_refs: Optional[Dict[Direction, Sequence[ClueReference]]], numbered: NumberedGrid
) -> ClueLists:
    """Build clue lists for a grid-string source.

    Each direction independently uses its references when the source supplied
    them, otherwise answers are inferred from the grid.
    """

    clue_refs = clue_refs or {}
    lists = ClueLists()
    for direction in Direction:
        references = clue_refs.get(direction)
        if references is None:
            entries = derive_answers(numbered, direction)
        else:
            entries = resolve_references(references, numbered, direction)
        lists.for_direction(direction).extend(sort_clues(entries))
    return lists


def assemble_labeled_clues(clues: Sequence[LabeledClue]) -> ClueLists:
    """Partition labeled clues by direction, keeping source order."""

    lists = ClueLists()
    for clue in clues:
        try:
            direction = Direction.parse(clue.direction)
        except ValueError as exc:
            raise MalformedClueError(str(exc)) from exc
        if not clue.texts:
            raise MalformedClueError(
                f"{direction.value} clue {clue.label} has no plain-text variant"
            )
        number = parse_label(clue.label)
        if number < 1:
            raise MalformedClueError(
                f"{direction.value} clue has no positive label: {clue.label!r}"
            )
        lists.for_direction(direction).append(ClueEntry(number=number, text=clue.texts[0]))
    return lists
