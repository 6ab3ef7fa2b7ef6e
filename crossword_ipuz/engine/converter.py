"""Source payload parsing and conversion dispatch.

Two upstream shapes are supported:

- the NYT mini JSON, a flat cell array with explicit labels
  (:class:`LabeledCellSource`),
- SMH GraphQL puzzles, rows of letters with ``.`` blocks and optional
  position-referenced clues (:class:`GridStringSource`).

Both are parsed into the tagged union :data:`SourceDocument` and converted by
:func:`convert`, which is a pure function of its input.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Any, Dict, List, Mapping, Optional

from ..core.constants import (
    NYT_MINI_URL,
    NYT_PUBLICATION,
    NYT_PUBLISHER,
    SMH_COPYRIGHT,
    SMH_DEFAULT_TITLE,
    SMH_DIFFICULTY_PREFIX,
    SMH_PUBLISHER,
    Direction,
)
from ..core.exceptions import MalformedInputError
from ..core.models import (
    CellRecord,
    ClueReference,
    GridStringSource,
    LabeledCellSource,
    LabeledClue,
    PuzzleMetadata,
    SourceDocument,
)
from ..utils.logger import get_logger
from .clues import assemble_grid_clues, assemble_labeled_clues
from .labeled import convert_labeled_cells
from .numbering import number_grid
from .serializer import IpuzSerializer


LOGGER = get_logger(__name__)

DIFFICULTY_PREFIX_RE = re.compile(rf"^{SMH_DIFFICULTY_PREFIX}")


# ----------------------------------------------------------------------
# NYT mini
# ----------------------------------------------------------------------
def _as_list(value: Any, name: str) -> List[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise MalformedInputError(f"NYT {name} must be a list, got {type(value).__name__}")
    return value


def parse_nyt_payload(payload: Mapping[str, Any]) -> LabeledCellSource:
    body = payload.get("body")
    if not isinstance(body, list) or not body:
        raise MalformedInputError("NYT payload has no puzzle body")
    puzzle = body[0]
    if not isinstance(puzzle, Mapping):
        raise MalformedInputError(f"NYT puzzle body is not an object: {puzzle!r}")
    dimensions = puzzle.get("dimensions")
    if not isinstance(dimensions, Mapping):
        raise MalformedInputError("NYT puzzle is missing dimensions")
    try:
        width = int(dimensions["width"])
        height = int(dimensions["height"])
    except (KeyError, TypeError, ValueError) as exc:
        raise MalformedInputError(f"Invalid NYT dimensions: {dimensions!r}") from exc

    cells: List[Optional[CellRecord]] = []
    for raw in _as_list(puzzle.get("cells"), "cells"):
        if not raw:
            cells.append(None)
            continue
        if not isinstance(raw, Mapping):
            raise MalformedInputError(f"NYT cell is not an object: {raw!r}")
        label = raw.get("label")
        cells.append(
            CellRecord(
                answer=raw.get("answer"),
                label=str(label) if label is not None else None,
            )
        )

    raw_clues = _as_list(puzzle.get("clues"), "clues")
    for raw in raw_clues:
        if not isinstance(raw, Mapping):
            raise MalformedInputError(f"NYT clue is not an object: {raw!r}")
    clues = [
        LabeledClue(
            direction=str(raw.get("direction", "")),
            label=str(raw.get("label", "")),
            texts=[
                variant["plain"]
                for variant in _as_list(raw.get("text"), "clue text")
                if isinstance(variant, Mapping) and variant.get("plain") is not None
            ],
        )
        for raw in raw_clues
    ]

    publication_date = payload.get("publicationDate")
    if not publication_date:
        raise MalformedInputError("NYT payload is missing publicationDate")
    constructors = payload.get("constructors")
    author = None
    if isinstance(constructors, list) and constructors:
        author = ", ".join(str(name) for name in constructors)
    metadata = PuzzleMetadata(
        title=NYT_PUBLICATION,
        author=author,
        editor=payload.get("editor"),
        copyright=payload.get("copyright"),
        publisher=NYT_PUBLISHER,
        publication=NYT_PUBLICATION,
        url=NYT_MINI_URL,
        uniqueid=f"nyt-mini-{publication_date}",
        date=publication_date,
    )
    return LabeledCellSource(
        width=width, height=height, cells=cells, clues=clues, metadata=metadata
    )


# ----------------------------------------------------------------------
# SMH
# ----------------------------------------------------------------------
def smh_title(difficulty: Optional[str]) -> str:
    return DIFFICULTY_PREFIX_RE.sub("", difficulty or SMH_DEFAULT_TITLE)


def _parse_references(raw_clues: Any, direction: Direction) -> Optional[List[ClueReference]]:
    if not isinstance(raw_clues, Mapping):
        return None
    raw_list = raw_clues.get(direction.value.lower())
    if not isinstance(raw_list, list):
        return None
    references: List[ClueReference] = []
    for raw in raw_list:
        position = raw.get("position") if isinstance(raw, Mapping) else None
        # Positions must match entry numbers exactly; 1.9, "1" and True never do.
        if not isinstance(position, int) or isinstance(position, bool):
            LOGGER.warning("Skipping %s clue without a usable position: %r", direction.value.lower(), raw)
            continue
        references.append(ClueReference(position=position, text=raw.get("question") or ""))
    return references


def parse_smh_payload(puzzle: Mapping[str, Any], today: Optional[date] = None) -> GridStringSource:
    game = puzzle.get("game") or {}
    if not isinstance(game, Mapping):
        raise MalformedInputError(f"SMH game is not an object: {type(game).__name__}")
    grid = game.get("grid") or []
    if not isinstance(grid, list) or not all(isinstance(row, (str, list)) for row in grid):
        raise MalformedInputError("SMH grid must be a list of rows")
    rows = [list(row) for row in grid]

    clue_refs: Dict[Direction, List[ClueReference]] = {}
    for direction in Direction:
        references = _parse_references(game.get("clues"), direction)
        if references is not None:
            clue_refs[direction] = references

    metadata = PuzzleMetadata(
        title=smh_title(puzzle.get("difficulty")),
        author=puzzle.get("author") or "",
        copyright=SMH_COPYRIGHT,
        publisher=SMH_PUBLISHER,
        date=puzzle.get("date") or (today or date.today()).isoformat(),
    )
    return GridStringSource(rows=rows, metadata=metadata, clue_refs=clue_refs)


# ----------------------------------------------------------------------
# Dispatch
# ----------------------------------------------------------------------
def convert(source: SourceDocument, serializer: Optional[IpuzSerializer] = None) -> Dict[str, Any]:
    """Convert a parsed source document into an IPUZ document."""

    serializer = serializer or IpuzSerializer()
    if isinstance(source, GridStringSource):
        numbered = number_grid(source.rows, block=source.block)
        clues = assemble_grid_clues(source.clue_refs, numbered)
        return serializer.serialize(numbered.grids, clues, source.metadata)
    if isinstance(source, LabeledCellSource):
        grids = convert_labeled_cells(source.cells, source.width, source.height)
        clues = assemble_labeled_clues(source.clues)
        return serializer.serialize(grids, clues, source.metadata, reformat_date=True)
    raise TypeError(f"Unsupported source document: {type(source).__name__}")


def convert_nyt(payload: Mapping[str, Any]) -> Dict[str, Any]:
    document = convert(parse_nyt_payload(payload))
    LOGGER.info("Converted NYT mini for %s", payload.get("publicationDate"))
    return document


def convert_smh(puzzle: Mapping[str, Any], today: Optional[date] = None) -> Dict[str, Any]:
    document = convert(parse_smh_payload(puzzle, today=today))
    LOGGER.info("Converted SMH %s for %s", document.get("title"), document.get("date"))
    return document
