"""IPUZ document assembly."""

from __future__ import annotations

import json
from dataclasses import asdict
from datetime import datetime
from typing import Any, Dict, List

from ..core.constants import IPUZ_KIND, IPUZ_VERSION, Direction
from ..core.exceptions import DateFormatError, MalformedInputError
from ..core.models import ClueEntry, ClueLists, GridPair, PuzzleMetadata
from ..utils.logger import get_logger
from .clues import sort_clues


LOGGER = get_logger(__name__)

METADATA_FIELDS = (
    "title",
    "author",
    "editor",
    "copyright",
    "publisher",
    "publication",
    "url",
    "uniqueid",
    "date",
)


def format_publication_date(iso_date: str) -> str:
    """``2025-10-08`` -> ``10/08/2025``."""

    try:
        parsed = datetime.strptime(iso_date, "%Y-%m-%d")
    except (TypeError, ValueError) as exc:
        raise DateFormatError(f"Publication date is not YYYY-MM-DD: {iso_date!r}") from exc
    return parsed.strftime("%m/%d/%Y")


def clue_pairs(entries: List[ClueEntry]) -> List[List[str]]:
    return [[str(entry.number), entry.text or ""] for entry in sort_clues(entries)]


class IpuzSerializer:
    """Stamp schema identifiers and metadata onto converted grids."""

    def serialize(
        self,
        grids: GridPair,
        clues: ClueLists,
        metadata: PuzzleMetadata,
        reformat_date: bool = False,
    ) -> Dict[str, Any]:
        """Return the IPUZ document as a plain JSON-ready dict.

        With ``reformat_date`` the metadata date is read as ISO and written in
        ``MM/DD/YYYY`` form. Metadata fields left as ``None`` are omitted.
        """

        self._check_grids(grids)
        document: Dict[str, Any] = {
            "version": IPUZ_VERSION,
            "kind": [IPUZ_KIND],
        }

        values = asdict(metadata)
        if reformat_date and values.get("date") is not None:
            values["date"] = format_publication_date(values["date"])
        for name in METADATA_FIELDS:
            if values.get(name) is not None:
                document[name] = values[name]

        document["dimensions"] = {"width": grids.width, "height": grids.height}
        document["puzzle"] = [list(row) for row in grids.puzzle]
        document["solution"] = [list(row) for row in grids.solution]
        document["clues"] = {
            Direction.ACROSS.value: clue_pairs(clues.across),
            Direction.DOWN.value: clue_pairs(clues.down),
        }
        LOGGER.debug(
            "Serialized %dx%d puzzle with %d across / %d down clues",
            grids.width,
            grids.height,
            len(clues.across),
            len(clues.down),
        )
        return document

    @staticmethod
    def _check_grids(grids: GridPair) -> None:
        if len(grids.puzzle) != len(grids.solution):
            raise MalformedInputError("Puzzle and solution grids differ in height")
        width = grids.width
        for puzzle_row, solution_row in zip(grids.puzzle, grids.solution):
            if len(puzzle_row) != width or len(solution_row) != width:
                raise MalformedInputError("Puzzle and solution grids are not rectangular")


def to_json(document: Dict[str, Any]) -> str:
    return json.dumps(document, ensure_ascii=False, indent=2)
