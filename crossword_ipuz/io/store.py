"""Local IPUZ document store.

Converted puzzles are written as ``<type>-YYYY-MM-DD.ipuz`` files under a
store directory, each with a ``.meta.json`` sidecar recording its source and
upload time. Listing groups files by puzzle type, newest first.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..core.exceptions import StoreError
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

DEFAULT_STORE_DIR = Path("local_db/collections/ipuz")
FILENAME_RE = re.compile(r"^(?P<prefix>.+)-(?P<year>\d{4})-(?P<month>\d{2})-(?P<day>\d{2})\.ipuz$")


def nyt_filename(publication_date: str) -> str:
    return f"nyt-mini-{publication_date}.ipuz"


def smh_filename(difficulty: Optional[str], puzzle_date: str, index: int = 0) -> str:
    puzzle_type = difficulty.lower() if difficulty else f"puzzle-{index + 1}"
    return f"smh-{puzzle_type}-{puzzle_date}.ipuz"


@dataclass
class StoredPuzzle:
    filename: str
    prefix: str
    date: str
    size: int


@dataclass
class PuzzleGroup:
    prefix: str
    puzzles: List[StoredPuzzle] = field(default_factory=list)

    @property
    def latest(self) -> Optional[StoredPuzzle]:
        return self.puzzles[0] if self.puzzles else None


class IpuzStore:
    """Persist IPUZ documents on the local filesystem."""

    def __init__(self, store_dir: Path | str = DEFAULT_STORE_DIR, public_base_url: Optional[str] = None) -> None:
        self.store_dir = Path(store_dir)
        self.store_dir.mkdir(parents=True, exist_ok=True)
        self.public_base_url = public_base_url.rstrip("/") if public_base_url else None

    # ------------------------------------------------------------------
    # Public interface
    # ------------------------------------------------------------------
    def save(self, filename: str, document: Dict[str, Any], source: str) -> Path:
        """Write ``document`` and its sidecar metadata, returning the file path."""

        path = self.store_dir / filename
        path.write_text(json.dumps(document, ensure_ascii=False, indent=2), encoding="utf-8")
        meta = {
            "source": source,
            "date": document.get("date"),
            "uploaded_at": datetime.now(timezone.utc).isoformat(),
        }
        self._meta_path(path).write_text(json.dumps(meta, indent=2), encoding="utf-8")
        LOGGER.info("Stored %s (%s)", filename, source)
        return path

    def load(self, filename: str) -> Dict[str, Any]:
        path = self.store_dir / filename
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise StoreError(f"Cannot read stored puzzle {filename}: {exc}") from exc

    def list_puzzles(self) -> List[PuzzleGroup]:
        """Group stored puzzles by type; groups and puzzles newest first."""

        groups: Dict[str, PuzzleGroup] = {}
        for path in self.store_dir.glob("*.ipuz"):
            match = FILENAME_RE.match(path.name)
            if not match:
                LOGGER.debug("Ignoring unrecognised file name %s", path.name)
                continue
            prefix = match.group("prefix")
            entry = StoredPuzzle(
                filename=path.name,
                prefix=prefix,
                date=f"{match.group('year')}-{match.group('month')}-{match.group('day')}",
                size=path.stat().st_size,
            )
            groups.setdefault(prefix, PuzzleGroup(prefix=prefix)).puzzles.append(entry)

        for group in groups.values():
            group.puzzles.sort(key=lambda item: item.date, reverse=True)
        return sorted(
            groups.values(),
            key=lambda group: (group.latest.date if group.latest else "", group.prefix),
            reverse=True,
        )

    def latest(self, prefix: str) -> Optional[StoredPuzzle]:
        for group in self.list_puzzles():
            if group.prefix == prefix:
                return group.latest
        return None

    def public_url(self, filename: str) -> Optional[str]:
        if not self.public_base_url:
            return None
        return f"{self.public_base_url}/{filename}"

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _meta_path(path: Path) -> Path:
        return path.with_name(f"{path.name}.meta.json")
