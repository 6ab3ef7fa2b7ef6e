"""HTTP clients for the upstream puzzle services."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

import requests

from ..core.exceptions import SourceFetchError
from ..utils.logger import get_logger

LOGGER = get_logger(__name__)

DEFAULT_NYT_URL = "https://www.nytimes.com/svc/crosswords/v6/puzzle/mini.json"
DEFAULT_SMH_URL = "https://api.smh.com.au/graphql"

SMH_PUZZLE_QUERY = """
query PuzzleQuery($input: PuzzlesByDateAndTypesInput!) {
  puzzlesByDateAndTypes(input: $input) {
    error {
      message
      type {
        __typename
        class
      }
    }
    puzzles {
      author
      date
      difficulty
      game
      id
      type
    }
  }
}
"""


@dataclass
class SourceConfig:
    """Endpoints and timeouts; URLs may be overridden from the environment."""

    nyt_url: str = field(default_factory=lambda: os.environ.get("NYT_MINI_URL", DEFAULT_NYT_URL))
    smh_url: str = field(default_factory=lambda: os.environ.get("SMH_GRAPHQL_URL", DEFAULT_SMH_URL))
    timeout_seconds: float = 30.0


class NytMiniClient:
    """Fetch the current NYT mini puzzle JSON."""

    def __init__(self, config: Optional[SourceConfig] = None, session: Optional[requests.Session] = None) -> None:
        self.config = config or SourceConfig()
        self._session = session or requests.Session()

    def fetch(self) -> Dict[str, Any]:
        try:
            response = self._session.get(self.config.nyt_url, timeout=self.config.timeout_seconds)
            response.raise_for_status()
        except requests.RequestException as exc:
            LOGGER.error("NYT fetch failed: %s", exc)
            raise SourceFetchError(f"Failed to fetch NYT data: {exc}") from exc
        return response.json()


class SmhClient:
    """Query the SMH GraphQL API for the crosswords of a given day."""

    def __init__(self, config: Optional[SourceConfig] = None, session: Optional[requests.Session] = None) -> None:
        self.config = config or SourceConfig()
        self._session = session or requests.Session()

    def fetch(self, puzzle_date: Optional[date] = None) -> List[Dict[str, Any]]:
        """Return the raw puzzle objects published on ``puzzle_date`` (default today)."""

        day = (puzzle_date or date.today()).isoformat()
        payload = {
            "query": SMH_PUZZLE_QUERY,
            "variables": {"input": {"date": day, "types": ["CROSSWORD"]}},
        }
        try:
            response = self._session.post(
                self.config.smh_url,
                json=payload,
                headers={"Accept": "application/json"},
                timeout=self.config.timeout_seconds,
            )
            response.raise_for_status()
        except requests.RequestException as exc:
            LOGGER.error("SMH fetch failed: %s", exc)
            raise SourceFetchError(f"SMH request failed: {exc}") from exc

        data = response.json()
        if data.get("errors"):
            raise SourceFetchError(f"GraphQL error: {data['errors']}")
        result = (data.get("data") or {}).get("puzzlesByDateAndTypes") or {}
        puzzles = result.get("puzzles") or []
        LOGGER.info("SMH returned %d crosswords for %s", len(puzzles), day)
        return puzzles
