"""CLI entrypoint for the NYT mini / SMH to IPUZ converter."""

from __future__ import annotations

import argparse
import json
import logging
import os
from datetime import date
from pathlib import Path
from typing import List, Optional

from crossword_ipuz.core.constants import SourceFormat
from crossword_ipuz.core.exceptions import CrosswordConversionError
from crossword_ipuz.engine.converter import convert_nyt, convert_smh
from crossword_ipuz.engine.serializer import to_json
from crossword_ipuz.io.sources import NytMiniClient, SmhClient
from crossword_ipuz.io.store import DEFAULT_STORE_DIR, IpuzStore, nyt_filename, smh_filename
from crossword_ipuz.utils.logger import configure_logging, get_logger
from crossword_ipuz.utils.pretty import pretty_print_puzzle


LOGGER = get_logger("crossword_ipuz.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Convert NYT mini and SMH crosswords to IPUZ",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    parser.add_argument(
        "--store-dir",
        type=Path,
        default=DEFAULT_STORE_DIR,
        help="Directory holding converted .ipuz files",
    )
    parser.add_argument(
        "--public-base-url",
        type=str,
        default=os.environ.get("PUBLIC_BUCKET_URL"),
        help="Base URL under which stored files are published",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    convert_cmd = commands.add_parser("convert", help="Convert a saved source payload")
    convert_cmd.add_argument("source", type=Path, help="Path to the upstream JSON payload")
    convert_cmd.add_argument(
        "--format",
        dest="source_format",
        choices=[f.value for f in SourceFormat],
        required=True,
        help="Upstream format of the payload",
    )
    convert_cmd.add_argument("--output", type=Path, help="Optional path to IPUZ output")
    convert_cmd.add_argument("--show", action="store_true", help="Print the grids and clues")

    fetch_cmd = commands.add_parser("fetch", help="Fetch today's puzzles, convert and store them")
    fetch_cmd.add_argument("--date", type=date.fromisoformat, default=None, help="SMH puzzle date (YYYY-MM-DD)")
    fetch_cmd.add_argument("--skip-nyt", action="store_true", help="Do not fetch the NYT mini")
    fetch_cmd.add_argument("--skip-smh", action="store_true", help="Do not fetch SMH crosswords")

    commands.add_parser("list", help="List stored puzzles grouped by type")
    return parser


def run_convert(args: argparse.Namespace) -> None:
    payload = json.loads(args.source.read_text(encoding="utf-8"))
    if args.source_format == SourceFormat.NYT.value:
        document = convert_nyt(payload)
    else:
        document = convert_smh(payload)

    if args.show:
        pretty_print_puzzle(document)
    output_text = to_json(document)
    if args.output:
        args.output.write_text(output_text, encoding="utf-8")
    elif not args.show:
        print(output_text)


def run_fetch(args: argparse.Namespace, store: IpuzStore) -> List[str]:
    """Convert and store each puzzle; a malformed puzzle is skipped, not fatal."""

    stored: List[str] = []
    if not args.skip_smh:
        for index, puzzle in enumerate(SmhClient().fetch(args.date)):
            try:
                document = convert_smh(puzzle, today=args.date)
            except CrosswordConversionError as exc:
                LOGGER.warning("Skipping SMH puzzle %s: %s", puzzle.get("id"), exc)
                continue
            filename = smh_filename(puzzle.get("difficulty"), document["date"], index)
            store.save(filename, document, source="smh")
            stored.append(filename)

    if not args.skip_nyt:
        payload = NytMiniClient().fetch()
        try:
            document = convert_nyt(payload)
        except CrosswordConversionError as exc:
            LOGGER.warning("Skipping NYT mini: %s", exc)
        else:
            filename = nyt_filename(payload["publicationDate"])
            store.save(filename, document, source="nyt-mini")
            stored.append(filename)

    for filename in stored:
        url = store.public_url(filename)
        print(url or filename)
    return stored


def run_list(store: IpuzStore) -> None:
    for group in store.list_puzzles():
        print(f"{group.prefix} ({len(group.puzzles)})")
        for puzzle in group.puzzles:
            print(f"  {puzzle.date}  {store.public_url(puzzle.filename) or puzzle.filename}")


def main(argv: Optional[list[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level)

    if args.command == "convert":
        run_convert(args)
        return

    store = IpuzStore(args.store_dir, public_base_url=args.public_base_url)
    if args.command == "fetch":
        run_fetch(args, store)
    else:
        run_list(store)


if __name__ == "__main__":  # pragma: no cover
    main()
