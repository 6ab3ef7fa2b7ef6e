import copy
import unittest
from datetime import date

from crossword_ipuz.core.constants import BLOCK
from crossword_ipuz.core.exceptions import DateFormatError, MalformedClueError, MalformedInputError
from crossword_ipuz.core.models import GridStringSource, LabeledCellSource
from crossword_ipuz.engine.converter import (
    convert,
    convert_nyt,
    convert_smh,
    parse_nyt_payload,
    parse_smh_payload,
    smh_title,
)
from crossword_ipuz.engine.serializer import to_json


NYT_PAYLOAD = {
    "publicationDate": "2025-10-08",
    "constructors": ["Joel Fagliano", "Jane Doe"],
    "editor": "Will Shortz",
    "copyright": "2025",
    "body": [
        {
            "dimensions": {"width": 2, "height": 2},
            "cells": [
                {"answer": "A", "label": "1"},
                {"answer": "B"},
                None,
                {"answer": "C", "label": "2"},
            ],
            "clues": [
                {"direction": "Across", "label": "2", "text": [{"plain": "Third letter"}]},
                {"direction": "Across", "label": "1", "text": [{"plain": "Start"}]},
                {"direction": "Down", "label": "1", "text": [{"plain": "Letters"}, {"formatted": "<i>x</i>"}]},
            ],
        }
    ],
}

SMH_PUZZLE = {
    "author": "Setter",
    "date": "2025-10-09",
    "difficulty": "CROSSWORD_EASY",
    "game": {
        "grid": ["CAT.", "O.AB", "WE.E"],
        "clues": {
            "across": [
                {"position": 5, "question": "Female sheep"},
                {"position": 1, "question": "Feline"},
                {"position": 42, "question": "Stale"},
            ],
            "down": [{"position": 1, "question": "Bovine"}],
        },
    },
}


class NytConversionTests(unittest.TestCase):
    def test_full_document(self) -> None:
        document = convert_nyt(NYT_PAYLOAD)
        self.assertEqual(document["date"], "10/08/2025")
        self.assertEqual(document["uniqueid"], "nyt-mini-2025-10-08")
        self.assertEqual(document["author"], "Joel Fagliano, Jane Doe")
        self.assertEqual(document["editor"], "Will Shortz")
        self.assertEqual(document["publisher"], "The New York Times")
        self.assertEqual(document["puzzle"], [[1, 0], [BLOCK, 2]])
        self.assertEqual(document["solution"], [["A", "B"], [BLOCK, "C"]])
        self.assertEqual(document["clues"]["Across"], [["1", "Start"], ["2", "Third letter"]])
        self.assertEqual(document["clues"]["Down"], [["1", "Letters"]])

    def test_missing_optional_metadata_omitted(self) -> None:
        payload = copy.deepcopy(NYT_PAYLOAD)
        del payload["constructors"]
        del payload["editor"]
        document = convert_nyt(payload)
        self.assertNotIn("author", document)
        self.assertNotIn("editor", document)

    def test_cell_count_mismatch(self) -> None:
        payload = copy.deepcopy(NYT_PAYLOAD)
        payload["body"][0]["cells"].pop()
        with self.assertRaises(MalformedInputError):
            convert_nyt(payload)

    def test_clue_without_plain_text(self) -> None:
        payload = copy.deepcopy(NYT_PAYLOAD)
        payload["body"][0]["clues"][0]["text"] = []
        with self.assertRaises(MalformedClueError):
            convert_nyt(payload)

    def test_bad_publication_date(self) -> None:
        payload = copy.deepcopy(NYT_PAYLOAD)
        payload["publicationDate"] = "08/10/2025"
        with self.assertRaises(DateFormatError):
            convert_nyt(payload)

    def test_missing_body(self) -> None:
        with self.assertRaises(MalformedInputError):
            parse_nyt_payload({"publicationDate": "2025-10-08"})

    def test_malformed_structure_raises_input_error(self) -> None:
        bad_cells = copy.deepcopy(NYT_PAYLOAD)
        bad_cells["body"][0]["cells"][1] = "X"
        bad_clues = copy.deepcopy(NYT_PAYLOAD)
        bad_clues["body"][0]["clues"] = {"Across": []}
        bad_clue = copy.deepcopy(NYT_PAYLOAD)
        bad_clue["body"][0]["clues"][0] = "1. Start"
        for payload in (
            {"publicationDate": "2025-10-08", "body": {"dimensions": {}}},
            {"publicationDate": "2025-10-08", "body": ["puzzle"]},
            bad_cells,
            bad_clues,
            bad_clue,
        ):
            with self.subTest(payload=payload):
                with self.assertRaises(MalformedInputError):
                    convert_nyt(payload)

    def test_clue_without_label_rejected(self) -> None:
        payload = copy.deepcopy(NYT_PAYLOAD)
        del payload["body"][0]["clues"][0]["label"]
        with self.assertRaises(MalformedClueError):
            convert_nyt(payload)

    def test_parses_to_labeled_source(self) -> None:
        self.assertIsInstance(parse_nyt_payload(NYT_PAYLOAD), LabeledCellSource)


class SmhConversionTests(unittest.TestCase):
    def test_referenced_clues(self) -> None:
        document = convert_smh(SMH_PUZZLE)
        self.assertEqual(document["title"], "EASY")
        self.assertEqual(document["author"], "Setter")
        self.assertEqual(document["date"], "2025-10-09")
        self.assertEqual(document["copyright"], "SMH")
        self.assertEqual(document["publisher"], "Sydney Morning Herald")
        self.assertEqual(document["dimensions"], {"width": 4, "height": 3})
        self.assertEqual(document["puzzle"][0], [1, 0, 2, BLOCK])
        self.assertEqual(document["clues"]["Across"], [["1", "Feline"], ["5", "Female sheep"]])
        self.assertEqual(document["clues"]["Down"], [["1", "Bovine"]])

    def test_defaults_without_metadata_or_clues(self) -> None:
        puzzle = {"game": {"grid": ["AB", "CD"]}}
        document = convert_smh(puzzle, today=date(2025, 1, 2))
        self.assertEqual(document["title"], "SMH")
        self.assertEqual(document["author"], "")
        self.assertEqual(document["date"], "2025-01-02")
        self.assertEqual(document["clues"]["Across"], [["1", ""], ["3", ""]])
        self.assertEqual(document["clues"]["Down"], [["1", ""], ["2", ""]])

    def test_inexact_positions_are_skipped(self) -> None:
        puzzle = {
            "game": {
                "grid": ["AB", ".."],
                "clues": {
                    "across": [
                        {"position": 1.9, "question": "Wrong"},
                        {"position": "1", "question": "Text"},
                        {"position": True, "question": "Flag"},
                        "not a clue",
                    ],
                },
            }
        }
        document = convert_smh(puzzle, today=date(2025, 1, 2))
        self.assertEqual(document["clues"]["Across"], [])

    def test_malformed_game_raises_input_error(self) -> None:
        for puzzle in ({"game": ["AB"]}, {"game": {"grid": "AB"}}, {"game": {"grid": [1, 2]}}):
            with self.subTest(puzzle=puzzle):
                with self.assertRaises(MalformedInputError):
                    convert_smh(puzzle, today=date(2025, 1, 2))

    def test_missing_question_defaults_to_empty(self) -> None:
        puzzle = {"game": {"grid": ["AB", ".."], "clues": {"across": [{"position": 1}], "down": []}}}
        document = convert_smh(puzzle, today=date(2025, 1, 2))
        self.assertEqual(document["clues"]["Across"], [["1", ""]])
        self.assertEqual(document["clues"]["Down"], [])

    def test_empty_grid(self) -> None:
        document = convert_smh({"game": {"grid": []}}, today=date(2025, 1, 2))
        self.assertEqual(document["dimensions"], {"width": 0, "height": 0})
        self.assertEqual(document["puzzle"], [])
        self.assertEqual(document["clues"], {"Across": [], "Down": []})

    def test_title_prefix_stripped(self) -> None:
        self.assertEqual(smh_title("CROSSWORD_CRYPTIC"), "CRYPTIC")
        self.assertEqual(smh_title(None), "SMH")

    def test_repeatable_output(self) -> None:
        first = to_json(convert(parse_smh_payload(SMH_PUZZLE)))
        second = to_json(convert(parse_smh_payload(SMH_PUZZLE)))
        self.assertEqual(first, second)

    def test_parses_to_grid_string_source(self) -> None:
        self.assertIsInstance(parse_smh_payload(SMH_PUZZLE), GridStringSource)


class DispatchTests(unittest.TestCase):
    def test_unknown_source_rejected(self) -> None:
        with self.assertRaises(TypeError):
            convert({"grid": []})  # type: ignore[arg-type]


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
