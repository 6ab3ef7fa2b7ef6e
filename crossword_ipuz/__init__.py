"""Converters from NYT mini and SMH crossword payloads to IPUZ.

This package exposes the public API surface via:

- ``crossword_ipuz.engine.converter.convert``: dispatches a parsed source
  document to its converter pair and serializes the result.
- ``convert_nyt`` / ``convert_smh``: parse and convert raw upstream payloads.
- ``crossword_ipuz.engine.numbering.number_grid``: entry numbering for
  grid-string puzzles.
"""

from .engine.converter import convert, convert_nyt, convert_smh, parse_nyt_payload, parse_smh_payload
from .engine.numbering import number_grid
from .engine.serializer import IpuzSerializer, to_json

__all__ = [
    "convert",
    "convert_nyt",
    "convert_smh",
    "parse_nyt_payload",
    "parse_smh_payload",
    "number_grid",
    "IpuzSerializer",
    "to_json",
]

__version__ = "0.1.0"
