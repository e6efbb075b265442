"""
Parser and serializer for the CC-CEDICT Chinese-English dictionary format.

Modules:
- entry: the immutable DictEntry value type
- parser: single-line parsing (parse_line) and serialization (format_entry)
- reader: lazy iteration over files and other line sources
"""

from cedict_parser.entry import DictEntry, InvalidEntryError
from cedict_parser.parser import (
    CedictFormatError,
    LineKind,
    ParseError,
    ParseErrorKind,
    classify_line,
    format_entry,
    parse_line,
)
from cedict_parser.reader import CedictReader, iter_entries, parse_lines

__all__ = [
    "DictEntry",
    "InvalidEntryError",
    "CedictFormatError",
    "LineKind",
    "ParseError",
    "ParseErrorKind",
    "classify_line",
    "format_entry",
    "parse_line",
    "CedictReader",
    "iter_entries",
    "parse_lines",
]
