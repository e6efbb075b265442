"""
reader.py — Lazy, single-pass iteration over CC-CEDICT line sources.

A source is anything that produces lines: an open text or binary file, a
list of strings, a generator, or a whole document held in a str/bytes.
Nothing is read ahead of what the consumer asks for.

Usage:
    from cedict_parser.parser import ParseError
    from cedict_parser.reader import CedictReader, iter_entries

    with open('cedict_ts.u8', encoding='utf-8') as f:
        for entry in iter_entries(f):
            print(entry.simplified, entry.pinyin)

    # Keep the errors, with line numbers
    with open('cedict_ts.u8', encoding='utf-8') as f:
        reader = CedictReader(f)
        for result in reader:
            if isinstance(result, ParseError):
                print(result)
        print(reader.metadata.get('entries'), reader.stats())
"""

import io
import logging
from typing import Dict, Iterable, Iterator, Union

from cedict_parser.entry import BOM, DictEntry
from cedict_parser.parser import (
    LineKind,
    ParseError,
    ParseResult,
    classify_line,
    parse_line,
)

logger = logging.getLogger(__name__)

# Header comments of the form "#! key=value" carry file metadata
METADATA_MARKER = "#!"

LineSource = Union[str, bytes, Iterable[str], Iterable[bytes]]


def iter_lines(source: LineSource) -> Iterator[str]:
    """Return an iterator of text lines from any supported source.

    Raises TypeError straight away for sources that cannot produce lines.
    """
    if isinstance(source, str):
        source = io.StringIO(source)
    elif isinstance(source, (bytes, bytearray)):
        source = io.BytesIO(source)

    try:
        lines = iter(source)
    except TypeError:
        raise TypeError(
            f"Expected a str, bytes or an iterable of lines, got {type(source).__name__}"
        ) from None
    return _decode(lines)


def _decode(lines: Iterator) -> Iterator[str]:
    for line in lines:
        if isinstance(line, (bytes, bytearray)):
            line = line.decode("utf-8")
        yield line


def parse_metadata_line(line: str):
    """Split a '#! key=value' header line into (key, value), or None."""
    text = line.strip().lstrip(BOM).strip()
    if not text.startswith(METADATA_MARKER):
        return None
    key, sep, value = text[len(METADATA_MARKER):].partition("=")
    key = key.strip()
    if not sep or not key:
        return None
    return key, value.strip()


class CedictReader:
    """
    Single-pass iterator of parse results over a line source.

    Yields a DictEntry or a ParseError (carrying its 1-based line number) for
    every entry line; comment and blank lines are counted and skipped. Header
    metadata is collected into ``metadata`` as the lines go by.

    The reader is exhausted after one pass; build a new one on a fresh source
    to read again.
    """

    def __init__(self, source: LineSource):
        self.line_number = 0
        self.metadata: Dict[str, str] = {}
        self.entry_count = 0
        self.error_count = 0
        self.comment_count = 0
        self.blank_count = 0

        self._lines = iter_lines(source)
        self._results = self._scan()

    def __iter__(self) -> "CedictReader":
        return self

    def __next__(self) -> ParseResult:
        return next(self._results)

    def _scan(self) -> Iterator[ParseResult]:
        for raw in self._lines:
            self.line_number += 1
            kind = classify_line(raw)

            if kind is LineKind.BLANK:
                self.blank_count += 1
                continue
            if kind is LineKind.COMMENT:
                self.comment_count += 1
                item = parse_metadata_line(raw)
                if item is not None:
                    key, value = item
                    self.metadata[key] = value
                continue

            result = parse_line(raw)
            if isinstance(result, ParseError):
                self.error_count += 1
                result = result.with_line_number(self.line_number)
            else:
                self.entry_count += 1
            yield result

        logger.debug(
            f"Finished after {self.line_number:,} lines: "
            f"{self.entry_count:,} entries, {self.error_count:,} errors"
        )

    def iter_entries(self, strict: bool = False) -> Iterator[DictEntry]:
        """
        Yield only the entries from the remaining lines.

        Args:
            strict: Raise CedictFormatError on the first malformed line
                instead of skipping it.
        """
        for result in self:
            if isinstance(result, ParseError):
                if strict:
                    raise result.to_exception()
                logger.debug(f"Skipping {result}")
                continue
            yield result

    def stats(self) -> Dict[str, int]:
        return {
            "lines": self.line_number,
            "entries": self.entry_count,
            "errors": self.error_count,
            "comments": self.comment_count,
            "blank": self.blank_count,
        }


def parse_lines(source: LineSource) -> Iterator[ParseResult]:
    """Lazily parse every entry line of a source, errors included."""
    yield from CedictReader(source)


def iter_entries(source: LineSource, strict: bool = False) -> Iterator[DictEntry]:
    """Lazily yield the entries of a source, skipping (or, if strict, raising on) bad lines."""
    yield from CedictReader(source).iter_entries(strict=strict)
