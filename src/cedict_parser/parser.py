"""
parser.py — Parse and serialize single CC-CEDICT lines.

Line format:
    TRAD SIMP [pin1 yin1] /definition 1/definition 2/

parse_line() is total: every malformed line comes back as a ParseError value
naming the structural element that was wrong, never as an exception. Comment
lines (starting with '#') and blank lines are classified separately with
classify_line() and are not entries.

Usage:
    from cedict_parser.parser import parse_line, format_entry, ParseError

    result = parse_line("你好 你好 [ni3 hao3] /Hello!/Hi!/")
    if isinstance(result, ParseError):
        print(result)
    else:
        print(format_entry(result))
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional, Union

from cedict_parser.entry import (
    BOM,
    COMMENT_MARKER,
    DEFINITION_SEPARATOR,
    PINYIN_CLOSE,
    PINYIN_OPEN,
    RESERVED_PREFIXES,
    DictEntry,
    InvalidEntryError,
)

_LINE_BREAKS = ("\n", "\r")


class LineKind(Enum):
    """Classification of a raw input line."""
    ENTRY = "entry"
    COMMENT = "comment"
    BLANK = "blank"


class ParseErrorKind(Enum):
    """Which structural element of an entry line was missing or malformed."""
    MISSING_TRADITIONAL = "missing traditional headword"
    MISSING_SIMPLIFIED = "missing simplified headword"
    MALFORMED_PRONUNCIATION = "malformed pronunciation"
    MALFORMED_DEFINITIONS = "malformed definitions"
    NOT_AN_ENTRY = "not an entry line"


# DictEntry field name -> error kind, for values the entry itself rejects
_FIELD_ERRORS = {
    "traditional": ParseErrorKind.MISSING_TRADITIONAL,
    "simplified": ParseErrorKind.MISSING_SIMPLIFIED,
    "pinyin": ParseErrorKind.MALFORMED_PRONUNCIATION,
    "definitions": ParseErrorKind.MALFORMED_DEFINITIONS,
}


class CedictFormatError(ValueError):
    """Raised by strict iteration when a line fails to parse."""

    def __init__(self, error: "ParseError"):
        super().__init__(str(error))
        self.error = error


@dataclass(frozen=True)
class ParseError:
    """A line that could not be parsed, with the reason it was rejected.

    ``line_number`` is filled in by the line-sequence reader; parse_line()
    itself does not know where a line came from.
    """
    kind: ParseErrorKind
    reason: str
    line: str
    line_number: Optional[int] = None

    def __str__(self) -> str:
        location = f"line {self.line_number}: " if self.line_number is not None else ""
        return f"{location}{self.kind.value}: {self.reason}: {self.line!r}"

    def with_line_number(self, line_number: int) -> "ParseError":
        return replace(self, line_number=line_number)

    def to_exception(self) -> CedictFormatError:
        return CedictFormatError(self)


ParseResult = Union[DictEntry, ParseError]


def _clean(line: str) -> str:
    """Drop a BOM and surrounding whitespace, including the line terminator."""
    return line.strip().lstrip(BOM).strip()


def classify_line(line: str) -> LineKind:
    """Classify a raw line as an entry, comment, or blank line."""
    cleaned = _clean(line)
    if not cleaned:
        return LineKind.BLANK
    if cleaned.startswith(COMMENT_MARKER):
        return LineKind.COMMENT
    return LineKind.ENTRY


def _split_token(text: str):
    """Split off the first whitespace-delimited token.

    Returns (token, rest); rest is '' when nothing follows the token.
    """
    parts = text.split(None, 1)
    if not parts:
        return "", ""
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1]


def _has_line_break(text: str) -> bool:
    return any(ch in text for ch in _LINE_BREAKS)


def _split_definitions(block: str) -> List[str]:
    # Empty and whitespace-only segments are dropped, the rest kept verbatim
    return [d for d in block.split(DEFINITION_SEPARATOR) if d.strip()]


def parse_line(line: str) -> ParseResult:
    """
    Parse one CC-CEDICT line into a DictEntry.

    Args:
        line: A single line of text; a trailing newline is ignored.

    Returns:
        DictEntry on success, otherwise a ParseError describing the first
        structural element that was missing or malformed.
    """
    raw = line.rstrip("\r\n")
    kind = classify_line(raw)
    if kind is not LineKind.ENTRY:
        return ParseError(ParseErrorKind.NOT_AN_ENTRY, f"{kind.value} line", raw)

    text = _clean(raw)

    def fail(error_kind: ParseErrorKind, reason: str) -> ParseError:
        return ParseError(error_kind, reason, raw)

    traditional, rest = _split_token(text)
    if traditional.startswith(PINYIN_OPEN):
        return fail(ParseErrorKind.MISSING_TRADITIONAL, "line starts with the pinyin")
    if traditional.startswith(RESERVED_PREFIXES):
        return fail(ParseErrorKind.MISSING_TRADITIONAL, f"headword starts with {traditional[0]!r}")

    simplified, rest = _split_token(rest)
    if not simplified or simplified.startswith(RESERVED_PREFIXES):
        return fail(ParseErrorKind.MISSING_SIMPLIFIED, "no second headword before the pinyin")

    # Pinyin: strictly between the first '[' and the first ']' after it
    if not rest.startswith(PINYIN_OPEN):
        if PINYIN_OPEN not in rest:
            reason = f"no opening {PINYIN_OPEN!r}"
        else:
            reason = f"unexpected text before {PINYIN_OPEN!r}"
        if PINYIN_CLOSE in rest and rest.find(PINYIN_CLOSE) < rest.find(PINYIN_OPEN):
            reason = f"{PINYIN_CLOSE!r} before {PINYIN_OPEN!r}"
        return fail(ParseErrorKind.MALFORMED_PRONUNCIATION, reason)

    close = rest.find(PINYIN_CLOSE, 1)
    if close == -1:
        return fail(ParseErrorKind.MALFORMED_PRONUNCIATION, f"no closing {PINYIN_CLOSE!r}")
    pinyin = rest[1:close]
    if not pinyin.strip():
        return fail(ParseErrorKind.MALFORMED_PRONUNCIATION, "empty pinyin")
    if _has_line_break(pinyin):
        return fail(ParseErrorKind.MALFORMED_PRONUNCIATION, "line break inside the pinyin")

    # Definitions: between the first '/' after ']' and the last '/'
    tail = rest[close + 1:].strip()
    if not tail.startswith(DEFINITION_SEPARATOR):
        if DEFINITION_SEPARATOR in tail:
            reason = f"unexpected text before the first {DEFINITION_SEPARATOR!r}"
        else:
            reason = "no definitions block"
        return fail(ParseErrorKind.MALFORMED_DEFINITIONS, reason)
    if len(tail) < 2 or not tail.endswith(DEFINITION_SEPARATOR):
        return fail(ParseErrorKind.MALFORMED_DEFINITIONS, "unterminated definitions block")

    definitions = _split_definitions(tail[1:-1])
    if not definitions:
        return fail(ParseErrorKind.MALFORMED_DEFINITIONS, "empty definitions block")
    if any(_has_line_break(d) for d in definitions):
        return fail(ParseErrorKind.MALFORMED_DEFINITIONS, "line break inside a definition")

    try:
        return DictEntry(traditional, simplified, pinyin, tuple(definitions))
    except InvalidEntryError as e:
        return fail(_FIELD_ERRORS[e.field], str(e))


def format_entry(entry: DictEntry) -> str:
    """Render an entry as a CC-CEDICT line (without a trailing newline)."""
    block = DEFINITION_SEPARATOR.join(entry.definitions)
    return (
        f"{entry.traditional} {entry.simplified} "
        f"{PINYIN_OPEN}{entry.pinyin}{PINYIN_CLOSE} "
        f"{DEFINITION_SEPARATOR}{block}{DEFINITION_SEPARATOR}"
    )
