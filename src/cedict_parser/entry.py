"""
entry.py — The parsed representation of one CC-CEDICT line.

A DictEntry is immutable and validated at construction, so anything holding
one can serialize it back to a well-formed line without further checks.

Usage:
    from cedict_parser.entry import DictEntry

    entry = DictEntry("你好", "你好", "ni3 hao3", ["Hello!", "Hi!"])
    print(entry.simplified, entry.pinyin, entry.definitions[0])
"""

from dataclasses import dataclass
from typing import Iterator, Tuple

# Format delimiters shared with the parser
COMMENT_MARKER = "#"
DEFINITION_SEPARATOR = "/"
PINYIN_OPEN = "["
PINYIN_CLOSE = "]"
BOM = "\ufeff"

# A headword starting with one of these would not read back as the same entry
RESERVED_PREFIXES = (COMMENT_MARKER, PINYIN_OPEN, BOM)

_LINE_BREAKS = ("\n", "\r")


class InvalidEntryError(ValueError):
    """A DictEntry field value that the line format cannot represent."""

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field


def _check_headword(name: str, value: str) -> None:
    if not isinstance(value, str) or not value:
        raise InvalidEntryError(name, f"{name} headword must be a non-empty string")
    if any(ch.isspace() for ch in value):
        raise InvalidEntryError(name, f"{name} headword must not contain whitespace: {value!r}")
    if value.startswith(RESERVED_PREFIXES):
        raise InvalidEntryError(name, f"{name} headword must not start with {value[0]!r}: {value!r}")


def _check_pinyin(value: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise InvalidEntryError("pinyin", "pinyin must be a non-blank string")
    if PINYIN_CLOSE in value:
        raise InvalidEntryError("pinyin", f"pinyin must not contain {PINYIN_CLOSE!r}: {value!r}")
    if any(ch in value for ch in _LINE_BREAKS):
        raise InvalidEntryError("pinyin", f"pinyin must not contain line breaks: {value!r}")


def _check_definition(value: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise InvalidEntryError("definitions", "definitions must be non-blank strings")
    if DEFINITION_SEPARATOR in value:
        raise InvalidEntryError(
            "definitions",
            f"definition must not contain {DEFINITION_SEPARATOR!r}: {value!r}",
        )
    if any(ch in value for ch in _LINE_BREAKS):
        raise InvalidEntryError("definitions", f"definition must not contain line breaks: {value!r}")


@dataclass(frozen=True)
class DictEntry:
    """One dictionary record: headwords, pinyin and ordered definitions.

    ``definitions`` is always stored as a tuple, primary sense first.
    Raises InvalidEntryError (a ValueError) when a field would not survive
    a round trip through the line format.
    """
    traditional: str
    simplified: str
    pinyin: str
    definitions: Tuple[str, ...]

    def __post_init__(self):
        _check_headword("traditional", self.traditional)
        _check_headword("simplified", self.simplified)
        _check_pinyin(self.pinyin)

        if isinstance(self.definitions, str):
            raise InvalidEntryError("definitions", "definitions must be a sequence of strings, not a string")
        definitions = tuple(self.definitions)
        if not definitions:
            raise InvalidEntryError("definitions", "an entry needs at least one definition")
        for definition in definitions:
            _check_definition(definition)
        # frozen dataclass: bypass __setattr__ to store the normalized tuple
        object.__setattr__(self, "definitions", definitions)

    @property
    def pronunciation(self) -> str:
        """Alias for ``pinyin``."""
        return self.pinyin

    def iter_definitions(self) -> Iterator[str]:
        return iter(self.definitions)

    def to_dict(self) -> dict:
        return {
            "traditional": self.traditional,
            "simplified": self.simplified,
            "pinyin": self.pinyin,
            "definitions": list(self.definitions),
        }

    @classmethod
    def from_dict(cls, d: dict) -> "DictEntry":
        return cls(
            traditional=d["traditional"],
            simplified=d["simplified"],
            pinyin=d["pinyin"],
            definitions=tuple(d["definitions"]),
        )

