"""Tests for the DictEntry value type."""

import dataclasses

import pytest

from cedict_parser.entry import DictEntry, InvalidEntryError


class TestConstruction:
    """Construction is where entry invariants are enforced."""

    def test_definitions_stored_as_tuple(self):
        """A list of definitions is copied into a tuple."""
        definitions = ["to love", "to like"]
        entry = DictEntry("愛", "爱", "ai4", definitions)
        assert entry.definitions == ("to love", "to like")

        # Later changes to the caller's list do not leak into the entry
        definitions.append("to be fond of")
        assert entry.definitions == ("to love", "to like")

    def test_accepts_generator_of_definitions(self):
        entry = DictEntry("愛", "爱", "ai4", (d for d in ["to love"]))
        assert entry.definitions == ("to love",)

    def test_is_frozen(self):
        """Fields cannot be reassigned."""
        entry = DictEntry("愛", "爱", "ai4", ["to love"])
        with pytest.raises(dataclasses.FrozenInstanceError):
            entry.pinyin = "ai3"

    def test_equality_is_field_for_field(self):
        a = DictEntry("愛", "爱", "ai4", ["to love"])
        b = DictEntry("愛", "爱", "ai4", ("to love",))
        assert a == b
        assert hash(a) == hash(b)

    @pytest.mark.parametrize("traditional", ["", "你 好", "#你好", "[ni3]", "\ufeff你好"])
    def test_rejects_bad_traditional(self, traditional):
        with pytest.raises(ValueError):
            DictEntry(traditional, "你好", "ni3 hao3", ["Hello!"])

    @pytest.mark.parametrize("simplified", ["", "你\t好", "#你好", "[ni3]"])
    def test_rejects_bad_simplified(self, simplified):
        with pytest.raises(ValueError):
            DictEntry("你好", simplified, "ni3 hao3", ["Hello!"])

    @pytest.mark.parametrize("pinyin", ["", "   ", "ni3] hao3", "ni3\nhao3"])
    def test_rejects_bad_pinyin(self, pinyin):
        with pytest.raises(ValueError):
            DictEntry("你好", "你好", pinyin, ["Hello!"])

    @pytest.mark.parametrize("field, args", [
        ("traditional", ("\ufeff你好", "你好", "ni3 hao3", ["Hello!"])),
        ("simplified", ("你好", "[你好", "ni3 hao3", ["Hello!"])),
        ("pinyin", ("你好", "你好", "ni3]", ["Hello!"])),
        ("definitions", ("你好", "你好", "ni3 hao3", ["a/b"])),
    ])
    def test_error_names_field(self, field, args):
        with pytest.raises(InvalidEntryError) as exc_info:
            DictEntry(*args)
        assert exc_info.value.field == field
        assert isinstance(exc_info.value, ValueError)

    def test_rejects_no_definitions(self):
        with pytest.raises(ValueError, match="at least one definition"):
            DictEntry("你好", "你好", "ni3 hao3", [])

    def test_rejects_string_as_definitions(self):
        """A bare string is not mistaken for a sequence of one-character senses."""
        with pytest.raises(ValueError):
            DictEntry("你好", "你好", "ni3 hao3", "Hello!")

    @pytest.mark.parametrize("definition", ["", "  ", "either/or", "two\nlines"])
    def test_rejects_bad_definition(self, definition):
        with pytest.raises(ValueError):
            DictEntry("你好", "你好", "ni3 hao3", ["Hello!", definition])


class TestAccessors:
    """Read-only views over entry fields."""

    def test_pronunciation_alias(self):
        entry = DictEntry("你好", "你好", "ni3 hao3", ["Hello!"])
        assert entry.pronunciation == "ni3 hao3"

    def test_iter_definitions_in_order(self):
        entry = DictEntry("你好", "你好", "ni3 hao3", ["Hello!", "Hi!", "How are you?"])
        assert list(entry.iter_definitions()) == ["Hello!", "Hi!", "How are you?"]


class TestDictConversion:
    """to_dict/from_dict are used for JSONL export."""

    def test_to_dict(self):
        entry = DictEntry("中國", "中国", "Zhong1 guo2", ["China"])
        assert entry.to_dict() == {
            "traditional": "中國",
            "simplified": "中国",
            "pinyin": "Zhong1 guo2",
            "definitions": ["China"],
        }

    def test_from_dict(self):
        d = {
            "traditional": "愛",
            "simplified": "爱",
            "pinyin": "ai4",
            "definitions": ["to love", "to like"],
        }
        assert DictEntry.from_dict(d) == DictEntry("愛", "爱", "ai4", ["to love", "to like"])

    def test_from_dict_validates(self):
        with pytest.raises(ValueError):
            DictEntry.from_dict({
                "traditional": "愛",
                "simplified": "爱",
                "pinyin": "ai4",
                "definitions": [],
            })
