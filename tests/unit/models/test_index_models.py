"""Tests for mnemonic index models."""

import pytest
from pydantic import ValidationError

from asmdoc.lib.errors import MnemonicNotFoundError
from asmdoc.models.index import (
    CachedIndex,
    ExpansionRule,
    MnemonicEntry,
    MnemonicIndex,
)


class TestExpansionRule:
    """Tests for ExpansionRule validation and substitution."""

    def test_invalid_pattern_rejected(self) -> None:
        """Patterns that do not compile fail validation."""
        with pytest.raises(ValidationError, match="invalid regular expression"):
            ExpansionRule(pattern="B(", suffixes=["EQ"])

    def test_empty_suffixes_rejected(self) -> None:
        """A rule must produce at least one mnemonic."""
        with pytest.raises(ValidationError):
            ExpansionRule(pattern="^B$", suffixes=[])

    def test_expand_appends_without_qualifier(self) -> None:
        """Without a group or dotted qualifier the suffix is appended."""
        rule = ExpansionRule(pattern="^J$", suffixes=["E", "NE"])

        assert rule.expand("J") == ["JE", "JNE"]

    def test_expand_keeps_text_after_group(self) -> None:
        """Text on both sides of the group is preserved."""
        rule = ExpansionRule(pattern=r"^CS(cc)EL$", suffixes=["EQ"])

        assert rule.expand("CSccEL") == ["CSEQEL"]

    def test_expand_non_matching_returns_empty(self) -> None:
        """A rule that does not match expands to nothing."""
        rule = ExpansionRule(pattern="^B$", suffixes=["EQ"])

        assert rule.expand("ADD") == []

    def test_optional_group_not_taking_part(self) -> None:
        """An unmatched optional group falls back to the dotted qualifier."""
        rule = ExpansionRule(pattern=r"^B(X)?\.cond$", suffixes=["EQ"])

        assert rule.expand("B.cond") == ["BEQ"]


class TestMnemonicIndex:
    """Tests for the ordered index."""

    def test_resolve_is_case_insensitive(self) -> None:
        """Lookups fold case and trim whitespace."""
        index = MnemonicIndex.from_pairs([("add", 7)])

        assert index.resolve(" ADD ") == 7

    def test_resolve_unknown_raises(self) -> None:
        """Unknown mnemonics raise MnemonicNotFoundError."""
        index = MnemonicIndex.from_pairs([("add", 7)])

        with pytest.raises(MnemonicNotFoundError) as exc_info:
            index.resolve("mul")

        assert exc_info.value.mnemonic == "mul"

    def test_get_returns_none(self) -> None:
        """get() returns None for unknown mnemonics."""
        assert MnemonicIndex().get("add") is None

    def test_duplicates_rejected(self) -> None:
        """An index never holds a mnemonic twice."""
        with pytest.raises(ValueError, match="Duplicate"):
            MnemonicIndex.from_pairs([("add", 7), ("add", 9)])

    def test_mnemonics_preserve_order(self) -> None:
        """Mnemonics come back in insertion order."""
        index = MnemonicIndex.from_pairs([("sub", 9), ("add", 7), ("adc", 5)])

        assert index.mnemonics() == ["sub", "add", "adc"]
        assert index.mnemonics("ad") == ["add", "adc"]

    def test_equality_includes_order(self) -> None:
        """Indexes with the same pairs in another order differ."""
        first = MnemonicIndex.from_pairs([("add", 7), ("sub", 9)])
        second = MnemonicIndex.from_pairs([("sub", 9), ("add", 7)])

        assert first != second
        assert first == MnemonicIndex.from_pairs([("add", 7), ("sub", 9)])

    def test_iteration_yields_entries(self) -> None:
        """Iterating yields MnemonicEntry objects."""
        index = MnemonicIndex.from_pairs([("add", 7)])

        assert list(index) == [MnemonicEntry(mnemonic="add", page=7)]
        assert len(index) == 1
        assert "add" in index
        assert 7 not in index


class TestCachedIndex:
    """Tests for the on-disk document model."""

    def test_duplicate_entries_rejected(self) -> None:
        """Documents listing a mnemonic twice are invalid."""
        with pytest.raises(ValidationError, match="duplicate"):
            CachedIndex(
                format_version=1,
                source_sha1="x",
                entry_count=2,
                entries=[
                    MnemonicEntry(mnemonic="add", page=7),
                    MnemonicEntry(mnemonic="add", page=8),
                ],
            )

    def test_to_index(self) -> None:
        """Documents convert to an equal index."""
        document = CachedIndex(
            format_version=1,
            source_sha1="x",
            entry_count=1,
            entries=[MnemonicEntry(mnemonic="add", page=7)],
        )

        assert document.to_index() == MnemonicIndex.from_pairs([("add", 7)])
