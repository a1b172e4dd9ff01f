"""Mnemonic index models.

Defines the expansion rules applied to raw mnemonics, the entries of a built
index, the ordered index itself, and the JSON document persisted by the
index cache.
"""

import re
from collections.abc import Iterable, Iterator

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from asmdoc.lib.errors import MnemonicNotFoundError

# Trailing dotted qualifier on a raw mnemonic, e.g. the ".cond" in "B.cond"
_DOTTED_QUALIFIER = re.compile(r"\.[A-Za-z]+$")


class ExpansionRule(BaseModel):
    """Rule expanding one raw mnemonic family into concrete mnemonics.

    The pattern is searched (not fully matched) against the normalized raw
    mnemonic, case-sensitively. Each suffix produces one mnemonic:

    - if the pattern has a capture group, the suffix replaces the text of
      group 1 (``^B\\.(cond)$`` turns ``B.cond`` into ``B.EQ``, ``B.NE``, ...)
    - otherwise the suffix replaces the trailing dotted qualifier
      (``^B\\.next$`` turns ``B.next`` into ``BMI``, ``BHI``, ...)
    - if there is no dotted qualifier either, the suffix is appended
    """

    model_config = ConfigDict(frozen=True)

    pattern: str = Field(..., description="Regex searched in the raw mnemonic")
    suffixes: list[str] = Field(..., min_length=1, description="Suffixes to insert")

    @field_validator("pattern")
    @classmethod
    def validate_pattern(cls, value: str) -> str:
        """Ensure the pattern is a valid regular expression."""
        try:
            re.compile(value)
        except re.error as e:
            raise ValueError(f"invalid regular expression: {e}") from e
        return value

    @property
    def regex(self) -> re.Pattern[str]:
        """Compiled pattern."""
        return re.compile(self.pattern)

    def matches(self, raw_mnemonic: str) -> bool:
        """Return True if the rule applies to ``raw_mnemonic``."""
        return self.regex.search(raw_mnemonic) is not None

    def expand(self, raw_mnemonic: str) -> list[str]:
        """Expand ``raw_mnemonic`` into one mnemonic per suffix.

        Returned names keep the casing of the raw mnemonic and suffixes;
        lower-casing happens in the index builder.

        Args:
            raw_mnemonic: Normalized raw mnemonic the rule matched

        Returns:
            Expanded mnemonics in suffix order, or an empty list if the rule
            does not match.
        """
        match = self.regex.search(raw_mnemonic)
        if match is None:
            return []

        if self.regex.groups >= 1 and match.start(1) != -1:
            start, end = match.span(1)
        else:
            qualifier = _DOTTED_QUALIFIER.search(raw_mnemonic)
            if qualifier is not None:
                start, end = qualifier.span()
            else:
                start = end = len(raw_mnemonic)

        head, tail = raw_mnemonic[:start], raw_mnemonic[end:]
        return [f"{head}{suffix}{tail}" for suffix in self.suffixes]


class MnemonicEntry(BaseModel):
    """A single mnemonic to page mapping."""

    model_config = ConfigDict(frozen=True)

    mnemonic: str = Field(..., min_length=1)
    page: int = Field(..., ge=1)


class MnemonicIndex:
    """Ordered, read-only mapping from mnemonic to manual page.

    Built once per session by the index builder or restored from the cache,
    then passed explicitly to lookup and completion code. Each mnemonic
    appears at most once.
    """

    def __init__(self, entries: Iterable[MnemonicEntry] = ()) -> None:
        """Create an index from entries that are already deduplicated.

        Raises:
            ValueError: If a mnemonic appears more than once
        """
        self._pages: dict[str, int] = {}
        for entry in entries:
            if entry.mnemonic in self._pages:
                raise ValueError(f"Duplicate mnemonic in index: {entry.mnemonic}")
            self._pages[entry.mnemonic] = entry.page

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, int]]) -> "MnemonicIndex":
        """Build an index from ``(mnemonic, page)`` pairs."""
        return cls(MnemonicEntry(mnemonic=m, page=p) for m, p in pairs)

    def resolve(self, mnemonic: str) -> int:
        """Return the page documenting ``mnemonic``.

        Lookups are case-insensitive and ignore surrounding whitespace.

        Raises:
            MnemonicNotFoundError: If the mnemonic is not indexed
        """
        key = mnemonic.strip().lower()
        try:
            return self._pages[key]
        except KeyError:
            raise MnemonicNotFoundError(mnemonic) from None

    def get(self, mnemonic: str) -> int | None:
        """Return the page for ``mnemonic`` or None."""
        return self._pages.get(mnemonic.strip().lower())

    def mnemonics(self, prefix: str = "") -> list[str]:
        """Return known mnemonics in index order, optionally filtered by prefix."""
        prefix = prefix.strip().lower()
        return [m for m in self._pages if m.startswith(prefix)]

    def entries(self) -> list[MnemonicEntry]:
        """Return the index entries in order."""
        return [MnemonicEntry(mnemonic=m, page=p) for m, p in self._pages.items()]

    def as_dict(self) -> dict[str, int]:
        """Return a copy of the mapping, preserving order."""
        return dict(self._pages)

    def __contains__(self, mnemonic: object) -> bool:
        if not isinstance(mnemonic, str):
            return False
        return mnemonic.strip().lower() in self._pages

    def __iter__(self) -> Iterator[MnemonicEntry]:
        return iter(self.entries())

    def __len__(self) -> int:
        return len(self._pages)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, MnemonicIndex):
            return NotImplemented
        return list(self._pages.items()) == list(other._pages.items())

    def __repr__(self) -> str:
        return f"MnemonicIndex({len(self._pages)} mnemonics)"


class CachedIndex(BaseModel):
    """On-disk representation of a built index.

    Stored as indented JSON so cache files can be inspected by hand.
    """

    format_version: int
    source_sha1: str
    settings_digest: str = ""
    entry_count: int = Field(..., ge=0)
    entries: list[MnemonicEntry]

    @field_validator("entries")
    @classmethod
    def validate_unique(cls, value: list[MnemonicEntry]) -> list[MnemonicEntry]:
        """Reject documents that list a mnemonic twice."""
        seen: set[str] = set()
        for entry in value:
            if entry.mnemonic in seen:
                raise ValueError(f"duplicate mnemonic '{entry.mnemonic}'")
            seen.add(entry.mnemonic)
        return value

    @model_validator(mode="after")
    def validate_count(self) -> "CachedIndex":
        """Reject documents whose entry count disagrees with their entries."""
        if self.entry_count != len(self.entries):
            raise ValueError(
                f"entry_count {self.entry_count} does not match "
                f"{len(self.entries)} entries"
            )
        return self

    def to_index(self) -> MnemonicIndex:
        """Convert the document into a MnemonicIndex."""
        return MnemonicIndex(self.entries)
