"""Mnemonic index builder.

Scans a plain-text rendering of an instruction set manual one page at a
time and records the page on which each instruction is defined.

The text is expected to come from an external extraction step (for example
``pdftotext -layout``) that keeps page boundaries as form feed characters.
Instruction definitions start a new page whose fourth line carries the
section number followed by the mnemonic::

    Arm Architecture Reference Manual
    Chapter C6. A64 Base Instruction Descriptions
    C6.2 Alphabetical list of A64 base instructions
    C6.2.25 B.cond

Each raw mnemonic is normalized, expanded through the ordered expansion
rules, lower-cased, and deduplicated so that later pages win.
"""

import re
from collections.abc import Iterator, Sequence
from pathlib import Path

from asmdoc.config.defaults import DEFAULT_PAGE_OFFSET
from asmdoc.lib.errors import SourceUnavailableError
from asmdoc.lib.logging_config import get_logger
from asmdoc.models.index import ExpansionRule, MnemonicEntry, MnemonicIndex

logger = get_logger(__name__)

PAGE_BREAK = "\f"

# Three header lines, then "<section number> <MNEMONIC>[ qualifier...]".
# The section number needs at least one subsection level (C6.2, 4.3.1).
HEADING_PATTERN = re.compile(
    r"\A(?:[^\n]*\n){3}"
    r"[ \t]*[A-Z]?\d+(?:\.\d+)+[ \t]+"
    r"(?P<mnemonic>[A-Z][A-Z0-9]*(?:\.[A-Z]+)?(?:[ \t]+\S+)*)"
    r"[ \t]*$",
    re.IGNORECASE | re.MULTILINE,
)


def read_source(source_path: Path | None) -> str:
    """Read the extracted manual text.

    Args:
        source_path: Configured path to the text file

    Returns:
        Full text of the manual

    Raises:
        SourceUnavailableError: If the path is unset, missing or unreadable
    """
    if source_path is None:
        raise SourceUnavailableError(
            None,
            "source_path",
            "No extracted manual text is configured.",
        )
    if not source_path.is_file():
        raise SourceUnavailableError(
            str(source_path),
            "source_path",
            "The extracted manual text does not exist.",
        )
    try:
        return source_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SourceUnavailableError(
            str(source_path),
            "source_path",
            f"The extracted manual text could not be read: {e}",
        ) from e


def iter_pages(source_text: str) -> Iterator[tuple[int, str]]:
    """Yield ``(page_number, page_text)`` pairs, numbering from 1."""
    for number, page in enumerate(source_text.split(PAGE_BREAK), start=1):
        yield number, page


def match_heading(page_text: str) -> str | None:
    """Return the raw mnemonic defined on a page, or None."""
    match = HEADING_PATTERN.match(page_text)
    if match is None:
        return None
    raw = match.group("mnemonic").strip()
    return raw or None


def normalize_mnemonic(raw_mnemonic: str) -> str:
    """Strip a trailing space-separated qualifier ("OPCODE 3" -> "OPCODE")."""
    parts = raw_mnemonic.split()
    return parts[0] if parts else ""


def expand_mnemonic(raw_mnemonic: str, rules: Sequence[ExpansionRule]) -> list[str]:
    """Expand a raw mnemonic into lower-case concrete mnemonics.

    Rules are tried in order against the normalized mnemonic using its
    original casing; the first one that matches decides the expansion.
    Without a matching rule the normalized mnemonic is returned alone.
    """
    normalized = normalize_mnemonic(raw_mnemonic)
    if not normalized:
        return []

    for rule in rules:
        if rule.matches(normalized):
            expanded = [name.lower() for name in rule.expand(normalized)]
            logger.debug(
                f"Expanded {normalized} via {rule.pattern!r} into {len(expanded)}"
            )
            return expanded

    return [normalized.lower()]


def scan_pages(
    source_text: str,
    rules: Sequence[ExpansionRule] = (),
    page_offset: int = DEFAULT_PAGE_OFFSET,
) -> list[tuple[str, int]]:
    """Extract ``(mnemonic, page)`` pairs in scan order, duplicates included."""
    pairs: list[tuple[str, int]] = []
    for physical_page, page_text in iter_pages(source_text):
        raw = match_heading(page_text)
        if raw is None:
            continue
        target_page = physical_page + page_offset
        if target_page < 1:
            logger.debug(f"Skipping {raw} on page {physical_page}: before page 1")
            continue
        for mnemonic in expand_mnemonic(raw, rules):
            pairs.append((mnemonic, target_page))
    return pairs


def deduplicate(pairs: Sequence[tuple[str, int]]) -> list[tuple[str, int]]:
    """Keep the last occurrence of each mnemonic, ordered by that occurrence."""
    last_seen: dict[str, tuple[int, int]] = {}
    for position, (mnemonic, page) in enumerate(pairs):
        last_seen[mnemonic] = (position, page)
    ordered = sorted(last_seen.items(), key=lambda item: item[1][0])
    return [(mnemonic, page) for mnemonic, (_position, page) in ordered]


def build_index(
    source_text: str,
    rules: Sequence[ExpansionRule] = (),
    page_offset: int = DEFAULT_PAGE_OFFSET,
) -> MnemonicIndex:
    """Build the mnemonic index for a manual.

    Args:
        source_text: Full extracted text, pages separated by form feeds
        rules: Expansion rules in evaluation order
        page_offset: Added to the physical page to get the printed page

    Returns:
        Deduplicated index ordered by the last occurrence of each mnemonic

    Raises:
        SourceUnavailableError: If ``source_text`` is None
    """
    if source_text is None:
        raise SourceUnavailableError(
            None, "source_path", "No manual text was provided to the index builder."
        )

    pairs = scan_pages(source_text, rules, page_offset)
    deduped = deduplicate(pairs)
    logger.info(
        f"Built mnemonic index: {len(deduped)} mnemonics "
        f"from {len(pairs)} entries"
    )
    return MnemonicIndex(MnemonicEntry(mnemonic=m, page=p) for m, p in deduped)
