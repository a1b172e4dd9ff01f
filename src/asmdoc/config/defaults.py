"""Default configuration values for asmdoc."""

import logging

logger = logging.getLogger(__name__)


# Physical page index in the extracted text vs. the manual's printed numbering.
# Three pages of front matter in the reference edition.
DEFAULT_PAGE_OFFSET = 3

DEFAULT_CACHE_DIR = "~/.asmdoc/cache"

DEFAULT_VIEWER = "auto"

# Settings defaults, merged under user and project configuration
DEFAULT_SETTINGS: dict[str, int | bool | str | None] = {
    "source_path": None,
    "pdf_path": None,
    "cache_dir": DEFAULT_CACHE_DIR,
    "page_offset": DEFAULT_PAGE_OFFSET,
    "viewer": DEFAULT_VIEWER,
    "use_default_rules": True,
}

# Environment variable to field name mapping
ENV_VAR_MAP: dict[str, str] = {
    "source_path": "ASMDOC_SOURCE_PATH",
    "pdf_path": "ASMDOC_PDF_PATH",
    "cache_dir": "ASMDOC_CACHE_DIR",
    "page_offset": "ASMDOC_PAGE_OFFSET",
    "viewer": "ASMDOC_VIEWER",
}

# Condition codes accepted by conditional branches
CONDITION_CODES: list[str] = [
    "EQ",
    "NE",
    "CS",
    "HS",
    "CC",
    "LO",
    "MI",
    "PL",
    "VS",
    "VC",
    "HI",
    "LS",
    "GE",
    "LT",
    "GT",
    "LE",
    "AL",
    "NV",
]

# Built-in mnemonic family expansions, evaluated in order after user rules.
# Group 1 marks the part of the raw mnemonic replaced by each suffix,
# so "B.cond" becomes "B.EQ", "B.NE", ...
DEFAULT_EXPANSION_RULES: list[dict[str, str | list[str]]] = [
    {"pattern": r"^B\.(cond)$", "suffixes": CONDITION_CODES},
    {"pattern": r"^BC\.(cond)$", "suffixes": CONDITION_CODES},
]


def get_default_expansion_rules() -> list[dict[str, str | list[str]]]:
    """Return a copy of the built-in expansion rule definitions."""
    return [
        {"pattern": rule["pattern"], "suffixes": list(rule["suffixes"])}
        for rule in DEFAULT_EXPANSION_RULES
    ]
