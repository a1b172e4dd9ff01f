"""Configuration model for asmdoc."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, field_validator

from asmdoc.config.defaults import (
    DEFAULT_CACHE_DIR,
    DEFAULT_PAGE_OFFSET,
    DEFAULT_VIEWER,
    get_default_expansion_rules,
)
from asmdoc.models.index import ExpansionRule


class AsmDocConfig(BaseModel):
    """Resolved asmdoc settings.

    Attributes:
        source_path: Plain-text rendering of the manual, pages separated by
            form feeds
        pdf_path: The manual itself, opened by the viewer
        cache_dir: Directory holding persisted indexes
        page_offset: Difference between physical page and printed page number
        viewer: Preferred viewer name, or "auto" to try each in turn
        expansion_rules: User rules, evaluated before the built-in ones
        use_default_rules: Whether the built-in rules apply at all
    """

    model_config = ConfigDict(extra="forbid")

    source_path: Path | None = None
    pdf_path: Path | None = None
    cache_dir: Path = Field(default=Path(DEFAULT_CACHE_DIR))
    page_offset: int = Field(default=DEFAULT_PAGE_OFFSET)
    viewer: str = Field(default=DEFAULT_VIEWER, min_length=1)
    expansion_rules: list[ExpansionRule] = Field(default_factory=list)
    use_default_rules: bool = True

    @field_validator("source_path", "pdf_path", "cache_dir", mode="after")
    @classmethod
    def expand_user(cls, value: Path | None) -> Path | None:
        """Expand ``~`` in configured paths."""
        if value is None:
            return None
        return value.expanduser()

    @field_validator("viewer")
    @classmethod
    def normalize_viewer(cls, value: str) -> str:
        """Viewer names are matched case-insensitively."""
        return value.strip().lower()

    def effective_rules(self) -> list[ExpansionRule]:
        """Return the ordered expansion rules the index builder should use."""
        rules = list(self.expansion_rules)
        if self.use_default_rules:
            rules.extend(ExpansionRule(**r) for r in get_default_expansion_rules())
        return rules
