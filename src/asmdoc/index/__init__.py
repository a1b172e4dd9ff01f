"""Mnemonic index building and caching.

- **Builder**: scans form-feed separated manual text for instruction
  headings and produces an ordered, deduplicated mnemonic to page index.
- **Cache**: persists built indexes as JSON keyed by a digest of the
  manual text so large manuals are only scanned once.

Example:
    from asmdoc.index import IndexCache, build_index

    index = build_index(text, rules, page_offset=3)
    index = IndexCache(cache_dir, rules, page_offset=3).ensure(text)
"""

from asmdoc.index.builder import build_index, read_source
from asmdoc.index.cache import IndexCache, cache_key

__all__ = [
    "IndexCache",
    "build_index",
    "cache_key",
    "read_source",
]
