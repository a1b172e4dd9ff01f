"""Persistent cache for built mnemonic indexes.

Indexes are stored as JSON files named after a SHA-1 digest of the manual
text plus a format version tag, so a changed manual or a changed on-disk
format simply misses instead of reading incompatible data. Old entries are
never pruned.
"""

import hashlib
import json
import os
import tempfile
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from asmdoc.config.defaults import DEFAULT_PAGE_OFFSET
from asmdoc.index.builder import build_index
from asmdoc.lib.errors import CacheCorruptError, CacheWriteError
from asmdoc.lib.logging_config import get_logger
from asmdoc.models.index import CachedIndex, ExpansionRule, MnemonicIndex

logger = get_logger(__name__)

# Bump when the hash algorithm, JSON layout or builder semantics change
CACHE_FORMAT_VERSION = 1

CACHE_SUFFIX = ".json"


def source_digest(source_text: str) -> str:
    """Return the SHA-1 hex digest of the manual text."""
    return hashlib.sha1(source_text.encode("utf-8")).hexdigest()


def cache_key(source_text: str) -> str:
    """Return the cache key for ``source_text``."""
    return f"{source_digest(source_text)}-v{CACHE_FORMAT_VERSION}"


class IndexCache:
    """Loads, stores and lazily builds mnemonic indexes.

    The builder settings are recorded inside each entry rather than in the
    key; an entry built with different settings counts as a miss.
    """

    def __init__(
        self,
        cache_dir: Path,
        rules: Sequence[ExpansionRule] = (),
        page_offset: int = DEFAULT_PAGE_OFFSET,
    ) -> None:
        """Initialize the cache.

        Args:
            cache_dir: Directory for cache files, created on first store
            rules: Expansion rules handed to the builder on a miss
            page_offset: Page offset handed to the builder on a miss
        """
        self.cache_dir = cache_dir
        self.rules = list(rules)
        self.page_offset = page_offset

    @property
    def settings_digest(self) -> str:
        """Digest of the builder settings an entry was built with."""
        settings = {
            "page_offset": self.page_offset,
            "rules": [rule.model_dump() for rule in self.rules],
        }
        payload = json.dumps(settings, sort_keys=True)
        return hashlib.sha1(payload.encode("utf-8")).hexdigest()

    def path_for(self, source_text: str) -> Path:
        """Return the cache file path for ``source_text``."""
        return self.cache_dir / f"{cache_key(source_text)}{CACHE_SUFFIX}"

    def read_entry(self, path: Path) -> CachedIndex:
        """Read and validate a cache file.

        Raises:
            CacheCorruptError: If the file cannot be read or parsed
        """
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise CacheCorruptError(str(path), f"unreadable: {e}") from e

        try:
            document = CachedIndex.model_validate_json(content)
        except ValidationError as e:
            raise CacheCorruptError(str(path), f"invalid format: {e}") from e

        if document.format_version != CACHE_FORMAT_VERSION:
            raise CacheCorruptError(
                str(path),
                f"format version {document.format_version}, "
                f"expected {CACHE_FORMAT_VERSION}",
            )
        return document

    def load(self, source_text: str) -> MnemonicIndex | None:
        """Return the cached index for ``source_text``, or None on a miss.

        A corrupt entry is logged and reported as a miss.
        """
        path = self.path_for(source_text)
        if not path.exists():
            logger.debug(f"Cache miss: {path}")
            return None

        try:
            document = self.read_entry(path)
        except CacheCorruptError as e:
            logger.warning(f"Ignoring corrupt cache entry, will rebuild: {e}")
            return None

        if document.settings_digest != self.settings_digest:
            logger.info(f"Cache entry {path} built with other settings, rebuilding")
            return None

        index = document.to_index()
        logger.debug(f"Cache hit: {path} ({len(index)} mnemonics)")
        return index

    def store(self, source_text: str, index: MnemonicIndex) -> Path:
        """Persist ``index`` for ``source_text``.

        The document is written to a temporary file in the cache directory
        and renamed over the final path, so an interrupted write never
        replaces a valid entry.

        Returns:
            Path of the written cache file

        Raises:
            CacheWriteError: If the directory or file cannot be written
        """
        path = self.path_for(source_text)
        document = CachedIndex(
            format_version=CACHE_FORMAT_VERSION,
            source_sha1=source_digest(source_text),
            settings_digest=self.settings_digest,
            entry_count=len(index),
            entries=index.entries(),
        )
        payload = document.model_dump_json(indent=2)

        tmp_name: str | None = None
        try:
            self.cache_dir.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=self.cache_dir,
                prefix=f".{path.stem}.",
                suffix=".tmp",
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(payload)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name is not None:
                Path(tmp_name).unlink(missing_ok=True)
            raise CacheWriteError(str(path), str(e)) from e

        logger.info(f"Stored mnemonic index ({len(index)} mnemonics) at {path}")
        return path

    def ensure(self, source_text: str, force_rebuild: bool = False) -> MnemonicIndex:
        """Return the index for ``source_text``, building it if needed.

        Args:
            source_text: Full manual text
            force_rebuild: Skip the cache lookup and rebuild unconditionally

        Returns:
            Cached or freshly built index

        Raises:
            SourceUnavailableError: Propagated from the builder
        """
        if not force_rebuild:
            cached = self.load(source_text)
            if cached is not None:
                return cached

        logger.info("Building mnemonic index" + (" (forced)" if force_rebuild else ""))
        index = build_index(source_text, self.rules, self.page_offset)

        try:
            self.store(source_text, index)
        except CacheWriteError as e:
            logger.warning(f"Continuing without cache: {e}")

        return index
