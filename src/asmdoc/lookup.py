"""Lookup session owning the mnemonic index for one asmdoc invocation."""

from asmdoc.index.builder import read_source
from asmdoc.index.cache import IndexCache
from asmdoc.lib.errors import IndexNotBuiltError
from asmdoc.lib.logging_config import get_logger
from asmdoc.models.config import AsmDocConfig
from asmdoc.models.index import MnemonicIndex

logger = get_logger(__name__)


class LookupSession:
    """Holds the index built (or restored) for the configured manual.

    The index is loaded once by ``ensure`` and reused for every lookup and
    completion request until ``refresh`` rebuilds it.
    """

    def __init__(self, config: AsmDocConfig, cache: IndexCache | None = None) -> None:
        """Create a session.

        Args:
            config: Resolved configuration
            cache: Cache to use; one is created from ``config`` when omitted
        """
        self.config = config
        self.cache = cache or IndexCache(
            config.cache_dir,
            rules=config.effective_rules(),
            page_offset=config.page_offset,
        )
        self._index: MnemonicIndex | None = None

    @property
    def is_built(self) -> bool:
        """True once an index has been loaded or built."""
        return self._index is not None

    @property
    def index(self) -> MnemonicIndex:
        """The session's index.

        Raises:
            IndexNotBuiltError: If ``ensure`` has not been called
        """
        if self._index is None:
            raise IndexNotBuiltError()
        return self._index

    def ensure(self, force_rebuild: bool = False) -> MnemonicIndex:
        """Load or build the index for the configured manual text.

        An index already held by the session is reused unless
        ``force_rebuild`` is set.

        Raises:
            SourceUnavailableError: If the manual text cannot be read
        """
        if self._index is not None and not force_rebuild:
            return self._index

        source_text = read_source(self.config.source_path)
        self._index = self.cache.ensure(source_text, force_rebuild=force_rebuild)
        logger.debug(f"Session index ready: {len(self._index)} mnemonics")
        return self._index

    def refresh(self) -> MnemonicIndex:
        """Rebuild the index from the manual text, replacing the cache entry."""
        return self.ensure(force_rebuild=True)

    def resolve(self, mnemonic: str) -> int:
        """Return the manual page for ``mnemonic``.

        Raises:
            IndexNotBuiltError: If the index has not been loaded
            MnemonicNotFoundError: If the mnemonic is unknown
        """
        return self.index.resolve(mnemonic)

    def mnemonics(self, prefix: str = "") -> list[str]:
        """Return known mnemonics in index order for completion.

        Raises:
            IndexNotBuiltError: If the index has not been loaded
        """
        return self.index.mnemonics(prefix)
