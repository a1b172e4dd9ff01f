"""Custom exception hierarchy for asmdoc configuration and lookups."""


class AsmDocError(Exception):
    """Base exception for all asmdoc errors.

    All asmdoc-specific exceptions inherit from this class, enabling
    centralized exception handling in the CLI.
    """

    pass


class ConfigError(AsmDocError):
    """Exception raised for configuration errors.

    This exception is raised when configuration loading or parsing fails.
    It includes field-specific information to help users identify and fix
    configuration issues.

    Attributes:
        field: The configuration field that caused the error
        message: Human-readable error message describing the issue
    """

    def __init__(self, field: str, message: str) -> None:
        """Initialize ConfigError with field and message.

        Args:
            field: Configuration field name where error occurred
            message: Descriptive error message
        """
        self.field = field
        self.message = message
        super().__init__(f"Configuration error in '{field}': {message}")


class SourceUnavailableError(AsmDocError):
    """Exception raised when the extracted manual text cannot be read.

    The message always names the setting the user has to fix, since an unset
    or stale path is the usual cause.

    Attributes:
        path: Configured path, or None when the setting is unset
        setting: Name of the configuration field to correct
        message: Human-readable error message
    """

    def __init__(self, path: str | None, setting: str, message: str) -> None:
        """Initialize SourceUnavailableError.

        Args:
            path: Path that could not be read (None if unset)
            setting: Configuration field that controls the path
            message: Descriptive error message
        """
        self.path = path
        self.setting = setting
        self.message = message
        location = path if path is not None else "<unset>"
        super().__init__(
            f"Source unavailable: {location}\n{message}\n"
            f"Set '{setting}' in your asmdoc configuration."
        )


class CacheCorruptError(AsmDocError):
    """Exception raised when a persisted index entry fails to parse.

    Never surfaced to users: the cache treats it as a miss and rebuilds.
    """

    def __init__(self, path: str, message: str) -> None:
        """Create a corrupt cache error for the entry at ``path``."""
        self.path = path
        self.message = message
        super().__init__(f"Corrupt cache entry {path}: {message}")


class CacheWriteError(AsmDocError):
    """Exception raised when a cache entry could not be written.

    The freshly built index remains valid; callers log and continue.
    """

    def __init__(self, path: str, message: str) -> None:
        """Create a cache write error for the entry at ``path``."""
        self.path = path
        self.message = message
        super().__init__(f"Failed to write cache entry {path}: {message}")


class IndexNotBuiltError(AsmDocError):
    """Exception raised when a lookup is attempted before the index exists."""

    def __init__(self) -> None:
        """Create an index-not-built error."""
        super().__init__(
            "Mnemonic index has not been built yet. "
            "Call ensure() or run 'asmdoc refresh' first."
        )


class MnemonicNotFoundError(AsmDocError):
    """Exception raised when a mnemonic is absent from the index.

    Attributes:
        mnemonic: The mnemonic that was requested
    """

    def __init__(self, mnemonic: str) -> None:
        """Create a lookup failure for ``mnemonic``."""
        self.mnemonic = mnemonic
        super().__init__(f"Unknown mnemonic: {mnemonic}")


class NoViewerAvailableError(AsmDocError):
    """Exception raised when no configured PDF viewer could be launched.

    Attributes:
        tried: Names of the viewers that were attempted, in order
    """

    def __init__(self, tried: list[str]) -> None:
        """Create a viewer error listing the attempted viewers."""
        self.tried = tried
        attempted = ", ".join(tried) if tried else "none"
        super().__init__(
            f"No PDF viewer available (tried: {attempted}).\n"
            f"Install one of them or set 'viewer' in your asmdoc configuration."
        )
