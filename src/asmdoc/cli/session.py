"""Helpers shared by CLI commands for building a lookup session."""

from pathlib import Path
from typing import Any

from asmdoc.config.loader import ConfigLoader
from asmdoc.lib.logging_config import get_logger
from asmdoc.lookup import LookupSession

logger = get_logger(__name__)

# Exit codes shared by all commands
EXIT_OK = 0
EXIT_NOT_FOUND = 1
EXIT_CONFIG_ERROR = 2
EXIT_VIEWER_ERROR = 3


def create_session(
    config_path: str | None = None,
    overrides: dict[str, Any] | None = None,
) -> LookupSession:
    """Resolve configuration and return a session for it.

    Raises:
        ConfigError: If configuration loading fails
    """
    loader = ConfigLoader()
    config = loader.load(
        config_path=Path(config_path) if config_path else None,
        overrides=overrides,
    )
    logger.debug(f"Session created for source {config.source_path}")
    return LookupSession(config)
