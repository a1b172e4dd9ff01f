"""Environment variable helpers for asmdoc configuration.

Supports ``${VAR_NAME}`` references inside YAML configuration files and
loading of a ``.env`` file through python-dotenv.
"""

import os
import re
from pathlib import Path

from dotenv import load_dotenv

from asmdoc.lib.errors import ConfigError

_ENV_VAR_PATTERN = re.compile(r"\$\{([A-Za-z_][A-Za-z0-9_]*)\}")


def substitute_env_vars(text: str) -> str:
    """Replace ``${VAR}`` references with environment variable values.

    Args:
        text: Raw text that may contain ``${VAR}`` references

    Returns:
        Text with every reference substituted

    Raises:
        ConfigError: If a referenced variable is not set
    """

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1)
        value = os.environ.get(name)
        if value is None:
            raise ConfigError(
                name,
                f"Environment variable '{name}' is referenced in configuration "
                f"but not set.",
            )
        return value

    return _ENV_VAR_PATTERN.sub(_replace, text)


def get_env_var(name: str, default: str | None = None) -> str | None:
    """Return an environment variable, treating empty strings as unset."""
    value = os.environ.get(name)
    if value is None or value == "":
        return default
    return value


def load_env_file(path: Path | None = None) -> bool:
    """Load a ``.env`` file without overriding variables already set.

    Args:
        path: Explicit ``.env`` path. Defaults to ``.env`` in the working
            directory.

    Returns:
        True if a file was found and loaded
    """
    env_path = path if path is not None else Path.cwd() / ".env"
    if not env_path.is_file():
        return False
    return load_dotenv(env_path, override=False)
