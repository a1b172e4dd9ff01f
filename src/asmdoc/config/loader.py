"""Configuration loader for asmdoc.

This module provides the ConfigLoader class for loading, merging and
validating asmdoc settings from YAML files, environment variables and
command-line overrides.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from asmdoc.config.defaults import DEFAULT_SETTINGS, ENV_VAR_MAP
from asmdoc.config.env_loader import load_env_file, substitute_env_vars
from asmdoc.config.validator import flatten_pydantic_errors
from asmdoc.lib.errors import ConfigError
from asmdoc.models.config import AsmDocConfig

logger = logging.getLogger(__name__)

USER_CONFIG_DIRNAME = ".asmdoc"
USER_CONFIG_STEM = "config"
PROJECT_CONFIG_STEM = "asmdoc"


def _parse_env_value(field_name: str, value: str) -> Any:
    """Parse environment variable value to appropriate type.

    Args:
        field_name: Name of the field (used to determine type)
        value: String value from environment variable

    Returns:
        Parsed value in correct type (int or str)

    Raises:
        ValueError: If value cannot be parsed
    """
    if field_name == "page_offset":
        return int(value)
    return value


def _get_env_overrides(env_vars: os._Environ[str] | dict[str, str]) -> dict[str, Any]:
    """Collect settings from ASMDOC_* environment variables.

    Unparseable values are logged and ignored.
    """
    overrides: dict[str, Any] = {}
    for field_name, env_var_name in ENV_VAR_MAP.items():
        raw = env_vars.get(env_var_name)
        if raw is None or raw == "":
            continue
        try:
            overrides[field_name] = _parse_env_value(field_name, raw)
        except ValueError:
            logger.warning(f"Ignoring invalid value for {env_var_name}: {raw!r}")
    return overrides


def _read_yaml_with_env_substitution(path: Path) -> dict[str, Any] | None:
    """Read a YAML file with environment variable substitution.

    Args:
        path: Path to YAML file

    Returns:
        Parsed dictionary or None if empty

    Raises:
        OSError: If file cannot be read
        yaml.YAMLError: If YAML parsing fails
        ConfigError: If env var substitution fails
    """
    raw_text = path.read_text(encoding="utf-8")
    substituted = substitute_env_vars(raw_text)
    content = yaml.safe_load(substituted)
    return content if content else None


def _find_config_file(config_dir: Path, stem: str) -> Path | None:
    """Return ``<stem>.yml`` or ``<stem>.yaml`` in ``config_dir``, preferring .yml."""
    yml_path = config_dir / f"{stem}.yml"
    yaml_path = config_dir / f"{stem}.yaml"

    if yml_path.exists():
        if yaml_path.exists():
            logger.info(
                f"Both {yml_path} and {yaml_path} exist. "
                f"Using {yml_path} (prefer .yml extension)."
            )
        return yml_path
    if yaml_path.exists():
        return yaml_path
    return None


class ConfigLoader:
    """Loads and validates asmdoc configuration.

    Configuration precedence (highest to lowest):
    1. Explicit overrides (CLI options)
    2. Environment variables (ASMDOC_*), including those from ``.env``
    3. An explicit ``--config`` file, or the project ``asmdoc.yml|yaml``
    4. User ``~/.asmdoc/config.yml|yaml``
    5. Built-in defaults
    """

    def __init__(self, project_dir: Path | None = None) -> None:
        """Initialize the loader.

        Args:
            project_dir: Directory searched for a project config and ``.env``.
                Defaults to the working directory.
        """
        self.project_dir = project_dir if project_dir is not None else Path.cwd()

    def load_file(self, path: Path) -> dict[str, Any]:
        """Parse a single configuration file.

        Raises:
            ConfigError: If the file cannot be read or parsed
        """
        try:
            content = _read_yaml_with_env_substitution(path)
        except OSError as e:
            raise ConfigError(
                "config_file",
                f"Configuration file not found at {path}. "
                f"Please ensure the file exists at this path.",
            ) from e
        except yaml.YAMLError as e:
            raise ConfigError(
                "yaml_parse",
                f"Failed to parse YAML file {path}: {str(e)}",
            ) from e

        if content is None:
            return {}
        if not isinstance(content, dict):
            raise ConfigError(
                "yaml_parse",
                f"Configuration in {path} must be a mapping, "
                f"got {type(content).__name__}",
            )
        return content

    def load_user_config(self) -> dict[str, Any]:
        """Load settings from ``~/.asmdoc/config.yml|yaml`` if present."""
        path = _find_config_file(Path.home() / USER_CONFIG_DIRNAME, USER_CONFIG_STEM)
        if path is None:
            return {}
        logger.debug(f"Loading user configuration from {path}")
        return self.load_file(path)

    def load_project_config(self) -> dict[str, Any]:
        """Load settings from ``asmdoc.yml|yaml`` in the project directory."""
        path = _find_config_file(self.project_dir, PROJECT_CONFIG_STEM)
        if path is None:
            return {}
        logger.debug(f"Loading project configuration from {path}")
        return self.load_file(path)

    def load(
        self,
        config_path: Path | None = None,
        overrides: dict[str, Any] | None = None,
    ) -> AsmDocConfig:
        """Resolve the effective configuration.

        Args:
            config_path: Explicit configuration file, used instead of the
                project configuration
            overrides: Values from the command line; None values are ignored

        Returns:
            Validated AsmDocConfig

        Raises:
            ConfigError: If any layer fails to parse or the merged result is
                invalid
        """
        load_env_file(self.project_dir / ".env")

        merged: dict[str, Any] = dict(DEFAULT_SETTINGS)
        merged.update(self.load_user_config())
        if config_path is not None:
            merged.update(self.load_file(config_path))
        else:
            merged.update(self.load_project_config())
        merged.update(_get_env_overrides(os.environ))
        if overrides:
            merged.update({k: v for k, v in overrides.items() if v is not None})

        try:
            config = AsmDocConfig(**merged)
        except PydanticValidationError as e:
            error_messages = flatten_pydantic_errors(e)
            error_text = "\n".join(error_messages)
            raise ConfigError(
                "config_validation",
                f"Invalid asmdoc configuration:\n{error_text}",
            ) from e

        logger.debug(
            f"Configuration resolved: source_path={config.source_path}, "
            f"cache_dir={config.cache_dir}, page_offset={config.page_offset}, "
            f"viewer={config.viewer}"
        )
        return config
