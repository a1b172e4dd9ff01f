"""Configuration loading and validation for asmdoc.

Main components:
- ConfigLoader (asmdoc.config.loader): merge user, project, environment and
  CLI settings
- Environment variable substitution (${VAR_NAME} pattern)
- Validation utilities for configuration data
- Default settings and built-in expansion rules

The loader is not re-exported here because the configuration model imports
the defaults from this package.
"""

from asmdoc.config.env_loader import get_env_var, load_env_file, substitute_env_vars

__all__ = [
    "substitute_env_vars",
    "get_env_var",
    "load_env_file",
]
