"""Tests for environment variable helpers."""

from pathlib import Path

import pytest

from asmdoc.config.env_loader import get_env_var, load_env_file, substitute_env_vars
from asmdoc.lib.errors import ConfigError


class TestSubstituteEnvVars:
    """Tests for ${VAR} substitution."""

    def test_substitutes_set_variable(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Set variables are replaced in place."""
        monkeypatch.setenv("ASMDOC_TEST_DIR", "/opt/manuals")

        result = substitute_env_vars("source_path: ${ASMDOC_TEST_DIR}/arm.txt")

        assert result == "source_path: /opt/manuals/arm.txt"

    def test_text_without_references_unchanged(self) -> None:
        """Plain text passes through."""
        assert substitute_env_vars("page_offset: 3") == "page_offset: 3"

    def test_bare_dollar_left_alone(self) -> None:
        """Only the braced form is substituted."""
        assert substitute_env_vars("cost: $5") == "cost: $5"

    def test_missing_variable_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Unset variables raise ConfigError naming the variable."""
        monkeypatch.delenv("ASMDOC_TEST_MISSING", raising=False)

        with pytest.raises(ConfigError) as exc_info:
            substitute_env_vars("${ASMDOC_TEST_MISSING}")

        assert exc_info.value.field == "ASMDOC_TEST_MISSING"


class TestGetEnvVar:
    """Tests for get_env_var."""

    def test_empty_is_unset(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Empty strings fall back to the default."""
        monkeypatch.setenv("ASMDOC_TEST_EMPTY", "")

        assert get_env_var("ASMDOC_TEST_EMPTY", "fallback") == "fallback"

    def test_returns_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Set values are returned."""
        monkeypatch.setenv("ASMDOC_TEST_VALUE", "zathura")

        assert get_env_var("ASMDOC_TEST_VALUE") == "zathura"


class TestLoadEnvFile:
    """Tests for .env loading."""

    def test_missing_file(self, temp_dir: Path) -> None:
        """A missing .env file is not an error."""
        assert load_env_file(temp_dir / ".env") is False

    def test_does_not_override(
        self, temp_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Variables already set keep their value."""
        monkeypatch.setenv("ASMDOC_TEST_KEEP", "original")
        env_file = temp_dir / ".env"
        env_file.write_text("ASMDOC_TEST_KEEP=replaced\n", encoding="utf-8")

        assert load_env_file(env_file) is True
        assert get_env_var("ASMDOC_TEST_KEEP") == "original"
