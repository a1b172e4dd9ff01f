"""Shared fixtures for CLI command tests."""

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
import yaml
from click.testing import CliRunner

from asmdoc.lib.logging_config import ROOT_LOGGER_NAME


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def restore_package_logger() -> Iterator[None]:
    """Drop handlers bound to the runner's streams after each command."""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    level = root.level
    handlers = list(root.handlers)
    yield
    root.setLevel(level)
    root.handlers = handlers


@pytest.fixture
def project(isolated_env: Path, sample_manual: Path) -> Path:
    """A working directory with asmdoc.yml pointing at the sample manual.

    Returns:
        The project directory (also the working directory)
    """
    pdf = isolated_env / "manual.pdf"
    pdf.write_bytes(b"%PDF-1.4\n")
    config = {
        "source_path": str(sample_manual),
        "pdf_path": str(pdf),
        "cache_dir": str(isolated_env / "cache"),
    }
    (isolated_env / "asmdoc.yml").write_text(yaml.dump(config), encoding="utf-8")
    return isolated_env
