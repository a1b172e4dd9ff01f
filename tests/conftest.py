"""Pytest configuration and shared fixtures for asmdoc tests."""

import os
import shutil
import tempfile
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest

HEADER_LINES = (
    "Arm Architecture Reference Manual",
    "Chapter C6. A64 Base Instruction Descriptions",
    "C6.2 Alphabetical list of A64 base instructions",
)


def make_page(heading: str | None, body: str = "Encoding and operation.") -> str:
    """Render one manual page.

    Args:
        heading: Fourth-line heading such as "C6.2.4 ADD", or None for a
            page without an instruction definition

    Returns:
        Page text without the trailing page break
    """
    lines = list(HEADER_LINES)
    if heading is not None:
        lines.append(heading)
    else:
        lines.append("This page intentionally describes nothing in particular.")
    lines.append(body)
    return "\n".join(lines) + "\n"


def make_manual(headings: list[str | None]) -> str:
    """Render a manual with one page per heading, separated by form feeds."""
    return "\f".join(make_page(h) for h in headings)


@pytest.fixture
def manual_factory() -> Callable[[list[str | None]], str]:
    """Provide the manual rendering helper."""
    return make_manual


@pytest.fixture
def temp_dir() -> Iterator[Path]:
    """Create a temporary directory for test file operations.

    Yields:
        Path to temporary directory

    Cleanup:
        Automatically removes directory after test
    """
    tmp = Path(tempfile.mkdtemp())
    yield tmp
    shutil.rmtree(tmp, ignore_errors=True)


@pytest.fixture
def isolated_env(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Isolate HOME, the working directory and ASMDOC_* variables.

    Yields:
        The temporary directory used as HOME and working directory
    """
    for name in list(os.environ):
        if name.startswith("ASMDOC_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(temp_dir))
    monkeypatch.chdir(temp_dir)
    yield temp_dir


@pytest.fixture
def sample_manual(temp_dir: Path) -> Path:
    """Write a small extracted manual and return its path.

    Pages 2, 4 and 5 carry instruction headings: ADD, B.cond and LDR.
    """
    text = make_manual(
        [
            None,
            "C6.2.1 ADC",
            None,
            "C6.2.4 ADD",
            "C6.2.25 B.cond",
            "C6.2.130 LDR (immediate)",
        ]
    )
    path = temp_dir / "manual.txt"
    path.write_text(text, encoding="utf-8")
    return path


# Configure pytest
def pytest_configure(config: Any) -> None:
    """Configure pytest with marker options."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests",
    )
    config.addinivalue_line(
        "markers",
        "unit: marks tests as unit tests",
    )
