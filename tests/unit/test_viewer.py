"""Tests for PDF viewer dispatch."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from asmdoc.lib.errors import NoViewerAvailableError, SourceUnavailableError
from asmdoc.viewer import Viewer, open_page, select_viewers, viewer_names


@pytest.fixture
def pdf(temp_dir: Path) -> Path:
    """An empty stand-in for the manual PDF."""
    path = temp_dir / "manual.pdf"
    path.write_bytes(b"%PDF-1.4\n")
    return path


class TestViewer:
    """Tests for a single viewer recipe."""

    def test_command_formats_arguments(self) -> None:
        """Path and page are substituted into the arguments."""
        viewer = Viewer("zathura", "zathura", ("--page={page}", "{path}"))

        assert viewer.command(Path("/m.pdf"), 42) == [
            "zathura",
            "--page=42",
            "/m.pdf",
        ]

    def test_open_skips_missing_executable(self, pdf: Path) -> None:
        """A viewer that is not installed reports failure."""
        viewer = Viewer("ghost", "ghost-viewer", ("{path}",))

        with patch("asmdoc.viewer.shutil.which", return_value=None):
            assert viewer.open(pdf, 1) is False

    def test_open_launch_error(self, pdf: Path) -> None:
        """An OSError on launch is a failure, not an exception."""
        viewer = Viewer("broken", "broken", ("{path}",))

        with (
            patch("asmdoc.viewer.shutil.which", return_value="/usr/bin/broken"),
            patch("asmdoc.viewer.subprocess.Popen", side_effect=OSError("denied")),
        ):
            assert viewer.open(pdf, 1) is False

    def test_open_launches_process(self, pdf: Path) -> None:
        """A started process counts as success."""
        viewer = Viewer("mupdf", "mupdf", ("{path}", "{page}"))

        with (
            patch("asmdoc.viewer.shutil.which", return_value="/usr/bin/mupdf"),
            patch("asmdoc.viewer.subprocess.Popen") as mock_popen,
        ):
            assert viewer.open(pdf, 12) is True

        assert mock_popen.call_args.args[0] == ["mupdf", str(pdf), "12"]


class TestDispatch:
    """Tests for the ordered fallback."""

    def test_select_auto_returns_all(self) -> None:
        """auto tries every known viewer."""
        assert [v.name for v in select_viewers("auto")] == viewer_names()

    def test_select_named_viewer(self) -> None:
        """A named preference restricts the candidates."""
        assert [v.name for v in select_viewers("evince")] == ["evince"]

    def test_select_unknown_viewer(self) -> None:
        """Unknown names fail with the name in the error."""
        with pytest.raises(NoViewerAvailableError, match="acroread"):
            select_viewers("acroread")

    def test_first_successful_viewer_wins(self, pdf: Path) -> None:
        """Viewers are tried in order until one starts."""
        first = MagicMock(spec=Viewer)
        first.name = "first"
        first.open.return_value = False
        second = MagicMock(spec=Viewer)
        second.name = "second"
        second.open.return_value = True
        third = MagicMock(spec=Viewer)
        third.name = "third"

        opened = open_page(pdf, 7, viewers=[first, second, third])

        assert opened is second
        first.open.assert_called_once_with(pdf, 7)
        third.open.assert_not_called()

    def test_all_viewers_fail(self, pdf: Path) -> None:
        """Exhausting every viewer raises NoViewerAvailableError."""
        failing = MagicMock(spec=Viewer)
        failing.name = "failing"
        failing.open.return_value = False

        with pytest.raises(NoViewerAvailableError) as exc_info:
            open_page(pdf, 7, viewers=[failing])

        assert exc_info.value.tried == ["failing"]

    def test_missing_pdf(self, temp_dir: Path) -> None:
        """The PDF must exist before any viewer is tried."""
        with pytest.raises(SourceUnavailableError, match="pdf_path"):
            open_page(temp_dir / "missing.pdf", 7)

    def test_unset_pdf(self) -> None:
        """An unset pdf_path names the setting to fix."""
        with pytest.raises(SourceUnavailableError, match="pdf_path"):
            open_page(None, 7)
