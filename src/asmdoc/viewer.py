"""External PDF viewer dispatch.

Each viewer is a launch recipe for one program. Viewers are tried in order
until one starts; only when every candidate fails is an error raised.
"""

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

from asmdoc.lib.errors import NoViewerAvailableError, SourceUnavailableError
from asmdoc.lib.logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Viewer:
    """Launch recipe for one PDF viewer.

    ``arguments`` are formatted with ``path`` and ``page`` before launch.
    """

    name: str
    executable: str
    arguments: tuple[str, ...]

    def command(self, path: Path, page: int) -> list[str]:
        """Return the argv that opens ``path`` at ``page``."""
        return [self.executable] + [
            arg.format(path=str(path), page=page) for arg in self.arguments
        ]

    def open(self, path: Path, page: int) -> bool:
        """Launch the viewer without waiting for it.

        Returns:
            True if the process was started
        """
        if shutil.which(self.executable) is None:
            logger.debug(f"Viewer {self.name} not installed")
            return False

        argv = self.command(path, page)
        try:
            subprocess.Popen(
                argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                start_new_session=True,
            )
        except OSError as e:
            logger.warning(f"Failed to launch {self.name}: {e}")
            return False

        logger.info(f"Opened {path} at page {page} with {self.name}")
        return True


VIEWERS: list[Viewer] = [
    Viewer("zathura", "zathura", ("--page={page}", "{path}")),
    Viewer("evince", "evince", ("--page-label={page}", "{path}")),
    Viewer("okular", "okular", ("--page", "{page}", "{path}")),
    Viewer("mupdf", "mupdf", ("{path}", "{page}")),
    Viewer("qpdfview", "qpdfview", ("--unique", "{path}#{page}")),
    Viewer("xdg-open", "xdg-open", ("{path}",)),
]


def viewer_names() -> list[str]:
    """Names accepted by the ``viewer`` setting, besides "auto"."""
    return [viewer.name for viewer in VIEWERS]


def select_viewers(preference: str = "auto") -> list[Viewer]:
    """Return the viewers to try for a ``viewer`` setting.

    Raises:
        NoViewerAvailableError: If ``preference`` names an unknown viewer
    """
    if preference == "auto":
        return list(VIEWERS)
    selected = [viewer for viewer in VIEWERS if viewer.name == preference]
    if not selected:
        raise NoViewerAvailableError([preference])
    return selected


def open_page(
    pdf_path: Path | None,
    page: int,
    preference: str = "auto",
    viewers: list[Viewer] | None = None,
) -> Viewer:
    """Open the manual at ``page`` with the first viewer that starts.

    Args:
        pdf_path: The manual PDF
        page: Page to show
        preference: Viewer name, or "auto"
        viewers: Candidates to try instead of the built-in list

    Returns:
        The viewer that was launched

    Raises:
        SourceUnavailableError: If the PDF path is unset or missing
        NoViewerAvailableError: If no viewer could be started
    """
    if pdf_path is None:
        raise SourceUnavailableError(None, "pdf_path", "No manual PDF is configured.")
    if not pdf_path.is_file():
        raise SourceUnavailableError(
            str(pdf_path), "pdf_path", "The manual PDF does not exist."
        )

    candidates = viewers if viewers is not None else select_viewers(preference)
    tried: list[str] = []
    for viewer in candidates:
        tried.append(viewer.name)
        if viewer.open(pdf_path, page):
            return viewer

    raise NoViewerAvailableError(tried)
