"""CLI command for looking up an instruction in the manual.

Implements the 'asmdoc lookup' command which resolves a mnemonic to its
manual page and opens the configured PDF viewer there.
"""

import sys

import click
from click.shell_completion import CompletionItem

from asmdoc.cli.session import (
    EXIT_CONFIG_ERROR,
    EXIT_NOT_FOUND,
    EXIT_OK,
    EXIT_VIEWER_ERROR,
    create_session,
)
from asmdoc.index.builder import read_source
from asmdoc.lib.errors import (
    AsmDocError,
    ConfigError,
    MnemonicNotFoundError,
    NoViewerAvailableError,
    SourceUnavailableError,
)
from asmdoc.lib.logging_config import get_logger, setup_logging
from asmdoc.viewer import open_page

logger = get_logger(__name__)


def complete_mnemonic(
    ctx: click.Context, param: click.Parameter, incomplete: str
) -> list[CompletionItem]:
    """Offer mnemonics from the cached index for shell completion.

    Completion never builds the index; without a cache entry it offers
    nothing.
    """
    try:
        session = create_session(ctx.params.get("config_path"))
        index = session.cache.load(read_source(session.config.source_path))
    except AsmDocError:
        return []
    if index is None:
        return []
    return [CompletionItem(m) for m in index.mnemonics(incomplete)]


@click.command(name="lookup")
@click.argument("mnemonic", required=False, shell_complete=complete_mnemonic)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Configuration file to use instead of asmdoc.yml",
)
@click.option(
    "--viewer",
    default=None,
    help="PDF viewer to use (overrides the 'viewer' setting)",
)
@click.option(
    "--print-only",
    "-p",
    is_flag=True,
    help="Print the page number instead of opening a viewer",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output with debug information",
)
@click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Only log warnings and errors",
)
def lookup(
    mnemonic: str | None,
    config_path: str | None,
    viewer: str | None,
    print_only: bool,
    verbose: bool,
    quiet: bool,
) -> None:
    """Open the manual page documenting MNEMONIC.

    The index is built from the extracted manual text on first use and
    cached afterwards. When MNEMONIC is omitted it is prompted for.

    Example:

        asmdoc lookup ldr

        asmdoc lookup b.eq --print-only
    """
    setup_logging(verbose=verbose, quiet=quiet)

    logger.info(f"Lookup command invoked: mnemonic={mnemonic}, viewer={viewer}")

    try:
        session = create_session(config_path, overrides={"viewer": viewer})
        index = session.ensure()

        if not mnemonic:
            mnemonic = click.prompt("Mnemonic", type=str)
        mnemonic = mnemonic.strip().lower()

        page = index.resolve(mnemonic)
        logger.debug(f"Resolved {mnemonic} to page {page}")

        if print_only:
            click.echo(str(page))
            sys.exit(EXIT_OK)

        opened = open_page(session.config.pdf_path, page, session.config.viewer)
        click.echo(f"{mnemonic}: page {page} ({opened.name})")
        sys.exit(EXIT_OK)

    except MnemonicNotFoundError as e:
        logger.info(f"Mnemonic not found: {e.mnemonic}")
        click.secho(f"No documentation found for '{e.mnemonic}'", fg="yellow", err=True)
        sys.exit(EXIT_NOT_FOUND)
    except (ConfigError, SourceUnavailableError) as e:
        logger.error(f"Configuration error: {e}", exc_info=True)
        click.secho("Error: Failed to load the mnemonic index", fg="red", err=True)
        click.echo(f"  {str(e)}", err=True)
        sys.exit(EXIT_CONFIG_ERROR)
    except NoViewerAvailableError as e:
        logger.error(f"Viewer error: {e}")
        click.secho(f"Error: {str(e)}", fg="red", err=True)
        sys.exit(EXIT_VIEWER_ERROR)
