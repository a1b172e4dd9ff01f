"""CLI commands for maintaining and inspecting the mnemonic index.

Implements 'asmdoc list', 'asmdoc refresh' and 'asmdoc cache-info'.
"""

import sys

import click

from asmdoc.cli.session import EXIT_CONFIG_ERROR, create_session
from asmdoc.index.builder import read_source
from asmdoc.index.cache import cache_key
from asmdoc.lib.errors import ConfigError, SourceUnavailableError
from asmdoc.lib.logging_config import get_logger, setup_logging

logger = get_logger(__name__)

config_option = click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="Configuration file to use instead of asmdoc.yml",
)
verbose_option = click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output with debug information",
)
quiet_option = click.option(
    "--quiet",
    "-q",
    is_flag=True,
    help="Only log warnings and errors",
)


def _config_failure(e: Exception) -> None:
    logger.error(f"Configuration error: {e}", exc_info=True)
    click.secho("Error: Failed to load the mnemonic index", fg="red", err=True)
    click.echo(f"  {str(e)}", err=True)
    sys.exit(EXIT_CONFIG_ERROR)


@click.command(name="list")
@click.option("--prefix", default="", help="Only list mnemonics starting with PREFIX")
@click.option("--pages", is_flag=True, help="Print the page next to each mnemonic")
@config_option
@verbose_option
@quiet_option
def list_mnemonics(
    prefix: str,
    pages: bool,
    config_path: str | None,
    verbose: bool,
    quiet: bool,
) -> None:
    """List known mnemonics in index order, one per line."""
    setup_logging(verbose=verbose, quiet=quiet)

    try:
        session = create_session(config_path)
        index = session.ensure()
    except (ConfigError, SourceUnavailableError) as e:
        _config_failure(e)
        return

    for mnemonic in index.mnemonics(prefix):
        if pages:
            click.echo(f"{mnemonic}\t{index.resolve(mnemonic)}")
        else:
            click.echo(mnemonic)


@click.command(name="refresh")
@config_option
@verbose_option
@quiet_option
def refresh(config_path: str | None, verbose: bool, quiet: bool) -> None:
    """Rebuild the index from the manual text, ignoring the cache."""
    setup_logging(verbose=verbose, quiet=quiet)

    try:
        session = create_session(config_path)
        index = session.refresh()
    except (ConfigError, SourceUnavailableError) as e:
        _config_failure(e)
        return

    click.secho(f"Indexed {len(index)} mnemonics", fg="green")


@click.command(name="cache-info")
@config_option
@verbose_option
@quiet_option
def cache_info(config_path: str | None, verbose: bool, quiet: bool) -> None:
    """Show the cache key and cache file for the configured manual."""
    setup_logging(verbose=verbose, quiet=quiet)

    try:
        session = create_session(config_path)
        source_text = read_source(session.config.source_path)
    except (ConfigError, SourceUnavailableError) as e:
        _config_failure(e)
        return

    path = session.cache.path_for(source_text)
    click.echo(f"source: {session.config.source_path}")
    click.echo(f"key:    {cache_key(source_text)}")
    click.echo(f"file:   {path}")
    click.echo(f"cached: {'yes' if path.exists() else 'no'}")
