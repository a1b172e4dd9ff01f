"""Entry point for the asmdoc command line."""

import click

from asmdoc import __version__
from asmdoc.cli.commands.index import cache_info, list_mnemonics, refresh
from asmdoc.cli.commands.lookup import lookup


@click.group()
@click.version_option(__version__, prog_name="asmdoc")
def cli() -> None:
    """Find the reference manual page for an instruction mnemonic."""


cli.add_command(lookup)
cli.add_command(list_mnemonics)
cli.add_command(refresh)
cli.add_command(cache_info)


def main() -> None:
    """Run the asmdoc CLI."""
    cli()


if __name__ == "__main__":
    main()
