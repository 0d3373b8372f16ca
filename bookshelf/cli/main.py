"""Main CLI entry point for bookshelf management commands."""

import click

from bookshelf import __version__
from bookshelf.cli.commands import database, server
from bookshelf.infra.logging.config import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="bookshelf")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Bookshelf CLI - manage the database and run the GraphQL server.

    \b
    Command Groups:
      db       Create, seed and reset the database
      server   Development and production servers

    \b
    Quick Start:
      bookshelf db init      # Create tables
      bookshelf db seed      # Load the reference books and authors
      bookshelf server dev   # Serve /graphql with auto-reload
    """
    ctx.ensure_object(dict)


cli.add_command(database.db)
cli.add_command(server.server)


def main() -> None:
    """Entry point for CLI."""
    setup_logging()
    cli(obj={})


if __name__ == "__main__":
    main()
