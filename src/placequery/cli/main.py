"""placequery CLI main entry point with global options."""

import sys

import click

from .. import __version__, config
from ..errors import ConfigError
from .context import PQContext, configure_logging


@click.group()
@click.version_option(__version__, prog_name="placequery")
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False),
    help="Settings file (overrides $PLACEQUERY_PATH)",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Log level for diagnostics on stderr",
)
@click.pass_context
def cli(ctx, config_file, log_level):
    """placequery - build read-API query strings from the command line."""
    ctx.ensure_object(PQContext)

    try:
        ctx.obj.settings = config.use(config_file)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    configure_logging((log_level or ctx.obj.settings.log_level).upper())


# Register commands at module level so tests can import cli with commands attached
from .commands.build import build
from .commands.encode import encode

cli.add_command(build)
cli.add_command(encode)


def main():
    """Entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
