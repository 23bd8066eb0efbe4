"""Encode command - raw KEY=VALUE pairs to a query string."""

import sys

import click

from ...errors import PlaceQueryError
from ...parameters import ParameterStore
from ..context import pass_context


@click.command()
@click.argument("pairs", nargs=-1, required=True)
@click.option("--no-encode", is_flag=True, default=False, help="Do not URL-encode values")
@pass_context
def encode(ctx, pairs, no_encode):
    """Encode KEY=VALUE pairs as a query string.

    Examples:
        placequery encode q="coffee shop" limit=5
    """
    params = ParameterStore()
    try:
        for pair in pairs:
            if "=" not in pair:
                raise ValueError(f"Expected KEY=VALUE, got '{pair}'")
            key, value = pair.split("=", 1)
            params.set_raw(key, value)
        url_encode = False if no_encode else ctx.settings.url_encode
        click.echo(params.to_query_string(url_encode=url_encode))
    except (PlaceQueryError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
