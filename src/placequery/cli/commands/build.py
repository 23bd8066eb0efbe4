"""Build command - assemble a read query from options."""

import json
import sys

import click

from ...errors import PlaceQueryError
from ...filters import FieldFilter
from ...query import Query
from ..context import pass_context
from ..helpers import parse_circle, parse_filter, parse_sort


@click.command()
@click.option("--search", "-q", help="Full-text search terms")
@click.option("--limit", type=click.IntRange(min=0), help="Maximum rows to return")
@click.option("--offset", type=click.IntRange(min=0), help="Rows to skip")
@click.option("--select", "select", multiple=True, help="Field to return (repeatable)")
@click.option("--sort", "sort", multiple=True, help="FIELD or FIELD:desc (repeatable)")
@click.option(
    "--filter",
    "-f",
    "filters",
    nargs=3,
    multiple=True,
    metavar="FIELD OP VALUE",
    help="Field filter, e.g. -f rating gt 3 (repeatable)",
)
@click.option(
    "--any",
    "match_any",
    is_flag=True,
    default=False,
    help="Match rows satisfying any filter instead of all of them",
)
@click.option("--within", help="Circle as LAT,LONG,METERS")
@click.option("--include-count", is_flag=True, default=False, help="Ask for the total row count")
@click.option("--table", help="Table name; prints a full URL using the configured base_url")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print parameters as JSON")
@click.option("--no-encode", is_flag=True, default=False, help="Do not URL-encode values")
@pass_context
def build(
    ctx,
    search,
    limit,
    offset,
    select,
    sort,
    filters,
    match_any,
    within,
    include_count,
    table,
    as_json,
    no_encode,
):
    """Build a query string for a read request.

    Examples:
        placequery build -q coffee --limit 10
        placequery build -f region eq CA -f rating gte 4 --select name
        placequery build -f name bw Star -f category eq cafe --any
        placequery build --within 34.06,-118.41,500 --json
    """
    try:
        query = _build_query(
            search, limit, offset, select, sort, filters, match_any, within, include_count
        )

        if as_json:
            click.echo(json.dumps(query.to_json_object(), indent=2, ensure_ascii=False))
            return

        url_encode = False if no_encode else ctx.settings.url_encode
        query_string = query.to_url_query(url_encode=url_encode)

        if table:
            base_url = ctx.settings.base_url
            if not base_url:
                click.echo(
                    "Error: --table needs base_url (set PLACEQUERY_BASE_URL or a config file)",
                    err=True,
                )
                sys.exit(1)
            click.echo(f"{base_url}/t/{table}?{query_string}")
        else:
            click.echo(query_string)
    except (PlaceQueryError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def _build_query(search, limit, offset, select, sort, filters, match_any, within, include_count):
    query = Query()
    if search:
        query.search(search)
    if limit is not None:
        query.limit(limit)
    if offset is not None:
        query.offset(offset)
    if select:
        query.only(*select)
    for value in sort:
        field, descending = parse_sort(value)
        if descending:
            query.sort_desc(field)
        else:
            query.sort_asc(field)
    if within:
        query.within(parse_circle(within))
    if include_count:
        query.include_row_count()

    parsed = [FieldFilter(op, field, arg) for field, op, arg in (parse_filter(*f) for f in filters)]
    if match_any and len(parsed) > 1:
        # One branch per filter so the OR group keeps the given order
        branches = [Query().add(f) for f in parsed]
        query.or_(*branches)
    else:
        for f in parsed:
            query.add(f)
    return query
