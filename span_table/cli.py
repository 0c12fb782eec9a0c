#!/usr/bin/env python3
"""
cli.py

Command-line interface for summarizing `tracing` JSON span logs as a
latency table, a tree, or a per-call drill-down.
"""
import json
import logging
import re

import click
from rich import print

from span_table.errors import EmptyResultError, NoiseConfigError
from span_table.exporters import view_tree
from span_table.filters import DEFAULT_NOISE, load_noise_config
from span_table.hierarchy import DEFAULT_SORT, SORT_FIELDS
from span_table.ingest import load_events
from span_table.report import DEFAULT_TOP, ReportOptions, render_report, span_hierarchy


def _compile_filter(ctx, param, value):
    if value is None:
        return None
    try:
        return re.compile(value)
    except re.error as exc:
        raise click.BadParameter(f"invalid regular expression: {exc}")


def _load_noise(ctx, param, value):
    if not value:
        return DEFAULT_NOISE
    try:
        return load_noise_config(value)
    except NoiseConfigError as exc:
        raise click.BadParameter(str(exc))


@click.command()
@click.argument("files", nargs=-1, type=click.Path(dir_okay=False, allow_dash=True))
@click.option("--filter", "pattern", callback=_compile_filter, help="Only show spans matching pattern (regex)")
@click.option(
    "--sort", type=click.Choice(SORT_FIELDS), default=DEFAULT_SORT, show_default=True,
    help="Sort sibling spans by this statistic"
)
@click.option("--top", type=int, default=DEFAULT_TOP, show_default=True, help="Show top N spans")
@click.option("--detail", metavar="SPAN", help="Show individual calls for a specific span")
@click.option("--all", "show_all", is_flag=True, help="Include internal/library spans")
@click.option("--tree", "as_tree", is_flag=True, help="Render the hierarchy as a tree")
@click.option(
    "--noise-config", envvar="SPAN_TABLE_NOISE_CONFIG", callback=_load_noise,
    type=click.Path(dir_okay=False), help="JSON file replacing the internal span denylist"
)
@click.option("--show-noise", is_flag=True, help="Print the active span denylist and exit")
@click.option("-v", "--verbose", is_flag=True, help="Log debug output to stderr")
@click.pass_context
def main(ctx, files, pattern, sort, top, detail, show_all, as_tree, noise_config, show_noise, verbose):
    """
    Analyze span timing JSON logs.

    FILES are newline-delimited JSON logs written by a `tracing` JSON
    subscriber; "-" reads standard input.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    if show_noise:
        click.echo(json.dumps(noise_config.to_dict(), indent=2))
        return
    if not files:
        click.echo(ctx.get_help(), err=True)
        raise SystemExit(1)

    try:
        events = load_events(files)
    except OSError as exc:
        click.echo(f"Error: cannot read input: {exc}", err=True)
        raise SystemExit(1)

    options = ReportOptions(
        pattern=pattern,
        sort=sort,
        top=top,
        show_all=show_all,
        detail=detail,
        noise=noise_config,
    )
    try:
        if as_tree and detail is None:
            nodes, total = span_hierarchy(events, options)
            shown = nodes[:top]
            print(view_tree.build_tree(shown, sort))
            click.echo(f"\nShowing {len(shown)} of {total} spans (sorted by {sort})")
            return
        lines = render_report(events, options)
    except EmptyResultError as exc:
        click.echo(str(exc), err=True)
        raise SystemExit(1)
    for line in lines:
        click.echo(line)


if __name__ == "__main__":
    main()
