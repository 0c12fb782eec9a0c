"""
report.py

Run the aggregation pipeline over loaded events and produce report lines.
"""
import logging

from span_table.aggregate import aggregate
from span_table.errors import EmptyResultError
from span_table.exporters.detail import collect_detail, render_detail
from span_table.exporters.table import render_table
from span_table.filters import DEFAULT_NOISE, Selection
from span_table.hierarchy import DEFAULT_SORT, walk
from span_table.stats import compute_results

logger = logging.getLogger(__name__)

DEFAULT_TOP = 20


class ReportOptions:
    def __init__(
        self,
        pattern=None,
        sort: str = DEFAULT_SORT,
        top: int = DEFAULT_TOP,
        show_all: bool = False,
        detail: str = None,
        noise=DEFAULT_NOISE,
    ):
        self.pattern = pattern
        self.sort = sort
        self.top = top
        self.show_all = show_all
        self.detail = detail
        self.noise = noise

    @property
    def selection(self) -> Selection:
        return Selection(
            pattern=self.pattern,
            show_all=self.show_all,
            detail=self.detail,
            noise=self.noise,
        )


def span_hierarchy(events, options: ReportOptions):
    """
    Aggregate `events` and return (nodes, total), where nodes is the full
    depth-ordered list and total the number of distinct span names.
    """
    spans = aggregate(events, options.selection)
    if not spans:
        raise EmptyResultError("No matching span close events found")
    results = compute_results(spans)
    nodes = walk(results, options.sort)
    logger.debug("walked %d nodes from %d results", len(nodes), len(results))
    return nodes, len(results)


def render_report(events, options: ReportOptions) -> list:
    """Lines of the detail report when a span name was requested, else the list report."""
    if options.detail is not None:
        return render_detail(options.detail, collect_detail(events, options.detail))
    nodes, total = span_hierarchy(events, options)
    return render_table(nodes, total, options.sort, options.top)
