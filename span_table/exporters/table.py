"""
table.py

Render the depth-ordered span list as an aligned, indented text table.
"""
from span_table.durations import format_duration

NAME_WIDTH = 40
RULE_WIDTH = 112

COLUMNS = (
    ("Calls", 6),
    ("Avg(wall)", 11),
    ("P50(wall)", 11),
    ("P99(wall)", 11),
    ("Avg(busy)", 11),
    ("P50(busy)", 11),
    ("P99(busy)", 11),
)


def display_name(name: str, depth: int) -> str:
    """
    Indent by depth and keep the most specific (trailing) part of names
    too long for the column, prefixed with "...".
    """
    indent = "  " * depth
    max_len = NAME_WIDTH - 2 - len(indent)
    if len(name) > max_len:
        name = "..." + name[len(name) - max(max_len - 3, 0):]
    return indent + name


def format_row(result, depth: int) -> str:
    values = (
        str(result.calls),
        format_duration(result.avg_wall),
        format_duration(result.p50_wall),
        format_duration(result.p99_wall),
        format_duration(result.avg),
        format_duration(result.p50),
        format_duration(result.p99),
    )
    row = display_name(result.name, depth).ljust(NAME_WIDTH)
    for value, (_title, width) in zip(values, COLUMNS):
        row += value.rjust(width)
    return row


def header() -> str:
    row = "Span Name".ljust(NAME_WIDTH)
    for title, width in COLUMNS:
        row += title.rjust(width)
    return row


def render_table(nodes, total: int, sort: str, top: int = 20) -> list:
    """
    Lines of the list report. Only the first `top` nodes are shown; `total`
    is the number of aggregated span names.
    """
    shown = nodes[:top]
    lines = ["", header(), "-" * RULE_WIDTH]
    for node in shown:
        lines.append(format_row(node.result, node.depth))
    lines.append("")
    lines.append(f"Showing {len(shown)} of {total} spans (sorted by {sort})")
    return lines
