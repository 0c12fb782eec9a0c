"""
view_tree.py

Render the depth-ordered span list as a collapsible tree in the terminal
using Rich, with human-friendly time units.
"""
from rich.markup import escape
from rich.tree import Tree

from span_table.durations import format_duration


def _label(result, root_total: float) -> str:
    pct = result.total / root_total * 100 if root_total else 0.0
    return (
        f"[bold]{escape(result.name)}[/] • {result.calls} calls • "
        f"{format_duration(result.total)} busy ({pct:.1f}%) • "
        f"p99 {format_duration(result.p99)}"
    )


def build_tree(nodes, sort: str) -> Tree:
    """
    Attach each node under the most recent node one level shallower.
    Percentages are relative to the summed busy time of the depth-0 spans.
    """
    root_total = sum(n.result.total for n in nodes if n.depth == 0)
    tree = Tree(f"[b]spans[/] • {format_duration(root_total)} busy (sorted by {sort})")
    # branches[d] is the latest branch rendered at depth d - 1
    branches = [tree]
    for node in nodes:
        depth = min(node.depth, len(branches) - 1)
        branch = branches[depth].add(_label(node.result, root_total))
        del branches[depth + 1:]
        branches.append(branch)
    return tree
