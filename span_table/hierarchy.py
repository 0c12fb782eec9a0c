"""
hierarchy.py

Arrange computed results into a forest using each span's dominant parent,
and flatten it into a depth-annotated display order.
"""
from typing import NamedTuple

from span_table.aggregate import ROOT
from span_table.stats import ComputedResult

SORT_FIELDS = ("total", "calls", "avg", "p99")
DEFAULT_SORT = "total"


class HierarchyNode(NamedTuple):
    result: ComputedResult
    depth: int


def sort_key(field: str):
    """Key function for a sort field; unknown fields fall back to total busy time."""
    if field == "calls":
        return lambda r: r.calls
    elif field == "avg":
        return lambda r: r.avg
    elif field == "p99":
        return lambda r: r.p99
    return lambda r: r.total


def build_children(results) -> dict:
    """
    Map every node name to the names whose dominant parent it is.
    Dominant parents without statistics of their own still get a node.
    """
    children = {ROOT: []}
    for r in results:
        children.setdefault(r.name, [])
        children.setdefault(r.parent, []).append(r.name)
    return children


def sort_children(children: dict, results_by_name: dict, field: str = DEFAULT_SORT):
    """Sort each child list in place, largest first. Ties keep aggregation order."""
    key = sort_key(field)
    for names in children.values():
        names.sort(key=lambda n: key(results_by_name[n]), reverse=True)


def walk(results, sort: str = DEFAULT_SORT) -> list:
    """
    Depth-first pre-order walk from the root's children (depth 0).
    Names reached twice are skipped, and any span never reached, e.g. because
    its ancestors form a cycle, is appended at depth 0 in aggregation order.
    """
    results_by_name = {r.name: r for r in results}
    children = build_children(results)
    sort_children(children, results_by_name, sort)

    ordered = []
    visited = set()
    stack = [(name, 0) for name in reversed(children[ROOT])]
    while stack:
        name, depth = stack.pop()
        if name in visited:
            continue
        visited.add(name)
        result = results_by_name.get(name)
        if result is not None:
            ordered.append(HierarchyNode(result, depth))
        for child in reversed(children.get(name, [])):
            stack.append((child, depth + 1))

    for r in results:
        if r.name not in visited:
            ordered.append(HierarchyNode(r, 0))
    return ordered
