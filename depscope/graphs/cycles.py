"""Circular dependency detection over the internal module graph."""

from __future__ import annotations

from typing import Dict, Iterator, List, Set

from .models import DependencyGraph


def find_cycles(graph: DependencyGraph) -> List[List[str]]:
    """Enumerate cycles met as back edges of a depth-first walk.

    The walk starts from every unvisited node in first-seen order and keeps
    the current path. Following an edge into a node that is on the path
    records the path slice from that node to the current one, and the walk
    carries on. A node is marked visited once all of its successors are
    done and is never entered again, so every edge is followed at most once.

    Rotations of the same cycle are not merged, and two cycles sharing a
    node are reported separately.
    """
    visited: Set[str] = set()
    cycles: List[List[str]] = []

    for start in graph.nodes:
        if start in visited:
            continue

        # iterative walk so long chains do not hit the recursion limit
        path: List[str] = [start]
        on_path: Dict[str, int] = {start: 0}
        pending: List[Iterator[str]] = [iter(graph.successors(start))]

        while pending:
            nxt = next(pending[-1], None)
            if nxt is None:
                done = path.pop()
                del on_path[done]
                pending.pop()
                visited.add(done)
                continue
            if nxt in on_path:
                cycles.append(path[on_path[nxt]:])
            elif nxt not in visited:
                on_path[nxt] = len(path)
                path.append(nxt)
                pending.append(iter(graph.successors(nxt)))

    return cycles
