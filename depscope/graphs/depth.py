"""Dependency depth: how far each edge sits from a root of the graph."""

from __future__ import annotations

from collections import deque
from typing import Deque, Dict, Set, Tuple

from .models import DependencyGraph, DepthMetrics


def compute_edge_depths(graph: DependencyGraph) -> Dict[Tuple[str, str], int]:
    """Breadth-first depth of every edge reachable from a root.

    Roots are nodes without incoming edges and sit at depth 0. An edge
    ``u -> v`` has depth ``depth(u) + 1``. A node keeps the depth of its
    first discovery; edges closing a cycle still get a depth but never
    change the depth of a node that already has one. Edges only reachable
    through a rootless cycle get no depth.
    """
    has_incoming: Set[str] = set()
    for node in graph.nodes:
        has_incoming.update(graph.successors(node))

    node_depth: Dict[str, int] = {}
    queue: Deque[str] = deque()
    for node in graph.nodes:
        if node not in has_incoming:
            node_depth[node] = 0
            queue.append(node)

    edge_depths: Dict[Tuple[str, str], int] = {}
    while queue:
        node = queue.popleft()
        depth = node_depth[node] + 1
        for succ in graph.successors(node):
            edge_depths[(node, succ)] = depth
            if succ not in node_depth:
                node_depth[succ] = depth
                queue.append(succ)

    return edge_depths


def compute_depth_metrics(graph: DependencyGraph) -> DepthMetrics:
    """Max and mean over edge depths (not node depths)."""
    edge_depths = compute_edge_depths(graph)
    if not edge_depths:
        return DepthMetrics(edge_depths={})
    values = list(edge_depths.values())
    return DepthMetrics(
        max_depth=max(values),
        average_depth=sum(values) / len(values),
        edge_depths=edge_depths,
    )
