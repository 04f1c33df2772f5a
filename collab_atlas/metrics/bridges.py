"""
collab_atlas/metrics/bridges.py — Bridge collaborations (structural single points of failure).

A bridge is a collaboration edge whose removal would split the reduced graph
into more components. In team terms: the only link through which one group
of people connects to the rest. If either participant on a bridge leaves,
knowledge flow between the two groups stops.

The ring backbone makes a freshly generated graph bridgeless; bridges appear
once the SPOF threshold starts cutting backbone links, which is exactly when
the panel should call them out.

Bridge detection uses Tarjan's algorithm (O(V + E)) via nx.bridges().
"""

import logging
from typing import Union

import networkx as nx

from collab_atlas.graph.builder import build_networkx_graph
from collab_atlas.graph.models import CollaborationModule, LaidOutGraph, ReducedGraph

logger = logging.getLogger(__name__)

GraphLike = Union[CollaborationModule, ReducedGraph, LaidOutGraph]


def find_bridge_edges(graph: GraphLike) -> list[tuple[str, str]]:
    """
    Find bridge collaborations in a collaboration graph.

    Args:
        graph: Any collaboration graph value object (usually a ReducedGraph).

    Returns:
        List of (u, v) id pairs that are bridges. Each pair is returned in
        the orientation of the originating edge (source, target), in edge order.

    Notes:
        - Empty graphs and graphs without edges have no bridges.
        - A pure cycle (e.g. the unthresholded backbone) has no bridges.
    """
    G = build_networkx_graph(graph)
    found = {frozenset(pair) for pair in nx.bridges(G)}

    bridges = [
        (edge.source, edge.target)
        for edge in graph.edges
        if frozenset((edge.source, edge.target)) in found
    ]

    logger.debug(
        "Bridge detection complete: %d bridges in %d-node graph.",
        len(bridges),
        G.number_of_nodes(),
    )
    return bridges


def is_connected(graph: GraphLike) -> bool:
    """
    True when every node is reachable from every other via the graph's edges.

    An empty graph is reported as not connected; a single node is connected.
    """
    if not graph.nodes:
        return False
    return nx.is_connected(build_networkx_graph(graph))


def component_count(graph: GraphLike) -> int:
    """Number of connected components (0 for an empty graph)."""
    if not graph.nodes:
        return 0
    return nx.number_connected_components(build_networkx_graph(graph))
