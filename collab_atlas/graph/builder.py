"""
collab_atlas/graph/builder.py — NetworkX view of collaboration graphs.

The value objects in collab_atlas.graph.models are what the dashboard
consumes; structural analysis (connectivity, bridges) runs on NetworkX.
This module converts either a raw CollaborationModule or a ReducedGraph into
an undirected nx.Graph carrying every attribute of the source objects.
"""

import logging
from typing import Union

import networkx as nx

from collab_atlas.graph.models import CollaborationModule, LaidOutGraph, ReducedGraph

logger = logging.getLogger(__name__)


def build_networkx_graph(
    graph: Union[CollaborationModule, ReducedGraph, LaidOutGraph],
) -> nx.Graph:
    """
    Build an undirected nx.Graph from a collaboration graph value object.

    Node attributes:
        label, doa_normalized, plus degree (ReducedGraph / LaidOutGraph)
        and x, y, radius (LaidOutGraph).

    Edge attributes:
        spof_score, collaboration_strength.

    Graph attributes:
        G.graph['source_type'] — class name of the converted object.
        G.graph['module_id']   — CollaborationModule.id (modules only).

    Returns:
        nx.Graph. Node insertion order follows graph.nodes, so NetworkX
        iteration order matches the value object's order.
    """
    G = nx.Graph()
    G.graph["source_type"] = type(graph).__name__
    if isinstance(graph, CollaborationModule):
        G.graph["module_id"] = graph.id

    for node in graph.nodes:
        attrs = {k: v for k, v in vars(node).items() if k != "id"}
        G.add_node(node.id, **attrs)

    for edge in graph.edges:
        G.add_edge(
            edge.source,
            edge.target,
            spof_score=edge.spof_score,
            collaboration_strength=edge.collaboration_strength,
        )

    logger.debug(
        "Built nx.Graph from %s: %d nodes, %d edges.",
        G.graph["source_type"],
        G.number_of_nodes(),
        G.number_of_edges(),
    )
    return G
