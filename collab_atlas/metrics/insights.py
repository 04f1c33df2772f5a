"""
collab_atlas/metrics/insights.py — Templated insights for the collaboration panel.

The panel's side card always shows the same insights in the same order, so
snapshot tests can assert on them:

    Empty reduced graph  → 1 insight  (collab-no-data)
    Otherwise            → 3 insights (collab-threshold, collab-top-doa, collab-hub)

The statistics behind the sentences are exposed separately through
summarize_collaboration_graph() for callers that need the numbers.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from collab_atlas.formatting import percent, to_fixed
from collab_atlas.graph.models import CollaborationModule, GraphNode, Insight, ReducedGraph

logger = logging.getLogger(__name__)

NO_DATA_INSIGHT = Insight(
    id="collab-no-data",
    text=(
        "No connected collaborators at this SPOF threshold. "
        "Lower the threshold to reveal weaker collaboration paths."
    ),
)


@dataclass(frozen=True)
class CollaborationSummary:
    """
    Summary statistics of a non-empty reduced graph.

    Fields:
        top_doa_node:  Node with the highest doa_normalized (first on ties).
        hub_node:      Node with the highest degree (first on ties).
        average_doa:   Mean doa_normalized across the graph's nodes.
        density:       |E| / (|V| × (|V| − 1) / 2); 0.0 when |V| <= 1.
    """

    top_doa_node: GraphNode
    hub_node: GraphNode
    average_doa: float
    density: float


def edge_density(node_count: int, edge_count: int) -> float:
    if node_count <= 1:
        return 0.0
    return edge_count / (node_count * (node_count - 1) / 2)


def summarize_collaboration_graph(graph: ReducedGraph) -> Optional[CollaborationSummary]:
    """Compute the insight statistics, or None for an empty graph."""
    if graph.is_empty:
        return None

    # max() returns the first maximal element, so ties resolve by node order.
    top_doa_node = max(graph.nodes, key=lambda n: n.doa_normalized)
    hub_node = max(graph.nodes, key=lambda n: n.degree)
    average_doa = sum(n.doa_normalized for n in graph.nodes) / len(graph.nodes)

    return CollaborationSummary(
        top_doa_node=top_doa_node,
        hub_node=hub_node,
        average_doa=average_doa,
        density=edge_density(len(graph.nodes), len(graph.edges)),
    )


def collaboration_insights(
    module: Optional[CollaborationModule],
    graph: ReducedGraph,
    threshold: float,
) -> list[Insight]:
    """
    Build the collaboration panel's insights.

    Args:
        module:    The generated module the graph was reduced from (or None).
        graph:     Output of reduce_collaboration_graph().
        threshold: SPOF threshold shown in the summary sentence.

    Returns:
        [NO_DATA_INSIGHT] when there is no module or the graph has no nodes;
        otherwise exactly three insights in fixed order.
    """
    summary = summarize_collaboration_graph(graph)
    if module is None or summary is None:
        return [NO_DATA_INSIGHT]

    scope = "team" if module.context_type == "team" else "repository"
    top = summary.top_doa_node
    hub = summary.hub_node

    insights = [
        Insight(
            id="collab-threshold",
            text=(
                f"SPOF threshold {to_fixed(threshold)} keeps {len(graph.nodes)}/{graph.total_nodes} "
                f"collaborators and {len(graph.edges)} weighted links "
                f"({graph.isolated_count} isolated removed)."
            ),
        ),
        Insight(
            id="collab-top-doa",
            text=(
                f"{top.label} has the highest normalized DOA ({to_fixed(top.doa_normalized)}), "
                f"indicating concentrated ownership risk across the {scope}."
            ),
        ),
        Insight(
            id="collab-hub",
            text=(
                f"{hub.label} is the top collaboration hub with {hub.degree} active links; "
                f"graph density is {percent(summary.density)} and average DOA is "
                f"{to_fixed(summary.average_doa)}."
            ),
        ),
    ]

    logger.debug("Built %d collaboration insights for '%s'.", len(insights), module.id)
    return insights
