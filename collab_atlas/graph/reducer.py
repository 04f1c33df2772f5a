"""
collab_atlas/graph/reducer.py — SPOF threshold reduction.

The dashboard never draws the raw module: it keeps only collaborations whose
spof_score clears the current threshold, counts each participant's surviving
links, and (by default) hides participants left without any link. The
reduced graph still reports the pre-removal node count so the panel can say
"N of M collaborators visible".
"""

import logging
from collections import Counter
from typing import Optional

from collab_atlas.config import DEFAULT_CONFIG, CollabAtlasConfig
from collab_atlas.graph.models import CollaborationModule, GraphNode, ReducedGraph

logger = logging.getLogger(__name__)


def reduce_collaboration_graph(
    module: Optional[CollaborationModule],
    threshold: Optional[float] = None,
    remove_isolated: Optional[bool] = None,
    config: CollabAtlasConfig = DEFAULT_CONFIG,
) -> ReducedGraph:
    """
    Filter a generated module by SPOF threshold and annotate node degrees.

    Algorithm (O(V + E)):
        1. Keep edges with spof_score >= threshold.
        2. degree(node) = number of kept edge endpoints equal to node.id.
        3. isolated_count = nodes with degree 0.
        4. If remove_isolated, drop degree-0 nodes and re-filter the kept
           edges against the retained id set.

    Args:
        module:          Output of generate_collaboration_module(), or None.
        threshold:       Minimum spof_score to keep. None → config.default_threshold.
                         Not validated: < 0 keeps everything, > 1 keeps nothing.
        remove_isolated: Drop degree-0 nodes. None → config.remove_isolated.
        config:          CollabAtlasConfig instance.

    Returns:
        ReducedGraph. An empty ReducedGraph when module is None.

    Notes:
        - Node order follows module.nodes; edge order follows module.edges.
        - sum(node.degree) == 2 × len(edges) holds for every result.
    """
    if threshold is None:
        threshold = config.default_threshold
    if remove_isolated is None:
        remove_isolated = config.remove_isolated

    if module is None:
        return ReducedGraph(threshold=threshold)

    if not 0.0 <= threshold <= 1.0:
        logger.debug("SPOF threshold %.3f is outside [0, 1]; applying as given.", threshold)

    kept_edges = [edge for edge in module.edges if edge.spof_score >= threshold]

    degree: Counter = Counter()
    for edge in kept_edges:
        degree[edge.source] += 1
        degree[edge.target] += 1

    annotated = [
        GraphNode(
            id=node.id,
            label=node.label,
            doa_normalized=node.doa_normalized,
            degree=degree[node.id],
        )
        for node in module.nodes
    ]
    isolated_count = sum(1 for node in annotated if node.degree == 0)

    if remove_isolated:
        annotated = [node for node in annotated if node.degree > 0]

    retained_ids = {node.id for node in annotated}
    edges = [
        edge for edge in kept_edges
        if edge.source in retained_ids and edge.target in retained_ids
    ]

    logger.debug(
        "Reduced '%s' at threshold %.2f: %d/%d nodes, %d/%d edges, %d isolated.",
        module.id,
        threshold,
        len(annotated),
        len(module.nodes),
        len(edges),
        len(module.edges),
        isolated_count,
    )

    return ReducedGraph(
        nodes=tuple(annotated),
        edges=tuple(edges),
        total_nodes=len(module.nodes),
        isolated_count=isolated_count,
        threshold=threshold,
    )
