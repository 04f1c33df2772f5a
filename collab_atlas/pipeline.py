"""
collab_atlas/pipeline.py — Single-call pipeline orchestrator.

Provides run_collaboration_pipeline(), which executes the full collaboration
panel computation in dependency order and returns every intermediate result.

Usage:
    from collab_atlas.pipeline import run_collaboration_pipeline
    result = run_collaboration_pipeline("team-42", ["Ada", "Grace", "Linus"])
    for insight in result.insights:
        print(insight.text)
"""

import logging
from dataclasses import asdict, dataclass, field
from typing import Optional, Sequence

from collab_atlas.config import DEFAULT_CONFIG, CollabAtlasConfig
from collab_atlas.graph.generator import generate_collaboration_module
from collab_atlas.graph.models import CollaborationModule, Insight, LaidOutGraph, ReducedGraph
from collab_atlas.graph.reducer import reduce_collaboration_graph
from collab_atlas.layout.engine import layout_graph
from collab_atlas.metrics.bridges import find_bridge_edges
from collab_atlas.metrics.insights import collaboration_insights

logger = logging.getLogger(__name__)


@dataclass
class CollaborationPipelineResult:
    """
    Complete output of one collaboration panel computation.

    module is None when no participants were supplied; graph and layout are
    then empty and insights holds the single no-data insight.
    """

    context_id: str
    context_type: str
    time_range: str
    threshold: float

    module: Optional[CollaborationModule]
    graph: ReducedGraph
    insights: list[Insight]
    layout: LaidOutGraph
    bridge_edges: list[tuple[str, str]] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "context_id": self.context_id,
            "context_type": self.context_type,
            "time_range": self.time_range,
            "threshold": self.threshold,
            "module": self.module.to_dict() if self.module is not None else None,
            "graph": self.graph.to_dict(),
            "insights": [asdict(i) for i in self.insights],
            "layout": self.layout.to_dict(),
            "bridge_edges": [list(pair) for pair in self.bridge_edges],
        }


def run_collaboration_pipeline(
    context_id: str,
    names: Sequence[str],
    context_type: str = "team",
    time_range: Optional[str] = None,
    threshold: Optional[float] = None,
    remove_isolated: Optional[bool] = None,
    width: Optional[float] = None,
    height: Optional[float] = None,
    strategy: Optional[str] = None,
    config: CollabAtlasConfig = DEFAULT_CONFIG,
) -> CollaborationPipelineResult:
    """
    Generate → reduce → {insights, layout, bridges} for one context.

    Every None argument takes its default from config. Insights, layout and
    bridges only read the immutable reduced graph, so their order is free.
    """
    time_range = time_range or config.default_time_range
    threshold = config.default_threshold if threshold is None else threshold

    module = generate_collaboration_module(context_id, names, context_type, time_range, config)
    graph = reduce_collaboration_graph(module, threshold, remove_isolated, config)
    insights = collaboration_insights(module, graph, threshold)
    laid_out = layout_graph(graph, width, height, strategy, config)
    bridges = find_bridge_edges(graph)

    logger.info(
        "Collaboration pipeline for '%s': %d/%d nodes visible, %d edges, %d bridges.",
        context_id,
        len(graph.nodes),
        graph.total_nodes,
        len(graph.edges),
        len(bridges),
    )

    return CollaborationPipelineResult(
        context_id=context_id,
        context_type=context_type,
        time_range=time_range,
        threshold=threshold,
        module=module,
        graph=graph,
        insights=insights,
        layout=laid_out,
        bridge_edges=bridges,
    )
