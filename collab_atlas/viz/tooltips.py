"""
collab_atlas/viz/tooltips.py — Hover text for collaboration graph nodes and edges.

Returns small HTML fragments; the renderer owns the tooltip container.
Labels are HTML-escaped because participant names are user supplied.
"""

from html import escape
from typing import Optional

from collab_atlas.formatting import to_fixed
from collab_atlas.graph.models import CollaborationEdge, LaidOutGraph, PositionedNode


def format_node_tooltip(label: str, doa_normalized: float, degree: int) -> str:
    return (
        f'<div style="font-weight:600; color:#0f172a;">{escape(label)}</div>'
        f'<div style="color:#1d4ed8;">Total DOA (normalized): {to_fixed(doa_normalized)}</div>'
        f'<div style="color:#475569;">Active links: {degree}</div>'
    )


def format_edge_tooltip(
    source_label: str,
    target_label: str,
    spof_score: float,
    collaboration_strength: float,
) -> str:
    return (
        f'<div style="font-weight:600; color:#0f172a;">{escape(source_label)} ↔ {escape(target_label)}</div>'
        f'<div style="color:#1d4ed8;">SPOF score: {to_fixed(spof_score)}</div>'
        f'<div style="color:#475569;">Collaboration strength: {to_fixed(collaboration_strength)}</div>'
    )


def node_tooltip(node: PositionedNode) -> str:
    return format_node_tooltip(node.label, node.doa_normalized, node.degree)


def edge_tooltip(edge: CollaborationEdge, graph: LaidOutGraph) -> Optional[str]:
    """Edge tooltip using node labels from graph; None if an endpoint is missing."""
    labels = {node.id: node.label for node in graph.nodes}
    if edge.source not in labels or edge.target not in labels:
        return None
    return format_edge_tooltip(
        labels[edge.source],
        labels[edge.target],
        edge.spof_score,
        edge.collaboration_strength,
    )
