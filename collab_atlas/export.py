"""
collab_atlas/export.py — Tabular and JSON export of collaboration graphs.

Nodes and edges of any collaboration graph value object become two pandas
DataFrames (one row per node / edge, one column per field), which can be
written as CSV for spreadsheet review or snapshot diffs.
"""

import json
import logging
import os
from dataclasses import asdict
from typing import Union

import pandas as pd

from collab_atlas.graph.models import CollaborationModule, LaidOutGraph, ReducedGraph

logger = logging.getLogger(__name__)

GraphLike = Union[CollaborationModule, ReducedGraph, LaidOutGraph]

_EDGE_COLUMNS = ["source", "target", "spof_score", "collaboration_strength"]


def graph_to_frames(graph: GraphLike) -> tuple[pd.DataFrame, pd.DataFrame]:
    """
    Convert a collaboration graph into (nodes_df, edges_df).

    Column sets follow the node type: id/label/doa_normalized for modules,
    plus degree for reduced graphs, plus x/y/radius for laid-out graphs.
    Row order matches the value object's order.
    """
    nodes_df = pd.DataFrame([asdict(node) for node in graph.nodes])
    edges_df = pd.DataFrame([asdict(edge) for edge in graph.edges], columns=_EDGE_COLUMNS)
    return nodes_df, edges_df


def write_graph_csv(graph: GraphLike, output_dir: str, prefix: str = "collaboration") -> dict[str, str]:
    """
    Write {prefix}_nodes.csv and {prefix}_edges.csv into output_dir.

    Returns:
        {'nodes': path, 'edges': path}
    """
    os.makedirs(output_dir, exist_ok=True)
    nodes_df, edges_df = graph_to_frames(graph)

    paths = {
        "nodes": os.path.join(output_dir, f"{prefix}_nodes.csv"),
        "edges": os.path.join(output_dir, f"{prefix}_edges.csv"),
    }
    nodes_df.to_csv(paths["nodes"], index=False)
    edges_df.to_csv(paths["edges"], index=False)

    logger.info(
        "Wrote %d nodes and %d edges to %s.",
        len(nodes_df),
        len(edges_df),
        output_dir,
    )
    return paths


def to_json(data, indent: int = 2) -> str:
    """Serialise a value object (anything with to_dict()) or plain data to JSON."""
    if hasattr(data, "to_dict"):
        data = data.to_dict()
    return json.dumps(data, indent=indent, ensure_ascii=False)
