"""
collab_atlas/layout/engine.py — Positions a reduced collaboration graph on a canvas.

Strategies:
    shell     — Nodes ranked by degree are placed on three concentric bands
                (hubs inside), then relaxed by a short force simulation.
    free      — Every particle starts at the canvas centre; a longer force
                simulation alone determines the structure.
    circular  — Evenly spaced ring in node order; no simulation.

Whatever the strategy, every node is finally clamped into
[r, width − r] × [r, height − r], where r is the node's visual radius, so no
disc renders outside the canvas.

Determinism: the simulation's only randomness (sub-pixel jiggle for
coincident particles) is drawn from a generator seeded with hash_string() of
the node ids, strategy and canvas size.
"""

import logging
import math
from typing import Optional

import numpy as np

from collab_atlas.config import (
    DEFAULT_CONFIG,
    FORCE_SETTINGS,
    NODE_RADIUS_BASE,
    NODE_RADIUS_MAX_BONUS,
    NODE_RADIUS_PER_LINK,
    CollabAtlasConfig,
    ForceSettings,
)
from collab_atlas.graph.models import LaidOutGraph, PositionedNode, ReducedGraph
from collab_atlas.layout.simulation import ForceSimulation
from collab_atlas.metrics.insights import edge_density
from collab_atlas.noise import clamp, hash_string

logger = logging.getLogger(__name__)


def node_radius(degree: int) -> float:
    """Visual radius of a node: 9 + min(7, 1.2 × degree) px."""
    return NODE_RADIUS_BASE + min(NODE_RADIUS_MAX_BONUS, degree * NODE_RADIUS_PER_LINK)


def _ring_position(index: int, ring_size: int, radius: float, cx: float, cy: float) -> tuple[float, float]:
    angle = (index / max(ring_size, 1)) * math.pi * 2
    return cx + math.cos(angle) * radius, cy + math.sin(angle) * radius


def shell_positions(
    graph: ReducedGraph,
    width: float,
    height: float,
    config: CollabAtlasConfig = DEFAULT_CONFIG,
) -> list[tuple[float, float]]:
    """
    Concentric-band placement by degree rank.

    The top config.shell_inner_fraction of nodes by degree (at least one)
    form the inner band, the next config.shell_middle_fraction (at least one)
    the middle band, the rest the outer band. Ties keep node order.

    Returns:
        Positions aligned with graph.nodes.
    """
    n = len(graph.nodes)
    cx, cy = width / 2, height / 2
    half = min(width, height) / 2
    inner_r, middle_r, outer_r = (fraction * half for fraction in config.shell_radius_fractions)

    inner_count = max(1, math.ceil(n * config.shell_inner_fraction))
    middle_count = max(1, math.ceil(n * config.shell_middle_fraction))
    outer_count = max(1, n - inner_count - middle_count)

    ranked = sorted(range(n), key=lambda i: -graph.nodes[i].degree)
    positions: list[tuple[float, float]] = [(cx, cy)] * n
    for rank, node_index in enumerate(ranked):
        if rank < inner_count:
            pos = _ring_position(rank, inner_count, inner_r, cx, cy)
        elif rank < inner_count + middle_count:
            pos = _ring_position(rank - inner_count, middle_count, middle_r, cx, cy)
        else:
            pos = _ring_position(rank - inner_count - middle_count, outer_count, outer_r, cx, cy)
        positions[node_index] = pos
    return positions


def circular_positions(
    graph: ReducedGraph,
    width: float,
    height: float,
    config: CollabAtlasConfig = DEFAULT_CONFIG,
) -> list[tuple[float, float]]:
    """Evenly spaced ring in node order, radius max(90, 0.37 × min(w, h))."""
    n = len(graph.nodes)
    radius = max(config.circular_min_radius, min(width, height) * config.circular_radius_fraction)
    return [_ring_position(i, n, radius, width / 2, height / 2) for i in range(n)]


def simulation_charge(graph: ReducedGraph, settings: ForceSettings) -> float:
    """Many-body strength interpolated by edge density (sparse → dense)."""
    density = edge_density(len(graph.nodes), len(graph.edges))
    return settings.charge_sparse + (settings.charge_dense - settings.charge_sparse) * density


def layout_seed(graph: ReducedGraph, width: float, height: float, strategy: str) -> int:
    """Jiggle seed for the simulation: stable for identical inputs."""
    node_key = "|".join(node.id for node in graph.nodes)
    return hash_string(f"{node_key}:{strategy}:{width}x{height}")


def _simulate(
    graph: ReducedGraph,
    initial: list[tuple[float, float]],
    width: float,
    height: float,
    strategy: str,
    settings: ForceSettings,
) -> np.ndarray:
    index_of = {node.id: i for i, node in enumerate(graph.nodes)}
    links = [(index_of[e.source], index_of[e.target]) for e in graph.edges]
    distances = [
        settings.link_distance_base - e.spof_score * settings.link_distance_span
        for e in graph.edges
    ]
    strengths = [settings.link_strength * e.collaboration_strength for e in graph.edges]
    radii = [node_radius(node.degree) + settings.collide_margin for node in graph.nodes]

    simulation = ForceSimulation(
        positions=initial,
        links=links,
        distances=distances,
        strengths=strengths,
        radii=radii,
        charge=simulation_charge(graph, settings),
        center=(width / 2, height / 2),
        settings=settings,
        seed=layout_seed(graph, width, height, strategy),
    )
    return simulation.run(settings.ticks)


def layout_graph(
    graph: Optional[ReducedGraph],
    width: Optional[float] = None,
    height: Optional[float] = None,
    strategy: Optional[str] = None,
    config: CollabAtlasConfig = DEFAULT_CONFIG,
) -> LaidOutGraph:
    """
    Position every node of a reduced graph inside a width × height canvas.

    Args:
        graph:    Output of reduce_collaboration_graph(). None or empty →
                  an empty LaidOutGraph.
        width:    Canvas width in px. None → config.canvas_width.
        height:   Canvas height in px. None → config.canvas_height.
        strategy: 'shell' | 'free' | 'circular'. None → config.default_layout.
                  Unknown values fall back to 'free' with a warning.
        config:   CollabAtlasConfig instance.

    Returns:
        LaidOutGraph with the same node order and edges as the input.

    Notes:
        - Canvas sizes are not validated. A canvas narrower than a node's
          diameter pins that node to width − r.
        - The simulation runs a fixed number of ticks (FORCE_SETTINGS) and
          stops; the result is one static snapshot.
    """
    width = float(config.canvas_width if width is None else width)
    height = float(config.canvas_height if height is None else height)
    strategy = strategy or config.default_layout

    if strategy not in FORCE_SETTINGS:
        logger.warning("Unknown layout strategy '%s' — running a free force layout.", strategy)
        strategy = "free"

    if graph is None or graph.is_empty:
        return LaidOutGraph(
            total_nodes=graph.total_nodes if graph is not None else 0,
            isolated_count=graph.isolated_count if graph is not None else 0,
            width=width,
            height=height,
            strategy=strategy,
        )

    settings = FORCE_SETTINGS[strategy]
    if strategy == "shell":
        initial = shell_positions(graph, width, height, config)
    elif strategy == "circular":
        initial = circular_positions(graph, width, height, config)
    else:
        initial = [(width / 2, height / 2)] * len(graph.nodes)

    if settings.ticks > 0:
        final = _simulate(graph, initial, width, height, strategy, settings)
    else:
        final = np.asarray(initial, dtype=float)

    nodes = []
    for node, (x, y) in zip(graph.nodes, final):
        radius = node_radius(node.degree)
        nodes.append(
            PositionedNode(
                id=node.id,
                label=node.label,
                doa_normalized=node.doa_normalized,
                degree=node.degree,
                x=clamp(float(x), radius, width - radius),
                y=clamp(float(y), radius, height - radius),
                radius=radius,
            )
        )

    node_ids = {node.id for node in nodes}
    edges = tuple(e for e in graph.edges if e.source in node_ids and e.target in node_ids)

    logger.info(
        "Laid out %d nodes / %d edges on %.0fx%.0f canvas (%s, %d ticks).",
        len(nodes),
        len(edges),
        width,
        height,
        strategy,
        settings.ticks,
    )
    return LaidOutGraph(
        nodes=tuple(nodes),
        edges=edges,
        total_nodes=graph.total_nodes,
        isolated_count=graph.isolated_count,
        width=width,
        height=height,
        strategy=strategy,
    )
