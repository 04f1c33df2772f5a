"""
collab_atlas/graph/generator.py — Deterministic collaboration graph generation.

Builds the synthetic weighted, undirected collaboration graph shown on the
team and repository dashboards. The same (context_id, names, context_type,
time_range) always yields the same module, float for float, so a render
after navigation matches the render before it.

Construction:
    1. Pick the RangeConfig preset for the time range.
    2. Derive a module seed from the context and range.
    3. One ParticipantNode per distinct participant, with a seeded DOA.
    4. Ring backbone: node i ↔ node (i + 1) mod n, spof_score >= 0.70.
    5. Supplementary edges for every remaining pair whose affinity noise
       clears the preset's affinity cutoff.

The backbone guarantees that any threshold <= 0.70 leaves a connected graph.
"""

import logging
from typing import Optional, Sequence

from collab_atlas.config import (
    CONTEXT_TYPES,
    DEFAULT_CONFIG,
    DOA_MAX,
    DOA_MIN,
    PAIR_AFFINITY_WEIGHT,
    RANGE_CONFIGS,
    RING_SPOF_BASE,
    RING_SPOF_SPAN,
    RING_STRENGTH_BASE,
    RING_STRENGTH_SPAN,
    STRENGTH_MAX,
    STRENGTH_MIN,
    CollabAtlasConfig,
    RangeConfig,
)
from collab_atlas.graph.models import CollaborationEdge, CollaborationModule, ParticipantNode
from collab_atlas.noise import clamp, noise, seed_from_text, slugify

logger = logging.getLogger(__name__)


def get_range_config(
    time_range: str,
    config: CollabAtlasConfig = DEFAULT_CONFIG,
) -> RangeConfig:
    """
    Resolve the generation preset for a time-range key.

    Unknown keys fall back to config.default_time_range with a warning.
    """
    preset = RANGE_CONFIGS.get(time_range)
    if preset is None:
        logger.warning(
            "Unknown time range '%s' — using the '%s' preset.",
            time_range,
            config.default_time_range,
        )
        preset = RANGE_CONFIGS[config.default_time_range]
    return preset


def module_seed_for(context_id: str, context_type: str, time_range: str, preset: RangeConfig) -> int:
    """Seed shared by every node and edge of one generated module."""
    return seed_from_text(f"{context_id}:{context_type}-collaboration:{time_range}") + preset.seed_offset


def _distinct_participants(names: Sequence[str]) -> list[tuple[str, str]]:
    """(id, name) for each distinct participant id, first occurrence wins."""
    seen: set[str] = set()
    participants: list[tuple[str, str]] = []
    for name in names:
        node_id = slugify(name)
        if node_id in seen:
            logger.debug("Dropping duplicate participant '%s' (id '%s').", name, node_id)
            continue
        seen.add(node_id)
        participants.append((node_id, name))
    return participants


def _participant_node(
    context_id: str,
    node_id: str,
    name: str,
    index: int,
    module_seed: int,
    preset: RangeConfig,
) -> ParticipantNode:
    node_seed = seed_from_text(f"{context_id}:{name}:overall:{index}")
    base_doa = DOA_MIN + noise(node_seed + module_seed) * (DOA_MAX - DOA_MIN)
    range_shift = (noise(node_seed + module_seed + 13) - 0.5) * preset.doa_volatility
    return ParticipantNode(
        id=node_id,
        label=name,
        doa_normalized=clamp(base_doa + range_shift, DOA_MIN, DOA_MAX),
    )


def _ring_edge(current: ParticipantNode, following: ParticipantNode, module_seed: int) -> CollaborationEdge:
    ring_seed = seed_from_text(f"{current.id}:{following.id}:ring:{module_seed}")
    return CollaborationEdge(
        source=current.id,
        target=following.id,
        spof_score=clamp(RING_SPOF_BASE + noise(ring_seed + 19) * RING_SPOF_SPAN, 0.0, 1.0),
        collaboration_strength=clamp(
            RING_STRENGTH_BASE + noise(ring_seed + 47) * RING_STRENGTH_SPAN,
            STRENGTH_MIN,
            STRENGTH_MAX,
        ),
    )


def _pair_edge(
    first: ParticipantNode,
    second: ParticipantNode,
    module_seed: int,
    preset: RangeConfig,
) -> Optional[CollaborationEdge]:
    pair_seed = seed_from_text(f"{first.id}:{second.id}:{module_seed}")
    affinity = noise(pair_seed + 31)
    if affinity < preset.affinity_cutoff:
        return None

    mean_doa = (first.doa_normalized + second.doa_normalized) / 2
    return CollaborationEdge(
        source=first.id,
        target=second.id,
        spof_score=clamp(mean_doa + (affinity - 0.5) * PAIR_AFFINITY_WEIGHT, 0.0, 1.0),
        collaboration_strength=clamp(
            STRENGTH_MIN + noise(pair_seed + 67) * (STRENGTH_MAX - STRENGTH_MIN),
            STRENGTH_MIN,
            STRENGTH_MAX,
        ),
    )


def generate_collaboration_module(
    context_id: str,
    names: Sequence[str],
    context_type: str = "team",
    time_range: Optional[str] = None,
    config: CollabAtlasConfig = DEFAULT_CONFIG,
) -> Optional[CollaborationModule]:
    """
    Generate the deterministic collaboration graph for a team or repository.

    Args:
        context_id:   Team or repository identifier; seeds the whole graph.
        names:        Participant display names, in display order. Names that
                      slug to an id already seen are dropped (first wins).
        context_type: 'team' or 'repo'. Anything else is named as a repository.
        time_range:   '1m' | '3m' | '1y' | 'max'. None → config.default_time_range.
        config:       CollabAtlasConfig instance.

    Returns:
        CollaborationModule, or None when names is empty (no graph to draw).

    Notes:
        - Node order follows the (deduplicated) input order; the ring follows
          the same order, so reordering names changes the backbone.
        - A single participant yields one node and no edges. Two participants
          share one backbone edge (the pair is never added twice).
        - Pure: no I/O, no shared state, no exceptions on well-typed input.
    """
    time_range = time_range or config.default_time_range
    participants = _distinct_participants(names)
    if not participants:
        logger.debug("No participants for context '%s' — no collaboration graph.", context_id)
        return None

    if context_type not in CONTEXT_TYPES:
        logger.warning(
            "Unknown context type '%s' for '%s' — naming it as a repository.",
            context_type,
            context_id,
        )

    preset = get_range_config(time_range, config)
    module_seed = module_seed_for(context_id, context_type, time_range, preset)

    nodes = [
        _participant_node(context_id, node_id, name, index, module_seed, preset)
        for index, (node_id, name) in enumerate(participants)
    ]

    edges: list[CollaborationEdge] = []
    existing_pairs: set[tuple[str, str]] = set()

    # ── Ring backbone ─────────────────────────────────────────────────────────
    for i, current in enumerate(nodes):
        following = nodes[(i + 1) % len(nodes)]
        if current.id == following.id:
            continue
        edge = _ring_edge(current, following, module_seed)
        if edge.pair_key in existing_pairs:
            continue
        existing_pairs.add(edge.pair_key)
        edges.append(edge)

    ring_count = len(edges)

    # ── Supplementary pairs ───────────────────────────────────────────────────
    for i in range(len(nodes)):
        for j in range(i + 1, len(nodes)):
            pair_key = tuple(sorted((nodes[i].id, nodes[j].id)))
            if pair_key in existing_pairs:
                continue
            edge = _pair_edge(nodes[i], nodes[j], module_seed, preset)
            if edge is None:
                continue
            existing_pairs.add(pair_key)
            edges.append(edge)

    module = CollaborationModule(
        id=f"{context_id}-collaboration",
        name="Team Collaboration" if context_type == "team" else "Repository Collaboration",
        context_type=context_type,
        time_range=time_range,
        nodes=tuple(nodes),
        edges=tuple(edges),
    )

    logger.info(
        "Generated collaboration graph '%s' (%s): %d nodes, %d edges (%d backbone).",
        module.id,
        time_range,
        len(nodes),
        len(edges),
        ring_count,
    )
    return module
