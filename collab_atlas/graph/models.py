"""
collab_atlas/graph/models.py — Value objects for collaboration graphs.

Every stage of the pipeline returns one of these frozen dataclasses:

    CollaborationModule  — raw generated graph (Graph Generator)
    ReducedGraph         — thresholded graph with degrees (Graph Reducer)
    Insight              — one templated sentence (Insight Extractor)
    LaidOutGraph         — reduced graph with pixel positions (Layout Engine)

Sequences are tuples so nothing downstream can mutate a graph it was handed.
to_dict() returns plain JSON-ready data for snapshot tests and the CLI.
"""

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class ParticipantNode:
    """
    One participant in a collaboration graph.

    Fields:
        id:              Slug of the display name, unique per graph.
        label:           Display name as supplied.
        doa_normalized:  Synthetic degree of authorship in [0.05, 1.0].
    """

    id: str
    label: str
    doa_normalized: float


@dataclass(frozen=True)
class CollaborationEdge:
    """
    Undirected collaboration link between two participants.

    Fields:
        source, target:          Participant ids (unordered pair, never equal).
        spof_score:              Single-point-of-failure risk in [0, 1].
        collaboration_strength:  Interaction intensity in [0.15, 1].
    """

    source: str
    target: str
    spof_score: float
    collaboration_strength: float

    @property
    def pair_key(self) -> tuple[str, str]:
        """Canonical (sorted) id pair used for uniqueness checks."""
        return (self.source, self.target) if self.source <= self.target else (self.target, self.source)


@dataclass(frozen=True)
class CollaborationModule:
    """
    Raw generated collaboration graph for one team or repository.

    nodes preserve the input participant order; edges hold the ring backbone
    first, then the supplementary pairs in (i, j) order.
    """

    id: str
    name: str
    context_type: str
    time_range: str
    nodes: tuple[ParticipantNode, ...]
    edges: tuple[CollaborationEdge, ...]

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class GraphNode:
    """ParticipantNode annotated with its degree in a reduced graph."""

    id: str
    label: str
    doa_normalized: float
    degree: int


@dataclass(frozen=True)
class ReducedGraph:
    """
    Thresholded collaboration graph.

    Fields:
        nodes:           Surviving nodes with degree (isolates optionally removed).
        edges:           Edges with spof_score >= threshold, endpoints in nodes.
        total_nodes:     Node count before isolate removal ("N of M visible").
        isolated_count:  Nodes left with degree 0 after thresholding.
        threshold:       The threshold that produced this graph.
    """

    nodes: tuple[GraphNode, ...] = ()
    edges: tuple[CollaborationEdge, ...] = ()
    total_nodes: int = 0
    isolated_count: int = 0
    threshold: float = 0.0

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class Insight:
    """One templated, human-readable observation about a reduced graph."""

    id: str
    text: str


@dataclass(frozen=True)
class PositionedNode:
    """GraphNode with pixel coordinates and the visual radius used to place it."""

    id: str
    label: str
    doa_normalized: float
    degree: int
    x: float
    y: float
    radius: float


@dataclass(frozen=True)
class LaidOutGraph:
    """
    Reduced graph with every node positioned inside a width × height canvas.

    Edges keep their id references; renderers look positions up by node id.
    """

    nodes: tuple[PositionedNode, ...] = ()
    edges: tuple[CollaborationEdge, ...] = ()
    total_nodes: int = 0
    isolated_count: int = 0
    width: float = 0.0
    height: float = 0.0
    strategy: str = "shell"

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def positions(self) -> dict[str, tuple[float, float]]:
        """Map node id → (x, y)."""
        return {node.id: (node.x, node.y) for node in self.nodes}

    def to_dict(self) -> dict:
        return asdict(self)
