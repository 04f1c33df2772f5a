"""
collab_atlas — Deterministic collaboration networks for the engineering-analytics dashboard.

Powers the team and repository "Collaboration" panels: who works with whom,
how concentrated ownership is, and which collaborations are single points of
failure.

Stages:
- Graph generation      (collab_atlas.graph.generator)
- SPOF threshold reduce (collab_atlas.graph.reducer)
- Insights + bridges    (collab_atlas.metrics.insights, collab_atlas.metrics.bridges)
- Force-directed layout (collab_atlas.layout.engine)

Everything is a pure function of its inputs: the same team, names and time
range always produce the same graph, the same text and the same picture.
"""

__version__ = "0.1.0"
