"""
collab_atlas.metrics — Statistics over reduced collaboration graphs.

Modules:
    insights  — Templated panel insights (top DOA, hub, density).
    bridges   — Bridge collaborations and connectivity (networkx).
"""
