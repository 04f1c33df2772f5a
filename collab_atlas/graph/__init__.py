"""
collab_atlas.graph — Collaboration graph construction and reduction.

Modules:
    models     — Frozen value objects for nodes, edges and graphs.
    generator  — Deterministic graph generation from a context and a roster.
    reducer    — SPOF threshold filtering + node degrees.
    builder    — NetworkX view of any collaboration graph.

Graphs are undirected: each unordered participant pair appears at most once.
"""
