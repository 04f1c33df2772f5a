"""
collab_atlas.viz — Visual conventions shared with the dashboard renderers.

Modules:
    scales    — DOA colour (Viridis), edge width, node radius, legend data.
    tooltips  — Node and edge hover text.

Drawing itself happens in the browser; this package only produces data.
"""
