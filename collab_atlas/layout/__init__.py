"""
collab_atlas.layout — 2D positioning of reduced collaboration graphs.

Modules:
    simulation — Seeded NumPy force simulation (link, charge, center, collide).
    engine     — Shell / free / circular strategies + canvas clamping.

All force constants live in collab_atlas.config.FORCE_SETTINGS.
"""
