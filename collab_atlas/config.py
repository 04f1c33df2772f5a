"""
collab_atlas/config.py — All tunable parameters for Collab Atlas.

No preset or force constant should ever be hardcoded in a generator or
layout module. The time-range presets, simulation forces and canvas defaults
live here so that calibration changes are a single-file diff, and so that
tests can assert on them directly.
"""

from dataclasses import dataclass


# ── Time ranges ──────────────────────────────────────────────────────────────

TIME_RANGES: tuple[str, ...] = ("1m", "3m", "1y", "max")
CONTEXT_TYPES: tuple[str, ...] = ("team", "repo")


@dataclass(frozen=True)
class RangeConfig:
    """
    Generation preset for one time-range window.

    Fields:
        seed_offset:     Added to the module seed so each window draws a
                         different (but stable) graph for the same context.
        affinity_cutoff: Pairs whose affinity noise falls below this value
                         get no supplementary edge. Higher = sparser graph.
        doa_volatility:  Amplitude of the range shift applied to each
                         participant's DOA. Higher = noisier ownership.
    """

    seed_offset: int
    affinity_cutoff: float
    doa_volatility: float


# Short windows read as sparser and noisier than full history.
RANGE_CONFIGS: dict[str, RangeConfig] = {
    "1m": RangeConfig(seed_offset=101, affinity_cutoff=0.58, doa_volatility=0.18),
    "3m": RangeConfig(seed_offset=211, affinity_cutoff=0.50, doa_volatility=0.12),
    "1y": RangeConfig(seed_offset=307, affinity_cutoff=0.44, doa_volatility=0.08),
    "max": RangeConfig(seed_offset=401, affinity_cutoff=0.40, doa_volatility=0.04),
}


# ── Generation constants ─────────────────────────────────────────────────────

DOA_MIN: float = 0.05
DOA_MAX: float = 1.0
STRENGTH_MIN: float = 0.15
STRENGTH_MAX: float = 1.0

# Minimum backbone spof_score. Any threshold <= this keeps the full ring.
RING_SPOF_BASE: float = 0.70
RING_SPOF_SPAN: float = 0.25
RING_STRENGTH_BASE: float = 0.60
RING_STRENGTH_SPAN: float = 0.40
PAIR_AFFINITY_WEIGHT: float = 0.35


# ── Layout ───────────────────────────────────────────────────────────────────

LAYOUT_STRATEGIES: tuple[str, ...] = ("shell", "free", "circular")

NODE_RADIUS_BASE: float = 9.0
NODE_RADIUS_PER_LINK: float = 1.2
NODE_RADIUS_MAX_BONUS: float = 7.0
# Visual radius = 9 + min(7, 1.2 × degree). Used for collision and clamping.


@dataclass(frozen=True)
class ForceSettings:
    """
    Force simulation constants for one layout strategy.

    Link distance for an edge is link_distance_base − spof_score × link_distance_span,
    so stronger SPOF pairs sit closer together (65–100 px with the defaults).
    Link strength is link_strength × collaboration_strength.
    Charge is interpolated between charge_sparse (density 0) and
    charge_dense (density 1) of the graph being laid out.
    """

    ticks: int
    link_distance_base: float = 100.0
    link_distance_span: float = 35.0
    link_strength: float = 0.36
    charge_sparse: float = -125.0
    charge_dense: float = -800.0
    collide_margin: float = 4.0
    collide_iterations: int = 2
    collide_strength: float = 1.0
    center_strength: float = 1.0
    velocity_decay: float = 0.4
    alpha_min: float = 0.001


FORCE_SETTINGS: dict[str, ForceSettings] = {
    # Shell positions are already legible; a short, gentle relaxation keeps
    # the bands while resolving overlaps.
    "shell": ForceSettings(
        ticks=160,
        link_strength=0.22,
        charge_sparse=-125.0,
        charge_dense=-500.0,
    ),
    # Free layout starts every particle at the canvas centre and lets the
    # simulation find the structure on its own.
    "free": ForceSettings(
        ticks=300,
        link_strength=0.36,
        charge_sparse=-190.0,
        charge_dense=-800.0,
    ),
    # Circular placement is final; no simulation ticks.
    "circular": ForceSettings(ticks=0),
}


@dataclass(frozen=True)
class CollabAtlasConfig:
    """
    Immutable configuration for the Collab Atlas pipeline.

    All fields have documented defaults matching the dashboard's collaboration
    panel. Override by constructing a new CollabAtlasConfig with the desired
    values.
    """

    # ── Generation ────────────────────────────────────────────────────────────
    default_time_range: str = "max"
    # Also the fallback preset for unknown time-range keys.

    # ── Reduction ─────────────────────────────────────────────────────────────
    default_threshold: float = 0.7
    # Matches RING_SPOF_BASE: the default view always shows the full backbone.

    remove_isolated: bool = True
    # Drop degree-0 participants from the reduced graph.

    # ── Layout ────────────────────────────────────────────────────────────────
    default_layout: str = "shell"

    canvas_width: int = 748
    canvas_height: int = 476
    # Panel is 820 × 540 with 72 / 64 px of chrome removed.

    shell_inner_fraction: float = 0.20
    shell_middle_fraction: float = 0.35
    # Highest-degree 20% go to the inner band, the next 35% to the middle
    # band, everyone else to the outer band.

    shell_radius_fractions: tuple[float, float, float] = (0.30, 0.62, 0.92)
    # Band radii as fractions of half the smaller canvas side.

    circular_min_radius: float = 90.0
    circular_radius_fraction: float = 0.37


# Singleton default — import this everywhere instead of constructing anew.
DEFAULT_CONFIG = CollabAtlasConfig()
