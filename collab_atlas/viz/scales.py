"""
collab_atlas/viz/scales.py — Visual encoding conventions for the collaboration graph.

Renderers and the legend read the same conventions from here:

    - Node colour:  doa_normalized on the Viridis scale over [0.05, 1.0]
    - Node radius:  9 + min(7, 1.2 × degree) px (shared with the layout engine)
    - Edge width:   collaboration_strength mapped linearly [0.35, 1] → [1.4, 5.6] px, clamped

Colours are sampled from plotly's 10-stop Viridis colorscale. The browser
panel interpolates d3's 256-stop Viridis ramp over the same domain; the two
share their end colours (#440154 at 0.05, #fde725 at 1.0) and differ by a
few RGB units in between.
"""

import logging

from plotly.colors import sample_colorscale

from collab_atlas.config import DOA_MAX, DOA_MIN
from collab_atlas.layout.engine import node_radius
from collab_atlas.noise import clamp

logger = logging.getLogger(__name__)

DOA_COLORSCALE = "Viridis"
DOA_COLOR_DOMAIN: tuple[float, float] = (DOA_MIN, DOA_MAX)

EDGE_WIDTH_DOMAIN: tuple[float, float] = (0.35, 1.0)
EDGE_WIDTH_RANGE: tuple[float, float] = (1.4, 5.6)

# Gradient stops of the legend bar, bottom to top.
LEGEND_GRADIENT_STOPS: tuple[tuple[float, str], ...] = (
    (0.0, "#440154"),
    (0.2, "#414487"),
    (0.4, "#2a788e"),
    (0.6, "#22a884"),
    (0.8, "#7ad151"),
    (1.0, "#fde725"),
)
LEGEND_TICKS: tuple[float, ...] = (1.0, 0.9, 0.8, 0.7, 0.6, 0.5, 0.4, 0.3, 0.2, 0.1)

__all__ = [
    "doa_color",
    "doa_colors",
    "edge_width",
    "node_radius",
    "legend_spec",
]


def _doa_fraction(doa: float) -> float:
    low, high = DOA_COLOR_DOMAIN
    return clamp((doa - low) / (high - low), 0.0, 1.0)


def doa_colors(values: list[float]) -> list[str]:
    """Viridis 'rgb(r, g, b)' strings for a batch of DOA values."""
    if not values:
        return []
    return sample_colorscale(DOA_COLORSCALE, [_doa_fraction(v) for v in values])


def doa_color(doa: float) -> str:
    """Viridis 'rgb(r, g, b)' string for one DOA value (clamped to the domain)."""
    return doa_colors([doa])[0]


def edge_width(collaboration_strength: float) -> float:
    """Stroke width in px, linear over EDGE_WIDTH_DOMAIN and clamped to EDGE_WIDTH_RANGE."""
    d0, d1 = EDGE_WIDTH_DOMAIN
    r0, r1 = EDGE_WIDTH_RANGE
    t = clamp((collaboration_strength - d0) / (d1 - d0), 0.0, 1.0)
    return r0 + t * (r1 - r0)


def legend_spec(threshold: float) -> dict:
    """
    Plain-data description of the collaboration legend.

    Returns:
        {
            'title':     'Total DOA (normalized)',
            'gradient':  [(offset, hex colour), ...] bottom → top,
            'ticks':     [1.0, 0.9, ..., 0.1] top → bottom,
            'threshold': threshold (the SPOF cut currently applied),
            'edge_width_range': (min px, max px),
        }
    """
    return {
        "title": "Total DOA (normalized)",
        "gradient": list(LEGEND_GRADIENT_STOPS),
        "ticks": list(LEGEND_TICKS),
        "threshold": threshold,
        "edge_width_range": EDGE_WIDTH_RANGE,
    }
