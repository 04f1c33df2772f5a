"""
collab_atlas/layout/simulation.py — Seeded 2D force simulation.

A synchronous, vectorised NumPy port of the velocity-Verlet scheme used by
d3-force, restricted to the four forces the collaboration panel uses:

    link     — spring toward a per-edge target distance
    charge   — many-body repulsion (exact pairwise; graphs are small)
    center   — translate the whole layout onto the canvas centre
    collide  — push apart overlapping node discs

Each tick:
    alpha += (alpha_target − alpha) × alpha_decay
    apply link, charge, center, collide (in that order)
    velocity *= (1 − velocity_decay);  position += velocity

The only randomness is the sub-pixel jiggle used to separate coincident
particles. It comes from a numpy Generator seeded by the caller, so identical
inputs give identical layouts.
"""

import logging

import numpy as np

from collab_atlas.config import ForceSettings

logger = logging.getLogger(__name__)

_JIGGLE_SCALE = 1e-6


class ForceSimulation:
    """
    Fixed-step force simulation over n particles.

    Args:
        positions:   (n, 2) array-like of initial positions (px).
        links:       (m, 2) array-like of particle index pairs.
        distances:   (m,) target length per link (px).
        strengths:   (m,) spring strength per link.
        radii:       (n,) collision radius per particle (px).
        charge:      Many-body strength (negative = repulsion).
        center:      (cx, cy) the layout is translated onto.
        settings:    ForceSettings for the strategy being run.
        seed:        Seed for the jiggle generator.
    """

    def __init__(
        self,
        positions,
        links,
        distances,
        strengths,
        radii,
        charge: float,
        center: tuple[float, float],
        settings: ForceSettings,
        seed: int = 0,
    ):
        self.positions = np.array(positions, dtype=float).reshape(-1, 2)
        self.velocities = np.zeros_like(self.positions)
        self.radii = np.asarray(radii, dtype=float)
        self.charge = float(charge)
        self.center = np.asarray(center, dtype=float)
        self.settings = settings
        self.rng = np.random.default_rng(seed)

        link_array = np.asarray(links, dtype=int).reshape(-1, 2)
        self._sources = link_array[:, 0]
        self._targets = link_array[:, 1]
        self._distances = np.asarray(distances, dtype=float)
        self._strengths = np.asarray(strengths, dtype=float)

        # Each endpoint absorbs the correction in inverse proportion to its
        # link count, so hubs move less than leaves.
        n = len(self.positions)
        counts = np.bincount(link_array.ravel(), minlength=n).astype(float)
        if len(link_array):
            src_counts = counts[self._sources]
            self._bias = src_counts / (src_counts + counts[self._targets])
        else:
            self._bias = np.zeros(0)

        self.alpha = 1.0
        self.alpha_target = 0.0
        self.alpha_decay = 1.0 - settings.alpha_min ** (1.0 / 300)
        self.ticks_run = 0

    @property
    def size(self) -> int:
        return len(self.positions)

    def _jiggle(self, shape) -> np.ndarray:
        return (self.rng.random(shape) - 0.5) * _JIGGLE_SCALE

    # ── Forces ────────────────────────────────────────────────────────────────

    def _apply_links(self) -> None:
        if not len(self._sources):
            return
        src, tgt = self._sources, self._targets
        delta = (self.positions[tgt] + self.velocities[tgt]) - (self.positions[src] + self.velocities[src])
        delta = np.where(delta == 0, self._jiggle(delta.shape), delta)
        length = np.hypot(delta[:, 0], delta[:, 1])
        scale = (length - self._distances) / length * self.alpha * self._strengths
        delta = delta * scale[:, None]
        np.add.at(self.velocities, tgt, -delta * self._bias[:, None])
        np.add.at(self.velocities, src, delta * (1 - self._bias)[:, None])

    def _apply_charge(self) -> None:
        n = self.size
        if n < 2 or self.charge == 0:
            return
        # delta[i, j] points from particle i to particle j.
        delta = self.positions[None, :, :] - self.positions[:, None, :]
        off_diagonal = ~np.eye(n, dtype=bool)
        coincident = np.all(delta == 0, axis=2) & off_diagonal
        if coincident.any():
            delta = np.where(coincident[:, :, None], self._jiggle(delta.shape), delta)
        dist2 = np.einsum("ijk,ijk->ij", delta, delta)
        # Soften below 1 px as d3 does (distanceMin = 1).
        dist2 = np.where(dist2 < 1.0, np.sqrt(dist2), dist2)
        dist2[~off_diagonal] = np.inf
        weight = self.charge * self.alpha / dist2
        self.velocities += np.einsum("ij,ijk->ik", weight, delta)

    def _apply_center(self) -> None:
        if not self.size:
            return
        shift = (self.positions.mean(axis=0) - self.center) * self.settings.center_strength
        self.positions -= shift

    def _apply_collisions(self) -> None:
        n = self.size
        if n < 2:
            return
        radii_sq = self.radii ** 2
        upper = np.triu(np.ones((n, n), dtype=bool), k=1)
        for _ in range(self.settings.collide_iterations):
            predicted = self.positions + self.velocities
            # delta[i, j] points from particle j to particle i.
            delta = predicted[:, None, :] - predicted[None, :, :]
            dist2 = np.einsum("ijk,ijk->ij", delta, delta)
            reach = self.radii[:, None] + self.radii[None, :]
            rows, cols = np.nonzero(upper & (dist2 < reach ** 2))
            if not len(rows):
                continue

            pair_delta = delta[rows, cols]
            pair_delta = np.where(pair_delta == 0, self._jiggle(pair_delta.shape), pair_delta)
            length = np.hypot(pair_delta[:, 0], pair_delta[:, 1])
            push = (reach[rows, cols] - length) / length * self.settings.collide_strength
            pair_delta = pair_delta * push[:, None]

            # The smaller disc moves further.
            share = radii_sq[cols] / (radii_sq[rows] + radii_sq[cols])
            np.add.at(self.velocities, rows, pair_delta * share[:, None])
            np.add.at(self.velocities, cols, -pair_delta * (1 - share)[:, None])

    # ── Stepping ──────────────────────────────────────────────────────────────

    def tick(self) -> None:
        self.alpha += (self.alpha_target - self.alpha) * self.alpha_decay
        self._apply_links()
        self._apply_charge()
        self._apply_center()
        self._apply_collisions()
        self.velocities *= 1.0 - self.settings.velocity_decay
        self.positions += self.velocities
        self.ticks_run += 1

    def run(self, ticks: int) -> np.ndarray:
        """Run `ticks` steps synchronously and return the final positions."""
        for _ in range(ticks):
            self.tick()
        logger.debug(
            "Force simulation finished: %d particles, %d ticks, alpha=%.4f.",
            self.size,
            self.ticks_run,
            self.alpha,
        )
        return self.positions.copy()
