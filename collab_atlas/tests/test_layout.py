"""
collab_atlas/tests/test_layout.py — Tests for the layout engine and force simulation.

Tests verify:
- Every node ends inside [r, width − r] × [r, height − r] for every strategy.
- Identical inputs give identical layouts.
- Node order, ids and edges are preserved; empty graphs stay empty.
- Shell placement puts the highest-degree node on the inner band.
- Circular placement is an even ring around the canvas centre.
- Unknown strategies fall back to a free layout.
- ForceSimulation: springs reach their length, charge repels, collisions separate.
"""

import logging
import math
from dataclasses import replace

import numpy as np
import pytest

from collab_atlas.config import DEFAULT_CONFIG, FORCE_SETTINGS, LAYOUT_STRATEGIES
from collab_atlas.graph.models import ReducedGraph
from collab_atlas.graph.reducer import reduce_collaboration_graph
from collab_atlas.layout.engine import (
    circular_positions,
    layout_graph,
    node_radius,
    shell_positions,
    simulation_charge,
)
from collab_atlas.layout.simulation import ForceSimulation


# ── Helpers ───────────────────────────────────────────────────────────────────

def assert_inside(laid_out):
    for node in laid_out.nodes:
        assert node.radius <= node.x <= laid_out.width - node.radius
        assert node.radius <= node.y <= laid_out.height - node.radius


def spring_settings(**overrides):
    values = dict(charge_sparse=0.0, charge_dense=0.0, link_strength=1.0, collide_iterations=0)
    values.update(overrides)
    return replace(FORCE_SETTINGS["free"], **values)


# ── Containment ───────────────────────────────────────────────────────────────

@pytest.mark.parametrize("strategy", LAYOUT_STRATEGIES)
@pytest.mark.parametrize("threshold", [0.0, 0.7, 0.9])
def test_nodes_inside_canvas(large_module, strategy, threshold):
    graph = reduce_collaboration_graph(large_module, threshold)
    laid_out = layout_graph(graph, 748, 476, strategy)
    assert_inside(laid_out)


@pytest.mark.parametrize("strategy", LAYOUT_STRATEGIES)
def test_tiny_canvas_still_contains_nodes(reduced_graph, strategy):
    laid_out = layout_graph(reduced_graph, 120, 90, strategy)
    assert_inside(laid_out)


# ── Determinism and shape ─────────────────────────────────────────────────────

@pytest.mark.parametrize("strategy", LAYOUT_STRATEGIES)
def test_layout_is_deterministic(reduced_graph, strategy):
    first = layout_graph(reduced_graph, 748, 476, strategy)
    second = layout_graph(reduced_graph, 748, 476, strategy)
    assert first.to_dict() == second.to_dict()


def test_node_order_and_edges_preserved(reduced_graph):
    laid_out = layout_graph(reduced_graph)
    assert [n.id for n in laid_out.nodes] == [n.id for n in reduced_graph.nodes]
    assert [n.degree for n in laid_out.nodes] == [n.degree for n in reduced_graph.nodes]
    assert laid_out.edges == reduced_graph.edges
    assert laid_out.total_nodes == reduced_graph.total_nodes
    assert laid_out.isolated_count == reduced_graph.isolated_count


def test_defaults_come_from_config(reduced_graph):
    laid_out = layout_graph(reduced_graph)
    assert laid_out.width == DEFAULT_CONFIG.canvas_width
    assert laid_out.height == DEFAULT_CONFIG.canvas_height
    assert laid_out.strategy == "shell"


def test_radius_follows_degree(reduced_graph):
    laid_out = layout_graph(reduced_graph)
    for node in laid_out.nodes:
        assert node.radius == node_radius(node.degree)


def test_positions_map(reduced_graph):
    laid_out = layout_graph(reduced_graph)
    positions = laid_out.positions()
    assert set(positions) == {n.id for n in laid_out.nodes}
    first = laid_out.nodes[0]
    assert positions[first.id] == (first.x, first.y)


def test_free_layout_separates_nodes(reduced_graph):
    laid_out = layout_graph(reduced_graph, 748, 476, "free")
    points = np.array([(n.x, n.y) for n in laid_out.nodes])
    gaps = np.hypot(*(points[:, None, :] - points[None, :, :]).transpose(2, 0, 1))
    np.fill_diagonal(gaps, np.inf)
    assert gaps.min() > 1.0


# ── Empty input ───────────────────────────────────────────────────────────────

def test_none_graph_gives_empty_layout():
    laid_out = layout_graph(None, 400, 300)
    assert laid_out.is_empty
    assert laid_out.edges == ()
    assert (laid_out.width, laid_out.height) == (400.0, 300.0)


def test_empty_graph_keeps_counts(team_module):
    graph = reduce_collaboration_graph(team_module, 1.01)
    laid_out = layout_graph(graph)
    assert laid_out.is_empty
    assert laid_out.total_nodes == 3
    assert laid_out.isolated_count == 3


# ── Strategies ────────────────────────────────────────────────────────────────

def test_unknown_strategy_falls_back_to_free(reduced_graph, caplog):
    with caplog.at_level(logging.WARNING):
        laid_out = layout_graph(reduced_graph, 748, 476, "spiral")
    assert laid_out.strategy == "free"
    assert "spiral" in caplog.text
    assert laid_out.to_dict() == layout_graph(reduced_graph, 748, 476, "free").to_dict()


def test_shell_puts_top_hub_on_inner_band(reduced_graph):
    width, height = 800.0, 600.0
    positions = shell_positions(reduced_graph, width, height)
    hub_index = max(range(len(reduced_graph.nodes)), key=lambda i: reduced_graph.nodes[i].degree)
    x, y = positions[hub_index]
    inner_radius = DEFAULT_CONFIG.shell_radius_fractions[0] * min(width, height) / 2
    assert math.hypot(x - width / 2, y - height / 2) == pytest.approx(inner_radius)


def test_shell_bands_within_canvas(reduced_graph):
    width, height = 800.0, 600.0
    outer_radius = DEFAULT_CONFIG.shell_radius_fractions[2] * min(width, height) / 2
    for x, y in shell_positions(reduced_graph, width, height):
        assert math.hypot(x - width / 2, y - height / 2) <= outer_radius + 1e-9


def test_circular_is_even_ring(reduced_graph):
    width, height = 800.0, 600.0
    positions = circular_positions(reduced_graph, width, height)
    radius = max(90, 0.37 * 600)
    for x, y in positions:
        assert math.hypot(x - 400, y - 300) == pytest.approx(radius)
    assert positions[0] == pytest.approx((400 + radius, 300))


def test_circular_layout_runs_no_simulation(reduced_graph):
    laid_out = layout_graph(reduced_graph, 800, 600, "circular")
    expected = circular_positions(reduced_graph, 800, 600)
    for node, (x, y) in zip(laid_out.nodes, expected):
        assert (node.x, node.y) == pytest.approx((x, y))


def test_simulation_charge_bounds(reduced_graph):
    for strategy in ("shell", "free"):
        settings = FORCE_SETTINGS[strategy]
        charge = simulation_charge(reduced_graph, settings)
        assert settings.charge_dense <= charge <= settings.charge_sparse


def test_simulation_charge_sparse_graph():
    assert simulation_charge(ReducedGraph(), FORCE_SETTINGS["free"]) == FORCE_SETTINGS["free"].charge_sparse


def test_node_radius():
    assert node_radius(0) == 9
    assert node_radius(2) == pytest.approx(11.4)
    assert node_radius(10) == 16


# ── ForceSimulation ───────────────────────────────────────────────────────────

def test_spring_reaches_target_length():
    settings = spring_settings()
    sim = ForceSimulation(
        positions=[(100.0, 100.0), (110.0, 100.0)],
        links=[(0, 1)],
        distances=[50.0],
        strengths=[1.0],
        radii=[1.0, 1.0],
        charge=0.0,
        center=(105.0, 100.0),
        settings=settings,
    )
    final = sim.run(300)
    assert np.hypot(*(final[1] - final[0])) == pytest.approx(50.0, abs=2.0)
    assert final.mean(axis=0) == pytest.approx((105.0, 100.0), abs=1e-6)
    assert sim.ticks_run == 300


def test_charge_repels():
    settings = spring_settings()
    sim = ForceSimulation(
        positions=[(100.0, 100.0), (110.0, 100.0)],
        links=[],
        distances=[],
        strengths=[],
        radii=[1.0, 1.0],
        charge=-100.0,
        center=(105.0, 100.0),
        settings=settings,
    )
    final = sim.run(50)
    assert np.hypot(*(final[1] - final[0])) > 10.0


def test_collisions_separate_coincident_particles():
    settings = spring_settings(collide_iterations=2)
    sim = ForceSimulation(
        positions=[(50.0, 50.0), (50.0, 50.0)],
        links=[],
        distances=[],
        strengths=[],
        radii=[10.0, 10.0],
        charge=0.0,
        center=(50.0, 50.0),
        settings=settings,
        seed=7,
    )
    final = sim.run(50)
    assert np.hypot(*(final[1] - final[0])) > 15.0


def test_alpha_decays():
    sim = ForceSimulation([(0.0, 0.0)], [], [], [], [1.0], 0.0, (0.0, 0.0), FORCE_SETTINGS["free"])
    sim.run(300)
    assert sim.alpha == pytest.approx(FORCE_SETTINGS["free"].alpha_min, rel=1e-6)
