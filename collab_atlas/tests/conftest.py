"""
collab_atlas/tests/conftest.py — Shared pytest fixtures for the Collab Atlas test suite.

Fixtures:
    small_team       — Three-person roster for context 'team-42'.
    large_roster     — 24 participant names (enough for supplementary edges).
    team_module      — Generated module for small_team (max range).
    large_module     — Generated module for large_roster (max range).
    reduced_graph    — large_module reduced at the default threshold.
    hand_module      — Hand-built module with known scores, for exact assertions.
"""

import pytest

from collab_atlas.graph.generator import generate_collaboration_module
from collab_atlas.graph.models import CollaborationEdge, CollaborationModule, ParticipantNode
from collab_atlas.graph.reducer import reduce_collaboration_graph


# ── Pytest configuration hooks ────────────────────────────────────────────────

def pytest_configure(config):
    """Register custom markers and add --run-integration CLI option support."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests that run the installed CLI in a subprocess (deselected by default, "
        "pass --run-integration or -m integration to enable)",
    )


def pytest_addoption(parser):
    """Add --run-integration CLI flag to enable integration tests."""
    parser.addoption(
        "--run-integration",
        action="store_true",
        default=False,
        help="Run integration tests that spawn the CLI as a subprocess.",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --run-integration is passed or -m integration is used."""
    markexpr = config.getoption("-m", default="")
    if "integration" in markexpr:
        return

    if config.getoption("--run-integration"):
        return

    skip_integration = pytest.mark.skip(
        reason="Integration test -- pass --run-integration or -m integration to run"
    )
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_integration)


# ── Rosters ───────────────────────────────────────────────────────────────────

SMALL_TEAM = ["Ada", "Grace", "Linus"]

LARGE_ROSTER = [
    "Ada Lovelace", "Grace Hopper", "Linus Torvalds", "Barbara Liskov",
    "Ken Thompson", "Margaret Hamilton", "Dennis Ritchie", "Frances Allen",
    "Guido van Rossum", "Radia Perlman", "Donald Knuth", "Shafi Goldwasser",
    "Edsger Dijkstra", "Sophie Wilson", "Alan Kay", "Adele Goldberg",
    "Niklaus Wirth", "Jean Sammet", "Tony Hoare", "Karen Sparck Jones",
    "John McCarthy", "Lynn Conway", "Leslie Lamport", "Anita Borg",
]


@pytest.fixture(scope="session")
def small_team():
    return list(SMALL_TEAM)


@pytest.fixture(scope="session")
def large_roster():
    return list(LARGE_ROSTER)


@pytest.fixture(scope="session")
def team_module():
    return generate_collaboration_module("team-42", SMALL_TEAM, "team", "max")


@pytest.fixture(scope="session")
def large_module():
    return generate_collaboration_module("repo-7", LARGE_ROSTER, "repo", "max")


@pytest.fixture(scope="session")
def reduced_graph(large_module):
    return reduce_collaboration_graph(large_module, 0.7)


# ── Hand-built graphs ─────────────────────────────────────────────────────────

def _edge(source, target, spof, strength=0.5):
    return CollaborationEdge(source, target, spof, strength)


@pytest.fixture
def hand_module():
    """
    Four participants with fixed scores:

        a ─0.80─ b ─0.75─ c      a ─0.20─ c      d has no links
    """
    return CollaborationModule(
        id="hand-collaboration",
        name="Team Collaboration",
        context_type="team",
        time_range="max",
        nodes=(
            ParticipantNode("a", "Alice", 0.9),
            ParticipantNode("b", "Bob", 0.5),
            ParticipantNode("c", "Carol", 0.3),
            ParticipantNode("d", "Dan", 0.6),
        ),
        edges=(
            _edge("a", "b", 0.80, 0.9),
            _edge("b", "c", 0.75, 0.4),
            _edge("a", "c", 0.20, 0.2),
        ),
    )
