"""Shared graph fixtures."""

import pytest

from graph import Graph, demo_graph
from log import reset_logging


@pytest.fixture
def demo():
    """The eight-vertex demonstration graph (A … H)."""
    return demo_graph()


@pytest.fixture
def demo_with_island():
    """Demo graph plus an isolated vertex Z, so a run to Z explores everything."""
    g = demo_graph()
    g.add_vertex("Z")
    return g


@pytest.fixture
def disconnected():
    """A - B joined, C on its own."""
    return Graph.from_edges([("A", "B", 1)], vertices=["A", "B", "C"])


@pytest.fixture
def square():
    """
    S - A - T and S - B - T, every edge weight 1.
    Two equal-cost routes; tie-breaking decides which one is reported.
    """
    return Graph.from_edges([
        ("S", "A", 1),
        ("S", "B", 1),
        ("A", "T", 1),
        ("B", "T", 1),
    ])


@pytest.fixture
def clean_logging():
    reset_logging()
    yield
    reset_logging()
