"""
demo.py — The Demonstration Graph
=================================
The fixed eight-vertex graph the visualizer opens with, and the canvas
positions it is drawn at: a 2 x 4 grid with A C G H on the top row
and B F D E underneath.

Shortest A → E is A, B, F, H, E with cost 13.
"""

from typing import Dict, List, Tuple

from graph.graph import Graph


DEMO_EDGES: List[Tuple[str, str, int]] = [
    ("A", "B", 7),
    ("A", "C", 8),
    ("B", "F", 2),
    ("C", "F", 6),
    ("C", "G", 4),
    ("D", "F", 8),
    ("E", "H", 1),
    ("F", "G", 9),
    ("F", "H", 3),
]

DEMO_POSITIONS: Dict[str, Tuple[float, float]] = {
    "A": (100, 100),
    "B": (100, 300),
    "C": (300, 100),
    "D": (500, 300),
    "E": (700, 300),
    "F": (300, 300),
    "G": (500, 100),
    "H": (700, 100),
}


def demo_graph() -> Graph:
    """A fresh copy of the demonstration graph (vertices A…H in order)."""
    return Graph.from_edges(DEMO_EDGES, vertices=sorted(DEMO_POSITIONS))
