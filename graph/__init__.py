"""
graph/
-----
Core data layer.  Public API:

    from graph import Graph, Edge
    from graph import GraphError, UnknownVertex, InvalidWeight, …
    from graph import demo_graph
"""

from graph.edge   import Edge
from graph.errors import (
    GraphError,
    UnknownVertex,
    InvalidWeight,
    DuplicateEdge,
    DuplicateVertex,
    SelfLoop,
    AdjacencyParseError,
)
from graph.graph  import Graph
from graph.demo   import demo_graph, DEMO_EDGES, DEMO_POSITIONS

__all__ = [
    "Edge",
    "Graph",
    "GraphError",
    "UnknownVertex",
    "InvalidWeight",
    "DuplicateEdge",
    "DuplicateVertex",
    "SelfLoop",
    "AdjacencyParseError",
    "demo_graph",
    "DEMO_EDGES",
    "DEMO_POSITIONS",
]
