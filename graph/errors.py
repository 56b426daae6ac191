"""
errors.py — Graph Construction Errors
======================================
Every error the graph layer can raise.  All of them derive from
GraphError (itself a ValueError) so callers can catch the whole family
in one place — the web layer turns them into HTTP 400s.

    GraphError
     ├── UnknownVertex        – identifier not registered
     ├── InvalidWeight        – negative / non-finite / non-numeric weight
     ├── DuplicateEdge        – the pair is already joined
     ├── DuplicateVertex      – re-registration in strict mode
     ├── SelfLoop             – edge from a vertex to itself
     └── AdjacencyParseError  – malformed adjacency-list text
"""

from typing import Any, Hashable


class GraphError(ValueError):
    """Base class for graph construction errors."""


class UnknownVertex(GraphError, LookupError):
    def __init__(self, vertex: Hashable):
        self.vertex = vertex
        super().__init__(f"Unknown vertex: {vertex!r}")


class InvalidWeight(GraphError):
    def __init__(self, weight: Any):
        self.weight = weight
        super().__init__(
            f"Invalid edge weight {weight!r}: must be a finite, non-negative number"
        )


class DuplicateEdge(GraphError):
    def __init__(self, a: Hashable, b: Hashable):
        self.a = a
        self.b = b
        super().__init__(f"Edge {a!r} ↔ {b!r} already exists")


class DuplicateVertex(GraphError):
    def __init__(self, vertex: Hashable):
        self.vertex = vertex
        super().__init__(f"Vertex {vertex!r} already exists")


class SelfLoop(GraphError):
    def __init__(self, vertex: Hashable):
        self.vertex = vertex
        super().__init__(f"Self-loop on {vertex!r} is not allowed")


class AdjacencyParseError(GraphError):
    def __init__(self, line_no: int, line: str, reason: str):
        self.line_no = line_no
        self.line = line
        super().__init__(f"Line {line_no}: {reason}: {line!r}")
