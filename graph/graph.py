"""
graph.py — Weighted Undirected Graph
=====================================
Single source of truth for the graph.  The shortest-path stepper and
the renderer both read from this object; neither ever writes to it.

Responsibilities:
  1. Registration of vertices & edges, with validation   (add_*)
  2. Adjacency queries                                   (neighbours_of, …)
  3. Import from adjacency-list text                     (text → graph)
  4. Serialisation round-trip                            (to_dict / from_dict)

Design decisions:
  - Vertices are bare hashable identifiers; there is no vertex object.
  - `_adj[vertex] → [(neighbour, weight)]` is maintained incrementally
    and is always symmetric: add_edge appends to BOTH endpoints.
  - `_edges[frozenset({a, b})] → Edge` gives O(1) duplicate detection
    and edge lookup regardless of endpoint order.
  - Insertion order is preserved everywhere (dicts / lists), which is
    what makes the stepper's tie-breaking reproducible.
"""

import math
import numbers
from typing import (
    Dict, FrozenSet, Hashable, Iterable, Iterator, List, Optional, Tuple
)

from graph.edge import Edge
from graph.errors import (
    AdjacencyParseError,
    DuplicateEdge,
    DuplicateVertex,
    InvalidWeight,
    SelfLoop,
    UnknownVertex,
)
from log import get_logger

logger = get_logger(__name__)


def _check_weight(weight) -> None:
    # bool is an Integral, but True/False are not costs
    if isinstance(weight, bool) or not isinstance(weight, numbers.Real):
        raise InvalidWeight(weight)
    if not math.isfinite(weight) or weight < 0:
        raise InvalidWeight(weight)


class Graph:
    """
    Attributes:
        _adj   : {vertex: [(neighbour, weight), …]}
        _edges : {frozenset({a, b}): Edge}
    """

    def __init__(self):
        self._adj:   Dict[Hashable, List[Tuple[Hashable, float]]] = {}
        self._edges: Dict[FrozenSet[Hashable], Edge]               = {}

    # ==================================================================
    # VERTICES
    # ==================================================================
    def add_vertex(self, vertex: Hashable, strict: bool = False) -> Hashable:
        """
        Register `vertex` with no neighbours.

        Re-registering is a no-op unless `strict` is set, in which case
        DuplicateVertex is raised.
        """
        if vertex in self._adj:
            if strict:
                raise DuplicateVertex(vertex)
            return vertex
        self._adj[vertex] = []
        return vertex

    def has_vertex(self, vertex: Hashable) -> bool:
        return vertex in self._adj

    def vertex_ids(self) -> Tuple[Hashable, ...]:
        """All registered identifiers, in registration order."""
        return tuple(self._adj)

    # ==================================================================
    # EDGES
    # ==================================================================
    def add_edge(self, a: Hashable, b: Hashable, weight: float) -> Edge:
        """
        Join `a` and `b` with an undirected edge of cost `weight`.

        Raises:
            SelfLoop        : a == b
            UnknownVertex   : either endpoint is not registered
            InvalidWeight   : weight is negative, non-finite or not a number
            DuplicateEdge   : the pair is already joined
        """
        if a == b:
            raise SelfLoop(a)
        for v in (a, b):
            if v not in self._adj:
                raise UnknownVertex(v)
        _check_weight(weight)

        key = frozenset((a, b))
        if key in self._edges:
            raise DuplicateEdge(a, b)

        edge = Edge(a, b, weight)
        self._edges[key] = edge
        self._adj[a].append((b, weight))
        self._adj[b].append((a, weight))
        return edge

    def get_edge_between(self, a: Hashable, b: Hashable) -> Optional[Edge]:
        return self._edges.get(frozenset((a, b)))

    def weight(self, a: Hashable, b: Hashable) -> float:
        """Weight of edge a ↔ b.  KeyError if the pair is not joined."""
        edge = self.get_edge_between(a, b)
        if edge is None:
            raise KeyError((a, b))
        return edge.weight

    @property
    def edges(self) -> List[Edge]:
        return list(self._edges.values())

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def neighbours_of(self, vertex: Hashable) -> Tuple[Tuple[Hashable, float], ...]:
        """Return ((neighbour, weight), …) in the order edges were added."""
        try:
            return tuple(self._adj[vertex])
        except KeyError:
            raise UnknownVertex(vertex) from None

    def degree(self, vertex: Hashable) -> int:
        return len(self.neighbours_of(vertex))

    # ==================================================================
    # CONSTRUCTION HELPERS
    # ==================================================================
    @classmethod
    def from_edges(
        cls,
        edges: Iterable[Tuple[Hashable, Hashable, float]],
        vertices: Iterable[Hashable] = (),
    ) -> "Graph":
        """
        Build a graph from (a, b, weight) triples.  Endpoints are
        registered on first sight; `vertices` lets isolated ones in too.
        """
        g = cls()
        for v in vertices:
            g.add_vertex(v)
        for a, b, w in edges:
            g.add_vertex(a)
            g.add_vertex(b)
            g.add_edge(a, b, w)
        return g

    # ---------- Import from Adjacency List (text) ----------
    @classmethod
    def from_adjacency_list(cls, text: str) -> "Graph":
        """
        Parse a simple text adjacency list.

        Supported formats (one vertex per line):
            A: B C D            → A connects to B, C, D  (weight 1)
            A: B(7) C(8)        → A–B weight 7, A–C weight 8
            A → B(7), C(8)      → alternate arrow syntax
            A -> B(7)           → ascii arrow
            # comment           → ignored

        Each undirected edge may be listed from one side or from both;
        listing it from both sides with different weights is an error.
        """
        g = cls()

        for line_no, raw in enumerate(text.splitlines(), start=1):
            line = raw.strip()
            if not line or line.startswith("#"):
                continue

            # split on ':' or '→' or '->'
            for sep in (":", "→", "->"):
                if sep in line:
                    src, rest = line.split(sep, 1)
                    break
            else:
                raise AdjacencyParseError(line_no, raw, "missing ':' or '->' separator")

            src = src.strip()
            if not src:
                raise AdjacencyParseError(line_no, raw, "missing source vertex")
            g.add_vertex(src)

            for token in rest.replace(",", " ").split():
                tgt, w = _parse_target(token, line_no, raw)
                g.add_vertex(tgt)
                existing = g.get_edge_between(src, tgt)
                if existing is not None and existing.weight == w:
                    logger.debug("Skipping mirrored edge %s ↔ %s on line %d", src, tgt, line_no)
                    continue
                g.add_edge(src, tgt, w)

        logger.info("Imported adjacency list: %r", g)
        return g

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "vertices": list(self._adj),
            "edges":    [e.to_dict() for e in self._edges.values()],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        g = cls()
        for v in data.get("vertices", []):
            g.add_vertex(v)
        for ed in data.get("edges", []):
            e = Edge.from_dict(ed)
            g.add_edge(e.source, e.target, e.weight)
        return g

    # ==================================================================
    # UTILITY
    # ==================================================================
    def vertex_count(self) -> int:
        return len(self._adj)

    def edge_count(self) -> int:
        return len(self._edges)

    def __contains__(self, vertex: Hashable) -> bool:
        return vertex in self._adj

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self._adj)

    def __len__(self) -> int:
        return len(self._adj)

    def __repr__(self) -> str:
        return f"Graph(vertices={self.vertex_count()}, edges={self.edge_count()})"


def _parse_target(token: str, line_no: int, raw: str) -> Tuple[str, float]:
    """"B(3)" → ("B", 3), "B" → ("B", 1)."""
    if "(" not in token:
        return token, 1
    if not token.endswith(")"):
        raise AdjacencyParseError(line_no, raw, f"unbalanced weight in {token!r}")
    tgt, w_str = token[:-1].split("(", 1)
    if not tgt:
        raise AdjacencyParseError(line_no, raw, f"missing target in {token!r}")
    try:
        w = float(w_str)
    except ValueError:
        raise AdjacencyParseError(line_no, raw, f"weight {w_str!r} is not a number") from None
    if w.is_integer():
        w = int(w)
    return tgt, w
