"""
edge.py — Weighted Undirected Edge
==================================
An immutable value connecting two vertices.

Design decisions:
  - `source` and `target` are vertex identifiers, NOT vertex objects.
    This keeps edges serialisable and free of circular references.
  - Edges are undirected: `source` is simply the endpoint given first
    to Graph.add_edge.  `key` is order-free so a ↔ b and b ↔ a collide.
  - No visual state lives here.  Presentation state belongs to the
    consumer's snapshots (engine/snapshot.py), never to the graph.
"""

from typing import Any, FrozenSet, Hashable, Optional


class Edge:
    """
    Attributes:
        source : First endpoint as registered.
        target : Second endpoint as registered.
        weight : Non-negative finite cost, identical in both directions.
    """

    __slots__ = ("source", "target", "weight")

    def __init__(self, source: Hashable, target: Hashable, weight: float):
        object.__setattr__(self, "source", source)
        object.__setattr__(self, "target", target)
        object.__setattr__(self, "weight", weight)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Edge is immutable (tried to set {name!r})")

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    @property
    def key(self) -> FrozenSet[Hashable]:
        """Order-free identity of the vertex pair."""
        return frozenset((self.source, self.target))

    def connects(self, a: Hashable, b: Hashable) -> bool:
        """True if this edge links a ↔ b."""
        return self.key == frozenset((a, b))

    def other_end(self, vertex: Hashable) -> Optional[Hashable]:
        """Given one endpoint, return the other. None if vertex isn't an endpoint."""
        if vertex == self.source:
            return self.target
        if vertex == self.target:
            return self.source
        return None

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "target": self.target,
            "weight": self.weight,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Edge":
        return cls(
            source=data["source"],
            target=data["target"],
            weight=data.get("weight", 1),
        )

    # ------------------------------------------------------------------
    # Dunder
    # ------------------------------------------------------------------
    def __repr__(self) -> str:
        return f"Edge({self.source!r} ↔ {self.target!r}, w={self.weight})"

    def __eq__(self, other) -> bool:
        return (
            isinstance(other, Edge)
            and self.key == other.key
            and self.weight == other.weight
        )

    def __hash__(self) -> int:
        return hash((self.key, self.weight))
