"""
events.py — Shortest-Path Step Events
======================================
The search is a generator that yields StepEvent objects.  Each event is
one discrete state transition of the algorithm:

    Initialized    – a vertex was seeded with its starting distance
    Visiting       – the closest unsettled vertex was popped and settled
    Examining      – an edge to an unsettled neighbour is being looked at
    Relaxed        – that edge produced a shorter distance
    Settled        – all edges of the visited vertex have been examined
    Unreachable    – the closest remaining vertex is at infinity; stop
    TargetReached  – the target vertex was visited; stop
    Completed      – terminal event carrying the reconstructed path

Design decisions:
  - Events are frozen dataclasses holding VALUES only (ids, numbers,
    tuples).  A consumer can keep, reorder or ship them anywhere
    without ever touching the search state.
  - `kind` is a class-level tag so consumers can dispatch with a dict
    lookup or a match statement instead of isinstance chains.
  - describe() is the narration shown in the explanation panel and the
    event log.
"""

import math
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, ClassVar, Dict, Hashable, Tuple


class EventKind(Enum):
    INITIALIZED    = "initialized"
    VISITING       = "visiting"
    EXAMINING      = "examining"
    RELAXED        = "relaxed"
    SETTLED        = "settled"
    UNREACHABLE    = "unreachable"
    TARGET_REACHED = "target_reached"
    COMPLETED      = "completed"


def format_distance(d: float) -> str:
    if d == math.inf:
        return "∞"
    if isinstance(d, float) and d.is_integer():
        return str(int(d))
    return str(d)


def _json_number(d: float) -> Any:
    # JSON has no infinity
    return None if d == math.inf else d


@dataclass(frozen=True)
class StepEvent:
    kind: ClassVar[EventKind]

    def describe(self) -> str:
        raise NotImplementedError

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["kind"] = self.kind.value
        return data


@dataclass(frozen=True)
class Initialized(StepEvent):
    kind: ClassVar[EventKind] = EventKind.INITIALIZED

    vertex:   Hashable
    distance: float

    def describe(self) -> str:
        if self.distance == 0:
            return f"Starting at vertex {self.vertex} with distance 0."
        return f"Vertex {self.vertex} initialized with distance {format_distance(self.distance)}."

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["distance"] = _json_number(self.distance)
        return data


@dataclass(frozen=True)
class Visiting(StepEvent):
    kind: ClassVar[EventKind] = EventKind.VISITING

    vertex:   Hashable
    distance: float

    def describe(self) -> str:
        return (
            f"Processing vertex {self.vertex} with current distance "
            f"{format_distance(self.distance)}."
        )


@dataclass(frozen=True)
class Examining(StepEvent):
    kind: ClassVar[EventKind] = EventKind.EXAMINING

    vertex:   Hashable
    neighbor: Hashable
    weight:   float

    def describe(self) -> str:
        return f"Checking neighbor {self.neighbor} with edge weight {format_distance(self.weight)}."


@dataclass(frozen=True)
class Relaxed(StepEvent):
    kind: ClassVar[EventKind] = EventKind.RELAXED

    vertex:   Hashable
    distance: float
    via:      Hashable

    def describe(self) -> str:
        return (
            f"Updated distance of vertex {self.vertex} to "
            f"{format_distance(self.distance)} (via {self.via})."
        )


@dataclass(frozen=True)
class Settled(StepEvent):
    kind: ClassVar[EventKind] = EventKind.SETTLED

    vertex: Hashable

    def describe(self) -> str:
        return f"Vertex {self.vertex} settled; its distance is final."


@dataclass(frozen=True)
class Unreachable(StepEvent):
    kind: ClassVar[EventKind] = EventKind.UNREACHABLE

    vertex: Hashable

    def describe(self) -> str:
        return f"Vertex {self.vertex} is unreachable."


@dataclass(frozen=True)
class TargetReached(StepEvent):
    kind: ClassVar[EventKind] = EventKind.TARGET_REACHED

    vertex: Hashable

    def describe(self) -> str:
        return f"Reached target vertex {self.vertex}."


@dataclass(frozen=True)
class Completed(StepEvent):
    kind: ClassVar[EventKind] = EventKind.COMPLETED

    path:           Tuple[Hashable, ...]
    total_distance: float

    @property
    def found(self) -> bool:
        return bool(self.path)

    def describe(self) -> str:
        if not self.path:
            return "No path found."
        hops = ", ".join(str(v) for v in self.path)
        return f"Shortest path: [{hops}] with total distance {format_distance(self.total_distance)}."

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["path"] = list(self.path)
        data["total_distance"] = _json_number(self.total_distance)
        return data
