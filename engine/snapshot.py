"""
snapshot.py — Frame Snapshots Folded From Events
=================================================
A StepEvent says what just happened; a Snapshot is everything the
visualizer needs to draw one frame after it happened:

    • Which vertices are settled / frontier / current / on-path
    • Which edges were examined / relaxed / chosen
    • The distance table and predecessor links
    • Which line of pseudocode is executing
    • A plain-English explanation of the step

Design decisions:
  - Snapshot is a frozen dataclass built only by SnapshotBuilder.apply().
    The builder is the only writer; the stepper / renderer are pure readers.
  - The builder reconstructs search state from the event payloads alone.
    It never sees the search's own dicts, so nothing a renderer does can
    reach back into a run.
  - Edge state is keyed by the order-free vertex pair (Edge.key).
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Hashable, List, Optional, Tuple

from algorithms import (
    EventKind,
    StepEvent,
    PSEUDOCODE_LINE,
    format_distance,
)


# presentation states
UNVISITED   = "unvisited"
FRONTIER    = "frontier"
CURRENT     = "current"
VISITED     = "visited"
PATH        = "path"
UNREACHABLE = "unreachable"

DEFAULT  = "default"
EXAMINED = "examined"
RELAXED  = "relaxed"
CHOSEN   = "chosen"


@dataclass(frozen=True)
class Snapshot:
    """
    Attributes:
        step_number     : 0-based index of the event this frame follows.
        event           : The event itself.
        current_vertex  : Vertex being expanded (or None).
        current_edge    : Vertex pair of the edge just examined (or None).
        vertex_states   : {vertex: presentation state}
        edge_states     : {frozenset({a, b}): presentation state}
        distances       : {vertex: best-known distance}
        predecessors    : {vertex: predecessor}
        settled         : Vertices settled so far, in settle order.
        frontier        : Unsettled vertices with a finite distance, nearest first.
        path            : Final path (only on the Completed frame).
        total_distance  : Final cost (∞ until / unless a path is found).
        pseudocode_line : 0-based index into algorithms.PSEUDOCODE.
        explanation     : event.describe()
        is_final        : True on the Completed frame.
    """

    step_number:     int
    event:           StepEvent
    current_vertex:  Optional[Hashable]                   = None
    current_edge:    Optional[FrozenSet[Hashable]]        = None
    vertex_states:   Dict[Hashable, str]                  = field(default_factory=dict)
    edge_states:     Dict[FrozenSet[Hashable], str]       = field(default_factory=dict)
    distances:       Dict[Hashable, float]                = field(default_factory=dict)
    predecessors:    Dict[Hashable, Hashable]             = field(default_factory=dict)
    settled:         Tuple[Hashable, ...]                 = ()
    frontier:        Tuple[Hashable, ...]                 = ()
    path:            Tuple[Hashable, ...]                 = ()
    total_distance:  float                                = math.inf
    pseudocode_line: int                                  = 0
    explanation:     str                                  = ""
    is_final:        bool                                 = False

    @property
    def kind(self) -> EventKind:
        return self.event.kind

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly form (∞ → None, vertex pairs → "a|b")."""

        def num(d: float) -> Any:
            return None if d == math.inf else d

        return {
            "step_number":     self.step_number,
            "kind":            self.kind.value,
            "event":           self.event.to_dict(),
            "current_vertex":  self.current_vertex,
            "current_edge":    edge_label(self.current_edge) if self.current_edge else None,
            "vertex_states":   {str(v): s for v, s in self.vertex_states.items()},
            "edge_states":     {edge_label(k): s for k, s in self.edge_states.items()},
            "distances":       {str(v): num(d) for v, d in self.distances.items()},
            "predecessors":    {str(v): p for v, p in self.predecessors.items()},
            "settled":         list(self.settled),
            "frontier":        list(self.frontier),
            "path":            list(self.path),
            "total_distance":  num(self.total_distance),
            "pseudocode_line": self.pseudocode_line,
            "explanation":     self.explanation,
            "is_final":        self.is_final,
        }


def edge_label(key: FrozenSet[Hashable]) -> str:
    return "|".join(sorted(str(v) for v in key))


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------
class SnapshotBuilder:
    """
    Mutable scratch-pad that folds events into Snapshots.

    Usage:
        sb = SnapshotBuilder()
        frames = [sb.apply(e) for e in run(graph, "A", "E")]
    """

    def __init__(self):
        self.reset()

    def reset(self) -> None:
        self.step_number:    int                              = -1
        self.vertex_states:  Dict[Hashable, str]              = {}
        self.edge_states:    Dict[FrozenSet[Hashable], str]   = {}
        self.distances:      Dict[Hashable, float]            = {}
        self.predecessors:   Dict[Hashable, Hashable]         = {}
        self.settled:        List[Hashable]                   = []
        self.current_vertex: Optional[Hashable]               = None
        self.path:           Tuple[Hashable, ...]             = ()
        self.total_distance: float                            = math.inf

    def apply(self, event: StepEvent) -> Snapshot:
        self.step_number += 1
        current_edge = None
        kind = event.kind

        if kind is EventKind.INITIALIZED:
            self.distances[event.vertex] = event.distance
            self.vertex_states[event.vertex] = UNVISITED

        elif kind is EventKind.VISITING:
            # the previous vertex is done even if no Settled followed it
            if self.current_vertex is not None and self.vertex_states.get(self.current_vertex) == CURRENT:
                self.vertex_states[self.current_vertex] = VISITED
            self.current_vertex = event.vertex
            self.settled.append(event.vertex)
            self.vertex_states[event.vertex] = CURRENT

        elif kind is EventKind.EXAMINING:
            current_edge = frozenset((event.vertex, event.neighbor))
            self.edge_states.setdefault(current_edge, EXAMINED)

        elif kind is EventKind.RELAXED:
            current_edge = frozenset((event.via, event.vertex))
            # the edge that used to lead here no longer does
            old = self.predecessors.get(event.vertex)
            if old is not None:
                self.edge_states[frozenset((old, event.vertex))] = EXAMINED
            self.distances[event.vertex] = event.distance
            self.predecessors[event.vertex] = event.via
            self.edge_states[current_edge] = RELAXED
            self.vertex_states[event.vertex] = FRONTIER

        elif kind is EventKind.SETTLED:
            self.vertex_states[event.vertex] = VISITED
            self.current_vertex = None

        elif kind is EventKind.UNREACHABLE:
            for v, d in self.distances.items():
                if d == math.inf:
                    self.vertex_states[v] = UNREACHABLE

        elif kind is EventKind.TARGET_REACHED:
            self.current_vertex = event.vertex

        elif kind is EventKind.COMPLETED:
            self.path = event.path
            self.total_distance = event.total_distance
            self.current_vertex = None
            for v in event.path:
                self.vertex_states[v] = PATH
            for a, b in zip(event.path, event.path[1:]):
                self.edge_states[frozenset((a, b))] = CHOSEN

        return self.build(event, current_edge)

    def frontier(self) -> Tuple[Hashable, ...]:
        done = set(self.settled)
        open_ = [
            v for v, d in self.distances.items()
            if v not in done and d != math.inf
        ]
        # stable: equal distances keep first-seen order
        return tuple(sorted(open_, key=lambda v: self.distances[v]))

    def build(self, event: StepEvent, current_edge: Optional[FrozenSet[Hashable]] = None) -> Snapshot:
        return Snapshot(
            step_number=self.step_number,
            event=event,
            current_vertex=self.current_vertex,
            current_edge=current_edge,
            vertex_states=dict(self.vertex_states),
            edge_states=dict(self.edge_states),
            distances=dict(self.distances),
            predecessors=dict(self.predecessors),
            settled=tuple(self.settled),
            frontier=self.frontier(),
            path=self.path,
            total_distance=self.total_distance,
            pseudocode_line=PSEUDOCODE_LINE[event.kind],
            explanation=event.describe(),
            is_final=event.kind is EventKind.COMPLETED,
        )


def distance_table(snapshot: Snapshot) -> List[Tuple[Hashable, str]]:
    """[(vertex, "7" / "∞"), …] nearest first; the renderer's overlay rows."""
    items = list(snapshot.distances.items())
    items.sort(key=lambda kv: kv[1])
    return [(v, format_distance(d)) for v, d in items]
