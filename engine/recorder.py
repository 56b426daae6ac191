"""
recorder.py — Run Recorder & Analytics
========================================
Records a complete shortest-path run (every event and frame), then
computes the metrics the Analytics panel shows.

Usage:
    rec = Recorder()
    rec.start(graph=g, source="A", target="E")
    rec.run_to_completion()          # exhausts the run
    metrics = rec.get_metrics()      # the analytics card
    rec.export()                     # serialisable snapshot for save/replay
"""

import math
import time
from dataclasses import dataclass, asdict
from typing import Any, Dict, Hashable, List, Optional

from graph import Graph
from algorithms import EventKind, ShortestPathResult, run
from engine.snapshot import Snapshot
from engine.stepper import Stepper
from log import get_logger

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Metrics dataclass — what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    source:            Any   = None
    target:            Any   = None
    vertices_settled:  int   = 0
    edges_examined:    int   = 0
    edges_relaxed:     int   = 0
    path_length:       int   = 0          # number of edges on the final path
    path_cost:         float = 0.0        # total weight of the final path
    total_steps:       int   = 0          # number of events emitted
    wall_time_ms:      float = 0.0        # wall-clock time to run to completion
    path_found:        bool  = False
    distance:          float = math.inf   # reported total distance

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        if data["distance"] == math.inf:
            data["distance"] = None
        return data


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        snapshots   : Every frame of the run.
        metrics     : Computed RunMetrics (available after run_to_completion).
        result      : The run's ShortestPathResult (same).
        stepper     : The underlying Stepper, for live frame-by-frame access.
    """

    def __init__(self):
        self.snapshots: List[Snapshot]               = []
        self.metrics:   Optional[RunMetrics]         = None
        self.result:    Optional[ShortestPathResult] = None
        self.stepper:   Optional[Stepper]            = None

        self._source:     Hashable         = None
        self._target:     Hashable         = None
        self._graph:      Optional[Graph]  = None

    # ------------------------------------------------------------------
    # Setup & run
    # ------------------------------------------------------------------
    def start(self, graph: Graph, source: Hashable, target: Hashable) -> None:
        """Create the run and its stepper.  UnknownVertex propagates."""
        shortest = run(graph, source, target)

        self._source   = source
        self._target   = target
        self._graph    = graph
        self.snapshots = []
        self.metrics   = None
        self.result    = None

        self.stepper = Stepper()
        self.stepper.start(shortest)

    def run_to_completion(self) -> RunMetrics:
        """Exhaust the run, record every frame, compute metrics."""
        if self.stepper is None:
            raise RuntimeError("Call start() first.")

        started = time.monotonic()
        self.stepper.jump_to_end()
        self.snapshots = list(self.stepper.snapshots)
        self.result = self.stepper.result
        wall_ms = (time.monotonic() - started) * 1000

        self.metrics = self._compute_metrics(wall_ms)
        logger.info(
            "Run %s → %s: %d steps, path found=%s, distance=%s",
            self._source, self._target, self.metrics.total_steps,
            self.metrics.path_found, self.metrics.distance,
        )
        return self.metrics

    def get_metrics(self) -> Optional[RunMetrics]:
        return self.metrics

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        return {
            "source":  self._source,
            "target":  self._target,
            "graph":   self._graph.to_dict() if self._graph else {},
            "metrics": self.metrics.to_dict() if self.metrics else {},
            "events":  [s.event.to_dict() for s in self.snapshots],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        counts: Dict[EventKind, int] = {kind: 0 for kind in EventKind}
        for s in self.snapshots:
            counts[s.kind] += 1

        last = self.snapshots[-1] if self.snapshots else None
        path = last.path if last else ()

        # path cost: sum edge weights along the path
        path_cost = 0.0
        if self._graph and len(path) > 1:
            path_cost = sum(self._graph.weight(a, b) for a, b in zip(path, path[1:]))

        return RunMetrics(
            source=self._source,
            target=self._target,
            vertices_settled=counts[EventKind.VISITING],
            edges_examined=counts[EventKind.EXAMINING],
            edges_relaxed=counts[EventKind.RELAXED],
            path_length=len(path) - 1 if len(path) > 1 else 0,
            path_cost=path_cost,
            total_steps=len(self.snapshots),
            wall_time_ms=round(wall_ms, 2),
            path_found=bool(path),
            distance=last.total_distance if last else math.inf,
        )
