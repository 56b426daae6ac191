"""
algorithms/
-----------
The stepwise shortest-path engine.

    from algorithms import run
    for event in run(graph, "A", "E"):
        ...

Everything here is pure: no rendering, no timing, no I/O.  Consumers
(engine/, ui/, main.py) decide what each event means on screen.
"""

from algorithms.events import (
    EventKind,
    StepEvent,
    Initialized,
    Visiting,
    Examining,
    Relaxed,
    Settled,
    Unreachable,
    TargetReached,
    Completed,
    format_distance,
)
from algorithms.result   import ShortestPathResult
from algorithms.dijkstra import dijkstra, PSEUDOCODE, PSEUDOCODE_LINE
from algorithms.search   import ShortestPathRun, run

__all__ = [
    "EventKind",
    "StepEvent",
    "Initialized",
    "Visiting",
    "Examining",
    "Relaxed",
    "Settled",
    "Unreachable",
    "TargetReached",
    "Completed",
    "format_distance",
    "ShortestPathResult",
    "dijkstra",
    "PSEUDOCODE",
    "PSEUDOCODE_LINE",
    "ShortestPathRun",
    "run",
]
