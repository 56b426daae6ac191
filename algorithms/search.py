"""
search.py — A Single Shortest-Path Run
=======================================
run(graph, start, end) is the entry point consumers use.  It returns a
ShortestPathRun: an iterator (and async iterator) over the step events,
which also hands back the final result once the events are used up.

    for event in run(g, "A", "E"):
        renderer.apply(event)

    r = run(g, "A", "E")
    result = r.result()            # drain and block for the result

    async for event in run(g, "A", "E"):
        await renderer.apply(event)  # control returns to the loop per event

The run holds no external resources: a consumer that stops pulling
events has cancelled it.  A run is single-use; once exhausted it stays
exhausted.
"""

import asyncio
from typing import Generator, Hashable, Iterator, List, Optional

from graph import Graph
from algorithms.dijkstra import dijkstra
from algorithms.events import StepEvent
from algorithms.result import ShortestPathResult


class ShortestPathRun:
    """
    Attributes:
        graph, start, end : What the run was started with.
        emitted           : Number of events handed out so far.
    """

    def __init__(self, graph: Graph, start: Hashable, end: Hashable):
        # raises UnknownVertex before any event exists
        self._events: Generator[StepEvent, None, ShortestPathResult] = dijkstra(graph, start, end)
        self._result: Optional[ShortestPathResult] = None
        self.graph   = graph
        self.start   = start
        self.end     = end
        self.emitted = 0

    # ------------------------------------------------------------------
    # Synchronous consumption
    # ------------------------------------------------------------------
    def __iter__(self) -> Iterator[StepEvent]:
        return self

    def __next__(self) -> StepEvent:
        if self._result is not None:
            raise StopIteration
        try:
            event = next(self._events)
        except StopIteration as stop:
            self._result = stop.value
            raise StopIteration from None
        self.emitted += 1
        return event

    def events(self) -> List[StepEvent]:
        """Materialise every remaining event."""
        return list(self)

    def result(self) -> ShortestPathResult:
        """Drain any remaining events and return the final result."""
        for _ in self:
            pass
        return self._result

    @property
    def finished(self) -> bool:
        return self._result is not None

    # ------------------------------------------------------------------
    # Asynchronous consumption
    # ------------------------------------------------------------------
    def __aiter__(self) -> "ShortestPathRun":
        return self

    async def __anext__(self) -> StepEvent:
        try:
            event = next(self)
        except StopIteration:
            raise StopAsyncIteration from None
        # suspension point: one event, then the loop gets control back
        await asyncio.sleep(0)
        return event

    async def wait(self) -> ShortestPathResult:
        """Async counterpart of result(), yielding to the loop per event."""
        async for _ in self:
            pass
        return self._result

    def __repr__(self) -> str:
        state = "finished" if self.finished else f"{self.emitted} events"
        return f"ShortestPathRun({self.start!r} → {self.end!r}, {state})"


def run(graph: Graph, start: Hashable, end: Hashable) -> ShortestPathRun:
    """Start a Dijkstra run from `start` to `end` over `graph`."""
    return ShortestPathRun(graph, start, end)
