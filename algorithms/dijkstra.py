"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Generator-based Dijkstra using a min-heap (heapq) with lazy deletion.

Yields a StepEvent at:
  1. Seeding each vertex                 →  Initialized
  2. Pop of the closest unsettled vertex →  Visiting
  3. Each edge to an unsettled neighbour →  Examining
  4. Successful relaxation               →  Relaxed
  5. All edges of the vertex examined    →  Settled
  6. Closest remaining vertex at ∞       →  Unreachable  (stop)
  7. Target popped                       →  TargetReached (stop)
  8. Path reconstructed                  →  Completed    (always last)

The generator's return value is the ShortestPathResult.

Frontier entries are (distance, seq, vertex).  `seq` is a running
counter, so equal distances pop in insertion order and vertex ids never
need to be comparable with one another.  Improving a distance pushes a
new entry instead of updating the old one; entries for vertices that
are already settled are discarded on pop without an event.

Correctness note: Dijkstra requires non-negative weights.  Graph.add_edge
refuses anything else, so no check is needed here.
"""

import heapq
import itertools
import math
from typing import Dict, Generator, Hashable, List, Set, Tuple

from graph import Graph, UnknownVertex
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
)
from algorithms.result import ShortestPathResult


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Dijkstra(graph, start, end):",                 # 0
    "    for v in V:",                                  # 1
    "        dist[v] ← 0 if v == start else ∞",         # 2
    "        pq.push((dist[v], v))",                    # 3
    "    while pq is not empty:",                       # 4
    "        (d, u) ← pq.pop_min()",                    # 5
    "        if u in settled: continue",                # 6
    "        if d == ∞: u is unreachable; break",       # 7
    "        settled.add(u)",                           # 8
    "        if u == end: break",                       # 9
    "        for (v, w) in adj(u) if v not settled:",   # 10
    "            if d + w < dist[v]:",                  # 11
    "                dist[v] ← d + w; prev[v] ← u",     # 12
    "                pq.push((dist[v], v))",            # 13
    "    return path(prev, end), dist[end]",            # 14
]

PSEUDOCODE_LINE: Dict[EventKind, int] = {
    EventKind.INITIALIZED:    2,
    EventKind.VISITING:       8,
    EventKind.EXAMINING:      11,
    EventKind.RELAXED:        12,
    EventKind.SETTLED:        10,
    EventKind.UNREACHABLE:    7,
    EventKind.TARGET_REACHED: 9,
    EventKind.COMPLETED:      14,
}


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def dijkstra(
    graph: Graph,
    start: Hashable,
    end: Hashable,
) -> Generator[StepEvent, None, ShortestPathResult]:
    """
    Validate the endpoints, then return the event generator.

    Validation happens here rather than inside the generator so that an
    unknown start / end raises UnknownVertex immediately, before any
    event exists.
    """
    for v in (start, end):
        if not graph.has_vertex(v):
            raise UnknownVertex(v)
    return _search(graph, start, end)


def _search(
    graph: Graph,
    start: Hashable,
    end: Hashable,
) -> Generator[StepEvent, None, ShortestPathResult]:

    INF = math.inf

    dist:    Dict[Hashable, float]    = {}
    prev:    Dict[Hashable, Hashable] = {}
    settled: Set[Hashable]            = set()
    pq:      List[Tuple[float, int, Hashable]] = []
    seq = itertools.count()

    # --- seed every vertex ---
    for v in graph.vertex_ids():
        d = 0 if v == start else INF
        dist[v] = d
        heapq.heappush(pq, (d, next(seq), v))
        yield Initialized(v, d)

    # --- main loop ---
    while pq:
        d, _, node = heapq.heappop(pq)

        # stale entry
        if node in settled:
            continue

        if d == INF:
            yield Unreachable(node)
            break

        settled.add(node)
        yield Visiting(node, d)

        if node == end:
            yield TargetReached(node)
            break

        for nbr, weight in graph.neighbours_of(node):
            if nbr in settled:
                continue
            alt = d + weight
            yield Examining(node, nbr, weight)
            if alt < dist[nbr]:
                dist[nbr] = alt
                prev[nbr] = node
                heapq.heappush(pq, (alt, next(seq), nbr))
                yield Relaxed(nbr, alt, via=node)

        yield Settled(node)

    # --- path reconstruction ---
    reached = end in settled and dist[end] < INF
    path = _reconstruct(prev, start, end) if reached else ()
    total = dist[end] if reached else INF

    yield Completed(path, total)

    return ShortestPathResult(
        start=start,
        end=end,
        distances={v: dist[v] for v in settled},
        tentative=dict(dist),
        predecessors=dict(prev),
        settled=frozenset(settled),
        path=path,
        total_distance=total,
    )


# ---------------------------------------------------------------------------
def _reconstruct(
    prev: Dict[Hashable, Hashable],
    start: Hashable,
    end: Hashable,
) -> Tuple[Hashable, ...]:
    path: List[Hashable] = [end]
    cur = end
    while cur != start:
        cur = prev[cur]
        path.append(cur)
    path.reverse()
    return tuple(path)
