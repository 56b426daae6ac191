import math
import random

import pytest

from graph import Graph, UnknownVertex
from algorithms import (
    Completed,
    EventKind,
    Examining,
    Initialized,
    Relaxed,
    Settled,
    TargetReached,
    Unreachable,
    Visiting,
    dijkstra,
    run,
)
from engine import SnapshotBuilder


def _drain(graph, start, end):
    r = run(graph, start, end)
    events = r.events()
    return events, r.result()


def _kinds(events):
    return [e.kind for e in events]


def _brute_force(graph, start):
    """Cheapest cost to every vertex by enumerating all simple paths."""
    best = {start: 0}

    def walk(v, cost, seen):
        for nbr, w in graph.neighbours_of(v):
            if nbr in seen:
                continue
            c = cost + w
            if c < best.get(nbr, math.inf):
                best[nbr] = c
            walk(nbr, c, seen | {nbr})

    walk(start, 0, {start})
    return best


def _random_graph(seed, n=7, p=0.4):
    rng = random.Random(seed)
    g = Graph()
    ids = [f"v{i}" for i in range(n)]
    for v in ids:
        g.add_vertex(v)
    for i, a in enumerate(ids):
        for b in ids[i + 1:]:
            if rng.random() < p:
                g.add_edge(a, b, rng.randint(0, 9))
    g.add_vertex("sink")        # never reachable
    return g


# ---------------------------------------------------------------------------
# The demonstration graph
# ---------------------------------------------------------------------------
def test_demo_shortest_path(demo):
    events, result = _drain(demo, "A", "E")

    assert result.path == ("A", "B", "F", "H", "E")
    assert result.total_distance == 13
    assert events[-1] == Completed(("A", "B", "F", "H", "E"), 13)


def test_demo_event_sequence(demo):
    events, _ = _drain(demo, "A", "E")

    assert events[:8] == [Initialized(v, 0 if v == "A" else math.inf) for v in "ABCDEFGH"]
    assert events[8:14] == [
        Visiting("A", 0),
        Examining("A", "B", 7),
        Relaxed("B", 7, via="A"),
        Examining("A", "C", 8),
        Relaxed("C", 8, via="A"),
        Settled("A"),
    ]
    assert events[-3:] == [
        Visiting("E", 13),
        TargetReached("E"),
        Completed(("A", "B", "F", "H", "E"), 13),
    ]
    assert len(events) == 39


def test_settle_order_on_demo(demo):
    events, result = _drain(demo, "A", "E")
    visited = [e.vertex for e in events if e.kind is EventKind.VISITING]
    # G and H tie at 12; G was relaxed first
    assert visited == ["A", "B", "C", "F", "G", "H", "E"]
    assert result.settled == frozenset(visited)


def test_target_is_not_settled_by_event(demo):
    events, _ = _drain(demo, "A", "E")
    assert Settled("E") not in events


def test_distances_hold_settled_vertices_only(demo):
    _, result = _drain(demo, "A", "E")
    assert "D" not in result.distances
    assert result.tentative["D"] == 17
    assert result.distance_to("D") == math.inf
    assert result.distances == {"A": 0, "B": 7, "C": 8, "F": 9, "G": 12, "H": 12, "E": 13}


def test_run_is_deterministic(demo):
    first, _ = _drain(demo, "A", "E")
    second, _ = _drain(demo, "A", "E")
    assert first == second


# ---------------------------------------------------------------------------
# Correctness
# ---------------------------------------------------------------------------
@pytest.mark.parametrize("seed", range(12))
def test_matches_brute_force(seed):
    g = _random_graph(seed)
    _, result = _drain(g, "v0", "sink")
    expected = _brute_force(g, "v0")

    assert result.distances == expected
    assert not result.reached


@pytest.mark.parametrize("seed", range(6))
def test_no_settled_edge_can_be_relaxed(seed):
    g = _random_graph(seed, n=8, p=0.5)
    _, result = _drain(g, "v0", "sink")
    d = result.distances
    for edge in g.edges:
        a, b, w = edge.source, edge.target, edge.weight
        if a in d and b in d:
            assert d[b] <= d[a] + w
            assert d[a] <= d[b] + w


@pytest.mark.parametrize("seed", range(6))
def test_examined_edges_stay_relaxed_throughout_the_run(seed):
    g = _random_graph(seed, n=8, p=0.5)
    sb = SnapshotBuilder()
    checked = []          # (u, w, weight) whose relaxation step has passed
    pending = None

    for event in run(g, "v0", "sink"):
        frame = sb.apply(event)
        if pending is not None:
            checked.append(pending)
            pending = None

        for u, w, weight in checked:
            assert u in frame.settled
            assert frame.distances[w] <= frame.distances[u] + weight

        if isinstance(event, Examining):
            pending = (event.vertex, event.neighbor, event.weight)

    assert checked or not g.neighbours_of("v0")


@pytest.mark.parametrize("seed", range(6))
def test_path_cost_matches_reported_distance(seed):
    g = _random_graph(seed, n=8, p=0.5)
    for end in g.vertex_ids():
        _, result = _drain(g, "v0", end)
        if result.reached:
            cost = sum(g.weight(a, b) for a, b in zip(result.path, result.path[1:]))
            assert cost == result.total_distance
            assert result.path[0] == "v0" and result.path[-1] == end


def test_every_reachable_vertex_settled_once(demo_with_island):
    events, _ = _drain(demo_with_island, "A", "Z")
    settled = [e.vertex for e in events if isinstance(e, Settled)]

    assert sorted(settled) == list("ABCDEFGH")
    assert len(settled) == len(set(settled))


def test_examined_neighbours_are_never_settled(demo):
    events, _ = _drain(demo, "A", "E")
    done = set()
    for e in events:
        if isinstance(e, Visiting):
            done.add(e.vertex)
        elif isinstance(e, Examining):
            assert e.neighbor not in done


# ---------------------------------------------------------------------------
# Unreachable, trivial and failing runs
# ---------------------------------------------------------------------------
def test_unreachable_target(disconnected):
    events, result = _drain(disconnected, "A", "C")

    assert events[-2:] == [Unreachable("C"), Completed((), math.inf)]
    assert result.path == ()
    assert result.total_distance == math.inf
    assert not events[-1].found
    assert EventKind.TARGET_REACHED not in _kinds(events)


def test_start_equals_end(demo):
    events, result = _drain(demo, "C", "C")

    assert events[-3:] == [Visiting("C", 0), TargetReached("C"), Completed(("C",), 0)]
    assert result.path == ("C",)
    assert result.total_distance == 0


def test_single_vertex_graph():
    g = Graph()
    g.add_vertex("solo")
    events, result = _drain(g, "solo", "solo")
    assert _kinds(events) == [
        EventKind.INITIALIZED,
        EventKind.VISITING,
        EventKind.TARGET_REACHED,
        EventKind.COMPLETED,
    ]
    assert result.path == ("solo",)


@pytest.mark.parametrize("start, end", [("Q", "A"), ("A", "Q")])
def test_unknown_endpoint_raises_before_any_event(demo, start, end):
    with pytest.raises(UnknownVertex) as exc:
        dijkstra(demo, start, end)
    assert exc.value.vertex == "Q"

    with pytest.raises(UnknownVertex):
        run(demo, start, end)


def test_equal_costs_break_ties_by_insertion_order(square):
    _, result = _drain(square, "S", "T")
    assert result.path == ("S", "A", "T")
    assert result.total_distance == 2


def test_vertex_ids_need_not_be_comparable():
    g = Graph.from_edges([("a", 1, 2), (1, (0, 0), 2), ("a", (0, 0), 4)])
    _, result = _drain(g, "a", (0, 0))
    assert result.total_distance == 4
    assert result.path in (("a", (0, 0)), ("a", 1, (0, 0)))


def test_completed_is_always_last(demo, disconnected):
    for graph, start, end in [(demo, "A", "E"), (demo, "A", "A"), (disconnected, "A", "C")]:
        events, _ = _drain(graph, start, end)
        assert _kinds(events).count(EventKind.COMPLETED) == 1
        assert events[-1].kind is EventKind.COMPLETED


def test_initialized_before_anything_else(demo):
    events, _ = _drain(demo, "D", "A")
    kinds = _kinds(events)
    first_other = next(i for i, k in enumerate(kinds) if k is not EventKind.INITIALIZED)
    assert first_other == demo.vertex_count()
    assert EventKind.INITIALIZED not in kinds[first_other:]


def test_generator_return_value(demo):
    gen = dijkstra(demo, "A", "E")
    with pytest.raises(StopIteration) as stop:
        while True:
            next(gen)
    assert stop.value.value.total_distance == 13
