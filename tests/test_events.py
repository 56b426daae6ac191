import math
from dataclasses import FrozenInstanceError, fields

import pytest

from algorithms import (
    PSEUDOCODE,
    PSEUDOCODE_LINE,
    Completed,
    EventKind,
    Examining,
    Initialized,
    Relaxed,
    Settled,
    TargetReached,
    Unreachable,
    Visiting,
    format_distance,
)


@pytest.mark.parametrize("event, text", [
    (Initialized("A", 0), "Starting at vertex A with distance 0."),
    (Initialized("B", math.inf), "Vertex B initialized with distance ∞."),
    (Visiting("A", 0), "Processing vertex A with current distance 0."),
    (Examining("A", "B", 7), "Checking neighbor B with edge weight 7."),
    (Relaxed("B", 7, via="A"), "Updated distance of vertex B to 7 (via A)."),
    (Settled("A"), "Vertex A settled; its distance is final."),
    (Unreachable("C"), "Vertex C is unreachable."),
    (TargetReached("E"), "Reached target vertex E."),
    (Completed(("A", "B", "F", "H", "E"), 13), "Shortest path: [A, B, F, H, E] with total distance 13."),
    (Completed((), math.inf), "No path found."),
])
def test_describe(event, text):
    assert event.describe() == text


def test_events_are_frozen():
    e = Visiting("A", 0)
    with pytest.raises(FrozenInstanceError):
        e.vertex = "B"


def test_kind_is_a_class_tag():
    assert Relaxed.kind is EventKind.RELAXED
    assert Relaxed("B", 1, via="A").kind is EventKind.RELAXED
    assert "kind" not in [f.name for f in fields(Relaxed)]


def test_to_dict():
    assert Relaxed("B", 7, via="A").to_dict() == {
        "kind": "relaxed", "vertex": "B", "distance": 7, "via": "A",
    }
    assert Initialized("B", math.inf).to_dict()["distance"] is None


def test_completed_to_dict():
    assert Completed(("A", "B"), 2.5).to_dict() == {
        "kind": "completed", "path": ["A", "B"], "total_distance": 2.5,
    }
    assert Completed((), math.inf).to_dict()["total_distance"] is None


def test_format_distance():
    assert format_distance(math.inf) == "∞"
    assert format_distance(13.0) == "13"
    assert format_distance(2.5) == "2.5"
    assert format_distance(7) == "7"


def test_every_kind_has_a_pseudocode_line():
    assert set(PSEUDOCODE_LINE) == set(EventKind)
    assert all(0 <= line < len(PSEUDOCODE) for line in PSEUDOCODE_LINE.values())
