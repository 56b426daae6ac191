import json
import math

import pytest

from graph import UnknownVertex
from engine import Recorder, RunMetrics


def test_metrics_for_demo_run(demo):
    rec = Recorder()
    rec.start(demo, "A", "E")
    m = rec.run_to_completion()

    assert m is rec.get_metrics()
    assert m.source == "A" and m.target == "E"
    assert m.vertices_settled == 7
    assert m.edges_examined == 9
    assert m.edges_relaxed == 7
    assert m.path_length == 4
    assert m.path_cost == 13
    assert m.total_steps == 39
    assert m.path_found
    assert m.distance == 13
    assert m.wall_time_ms >= 0


def test_result_and_frames_are_kept(demo):
    rec = Recorder()
    rec.start(demo, "A", "E")
    rec.run_to_completion()

    assert len(rec.snapshots) == 39
    assert rec.result.path == ("A", "B", "F", "H", "E")
    assert rec.stepper.is_finished


def test_metrics_when_unreachable(disconnected):
    rec = Recorder()
    rec.start(disconnected, "A", "C")
    m = rec.run_to_completion()

    assert not m.path_found
    assert m.path_length == 0
    assert m.path_cost == 0
    assert m.distance == math.inf
    assert m.to_dict()["distance"] is None


def test_export_is_serialisable(demo):
    rec = Recorder()
    rec.start(demo, "A", "E")
    rec.run_to_completion()
    data = rec.export()

    json.dumps(data)
    assert data["source"] == "A"
    assert len(data["events"]) == 39
    assert data["events"][-1]["kind"] == "completed"
    assert data["metrics"]["path_cost"] == 13
    assert len(data["graph"]["edges"]) == 9


def test_unknown_vertex_propagates_from_start(demo):
    rec = Recorder()
    with pytest.raises(UnknownVertex):
        rec.start(demo, "A", "nowhere")
    assert rec.stepper is None


def test_run_without_start():
    with pytest.raises(RuntimeError):
        Recorder().run_to_completion()


def test_empty_metrics():
    assert RunMetrics().to_dict()["distance"] is None
    assert Recorder().export()["events"] == []
