"""
engine/
-------
Playback & recording layer: the consumer side of the event stream.

    from engine import Stepper, Recorder, SnapshotBuilder
"""

from engine.snapshot import Snapshot, SnapshotBuilder, distance_table, edge_label
from engine.stepper  import Stepper, StepperState, SPEED_PRESETS
from engine.recorder import Recorder, RunMetrics

__all__ = [
    "Snapshot",
    "SnapshotBuilder",
    "distance_table",
    "edge_label",
    "Stepper",
    "StepperState",
    "SPEED_PRESETS",
    "Recorder",
    "RunMetrics",
]
