import math

import pytest

from algorithms import Completed, EventKind, run
from engine import SPEED_PRESETS, Stepper, StepperState


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def stepper(demo, clock):
    s = Stepper(clock=clock)
    s.start(run(demo, "A", "E"))
    return s


def test_new_stepper_is_idle():
    s = Stepper()
    assert s.state is StepperState.IDLE
    assert s.current_snapshot is None
    assert s.result is None


def test_start_loads_first_frame(stepper):
    assert stepper.state is StepperState.PAUSED
    assert stepper.current_idx == 0
    assert stepper.total_steps_fetched == 1
    assert stepper.current_snapshot.kind is EventKind.INITIALIZED


def test_events_are_pulled_lazily(stepper):
    stepper.next_step()
    stepper.next_step()
    assert stepper.total_steps_fetched == 3
    assert len(stepper.events) == 3


def test_prev_step_replays_buffered_frames(stepper):
    stepper.next_step()
    stepper.next_step()
    third = stepper.current_snapshot
    assert stepper.prev_step()
    assert stepper.prev_step()
    assert not stepper.prev_step()
    stepper.next_step()
    stepper.next_step()
    assert stepper.current_snapshot is third
    assert stepper.total_steps_fetched == 3


def test_run_to_the_end(stepper):
    while stepper.next_step():
        pass
    assert stepper.is_finished
    assert stepper.current_snapshot.is_final
    assert stepper.result.total_distance == 13
    assert not stepper.next_step()


def test_jump_to_end_and_rewind(stepper):
    stepper.jump_to_end()
    assert stepper.is_finished
    assert stepper.current_idx == 38
    stepper.rewind()
    assert stepper.current_idx == 0
    assert stepper.state is StepperState.PAUSED


def test_goto_step_fetches_forward(stepper):
    assert stepper.goto_step(20)
    assert stepper.current_snapshot.step_number == 20
    assert not stepper.goto_step(100)
    assert not stepper.goto_step(-1)
    assert stepper.total_steps_fetched == 39


def test_result_is_none_until_exhausted(stepper):
    stepper.goto_step(10)
    assert stepper.result is None


def test_on_step_callback(demo):
    seen = []
    s = Stepper(on_step=seen.append)
    s.start(run(demo, "A", "E"))
    s.next_step()
    s.prev_step()
    assert [f.step_number for f in seen] == [0, 1, 0]


def test_tick_respects_speed(stepper, clock):
    stepper.set_speed("slow")
    assert not stepper.tick()             # paused

    stepper.play()
    assert stepper.is_playing
    clock.now = 0.5
    assert not stepper.tick()
    clock.now = 1.0
    assert stepper.tick()
    assert stepper.current_idx == 1
    clock.now = 1.5
    assert not stepper.tick()


def test_tick_plays_until_finished(stepper, clock):
    stepper.set_speed_value(0.1)
    stepper.play()
    for i in range(1, 200):
        clock.now = i * 0.1
        stepper.tick()
    assert stepper.is_finished
    assert not stepper.is_playing


def test_play_pause_toggle(stepper):
    stepper.toggle_play()
    assert stepper.state is StepperState.PLAYING
    stepper.toggle_play()
    assert stepper.state is StepperState.PAUSED
    stepper.jump_to_end()
    stepper.play()
    assert stepper.state is StepperState.FINISHED


def test_speed_presets(stepper):
    stepper.set_speed("turbo")
    assert stepper.speed == SPEED_PRESETS["turbo"]
    with pytest.raises(ValueError):
        stepper.set_speed("ludicrous")
    stepper.set_speed_value(0)
    assert stepper.speed > 0


def test_reset(stepper):
    stepper.reset()
    assert stepper.state is StepperState.IDLE
    assert stepper.snapshots == []
    assert not stepper.next_step()


def test_plain_event_list():
    s = Stepper()
    s.start([Completed((), math.inf)])
    assert s.current_snapshot.is_final
    assert not s.next_step()
    assert s.is_finished
    assert s.result is None


def test_empty_source_finishes_immediately():
    s = Stepper()
    s.start([])
    assert s.is_finished
    assert s.current_snapshot is None
