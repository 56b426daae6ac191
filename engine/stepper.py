"""
stepper.py — Step-by-Step Playback Engine
==========================================
The Stepper is the ONLY object the UI interacts with during a run.
It pulls events from a ShortestPathRun, folds each into a Snapshot,
buffers both (enabling rewind), and exposes a play/pause/next/prev/speed
API.

All pacing lives here.  The search itself never waits: the Stepper only
pulls the next event when a consumer asks for one, either explicitly
(next_step) or through tick() once `speed` seconds have passed.

State machine:
    IDLE  →  start()  →  PAUSED
    PAUSED  →  play()   →  PLAYING
    PLAYING →  pause()  →  PAUSED
    PLAYING →  (events exhausted) → FINISHED
    any     →  reset()  →  IDLE

Thread safety:
  This class is NOT thread-safe.  Call it from a single thread (or one
  event loop).  The snapshots it hands out are immutable and may be
  passed anywhere.
"""

import time
from enum import Enum
from typing import Callable, Iterable, Iterator, List, Optional

from algorithms import ShortestPathResult, StepEvent
from engine.snapshot import Snapshot, SnapshotBuilder
from log import get_logger

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class StepperState(Enum):
    IDLE     = "idle"
    PAUSED   = "paused"
    PLAYING  = "playing"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# Speed presets (seconds per step)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   1.0,    # one step per second
    "medium": 0.4,
    "fast":   0.15,
    "turbo":  0.05,
}

MIN_SPEED = 0.02


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
class Stepper:
    """
    Attributes:
        state       : Current StepperState.
        events      : Every StepEvent pulled so far.
        snapshots   : One Snapshot per event (buffer for rewind).
        current_idx : Index into `snapshots` that is currently displayed.
        speed       : Seconds between auto-advance ticks.
        on_step     : Optional callback(Snapshot) fired every time the
                      current frame changes.  The UI hooks its re-render here.
        clock       : Monotonic time source, swappable for tests.
    """

    def __init__(
        self,
        on_step: Optional[Callable[[Snapshot], None]] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._source:     Optional[Iterator[StepEvent]] = None
        self._run:        Optional[Iterable[StepEvent]] = None
        self._builder:    SnapshotBuilder = SnapshotBuilder()
        self._exhausted:  bool          = False
        self.events:      List[StepEvent] = []
        self.snapshots:   List[Snapshot]  = []
        self.current_idx: int           = -1
        self.state:       StepperState  = StepperState.IDLE
        self.speed:       float         = SPEED_PRESETS["medium"]
        self.on_step:     Optional[Callable[[Snapshot], None]] = on_step
        self.clock:       Callable[[], float] = clock

        # for auto-play timing
        self._last_tick:  float = 0.0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self, events: Iterable[StepEvent]) -> None:
        """Attach a fresh run (or any event iterable) and load the first frame."""
        self._run        = events
        self._source     = iter(events)
        self._builder    = SnapshotBuilder()
        self._exhausted  = False
        self.events      = []
        self.snapshots   = []
        self.current_idx = -1
        self.state       = StepperState.PAUSED
        logger.debug("Stepper started on %r", events)
        # eagerly fetch frame 0 so the UI can show the initial state
        if self._fetch_next():
            self._goto(0)
        else:
            self.state = StepperState.FINISHED

    def reset(self) -> None:
        """Back to IDLE — caller must call start() again."""
        self._source     = None
        self._run        = None
        self._exhausted  = False
        self.events      = []
        self.snapshots   = []
        self.current_idx = -1
        self.state       = StepperState.IDLE

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def next_step(self) -> bool:
        """Advance one step forward.  Returns False if already at end."""
        target = self.current_idx + 1
        if target >= len(self.snapshots):
            if not self._fetch_next():
                self._finish()
                return False
        self._goto(target)
        if self._exhausted and self.current_idx == len(self.snapshots) - 1:
            self._finish()
        return True

    def prev_step(self) -> bool:
        """Rewind one step.  Returns False if already at start."""
        if self.current_idx <= 0:
            return False
        self._goto(self.current_idx - 1)
        if self.state == StepperState.FINISHED:
            self.state = StepperState.PAUSED
        return True

    def goto_step(self, idx: int) -> bool:
        """Jump to an arbitrary step index, fetching forward if needed."""
        if idx < 0:
            return False
        while idx >= len(self.snapshots):
            if not self._fetch_next():
                break
        if idx < len(self.snapshots):
            self._goto(idx)
            return True
        return False

    def rewind(self) -> None:
        """Jump back to step 0."""
        if self.snapshots:
            self._goto(0)
            if self.state == StepperState.FINISHED:
                self.state = StepperState.PAUSED

    def jump_to_end(self) -> None:
        """Exhaust the run and jump to the final frame."""
        while self._fetch_next():
            pass
        if self.snapshots:
            self._goto(len(self.snapshots) - 1)
        self._finish()

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> None:
        if self.state in (StepperState.FINISHED, StepperState.IDLE):
            return
        self.state      = StepperState.PLAYING
        self._last_tick = self.clock()

    def pause(self) -> None:
        if self.state == StepperState.PLAYING:
            self.state = StepperState.PAUSED

    def toggle_play(self) -> None:
        if self.state == StepperState.PLAYING:
            self.pause()
        else:
            self.play()

    # ------------------------------------------------------------------
    # Tick  (call this from your event loop / timer)
    # ------------------------------------------------------------------
    def tick(self) -> bool:
        """
        Call periodically (e.g. every 50 ms).  If playing and enough
        time has elapsed, advances one step.  Returns True if a step
        was taken.
        """
        if self.state != StepperState.PLAYING:
            return False
        now = self.clock()
        if now - self._last_tick >= self.speed:
            self._last_tick = now
            return self.next_step()
        return False

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, preset: str) -> None:
        if preset not in SPEED_PRESETS:
            raise ValueError(f"Unknown speed preset {preset!r}; choose from {sorted(SPEED_PRESETS)}")
        self.speed = SPEED_PRESETS[preset]

    def set_speed_value(self, seconds: float) -> None:
        self.speed = max(MIN_SPEED, seconds)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def current_snapshot(self) -> Optional[Snapshot]:
        if 0 <= self.current_idx < len(self.snapshots):
            return self.snapshots[self.current_idx]
        return None

    @property
    def total_steps_fetched(self) -> int:
        return len(self.snapshots)

    @property
    def is_finished(self) -> bool:
        return self.state == StepperState.FINISHED

    @property
    def is_playing(self) -> bool:
        return self.state == StepperState.PLAYING

    @property
    def result(self) -> Optional[ShortestPathResult]:
        """The run's final result once every event has been pulled."""
        if not self._exhausted:
            return None
        result = getattr(self._run, "result", None)
        return result() if callable(result) else None

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _fetch_next(self) -> bool:
        """Pull one event from the run into the buffers."""
        if self._source is None or self._exhausted:
            return False
        try:
            event = next(self._source)
        except StopIteration:
            self._exhausted = True
            return False
        self.events.append(event)
        self.snapshots.append(self._builder.apply(event))
        if self.snapshots[-1].is_final:
            self._exhausted = True
        return True

    def _finish(self) -> None:
        if self.state != StepperState.FINISHED:
            logger.debug("Stepper finished after %d steps", len(self.snapshots))
        self.state = StepperState.FINISHED

    def _goto(self, idx: int) -> None:
        self.current_idx = idx
        self._notify(self.snapshots[idx] if 0 <= idx < len(self.snapshots) else None)

    def _notify(self, snapshot: Optional[Snapshot]) -> None:
        if self.on_step and snapshot is not None:
            self.on_step(snapshot)
