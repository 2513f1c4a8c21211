"""
stepper.py — Step-by-Step Playback Engine
==========================================
The Stepper is the ONLY object a UI interacts with during playback.
It owns a replay grid, applies a finished StepTrace to it one event at
a time, and exposes a play/pause/next/prev/speed API.

State machine:
    IDLE      →  start()   →  PAUSED
    PAUSED    →  play()    →  PLAYING
    PLAYING   →  pause()   →  PAUSED
    PLAYING   →  (trace exhausted) → FINISHED
    any       →  cancel()  →  CANCELLED
    any       →  reset()   →  IDLE

`current_idx` is the index of the last applied event (-1 before the
first).  Rewinding rebuilds the same grid object in place from the
trace's initial state (announced through on_reset) and re-applies
events, each announced through on_step, so every position is reached
by whole events only.

Thread safety:
  This class is NOT thread-safe.  Drive it from one thread (or one
  event loop) and call tick() from your timer.
"""

import time
from enum import Enum
from typing import Callable, Optional

from grid import Grid
from algorithms.step import StepEvent, StepTrace


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class StepperState(Enum):
    IDLE      = "idle"
    PAUSED    = "paused"
    PLAYING   = "playing"
    FINISHED  = "finished"
    CANCELLED = "cancelled"


# ---------------------------------------------------------------------------
# Speed presets (seconds per event)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   0.2,    # teaching mode
    "medium": 0.05,
    "fast":   0.02,
    "turbo":  0.01,   # the visualizer's default 10 ms cadence
}


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
class Stepper:
    """
    Attributes:
        state       : Current StepperState.
        trace       : The StepTrace being played (None when IDLE).
        grid        : The replay grid events are applied to.
        current_idx : Index of the last applied event (-1 = none yet).
        speed       : Seconds between auto-advance ticks.
        on_step     : Optional callback(StepEvent) fired after every applied event.
        on_reset    : Optional callback(Grid) fired when backward navigation
                      rebuilds the grid from the trace's initial state.
    """

    def __init__(
        self,
        on_step:  Optional[Callable[[StepEvent], None]] = None,
        on_reset: Optional[Callable[[Grid], None]]      = None,
    ):
        self.trace:       Optional[StepTrace] = None
        self.grid:        Optional[Grid]      = None
        self.current_idx: int                 = -1
        self.state:       StepperState        = StepperState.IDLE
        self.speed:       float               = SPEED_PRESETS["medium"]
        self.on_step:     Optional[Callable[[StepEvent], None]] = on_step
        self.on_reset:    Optional[Callable[[Grid], None]]      = on_reset

        self._last_tick: float = 0.0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self, trace: StepTrace, grid: Optional[Grid] = None) -> None:
        """
        Attach a trace; nothing is applied yet.  A caller-supplied `grid`
        is rebuilt in place to the trace's initial state and stays the
        object every later event is applied to.
        """
        self.trace = trace
        if grid is None:
            self.grid = trace.fresh_grid()
        else:
            if (grid.width, grid.height) != (trace.width, trace.height):
                raise ValueError(
                    f"trace is for a {trace.width}x{trace.height} grid, "
                    f"got {grid.width}x{grid.height}"
                )
            self.grid = grid
            self._load_initial_state()
        self.current_idx = -1
        self.state       = StepperState.FINISHED if len(trace) == 0 else StepperState.PAUSED

    def reset(self) -> None:
        """Back to IDLE; the caller must call start() again."""
        self.trace       = None
        self.grid        = None
        self.current_idx = -1
        self.state       = StepperState.IDLE

    def cancel(self) -> None:
        """Stop for good.  The grid keeps the last fully applied event."""
        if self.state is not StepperState.IDLE:
            self.state = StepperState.CANCELLED

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def next_step(self) -> bool:
        """Apply one more event.  Returns False at the end or when cancelled."""
        if not self._active():
            return False
        target = self.current_idx + 1
        if target >= len(self.trace):
            self.state = StepperState.FINISHED
            return False
        event = self.trace[target]
        event.apply(self.grid)
        self.current_idx = target
        self._notify(event)
        if self.current_idx == len(self.trace) - 1:
            self.state = StepperState.FINISHED
        return True

    def prev_step(self) -> bool:
        """Un-apply the last event.  Returns False if nothing is applied."""
        if not self._active() or self.current_idx < 0:
            return False
        return self.goto_step(self.current_idx - 1)

    def goto_step(self, idx: int) -> bool:
        """Make `idx` the last applied event (-1 = before the first)."""
        if not self._active() or not -1 <= idx < len(self.trace):
            return False
        if idx < self.current_idx:
            self._load_initial_state()
            self.current_idx = -1
            if self.on_reset is not None:
                self.on_reset(self.grid)
        while self.current_idx < idx:
            self.current_idx += 1
            event = self.trace[self.current_idx]
            event.apply(self.grid)
            self._notify(event)
        self.state = (
            StepperState.FINISHED if self.current_idx == len(self.trace) - 1
            else StepperState.PAUSED
        )
        return True

    def rewind(self) -> None:
        """Back to before the first event."""
        self.goto_step(-1)

    def jump_to_end(self) -> None:
        """Apply every remaining event."""
        if self.trace is not None:
            self.goto_step(len(self.trace) - 1)

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> None:
        if self.state is not StepperState.PAUSED:
            return
        self.state      = StepperState.PLAYING
        self._last_tick = time.monotonic()

    def pause(self) -> None:
        if self.state is StepperState.PLAYING:
            self.state = StepperState.PAUSED

    def toggle_play(self) -> None:
        if self.state is StepperState.PLAYING:
            self.pause()
        else:
            self.play()

    # ------------------------------------------------------------------
    # Tick  (call this from your event loop / timer)
    # ------------------------------------------------------------------
    def tick(self, now: Optional[float] = None) -> bool:
        """
        Call periodically.  If playing and at least `speed` seconds have
        passed since the last advance, applies one event.  Returns True
        if an event was applied.
        """
        if self.state is not StepperState.PLAYING:
            return False
        now = time.monotonic() if now is None else now
        if now - self._last_tick < self.speed:
            return False
        self._last_tick = now
        return self.next_step()

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, preset: str) -> None:
        self.speed = SPEED_PRESETS.get(preset, SPEED_PRESETS["medium"])

    def set_speed_value(self, seconds: float) -> None:
        self.speed = max(0.001, seconds)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def current_event(self) -> Optional[StepEvent]:
        if self.trace is not None and 0 <= self.current_idx < len(self.trace):
            return self.trace[self.current_idx]
        return None

    @property
    def total_steps(self) -> int:
        return len(self.trace) if self.trace is not None else 0

    @property
    def is_finished(self) -> bool:
        return self.state is StepperState.FINISHED

    @property
    def is_playing(self) -> bool:
        return self.state is StepperState.PLAYING

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _active(self) -> bool:
        return self.trace is not None and self.state not in (
            StepperState.IDLE, StepperState.CANCELLED,
        )

    def _load_initial_state(self) -> None:
        self.grid.clear_all()
        for r, c in self.trace.initial_walls:
            self.grid.set_wall(r, c, True)

    def _notify(self, event: StepEvent) -> None:
        if self.on_step is not None:
            self.on_step(event)
