"""
replay.py — Trace Replay
=========================
Feeds a finished StepTrace to a presentation layer one event at a time.

    token = CancelToken()
    applied = replay(trace, render_cell, token, grid=trace.fresh_grid())

The cancel token is checked at every event boundary, never in the
middle of one, so a cancelled replay always leaves the grid exactly as
the last fully applied event implies.  Cancelling a replay has no
effect on the trace; it can be replayed again from the start.

For paced, pausable playback use engine.stepper.Stepper.
"""

import logging
from typing import Callable, Optional

from grid import Grid
from algorithms.step import StepEvent, StepTrace


logger = logging.getLogger(__name__)


class CancelToken:
    """Shared flag a caller flips to stop a running replay."""

    def __init__(self):
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        return self._cancelled


def replay(
    trace: StepTrace,
    on_event: Callable[[StepEvent], None],
    cancel_token: Optional[CancelToken] = None,
    grid: Optional[Grid] = None,
) -> int:
    """
    Apply (when `grid` is given) and announce each event in order.

    Returns the number of events fully applied.
    """
    applied = 0
    for event in trace:
        if cancel_token is not None and cancel_token.cancelled:
            logger.debug("replay of %s cancelled after %d/%d events", trace.algorithm, applied, len(trace))
            break
        if grid is not None:
            event.apply(grid)
        on_event(event)
        applied += 1
    return applied
