"""
engine/
-------
Run dispatch, playback & recording layer.

    from engine import search, generate_maze, replay, Stepper, Recorder
"""

from engine.pathfinding import SearchResult, search, run_search
from engine.maze        import MazeResult, generate, generate_maze, maze_and_trace
from engine.replay      import CancelToken, replay
from engine.stepper     import Stepper, StepperState, SPEED_PRESETS
from engine.recorder    import Recorder, RunMetrics, ComparisonResult, compare

__all__ = [
    "SearchResult",
    "search",
    "run_search",
    "MazeResult",
    "generate",
    "generate_maze",
    "maze_and_trace",
    "CancelToken",
    "replay",
    "Stepper",
    "StepperState",
    "SPEED_PRESETS",
    "Recorder",
    "RunMetrics",
    "ComparisonResult",
    "compare",
]
