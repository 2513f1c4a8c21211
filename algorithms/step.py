"""
step.py — Step Events & Traces
===============================
Every algorithm is a generator that yields StepEvent objects.
A StepEvent is ONE atomic mutation of one cell:

    • VISIT      – the search processed this cell
    • OPEN_WALL  – the maze generator carved this cell
    • MARK_PATH  – this cell lies on the reconstructed path

Each event also carries the pseudocode line that produced it and a
plain-English explanation (Learning Mode reads these).

A StepTrace is the frozen, ordered list of events from one engine run,
together with the grid dimensions and initial walls it ran on, so a
replay layer can rebuild the starting grid and apply events one by one.

Design decisions:
  - StepEvent is a frozen dataclass.  The engine is the only writer;
    replay layers are pure readers.
  - Events name cells by (row, col), never by Cell object, so a trace
    can be replayed onto any grid of matching dimensions.
  - `apply()` touches exactly one flag on exactly one cell; there is
    no partially-applied event.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterator, List, Optional, Tuple

from grid import Grid, Coord


# ---------------------------------------------------------------------------
# Event kinds
# ---------------------------------------------------------------------------
class EventKind(Enum):
    VISIT     = "visit"
    OPEN_WALL = "open_wall"
    MARK_PATH = "mark_path"


@dataclass(frozen=True)
class StepEvent:
    """
    Attributes:
        kind            : EventKind.
        cell            : (row, col) the event mutates.
        step_number     : 0-based index of this event in its trace.
        pseudocode_line : 0-based index of the pseudocode line executing.
        explanation     : Human-readable "why" text for Learning Mode.
    """

    kind:            EventKind
    cell:            Coord
    step_number:     int = 0
    pseudocode_line: int = 0
    explanation:     str = ""

    def apply(self, grid: Grid) -> None:
        target = grid.cell(*self.cell)
        if self.kind is EventKind.VISIT:
            target.visited = True
        elif self.kind is EventKind.OPEN_WALL:
            target.is_wall = False
        elif self.kind is EventKind.MARK_PATH:
            target.on_path = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind":            self.kind.value,
            "cell":            list(self.cell),
            "step_number":     self.step_number,
            "pseudocode_line": self.pseudocode_line,
            "explanation":     self.explanation,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StepEvent":
        return cls(
            kind=EventKind(data["kind"]),
            cell=tuple(data["cell"]),
            step_number=data.get("step_number", 0),
            pseudocode_line=data.get("pseudocode_line", 0),
            explanation=data.get("explanation", ""),
        )


# convenience constructors so algorithms read naturally
def visit(cell: Coord, line: int = 0, explanation: str = "") -> StepEvent:
    return StepEvent(EventKind.VISIT, cell, pseudocode_line=line, explanation=explanation)


def open_wall(cell: Coord, line: int = 0, explanation: str = "") -> StepEvent:
    return StepEvent(EventKind.OPEN_WALL, cell, pseudocode_line=line, explanation=explanation)


def mark_path(cell: Coord, line: int = 0, explanation: str = "") -> StepEvent:
    return StepEvent(EventKind.MARK_PATH, cell, pseudocode_line=line, explanation=explanation)


# ---------------------------------------------------------------------------
# StepTrace
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class StepTrace(Sequence):
    """
    Attributes:
        algorithm     : Registry key of the algorithm that produced it.
        width, height : Dimensions of the grid the run started on.
        initial_walls : Walls present when the run started.
        events        : The ordered events.
    """

    algorithm:     str
    width:         int
    height:        int
    initial_walls: FrozenSet[Coord]        = frozenset()
    events:        Tuple[StepEvent, ...]   = field(default_factory=tuple)

    # -- Sequence protocol --
    def __len__(self) -> int:
        return len(self.events)

    def __getitem__(self, idx):
        return self.events[idx]

    def __iter__(self) -> Iterator[StepEvent]:
        return iter(self.events)

    # -- views --
    def of_kind(self, kind: EventKind) -> List[Coord]:
        return [e.cell for e in self.events if e.kind is kind]

    @property
    def visited_order(self) -> List[Coord]:
        return self.of_kind(EventKind.VISIT)

    @property
    def path(self) -> List[Coord]:
        return self.of_kind(EventKind.MARK_PATH)

    # -- replay helpers --
    def fresh_grid(self) -> Grid:
        """A clean grid of matching dimensions with the run's initial walls."""
        g = Grid(self.width, self.height)
        for r, c in self.initial_walls:
            g.set_wall(r, c, True)
        return g

    def apply_to(self, grid: Grid, upto: Optional[int] = None) -> Grid:
        """Apply events [0, upto) in order (all of them by default)."""
        if (grid.width, grid.height) != (self.width, self.height):
            raise ValueError(
                f"trace is for a {self.width}x{self.height} grid, "
                f"got {grid.width}x{grid.height}"
            )
        for event in self.events[:upto]:
            event.apply(grid)
        return grid

    # -- serialisation --
    def to_dict(self) -> Dict[str, Any]:
        return {
            "algorithm":     self.algorithm,
            "width":         self.width,
            "height":        self.height,
            "initial_walls": sorted(list(w) for w in self.initial_walls),
            "events":        [e.to_dict() for e in self.events],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "StepTrace":
        return cls(
            algorithm=data["algorithm"],
            width=data["width"],
            height=data["height"],
            initial_walls=frozenset(tuple(w) for w in data.get("initial_walls", [])),
            events=tuple(StepEvent.from_dict(e) for e in data.get("events", [])),
        )


# ---------------------------------------------------------------------------
# Builder: engines collect generator output through this
# ---------------------------------------------------------------------------
class TraceBuilder:
    """
    Mutable scratch-pad that numbers events as they arrive and freezes
    them into a StepTrace at the end.

    Usage inside an engine:
        tb = TraceBuilder("bfs", grid)
        for event in bfs(grid, start, end):
            tb.record(event)
        trace = tb.build()
    """

    def __init__(self, algorithm: str, grid: Grid):
        self.algorithm     = algorithm
        self.width         = grid.width
        self.height        = grid.height
        self.initial_walls = frozenset(grid.walls())
        self.events: List[StepEvent] = []

    def record(self, event: StepEvent) -> StepEvent:
        numbered = replace(event, step_number=len(self.events))
        self.events.append(numbered)
        return numbered

    def build(self) -> StepTrace:
        return StepTrace(
            algorithm=self.algorithm,
            width=self.width,
            height=self.height,
            initial_walls=self.initial_walls,
            events=tuple(self.events),
        )
