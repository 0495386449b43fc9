"""
step.py — Algorithm Step Events
================================
Every algorithm is a generator that yields Step objects.
A Step is ONE atomic algorithmic event, described purely as data:

    • compare / swap / overwrite / mark-sorted       (sorting)
    • probe / jump / found / not-found               (searching)
    • start / visit / explore-edge / relax / skip    (graph traversal)
    • done                                           (every algorithm)

Design decisions:
  - Step is a frozen dataclass.  It says WHAT happened, never how it
    looks; PlaybackState.apply() interprets it and the renderer draws
    the result.
  - Only the fields a kind needs are filled; the rest keep their empty
    defaults, so steps compare equal field-by-field (re-running an
    algorithm on the same input yields an equal list of steps).
  - `explanation` is the human-readable narration shown under the canvas.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class StepKind(Enum):
    # sorting
    COMPARE      = "compare"
    SWAP         = "swap"
    OVERWRITE    = "overwrite"
    MARK_SORTED  = "mark-sorted"
    # searching
    PROBE        = "probe"
    JUMP         = "jump"
    FOUND        = "found"
    NOT_FOUND    = "not-found"
    # graph
    START        = "start"
    VISIT        = "visit"
    EXPLORE_EDGE = "explore-edge"
    RELAX        = "relax"
    SKIP         = "skip"
    # terminal
    DONE         = "done"


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        kind        : What happened.
        step_number : 0-based position of this step in the run.
        indices     : Array positions involved (sorting / searching).
        nodes       : Node ids involved (graph), e.g. (from, to) for an edge.
        edge        : Id of the edge involved, if any.
        value       : Kind-specific payload — the value written by an
                      overwrite, the distance of a visit / relax, …
        low, high   : Current search bounds, where the algorithm has them.
        explanation : Narration for this step.
        data        : Extra payload (e.g. the initial distance table).
        is_final    : True on the very last step.
    """

    kind:        StepKind
    step_number: int                       = 0
    indices:     Tuple[int, ...]           = ()
    nodes:       Tuple[str, ...]           = ()
    edge:        Optional[str]             = None
    value:       Optional[float]           = None
    low:         Optional[int]             = None
    high:        Optional[int]             = None
    explanation: str                       = ""
    data:        Dict[str, Any]            = field(default_factory=dict)
    is_final:    bool                      = False

    @property
    def index(self) -> Optional[int]:
        """The single index of probe / found / overwrite steps."""
        return self.indices[0] if self.indices else None

    @property
    def node(self) -> Optional[str]:
        """The primary node of visit / relax steps."""
        return self.nodes[0] if self.nodes else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind":        self.kind.value,
            "step_number": self.step_number,
            "indices":     list(self.indices),
            "nodes":       list(self.nodes),
            "edge":        self.edge,
            "value":       self.value,
            "low":         self.low,
            "high":        self.high,
            "explanation": self.explanation,
            "data":        _json_safe(self.data),
            "is_final":    self.is_final,
        }


# ---------------------------------------------------------------------------
# Convenience builder so algorithms don't have to number steps by hand
# ---------------------------------------------------------------------------
class StepBuilder:
    """
    Numbers steps as they are built.

    Usage inside an algorithm generator:
        sb = StepBuilder()
        yield sb.compare(0, 1, "Compare 5 and 3")
        yield sb.swap(0, 1, "5 > 3, swap them")
        yield sb.done("Array sorted.")
    """

    def __init__(self):
        self.step_no = 0

    def build(self, kind: StepKind, **fields) -> Step:
        step = Step(kind=kind, step_number=self.step_no, **fields)
        self.step_no += 1
        return step

    # -- sorting --
    def compare(self, i: int, j: int, explanation: str = "") -> Step:
        return self.build(StepKind.COMPARE, indices=(i, j), explanation=explanation)

    def swap(self, i: int, j: int, explanation: str = "") -> Step:
        return self.build(StepKind.SWAP, indices=(i, j), explanation=explanation)

    def overwrite(self, i: int, value, explanation: str = "") -> Step:
        return self.build(StepKind.OVERWRITE, indices=(i,), value=value, explanation=explanation)

    def mark_sorted(self, *indices: int, explanation: str = "") -> Step:
        return self.build(StepKind.MARK_SORTED, indices=tuple(indices), explanation=explanation)

    # -- searching --
    def probe(self, i: int, low: Optional[int] = None, high: Optional[int] = None, explanation: str = "") -> Step:
        return self.build(StepKind.PROBE, indices=(i,), low=low, high=high, explanation=explanation)

    def jump(self, i: int, low: Optional[int] = None, high: Optional[int] = None, explanation: str = "") -> Step:
        return self.build(StepKind.JUMP, indices=(i,), low=low, high=high, explanation=explanation)

    def found(self, i: int, explanation: str = "") -> Step:
        return self.build(
            StepKind.FOUND, indices=(i,),
            explanation=explanation or f"Target found at index {i}.",
            is_final=True,
        )

    def not_found(self, explanation: str = "") -> Step:
        return self.build(StepKind.NOT_FOUND, explanation=explanation or "Target not found.", is_final=True)

    # -- graph --
    def start(self, node: str, explanation: str = "", **data) -> Step:
        return self.build(StepKind.START, nodes=(node,), explanation=explanation, data=data)

    def visit(self, node: str, distance: Optional[float] = None, explanation: str = "") -> Step:
        if not explanation:
            suffix = f" (distance: {_fmt(distance)})" if distance is not None else ""
            explanation = f"Visiting node {node}{suffix}"
        return self.build(StepKind.VISIT, nodes=(node,), value=distance, explanation=explanation)

    def explore_edge(self, src: str, dst: str, edge_id: str, weight=None, explanation: str = "") -> Step:
        return self.build(
            StepKind.EXPLORE_EDGE, nodes=(src, dst), edge=edge_id, value=weight,
            explanation=explanation or f"Exploring edge from {src} to {dst}",
        )

    def relax(self, node: str, via: str, distance: float, explanation: str = "") -> Step:
        return self.build(
            StepKind.RELAX, nodes=(node, via), value=distance,
            explanation=explanation or (
                f"Found shorter path to {node} through {via}. New distance: {_fmt(distance)}"
            ),
        )

    def skip(self, node: str, distance: float, explanation: str = "") -> Step:
        return self.build(StepKind.SKIP, nodes=(node,), value=distance, explanation=explanation)

    # -- terminal --
    def done(self, explanation: str = "", **data) -> Step:
        return self.build(StepKind.DONE, explanation=explanation, data=data, is_final=True)


def _fmt(value) -> str:
    if value is None:
        return "?"
    if value == float("inf"):
        return "∞"
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def _json_safe(value):
    """Copy of a step payload with ∞ distances replaced by None (JSON has no infinity)."""
    if isinstance(value, dict):
        return {k: _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    if isinstance(value, float) and value == float("inf"):
        return None
    return value
