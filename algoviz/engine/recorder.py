"""
recorder.py — Run Recorder & Analytics
========================================
Records a complete algorithm run (all Steps) without any pacing, replays
it into a private PlaybackState, and computes the metrics the CLI and the
info panel show.

Usage:
    rec = Recorder()
    rec.start("bubble", values=[5, 3, 8, 1])
    metrics = rec.run_to_completion()     # exhausts the producer
    metrics.comparisons                   # 6
    rec.export()                          # serialisable snapshot of the run
"""

import sys
import time
from dataclasses import asdict, dataclass
from typing import Any, Dict, Iterator, List, Optional, Sequence

from algoviz.graph import Graph
from algoviz.algorithms import AlgoInfo, require_algorithm
from algoviz.algorithms.step import Step
from algoviz.engine.state import PlaybackState


# ---------------------------------------------------------------------------
# Metrics dataclass: what the analytics output renders
# ---------------------------------------------------------------------------
@dataclass
class RunMetrics:
    algo_key:      str           = ""
    algo_label:    str           = ""
    family:        str           = ""
    input_size:    int           = 0        # elements, or nodes for graphs
    comparisons:   int           = 0
    swaps:         int           = 0
    writes:        int           = 0
    probes:        int           = 0
    nodes_visited: int           = 0
    relaxations:   int           = 0
    found_index:   Optional[int] = None
    result:        str           = ""
    total_steps:   int           = 0        # number of Steps yielded
    wall_time_ms:  float         = 0.0      # wall-clock time to run to completion
    memory_bytes:  int           = 0        # approx size of the step buffer


# ---------------------------------------------------------------------------
# Recorder
# ---------------------------------------------------------------------------
class Recorder:
    """
    Attributes:
        steps   : Full list of Steps from the run.
        state   : PlaybackState the steps were replayed into.
        metrics : Computed RunMetrics (available after run_to_completion).
    """

    def __init__(self):
        self.steps:   List[Step]           = []
        self.state:   Optional[PlaybackState] = None
        self.metrics: Optional[RunMetrics] = None

        self._algo_info: Optional[AlgoInfo]      = None
        self._producer:  Optional[Iterator[Step]] = None
        self._values:    List[int]                = []
        self._target:    Optional[int]            = None
        self._graph:     Optional[Graph]          = None
        self._start:     Optional[str]            = None

    # ------------------------------------------------------------------
    # Setup & run
    # ------------------------------------------------------------------
    def start(
        self,
        algo_key: str,
        values: Optional[Sequence[int]] = None,
        target: Optional[int] = None,
        graph: Optional[Graph] = None,
        start: Optional[str] = None,
    ) -> None:
        """Build the producer and a fresh state for this run."""
        info = require_algorithm(algo_key)

        self._algo_info = info
        self._values    = list(values or [])
        self._target    = target
        self._graph     = graph
        self._start     = start
        self._producer  = info.steps(values=self._values, target=target, graph=graph, start=start)
        self.steps      = []
        self.metrics    = None
        self.state      = PlaybackState(values=self._values, graph=graph, start_node=start)

    def run_to_completion(self) -> RunMetrics:
        """Exhaust the producer, record and apply every step, compute metrics."""
        if self._producer is None:
            raise RuntimeError("Call start() first.")

        started = time.monotonic()
        self.steps = list(self._producer)
        self.state.apply_all(self.steps)
        wall_ms = (time.monotonic() - started) * 1000

        self._producer = None
        self.metrics = self._compute_metrics(wall_ms)
        return self.metrics

    # ------------------------------------------------------------------
    # Export (serialisable snapshot)
    # ------------------------------------------------------------------
    def export(self) -> Dict[str, Any]:
        return {
            "algo_key": self._algo_info.key if self._algo_info else "",
            "values":   list(self._values),
            "target":   self._target,
            "start":    self._start,
            "graph":    self._graph.to_dict() if self._graph else {},
            "metrics":  asdict(self.metrics) if self.metrics else {},
            "steps":    [s.to_dict() for s in self.steps],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _compute_metrics(self, wall_ms: float) -> RunMetrics:
        info = self._algo_info
        snap = self.state.snapshot()
        counters = snap["counters"]

        # approximate memory: sizeof the steps buffer
        mem = sys.getsizeof(self.steps)
        for s in self.steps:
            mem += sys.getsizeof(s)

        input_size = self._graph.node_count() if self._graph else len(self._values)

        return RunMetrics(
            algo_key=info.key,
            algo_label=info.label,
            family=info.family,
            input_size=input_size,
            comparisons=counters["comparisons"],
            swaps=counters["swaps"],
            writes=counters["writes"],
            probes=counters["probes"],
            nodes_visited=len(snap["visited"]),
            relaxations=counters["relaxations"],
            found_index=snap["found_index"],
            result=snap["result"],
            total_steps=len(self.steps),
            wall_time_ms=round(wall_ms, 2),
            memory_bytes=mem,
        )
