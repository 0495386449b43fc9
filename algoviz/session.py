"""
session.py — Visualizer Session
================================
Everything one browser tab can change, and the single Playback Driver
that animates it.

    session = VisualizerSession(load_config())
    session.set_algorithm("sorting", "merge")
    session.run("sorting")               # False if a playback is active
    session.snapshot("sorting")          # JSON-safe view of the state

Views:
    sorting   – random / custom array, one of the four sorts
    searching – sorted random array + target, one of the six searches
    graph     – random skip-ring graph + start node, BFS / DFS / Dijkstra

Input rules while a playback is RUNNING or PAUSED:
  • custom array, target, algorithm, start node and graph changes are
    ignored (the call returns False and nothing changes)
  • "new random array" cancels the playback and replaces the array
  • delay changes apply immediately

Invalid input (empty custom list, non-numeric target) is a no-op that
keeps the previous value.  Unknown algorithm keys or node ids raise
ValueError.
"""

import logging
import random
import threading
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from algoviz import collection
from algoviz.algorithms import GRAPH, SEARCHING, SORTING, AlgoInfo, algorithms_by_family, require_algorithm
from algoviz.config import Config
from algoviz.engine import PlaybackState, Stepper
from algoviz.graph import Graph

logger = logging.getLogger(__name__)

VIEW_FAMILIES = {
    "sorting":   SORTING,
    "searching": SEARCHING,
    "graph":     GRAPH,
}


@dataclass
class View:
    """One visualizer page: chosen algorithm, pacing, presented state."""

    name:     str
    family:   str
    algo_key: str
    delay_ms: int
    state:    PlaybackState

    @property
    def algo(self) -> AlgoInfo:
        return require_algorithm(self.algo_key, self.family)


class VisualizerSession:
    """
    Attributes:
        config        : Bounds and defaults.
        array         : Input collection of the sorting view.
        search_array  : Sorted input collection of the searching view.
        target        : Search target, None until set.
        graph         : Graph of the graph view.
        start_node    : Traversal start.
        views         : {"sorting": View, "searching": View, "graph": View}
        driver        : The one Stepper shared by all views.
    """

    def __init__(self, config: Optional[Config] = None, background: bool = True, sleep=None):
        self.config = config or Config()
        self.background = background
        self._rng = random.Random(self.config.seed)
        self._lock = threading.RLock()

        self.array:        List[int]     = []
        self.search_array: List[int]     = []
        self.target:       Optional[int] = None
        self.graph:        Graph         = Graph()
        self.start_node:   Optional[str] = None

        self.views: Dict[str, View] = {}
        defaults = {
            "sorting":   self.config.sorting.default_algorithm,
            "searching": self.config.searching.default_algorithm,
            "graph":     self.config.graph.default_algorithm,
        }
        for name, family in VIEW_FAMILIES.items():
            info = require_algorithm(defaults[name], family)
            self.views[name] = View(
                name=name, family=family, algo_key=info.key,
                delay_ms=self._default_delay(info), state=PlaybackState(),
            )

        driver_kwargs: Dict[str, Any] = {"poll_interval": self.config.playback.poll_interval}
        if sleep is not None:
            driver_kwargs["sleep"] = sleep
        self.driver = Stepper(self.views["sorting"].state, **driver_kwargs)
        self.active_view: Optional[str] = None

        self.generate_array()
        self.generate_search_array()
        self.generate_graph()

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def view(self, name: str) -> View:
        if name not in self.views:
            raise ValueError(f"Unknown view: {name}")
        return self.views[name]

    @property
    def busy(self) -> bool:
        return self.driver.is_active

    def _default_delay(self, info: AlgoInfo) -> int:
        delay = self.config.playback.default_delay_ms or info.default_delay_ms
        return self._clamp_delay(delay)

    def _clamp_delay(self, delay_ms: int) -> int:
        pb = self.config.playback
        return collection.clamp(int(delay_ms), pb.min_delay_ms, pb.max_delay_ms)

    def _seed(self) -> int:
        return self._rng.randrange(2 ** 32)

    def _ignored(self, what: str) -> bool:
        if self.busy:
            logger.info("Ignoring %s while a playback is active", what)
            return True
        return False

    def _cancel_active(self) -> None:
        if self.busy:
            logger.info("Cancelling %s playback", self.active_view)
        self.driver.reset()
        self.active_view = None

    # ------------------------------------------------------------------
    # Sorting inputs
    # ------------------------------------------------------------------
    def generate_array(self, size: Optional[int] = None) -> List[int]:
        """New random array; cancels any running playback first."""
        cfg = self.config.sorting
        with self._lock:
            self._cancel_active()
            size = collection.clamp(int(size if size is not None else cfg.default_size), cfg.min_size, cfg.max_size)
            self.array = collection.random_array(size, cfg.min_value, cfg.max_value, seed=self._seed())
            self.views["sorting"].state.load(values=self.array)
            logger.debug("New %d-element array", size)
            return list(self.array)

    def set_custom_array(self, text: str) -> bool:
        with self._lock:
            if self._ignored("custom array"):
                return False
            values = collection.parse_custom_array(text or "")
            if not values:
                return False
            max_size = self.config.sorting.max_size
            if len(values) > max_size:
                logger.info("Custom array truncated from %d to %d elements", len(values), max_size)
                values = values[:max_size]
            self.array = values
            self.views["sorting"].state.load(values=self.array)
            return True

    # ------------------------------------------------------------------
    # Searching inputs
    # ------------------------------------------------------------------
    def generate_search_array(self) -> List[int]:
        cfg = self.config.searching
        with self._lock:
            self._cancel_active()
            self.search_array = collection.random_sorted_array(
                cfg.size, cfg.min_value, cfg.max_value, seed=self._seed(),
            )
            self.views["searching"].state.load(values=self.search_array)
            return list(self.search_array)

    def set_target(self, raw) -> bool:
        with self._lock:
            if self._ignored("target change"):
                return False
            target = collection.parse_target(raw)
            if target is None:
                return False
            self.target = target
            return True

    # ------------------------------------------------------------------
    # Graph inputs
    # ------------------------------------------------------------------
    def generate_graph(self, nodes: Optional[int] = None, seed: Optional[int] = None) -> bool:
        cfg = self.config.graph
        with self._lock:
            if self._ignored("graph change"):
                return False
            count = collection.clamp(int(nodes if nodes is not None else cfg.default_nodes), cfg.min_nodes, cfg.max_nodes)
            self.graph = Graph.generate_random(
                num_nodes=count,
                weight_range=(cfg.min_weight, cfg.max_weight),
                extra_link_probability=cfg.extra_link_probability,
                seed=seed if seed is not None else self._seed(),
                center=(cfg.center_x, cfg.center_y),
                radius=cfg.radius,
            )
            if self.start_node not in self.graph.nodes:
                self.start_node = self.graph.node_ids()[0]
            self.views["graph"].state.load(graph=self.graph, start_node=self.start_node)
            logger.debug("New graph %r", self.graph)
            return True

    def set_start(self, node_id: str) -> bool:
        with self._lock:
            if self._ignored("start node change"):
                return False
            if not self.graph.has_node(node_id):
                raise ValueError(f"Unknown start node: {node_id}")
            self.start_node = node_id
            self.views["graph"].state.load(graph=self.graph, start_node=node_id)
            return True

    # ------------------------------------------------------------------
    # Algorithm & pacing
    # ------------------------------------------------------------------
    def set_algorithm(self, view_name: str, algo_key: str) -> bool:
        with self._lock:
            view = self.view(view_name)
            info = require_algorithm(algo_key, view.family)
            if self._ignored("algorithm change"):
                return False
            view.algo_key = info.key
            view.delay_ms = self._default_delay(info)
            return True

    def set_delay(self, delay_ms: int, view_name: Optional[str] = None) -> int:
        """Clamp and apply a new delay to one view (all views when None)."""
        delay = self._clamp_delay(delay_ms)
        with self._lock:
            names = [view_name] if view_name else list(self.views)
            for name in names:
                self.view(name).delay_ms = delay
            if self.active_view in names:
                self.driver.set_delay(delay)
        return delay

    # ------------------------------------------------------------------
    # Playback
    # ------------------------------------------------------------------
    def run(self, view_name: str) -> bool:
        """Start the selected algorithm of a view.  False if one is already active."""
        with self._lock:
            view = self.view(view_name)
            if self.busy:
                logger.warning("Run of %s rejected: %s playback active", view_name, self.active_view)
                return False

            info = view.algo
            if view.family == SORTING:
                view.state.load(values=self.array)
                steps = info.steps(values=self.array)
            elif view.family == SEARCHING:
                if self.target is None:
                    raise ValueError("Enter a target value first")
                view.state.load(values=self.search_array)
                steps = info.steps(values=self.search_array, target=self.target)
            else:
                steps = info.steps(graph=self.graph, start=self.start_node)
                view.state.load(graph=self.graph, start_node=self.start_node)

            logger.info("Running %s on the %s view", info.label, view_name)
            self.active_view = view_name
            return self.driver.start(steps, view.delay_ms, background=self.background, state=view.state)

    def toggle_pause(self) -> str:
        self.driver.toggle_pause()
        return self.driver.status.value

    def pause(self) -> None:
        self.driver.pause()

    def resume(self) -> None:
        self.driver.resume()

    def cancel(self) -> None:
        self.driver.cancel()

    def reset(self, view_name: Optional[str] = None) -> None:
        """Stop any playback and restore the un-played look of a view (or all)."""
        with self._lock:
            self._cancel_active()
            names = [view_name] if view_name else list(self.views)
            for name in names:
                view = self.view(name)
                if view.family == SORTING:
                    view.state.load(values=self.array)
                elif view.family == SEARCHING:
                    view.state.load(values=self.search_array)
                else:
                    view.state.load(graph=self.graph, start_node=self.start_node)

    # ------------------------------------------------------------------
    # Read side
    # ------------------------------------------------------------------
    def status_of(self, view_name: str) -> str:
        if self.active_view == view_name:
            return self.driver.status.value
        return "idle"

    def snapshot(self, view_name: str) -> Dict[str, Any]:
        view = self.view(view_name)
        data: Dict[str, Any] = {
            "view":       view.name,
            "algo_key":   view.algo_key,
            "algorithms": [a.key for a in algorithms_by_family(view.family)],
            "delay_ms":   view.delay_ms,
            "status":     self.status_of(view_name),
            "busy":       self.busy,
            "state":      view.state.snapshot(),
        }
        if self.active_view == view_name:
            data["summary"] = self.driver.summary
        if view.family == SEARCHING:
            data["target"] = self.target
        if view.family == GRAPH:
            data["start_node"] = self.start_node
            data["graph"] = self.graph.to_dict()
        return data
