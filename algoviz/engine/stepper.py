"""
stepper.py — Playback Driver
=============================
The Stepper is the ONLY object that moves a run forward.  It pulls Steps
from a producer one at a time, applies each to the shared PlaybackState,
and sleeps `delay_ms` between steps.

State machine:
    IDLE      →  start()          →  RUNNING
    RUNNING   →  pause()          →  PAUSED
    PAUSED    →  resume()         →  RUNNING
    RUNNING   →  (producer ends)  →  COMPLETED
    RUNNING / PAUSED → cancel()   →  CANCELLED
    any       →  reset()          →  IDLE

Loop, per step:
    1. cancelled?  stop before pulling anything
    2. paused?     poll every `poll_interval` seconds, pull nothing
    3. pull one step, apply it, notify on_step
    4. sleep delay_ms

Notes:
  - cancel() is observed at the top of the next iteration; a sleep that is
    already in progress runs to its end.
  - The sleep function is injectable so tests can drive the loop without
    real waiting (and can call pause()/cancel() from inside it).
  - By default the loop runs on a daemon thread; background=False runs it
    inline and returns once the run has ended.
"""

import logging
import threading
import time
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Optional

from algoviz.algorithms.step import Step
from algoviz.engine.state import PlaybackState

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class StepperState(Enum):
    IDLE      = "idle"
    RUNNING   = "running"
    PAUSED    = "paused"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


ACTIVE_STATES = (StepperState.RUNNING, StepperState.PAUSED)


# ---------------------------------------------------------------------------
# Speed presets (milliseconds per step)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   1000,   # teaching mode
    "medium": 400,
    "fast":   150,    # demo mode
    "turbo":  50,
}

MIN_DELAY_MS = 10
MAX_DELAY_MS = 2000


def _clamp_delay(delay_ms) -> int:
    return max(MIN_DELAY_MS, min(MAX_DELAY_MS, int(delay_ms)))


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
class Stepper:
    """
    Attributes:
        state         : The PlaybackState every step is applied to.
        status        : Current StepperState.
        delay_ms      : Pause between steps of the current run.
        poll_interval : Seconds between checks while paused.
        steps_applied : Steps applied in the current run.
        on_step       : Optional callback(Step) fired after each step is applied.
    """

    def __init__(
        self,
        state: PlaybackState,
        sleep: Callable[[float], None] = time.sleep,
        poll_interval: float = 0.05,
        on_step: Optional[Callable[[Step], None]] = None,
    ):
        self.state:         PlaybackState = state
        self.delay_ms:      int           = 0
        self.poll_interval: float         = poll_interval
        self.steps_applied: int           = 0
        self.on_step:       Optional[Callable[[Step], None]] = on_step

        self._sleep   = sleep
        self._status  = StepperState.IDLE
        self._lock    = threading.Lock()
        self._paused  = threading.Event()
        self._cancel  = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._summary: Dict[str, Any] = {}

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(
        self,
        steps: Iterable[Step],
        delay_ms: int,
        background: bool = True,
        state: Optional[PlaybackState] = None,
    ) -> bool:
        """
        Begin playing `steps`.  Returns False, and changes nothing, if a
        playback is already RUNNING or PAUSED.

        Args:
            steps      : Step producer, consumed lazily.
            delay_ms   : Pause after each applied step.
            background : Run on a daemon thread (True) or inline.
            state      : Apply to this state instead of the current one.
        """
        with self._lock:
            if self._status in ACTIVE_STATES:
                logger.warning("Playback already %s; start rejected", self._status.value)
                return False
            if state is not None:
                self.state = state
            self._status = StepperState.RUNNING
            self._paused.clear()
            self._cancel.clear()
            self.delay_ms = _clamp_delay(delay_ms)
            self.steps_applied = 0
            self._summary = {}

        logger.info("Playback started (delay %d ms, background=%s)", self.delay_ms, background)
        if background:
            self._thread = threading.Thread(
                target=self._run, args=(iter(steps),), name="algoviz-playback", daemon=True,
            )
            self._thread.start()
        else:
            self._run(iter(steps))
        return True

    def reset(self, timeout: Optional[float] = None) -> None:
        """Cancel anything in flight, wait for the loop to stop, back to IDLE."""
        self.cancel()
        self.join(timeout)
        with self._lock:
            self._status = StepperState.IDLE
            self._summary = {}
            self.steps_applied = 0

    def join(self, timeout: Optional[float] = None) -> None:
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)

    # ------------------------------------------------------------------
    # Pause / Resume / Cancel
    # ------------------------------------------------------------------
    def pause(self) -> None:
        with self._lock:
            if self._status == StepperState.RUNNING:
                self._paused.set()
                self._status = StepperState.PAUSED
                logger.debug("Playback paused at step %d", self.steps_applied)

    def resume(self) -> None:
        with self._lock:
            if self._status == StepperState.PAUSED:
                self._paused.clear()
                self._status = StepperState.RUNNING
                logger.debug("Playback resumed")

    def toggle_pause(self) -> None:
        if self.status == StepperState.PAUSED:
            self.resume()
        else:
            self.pause()

    def cancel(self) -> None:
        with self._lock:
            if self._status in ACTIVE_STATES:
                self._cancel.set()

    def set_delay(self, delay_ms: int) -> None:
        """Change the pause between steps; a running loop picks it up on its next sleep."""
        self.delay_ms = _clamp_delay(delay_ms)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def status(self) -> StepperState:
        return self._status

    @property
    def is_active(self) -> bool:
        return self._status in ACTIVE_STATES

    @property
    def is_paused(self) -> bool:
        return self._status == StepperState.PAUSED

    @property
    def summary(self) -> Dict[str, Any]:
        """Terminal summary of the last finished run (empty until then)."""
        return dict(self._summary)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _run(self, steps) -> None:
        outcome = StepperState.CANCELLED
        try:
            while True:
                if self._cancel.is_set():
                    break
                while self._paused.is_set() and not self._cancel.is_set():
                    self._sleep(self.poll_interval)
                if self._cancel.is_set():
                    break

                step = next(steps, None)
                if step is None:
                    outcome = StepperState.COMPLETED
                    break

                self.state.apply(step)
                self.steps_applied += 1
                if self.on_step is not None:
                    self.on_step(step)

                if step.is_final:
                    outcome = StepperState.COMPLETED
                    break
                self._sleep(self.delay_ms / 1000.0)
        except Exception:
            logger.exception("Playback aborted after %d steps", self.steps_applied)
            self._finish(StepperState.CANCELLED)
            raise
        self._finish(outcome)

    def _finish(self, outcome: StepperState) -> None:
        snap = self.state.snapshot()
        with self._lock:
            self._status = outcome
            self._paused.clear()
            self._summary = {
                "status":        outcome.value,
                "steps_applied": self.steps_applied,
                "result":        snap["result"],
                "found_index":   snap["found_index"],
                "visited":       snap["visited"],
                "visited_count": len(snap["visited"]),
                "counters":      snap["counters"],
            }
        if outcome == StepperState.COMPLETED:
            logger.info("Playback completed after %d steps: %s", self.steps_applied, snap["result"])
        else:
            logger.info("Playback cancelled after %d steps", self.steps_applied)
