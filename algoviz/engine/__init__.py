"""
engine/
-------
Playback & recording layer.

    from algoviz.engine import PlaybackState, Stepper, Recorder
"""

from algoviz.engine.state    import PlaybackState
from algoviz.engine.stepper  import Stepper, StepperState, SPEED_PRESETS, MIN_DELAY_MS, MAX_DELAY_MS
from algoviz.engine.recorder import Recorder, RunMetrics

__all__ = [
    "PlaybackState",
    "Stepper",
    "StepperState",
    "SPEED_PRESETS",
    "MIN_DELAY_MS",
    "MAX_DELAY_MS",
    "Recorder",
    "RunMetrics",
]
