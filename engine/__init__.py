"""
engine/
-------
Interaction, recording & replay layer.

    from engine import Visualizer, VisualizerConfig
"""

from engine.config     import VisualizerConfig, SPEED_PRESETS, resolve_speed
from engine.controller import InteractionController, ControllerState
from engine.recorder   import Recorder, RunMetrics, ComparisonResult, compare
from engine.scheduler  import AnimationScheduler, SchedulerState, RevealKind, RevealTask
from engine.visualizer import Visualizer

__all__ = [
    "VisualizerConfig",
    "SPEED_PRESETS",
    "resolve_speed",
    "InteractionController",
    "ControllerState",
    "Recorder",
    "RunMetrics",
    "ComparisonResult",
    "compare",
    "AnimationScheduler",
    "SchedulerState",
    "RevealKind",
    "RevealTask",
    "Visualizer",
]
