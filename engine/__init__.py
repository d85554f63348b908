"""
engine/
-------
Run coordination & playback layer.

    from engine import PlaybackEngine, run_traversal, Workspace
"""

from engine.playback  import PlaybackEngine, PlaybackState, SPEED_PRESETS, DEFAULT_INTERVAL, MIN_INTERVAL
from engine.runner    import RunResult, RunStatus, run_traversal
from engine.workspace import Workspace, DEFAULT_CUSTOM_SOURCE

__all__ = [
    "PlaybackEngine",
    "PlaybackState",
    "SPEED_PRESETS",
    "DEFAULT_INTERVAL",
    "MIN_INTERVAL",
    "RunResult",
    "RunStatus",
    "run_traversal",
    "Workspace",
    "DEFAULT_CUSTOM_SOURCE",
]
