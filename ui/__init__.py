"""
ui/
---
Presentation layer.

    from ui import render_canvas
    from ui import playback_controls, algorithm_selector, …
"""

from ui.canvas import render_canvas, CanvasConfig

from ui.controls import (
    playback_controls,
    algorithm_selector,
    start_node_picker,
    node_editor,
    edge_editor,
    custom_code_editor,
    run_status_panel,
)

__all__ = [
    "render_canvas",
    "CanvasConfig",
    "playback_controls",
    "algorithm_selector",
    "start_node_picker",
    "node_editor",
    "edge_editor",
    "custom_code_editor",
    "run_status_panel",
]
