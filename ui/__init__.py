"""
ui/
---
Presentation layer.

    from ui import render_canvas
    from ui import playback_controls, source_target_picker, …
"""

from ui.canvas import render_canvas, circle_layout, CanvasConfig

from ui.controls import (
    playback_controls,
    source_target_picker,
    graph_importer,
    analytics_panel,
    pseudocode_viewer,
    explanation_panel,
    event_log_panel,
)

__all__ = [
    "render_canvas",
    "circle_layout",
    "CanvasConfig",
    "playback_controls",
    "source_target_picker",
    "graph_importer",
    "analytics_panel",
    "pseudocode_viewer",
    "explanation_panel",
    "event_log_panel",
]
