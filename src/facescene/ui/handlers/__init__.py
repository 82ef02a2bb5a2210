"""UI event handlers organized by feature area.

This package provides handlers for all Gradio UI events:
- face: Face generation, upload and face history
- scene: Scene compositing, scene history and scene ideas
- session: Reset and request locking
- view: Rendering of the session state into component updates
"""

from .face import (
    generate_face,
    select_face_from_history,
    upload_face,
)
from .scene import (
    generate_scene,
    generate_suggestions,
    select_scene_from_history,
    use_suggestion,
)
from .session import (
    lock_button,
    reset_session,
)
from .view import VIEW_OUTPUT_NAMES, render_session

__all__ = [
    # Face handlers
    "generate_face",
    "select_face_from_history",
    "upload_face",
    # Scene handlers
    "generate_scene",
    "generate_suggestions",
    "select_scene_from_history",
    "use_suggestion",
    # Session handlers
    "lock_button",
    "reset_session",
    # Rendering
    "VIEW_OUTPUT_NAMES",
    "render_session",
]
