"""Session-wide handlers."""

import logging

import gradio as gr

from ..models import UIState
from ..state import initialize_ui_state
from .view import render_session

logger = logging.getLogger(__name__)


def reset_session(state: UIState) -> tuple:
    """Start over: clear histories, forms and errors.

    Args:
        state: UI state

    Returns:
        Tuple of (*view_updates, updated_state)
    """
    state = initialize_ui_state(state)
    session = state.workflow.reset()
    return (*render_session(session, sync_face_form=True, sync_scene_form=True), state)


def lock_button() -> dict:
    """Disable the button that triggered a request until it completes."""
    return gr.update(interactive=False)
