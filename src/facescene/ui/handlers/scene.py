"""Lifestyle stage handlers: scenes, scene history and scene ideas."""

import logging

import gradio as gr

from facescene.core.errors import FacesceneError
from facescene.core.models import SceneRequest

from ..components import FaceFormUI
from ..models import STATUS_ANALYZING, STATUS_CREATING, UIState
from ..state import initialize_ui_state
from ..validation import ValidationError
from .view import render_session

logger = logging.getLogger(__name__)

# Progress bar position for each scene pipeline status
_STATUS_PROGRESS = {STATUS_ANALYZING: 0.2, STATUS_CREATING: 0.6}


async def generate_scene(
    scene_prompt: str,
    expression: str,
    style: str,
    state: UIState,
    progress: gr.Progress = gr.Progress(),
) -> tuple:
    """Composite the current face into the described scene.

    Args:
        scene_prompt: Scene description typed by the user
        expression: Expression choice
        style: Style choice
        state: UI state
        progress: Gradio progress tracker (injected by Gradio)

    Returns:
        Tuple of (*view_updates, updated_state)
    """
    state = initialize_ui_state(state)
    workflow = state.workflow
    request = SceneRequest(raw_prompt=scene_prompt or "", expression=expression, style=style)

    def on_status(message: str) -> None:
        progress(_STATUS_PROGRESS.get(message, 0.0), desc=message)

    try:
        session = await workflow.submit_scene(request, on_status=on_status)
        return (*render_session(session), state)

    except ValidationError as e:
        logger.warning(f"Validation error: {e}")
    except FacesceneError as e:
        logger.error(f"Scene generation failed: {e}")
    except Exception as e:
        logger.error(f"Error creating scene: {e}", exc_info=True)

    return (*render_session(workflow.state), state)


def select_scene_from_history(state: UIState, evt: gr.SelectData) -> tuple:
    """Show a scene picked in the scene history gallery.

    Args:
        state: UI state
        evt: Gallery selection event (index of the picked scene)

    Returns:
        Tuple of (*view_updates, updated_state)
    """
    state = initialize_ui_state(state)
    workflow = state.workflow

    index = evt.index if isinstance(evt.index, int) else evt.index[0]
    history = workflow.state.scene_history
    if not 0 <= index < len(history):
        logger.warning(f"Scene history index out of range: {index}")
        return (*render_session(workflow.state), state)

    session = workflow.select_from_scene_history(history[index])
    return (*render_session(session), state)


async def generate_suggestions(
    topic: str,
    free_text: str,
    age_range: str,
    gender: str,
    ethnicity: str,
    hair_color: str,
    state: UIState,
) -> tuple:
    """Ask for three scene ideas about a topic.

    Args:
        topic: Topic for the ideas
        free_text: Free-text face description
        age_range: Age range choice
        gender: Gender choice
        ethnicity: Ethnicity choice
        hair_color: Hair color choice
        state: UI state

    Returns:
        Tuple of (*view_updates, updated_state)
    """
    state = initialize_ui_state(state)
    workflow = state.workflow
    attrs = FaceFormUI.values_to_attributes(free_text, age_range, gender, ethnicity, hair_color)

    try:
        session = await workflow.request_suggestions(topic or "", attrs)
        return (*render_session(session), state)

    except ValidationError as e:
        logger.warning(f"Validation error: {e}")
    except FacesceneError as e:
        logger.error(f"Failed to fetch suggestions: {e}")
    except Exception as e:
        logger.error(f"Error fetching suggestions: {e}", exc_info=True)

    return (*render_session(workflow.state), state)


def use_suggestion(suggestion: str | None, state: UIState) -> tuple[dict, UIState]:
    """Copy a clicked scene idea into the scene prompt.

    Args:
        suggestion: Selected suggestion text (None when the radio is cleared)
        state: UI state

    Returns:
        Tuple of (scene_prompt_update, updated_state)
    """
    if not suggestion:
        return gr.update(), state

    state = initialize_ui_state(state)
    session = state.workflow.use_suggestion(suggestion)
    return gr.update(value=session.scene_prompt), state
