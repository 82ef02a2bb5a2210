"""Face stage handlers: generate, upload and pick from history."""

import logging

import gradio as gr

from facescene.core.errors import FacesceneError
from facescene.core.images import read_upload

from ..components import FaceFormUI
from ..models import UIState
from ..state import initialize_ui_state
from ..validation import ValidationError
from .view import render_session

logger = logging.getLogger(__name__)


async def generate_face(
    free_text: str,
    age_range: str,
    gender: str,
    ethnicity: str,
    hair_color: str,
    state: UIState,
) -> tuple:
    """Generate a face from the form values.

    Args:
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
        session = await workflow.submit_face(attrs)
        return (*render_session(session, sync_scene_form=True), state)

    except ValidationError as e:
        logger.warning(f"Validation error: {e}")
    except FacesceneError as e:
        logger.error(f"Face generation failed: {e}")
    except Exception as e:
        logger.error(f"Error generating face: {e}", exc_info=True)

    return (*render_session(workflow.state), state)


def upload_face(
    file_path: str | None,
    free_text: str,
    age_range: str,
    gender: str,
    ethnicity: str,
    hair_color: str,
    state: UIState,
) -> tuple:
    """Use an uploaded JPEG or PNG as the face.

    Args:
        file_path: Temporary path of the uploaded file
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

    if not file_path:
        return (*render_session(workflow.state), state)

    attrs = FaceFormUI.values_to_attributes(free_text, age_range, gender, ethnicity, hair_color)

    try:
        data, mime_type = read_upload(file_path)
        session = workflow.upload_face(data, mime_type, attrs)
        return (*render_session(session, sync_scene_form=True), state)

    except ValidationError as e:
        logger.warning(f"Validation error: {e}")
    except OSError as e:
        logger.error(f"Failed to read uploaded file: {e}", exc_info=True)
        workflow.state.error = "Failed to read the uploaded file."

    return (*render_session(workflow.state), state)


def select_face_from_history(state: UIState, evt: gr.SelectData) -> tuple:
    """Restore a face picked in the face history gallery.

    Args:
        state: UI state
        evt: Gallery selection event (index of the picked face)

    Returns:
        Tuple of (*view_updates, updated_state)
    """
    state = initialize_ui_state(state)
    workflow = state.workflow

    index = evt.index if isinstance(evt.index, int) else evt.index[0]
    history = workflow.state.face_history
    if not 0 <= index < len(history):
        logger.warning(f"Face history index out of range: {index}")
        return (*render_session(workflow.state), state)

    session = workflow.select_from_face_history(history[index])
    return (*render_session(session, sync_face_form=True, sync_scene_form=True), state)
