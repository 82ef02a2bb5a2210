"""Rendering of the session state into Gradio component updates.

Every workflow handler returns ``(*render_session(...), ui_state)``. The
order of the rendered values matches ``VIEW_OUTPUT_NAMES`` and the output
list assembled in ``app.create_workflow_tab``.
"""

import logging
from functools import lru_cache
from typing import Any

import gradio as gr

from facescene.core.images import data_url_to_image
from facescene.core.models import FaceOrigin, GeneratedFace
from facescene.core.prompt_builder import describe_face

from ..components import format_error, format_step_indicator
from ..models import FACE_PIPELINE, SCENE_PIPELINE, SUGGESTIONS_PIPELINE, SessionState, WorkflowStage

logger = logging.getLogger(__name__)

VIEW_OUTPUT_NAMES = (
    "step_indicator",
    "error_banner",
    "face_image",
    "face_caption",
    "face_history",
    "free_text",
    "age_range",
    "gender",
    "ethnicity",
    "hair_color",
    "scene_prompt",
    "expression",
    "style",
    "scene_button",
    "topic",
    "suggest_button",
    "suggestions",
    "scene_image",
    "scene_status",
    "scene_history",
)


def face_caption(face: GeneratedFace | None) -> str:
    """Describe where the current face came from."""
    if face is None:
        return "*Generate or upload a face to begin*"
    if face.origin == FaceOrigin.UPLOADED:
        return "**Uploaded face**"
    return f"**Generated:** {describe_face(face.source_attributes)}"


@lru_cache(maxsize=128)
def display_image(data_url: str | None) -> Any:
    """Decode an image handle for display, once per distinct handle.

    Handles that cannot be decoded render as an empty slot instead of
    breaking the whole view.
    """
    if not data_url:
        return None
    try:
        return data_url_to_image(data_url)
    except (ValueError, OSError) as e:
        logger.warning(f"Could not decode image for display: {e}")
        return None


def _face_gallery(history: list[GeneratedFace]) -> list[tuple[Any, str]]:
    return [
        (display_image(face.image_data), face_caption(face).replace("**", ""))
        for face in history
    ]


def render_session(
    session: SessionState,
    *,
    sync_face_form: bool = False,
    sync_scene_form: bool = False,
) -> tuple:
    """Render the session into one value per view output.

    Form fields are only overwritten when asked to, so that a failed
    request never wipes what the user typed.

    Args:
        session: Session state to render
        sync_face_form: Write the face attributes back into the face form
        sync_scene_form: Write scene prompt, expression, style and topic back

    Returns:
        Tuple ordered like VIEW_OUTPUT_NAMES
    """
    lifestyle = session.stage == WorkflowStage.LIFESTYLE and session.face is not None

    if sync_face_form:
        attrs = session.attributes
        face_form = (
            gr.update(value=attrs.free_text, interactive=True),
            gr.update(value=attrs.age_range),
            gr.update(value=attrs.gender),
            gr.update(value=attrs.ethnicity),
            gr.update(value=attrs.hair_color),
        )
    else:
        face_form = (
            gr.update(interactive=not session.is_loading(FACE_PIPELINE)),
            gr.update(),
            gr.update(),
            gr.update(),
            gr.update(),
        )

    scene_inputs_enabled = lifestyle and not session.is_loading(SCENE_PIPELINE)
    if sync_scene_form:
        scene_form = (
            gr.update(value=session.scene_prompt, interactive=scene_inputs_enabled),
            gr.update(value=session.expression, interactive=scene_inputs_enabled),
            gr.update(value=session.style, interactive=scene_inputs_enabled),
        )
        topic = gr.update(value=session.suggestion_topic, interactive=lifestyle)
    else:
        scene_form = (
            gr.update(interactive=scene_inputs_enabled),
            gr.update(interactive=scene_inputs_enabled),
            gr.update(interactive=scene_inputs_enabled),
        )
        topic = gr.update(interactive=lifestyle)

    suggestions = gr.update(
        choices=list(session.suggestions),
        value=None,
        visible=bool(session.suggestions),
    )

    return (
        format_step_indicator(session.stage),
        gr.update(value=format_error(session.error), visible=bool(session.error)),
        display_image(session.face.image_data) if session.face else None,
        face_caption(session.face),
        _face_gallery(session.face_history),
        *face_form,
        *scene_form,
        gr.update(interactive=scene_inputs_enabled),
        topic,
        gr.update(interactive=lifestyle and not session.is_loading(SUGGESTIONS_PIPELINE)),
        suggestions,
        display_image(session.scene),
        session.scene_status,
        [display_image(image) for image in session.scene_history],
    )
