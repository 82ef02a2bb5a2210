"""Gradio UI for Facescene."""

import logging

import gradio as gr

from facescene.core.config import config

from .components import FaceFormUI, SceneFormUI, format_step_indicator
from .handlers import (
    generate_face,
    generate_scene,
    generate_suggestions,
    lock_button,
    reset_session,
    select_face_from_history,
    select_scene_from_history,
    upload_face,
    use_suggestion,
)
from .models import UIState, WorkflowStage

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def create_ui() -> tuple[gr.Blocks, str]:
    """Create the Gradio UI.

    Returns:
        Tuple of (Gradio Blocks app, custom CSS string)
    """
    custom_css = """
    .error-banner {
        border: 1px solid #ef4444;
        border-radius: 8px;
        padding: 8px 12px;
        background: rgba(239, 68, 68, 0.15);
    }
    """

    app = gr.Blocks(title="Facescene")

    with app:
        # Session state - one instance per user
        ui_state = gr.State(UIState())

        gr.Markdown(
            """
            # Facescene
            ### Generate a face, then place it into lifestyle scenes
            """
        )

        create_workflow_tab(ui_state)

    return app, custom_css


def create_workflow_tab(ui_state):
    """Create the two-step workflow UI and wire its events.

    Args:
        ui_state: UI state component
    """
    step_indicator = gr.Markdown(format_step_indicator(WorkflowStage.FACE))
    error_banner = gr.Markdown(visible=False, elem_classes=["error-banner"])

    with gr.Row():
        # Column 1: inputs
        with gr.Column(scale=1):
            face_form = FaceFormUI()
            scene_form = SceneFormUI()
            reset_btn = gr.Button("Start Over", variant="stop", size="sm")

        # Column 2: face
        with gr.Column(scale=1):
            face_image = gr.Image(
                label="Generated Face",
                type="pil",
                interactive=False,
                height=400,
            )
            face_caption = gr.Markdown("*Generate or upload a face to begin*")
            with gr.Accordion("Face History", open=False):
                face_history = gr.Gallery(
                    label="Previous Faces",
                    columns=4,
                    height=200,
                    object_fit="cover",
                    allow_preview=False,
                )

        # Column 3: scene
        with gr.Column(scale=1):
            scene_image = gr.Image(
                label="Lifestyle Scene",
                type="pil",
                interactive=False,
                height=400,
            )
            scene_status = gr.Markdown("")
            with gr.Accordion("Scene History", open=False):
                scene_history = gr.Gallery(
                    label="Previous Scenes",
                    columns=4,
                    height=200,
                    object_fit="cover",
                    allow_preview=False,
                )

    # Ordered like handlers.view.VIEW_OUTPUT_NAMES
    view_outputs = [
        step_indicator,
        error_banner,
        face_image,
        face_caption,
        face_history,
        *face_form.get_input_components(),
        *scene_form.get_input_components(),
        scene_form.generate_btn,
        scene_form.topic,
        scene_form.suggest_btn,
        scene_form.suggestions,
        scene_image,
        scene_status,
        scene_history,
    ]
    handler_outputs = view_outputs + [ui_state]
    face_inputs = face_form.get_input_components()

    # Face generation: lock the button, then run the pipeline
    face_form.generate_btn.click(
        fn=lock_button,
        outputs=[face_form.generate_btn],
        queue=False,
    ).then(
        fn=generate_face,
        inputs=[*face_inputs, ui_state],
        outputs=handler_outputs,
    ).then(
        fn=lambda: gr.update(interactive=True),
        outputs=[face_form.generate_btn],
    )

    face_form.upload_btn.upload(
        fn=upload_face,
        inputs=[face_form.upload_btn, *face_inputs, ui_state],
        outputs=handler_outputs,
    )

    face_history.select(
        fn=select_face_from_history,
        inputs=[ui_state],
        outputs=handler_outputs,
    )

    # Scene compositing
    scene_form.generate_btn.click(
        fn=lock_button,
        outputs=[scene_form.generate_btn],
        queue=False,
    ).then(
        fn=generate_scene,
        inputs=[*scene_form.get_input_components(), ui_state],
        outputs=handler_outputs,
    )

    scene_history.select(
        fn=select_scene_from_history,
        inputs=[ui_state],
        outputs=handler_outputs,
    )

    # Scene ideas
    scene_form.suggest_btn.click(
        fn=lock_button,
        outputs=[scene_form.suggest_btn],
        queue=False,
    ).then(
        fn=generate_suggestions,
        inputs=[scene_form.topic, *face_inputs, ui_state],
        outputs=handler_outputs,
    )

    scene_form.suggestions.select(
        fn=use_suggestion,
        inputs=[scene_form.suggestions, ui_state],
        outputs=[scene_form.scene_prompt, ui_state],
    )

    reset_btn.click(
        fn=reset_session,
        inputs=[ui_state],
        outputs=handler_outputs,
    )


def main():
    """Main entry point for the application."""
    logger.info("Starting Facescene...")
    logger.info(f"Configuration: {config.model_dump(exclude={'api_key'})}")

    app, custom_css = create_ui()

    logger.info(f"Launching Gradio UI on {config.gradio_server_name}:{config.gradio_server_port}")

    app.launch(
        server_name=config.gradio_server_name,
        server_port=config.gradio_server_port,
        share=config.gradio_share,
        show_error=True,
        inbrowser=False,
        css=custom_css,
    )


if __name__ == "__main__":
    main()
