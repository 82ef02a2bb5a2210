"""Reusable UI components for the Facescene Gradio interface."""

import gradio as gr

from facescene.core.models import (
    AGE_RANGES,
    ANY,
    DEFAULT_EXPRESSION,
    DEFAULT_STYLE,
    ETHNICITIES,
    EXPRESSIONS,
    GENDERS,
    HAIR_COLORS,
    STYLES,
    FaceAttributes,
)

from .models import WorkflowStage


class FaceFormUI:
    """Step 1 inputs: face description, attribute dropdowns and upload.

    Each instance creates:
    - Free-text description
    - "Refine with Specifics" accordion with gender, age, ethnicity and hair color
    - Generate button and upload button
    """

    def __init__(self):
        with gr.Group():
            self.free_text = gr.Textbox(
                label="Step 1: Describe or Upload a Face",
                placeholder=(
                    "e.g., smiling, wearing glasses, with a distinctive birthmark. "
                    "This adds extra detail."
                ),
                lines=3,
            )

            with gr.Accordion("Refine with Specifics", open=False):
                with gr.Row():
                    self.gender = gr.Dropdown(label="Gender", choices=GENDERS, value=ANY)
                    self.age_range = gr.Dropdown(label="Age Range", choices=AGE_RANGES, value=ANY)
                with gr.Row():
                    self.ethnicity = gr.Dropdown(
                        label="Ethnicity", choices=ETHNICITIES, value=ANY
                    )
                    self.hair_color = gr.Dropdown(
                        label="Hair Color", choices=HAIR_COLORS, value=ANY
                    )

            with gr.Row():
                self.generate_btn = gr.Button("Generate Face", variant="primary", scale=2)
                self.upload_btn = gr.UploadButton(
                    "Upload a Face",
                    file_types=[".jpg", ".jpeg", ".png"],
                    type="filepath",
                    scale=1,
                )

    def get_input_components(self) -> list[gr.components.Component]:
        """Return the attribute inputs in FaceFormUI.values_to_attributes order."""
        return [self.free_text, self.age_range, self.gender, self.ethnicity, self.hair_color]

    @staticmethod
    def values_to_attributes(
        free_text: str,
        age_range: str,
        gender: str,
        ethnicity: str,
        hair_color: str,
    ) -> FaceAttributes:
        """Convert UI component values to FaceAttributes.

        Empty dropdown values (cleared by the user) are treated as "Any".
        """
        return FaceAttributes(
            free_text=free_text or "",
            age_range=age_range or ANY,
            gender=gender or ANY,
            ethnicity=ethnicity or ANY,
            hair_color=hair_color or ANY,
        )


class SceneFormUI:
    """Step 2 inputs: scene prompt, expression, style and scene ideas."""

    def __init__(self):
        with gr.Group():
            self.scene_prompt = gr.Textbox(
                label="Step 2: Create a Scene",
                placeholder="e.g., reading a book in a cozy cafe during golden hour",
                lines=3,
                interactive=False,
            )
            with gr.Row():
                self.expression = gr.Dropdown(
                    label="Expression",
                    choices=EXPRESSIONS,
                    value=DEFAULT_EXPRESSION,
                    interactive=False,
                )
                self.style = gr.Dropdown(
                    label="Style", choices=STYLES, value=DEFAULT_STYLE, interactive=False
                )
            self.generate_btn = gr.Button("Create Scene", variant="primary", interactive=False)

        with gr.Accordion("Need ideas?", open=False):
            with gr.Row():
                self.topic = gr.Textbox(
                    label="Topic",
                    placeholder="e.g., weekend hobbies, travel, coffee",
                    interactive=False,
                    scale=3,
                )
                self.suggest_btn = gr.Button("Get Ideas", interactive=False, scale=1)
            self.suggestions = gr.Radio(
                label="Scene Ideas (click one to use it)",
                choices=[],
                visible=False,
            )

    def get_input_components(self) -> list[gr.components.Component]:
        """Return the scene inputs (prompt, expression, style)."""
        return [self.scene_prompt, self.expression, self.style]


def format_step_indicator(stage: WorkflowStage) -> str:
    """Format the two-step progress indicator.

    Args:
        stage: Active workflow stage

    Returns:
        Markdown/HTML string with the active step highlighted
    """
    face_active = stage == WorkflowStage.FACE
    face_color = "#0ea5e9" if face_active else "#6b7280"
    scene_color = "#14b8a6" if not face_active else "#6b7280"
    return (
        f'<span style="color: {face_color}">**① Generate Face**</span>'
        " ──── "
        f'<span style="color: {scene_color}">**② Create Scene**</span>'
    )


def format_error(message: str | None) -> str:
    """Format the error banner text."""
    if not message:
        return ""
    return f"❌ **Error:** {message}"
