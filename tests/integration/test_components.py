"""Integration tests for UI components."""

import inspect
from unittest.mock import Mock, patch

import gradio as gr

from facescene.core.models import ANY, FaceAttributes
from facescene.ui.app import create_ui, main
from facescene.ui.components import (
    FaceFormUI,
    SceneFormUI,
    format_error,
    format_step_indicator,
)
from facescene.ui.handlers import VIEW_OUTPUT_NAMES
from facescene.ui.models import WorkflowStage


class TestFaceFormUI:
    """Integration tests for FaceFormUI component."""

    def test_face_form_creation(self):
        """Test that FaceFormUI builds its inputs inside a Blocks context."""
        with gr.Blocks():
            form = FaceFormUI()

        assert isinstance(form.free_text, gr.Textbox)
        assert isinstance(form.gender, gr.Dropdown)
        assert isinstance(form.upload_btn, gr.UploadButton)

    def test_get_input_components(self):
        """Test that inputs come in values_to_attributes order."""
        with gr.Blocks():
            form = FaceFormUI()

        assert form.get_input_components() == [
            form.free_text,
            form.age_range,
            form.gender,
            form.ethnicity,
            form.hair_color,
        ]

    def test_values_to_attributes(self):
        attrs = FaceFormUI.values_to_attributes("freckles", "18-25", "Woman", "Asian", "Red")

        assert attrs == FaceAttributes(
            free_text="freckles",
            age_range="18-25",
            gender="Woman",
            ethnicity="Asian",
            hair_color="Red",
        )

    def test_cleared_values_become_any(self):
        """Test that None and empty dropdowns map to 'Any'."""
        attrs = FaceFormUI.values_to_attributes(None, None, "", None, "")

        assert attrs.free_text == ""
        assert attrs.age_range == attrs.gender == attrs.ethnicity == attrs.hair_color == ANY


class TestSceneFormUI:
    """Integration tests for SceneFormUI component."""

    def test_scene_form_starts_locked(self):
        with gr.Blocks():
            form = SceneFormUI()

        assert len(form.get_input_components()) == 3
        assert form.generate_btn.interactive is False
        assert form.suggestions.visible is False


class TestFormatting:
    """Tests for step indicator and error banner formatting."""

    def test_step_indicator_highlights_face(self):
        text = format_step_indicator(WorkflowStage.FACE)

        assert '<span style="color: #0ea5e9">**① Generate Face**</span>' in text
        assert '<span style="color: #6b7280">**② Create Scene**</span>' in text

    def test_step_indicator_highlights_scene(self):
        text = format_step_indicator(WorkflowStage.LIFESTYLE)

        assert '<span style="color: #14b8a6">**② Create Scene**</span>' in text

    def test_format_error(self):
        assert format_error("quota exceeded") == "❌ **Error:** quota exceeded"
        assert format_error(None) == ""
        assert format_error("") == ""


class TestCreateUI:
    """Tests for full app assembly."""

    def test_create_ui_builds_blocks(self):
        """Test that the app builds without a service connection."""
        app, css = create_ui()

        assert isinstance(app, gr.Blocks)
        assert ".error-banner" in css

    def test_view_outputs_are_unique(self):
        assert len(set(VIEW_OUTPUT_NAMES)) == len(VIEW_OUTPUT_NAMES)

    def test_launch_accepts_css(self):
        """Test that the installed Gradio takes the stylesheet at launch."""
        assert "css" in inspect.signature(gr.Blocks.launch).parameters

    def test_main_passes_css_to_launch(self):
        """Test that main launches the app with the custom stylesheet."""
        with patch("facescene.ui.app.create_ui") as mock_create:
            app = Mock()
            mock_create.return_value = (app, ".error-banner {}")

            main()

        app.launch.assert_called_once()
        assert app.launch.call_args.kwargs["css"] == ".error-banner {}"
