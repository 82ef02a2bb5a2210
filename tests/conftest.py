"""Shared pytest fixtures for Facescene tests."""

from io import BytesIO
from unittest.mock import AsyncMock, Mock

import pytest
from PIL import Image

from facescene.core.config import FacesceneConfig
from facescene.core.images import to_data_url
from facescene.core.models import FaceAttributes, ImagePayload
from facescene.ui.models import UIState
from facescene.ui.workflow import WorkflowController


def _encode(color: str, fmt: str) -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (8, 8), color).save(buffer, format=fmt)
    return buffer.getvalue()


@pytest.fixture
def test_config() -> FacesceneConfig:
    """Create a test configuration that ignores .env files.

    Returns:
        FacesceneConfig instance for testing
    """
    return FacesceneConfig(
        _env_file=None,
        api_key="test-key",
        face_model="test-face-model",
        scene_model="test-scene-model",
        text_model="test-text-model",
    )


@pytest.fixture
def png_bytes() -> bytes:
    """Small valid PNG image."""
    return _encode("red", "PNG")


@pytest.fixture
def jpeg_bytes() -> bytes:
    """Small valid JPEG image."""
    return _encode("blue", "JPEG")


@pytest.fixture
def face_data_url(jpeg_bytes) -> str:
    """Data URL of a generated face."""
    return to_data_url(jpeg_bytes, "image/jpeg")


@pytest.fixture
def scene_data_url(png_bytes) -> str:
    """Data URL of a composited scene."""
    return to_data_url(png_bytes, "image/png")


@pytest.fixture
def blonde_attrs() -> FaceAttributes:
    """Face attributes with a mix of set and default values."""
    return FaceAttributes(
        free_text="wearing glasses",
        age_range="26-35",
        gender="Woman",
        ethnicity="Any",
        hair_color="Blonde",
    )


@pytest.fixture
def fake_gateway(face_data_url, scene_data_url) -> Mock:
    """Gateway double whose coroutines succeed by default.

    Returns:
        Mock with AsyncMock generate_face / composite_scene / generate_text /
        fetch_suggestions
    """
    gateway = Mock()
    gateway.generate_face = AsyncMock(
        return_value=ImagePayload(data_url=face_data_url, mime_type="image/jpeg")
    )
    gateway.composite_scene = AsyncMock(return_value=scene_data_url)
    gateway.generate_text = AsyncMock(return_value='{"cleanedPrompt": "reading in a cafe"}')
    gateway.fetch_suggestions = AsyncMock(
        return_value=["Baking with a puppy", "Dancing in the rain", "Quiet train window"]
    )
    return gateway


@pytest.fixture
def workflow(fake_gateway) -> WorkflowController:
    """Workflow controller wired to the fake gateway."""
    return WorkflowController(fake_gateway)


@pytest.fixture
def ui_state(workflow) -> UIState:
    """UI state with an initialized workflow."""
    return UIState(workflow=workflow)


@pytest.fixture
def fake_client() -> Mock:
    """Stand-in for google.genai.Client with async model methods."""
    client = Mock()
    client.aio.models.generate_images = AsyncMock()
    client.aio.models.generate_content = AsyncMock()
    return client
