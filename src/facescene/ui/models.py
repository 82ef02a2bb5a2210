"""Data models for Facescene UI state."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from facescene.core.models import (
    DEFAULT_EXPRESSION,
    DEFAULT_STYLE,
    FaceAttributes,
    GeneratedFace,
)

logger = logging.getLogger(__name__)


class WorkflowStage(str, Enum):
    """Which step of the workflow is active."""

    FACE = "face"
    LIFESTYLE = "lifestyle"


# Pipeline names, used for loading flags and request tokens
FACE_PIPELINE = "face"
SCENE_PIPELINE = "scene"
SUGGESTIONS_PIPELINE = "suggestions"
PIPELINES = (FACE_PIPELINE, SCENE_PIPELINE, SUGGESTIONS_PIPELINE)

# Scene pipeline progress messages
STATUS_ANALYZING = "Analyzing prompt..."
STATUS_CREATING = "Creating scene..."


def _idle_flags() -> dict[str, bool]:
    return {name: False for name in PIPELINES}


@dataclass
class SessionState:
    """Everything the workflow knows about one session.

    A fresh ``SessionState()`` is the initial snapshot; ``reset()`` on the
    controller brings the state back to a value equal to it.

    Attributes
    ----------
    stage : WorkflowStage
        Active step (face or lifestyle)
    attributes : FaceAttributes
        Face attributes of the current face (or last submitted form)
    face : GeneratedFace | None
        Face used for compositing
    face_history : list[GeneratedFace]
        Faces of this session, newest first, unique by image
    scene : str | None
        Currently displayed scene (data URL)
    scene_history : list[str]
        Scenes for the current face, newest first, unique
    scene_prompt, expression, style : str
        Scene form values
    suggestion_topic : str
        Topic used for the last suggestions request
    suggestions : list[str]
        Scene ideas from the last suggestions request
    error : str | None
        Single human-readable error of the last failed operation
    loading : dict[str, bool]
        Per-pipeline in-flight flags
    scene_status : str
        Progress message of the scene pipeline
    """

    stage: WorkflowStage = WorkflowStage.FACE
    attributes: FaceAttributes = field(default_factory=FaceAttributes)
    face: GeneratedFace | None = None
    face_history: list[GeneratedFace] = field(default_factory=list)

    scene: str | None = None
    scene_history: list[str] = field(default_factory=list)
    scene_prompt: str = ""
    expression: str = DEFAULT_EXPRESSION
    style: str = DEFAULT_STYLE

    suggestion_topic: str = ""
    suggestions: list[str] = field(default_factory=list)

    error: str | None = None
    loading: dict[str, bool] = field(default_factory=_idle_flags)
    scene_status: str = ""

    def is_loading(self, pipeline: str) -> bool:
        """Check whether a pipeline has a request in flight."""
        return self.loading.get(pipeline, False)

    def clear_lifestyle(self) -> None:
        """Drop all lifestyle-stage working state."""
        self.scene = None
        self.scene_history = []
        self.scene_prompt = ""
        self.suggestions = []
        self.suggestion_topic = ""
        self.scene_status = ""


@dataclass
class UIState:
    """Session state for the Gradio UI.

    Each browser session gets its own UIState. The workflow controller is
    created lazily on first use so that the initial value stays cheap to
    copy.

    Attributes
    ----------
    workflow : Any | None
        WorkflowController instance
    """

    workflow: Any | None = None  # WorkflowController instance

    def is_initialized(self) -> bool:
        """Check if the workflow controller has been created."""
        return self.workflow is not None

    def __repr__(self) -> str:
        """String representation for debugging."""
        stage = self.workflow.state.stage.value if self.workflow is not None else None
        return f"UIState(initialized={self.is_initialized()}, stage={stage})"
