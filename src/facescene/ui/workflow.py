"""Workflow controller: step order, history and loading/error state.

The controller owns a single :class:`SessionState` and exposes one command
per user action. Commands mutate that state and return it.

State Machine
-------------
::

    FACE --submit_face / upload_face / select_from_face_history--> LIFESTYLE
    LIFESTYLE --reset--> FACE

Failed commands record a human-readable message in ``state.error``,
re-raise the typed error and leave the stage untouched. History entries
stored by earlier successful calls are never rolled back.

Stale Responses
---------------
Each pipeline (face, scene, suggestions) hands out a monotonically
increasing token per request. When a response arrives its token is compared
with the latest token issued for that pipeline; a mismatch means a newer
action (a new face, a reset, ...) happened in the meantime and the response
is dropped without touching state. Tokens live on the controller, not on the
state, so that ``reset()`` can restore the initial snapshot while still
invalidating whatever is in flight.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

from facescene.core.errors import FacesceneError
from facescene.core.images import to_data_url
from facescene.core.models import (
    AGE_RANGES,
    ETHNICITIES,
    GENDERS,
    HAIR_COLORS,
    FaceAttributes,
    FaceOrigin,
    GeneratedFace,
    SceneRequest,
)
from facescene.core.prompt_builder import (
    build_face_prompt,
    build_scene_prompt,
    build_suggestion_prompt,
    check_scene_options,
    describe_face,
)
from facescene.core.sanitizer import SuggestionSanitizer

from .models import (
    FACE_PIPELINE,
    PIPELINES,
    SCENE_PIPELINE,
    STATUS_ANALYZING,
    STATUS_CREATING,
    SUGGESTIONS_PIPELINE,
    SessionState,
    WorkflowStage,
)
from .validation import (
    ValidationError,
    validate_choice,
    validate_face_attributes,
    validate_scene_prompt,
    validate_suggestion_inputs,
    validate_upload_mime,
)

logger = logging.getLogger(__name__)

StatusCallback = Callable[[str], None]


def _promote(items: list, item, key=lambda value: value) -> list:
    """Return ``items`` with ``item`` at the front and no other entry sharing its key."""
    identity = key(item)
    return [item] + [existing for existing in items if key(existing) != identity]


class WorkflowController:
    """Drives the face → lifestyle workflow for one session.

    Args:
        gateway: GenerationGateway used for every external call
        sanitizer: SuggestionSanitizer (defaults to one built on ``gateway``)
    """

    def __init__(self, gateway, sanitizer: SuggestionSanitizer | None = None):
        self.gateway = gateway
        self.sanitizer = sanitizer or SuggestionSanitizer(gateway)
        self.state = SessionState()
        self._tokens = {name: 0 for name in PIPELINES}

    # ------------------------------------------------------------------
    # Request bookkeeping
    # ------------------------------------------------------------------

    def _fail(self, error: Exception) -> None:
        self.state.error = str(error)

    def _begin(self, pipeline: str) -> int:
        """Mark a pipeline as busy and issue its request token."""
        if self.state.is_loading(pipeline):
            raise ValidationError(f"A {pipeline} request is already in progress.")
        self._tokens[pipeline] += 1
        self.state.loading[pipeline] = True
        self.state.error = None
        return self._tokens[pipeline]

    def _is_current(self, pipeline: str, token: int) -> bool:
        current = self._tokens[pipeline] == token
        if not current:
            logger.debug(f"Discarding stale {pipeline} response (token {token})")
        return current

    def _finish(self, pipeline: str) -> None:
        self.state.loading[pipeline] = False
        if pipeline == SCENE_PIPELINE:
            self.state.scene_status = ""

    def _invalidate(self, *pipelines: str) -> None:
        """Drop whatever is in flight for the given pipelines."""
        for pipeline in pipelines:
            self._tokens[pipeline] += 1
            self._finish(pipeline)

    def _accept_face(self, face: GeneratedFace) -> None:
        """Make ``face`` current and start a fresh lifestyle stage."""
        self._invalidate(SCENE_PIPELINE, SUGGESTIONS_PIPELINE)
        self.state.face = face
        self.state.attributes = face.source_attributes
        self.state.face_history = _promote(
            self.state.face_history, face, key=lambda entry: entry.image_data
        )
        self.state.clear_lifestyle()
        self.state.stage = WorkflowStage.LIFESTYLE

    # ------------------------------------------------------------------
    # Face stage
    # ------------------------------------------------------------------

    async def submit_face(self, attrs: FaceAttributes) -> SessionState:
        """Synthesize a face from the form attributes.

        Args:
            attrs: Face attributes; at least one must be non-default

        Returns:
            Updated session state

        Raises:
            ValidationError: If nothing was specified (no external call is made)
            GenerationFailed: If the service returned no image
        """
        try:
            validate_face_attributes(attrs)
            validate_choice(attrs.age_range, AGE_RANGES, "age range")
            validate_choice(attrs.gender, GENDERS, "gender")
            validate_choice(attrs.ethnicity, ETHNICITIES, "ethnicity")
            validate_choice(attrs.hair_color, HAIR_COLORS, "hair color")
            token = self._begin(FACE_PIPELINE)
        except ValidationError as e:
            self._fail(e)
            raise

        prompt = build_face_prompt(attrs)
        logger.info(f"Generating face: {describe_face(attrs)}")

        try:
            payload = await self.gateway.generate_face(prompt)
        except Exception as e:
            if self._is_current(FACE_PIPELINE, token):
                self._finish(FACE_PIPELINE)
                self._fail(e)
                raise
            return self.state

        if not self._is_current(FACE_PIPELINE, token):
            return self.state

        self._finish(FACE_PIPELINE)
        self._accept_face(
            GeneratedFace(
                image_data=payload.data_url,
                mime_type=payload.mime_type,
                source_attributes=attrs,
                origin=FaceOrigin.GENERATED,
            )
        )
        logger.info(f"Face generated; {len(self.state.face_history)} face(s) in history")
        return self.state

    def upload_face(
        self, data: bytes, mime_type: str | None, attrs: FaceAttributes | None = None
    ) -> SessionState:
        """Use an uploaded image as the face.

        Args:
            data: Raw file bytes
            mime_type: Detected MIME type (JPEG or PNG only)
            attrs: Form attributes to remember alongside the face

        Returns:
            Updated session state

        Raises:
            ValidationError: If the file type is not accepted
        """
        try:
            validate_upload_mime(mime_type)
        except ValidationError as e:
            self._fail(e)
            raise

        self.state.error = None
        self._invalidate(FACE_PIPELINE)
        self._accept_face(
            GeneratedFace(
                image_data=to_data_url(data, mime_type),
                mime_type=mime_type,
                source_attributes=attrs if attrs is not None else self.state.attributes,
                origin=FaceOrigin.UPLOADED,
            )
        )
        logger.info(f"Face uploaded ({mime_type}, {len(data)} bytes)")
        return self.state

    def select_from_face_history(self, face: GeneratedFace) -> SessionState:
        """Make a previous face current again without calling the service.

        Args:
            face: Entry from ``state.face_history``

        Returns:
            Updated session state
        """
        self.state.error = None
        self._invalidate(FACE_PIPELINE)
        self._accept_face(face)
        logger.info("Face restored from history")
        return self.state

    # ------------------------------------------------------------------
    # Lifestyle stage
    # ------------------------------------------------------------------

    async def submit_scene(
        self, request: SceneRequest, on_status: StatusCallback | None = None
    ) -> SessionState:
        """Composite the current face into a described scene.

        The scene text is sanitized first, then embedded in the compositing
        prompt and sent together with the face image.

        Args:
            request: Scene text, expression and style
            on_status: Optional callback receiving progress messages

        Returns:
            Updated session state

        Raises:
            ValidationError: If no face exists or the scene text is blank
            ConfigurationError: If expression or style is not recognized
            GenerationFailed: If the service returned no image
        """
        self.state.scene_prompt = request.raw_prompt
        self.state.expression = request.expression
        self.state.style = request.style

        try:
            if self.state.stage != WorkflowStage.LIFESTYLE or self.state.face is None:
                raise ValidationError("A face image must be generated or uploaded first.")
            validate_scene_prompt(request.raw_prompt)
            check_scene_options(request.expression, request.style)
            token = self._begin(SCENE_PIPELINE)
        except (ValidationError, FacesceneError) as e:
            self._fail(e)
            raise

        face = self.state.face

        def report(message: str) -> None:
            self.state.scene_status = message
            if on_status is not None:
                on_status(message)

        try:
            report(STATUS_ANALYZING)
            cleaned = await self.sanitizer.sanitize(request.raw_prompt)
            if not self._is_current(SCENE_PIPELINE, token):
                return self.state

            report(STATUS_CREATING)
            prompt = build_scene_prompt(cleaned, request.expression, request.style)
            image = await self.gateway.composite_scene(face.image_data, face.mime_type, prompt)
        except Exception as e:
            if self._is_current(SCENE_PIPELINE, token):
                self._finish(SCENE_PIPELINE)
                self._fail(e)
                raise
            return self.state

        if not self._is_current(SCENE_PIPELINE, token):
            return self.state

        self._finish(SCENE_PIPELINE)
        self.state.scene = image
        self.state.scene_history = _promote(self.state.scene_history, image)
        logger.info(f"Scene created; {len(self.state.scene_history)} scene(s) in history")
        return self.state

    def select_from_scene_history(self, image: str) -> SessionState:
        """Display a previous scene without calling the service."""
        self.state.error = None
        self.state.scene = image
        self.state.scene_history = _promote(self.state.scene_history, image)
        return self.state

    async def request_suggestions(
        self, topic: str, attrs: FaceAttributes | None = None
    ) -> SessionState:
        """Ask for three scene ideas about a topic.

        Args:
            topic: Topic for the ideas
            attrs: Face attributes from the form (defaults to the current face's)

        Returns:
            Updated session state (stage unchanged)

        Raises:
            ValidationError: If the face description or topic is blank
            SuggestionParseError: If the response could not be understood
            GenerationFailed: If the call failed
        """
        attrs = attrs if attrs is not None else self.state.attributes

        try:
            validate_suggestion_inputs(attrs, topic)
            token = self._begin(SUGGESTIONS_PIPELINE)
        except ValidationError as e:
            self._fail(e)
            raise

        self.state.suggestion_topic = topic
        self.state.suggestions = []
        prompt = build_suggestion_prompt(describe_face(attrs), topic)

        try:
            suggestions = await self.gateway.fetch_suggestions(prompt)
        except Exception as e:
            if self._is_current(SUGGESTIONS_PIPELINE, token):
                self._finish(SUGGESTIONS_PIPELINE)
                self._fail(e)
                raise
            return self.state

        if not self._is_current(SUGGESTIONS_PIPELINE, token):
            return self.state

        self._finish(SUGGESTIONS_PIPELINE)
        self.state.suggestions = suggestions
        logger.info(f"Received {len(suggestions)} scene suggestion(s)")
        return self.state

    def use_suggestion(self, suggestion: str) -> SessionState:
        """Copy a suggestion into the scene prompt."""
        self.state.scene_prompt = suggestion
        return self.state

    # ------------------------------------------------------------------
    # Session
    # ------------------------------------------------------------------

    def reset(self) -> SessionState:
        """Clear everything and go back to the face stage.

        Requests still in flight are invalidated and their results dropped.
        """
        for pipeline in PIPELINES:
            self._tokens[pipeline] += 1
        self.state = SessionState()
        logger.info("Workflow reset")
        return self.state
