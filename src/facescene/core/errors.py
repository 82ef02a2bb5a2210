"""Exceptions raised by the generation pipeline.

All messages are written to be shown to the user as-is; the UI never exposes
structured error codes.
"""


class FacesceneError(Exception):
    """Base class for pipeline errors."""


class ConfigurationError(FacesceneError):
    """A closed choice (style, expression) received a value outside its set."""


class GenerationFailed(FacesceneError):
    """The external service returned no usable artifact, or the call failed."""


class SuggestionParseError(FacesceneError):
    """The suggestions response could not be understood."""
