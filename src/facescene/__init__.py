"""Facescene - Generate a face, then place it into lifestyle scenes."""

__version__ = "0.1.0"

from facescene.core.config import FacesceneConfig, config
from facescene.core.gateway import GenerationGateway

__all__ = [
    "FacesceneConfig",
    "GenerationGateway",
    "config",
]
