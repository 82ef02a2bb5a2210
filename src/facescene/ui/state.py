"""State management utilities for Facescene UI.

This module handles the lazy creation of the per-session workflow
controller and its gateway.
"""

import logging

from facescene.core.config import config
from facescene.core.gateway import GenerationGateway

from .models import UIState
from .workflow import WorkflowController

logger = logging.getLogger(__name__)


def initialize_ui_state(state: UIState | None = None) -> UIState:
    """Initialize or ensure UI state is ready.

    If state is None or has no workflow yet, a GenerationGateway is built
    from the global configuration and wrapped in a WorkflowController.

    Args:
        state: Existing UIState or None

    Returns:
        Initialized UIState instance
    """
    if state is None:
        logger.info("Creating new UIState")
        state = UIState()

    if state.is_initialized():
        logger.debug("UIState already initialized")
        return state

    logger.info("Initializing UIState components...")

    try:
        gateway = GenerationGateway.from_config(config)
        state.workflow = WorkflowController(gateway)
        logger.info(f"UIState initialization complete: {state}")
        return state

    except Exception as e:
        logger.error(f"Error initializing UIState: {e}", exc_info=True)
        raise
