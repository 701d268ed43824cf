"""opik tracing toggle for command runs."""

import logging
import os

import opik

logger = logging.getLogger(__name__)

TRACK_DISABLE_ENV = "OPIK_TRACK_DISABLE"


def configure_tracing(enabled: bool) -> None:
    """
    Turn opik `@track` spans on or off for this process.

    When enabled, opik.configure() resolves credentials from the environment or
    ~/.opik.config as usual.
    """
    os.environ[TRACK_DISABLE_ENV] = "false" if enabled else "true"
    if enabled:
        opik.configure()
        logger.info("opik tracing enabled")
