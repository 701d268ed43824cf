"""
Observability: structured logging, context management and tracing.

Provides:
- Contextual logging with run tag and command
- Log rotation and file management
- opik tracing toggle
"""

from infrastructure.observability.logging import (
    clear_log_context,
    configure_logging,
    get_log_context,
    make_run_tag,
    set_log_context,
)
from infrastructure.observability.tracing import configure_tracing

__all__ = [
    "configure_logging",
    "set_log_context",
    "get_log_context",
    "clear_log_context",
    "make_run_tag",
    "configure_tracing",
]
