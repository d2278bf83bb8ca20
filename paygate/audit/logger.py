"""
Trace sink for gateway calls.

The API client reports two kinds of events through this collaborator:
  - debug: the outgoing URL and request map, just before sending
  - warning: a response whose signature failed to verify

Tracing is best-effort. A context that cannot be serialized is logged
via ``repr`` instead, so a logging problem never surfaces in the call.
"""

import json
import logging
from typing import Any, Optional

from paygate.config import Settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(settings: Settings) -> None:
    """Apply the configured log level and the standard line format."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format=LOG_FORMAT,
    )


def _render(context: Any) -> str:
    if context is None:
        return ""
    if hasattr(context, "to_dict"):
        context = context.to_dict()
    try:
        return json.dumps(context, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        return repr(context)


class GatewayLogger:
    """Formats gateway events onto a stdlib logger."""

    def __init__(self, logger: Optional[logging.Logger] = None, max_context: int = 500):
        self._logger = logger or logging.getLogger("paygate.audit")
        self._max_context = max_context

    def debug(self, message: str, context: Any = None) -> None:
        self._emit(logging.DEBUG, message, context)

    def warning(self, message: str, context: Any = None) -> None:
        self._emit(logging.WARNING, message, context)

    def _emit(self, level: int, message: str, context: Any) -> None:
        if not self._logger.isEnabledFor(level):
            return
        self._logger.log(
            level,
            "GATEWAY | %s | %s",
            message,
            _render(context)[: self._max_context],
        )
