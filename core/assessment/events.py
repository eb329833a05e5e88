from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger("security_dashboard.events")

EVALUATION_CREATED = "EVALUATION_CREATED"
VALIDATION_ERROR = "VALIDATION_ERROR"
NOT_FOUND = "NOT_FOUND"
STORE_ERROR = "STORE_ERROR"
CORRUPT_RECORD_SKIPPED = "CORRUPT_RECORD_SKIPPED"
UNHANDLED_ERROR = "UNHANDLED_ERROR"

_WARNING_EVENTS = {VALIDATION_ERROR, NOT_FOUND, CORRUPT_RECORD_SKIPPED}
_ERROR_EVENTS = {STORE_ERROR, UNHANDLED_ERROR}


def log_security_event(event: str, **details: Any) -> None:
    """
    Emit one named event. The record carries `event` and `details`
    attributes so handlers can forward it as structured data.
    """
    if event in _ERROR_EVENTS:
        level = logging.ERROR
    elif event in _WARNING_EVENTS:
        level = logging.WARNING
    else:
        level = logging.INFO
    logger.log(level, "[SECURITY] %s: %s", event, details, extra={"event": event, "details": details})
