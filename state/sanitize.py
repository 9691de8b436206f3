"""Strip values from wizard form data that cannot survive a JSON round-trip."""

from __future__ import annotations

import io
import json
import logging
from datetime import date, datetime, time
from typing import Any, Mapping

logger = logging.getLogger(__name__)

_PRIMITIVE_TYPES: tuple[type, ...] = (str, int, float, bool)


def _is_serializable(value: object) -> bool:
    try:
        json.dumps(value)
    except (TypeError, ValueError, RecursionError):
        return False
    return True


def _sanitize_value(key: str, value: Any) -> tuple[bool, Any]:
    """Return ``(keep, value)`` for a single form field."""

    if value is None or isinstance(value, _PRIMITIVE_TYPES):
        return True, value
    # Uploaded files (Streamlit's ``UploadedFile`` is a ``BytesIO``) must be re-entered after a reload.
    if isinstance(value, io.IOBase):
        return False, None
    if callable(value):
        return False, None
    if isinstance(value, (datetime, date, time)):
        return True, value.isoformat()
    if isinstance(value, Mapping):
        candidate = dict(value)
    elif isinstance(value, (list, tuple)):
        candidate = list(value)
    else:
        logger.debug("Dropping unsupported draft value for '%s' (%s)", key, type(value).__name__)
        return False, None
    if not _is_serializable(candidate):
        logger.debug("Dropping unserializable draft value for '%s'", key)
        return False, None
    return True, candidate


def sanitize(data: Mapping[str, Any] | None) -> dict[str, Any]:
    """Return a copy of ``data`` that is safe to serialise as a draft.

    File handles, callables and containers that fail a trial ``json.dumps`` (for
    example because of a cyclic reference) are dropped entirely; dates and
    times become ISO-8601 strings. The function is idempotent.
    """

    sanitized: dict[str, Any] = {}
    for key, value in (data or {}).items():
        keep, cleaned = _sanitize_value(str(key), value)
        if keep:
            sanitized[str(key)] = cleaned
    return sanitized


__all__ = ["sanitize"]
