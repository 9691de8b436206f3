"""Utility helpers for the admin wizard engine."""

from __future__ import annotations

from .i18n import tr as tr
from .logging_context import configure_logging as configure_logging
from .logging_context import log_context as log_context
