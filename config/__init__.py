"""Central configuration for the admin wizard engine.

Values are read once at import time from the environment (after loading a
local ``.env`` file). ``WIZARD_DRAFTS_ENABLED`` toggles session drafts for
every wizard that does not override ``enable_persistence`` itself, and
``WIZARD_DRAFT_DEBOUNCE_MS`` sets the quiet interval before a draft write.
"""

import logging
import os
import warnings

from dotenv import load_dotenv

load_dotenv()


logger = logging.getLogger(__name__)


_TRUTHY_ENV_VALUES: tuple[str, ...] = ("1", "true", "yes", "on")
_DEFAULT_DEBOUNCE_MS = 300


def _is_truthy_flag(value: str | None) -> bool:
    """Return ``True`` when ``value`` matches a truthy environment token."""

    if value is None:
        return False
    return value.strip().lower() in _TRUTHY_ENV_VALUES


def _parse_positive_int_env(value: object | None, *, env_var: str) -> int | None:
    """Return a positive integer parsed from ``value`` or ``None``."""

    if value is None:
        return None
    if isinstance(value, str):
        candidate = value.strip()
        if not candidate:
            return None
        try:
            parsed = int(float(candidate))
        except ValueError:
            warnings.warn(
                "%s is not a number; ignoring %s" % (candidate, env_var),
                RuntimeWarning,
            )
            return None
    elif isinstance(value, (int, float)):
        parsed = int(value)
    else:
        warnings.warn(
            "Unsupported %s value '%s'; using the default." % (env_var, value),
            RuntimeWarning,
        )
        return None
    if parsed <= 0:
        return None
    return parsed


def _resolve_debounce_seconds(raw: str | None) -> float:
    millis = _parse_positive_int_env(raw, env_var="WIZARD_DRAFT_DEBOUNCE_MS")
    if millis is None:
        millis = _DEFAULT_DEBOUNCE_MS
    return millis / 1000.0


DRAFTS_ENABLED = _is_truthy_flag(os.getenv("WIZARD_DRAFTS_ENABLED", "1"))
DRAFT_DEBOUNCE_SECONDS = _resolve_debounce_seconds(os.getenv("WIZARD_DRAFT_DEBOUNCE_MS"))
DRAFT_KEY_PREFIX = os.getenv("WIZARD_DRAFT_PREFIX", "stepperForm").strip() or "stepperForm"
DEFAULT_LANGUAGE = os.getenv("LANGUAGE", "en").strip().lower() or "en"

logger.debug(
    "Wizard drafts %s (debounce %.3fs, prefix '%s')",
    "enabled" if DRAFTS_ENABLED else "disabled",
    DRAFT_DEBOUNCE_SECONDS,
    DRAFT_KEY_PREFIX,
)


__all__ = [
    "DEFAULT_LANGUAGE",
    "DRAFTS_ENABLED",
    "DRAFT_DEBOUNCE_SECONDS",
    "DRAFT_KEY_PREFIX",
]
