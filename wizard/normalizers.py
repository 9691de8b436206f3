"""Normalizer hooks hosts can plug into ``WizardController.update_data``.

Select inputs hand back either a bare identifier or an option object such as
``{"value": "b-12", "label": "Downtown"}``. A wizard that stores references
(branch, school, student level ...) registers ``reference_normalizer`` for
those keys so the form data always carries the identifier as a string.
"""

from __future__ import annotations

from typing import Any, Mapping

from wizard.types import Normalizer

# Stringified artifacts of objects or missing values that must never be stored as ids.
REJECTED_REFERENCE_STRINGS: frozenset[str] = frozenset({"[object Object]", "null", "undefined", "None"})


def normalize_reference(value: Any) -> str:
    """Return the canonical string id for ``value`` or ``""``."""

    if isinstance(value, Mapping):
        for key in ("value", "id"):
            candidate = value.get(key)
            if candidate:
                return str(candidate)
        return ""
    if not value:
        return ""
    text = str(value)
    if text in REJECTED_REFERENCE_STRINGS:
        return ""
    return text


def reference_normalizer(*fields: str) -> Normalizer:
    """Build a normalizer applying :func:`normalize_reference` to ``fields``."""

    targets = frozenset(fields)

    def _normalize(partial: Mapping[str, Any]) -> Mapping[str, Any]:
        normalized = dict(partial)
        for key in targets.intersection(normalized):
            normalized[key] = normalize_reference(normalized[key])
        return normalized

    return _normalize


__all__ = ["REJECTED_REFERENCE_STRINGS", "normalize_reference", "reference_normalizer"]
