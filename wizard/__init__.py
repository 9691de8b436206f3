"""Multi-step wizard engine."""

from __future__ import annotations

from .adapters import StepAdapter
from .confirmation import ConfirmationGate, ConfirmationPrompt
from .controller import StepRenderContext, WizardController, has_meaningful_data
from .normalizers import normalize_reference, reference_normalizer
from .types import (
    AdvanceOutcome,
    StepDescriptor,
    WizardOptions,
    WizardState,
    WizardStatus,
)

__all__ = [
    "AdvanceOutcome",
    "ConfirmationGate",
    "ConfirmationPrompt",
    "StepAdapter",
    "StepDescriptor",
    "StepRenderContext",
    "WizardController",
    "WizardOptions",
    "WizardState",
    "WizardStatus",
    "has_meaningful_data",
    "normalize_reference",
    "reference_normalizer",
]
