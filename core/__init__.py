"""Core package for wizard engine errors."""

from .errors import (
    DraftPersistenceError,
    StepSubmitError,
    StepTransitionError,
    StepValidationError,
    WizardError,
)

__all__ = [
    "DraftPersistenceError",
    "StepSubmitError",
    "StepTransitionError",
    "StepValidationError",
    "WizardError",
]
