"""Custom exception types for the wizard engine and its draft storage."""

from __future__ import annotations


class WizardError(Exception):
    """Base exception for wizard related issues."""


class StepTransitionError(WizardError):
    """Raised when the active step refuses to hand over to the next one."""

    def __init__(self, step_index: int, message: str | None = None) -> None:
        super().__init__(message or f"Step {step_index} rejected the transition")
        self.step_index = step_index


class StepSubmitError(StepTransitionError):
    """Raised when a step adapter's ``submit`` returned ``False`` or failed."""


class StepValidationError(StepTransitionError):
    """Raised when a step's own validation rule rejected the form data."""


class DraftPersistenceError(WizardError):
    """Raised when a draft could not be written to or removed from storage."""

    def __init__(self, key: str, message: str | None = None) -> None:
        super().__init__(message or f"Draft storage failed for '{key}'")
        self.key = key
