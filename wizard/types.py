"""Shared types for the wizard engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Awaitable, Callable, Mapping, Sequence

import config


LangPair = tuple[str, str]

# Bilingual text pair used throughout the wizard UI
LocalizedText = LangPair

FormData = dict[str, Any]
StepValidator = Callable[[Mapping[str, Any]], bool | Awaitable[bool]]
Normalizer = Callable[[Mapping[str, Any]], Mapping[str, Any]]


@dataclass(frozen=True)
class StepDescriptor:
    """Host-supplied description of one wizard step.

    ``renderer`` is opaque to the engine; the host uses it to draw the step.
    ``validation`` receives the latest form data and may be a coroutine
    function (for example when the rule creates the entity on the backend).
    """

    label: str
    renderer: Any = None
    validation: StepValidator | None = None


class WizardStatus(StrEnum):
    """Lifecycle of a wizard instance."""

    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self is not WizardStatus.ACTIVE


class AdvanceOutcome(StrEnum):
    """Result of a single ``advance()`` call."""

    ADVANCED = "advanced"
    COMPLETED = "completed"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    SUBMIT_FAILED = "submit_failed"
    VALIDATION_FAILED = "validation_failed"
    IGNORED = "ignored"


@dataclass(frozen=True)
class WizardOptions:
    """Entry options a host passes to ``WizardController.initialize``."""

    initial_step: int = 0
    skip_steps: Sequence[int] = ()
    enable_persistence: bool = field(default_factory=lambda: config.DRAFTS_ENABLED)
    show_per_transition_confirmation: bool = False
    storage_key: str | None = None
    # Screen path used to derive the draft key when ``storage_key`` is absent.
    context: str | None = None
    confirmation_cancel_text: LocalizedText | None = None
    step_props: Mapping[str, Any] = field(default_factory=dict)

    @property
    def forces_entry_point(self) -> bool:
        """Return ``True`` when the host directs where the wizard starts."""

        return self.initial_step > 0 or bool(self.skip_steps)


@dataclass(frozen=True)
class WizardState:
    """Read-only projection of the controller's live state."""

    active_step_index: int
    completed_steps: frozenset[int]
    step_errors: Mapping[int, bool]
    form_data: Mapping[str, Any]
    status: WizardStatus = WizardStatus.ACTIVE

    def is_completed(self, index: int) -> bool:
        return index in self.completed_steps

    def has_error(self, index: int) -> bool:
        return bool(self.step_errors.get(index))


__all__ = [
    "AdvanceOutcome",
    "FormData",
    "LangPair",
    "LocalizedText",
    "Normalizer",
    "StepDescriptor",
    "StepValidator",
    "WizardOptions",
    "WizardState",
    "WizardStatus",
]
