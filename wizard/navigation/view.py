"""Step header and footer state derived from a ``WizardState``.

Pure data: a host draws these with whatever widgets it uses and routes the
clicks to ``WizardController.jump_to``/``retreat``/``advance``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Sequence

from wizard.types import LocalizedText, StepDescriptor, WizardState

BACK_LABEL: LocalizedText = ("◀ Zurück", "◀ Back")
CANCEL_LABEL: LocalizedText = ("Abbrechen", "Cancel")
NEXT_LABEL: LocalizedText = ("Weiter ▶", "Next ▶")
COMPLETE_LABEL: LocalizedText = ("Abschließen", "Complete")


class NavigationDirection(StrEnum):
    PREVIOUS = "previous"
    NEXT = "next"


@dataclass(frozen=True)
class StepIndicator:
    """One entry of the step header."""

    index: int
    label: str
    active: bool = False
    completed: bool = False
    error: bool = False
    clickable: bool = False


@dataclass(frozen=True)
class NavigationButtonState:
    """Typed configuration for a single footer button."""

    direction: NavigationDirection
    label: LocalizedText
    enabled: bool = True
    primary: bool = False


@dataclass(frozen=True)
class NavigationState:
    """Aggregated state used to render the header and footer."""

    steps: tuple[StepIndicator, ...]
    previous: NavigationButtonState
    next: NavigationButtonState

    @property
    def active(self) -> StepIndicator:
        return next(indicator for indicator in self.steps if indicator.active)


def is_step_clickable(state: WizardState, index: int) -> bool:
    """Mirror ``WizardController.can_jump_to`` for a rendered header."""

    active = state.active_step_index
    if index in state.completed_steps or index < active:
        return True
    return index == active + 1 and active in state.completed_steps


def build_navigation_state(
    steps: Sequence[StepDescriptor],
    state: WizardState,
    *,
    can_cancel: bool,
) -> NavigationState:
    active = state.active_step_index
    indicators = tuple(
        StepIndicator(
            index=index,
            label=step.label,
            active=index == active,
            completed=state.is_completed(index),
            error=state.has_error(index),
            clickable=is_step_clickable(state, index),
        )
        for index, step in enumerate(steps)
    )

    at_first = active == 0
    previous = NavigationButtonState(
        direction=NavigationDirection.PREVIOUS,
        label=CANCEL_LABEL if at_first and can_cancel else BACK_LABEL,
        enabled=not at_first or can_cancel,
    )
    next_button = NavigationButtonState(
        direction=NavigationDirection.NEXT,
        label=COMPLETE_LABEL if active == len(steps) - 1 else NEXT_LABEL,
        primary=True,
    )
    return NavigationState(steps=indicators, previous=previous, next=next_button)


__all__ = [
    "NavigationButtonState",
    "NavigationDirection",
    "NavigationState",
    "StepIndicator",
    "build_navigation_state",
    "is_step_clickable",
]
