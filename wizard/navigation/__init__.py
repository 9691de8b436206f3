"""Navigation view state for hosts rendering the wizard."""

from __future__ import annotations

from wizard.navigation.view import (
    NavigationButtonState,
    NavigationDirection,
    NavigationState,
    StepIndicator,
    build_navigation_state,
    is_step_clickable,
)

__all__ = [
    "NavigationButtonState",
    "NavigationDirection",
    "NavigationState",
    "StepIndicator",
    "build_navigation_state",
    "is_step_clickable",
]
