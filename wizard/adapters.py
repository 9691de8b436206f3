"""Optional-capability handle a rendered step registers with the controller."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable

SubmitResult = bool | None
SubmitCallable = Callable[[], SubmitResult | Awaitable[SubmitResult]]


def _bound(obj: object, *names: str) -> Callable[..., Any] | None:
    for name in names:
        candidate = getattr(obj, name, None)
        if callable(candidate):
            return candidate
    return None


@dataclass(frozen=True)
class StepAdapter:
    """Capabilities a step may expose; each one is optional.

    ``submit`` runs first on ``advance()``; returning or resolving ``False``
    (or raising) keeps the wizard on the step, while ``None`` counts as
    success. ``clear_errors`` runs on the step the user goes back to;
    ``reset`` is used instead only when ``clear_errors`` is missing.
    """

    submit: SubmitCallable | None = None
    clear_errors: Callable[[], None] | None = None
    reset: Callable[[], None] | None = None

    @classmethod
    def from_object(cls, step: object) -> "StepAdapter":
        """Bind the capabilities ``step`` implements, if any."""

        if isinstance(step, StepAdapter):
            return step
        return cls(
            submit=_bound(step, "submit"),
            clear_errors=_bound(step, "clear_errors", "clearErrors"),
            reset=_bound(step, "reset"),
        )

    @property
    def is_empty(self) -> bool:
        return self.submit is None and self.clear_errors is None and self.reset is None

    def restore(self) -> bool:
        """Clear stale error display without discarding data.

        Returns ``False`` when the step offers neither capability.
        """

        if self.clear_errors is not None:
            self.clear_errors()
            return True
        if self.reset is not None:
            self.reset()
            return True
        return False


__all__ = ["StepAdapter", "SubmitCallable", "SubmitResult"]
