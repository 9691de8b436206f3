"""Yes/no gate between a validated step and the move to the next one."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from utils.i18n import tr
from wizard.types import LocalizedText

logger = logging.getLogger(__name__)

STEP_COMPLETED_TITLE: LocalizedText = ("Schritt abgeschlossen", "Step completed")
STEP_COMPLETED_DESCRIPTION: LocalizedText = (
    "Du hast „{current}“ abgeschlossen. Möchtest du mit „{next}“ fortfahren?",
    'You have completed "{current}". Do you want to continue to "{next}"?',
)
NEXT_STEP_FALLBACK: LocalizedText = ("den nächsten Schritt", "the next step")
CONFIRM_TEXT: LocalizedText = ("Weiter", "Continue")
DEFAULT_CANCEL_TEXT: LocalizedText = ("Bleiben", "Stay")


@dataclass(frozen=True)
class ConfirmationPrompt:
    """Texts and target of a pending transition, ready for a dialog."""

    from_index: int
    to_index: int
    title: str
    description: str
    confirm_text: str
    cancel_text: str

    @classmethod
    def for_transition(
        cls,
        *,
        from_index: int,
        to_index: int,
        current_label: str,
        next_label: str | None,
        cancel_text: LocalizedText | None = None,
        lang: str | None = None,
    ) -> "ConfirmationPrompt":
        next_text = next_label or tr(*NEXT_STEP_FALLBACK, lang=lang)
        return cls(
            from_index=from_index,
            to_index=to_index,
            title=tr(*STEP_COMPLETED_TITLE, lang=lang),
            description=tr(*STEP_COMPLETED_DESCRIPTION, lang=lang).format(current=current_label, next=next_text),
            confirm_text=tr(*CONFIRM_TEXT, lang=lang),
            cancel_text=tr(*(cancel_text or DEFAULT_CANCEL_TEXT), lang=lang),
        )


class ConfirmationGate:
    """Hold one pending transition until the host answers yes or no.

    Declining is not "stay on this step": it follows the host's cancellation
    path so the user is never left on a step they just walked away from.
    """

    def __init__(self) -> None:
        self._prompt: ConfirmationPrompt | None = None
        self._on_confirm: Callable[[], None] | None = None
        self._on_decline: Callable[[], None] | None = None

    @property
    def is_open(self) -> bool:
        return self._prompt is not None

    @property
    def prompt(self) -> ConfirmationPrompt | None:
        return self._prompt

    def open(
        self,
        prompt: ConfirmationPrompt,
        *,
        on_confirm: Callable[[], None],
        on_decline: Callable[[], None],
    ) -> None:
        if self.is_open:
            logger.warning("Replacing pending confirmation for step %s", self._prompt.from_index)
        self._prompt = prompt
        self._on_confirm = on_confirm
        self._on_decline = on_decline
        logger.debug("Awaiting confirmation for step %s -> %s", prompt.from_index, prompt.to_index)

    def confirm(self) -> bool:
        """Resume the pending transition. Returns ``False`` when nothing is pending."""

        callback = self._close()[0]
        if callback is None:
            return False
        callback()
        return True

    def decline(self) -> bool:
        """Withdraw from the wizard. Returns ``False`` when nothing is pending."""

        callback = self._close()[1]
        if callback is None:
            return False
        callback()
        return True

    def dismiss(self) -> None:
        """Drop a pending prompt without running either callback."""

        if self.is_open:
            logger.debug("Dismissing pending confirmation for step %s", self._prompt.from_index)
        self._close()

    def _close(self) -> tuple[Callable[[], None] | None, Callable[[], None] | None]:
        callbacks = (self._on_confirm, self._on_decline)
        self._prompt = None
        self._on_confirm = None
        self._on_decline = None
        return callbacks


__all__ = ["ConfirmationGate", "ConfirmationPrompt"]
