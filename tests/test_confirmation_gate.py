from __future__ import annotations

import streamlit as st

from constants.keys import StateKeys
from wizard.confirmation import ConfirmationGate, ConfirmationPrompt


def _prompt(**overrides: object) -> ConfirmationPrompt:
    values: dict[str, object] = {
        "from_index": 0,
        "to_index": 1,
        "current_label": "General",
        "next_label": "Address",
        "lang": "en",
    }
    values.update(overrides)
    return ConfirmationPrompt.for_transition(**values)  # type: ignore[arg-type]


def test_prompt_texts_in_english() -> None:
    prompt = _prompt()

    assert prompt.title == "Step completed"
    assert prompt.description == 'You have completed "General". Do you want to continue to "Address"?'
    assert prompt.confirm_text == "Continue"
    assert prompt.cancel_text == "Stay"


def test_prompt_follows_session_language() -> None:
    st.session_state[StateKeys.LANG] = "de"

    prompt = _prompt(lang=None)

    assert prompt.title == "Schritt abgeschlossen"
    assert prompt.confirm_text == "Weiter"
    assert "„General“" in prompt.description


def test_prompt_custom_cancel_text_and_missing_next_label() -> None:
    prompt = _prompt(next_label=None, cancel_text=("Verlassen", "Leave"))

    assert prompt.cancel_text == "Leave"
    assert prompt.description.endswith('continue to "the next step"?')


def test_confirm_runs_only_the_confirm_callback() -> None:
    gate = ConfirmationGate()
    calls: list[str] = []
    gate.open(_prompt(), on_confirm=lambda: calls.append("yes"), on_decline=lambda: calls.append("no"))

    assert gate.is_open
    assert gate.prompt is not None and gate.prompt.to_index == 1
    assert gate.confirm() is True
    assert calls == ["yes"]
    assert not gate.is_open
    assert gate.confirm() is False
    assert gate.decline() is False


def test_decline_runs_only_the_decline_callback() -> None:
    gate = ConfirmationGate()
    calls: list[str] = []
    gate.open(_prompt(), on_confirm=lambda: calls.append("yes"), on_decline=lambda: calls.append("no"))

    assert gate.decline() is True
    assert calls == ["no"]
    assert gate.prompt is None


def test_callback_sees_closed_gate() -> None:
    gate = ConfirmationGate()
    observed: list[bool] = []
    gate.open(_prompt(), on_confirm=lambda: observed.append(gate.is_open), on_decline=lambda: None)

    gate.confirm()

    assert observed == [False]


def test_dismiss_drops_prompt_silently() -> None:
    gate = ConfirmationGate()
    calls: list[str] = []
    gate.open(_prompt(), on_confirm=lambda: calls.append("yes"), on_decline=lambda: calls.append("no"))

    gate.dismiss()

    assert not gate.is_open
    assert calls == []
