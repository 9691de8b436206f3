from __future__ import annotations

from types import SimpleNamespace

from wizard.adapters import StepAdapter


def test_from_object_binds_available_capabilities() -> None:
    calls: list[str] = []
    step = SimpleNamespace(
        submit=lambda: calls.append("submit") or True,
        clearErrors=lambda: calls.append("clearErrors"),
        label="not callable",
    )

    adapter = StepAdapter.from_object(step)

    assert adapter.submit is not None and adapter.submit() is True
    assert adapter.restore() is True
    assert adapter.reset is None
    assert calls == ["submit", "clearErrors"]


def test_clear_errors_takes_precedence_over_reset() -> None:
    calls: list[str] = []
    adapter = StepAdapter(clear_errors=lambda: calls.append("clear"), reset=lambda: calls.append("reset"))

    adapter.restore()

    assert calls == ["clear"]


def test_restore_without_capabilities() -> None:
    adapter = StepAdapter.from_object(object())

    assert adapter.is_empty
    assert adapter.restore() is False


def test_adapter_instances_pass_through() -> None:
    adapter = StepAdapter(reset=lambda: None)

    assert StepAdapter.from_object(adapter) is adapter
