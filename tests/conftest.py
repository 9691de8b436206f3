from pathlib import Path
import sys
from dataclasses import dataclass
from typing import Callable

import streamlit as st

import pytest


ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@dataclass
class _SessionDict(dict[str, object]):
    """Lightweight replacement for ``st.session_state`` during tests."""

    def clear(self) -> None:  # type: ignore[override]
        super().clear()


@pytest.fixture(autouse=True)
def _stub_streamlit_session_state(request: pytest.FixtureRequest, monkeypatch: pytest.MonkeyPatch) -> None:
    """Replace Streamlit's runtime-bound session state with a plain dictionary."""

    if request.node.get_closest_marker("streamlit_runtime"):
        yield
        return
    session_state = _SessionDict()
    monkeypatch.setattr(st, "session_state", session_state, raising=False)
    yield


class ManualCall:
    """Scheduled call that only runs when the test says so."""

    def __init__(self, callback: Callable[[], None], delay: float) -> None:
        self.callback = callback
        self.delay = delay
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """Deterministic stand-in for timer-backed schedulers."""

    def __init__(self) -> None:
        self.calls: list[ManualCall] = []

    def schedule(self, callback: Callable[[], None], delay: float) -> ManualCall:
        call = ManualCall(callback, delay)
        self.calls.append(call)
        return call

    @property
    def pending(self) -> list[ManualCall]:
        return [call for call in self.calls if not call.cancelled]

    def run_pending(self) -> int:
        """Fire every call that was not cancelled; returns how many ran."""

        due = self.pending
        for call in due:
            call.cancelled = True
            call.callback()
        return len(due)


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def session_storage() -> dict[str, object]:
    return st.session_state  # type: ignore[return-value]
