"""Timer abstractions used to debounce draft writes."""

from __future__ import annotations

import asyncio
import logging
import threading
from typing import Callable, Protocol

from streamlit.runtime.scriptrunner import add_script_run_ctx, get_script_run_ctx

logger = logging.getLogger(__name__)


class ScheduledCall(Protocol):
    """Handle for a callback that has been scheduled but not yet run."""

    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Run ``callback`` once after ``delay`` seconds."""

    def schedule(self, callback: Callable[[], None], delay: float) -> ScheduledCall: ...


class ThreadingScheduler:
    """Scheduler backed by daemon ``threading.Timer`` instances.

    Suitable for Streamlit hosts, where each script run happens on its own
    thread and no event loop outlives the run. The timer inherits the
    scheduling thread's script context so ``st.session_state`` resolves to
    the same browser session when the callback fires.
    """

    def schedule(self, callback: Callable[[], None], delay: float) -> ScheduledCall:
        timer = threading.Timer(max(delay, 0.0), callback)
        timer.daemon = True
        add_script_run_ctx(timer, get_script_run_ctx(suppress_warning=True))
        timer.start()
        return timer


class AsyncioScheduler:
    """Scheduler backed by ``loop.call_later`` on a running event loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def schedule(self, callback: Callable[[], None], delay: float) -> ScheduledCall:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(max(delay, 0.0), callback)


class Debouncer:
    """Coalesce rapid triggers into a single call after a quiet interval."""

    def __init__(self, scheduler: Scheduler, delay: float) -> None:
        self._scheduler = scheduler
        self._delay = delay
        self._lock = threading.RLock()
        self._handle: ScheduledCall | None = None
        self._callback: Callable[[], None] | None = None
        self._generation = 0

    @property
    def delay(self) -> float:
        return self._delay

    @property
    def pending(self) -> bool:
        with self._lock:
            return self._callback is not None

    def trigger(self, callback: Callable[[], None]) -> None:
        """Cancel any pending call and schedule ``callback`` after the delay."""

        with self._lock:
            self._cancel_handle()
            self._generation += 1
            generation = self._generation
            self._callback = callback
            self._handle = self._scheduler.schedule(lambda: self._fire(generation), self._delay)

    def flush(self) -> bool:
        """Run the pending callback now. Returns ``False`` when nothing was pending."""

        with self._lock:
            callback = self._take()
        if callback is None:
            return False
        callback()
        return True

    def cancel(self) -> None:
        with self._lock:
            self._take()

    def _fire(self, generation: int) -> None:
        with self._lock:
            # A timer cancelled too late to stop it must not run a newer callback.
            if generation != self._generation:
                return
            callback = self._callback
            self._callback = None
            self._handle = None
        if callback is None:
            return
        try:
            callback()
        except Exception:
            logger.exception("Debounced callback failed")

    def _take(self) -> Callable[[], None] | None:
        callback = self._callback
        self._cancel_handle()
        self._callback = None
        return callback

    def _cancel_handle(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None


__all__ = [
    "AsyncioScheduler",
    "Debouncer",
    "ScheduledCall",
    "Scheduler",
    "ThreadingScheduler",
]
