"""Session state utilities for wizard drafts."""

from .drafts import DraftStore
from .sanitize import sanitize
from .scheduler import AsyncioScheduler, Debouncer, Scheduler, ThreadingScheduler

__all__ = [
    "AsyncioScheduler",
    "Debouncer",
    "DraftStore",
    "Scheduler",
    "ThreadingScheduler",
    "sanitize",
]
