"""State machine that sequences wizard steps and keeps a session draft.

The controller never renders anything and never talks to the backend. Steps
own their rules (``StepDescriptor.validation``) and optional capabilities
(``StepAdapter``); the controller decides *when* those run and what happens
between steps:

* ``advance()`` runs the step's ``submit`` then its ``validation`` and only
  moves on when both pass. Calls made while one is in flight are ignored.
* ``retreat()`` goes back one step, or cancels the wizard from the first step.
* ``jump_to()`` only reaches completed steps, earlier steps, or the step right
  after a completed active step.
* Every material change schedules a debounced draft write; ``flush()`` writes
  immediately when the host tears the page down.

Failures inside steps or storage never escape the public operations; they
leave the state unchanged and are logged.
"""

from __future__ import annotations

import inspect
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Mapping, Sequence

from opentelemetry import trace
from streamlit.runtime.scriptrunner import get_script_run_ctx

import config
from core.errors import DraftPersistenceError, StepSubmitError, StepTransitionError, StepValidationError
from models.draft import DraftRecord
from state.drafts import DraftStore
from state.scheduler import Debouncer, Scheduler, ThreadingScheduler
from utils.logging_context import log_context
from wizard.adapters import StepAdapter
from wizard.confirmation import ConfirmationGate, ConfirmationPrompt
from wizard.types import (
    AdvanceOutcome,
    FormData,
    Normalizer,
    StepDescriptor,
    WizardOptions,
    WizardState,
    WizardStatus,
)

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

CompleteCallback = Callable[[FormData], Awaitable[None] | None]
CancelCallback = Callable[[], None]


def has_meaningful_data(initial_data: Mapping[str, Any] | None) -> bool:
    """Return ``True`` when ``initial_data`` describes an existing entity (edit mode)."""

    if not initial_data:
        return False
    return any(value is not None and not (isinstance(value, str) and value == "") for value in initial_data.values())


def _script_session_id() -> str | None:
    """Return the browser session id of the running Streamlit script, if any."""

    ctx = get_script_run_ctx(suppress_warning=True)
    return ctx.session_id if ctx is not None else None


async def _settle(result: Any) -> Any:
    if inspect.isawaitable(result):
        return await result
    return result


@dataclass(frozen=True)
class StepRenderContext:
    """Everything a host hands to the active step's renderer."""

    step: StepDescriptor
    step_index: int
    total_steps: int
    data: Mapping[str, Any]
    update_data: Callable[[Mapping[str, Any]], None]
    props: Mapping[str, Any]


class WizardController:
    """Drive one wizard instance from mount to completion or cancellation."""

    def __init__(
        self,
        *,
        draft_store: DraftStore | None = None,
        scheduler: Scheduler | None = None,
        on_complete: CompleteCallback | None = None,
        on_cancel: CancelCallback | None = None,
        normalizer: Normalizer | None = None,
        gate: ConfirmationGate | None = None,
        debounce_seconds: float | None = None,
        session_id: str | None = None,
    ) -> None:
        self._store = draft_store or DraftStore()
        delay = config.DRAFT_DEBOUNCE_SECONDS if debounce_seconds is None else debounce_seconds
        self._debouncer = Debouncer(scheduler or ThreadingScheduler(), delay)
        self._on_complete = on_complete
        self._on_cancel = on_cancel
        self._normalizer = normalizer
        self._gate = gate or ConfirmationGate()
        self._session_id = session_id or _script_session_id()
        self._steps: tuple[StepDescriptor, ...] = ()
        self._options = WizardOptions()
        self._storage_key = ""
        self._adapters: dict[int, StepAdapter] = {}
        self._active = 0
        self._completed: frozenset[int] = frozenset()
        self._errors: dict[int, bool] = {}
        self._data: FormData = {}
        self._status = WizardStatus.ACTIVE
        self._in_flight = False
        self._initialized = False

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------
    @property
    def steps(self) -> tuple[StepDescriptor, ...]:
        return self._steps

    @property
    def options(self) -> WizardOptions:
        return self._options

    @property
    def storage_key(self) -> str:
        return self._storage_key

    @property
    def gate(self) -> ConfirmationGate:
        return self._gate

    @property
    def pending_confirmation(self) -> ConfirmationPrompt | None:
        return self._gate.prompt

    @property
    def can_cancel(self) -> bool:
        return self._on_cancel is not None

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @property
    def current_step(self) -> StepDescriptor:
        self._require_initialized()
        return self._steps[self._active]

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def initialize(
        self,
        steps: Sequence[StepDescriptor],
        initial_data: Mapping[str, Any] | None = None,
        options: WizardOptions | None = None,
    ) -> WizardState:
        """Build the live state, reconciling it once with any stored draft.

        Without meaningful ``initial_data`` the wizard is creating a new entity
        and a leftover draft is discarded. With it (edit mode) the draft is
        resumed and ``initial_data`` wins on key conflicts. ``initial_step`` or
        ``skip_steps`` start the wizard fresh from ``initial_data`` and discard
        the draft.
        """

        descriptors = tuple(steps)
        if not descriptors:
            raise ValueError("A wizard needs at least one step")

        self._debouncer.cancel()
        self._gate.dismiss()
        self._steps = descriptors
        self._options = options or WizardOptions()
        self._storage_key = self._store.compute_key(self._options.storage_key, self._options.context)
        self._adapters = {}
        self._errors = {}
        self._status = WizardStatus.ACTIVE
        self._in_flight = False
        self._initialized = True

        seed = dict(initial_data or {})
        forced_completed = frozenset(index for index in self._options.skip_steps if self._in_range(index))
        draft = self._hydrate(seed)
        if draft is None:
            self._data = seed
            self._active = self._clamp(self._options.initial_step)
            self._completed = forced_completed
        else:
            self._data = {**draft.form_data, **seed}
            self._active = self._clamp(draft.active_step_index)
            self._completed = frozenset(index for index in draft.completed_steps if self._in_range(index))

        logger.info(
            "Wizard '%s' started at step %s/%s (%s, draft %s)",
            self._storage_key,
            self._active + 1,
            len(self._steps),
            "edit" if has_meaningful_data(seed) else "create",
            "resumed" if draft is not None else "none",
        )
        return self.get_state()

    def _hydrate(self, seed: Mapping[str, Any]) -> DraftRecord | None:
        if not self._options.enable_persistence:
            return None
        if not has_meaningful_data(seed) or self._options.forces_entry_point:
            # A new entity or a host-directed entry point must not inherit a draft from an earlier visit.
            self._clear_draft()
            return None
        return self._store.load(self._storage_key)

    def flush(self) -> None:
        """Write the draft right away; meant for page teardown. Never raises."""

        self._debouncer.cancel()
        if not self._initialized or not self._options.enable_persistence or self._status.is_terminal:
            return
        try:
            self._write_draft()
        except Exception:
            logger.warning("Teardown flush failed for draft '%s'", self._storage_key, exc_info=True)

    # ------------------------------------------------------------------
    # Step adapters
    # ------------------------------------------------------------------
    def register_adapter(self, index: int, step: object) -> StepAdapter:
        """Register the capabilities of the rendered step at ``index``."""

        self._require_initialized()
        if not self._in_range(index):
            raise IndexError(f"Step index {index} out of range for {len(self._steps)} steps")
        adapter = StepAdapter.from_object(step)
        if adapter.is_empty:
            self._adapters.pop(index, None)
        else:
            self._adapters[index] = adapter
        return adapter

    def unregister_adapter(self, index: int) -> None:
        self._adapters.pop(index, None)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    async def advance(self) -> AdvanceOutcome:
        """Try to leave the active step forwards."""

        if not self._accepts_navigation("advance"):
            return AdvanceOutcome.IGNORED
        if self._in_flight:
            logger.debug("Ignoring advance while a transition is in flight")
            return AdvanceOutcome.IGNORED

        index = self._active
        step = self._steps[index]
        self._in_flight = True
        try:
            with (
                log_context(session_id=self._session_id, wizard_step=step.label, draft_key=self._storage_key),
                tracer.start_as_current_span("wizard.advance") as span,
            ):
                span.set_attribute("wizard.step_index", index)
                span.set_attribute("wizard.step_count", len(self._steps))
                outcome = await self._advance_from(index, step)
                span.set_attribute("wizard.outcome", outcome.value)
                return outcome
        finally:
            self._in_flight = False

    async def _advance_from(self, index: int, step: StepDescriptor) -> AdvanceOutcome:
        try:
            await self._run_submit(index)
            await self._run_validation(index, step)
        except StepTransitionError as error:
            if self._is_stale(index):
                return AdvanceOutcome.IGNORED
            self._errors = {**self._errors, index: True}
            logger.info("Step %s stays active: %s", index, error, exc_info=error.__cause__)
            if isinstance(error, StepSubmitError):
                return AdvanceOutcome.SUBMIT_FAILED
            return AdvanceOutcome.VALIDATION_FAILED

        if self._is_stale(index):
            return AdvanceOutcome.IGNORED

        self._errors = {key: value for key, value in self._errors.items() if key != index}
        self._completed = self._completed | {index}

        if index == len(self._steps) - 1:
            await self._complete()
            return AdvanceOutcome.COMPLETED

        if self._options.show_per_transition_confirmation:
            self._schedule_persist()
            self._open_gate(index)
            return AdvanceOutcome.AWAITING_CONFIRMATION

        self._move_to(index + 1)
        return AdvanceOutcome.ADVANCED

    def _is_stale(self, index: int) -> bool:
        """Return ``True`` when the wizard moved on while a step was settling."""

        if self._status.is_terminal or self._active != index:
            logger.debug("Discarding result of step %s; the wizard moved on meanwhile", index)
            return True
        return False

    async def _run_submit(self, index: int) -> None:
        adapter = self._adapters.get(index)
        if adapter is None or adapter.submit is None:
            return
        try:
            result = await _settle(adapter.submit())
        except Exception as error:
            raise StepSubmitError(index, f"Step {index} submit raised {type(error).__name__}") from error
        if result is False:
            raise StepSubmitError(index, f"Step {index} submit returned False")

    async def _run_validation(self, index: int, step: StepDescriptor) -> None:
        if step.validation is None:
            return
        # Copy after submit so data pushed by the step's own submit is included.
        snapshot = dict(self._data)
        try:
            result = await _settle(step.validation(snapshot))
        except Exception as error:
            raise StepValidationError(index, f"Step {index} validation raised {type(error).__name__}") from error
        if not result:
            raise StepValidationError(index, f"Step {index} validation rejected the data")

    def retreat(self) -> bool:
        """Go back one step; from the first step this cancels the wizard.

        Returns ``True`` when the active step changed.
        """

        if not self._accepts_navigation("retreat"):
            return False
        if self._active == 0:
            if self._on_cancel is None:
                self._debouncer.cancel()
                self._clear_draft()
                return False
            self._cancel("back from the first step")
            return False

        target = self._active - 1
        adapter = self._adapters.get(target)
        if adapter is not None:
            try:
                adapter.restore()
            except Exception:
                logger.warning("Step %s failed to clear its errors", target, exc_info=True)
        self._move_to(target)
        return True

    def can_jump_to(self, index: int) -> bool:
        """Return ``True`` when ``index`` is reachable from the active step."""

        if not self._in_range(index):
            return False
        if index in self._completed or index < self._active:
            return True
        return index == self._active + 1 and self._active in self._completed

    def jump_to(self, index: int) -> bool:
        """Move to ``index`` when navigable; anything else is silently ignored."""

        if not self._accepts_navigation("jump_to"):
            return False
        if not self.can_jump_to(index):
            logger.debug("Ignoring jump from step %s to non-navigable step %s", self._active, index)
            return False
        if index != self._active:
            self._move_to(index)
        return True

    def confirm_transition(self) -> bool:
        return self._gate.confirm()

    def decline_transition(self) -> bool:
        return self._gate.decline()

    # ------------------------------------------------------------------
    # Data
    # ------------------------------------------------------------------
    def update_data(self, partial: Mapping[str, Any]) -> None:
        """Shallow-merge ``partial`` into the form data.

        The merge lands in the live snapshot immediately, so a ``submit`` or
        ``validation`` that is still awaiting sees it.
        """

        self._require_initialized()
        if self._status.is_terminal:
            logger.debug("Ignoring data update on a %s wizard", self._status)
            return
        normalized = self._normalizer(partial) if self._normalizer is not None else partial
        self._data = {**self._data, **dict(normalized)}
        self._schedule_persist()

    def on_data_externally_changed(self, partial: Mapping[str, Any] | None) -> None:
        """Merge host-provided seed data (for example a refetched entity) over the form data."""

        self._require_initialized()
        if not partial or self._status.is_terminal:
            return
        self._data = {**self._data, **dict(partial)}
        self._schedule_persist()

    def get_state(self) -> WizardState:
        return WizardState(
            active_step_index=self._active,
            completed_steps=self._completed,
            step_errors=dict(self._errors),
            form_data=dict(self._data),
            status=self._status,
        )

    def render_context(self) -> StepRenderContext:
        """Return the props a host passes to the active step's renderer."""

        self._require_initialized()
        return StepRenderContext(
            step=self._steps[self._active],
            step_index=self._active,
            total_steps=len(self._steps),
            data=dict(self._data),
            update_data=self.update_data,
            props=self._options.step_props,
        )

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _require_initialized(self) -> None:
        if not self._initialized:
            raise RuntimeError("WizardController.initialize() must be called first")

    def _accepts_navigation(self, operation: str) -> bool:
        self._require_initialized()
        if self._status.is_terminal:
            logger.debug("Ignoring %s on a %s wizard", operation, self._status)
            return False
        if self._gate.is_open:
            logger.debug("Ignoring %s while a step confirmation is pending", operation)
            return False
        return True

    def _in_range(self, index: int) -> bool:
        return 0 <= index < len(self._steps)

    def _clamp(self, index: int) -> int:
        return max(0, min(index, len(self._steps) - 1))

    def _move_to(self, index: int) -> None:
        previous = self._active
        self._active = index
        logger.info("Wizard '%s' moved from step %s to %s", self._storage_key, previous, index)
        self._schedule_persist()

    def _open_gate(self, index: int) -> None:
        prompt = ConfirmationPrompt.for_transition(
            from_index=index,
            to_index=index + 1,
            current_label=self._steps[index].label,
            next_label=self._steps[index + 1].label,
            cancel_text=self._options.confirmation_cancel_text,
        )
        self._gate.open(
            prompt,
            on_confirm=lambda: self._resume_transition(index),
            on_decline=lambda: self._cancel("step confirmation declined"),
        )

    def _resume_transition(self, index: int) -> None:
        if self._is_stale(index):
            return
        self._move_to(index + 1)

    async def _complete(self) -> None:
        self._status = WizardStatus.COMPLETED
        self._debouncer.cancel()
        self._clear_draft()
        logger.info("Wizard '%s' completed", self._storage_key)
        if self._on_complete is None:
            return
        try:
            await _settle(self._on_complete(dict(self._data)))
        except Exception:
            logger.exception("on_complete callback failed for wizard '%s'", self._storage_key)

    def _cancel(self, reason: str) -> None:
        self._status = WizardStatus.CANCELLED
        self._debouncer.cancel()
        self._clear_draft()
        logger.info("Wizard '%s' cancelled (%s)", self._storage_key, reason)
        if self._on_cancel is None:
            return
        try:
            self._on_cancel()
        except Exception:
            logger.exception("on_cancel callback failed for wizard '%s'", self._storage_key)

    def _schedule_persist(self) -> None:
        if not self._options.enable_persistence or self._status.is_terminal:
            return
        self._debouncer.trigger(self._write_draft)

    def _write_draft(self) -> None:
        if self._status.is_terminal:
            return
        record = DraftRecord(
            form_data=self._data,
            active_step_index=self._active,
            completed_steps=sorted(self._completed),
        )
        try:
            self._store.save(self._storage_key, record)
        except DraftPersistenceError:
            logger.warning("Draft '%s' not saved; continuing in memory", self._storage_key, exc_info=True)

    def _clear_draft(self) -> None:
        if not self._options.enable_persistence:
            return
        try:
            self._store.clear(self._storage_key)
        except DraftPersistenceError:
            logger.warning("Draft '%s' could not be cleared", self._storage_key, exc_info=True)


__all__ = ["StepRenderContext", "WizardController", "has_meaningful_data"]
