"""Session-scoped draft storage for multi-step wizards."""

from __future__ import annotations

import logging
from typing import MutableMapping, cast

import streamlit as st
from pydantic import ValidationError

import config
from constants.keys import DraftKeys
from core.errors import DraftPersistenceError
from models.draft import DraftRecord
from state.sanitize import sanitize

logger = logging.getLogger(__name__)


class DraftStore:
    """Keyed ``load``/``save``/``clear`` façade over session storage.

    Drafts live in ``st.session_state`` by default, so they disappear with the
    browser session; partially typed addresses or phone numbers are never
    written anywhere durable. Records are stored as JSON strings and the store
    does no debouncing of its own.
    """

    def __init__(
        self,
        storage: MutableMapping[str, object] | None = None,
        *,
        prefix: str | None = None,
    ) -> None:
        self._storage = storage
        self._keys = DraftKeys(prefix=f"{prefix or config.DRAFT_KEY_PREFIX}_")

    @property
    def storage(self) -> MutableMapping[str, object]:
        if self._storage is not None:
            return self._storage
        return cast(MutableMapping[str, object], st.session_state)

    def compute_key(self, explicit_key: str | None = None, context: str | None = None) -> str:
        """Return ``explicit_key`` or a key derived from the screen path in ``context``."""

        if isinstance(explicit_key, str) and explicit_key.strip():
            return explicit_key
        return self._keys.for_context(context)

    def load(self, key: str) -> DraftRecord | None:
        """Return the stored draft for ``key`` or ``None`` when missing or unreadable."""

        try:
            raw = self.storage.get(key)
        except Exception:
            logger.warning("Could not read draft '%s'", key, exc_info=True)
            return None
        if raw is None:
            return None
        if not isinstance(raw, (str, bytes, bytearray)):
            logger.warning("Ignoring draft '%s' with unexpected type %s", key, type(raw).__name__)
            return None
        try:
            return DraftRecord.from_json(raw)
        except (ValidationError, ValueError) as error:
            logger.warning("Ignoring malformed draft '%s': %s", key, error)
            return None

    def save(self, key: str, record: DraftRecord) -> None:
        """Sanitise and store ``record`` under ``key``."""

        sanitized = record.model_copy(update={"form_data": sanitize(record.form_data)})
        try:
            payload = sanitized.to_json()
        except (ValueError, TypeError) as error:
            raise DraftPersistenceError(key, f"Draft '{key}' is not serialisable: {error}") from error
        try:
            self.storage[key] = payload
        except Exception as error:
            raise DraftPersistenceError(key) from error
        logger.debug("Saved draft '%s' at step %s", key, sanitized.active_step_index)

    def clear(self, key: str) -> None:
        try:
            self.storage.pop(key, None)
        except Exception as error:
            raise DraftPersistenceError(key) from error
        logger.debug("Cleared draft '%s'", key)


__all__ = ["DraftStore"]
