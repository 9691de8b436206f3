from __future__ import annotations

from dataclasses import dataclass


class StateKeys:
    """Keys for data stored in ``st.session_state``."""

    LANG = "lang"


@dataclass(frozen=True)
class DraftKeys:
    """Namespaced session-state keys for wizard drafts."""

    prefix: str

    def namespace(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def for_context(self, context: str | None) -> str:
        """Return the draft key derived from a screen path such as ``/admin/branches/create``."""

        path = (context or "").strip() or "/"
        return self.namespace(path.replace("/", "_"))
