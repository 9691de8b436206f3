"""Draft persistence inside a real Streamlit script run."""

from __future__ import annotations

import pytest
from streamlit.testing.v1 import AppTest

from models.draft import DraftRecord

pytestmark = pytest.mark.streamlit_runtime


def _debounced_draft_app() -> None:
    import time

    import streamlit as st

    from wizard.controller import WizardController
    from wizard.types import StepDescriptor, WizardOptions

    if "draft_written" not in st.session_state:
        controller = WizardController(debounce_seconds=0.05)
        controller.initialize(
            [StepDescriptor(label="General"), StepDescriptor(label="Review")],
            {},
            WizardOptions(enable_persistence=True, storage_key="branch-wizard"),
        )
        controller.update_data({"a": 1})
        time.sleep(0.5)
        st.session_state["draft_written"] = "branch-wizard" in st.session_state


def test_debounced_write_reaches_browser_session() -> None:
    app = AppTest.from_function(_debounced_draft_app)

    app.run(timeout=10)

    assert not app.exception
    assert app.session_state["draft_written"] is True
    record = DraftRecord.from_json(app.session_state["branch-wizard"])
    assert record.form_data == {"a": 1}
