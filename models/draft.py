"""Pydantic model for the draft snapshot kept in session storage."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class DraftRecord(BaseModel):
    """Lagging snapshot of an in-progress wizard.

    The JSON aliases (``formData``, ``activeStep``, ``completedSteps``) match
    the payload shape the browser front end keeps in ``sessionStorage`` so
    drafts written by either side stay readable.
    """

    model_config = ConfigDict(populate_by_name=True)

    form_data: dict[str, Any] = Field(default_factory=dict, alias="formData")
    active_step_index: int = Field(default=0, ge=0, alias="activeStep")
    completed_steps: list[int] = Field(default_factory=list, alias="completedSteps")

    @field_validator("active_step_index", mode="before")
    @classmethod
    def _default_missing_step(cls, value: object) -> object:
        """Treat ``null`` or negative steps as the first step."""

        if value is None or (isinstance(value, int) and value < 0):
            return 0
        return value

    @field_validator("form_data", "completed_steps", mode="before")
    @classmethod
    def _default_missing_collections(cls, value: object, info: ValidationInfo) -> object:
        if value is None:
            return {} if info.field_name == "form_data" else []
        return value

    @field_validator("completed_steps")
    @classmethod
    def _normalise_completed(cls, value: list[int]) -> list[int]:
        """Deduplicate and order completed indices, dropping negatives."""

        return sorted({index for index in value if index >= 0})

    def to_json(self) -> str:
        """Return the JSON payload stored under the draft key."""

        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, payload: str | bytes) -> "DraftRecord":
        return cls.model_validate_json(payload)
