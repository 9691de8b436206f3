"""Pydantic models for persisted wizard drafts."""

from .draft import DraftRecord

__all__ = ["DraftRecord"]
