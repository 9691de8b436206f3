from __future__ import annotations

import io
from datetime import date, datetime, time

from state.sanitize import sanitize


def test_primitives_and_none_pass_through() -> None:
    data = {"name": "Downtown", "seats": 12, "ratio": 0.5, "active": True, "note": None}

    assert sanitize(data) == data


def test_file_handles_and_callables_are_dropped() -> None:
    upload = io.BytesIO(b"%PDF-1.7")
    data = {"name": "Ada", "logo": upload, "on_change": lambda: None}

    assert sanitize(data) == {"name": "Ada"}


def test_dates_become_iso_strings() -> None:
    data = {
        "opened": date(2024, 3, 1),
        "updated": datetime(2024, 3, 1, 12, 30),
        "opens_at": time(8, 15),
    }

    assert sanitize(data) == {
        "opened": "2024-03-01",
        "updated": "2024-03-01T12:30:00",
        "opens_at": "08:15:00",
    }


def test_nested_structures_survive_when_serialisable() -> None:
    data = {"address": {"city": "Berlin", "zip": "10115"}, "tags": ("a", "b")}

    assert sanitize(data) == {"address": {"city": "Berlin", "zip": "10115"}, "tags": ["a", "b"]}


def test_cyclic_containers_are_dropped() -> None:
    cyclic: dict[str, object] = {"name": "loop"}
    cyclic["self"] = cyclic

    assert sanitize({"name": "Ada", "graph": cyclic}) == {"name": "Ada"}


def test_unsupported_objects_are_dropped() -> None:
    class Opaque:
        pass

    assert sanitize({"value": Opaque(), "ids": {1, 2}}) == {}


def test_sanitize_is_idempotent_and_copies() -> None:
    data = {"name": "Ada", "when": date(2024, 1, 2), "file": io.StringIO("x")}

    once = sanitize(data)
    twice = sanitize(once)

    assert once == twice
    assert "file" in data


def test_empty_input() -> None:
    assert sanitize(None) == {}
    assert sanitize({}) == {}
