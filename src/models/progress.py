"""Progress file contract shared with the browser checklist.

The checklist stores per-browser completion flags and notes keyed by catalog
item identifier, and exports/imports them as JSON::

    {"schema_version": 1, "list_version": "2026.02.21",
     "updated_at": "2026-02-21T10:00:00.000Z",
     "completed": {"achv_explorer_1": true}, "notes": {"achv_explorer_1": "..."}}

This module owns validation of that shape.  Import is all-or-nothing:
:func:`validate_progress_data` either returns a complete ``ProgressData``
or raises ``ProgressValidationError`` with a single descriptive message.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from src.utils.errors import ProgressValidationError

CURRENT_SCHEMA_VERSION = 1


class ProgressData(BaseModel):
    """Validated user progress for one catalog version."""

    model_config = ConfigDict(frozen=True)

    schema_version: int = CURRENT_SCHEMA_VERSION
    list_version: str
    updated_at: str
    completed: dict[str, bool] = Field(default_factory=dict)
    notes: dict[str, str] = Field(default_factory=dict)


def _now_iso() -> str:
    now = datetime.now(tz=timezone.utc)  # noqa: UP017
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _is_iso_datetime(value: str) -> bool:
    # datetime.fromisoformat only accepts a trailing "Z" from Python 3.11.
    candidate = value[:-1] + "+00:00" if value.endswith("Z") else value
    try:
        datetime.fromisoformat(candidate)
    except ValueError:
        return False
    return True


def create_empty_progress(version: str) -> ProgressData:
    """Return a blank progress record for catalog *version*."""
    return ProgressData(list_version=version, updated_at=_now_iso())


def validate_progress_data(payload: Any) -> ProgressData:
    """Validate an imported progress payload.

    Args:
        payload: Decoded JSON from a progress file.

    Returns:
        The validated ``ProgressData``.

    Raises:
        ProgressValidationError: On the first structural problem found.
    """
    if not isinstance(payload, dict):
        raise ProgressValidationError("Progress file must be a JSON object.")

    schema_version = payload.get("schema_version")
    list_version = payload.get("list_version")
    updated_at = payload.get("updated_at")
    completed = payload.get("completed")
    notes = payload.get("notes")

    if isinstance(schema_version, bool) or schema_version != CURRENT_SCHEMA_VERSION:
        raise ProgressValidationError(f"Unsupported schema_version: {schema_version}.")

    if not isinstance(list_version, str) or not list_version:
        raise ProgressValidationError("list_version must be a non-empty string.")

    if not isinstance(updated_at, str) or not _is_iso_datetime(updated_at):
        raise ProgressValidationError("updated_at must be an ISO datetime string.")

    if not isinstance(completed, dict):
        raise ProgressValidationError("completed must be an object map.")

    if not isinstance(notes, dict):
        raise ProgressValidationError("notes must be an object map.")

    if any(not isinstance(value, bool) for value in completed.values()):
        raise ProgressValidationError("completed values must be boolean.")

    if any(not isinstance(value, str) for value in notes.values()):
        raise ProgressValidationError("notes values must be strings.")

    return ProgressData(
        schema_version=CURRENT_SCHEMA_VERSION,
        list_version=list_version,
        updated_at=updated_at,
        completed=completed,
        notes=notes,
    )
