"""Status line shown next to the editor's save controls."""

from __future__ import annotations

from datetime import datetime

from merchant_admin.hours.normalizer import to_12_hour
from merchant_admin.models.save import SaveStatus

_LABELS = {
    SaveStatus.CLEAN: "All changes saved",
    SaveStatus.DIRTY: "Unsaved changes",
    SaveStatus.SAVING: "Saving...",
}


def describe_status(
    status: SaveStatus,
    last_saved: datetime | None = None,
    error: str | None = None,
) -> str:
    if status == SaveStatus.SAVED:
        if last_saved is None:
            return "Saved"
        return f"Saved at {to_12_hour(last_saved.astimezone().strftime('%H:%M'))}"
    if status == SaveStatus.ERROR:
        return error or "Error saving"
    return _LABELS[status]
