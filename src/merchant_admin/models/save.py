"""Save state enumerations shared by the auto-save and manual-save engines."""

from __future__ import annotations

from enum import StrEnum


class SaveStatus(StrEnum):
    """Observable state of an editable document relative to the remote store."""

    CLEAN = "clean"
    DIRTY = "dirty"
    SAVING = "saving"
    SAVED = "saved"
    ERROR = "error"


class SaveErrorKind(StrEnum):
    VALIDATION = "validation"
    TRANSPORT = "transport"
