"""Explicit save with dirty tracking against a baseline snapshot."""

from __future__ import annotations

import logging

from merchant_admin.models.save import SaveStatus
from merchant_admin.saving.auto_save import DEFAULT_SAVED_DISPLAY_MS
from merchant_admin.saving.base import (
    SaveEngine,
    SaveOperation,
    StatusListener,
    T,
    Validator,
    snapshot,
)

logger = logging.getLogger(__name__)


class ManualSaveEngine(SaveEngine[T]):
    """Track whether ``current`` differs from ``baseline``; persist only on ``save()``.

    No timers fire saves here. The baseline follows the value echoed by the
    save operation, or the submitted snapshot when nothing is echoed.
    """

    def __init__(
        self,
        current_value: T,
        baseline_value: T,
        on_save: SaveOperation[T],
        *,
        enabled: bool = True,
        saved_display_ms: int = DEFAULT_SAVED_DISPLAY_MS,
        validator: Validator | None = None,
        on_status_change: StatusListener | None = None,
    ) -> None:
        super().__init__(
            current_value,
            baseline_value,
            on_save,
            enabled=enabled,
            saved_display_ms=saved_display_ms,
            validator=validator,
            on_status_change=on_status_change,
        )
        if self.is_dirty:
            self._status = SaveStatus.DIRTY

    @property
    def is_dirty(self) -> bool:
        return self._enabled and self._has_changes()

    def update(self, value: T) -> None:
        self._check_open()
        self._current = snapshot(value)
        self._sync_status()

    def set_baseline(self, value: T) -> None:
        """Replace the baseline, e.g. after the page re-fetched the document."""
        self._check_open()
        self._baseline = snapshot(value)
        self._sync_status()

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled
        self._sync_status()

    async def save(self) -> None:
        """Persist ``current``. A no-op while saving or when nothing changed."""
        self._check_open()
        if self.is_saving or not self.is_dirty:
            return
        payload = snapshot(self._current)
        if not self._validate(payload):
            return
        await self._await_save(self._launch(payload))

    async def retry(self) -> None:
        if self._status == SaveStatus.ERROR:
            await self.save()

    def _sync_status(self) -> None:
        if self._status in (SaveStatus.CLEAN, SaveStatus.SAVED):
            if self.is_dirty:
                self._set_status(SaveStatus.DIRTY)
        elif self._status == SaveStatus.DIRTY and not self.is_dirty:
            self._set_status(SaveStatus.CLEAN)
        elif self._status == SaveStatus.ERROR and self._current != self._failed_payload:
            # the user moved on from the value that failed
            self._set_status(SaveStatus.DIRTY if self.is_dirty else SaveStatus.CLEAN)


def create_manual_save(
    current_value: T,
    baseline_value: T,
    on_save: SaveOperation[T],
    *,
    enabled: bool = True,
    saved_display_ms: int = DEFAULT_SAVED_DISPLAY_MS,
    validator: Validator | None = None,
    on_status_change: StatusListener | None = None,
) -> ManualSaveEngine[T]:
    """Build a manual-save engine for one editing session."""
    return ManualSaveEngine(
        current_value,
        baseline_value,
        on_save,
        enabled=enabled,
        saved_display_ms=saved_display_ms,
        validator=validator,
        on_status_change=on_status_change,
    )
