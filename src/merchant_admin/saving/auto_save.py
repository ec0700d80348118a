"""Debounced auto-save with one-step undo."""

from __future__ import annotations

import asyncio
import logging
from typing import cast

from merchant_admin.models.save import SaveStatus
from merchant_admin.saving.base import (
    SaveEngine,
    SaveOperation,
    StatusListener,
    T,
    Validator,
    snapshot,
)

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_MS = 3000
DEFAULT_SAVED_DISPLAY_MS = 2000

_UNSET = object()


class AutoSaveEngine(SaveEngine[T]):
    """Save a document a short quiet period after its last edit.

    Every ``edit`` restarts the debounce timer; a save fires only once edits
    stop. Edits made while a save is in flight are kept in ``current`` and
    picked up by a fresh debounce cycle when that save resolves. ``undo``
    restores the value that was persisted before the most recently started
    save, one level deep.

    Must be driven from a running event loop.
    """

    def __init__(
        self,
        initial_value: T,
        on_save: SaveOperation[T],
        *,
        debounce_ms: int = DEFAULT_DEBOUNCE_MS,
        saved_display_ms: int = DEFAULT_SAVED_DISPLAY_MS,
        enabled: bool = True,
        validator: Validator | None = None,
        on_status_change: StatusListener | None = None,
    ) -> None:
        super().__init__(
            initial_value,
            initial_value,
            on_save,
            enabled=enabled,
            saved_display_ms=saved_display_ms,
            validator=validator,
            on_status_change=on_status_change,
        )
        self._debounce = debounce_ms / 1000
        self._timer: asyncio.TimerHandle | None = None
        self._previous: object = _UNSET
        self._forced = False

    @property
    def previous(self) -> T | None:
        if self._previous is _UNSET:
            return None
        return snapshot(cast("T", self._previous))

    @property
    def can_undo(self) -> bool:
        return self._previous is not _UNSET and not self.is_saving

    @property
    def has_unsaved_changes(self) -> bool:
        """True while leaving the page would lose work."""
        return self.is_saving or self._has_changes()

    def _has_changes(self) -> bool:
        return self._forced or super()._has_changes()

    def _awaits_save(self) -> bool:
        if self._status == SaveStatus.ERROR:
            return self._current != self._failed_payload and super()._has_changes()
        return self._status == SaveStatus.DIRTY

    def edit(self, value: T) -> None:
        """Record a new ``current`` value and restart the debounce."""
        self._check_open()
        self._current = snapshot(value)
        if self.is_saving:
            # picked up once the in-flight save resolves
            return
        self._reconcile()

    def mark_dirty(self) -> None:
        """Force the next save for changes made outside ``edit``."""
        self._check_open()
        if self._status in (SaveStatus.CLEAN, SaveStatus.SAVED):
            self._forced = True
            self._reconcile()

    def set_enabled(self, enabled: bool) -> None:
        self._enabled = enabled
        if not enabled:
            self._cancel_timer()
        elif self._timer is None and not self.is_saving and self._awaits_save():
            self._arm_timer()

    def reload(self, value: T) -> None:
        """Adopt a freshly fetched value as both baseline and current."""
        self._check_open()
        self._cancel_timer()
        self._cancel_saved_timer()
        self._generation += 1
        self._current = snapshot(value)
        self._baseline = snapshot(value)
        self._previous = _UNSET
        self._forced = False
        self._set_status(SaveStatus.CLEAN)

    async def save_now(self) -> None:
        """Save immediately, skipping the debounce."""
        self._check_open()
        self._cancel_timer()
        if self.is_saving:
            return
        await self._await_save(self._start_save(snapshot(self._current)))

    async def retry(self) -> None:
        """Resubmit the snapshot of the failed save."""
        self._check_open()
        if self._status != SaveStatus.ERROR or self.is_saving:
            return
        payload = self._failed_payload if self._failed_payload is not None else self._current
        await self._await_save(self._start_save(snapshot(payload)))

    def undo(self) -> T | None:
        """Restore the value persisted before the latest save and return it.

        The restored value is treated as a new edit, so it is saved after
        the usual debounce.
        """
        self._check_open()
        if not self.can_undo:
            return None
        restored = cast("T", self._previous)
        self._previous = _UNSET
        self._current = snapshot(restored)
        logger.debug("Undo restored the pre-save value")
        self._reconcile()
        return snapshot(restored)

    def dispose(self) -> None:
        self._cancel_timer()
        super().dispose()

    def _reconcile(self) -> None:
        self._cancel_timer()
        if not self._has_changes():
            self._set_status(SaveStatus.CLEAN)
            return
        self._set_status(SaveStatus.DIRTY)
        if self._enabled:
            self._arm_timer()

    def _arm_timer(self) -> None:
        self._cancel_timer()
        self._timer = asyncio.get_running_loop().call_later(self._debounce, self._on_timer)

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _on_timer(self) -> None:
        self._timer = None
        self._start_save(snapshot(self._current))

    def _start_save(self, payload: T) -> asyncio.Task[bool] | None:
        if self.is_saving or self._disposed:
            return None
        if not self._forced and payload == self._baseline:
            self._set_status(SaveStatus.CLEAN)
            return None
        if not self._validate(payload):
            return None
        self._previous = snapshot(self._baseline)
        self._forced = False
        return self._launch(payload)

    def _accept(self, payload: T, echoed: T | None) -> T:
        # an echo that differs from current would re-trigger the debounce forever
        return payload

    def _after_success(self) -> None:
        if super()._has_changes() and self._enabled:
            self._arm_timer()

    def _after_failure(self, payload: T) -> None:
        # an edit made during the failed save gets its own debounce cycle;
        # the error stays visible until that save starts
        if self._current != payload and super()._has_changes() and self._enabled:
            self._arm_timer()

    def _resync(self) -> None:
        self._reconcile()


def create_auto_save(
    initial_value: T,
    on_save: SaveOperation[T],
    *,
    debounce_ms: int = DEFAULT_DEBOUNCE_MS,
    saved_display_ms: int = DEFAULT_SAVED_DISPLAY_MS,
    enabled: bool = True,
    validator: Validator | None = None,
    on_status_change: StatusListener | None = None,
) -> AutoSaveEngine[T]:
    """Build an auto-save engine for one editing session."""
    return AutoSaveEngine(
        initial_value,
        on_save,
        debounce_ms=debounce_ms,
        saved_display_ms=saved_display_ms,
        enabled=enabled,
        validator=validator,
        on_status_change=on_status_change,
    )
