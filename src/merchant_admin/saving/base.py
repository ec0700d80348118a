"""Shared save-cycle machinery for the auto-save and manual-save engines."""

from __future__ import annotations

import asyncio
import copy
import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

from merchant_admin.errors import SaveError, SaveValidationError
from merchant_admin.models.save import SaveErrorKind, SaveStatus

logger = logging.getLogger(__name__)

T = TypeVar("T")

Validator = Callable[[Any], None]
StatusListener = Callable[[SaveStatus], None]

_FALLBACK_ERROR = "Failed to save"


@runtime_checkable
class SaveOperation(Protocol[T]):
    """Persist a value.

    Return the value the server stored, or ``None`` to accept the submitted
    snapshot as persisted. Raise ``SaveValidationError`` for a rejected value;
    any other exception counts as a transport failure.
    """

    async def __call__(self, value: T) -> T | None: ...


def snapshot(value: T) -> T:
    """Detach a value from later mutation by the caller."""
    return copy.deepcopy(value)


class SaveEngine(Generic[T]):
    """Status tracking, validation and the single in-flight save task.

    Subclasses decide *when* a save starts; this class guarantees that at most
    one runs at a time and that its outcome is folded back into state rather
    than raised.
    """

    def __init__(
        self,
        current: T,
        baseline: T,
        on_save: SaveOperation[T],
        *,
        enabled: bool,
        saved_display_ms: int,
        validator: Validator | None,
        on_status_change: StatusListener | None,
    ) -> None:
        self._current = snapshot(current)
        self._baseline = snapshot(baseline)
        self._on_save = on_save
        self._enabled = enabled
        self._saved_display = saved_display_ms / 1000
        self._validator = validator
        self._listener = on_status_change

        self._status = SaveStatus.CLEAN
        self._error: str | None = None
        self._error_kind: SaveErrorKind | None = None
        self._last_saved: datetime | None = None
        self._failed_payload: T | None = None

        self._save_task: asyncio.Task[bool] | None = None
        self._saved_timer: asyncio.TimerHandle | None = None
        self._generation = 0
        self._disposed = False

    @property
    def status(self) -> SaveStatus:
        return self._status

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def error_kind(self) -> SaveErrorKind | None:
        return self._error_kind

    @property
    def last_saved(self) -> datetime | None:
        return self._last_saved

    @property
    def current(self) -> T:
        return snapshot(self._current)

    @property
    def baseline(self) -> T:
        return snapshot(self._baseline)

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def is_saving(self) -> bool:
        return self._save_task is not None and not self._save_task.done()

    def _has_changes(self) -> bool:
        return self._current != self._baseline

    def _set_status(self, status: SaveStatus) -> None:
        if status == self._status:
            return
        logger.debug("Save status %s -> %s", self._status, status)
        self._status = status
        if status != SaveStatus.ERROR:
            self._error = None
            self._error_kind = None
            self._failed_payload = None
        if self._listener is not None:
            self._listener(status)

    def _fail(self, kind: SaveErrorKind, message: str, payload: T) -> None:
        self._error = message
        self._error_kind = kind
        self._failed_payload = payload
        self._set_status(SaveStatus.ERROR)

    def _validate(self, payload: T) -> bool:
        """Run the caller's precondition; a failure never reaches the transport."""
        if self._validator is None:
            return True
        try:
            self._validator(payload)
        except SaveValidationError as exc:
            logger.info("Save blocked by validation: %s", exc.message)
            self._fail(SaveErrorKind.VALIDATION, exc.message, payload)
            return False
        return True

    def _launch(self, payload: T) -> asyncio.Task[bool]:
        """Mark the document as saving and start the save task for ``payload``."""
        self._cancel_saved_timer()
        self._set_status(SaveStatus.SAVING)
        self._save_task = asyncio.get_running_loop().create_task(
            self._run_save(payload, self._generation)
        )
        return self._save_task

    async def _run_save(self, payload: T, generation: int) -> bool:
        try:
            echoed = await self._on_save(payload)
        except SaveValidationError as exc:
            if self._is_stale(generation):
                return False
            self._fail(SaveErrorKind.VALIDATION, exc.message, payload)
            self._after_failure(payload)
            return False
        except Exception as exc:  # noqa: BLE001
            logger.warning("Save failed", exc_info=True)
            if self._is_stale(generation):
                return False
            message = exc.message if isinstance(exc, SaveError) else str(exc)
            self._fail(SaveErrorKind.TRANSPORT, message or _FALLBACK_ERROR, payload)
            self._after_failure(payload)
            return False

        if self._is_stale(generation):
            return False
        self._baseline = self._accept(payload, echoed)
        self._last_saved = datetime.now(UTC)
        self._set_status(SaveStatus.SAVED)
        self._saved_timer = asyncio.get_running_loop().call_later(
            self._saved_display, self._end_saved_window
        )
        self._after_success()
        return True

    def _accept(self, payload: T, echoed: T | None) -> T:
        """Pick the new baseline after a successful save."""
        return snapshot(echoed) if echoed is not None else payload

    def _after_success(self) -> None:
        """Hook for follow-up work once a save has landed."""

    def _after_failure(self, payload: T) -> None:
        """Hook for follow-up work once a save has failed."""

    def _is_stale(self, generation: int) -> bool:
        if generation == self._generation:
            return False
        logger.debug("Dropping result of a save started before reload/dispose")
        if not self._disposed:
            self._resync()
        return True

    def _resync(self) -> None:
        """Recompute status after a dropped save result."""

    def _end_saved_window(self) -> None:
        self._saved_timer = None
        if self._status == SaveStatus.SAVED:
            self._set_status(SaveStatus.DIRTY if self._has_changes() else SaveStatus.CLEAN)

    def _cancel_saved_timer(self) -> None:
        if self._saved_timer is not None:
            self._saved_timer.cancel()
            self._saved_timer = None

    async def _await_save(self, task: asyncio.Task[bool] | None) -> None:
        # shield: a caller giving up on the wait must not abort the request
        if task is not None:
            await asyncio.shield(task)

    async def wait_idle(self) -> None:
        """Wait for the in-flight save, if any, to resolve."""
        await self._await_save(self._save_task)

    def _check_open(self) -> None:
        if self._disposed:
            raise RuntimeError("Save engine has been disposed")

    def dispose(self) -> None:
        """Stop all timers. An in-flight save finishes but its result is dropped."""
        self._cancel_saved_timer()
        self._generation += 1
        self._disposed = True
