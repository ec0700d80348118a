"""Shared doubles for the save engine tests."""

from __future__ import annotations

import asyncio
from typing import Any

import pytest


class RecordingSave:
    """In-memory save operation that records payloads and can hold or fail them."""

    def __init__(self) -> None:
        self.calls: list[Any] = []
        self.gate: asyncio.Event | None = None
        self.error: Exception | None = None
        self.echo: Any = None
        self.in_flight = 0
        self.max_in_flight = 0

    def hold(self) -> asyncio.Event:
        self.gate = asyncio.Event()
        return self.gate

    async def __call__(self, value: Any) -> Any:
        self.calls.append(value)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            if self.gate is not None:
                await self.gate.wait()
            if self.error is not None:
                raise self.error
            return self.echo
        finally:
            self.in_flight -= 1


@pytest.fixture
def recording_save() -> RecordingSave:
    return RecordingSave()
