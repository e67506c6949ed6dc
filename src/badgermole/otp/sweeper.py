"""
badgermole.otp.sweeper

Background expiry sweeper.

Responsibilities:
- Periodically evict credentials older than the configured lifetime.
- Stop promptly on shutdown; survive a failing tick.
"""

from __future__ import annotations

import asyncio
import contextlib
from datetime import timedelta

from badgermole.observability.logging import get_logger
from badgermole.otp.store import OtpStore

log = get_logger(__name__)


class ExpirySweeper:
    def __init__(self, *, store: OtpStore, lifetime: timedelta, interval: float) -> None:
        if interval <= 0:
            raise ValueError("sweep interval must be positive")
        self._store = store
        self._lifetime = lifetime
        self._interval = interval
        self._stopping = asyncio.Event()
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._stopping.clear()
        self._task = asyncio.create_task(self._run(), name="otp-expiry-sweeper")

    async def stop(self) -> None:
        if self._task is None:
            return
        self._stopping.set()
        try:
            await asyncio.wait_for(self._task, timeout=self._interval + 1)
        except asyncio.TimeoutError:
            self._task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._task
        self._task = None

    def run_once(self) -> int:
        try:
            evicted = self._store.sweep_expired(self._lifetime)
        except Exception:
            # A single bad tick must not kill the loop.
            log.exception("otp_sweep_failed")
            return 0
        if evicted:
            log.info("otp_swept", evicted=evicted)
        return evicted

    async def _run(self) -> None:
        while not self._stopping.is_set():
            try:
                await asyncio.wait_for(self._stopping.wait(), timeout=self._interval)
            except asyncio.TimeoutError:
                self.run_once()


# --- Module Notes -----------------------------------------------------------
# The sweep itself is synchronous and runs on the event loop, so ticks cannot overlap
# and stopping always lands between whole record deletions.
