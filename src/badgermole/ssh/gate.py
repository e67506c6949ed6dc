"""
badgermole.ssh.gate

OTP issuance for authenticated SSH sessions.

Responsibilities:
- Mint a fresh credential for the connecting key on every session.
- Write it to the session (plain text, or JSON when the command asks for it).
- Hand the session to the next handler whatever happened.
"""

from __future__ import annotations

import time
import uuid
from collections.abc import Awaitable, Callable

import asyncssh
import structlog

from badgermole.observability.logging import get_logger
from badgermole.otp.store import OtpStore
from badgermole.ssh.auth import AUTHORIZED_KEY_EXTRA

log = get_logger(__name__)

SessionHandler = Callable[[asyncssh.SSHServerProcess], Awaitable[None]]


async def exit_session(process: asyncssh.SSHServerProcess) -> None:
    process.exit(0)


def _remote_addr(process: asyncssh.SSHServerProcess) -> str:
    peer = process.get_extra_info("peername")
    if not peer:
        return ""
    return f"{peer[0]}:{peer[1]}"


def wants_json(command: str | None) -> bool:
    return "json" in (command or "").split()


class IssuanceGate:
    def __init__(self, *, store: OtpStore, next_handler: SessionHandler = exit_session) -> None:
        self._store = store
        self._next = next_handler

    async def __call__(self, process: asyncssh.SSHServerProcess) -> None:
        remote_addr = _remote_addr(process)
        started = time.monotonic()
        with structlog.contextvars.bound_contextvars(
            ssh_session_id=str(uuid.uuid4()),
            remote_addr=remote_addr,
        ):
            log.info("ssh_session_started", command=process.command)
            self._issue(process, remote_addr)
            try:
                await self._next(process)
            finally:
                log.info(
                    "ssh_session_finished",
                    duration_ms=round((time.monotonic() - started) * 1000, 1),
                )

    def _issue(self, process: asyncssh.SSHServerProcess, remote_addr: str) -> None:
        public_key = process.get_extra_info(AUTHORIZED_KEY_EXTRA) or ""
        try:
            credential = self._store.issue(public_key, remote_addr)
        except Exception as e:
            log.exception("otp_issue_failed")
            process.stdout.write(f"Error: {e}\n")
            return

        log.info("otp_issued")
        if wants_json(process.command):
            process.stdout.write(credential.as_json() + "\n")
        else:
            process.stdout.write(credential.as_text() + "\n")


# --- Module Notes -----------------------------------------------------------
# A failed issuance is reported on the session stream only; the session continues
# into the handler chain like any other.
