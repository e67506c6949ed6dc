"""
badgermole.ssh.server

asyncssh listener for OTP issuance.

Responsibilities:
- Load (or generate) the SSH host key.
- Listen with public-key auth wired to the identity registry.
- Route every session through the issuance gate.
"""

from __future__ import annotations

import asyncssh

from badgermole.identity.registry import IdentityRegistry
from badgermole.observability.logging import get_logger
from badgermole.otp.store import OtpStore
from badgermole.settings import Settings
from badgermole.ssh.auth import PublicKeyAuthServer
from badgermole.ssh.gate import IssuanceGate, SessionHandler, exit_session

log = get_logger(__name__)


class SshServerError(Exception):
    pass


class SshOtpServer:
    def __init__(
        self,
        *,
        settings: Settings,
        registry: IdentityRegistry,
        store: OtpStore,
        next_handler: SessionHandler = exit_session,
    ) -> None:
        if store is None:
            raise SshServerError("store is required")
        self._settings = settings
        self._registry = registry
        self._gate = IssuanceGate(store=store, next_handler=next_handler)
        self._acceptor: asyncssh.SSHAcceptor | None = None

    @property
    def port(self) -> int | None:
        if self._acceptor is None:
            return None
        return self._acceptor.get_port()

    def _host_key(self) -> asyncssh.SSHKey:
        path = self._settings.ssh_host_key_path
        if not path:
            log.warning("ssh_ephemeral_host_key")
            return asyncssh.generate_private_key("ssh-ed25519")
        try:
            return asyncssh.read_private_key(path)
        except (OSError, asyncssh.KeyImportError) as e:
            raise SshServerError(f"failed to load SSH host key {path}: {e}") from e

    async def start(self) -> None:
        host_key = self._host_key()
        try:
            self._acceptor = await asyncssh.listen(
                self._settings.ssh_host,
                self._settings.ssh_port,
                server_factory=lambda: PublicKeyAuthServer(self._registry),
                server_host_keys=[host_key],
                process_factory=self._gate,
            )
        except (OSError, asyncssh.Error) as e:
            raise SshServerError(f"failed to create an SSH server: {e}") from e
        log.info("ssh_listening", host=self._settings.ssh_host, port=self.port)

    async def stop(self) -> None:
        if self._acceptor is None:
            return
        self._acceptor.close()
        await self._acceptor.wait_closed()
        self._acceptor = None
        log.info("ssh_stopped")


# --- Module Notes -----------------------------------------------------------
# `start` failures surface through the web app's startup hook, so the process never
# serves HTTP without its issuance side.
