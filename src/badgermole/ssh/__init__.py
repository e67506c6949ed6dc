"""
badgermole.ssh

SSH issuance package.

Responsibilities:
- Public-key authentication predicate backed by the identity registry.
- Issuance gate that mints and displays an OTP per authenticated session.
- asyncssh listener lifecycle.
"""

from badgermole.ssh.auth import is_authorized_key
from badgermole.ssh.gate import IssuanceGate, exit_session
from badgermole.ssh.server import SshOtpServer, SshServerError

__all__ = ["IssuanceGate", "SshOtpServer", "SshServerError", "exit_session", "is_authorized_key"]
