"""
tests.conftest

Shared fixtures.

Responsibilities:
- Generate throwaway SSH keys.
- Provide a fake asyncssh process for driving the issuance gate without a network.
"""

from __future__ import annotations

from typing import Any

import asyncssh
import pytest


class FakeStream:
    def __init__(self) -> None:
        self.chunks: list[str] = []

    def write(self, data: str) -> None:
        self.chunks.append(data)

    @property
    def text(self) -> str:
        return "".join(self.chunks)


class FakeProcess:
    def __init__(self, *, command: str | None = None, extra: dict[str, Any] | None = None) -> None:
        self.command = command
        self.stdout = FakeStream()
        self.exit_status: int | None = None
        self._extra = extra or {}

    def get_extra_info(self, name: str, default: Any = None) -> Any:
        return self._extra.get(name, default)

    def exit(self, status: int) -> None:
        self.exit_status = status


def make_key(comment: str | None = None) -> asyncssh.SSHKey:
    return asyncssh.generate_private_key("ssh-ed25519", comment=comment)


def authorized_line(key: asyncssh.SSHKey) -> str:
    return key.export_public_key("openssh").decode("ascii")


@pytest.fixture
def alice_key() -> asyncssh.SSHKey:
    return make_key("alice@laptop")


@pytest.fixture
def mallory_key() -> asyncssh.SSHKey:
    return make_key("mallory@elsewhere")
