"""
Connection data models
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, NamedTuple, Optional

from ...core.constants import DEFAULT_SSH_PORT, PRIVATE_KEY_PATH_PROPERTY, SFTP_SCHEME


@dataclass(frozen=True)
class ConnectionTarget:
    """
    Remote location a handler connects to.

    ``port`` is None when the location did not specify one; use
    ``effective_port`` when opening a connection.
    """
    host: str
    port: Optional[int] = None
    properties: Mapping[str, str] = field(default_factory=dict, hash=False)

    def __post_init__(self) -> None:
        if not self.host:
            raise ValueError("host must not be empty")
        # Freeze the mapping so the target stays immutable for the whole attempt
        object.__setattr__(self, "properties", MappingProxyType(dict(self.properties)))

    @property
    def effective_port(self) -> int:
        return self.port if self.port is not None else DEFAULT_SSH_PORT

    @property
    def private_key_path(self) -> Optional[str]:
        return self.properties.get(PRIVATE_KEY_PATH_PROPERTY)

    @property
    def realm(self) -> str:
        return f"{SFTP_SCHEME}://{self.host}:{self.effective_port}"

    def __str__(self) -> str:
        return self.realm


@dataclass(frozen=True)
class Credentials:
    """Login and secret; an empty secret selects interactive authentication"""
    login: str
    secret: str = ""

    @property
    def has_secret(self) -> bool:
        return bool(self.secret)

    def __repr__(self) -> str:
        return f"Credentials(login={self.login!r}, secret={'***' if self.secret else ''!r})"


class ConnectionState(str, Enum):
    """Connection lifecycle state"""
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    FAILED = "failed"


class KeyboardInteractivePrompt(NamedTuple):
    """One entry of a keyboard-interactive round"""
    prompt: str
    echo: bool
