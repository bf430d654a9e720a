"""
Connection settings
"""
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

from .constants import (
    DEFAULT_CONNECT_TIMEOUT_MS,
    DEFAULT_SSH_PORT,
    DEFAULT_LOG_LEVEL,
    KNOWN_HOSTS_PATH,
)
from .exceptions import ConfigError


@dataclass
class ConnectionSettings:
    """Tunables shared by every connection attempt"""
    connect_timeout_ms: int = DEFAULT_CONNECT_TIMEOUT_MS
    default_port: int = DEFAULT_SSH_PORT
    known_hosts: Optional[str] = KNOWN_HOSTS_PATH
    log_level: str = DEFAULT_LOG_LEVEL

    def __post_init__(self) -> None:
        if self.connect_timeout_ms <= 0:
            raise ConfigError(f"connect_timeout_ms must be positive, got {self.connect_timeout_ms}")
        if not 0 < self.default_port < 65536:
            raise ConfigError(f"default_port out of range: {self.default_port}")

    @property
    def connect_timeout(self) -> float:
        """Timeout in seconds, as paramiko and socket expect it"""
        return self.connect_timeout_ms / 1000.0

    @property
    def known_hosts_path(self) -> Optional[Path]:
        if not self.known_hosts:
            return None
        return Path(self.known_hosts).expanduser()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConnectionSettings":
        """
        Build settings from a merged configuration dictionary.

        Unknown keys are ignored so the same file can carry other sections.
        Raises ConfigError on values of the wrong type.
        """
        known = {f.name for f in fields(cls)}
        kwargs: Dict[str, Any] = {}
        for key, value in data.items():
            if key not in known:
                continue
            if key in ("connect_timeout_ms", "default_port"):
                try:
                    value = int(value)
                except (TypeError, ValueError) as e:
                    raise ConfigError(f"{key} must be an integer, got {value!r}") from e
            elif value is not None:
                value = str(value)
            kwargs[key] = value
        return cls(**kwargs)
