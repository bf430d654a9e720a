"""
Base connection handler
"""
from __future__ import annotations

import threading
import time
from abc import ABC, abstractmethod
from typing import Optional

from ...core.interfaces import CredentialSource
from ...core.logging import get_logger
from .models import ConnectionTarget, Credentials

logger = get_logger(__name__)


class ConnectionHandler(ABC):
    """
    Owns the connection to one remote location.

    The handler also carries an in-use lock, taken by whoever is currently
    issuing operations over the connection. It is unrelated to the I/O
    lock subclasses use to guard their transport objects. ``close()`` (and
    leaving a ``with`` block) tears the connection down and always releases
    the in-use lock, even if the teardown fails.
    """

    def __init__(self, target: ConnectionTarget, credential_source: Optional[CredentialSource] = None):
        self.target = target
        self._credential_source = credential_source
        self._in_use = threading.Lock()
        self.last_activity = time.time()

    @property
    def realm(self) -> str:
        return self.target.realm

    def get_credentials(self) -> Optional[Credentials]:
        """Credentials for the target, None when the source has none"""
        if self._credential_source is None:
            return None
        return self._credential_source.get_credentials(self.target)

    # --------------------
    # Connection lifecycle
    # --------------------
    @abstractmethod
    def start(self) -> None:
        pass

    @abstractmethod
    def is_connected(self) -> bool:
        pass

    @abstractmethod
    def close_connection(self) -> None:
        pass

    @abstractmethod
    def keep_alive(self) -> None:
        pass

    def check_connection(self) -> None:
        """Start the connection unless it is already up"""
        if not self.is_connected():
            self.start()

    def update_last_activity(self) -> None:
        self.last_activity = time.time()

    # --------------------
    # In-use lock
    # --------------------
    def lock(self) -> bool:
        """Mark the handler in use; False if somebody else holds it"""
        return self._in_use.acquire(blocking=False)

    def release_lock(self) -> None:
        if self._in_use.locked():
            self._in_use.release()

    def is_locked(self) -> bool:
        return self._in_use.locked()

    # --------------------
    # Context manager
    # --------------------
    def close(self) -> None:
        try:
            self.close_connection()
        finally:
            self.release_lock()

    def __enter__(self) -> "ConnectionHandler":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.realm}>"
