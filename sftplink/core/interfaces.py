"""
Core interfaces for dependency injection
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional, Union, TYPE_CHECKING

if TYPE_CHECKING:
    from ..domain.connection.auth import Authenticator
    from ..domain.connection.models import ConnectionTarget, Credentials


class Cancelled:
    """Marker returned when the user dismisses an interactive prompt"""

    _instance: Optional["Cancelled"] = None

    def __new__(cls) -> "Cancelled":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "CANCELLED"

    def __bool__(self) -> bool:
        return False


CANCELLED = Cancelled()

PromptResult = Union[str, Cancelled]


class PromptProvider(ABC):
    """User prompt interface"""
    
    @abstractmethod
    def show_message(self, message: str) -> None:
        """Display an informational message, no answer expected"""
        pass
    
    @abstractmethod
    def request_text(self, prompt: str) -> PromptResult:
        """Collect one visible value, or CANCELLED"""
        pass
    
    @abstractmethod
    def request_secret(self, prompt: str) -> PromptResult:
        """Collect one masked value, or CANCELLED"""
        pass


class CredentialSource(ABC):
    """Supplies login and secret for a target"""
    
    @abstractmethod
    def get_credentials(self, target: "ConnectionTarget") -> Optional["Credentials"]:
        """Return credentials for the target, or None if there are none"""
        pass


class SftpChannel(ABC):
    """File-transfer sub-channel opened on a TransportSession"""
    
    @property
    @abstractmethod
    def client(self) -> Any:
        """Handle used by the file-operation layer"""
        pass
    
    @abstractmethod
    def is_closed(self) -> bool:
        pass
    
    @abstractmethod
    def quit(self) -> None:
        pass


class TransportSession(ABC):
    """
    One SSH connection attempt.

    Created fresh by a SessionFactory for each attempt and never reused once
    connect() has failed.
    """
    
    @abstractmethod
    def add_identity(self, private_key_path: str) -> None:
        """Attach a private key file to the session"""
        pass
    
    @abstractmethod
    def set_authenticator(self, authenticator: "Authenticator") -> None:
        """Register the object that answers authentication challenges"""
        pass
    
    @abstractmethod
    def connect(self, timeout_ms: int) -> None:
        """
        Open the connection and authenticate.

        Raises:
            TransportError: I/O level failure
            AuthenticationError: Authentication phase failure
        """
        pass
    
    @abstractmethod
    def open_sftp(self, timeout_ms: int) -> SftpChannel:
        """Open and connect the sftp sub-channel"""
        pass
    
    @abstractmethod
    def is_connected(self) -> bool:
        pass
    
    @abstractmethod
    def disconnect(self) -> None:
        pass


class SessionFactory(ABC):
    """SSH session factory interface"""
    
    @abstractmethod
    def open_session(self, login: str, host: str, port: int) -> TransportSession:
        """Create an unconnected session for login@host:port"""
        pass
