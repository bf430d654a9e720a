"""
sftplink - SFTP session management

Opens one authenticated SFTP session over SSH and exposes its state and
teardown to the code performing file operations:
- Password authentication from stored credentials
- Keyboard-interactive authentication answered by the user
- Thread-safe connection state queries and idempotent teardown
"""

__version__ = "0.1.0"

from .core import (
    ConnectionSettings,
    CANCELLED,
    Cancelled,
    PromptProvider,
    CredentialSource,
    setup_logging,
)
from .core.exceptions import (
    RemoteError,
    ConfigError,
    SFTPConnectionError,
    TransportError,
    AuthenticationError,
    AuthenticationRequired,
)
from .domain.connection import (
    ConnectionTarget,
    Credentials,
    ConnectionState,
    PasswordAuthenticator,
    InteractiveAuthenticator,
    select_authenticator,
    SFTPConnectionHandler,
)
from .infrastructure.credentials import StaticCredentialSource, EnvCredentialSource

__all__ = [
    "__version__",
    "ConnectionSettings",
    "CANCELLED",
    "Cancelled",
    "PromptProvider",
    "CredentialSource",
    "setup_logging",
    "RemoteError",
    "ConfigError",
    "SFTPConnectionError",
    "TransportError",
    "AuthenticationError",
    "AuthenticationRequired",
    "ConnectionTarget",
    "Credentials",
    "ConnectionState",
    "PasswordAuthenticator",
    "InteractiveAuthenticator",
    "select_authenticator",
    "SFTPConnectionHandler",
    "StaticCredentialSource",
    "EnvCredentialSource",
]
