"""
Connection handling for SFTP servers
"""
from .models import ConnectionTarget, Credentials, ConnectionState, KeyboardInteractivePrompt
from .auth import (
    Authenticator,
    PasswordAuthenticator,
    InteractiveAuthenticator,
    select_authenticator,
)
from .handler import ConnectionHandler
from .errors import translate_error
from .sftp_handler import SFTPConnectionHandler

__all__ = [
    "ConnectionTarget",
    "Credentials",
    "ConnectionState",
    "KeyboardInteractivePrompt",
    "Authenticator",
    "PasswordAuthenticator",
    "InteractiveAuthenticator",
    "select_authenticator",
    "ConnectionHandler",
    "SFTPConnectionHandler",
    "translate_error",
]
