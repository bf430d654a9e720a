"""
Unified exception definitions
"""


class RemoteError(Exception):
    """Base exception class"""
    pass


class ConfigError(RemoteError):
    """Configuration error"""
    pass


class SFTPConnectionError(RemoteError):
    """Connection error"""
    pass


class TransportError(SFTPConnectionError):
    """
    I/O level failure: DNS, refused connection, timeout, protocol
    negotiation or sub-channel open failure. Safe to retry the connection.
    """
    pass


class AuthenticationError(SFTPConnectionError):
    """
    Credentials were rejected or the interactive flow failed.

    ``cancelled`` is set when the user dismissed an interactive prompt
    rather than the server rejecting what was sent.
    """

    def __init__(self, message: str = "Authentication failed", cancelled: bool = False):
        super().__init__(message)
        self.cancelled = cancelled


class AuthenticationRequired(AuthenticationError):
    """No credentials available at all"""

    def __init__(self, message: str = "Login and password required"):
        super().__init__(message)
