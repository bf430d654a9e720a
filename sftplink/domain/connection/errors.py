"""
Mapping of transport failures onto the connection error taxonomy
"""
import paramiko

from ...core.exceptions import AuthenticationError, TransportError


def translate_error(error: Exception) -> Exception:
    """
    Map a failure raised while connecting onto the public taxonomy.

    Authentication phase failures become AuthenticationError, I/O level
    failures become TransportError, anything else is returned unchanged.
    """
    if isinstance(error, (AuthenticationError, TransportError)):
        return error
    # Must be checked first, AuthenticationException is an SSHException
    if isinstance(error, paramiko.AuthenticationException):
        return AuthenticationError(str(error) or "Authentication failed")
    if isinstance(error, (paramiko.SSHException, OSError, EOFError)):
        return TransportError(str(error) or type(error).__name__)
    return error
