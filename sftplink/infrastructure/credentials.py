"""
Credential sources
"""
import os
from typing import Optional

from ..core.constants import ENV_PREFIX
from ..core.interfaces import CredentialSource
from ..domain.connection.models import ConnectionTarget, Credentials


class StaticCredentialSource(CredentialSource):
    """Same credentials for every target, or none at all"""

    def __init__(self, credentials: Optional[Credentials] = None):
        self.credentials = credentials

    def get_credentials(self, target: ConnectionTarget) -> Optional[Credentials]:
        return self.credentials


class EnvCredentialSource(CredentialSource):
    """
    Reads {prefix}USER and {prefix}PASSWORD.

    A missing password yields credentials with an empty secret, which
    selects interactive authentication; a missing user yields None.
    """

    def __init__(self, prefix: str = ENV_PREFIX):
        self.prefix = prefix

    def get_credentials(self, target: ConnectionTarget) -> Optional[Credentials]:
        login = os.getenv(f"{self.prefix}USER")
        if not login:
            return None
        return Credentials(login=login, secret=os.getenv(f"{self.prefix}PASSWORD", ""))
