"""
SSH transport implementations
"""
from .paramiko_session import (
    ParamikoSession,
    ParamikoSessionFactory,
    ParamikoSftpChannel,
    format_fingerprint,
)

__all__ = [
    "ParamikoSession",
    "ParamikoSessionFactory",
    "ParamikoSftpChannel",
    "format_fingerprint",
]
