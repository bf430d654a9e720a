"""
Core infrastructure layer
"""
from .config import ConnectionSettings
from .constants import *
from .exceptions import *
from .logging import setup_logging, get_logger, get_stdout_console, get_stderr_console
from .interfaces import (
    CANCELLED,
    Cancelled,
    PromptProvider,
    CredentialSource,
    SessionFactory,
    TransportSession,
    SftpChannel,
)
from .telemetry import Telemetry, get_telemetry
from .utils import load_ssh_config

__all__ = [
    "ConnectionSettings",
    "setup_logging",
    "get_logger",
    "get_stdout_console",
    "get_stderr_console",
    "CANCELLED",
    "Cancelled",
    "PromptProvider",
    "CredentialSource",
    "SessionFactory",
    "TransportSession",
    "SftpChannel",
    "Telemetry",
    "get_telemetry",
    "load_ssh_config",
]
