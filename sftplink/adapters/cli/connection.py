"""
Handler construction for CLI commands
"""
import getpass
from typing import Optional

from ...core.config import ConnectionSettings
from ...core.constants import DEFAULT_SSH_PORT, PRIVATE_KEY_PATH_PROPERTY
from ...core.exceptions import ConfigError
from ...core.interfaces import PromptProvider
from ...core.logging import get_logger
from ...core.utils import load_ssh_config
from ...domain.connection import ConnectionTarget, Credentials, SFTPConnectionHandler
from ...infrastructure.credentials import StaticCredentialSource
from ...infrastructure.transport import ParamikoSessionFactory

logger = get_logger(__name__)


def build_handler(
    host: str,
    user: Optional[str] = None,
    port: Optional[int] = None,
    password: str = "",
    key_file: Optional[str] = None,
    settings: Optional[ConnectionSettings] = None,
    prompt_provider: Optional[PromptProvider] = None,
) -> SFTPConnectionHandler:
    """
    Create an SFTP handler for a host or ~/.ssh/config alias.
    
    Values given explicitly win over the ssh config entry. The handler is
    returned unstarted.
    """
    settings = settings or ConnectionSettings()

    ssh_config = {}
    try:
        ssh_config = load_ssh_config(host)
    except ConfigError as e:
        logger.debug("ssh config not used: %s", e)

    resolved_host = ssh_config.get("host") or host
    resolved_user = user or ssh_config.get("user") or getpass.getuser()
    resolved_port = port or ssh_config.get("port")
    if resolved_port is None and settings.default_port != DEFAULT_SSH_PORT:
        resolved_port = settings.default_port
    resolved_key = key_file or ssh_config.get("key_file")

    properties = {}
    if resolved_key:
        properties[PRIVATE_KEY_PATH_PROPERTY] = resolved_key

    target = ConnectionTarget(host=resolved_host, port=resolved_port, properties=properties)
    credentials = Credentials(login=resolved_user, secret=password or "")

    return SFTPConnectionHandler(
        target,
        credential_source=StaticCredentialSource(credentials),
        session_factory=ParamikoSessionFactory(settings),
        prompt_provider=prompt_provider,
        settings=settings,
    )
