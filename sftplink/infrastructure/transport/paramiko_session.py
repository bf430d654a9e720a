"""
paramiko backed transport session
"""
from __future__ import annotations

import socket
from pathlib import Path
from typing import Callable, List, Optional

import paramiko

from ...core.config import ConnectionSettings
from ...core.constants import (
    DEFAULT_SSH_PORT,
    KEYBOARD_INTERACTIVE_AUTH_METHOD,
    PUBLIC_KEY_AUTH_METHOD,
    SFTP_SUBSYSTEM,
)
from ...core.exceptions import AuthenticationError, TransportError
from ...core.interfaces import Cancelled, SessionFactory, SftpChannel, TransportSession
from ...core.logging import get_logger
from ...domain.connection.auth import Authenticator
from ...domain.connection.errors import translate_error
from ...domain.connection.models import KeyboardInteractivePrompt

logger = get_logger(__name__)

SocketFactory = Callable[..., socket.socket]
TransportFactory = Callable[[socket.socket], paramiko.Transport]


def format_fingerprint(key: paramiko.PKey) -> str:
    """MD5 fingerprint as colon separated hex pairs"""
    return ":".join(f"{b:02x}" for b in key.get_fingerprint())


class ParamikoSftpChannel(SftpChannel):
    """sftp subsystem channel wrapped in a paramiko SFTPClient"""

    def __init__(self, client: paramiko.SFTPClient):
        self._client = client

    @property
    def client(self) -> paramiko.SFTPClient:
        return self._client

    def is_closed(self) -> bool:
        channel = self._client.get_channel()
        return channel is None or channel.closed

    def quit(self) -> None:
        self._client.close()


class ParamikoSession(TransportSession):
    """
    One SSH connection attempt on top of paramiko.Transport.

    Authentication is driven by the registered Authenticator:
    1. unknown or changed host keys are confirmed through prompt_yes_no
    2. password auth when the authenticator can supply a password
    3. keyboard-interactive otherwise, or when the server refuses passwords

    Private key identities are recorded but never offered, publickey
    authentication is not supported.
    """

    def __init__(
        self,
        login: str,
        host: str,
        port: int = DEFAULT_SSH_PORT,
        known_hosts: Optional[Path] = None,
        socket_factory: SocketFactory = socket.create_connection,
        transport_factory: TransportFactory = paramiko.Transport,
    ):
        self.login = login
        self.host = host
        self.port = port
        self.known_hosts = known_hosts
        self.identities: List[str] = []
        self._socket_factory = socket_factory
        self._transport_factory = transport_factory
        self._authenticator: Optional[Authenticator] = None
        self._sock: Optional[socket.socket] = None
        self._transport: Optional[paramiko.Transport] = None
        self._cancelled = False

    @property
    def transport(self) -> Optional[paramiko.Transport]:
        return self._transport

    @property
    def host_id(self) -> str:
        """Host name as known_hosts stores it"""
        if self.port == DEFAULT_SSH_PORT:
            return self.host
        return f"[{self.host}]:{self.port}"

    # --------------------
    # TransportSession implementation
    # --------------------
    def add_identity(self, private_key_path: str) -> None:
        logger.warning(
            "%s authentication is not supported, identity %s will not be offered",
            PUBLIC_KEY_AUTH_METHOD, private_key_path,
        )
        self.identities.append(private_key_path)

    def set_authenticator(self, authenticator: Authenticator) -> None:
        self._authenticator = authenticator

    def connect(self, timeout_ms: int) -> None:
        if self._authenticator is None:
            raise RuntimeError("set_authenticator() must be called before connect()")
        if self._sock is not None:
            raise TransportError("Session objects cannot be reused, open a new session")

        try:
            self._handshake(timeout_ms / 1000.0)
        except Exception as e:
            error = translate_error(e)
            if error is e:
                raise
            raise error from e

    def open_sftp(self, timeout_ms: int) -> SftpChannel:
        if not self.is_connected():
            raise TransportError(f"Session to {self.host_id} is not connected")

        timeout = timeout_ms / 1000.0
        channel = None
        try:
            channel = self._transport.open_session(timeout=timeout)
            channel.settimeout(timeout)
            channel.invoke_subsystem(SFTP_SUBSYSTEM)
            client = paramiko.SFTPClient(channel)
            channel.settimeout(None)
        except Exception as e:
            if channel is not None:
                channel.close()
            error = translate_error(e)
            if error is e:
                raise
            raise TransportError(f"Failed to open sftp channel: {error}") from e
        return ParamikoSftpChannel(client)

    def is_connected(self) -> bool:
        return (
            self._transport is not None
            and self._transport.is_active()
            and self._transport.is_authenticated()
        )

    def disconnect(self) -> None:
        if self._transport is not None:
            self._transport.close()
        elif self._sock is not None:
            self._sock.close()

    # --------------------
    # Handshake
    # --------------------
    def _handshake(self, timeout: float) -> None:
        self._sock = self._socket_factory((self.host, self.port), timeout)
        transport = self._transport_factory(self._sock)
        self._transport = transport
        transport.banner_timeout = timeout
        transport.handshake_timeout = timeout

        transport.start_client(timeout=timeout)
        self._verify_host_key(transport)
        self._authenticate(transport, timeout)

        banner = transport.get_banner()
        if banner:
            if isinstance(banner, bytes):
                banner = banner.decode("utf-8", errors="replace")
            self._authenticator.show_message(banner)

    def _load_host_keys(self) -> Optional[paramiko.HostKeys]:
        if self.known_hosts is None or not self.known_hosts.exists():
            return None
        try:
            return paramiko.HostKeys(str(self.known_hosts))
        except (IOError, paramiko.SSHException) as e:
            logger.warning("Could not read %s: %s", self.known_hosts, e)
            return None

    def _verify_host_key(self, transport: paramiko.Transport) -> None:
        key = transport.get_remote_server_key()
        key_type = key.get_name()
        host_keys = self._load_host_keys()
        known = host_keys.lookup(self.host_id) if host_keys is not None else None

        if known is not None and key_type in known:
            if known[key_type] == key:
                return
            message = (
                f"WARNING: REMOTE HOST IDENTIFICATION HAS CHANGED!\n"
                f"The {key_type} key sent by {self.host_id} does not match the one in "
                f"{self.known_hosts}. Fingerprint: {format_fingerprint(key)}.\n"
                f"Are you sure you want to continue connecting?"
            )
        else:
            message = (
                f"The authenticity of host '{self.host_id}' can't be established.\n"
                f"{key_type} key fingerprint is {format_fingerprint(key)}.\n"
                f"Are you sure you want to continue connecting?"
            )

        if not self._authenticator.prompt_yes_no(message):
            raise AuthenticationError(f"reject HostKey: {self.host_id}")
        logger.debug("accepted %s host key for %s", key_type, self.host_id)

    def _authenticate(self, transport: paramiko.Transport, timeout: float) -> None:
        auth = self._authenticator
        if auth.prompt_password(f"Password for {self.login}@{self.host}"):
            password = auth.get_password()
            if password is not None:
                transport.auth_timeout = timeout
                try:
                    transport.auth_password(self.login, password, fallback=False)
                    return
                except paramiko.BadAuthenticationType as e:
                    if KEYBOARD_INTERACTIVE_AUTH_METHOD not in e.allowed_types:
                        raise
                    logger.debug("password authentication refused, trying %s",
                                 KEYBOARD_INTERACTIVE_AUTH_METHOD)

        # A person may be typing, the handshake must not time out under them
        transport.auth_timeout = None if auth.interactive else timeout
        self._cancelled = False
        try:
            transport.auth_interactive(self.login, self._answer_prompts)
        except paramiko.AuthenticationException as e:
            if self._cancelled:
                raise AuthenticationError("Input cancelled", cancelled=True) from e
            raise
        if self._cancelled:
            raise AuthenticationError("Input cancelled", cancelled=True)

    def _answer_prompts(self, title: str, instructions: str, prompt_list) -> List[str]:
        """paramiko keyboard-interactive handler"""
        prompts = [KeyboardInteractivePrompt(prompt, bool(echo)) for prompt, echo in prompt_list]
        answers = self._authenticator.prompt_keyboard_interactive(prompts, title, instructions)
        if isinstance(answers, Cancelled):
            # Sending no answers makes the server fail this round
            self._cancelled = True
            return []
        return list(answers)


class ParamikoSessionFactory(SessionFactory):
    """Creates ParamikoSession objects configured from ConnectionSettings"""

    def __init__(self, settings: Optional[ConnectionSettings] = None):
        self.settings = settings or ConnectionSettings()

    def open_session(self, login: str, host: str, port: int) -> ParamikoSession:
        return ParamikoSession(
            login=login,
            host=host,
            port=port,
            known_hosts=self.settings.known_hosts_path,
        )
