"""
SFTP connection handler
"""
from __future__ import annotations

import threading
from typing import Any, Optional

from ...core.config import ConnectionSettings
from ...core.constants import PUBLIC_KEY_AUTH_METHOD
from ...core.exceptions import AuthenticationError, AuthenticationRequired, TransportError
from ...core.interfaces import CredentialSource, PromptProvider, SessionFactory, SftpChannel, TransportSession
from ...core.logging import get_logger
from ...core.telemetry import get_telemetry
from .auth import select_authenticator
from .errors import translate_error
from .handler import ConnectionHandler
from .models import ConnectionState, ConnectionTarget

logger = get_logger(__name__)


class SFTPConnectionHandler(ConnectionHandler):
    """
    Handles connections to SFTP servers.

    ``start()`` runs on the caller's thread and blocks for the whole
    handshake, including any interactive prompts. ``is_connected()`` and
    ``close_connection()`` may be called from other threads; they are
    serialized on a per-handler lock guarding the session and channel.
    """

    def __init__(
        self,
        target: ConnectionTarget,
        credential_source: Optional[CredentialSource] = None,
        session_factory: Optional[SessionFactory] = None,
        prompt_provider: Optional[PromptProvider] = None,
        settings: Optional[ConnectionSettings] = None,
    ):
        super().__init__(target, credential_source)
        self.settings = settings or ConnectionSettings()
        if session_factory is None:
            from ...infrastructure.transport import ParamikoSessionFactory
            session_factory = ParamikoSessionFactory(self.settings)
        self._factory = session_factory
        self._prompt_provider = prompt_provider

        self._lock = threading.RLock()
        self._session: Optional[TransportSession] = None
        self._channel: Optional[SftpChannel] = None
        self._state = ConnectionState.DISCONNECTED

    @property
    def state(self) -> ConnectionState:
        with self._lock:
            return self._state

    @property
    def session(self) -> Optional[TransportSession]:
        with self._lock:
            return self._session

    @property
    def channel(self) -> Optional[SftpChannel]:
        with self._lock:
            return self._channel

    @property
    def sftp(self) -> Any:
        """Client for file operations on the open sub-channel"""
        with self._lock:
            if not self._is_connected_locked():
                raise TransportError(f"Not connected to {self.realm}")
            return self._channel.client

    # --------------------
    # ConnectionHandler implementation
    # --------------------
    def start(self) -> None:
        logger.info("starting connection to %s", self.realm)
        with self._lock:
            if self._is_connected_locked():
                logger.debug("already connected to %s", self.realm)
                return
            # Release what is left of a dropped connection before replacing it
            self._teardown_locked()
            self._session = None
            self._channel = None
            self._state = ConnectionState.DISCONNECTED

        credentials = self.get_credentials()
        # Auth information is required for SSH
        if credentials is None:
            raise AuthenticationRequired("Login and password required")

        with self._lock:
            self._state = ConnectionState.CONNECTING

        telemetry = get_telemetry()
        timeout_ms = self.settings.connect_timeout_ms
        host, port = self.target.host, self.target.effective_port
        session: Optional[TransportSession] = None
        try:
            with telemetry.timer("sftp.connect_ms", {"host": host}):
                logger.debug("creating session for %s@%s:%d", credentials.login, host, port)
                session = self._factory.open_session(credentials.login, host, port)

                private_key_path = self.target.private_key_path
                if private_key_path is not None:
                    logger.info("Using %s authentication method", PUBLIC_KEY_AUTH_METHOD)
                    session.add_identity(private_key_path)

                authenticator = select_authenticator(credentials, self._prompt_provider)
                logger.debug("using %s authentication", authenticator.name)
                session.set_authenticator(authenticator)

                session.connect(timeout_ms)
                channel = session.open_sftp(timeout_ms)
        except Exception as e:
            self._abort(session)
            error = translate_error(e)
            if isinstance(error, AuthenticationError):
                logger.info("Caught exception while authenticating: %s", error)
            else:
                logger.info("%s thrown while starting connection: %s", type(e).__name__, e)
            logger.debug("Exception:", exc_info=True)
            telemetry.record_event("sftp.connect_failed", {
                "realm": self.realm,
                "error": type(error).__name__,
            })
            if error is e:
                raise
            raise error from e
        except BaseException:
            # Ctrl-C while waiting on the handshake
            self._abort(session)
            raise

        with self._lock:
            self._session = session
            self._channel = channel
            self._state = ConnectionState.CONNECTED
        self.update_last_activity()
        telemetry.record_event("sftp.connect", {"realm": self.realm, "login": credentials.login})
        logger.info("authentication complete")

    def is_connected(self) -> bool:
        with self._lock:
            return self._is_connected_locked()

    def close_connection(self) -> None:
        with self._lock:
            self._teardown_locked()
            if self._state is ConnectionState.CONNECTED:
                get_telemetry().record_event("sftp.close", {"realm": self.realm})
            self._state = ConnectionState.DISCONNECTED

    def keep_alive(self) -> None:
        # No-op, SSH servers such as OpenSSH keep idle connections open
        # without an application level heartbeat
        pass

    # --------------------
    # Internals
    # --------------------
    def _is_connected_locked(self) -> bool:
        return (
            self._session is not None
            and self._session.is_connected()
            and self._channel is not None
            and not self._channel.is_closed()
        )

    def _teardown_locked(self) -> None:
        """Quit the channel and disconnect the session, errors are logged only"""
        if self._channel is not None:
            try:
                self._channel.quit()
            except Exception as e:
                logger.debug("error while closing sftp channel: %s", e)

        if self._session is not None:
            try:
                self._session.disconnect()
            except Exception as e:
                logger.debug("error while disconnecting session: %s", e)

    def _abort(self, session: Optional[TransportSession]) -> None:
        """Release a half-built session; FAILED counts as disconnected"""
        if session is not None:
            try:
                # Also releases a socket left open by a failed handshake
                session.disconnect()
            except Exception as e:
                logger.debug("error while releasing failed session: %s", e)
        with self._lock:
            self._session = None
            self._channel = None
            self._state = ConnectionState.FAILED
