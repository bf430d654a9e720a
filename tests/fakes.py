"""
Test doubles for the transport and the prompt collaborator
"""
from typing import List, Optional, Sequence

from sftplink.core.exceptions import AuthenticationError
from sftplink.core.interfaces import (
    CANCELLED,
    Cancelled,
    PromptProvider,
    SessionFactory,
    SftpChannel,
    TransportSession,
)
from sftplink.domain.connection.models import KeyboardInteractivePrompt

DEFAULT_PROMPTS = (
    KeyboardInteractivePrompt("Login:", True),
    KeyboardInteractivePrompt("Password:", False),
)


class FakeSftpClient:
    def __init__(self, cwd: str = "/home/bob"):
        self.cwd = cwd

    def normalize(self, path: str) -> str:
        return self.cwd


class FakeChannel(SftpChannel):
    def __init__(self):
        self.closed = False
        self.quit_calls = 0
        self._client = FakeSftpClient()

    @property
    def client(self):
        return self._client

    def is_closed(self) -> bool:
        return self.closed

    def quit(self) -> None:
        self.quit_calls += 1
        self.closed = True


class FakeSession(TransportSession):
    """
    Plays the challenge sequence a JSch-like transport would: host key
    confirmation, then password if the authenticator offers one, otherwise
    a keyboard-interactive round.
    """

    def __init__(
        self,
        login: str,
        host: str,
        port: int,
        connect_error: Optional[Exception] = None,
        sftp_error: Optional[Exception] = None,
        disconnect_error: Optional[Exception] = None,
        prompts: Sequence[KeyboardInteractivePrompt] = DEFAULT_PROMPTS,
        connect_hook=None,
    ):
        self.login = login
        self.host = host
        self.port = port
        self.connect_error = connect_error
        self.sftp_error = sftp_error
        self.disconnect_error = disconnect_error
        self.prompts = list(prompts)
        self.connect_hook = connect_hook

        self.identities: List[str] = []
        self.authenticator = None
        self.connected = False
        self.channel: Optional[FakeChannel] = None
        self.connect_timeout = None
        self.sftp_timeout = None
        self.disconnect_calls = 0
        self.yes_no_answer = None
        self.password_offered = None
        self.password_used = None
        self.interactive_answers = None

    def add_identity(self, private_key_path: str) -> None:
        self.identities.append(private_key_path)

    def set_authenticator(self, authenticator) -> None:
        self.authenticator = authenticator

    def connect(self, timeout_ms: int) -> None:
        self.connect_timeout = timeout_ms
        if self.connect_hook is not None:
            self.connect_hook(self)
        if self.connect_error is not None:
            raise self.connect_error

        auth = self.authenticator
        self.yes_no_answer = auth.prompt_yes_no("Continue connecting?")
        if not self.yes_no_answer:
            raise AuthenticationError(f"reject HostKey: {self.host}")

        self.password_offered = auth.prompt_password("Password")
        if self.password_offered and auth.get_password() is not None:
            self.password_used = auth.get_password()
        else:
            answers = auth.prompt_keyboard_interactive(self.prompts)
            if isinstance(answers, Cancelled):
                raise AuthenticationError("Input cancelled", cancelled=True)
            self.interactive_answers = answers
        self.connected = True

    def open_sftp(self, timeout_ms: int) -> FakeChannel:
        self.sftp_timeout = timeout_ms
        if self.sftp_error is not None:
            raise self.sftp_error
        self.channel = FakeChannel()
        return self.channel

    def is_connected(self) -> bool:
        return self.connected

    def disconnect(self) -> None:
        self.disconnect_calls += 1
        self.connected = False
        if self.disconnect_error is not None:
            raise self.disconnect_error


class FakeSessionFactory(SessionFactory):
    def __init__(self, **session_kwargs):
        self.session_kwargs = session_kwargs
        self.sessions: List[FakeSession] = []

    @property
    def calls(self) -> int:
        return len(self.sessions)

    @property
    def last(self) -> FakeSession:
        return self.sessions[-1]

    def open_session(self, login: str, host: str, port: int) -> FakeSession:
        session = FakeSession(login, host, port, **self.session_kwargs)
        self.sessions.append(session)
        return session


class ScriptedPromptProvider(PromptProvider):
    """Replays answers in order; CANCELLED entries cancel that prompt"""

    def __init__(self, answers=()):
        self.answers = list(answers)
        self.messages: List[str] = []
        self.requests: List[tuple] = []

    def show_message(self, message: str) -> None:
        self.messages.append(message)

    def request_text(self, prompt: str):
        self.requests.append(("text", prompt))
        return self._next()

    def request_secret(self, prompt: str):
        self.requests.append(("secret", prompt))
        return self._next()

    def _next(self):
        if not self.answers:
            return CANCELLED
        return self.answers.pop(0)
