"""
Authentication strategies

The transport drives authentication by raising challenges: informational
messages, yes/no confirmations, password and passphrase requests, and
keyboard-interactive prompt lists. An Authenticator answers every one of
them, either from stored credentials or by asking the user.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Union

from ...core.interfaces import CANCELLED, Cancelled, PromptProvider
from ...core.logging import get_logger
from .models import Credentials, KeyboardInteractivePrompt

logger = get_logger(__name__)

KeyboardInteractiveAnswers = Union[List[str], Cancelled]


class Authenticator(ABC):
    """Answers the authentication challenges raised during the handshake"""

    #: Short name used in logs
    name = "abstract"
    #: True when answering may wait on a person
    interactive = False

    @abstractmethod
    def show_message(self, message: str) -> None:
        pass

    def prompt_yes_no(self, message: str) -> bool:
        """Host key and similar confirmations are always accepted"""
        return True

    @abstractmethod
    def prompt_password(self, message: str) -> bool:
        """Whether a password can be supplied through get_password()"""
        pass

    @abstractmethod
    def prompt_passphrase(self, message: str) -> bool:
        """Whether a passphrase can be supplied through get_passphrase()"""
        pass

    @abstractmethod
    def get_password(self) -> Optional[str]:
        pass

    @abstractmethod
    def get_passphrase(self) -> Optional[str]:
        pass

    @abstractmethod
    def prompt_keyboard_interactive(
        self,
        prompts: Sequence[KeyboardInteractivePrompt],
        title: str = "",
        instructions: str = "",
    ) -> KeyboardInteractiveAnswers:
        """One answer per prompt in order, or CANCELLED"""
        pass

    def __repr__(self) -> str:
        return f"<{type(self).__name__}>"


class PasswordAuthenticator(Authenticator):
    """Answers everything from stored credentials, never blocks"""

    name = "password"

    def __init__(self, credentials: Credentials):
        self._credentials = credentials

    def show_message(self, message: str) -> None:
        logger.debug("server message: %s", message)

    def prompt_password(self, message: str) -> bool:
        return True

    def prompt_passphrase(self, message: str) -> bool:
        return True

    def get_password(self) -> Optional[str]:
        return self._credentials.secret

    def get_passphrase(self) -> Optional[str]:
        return self._credentials.secret

    def prompt_keyboard_interactive(self, prompts, title="", instructions=""):
        # Echoed prompts ask for the login, masked ones for the secret
        return [
            self._credentials.login if echo else self._credentials.secret
            for _, echo in prompts
        ]


class InteractiveAuthenticator(Authenticator):
    """
    Used when no secret is stored.

    Password and passphrase requests are declined so the transport falls
    through to keyboard-interactive, whose prompts are forwarded to the
    prompt provider one by one.
    """

    name = "interactive"
    interactive = True

    def __init__(self, prompt_provider: Optional[PromptProvider] = None):
        self._prompts = prompt_provider

    def show_message(self, message: str) -> None:
        if self._prompts is not None:
            self._prompts.show_message(message)
        else:
            logger.info("%s", message)

    def prompt_password(self, message: str) -> bool:
        return False

    def prompt_passphrase(self, message: str) -> bool:
        return False

    def get_password(self) -> Optional[str]:
        return None

    def get_passphrase(self) -> Optional[str]:
        return None

    def prompt_keyboard_interactive(self, prompts, title="", instructions=""):
        if self._prompts is None:
            logger.info("keyboard-interactive requested but no prompt provider is available")
            return CANCELLED

        if instructions:
            self._prompts.show_message(instructions)

        answers: List[str] = []
        for prompt, echo in prompts:
            if echo:
                answer = self._prompts.request_text(prompt)
            else:
                answer = self._prompts.request_secret(prompt)
            if isinstance(answer, Cancelled):
                logger.debug("input cancelled at prompt %r", prompt)
                return CANCELLED
            answers.append(answer)
        return answers


def select_authenticator(
    credentials: Credentials,
    prompt_provider: Optional[PromptProvider] = None,
) -> Authenticator:
    """Password strategy when a secret is stored, interactive otherwise"""
    if credentials.has_secret:
        return PasswordAuthenticator(credentials)
    return InteractiveAuthenticator(prompt_provider)
