import pytest

from sftplink.core.telemetry import get_telemetry
from sftplink.domain.connection import ConnectionTarget, Credentials, SFTPConnectionHandler
from sftplink.infrastructure.credentials import StaticCredentialSource

from .fakes import FakeSessionFactory, ScriptedPromptProvider


@pytest.fixture(autouse=True)
def clean_telemetry():
    get_telemetry().clear()
    yield
    get_telemetry().clear()


@pytest.fixture
def target():
    return ConnectionTarget(host="files.example.com")


@pytest.fixture
def factory():
    return FakeSessionFactory()


@pytest.fixture
def prompts():
    return ScriptedPromptProvider()


@pytest.fixture
def make_handler(target, factory, prompts):
    def _make(credentials=Credentials("bob", "pw"), handler_target=None, session_factory=None):
        return SFTPConnectionHandler(
            handler_target or target,
            credential_source=StaticCredentialSource(credentials),
            session_factory=session_factory or factory,
            prompt_provider=prompts,
        )
    return _make
