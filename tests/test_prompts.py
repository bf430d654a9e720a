import io

from rich.console import Console
from rich.prompt import Prompt

from sftplink.adapters.cli.prompts import RichPromptProvider
from sftplink.core.interfaces import CANCELLED


def make_provider():
    return RichPromptProvider(Console(file=io.StringIO(), width=80))


def test_text_and_secret(monkeypatch):
    calls = []

    def fake_ask(label, password=False, console=None):
        calls.append((label, password))
        return "value"

    monkeypatch.setattr(Prompt, "ask", fake_ask)
    provider = make_provider()

    assert provider.request_text("Login: ") == "value"
    assert provider.request_secret("Password:") == "value"
    assert calls == [("Login", False), ("Password", True)]


def test_interrupt_is_cancelled(monkeypatch):
    def interrupted(*args, **kwargs):
        raise KeyboardInterrupt

    monkeypatch.setattr(Prompt, "ask", interrupted)
    assert make_provider().request_secret("Password:") is CANCELLED


def test_end_of_input_is_cancelled(monkeypatch):
    def eof(*args, **kwargs):
        raise EOFError

    monkeypatch.setattr(Prompt, "ask", eof)
    assert make_provider().request_text("Login:") is CANCELLED


def test_show_message():
    provider = make_provider()
    provider.show_message("Authorized use only\n")
    assert "Authorized use only" in provider.console.file.getvalue()
