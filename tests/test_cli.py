import paramiko
import pytest
from typer.testing import CliRunner

from sftplink.adapters.cli import app as app_module
from sftplink.adapters.cli import connection as connection_module
from sftplink.core.exceptions import ConfigError

from .fakes import FakeSessionFactory, ScriptedPromptProvider

runner = CliRunner()


@pytest.fixture
def cli_env(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    for key in ("CONNECT_TIMEOUT_MS", "DEFAULT_PORT", "KNOWN_HOSTS", "LOG_LEVEL"):
        monkeypatch.delenv(f"SFTPLINK_{key}", raising=False)

    def no_ssh_config(host):
        raise ConfigError("no ssh config")

    monkeypatch.setattr(connection_module, "load_ssh_config", no_ssh_config)

    state = {"factory": FakeSessionFactory(), "prompts": ScriptedPromptProvider()}
    monkeypatch.setattr(connection_module, "ParamikoSessionFactory", lambda settings: state["factory"])
    monkeypatch.setattr(app_module, "RichPromptProvider", lambda: state["prompts"])
    return state


def test_check_with_password(cli_env):
    cli_env["prompts"].answers = ["pw"]

    result = runner.invoke(app_module.app, ["check", "bob@files.example.com", "--password"])

    assert result.exit_code == 0, result.output
    session = cli_env["factory"].last
    assert (session.login, session.host, session.port) == ("bob", "files.example.com", 22)
    assert session.password_used == "pw"
    assert session.disconnect_calls == 1


def test_check_keyboard_interactive(cli_env):
    cli_env["prompts"].answers = ["bob", "typed"]

    result = runner.invoke(app_module.app, ["check", "bob@files.example.com:2222"])

    assert result.exit_code == 0, result.output
    assert cli_env["factory"].last.port == 2222
    assert cli_env["factory"].last.interactive_answers == ["bob", "typed"]


def test_check_cancelled(cli_env):
    result = runner.invoke(app_module.app, ["check", "bob@files.example.com"])

    assert result.exit_code == app_module.EXIT_AUTH_FAILED


def test_check_transport_failure(cli_env):
    cli_env["factory"] = FakeSessionFactory(connect_error=paramiko.SSHException("kex failed"))
    cli_env["prompts"].answers = ["pw"]

    result = runner.invoke(app_module.app, ["check", "bob@files.example.com", "--password"])

    assert result.exit_code == app_module.EXIT_TRANSPORT_FAILED


def test_check_timeout_option(cli_env):
    cli_env["prompts"].answers = ["pw"]

    result = runner.invoke(app_module.app, ["check", "bob@h", "--password", "--timeout", "1500"])

    assert result.exit_code == 0, result.output
    assert cli_env["factory"].last.connect_timeout == 1500


def test_check_key_file_is_attached(cli_env):
    cli_env["prompts"].answers = ["pw"]

    result = runner.invoke(app_module.app, ["check", "bob@h", "--password", "-i", "/keys/id"])

    assert result.exit_code == 0, result.output
    assert cli_env["factory"].last.identities == ["/keys/id"]


def test_bad_host_string(cli_env):
    result = runner.invoke(app_module.app, ["check", "bob@h:ssh"])
    assert result.exit_code == app_module.EXIT_USAGE


@pytest.mark.parametrize("timeout", ["0", "-5"])
def test_non_positive_timeout_is_rejected(cli_env, timeout):
    result = runner.invoke(app_module.app, ["check", "bob@h", f"--timeout={timeout}"])

    assert result.exit_code == app_module.EXIT_USAGE
    assert cli_env["factory"].calls == 0
