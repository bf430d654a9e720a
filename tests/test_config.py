import pytest

from sftplink.adapters.config.loader import ConfigLoader
from sftplink.core.config import ConnectionSettings
from sftplink.core.exceptions import ConfigError


@pytest.fixture(autouse=True)
def no_env(monkeypatch):
    for key in ("CONNECT_TIMEOUT_MS", "DEFAULT_PORT", "KNOWN_HOSTS", "LOG_LEVEL"):
        monkeypatch.delenv(f"SFTPLINK_{key}", raising=False)


def test_defaults():
    settings = ConnectionSettings()
    assert settings.connect_timeout_ms == 5000
    assert settings.connect_timeout == 5.0
    assert settings.default_port == 22


@pytest.mark.parametrize("kwargs", [{"connect_timeout_ms": 0}, {"default_port": 70000}])
def test_invalid_settings(kwargs):
    with pytest.raises(ConfigError):
        ConnectionSettings(**kwargs)


def test_from_dict_converts_and_ignores_unknown_keys():
    settings = ConnectionSettings.from_dict({"connect_timeout_ms": "2500", "colour": "blue"})
    assert settings.connect_timeout_ms == 2500


def test_from_dict_rejects_non_integers():
    with pytest.raises(ConfigError):
        ConnectionSettings.from_dict({"default_port": "ssh"})


def test_known_hosts_can_be_disabled():
    assert ConnectionSettings(known_hosts="").known_hosts_path is None


def test_toml_section(tmp_path):
    path = tmp_path / "sftplink.toml"
    path.write_text('[connection]\nconnect_timeout_ms = 8000\nknown_hosts = "/tmp/kh"\n', encoding="utf-8")

    settings = ConfigLoader().load_settings(path)

    assert settings.connect_timeout_ms == 8000
    assert settings.known_hosts == "/tmp/kh"


def test_missing_toml_file(tmp_path):
    with pytest.raises(ConfigError):
        ConfigLoader().load_toml(tmp_path / "absent.toml")


def test_invalid_toml(tmp_path):
    path = tmp_path / "broken.toml"
    path.write_text("[connection\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        ConfigLoader().load_toml(path)


def test_priority_env_over_cli_over_toml(tmp_path, monkeypatch):
    path = tmp_path / "sftplink.toml"
    path.write_text("[connection]\nconnect_timeout_ms = 1000\ndefault_port = 2022\nlog_level = 'ERROR'\n", encoding="utf-8")
    monkeypatch.setenv("SFTPLINK_CONNECT_TIMEOUT_MS", "3000")

    merged = ConfigLoader().load(path, {"connect_timeout_ms": 2000, "log_level": "DEBUG", "default_port": None})

    assert merged["connect_timeout_ms"] == 3000
    assert merged["log_level"] == "DEBUG"
    assert merged["default_port"] == 2022
