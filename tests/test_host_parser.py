import pytest

from sftplink.adapters.cli.host_parser import parse_host_string


@pytest.mark.parametrize("text, expected", [
    ("server", ("server", None, None)),
    ("user@server", ("server", "user", None)),
    ("user@server:2222", ("server", "user", 2222)),
    ("[::1]:2222", ("::1", None, 2222)),
    ("alice@[fe80::1]", ("fe80::1", "alice", None)),
    ("fe80::1", ("fe80::1", None, None)),
])
def test_parse(text, expected):
    assert parse_host_string(text) == expected


def test_explicit_values_win():
    assert parse_host_string("user@server:2222", user="root", port=3333) == ("server", "root", 3333)


@pytest.mark.parametrize("text", ["user@server:ssh", "[::1", "user@"])
def test_invalid(text):
    with pytest.raises(ValueError):
        parse_host_string(text)
