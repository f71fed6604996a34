import pytest

from zosops.core import auth
from zosops.core.auth import AuthError, ZosConnection, connection_from_mapping, get_connection


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("zosmf.example.com", "zosmf.example.com"),
        ("https://zosmf.example.com", "zosmf.example.com"),
        ("https://zosmf.example.com/zosmf/?x=1", "zosmf.example.com"),
        ("  zosmf.example.com/  ", "zosmf.example.com"),
    ],
)
def test_sanitize_host(raw: str, expected: str):
    assert auth._sanitize_host(raw) == expected


def test_connection_from_mapping():
    conn = connection_from_mapping(
        {
            "host": "https://zosmf.example.com",
            "port": "10443",
            "user": "ME",
            "password": "secret",
            "rejectUnauthorized": "false",
        }
    )

    assert conn == ZosConnection(
        host="zosmf.example.com",
        port=10443,
        user="ME",
        password="secret",
        reject_unauthorized=False,
    )
    assert conn.base_url == "https://zosmf.example.com:10443"


def test_connection_from_mapping_requires_host():
    with pytest.raises(AuthError, match="host"):
        connection_from_mapping({"user": "ME"})


def test_connection_from_mapping_rejects_bad_port():
    with pytest.raises(AuthError, match="port"):
        connection_from_mapping({"host": "h", "port": "https"})


def test_base_url_with_base_path():
    conn = ZosConnection(host="apiml", port=7554, base_path="/ibmzosmf/api/v1/")

    assert conn.base_url == "https://apiml:7554/ibmzosmf/api/v1"
    assert conn.to_profile()["basePath"] == "/ibmzosmf/api/v1/"


def test_env_overrides_take_precedence(monkeypatch):
    monkeypatch.setattr(
        auth, "_load_profile", lambda profile: {"host": "profile-host", "user": "PROF"}
    )

    conn = get_connection(env={"ZOWE_OPT_HOST": "env-host", "ZOWE_OPT_PORT": "8443"})

    assert conn.host == "env-host"
    assert conn.port == 8443
    assert conn.user == "PROF"


def test_missing_config_is_fine_when_env_has_host(monkeypatch):
    def _fail(profile):
        raise FileNotFoundError("zowe.config.json")

    monkeypatch.setattr(auth, "_load_profile", _fail)

    conn = get_connection(env={"ZOWE_OPT_HOST": "env-host", "ZOWE_OPT_USER": "ME"})

    assert conn.host == "env-host"
    assert conn.user == "ME"


def test_missing_named_profile_is_an_error(monkeypatch):
    def _fail(profile):
        raise KeyError(profile)

    monkeypatch.setattr(auth, "_load_profile", _fail)

    with pytest.raises(AuthError, match="Could not load Zowe profile"):
        get_connection("prod", env={"ZOWE_OPT_HOST": "env-host"})


def test_missing_config_without_env_host_is_an_error(monkeypatch):
    def _fail(profile):
        raise FileNotFoundError("zowe.config.json")

    monkeypatch.setattr(auth, "_load_profile", _fail)

    with pytest.raises(AuthError):
        get_connection(env={})
