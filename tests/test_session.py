import pytest

from splunk_query.api import SplunkApi
from splunk_query.errors import TransportError
from splunk_query.session import SessionManager


def test_authenticate_builds_login_body(config, transport):
    transport.add("POST", config.login_url, {"sessionKey": "abc123"})
    session = SessionManager(SplunkApi(config, transport)).authenticate("admin", "changeme")
    assert session.header == {"Authorization": "Splunk abc123"}
    call = transport.calls[0]
    assert call["body"] == "username=admin&password=changeme&output_mode=json"
    assert call["headers"] is None


def test_authenticate_without_session_key_returns_none(config, transport):
    transport.add("POST", config.login_url, {"message": "ok"})
    assert SessionManager(SplunkApi(config, transport)).authenticate("admin", "changeme") is None


def test_authenticate_empty_body_returns_none(config, transport):
    transport.add("POST", config.login_url)
    assert SessionManager(SplunkApi(config, transport)).authenticate("admin", "changeme") is None


def test_authenticate_http_error_raises(config, transport):
    transport.add("POST", config.login_url, status=401, reason="Unauthorized")
    with pytest.raises(TransportError) as excinfo:
        SessionManager(SplunkApi(config, transport)).authenticate("admin", "wrong")
    assert excinfo.value.status_line == "401 Unauthorized"
    assert excinfo.value.status_code == 401


def test_session_repr_hides_token(config, transport):
    transport.add("POST", config.login_url, {"sessionKey": "abc123"})
    session = SessionManager(SplunkApi(config, transport)).authenticate("admin", "changeme")
    assert "abc123" not in repr(session)
