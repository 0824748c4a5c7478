import pytest

from splunk_query.client import SplunkClient
from splunk_query.errors import TransportError

RESULTS = {"results": [{"id": "1", "sourcetype": "things"}]}


def _client(config, credentials, transport):
    return SplunkClient(config, credentials, transport=transport)


def test_query_returns_second_poll_body(config, credentials, transport):
    results_url = f"{config.jobs_url}/99/results"
    transport.add("POST", config.login_url, {"sessionKey": "abc"})
    transport.add("POST", config.jobs_url, {"sid": "99"})
    transport.add("GET", results_url)
    transport.add("GET", results_url, RESULTS)

    assert _client(config, credentials, transport).query("x") == RESULTS
    assert len(transport.requests_to(results_url)) == 2


def test_query_uses_one_session_for_submit_and_poll(config, credentials, transport):
    transport.add("POST", config.login_url, {"sessionKey": "abc"})
    transport.add("POST", config.jobs_url, {"sid": "99"})
    transport.add("GET", f"{config.jobs_url}/99/results", RESULTS)

    _client(config, credentials, transport).query("x")
    assert len(transport.requests_to(config.login_url)) == 1
    assert [call["headers"] for call in transport.calls[1:]] == [{"Authorization": "Splunk abc"}] * 2


def test_query_login_error_stops_chain(config, credentials, transport):
    transport.add("POST", config.login_url, status=401, reason="Unauthorized")
    with pytest.raises(TransportError):
        _client(config, credentials, transport).query("x")
    assert len(transport.calls) == 1


def test_query_without_session_key_returns_none(config, credentials, transport):
    transport.add("POST", config.login_url, {"messages": [{"type": "WARN", "text": "Login failed"}]})
    assert _client(config, credentials, transport).query("x") is None
    assert len(transport.calls) == 1


def test_query_without_job_id_returns_none(config, credentials, transport):
    transport.add("POST", config.login_url, {"sessionKey": "abc"})
    transport.add("POST", config.jobs_url, {})
    assert _client(config, credentials, transport).query("x") is None
    assert transport.requests_to(f"{config.jobs_url}/99/results") == []


def test_every_request_carries_output_mode_once(config, credentials, transport):
    transport.add("POST", config.login_url, {"sessionKey": "abc"})
    transport.add("POST", config.jobs_url, {"sid": "99"})
    transport.add("GET", f"{config.jobs_url}/99/results", RESULTS)

    _client(config, credentials, transport).query("x")
    login, submit, poll = transport.calls
    assert login["body"].count("output_mode=json") == 1
    assert submit["body"].count("output_mode=json") == 1
    assert poll["url"].count("output_mode=json") == 1
    assert poll["body"] is None


def test_end_to_end_submission_body(credentials, transport):
    client = SplunkClient.connect("h", credentials.username, credentials.password, transport=transport)
    transport.add("POST", "https://h:8089/servicesNS/admin/search/auth/login", {"sessionKey": "abc"})
    transport.add("POST", "https://h:8089/servicesNS/admin/search/search/jobs", {"sid": "5"})
    transport.add("GET", "https://h:8089/servicesNS/admin/search/search/jobs/5/results", RESULTS)

    assert client.query("sourcetype=things | dedup id") == RESULTS
    submit = transport.calls[1]
    assert submit["body"] == "search=search sourcetype=things | dedup id&required_field_list=*&output_mode=json"
    assert transport.calls[2]["url"] == "https://h:8089/servicesNS/admin/search/search/jobs/5/results?output_mode=json"


def test_query_raises_on_error_status_from_any_transport(config, credentials, transport):
    transport.add("POST", config.login_url, {"messages": [{"type": "WARN", "text": "Login failed"}]}, status=401, reason="Unauthorized")
    with pytest.raises(TransportError) as excinfo:
        _client(config, credentials, transport).query("x")
    assert excinfo.value.status_line == "401 Unauthorized"
    assert len(transport.calls) == 1
