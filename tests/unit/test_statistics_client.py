"""Unit tests for the statistics API HTTP client"""

import json
import httpx
import pytest
from interest_account.domain.exceptions import RemoteLookupError
from interest_account.domain.models import LookupRequest, LookupResponse
from interest_account.infrastructure.clients.statistics import StatisticsClient


USER_ID = "332705c0-fadd-4663-ace4-6ea1c3297566"


def make_client(handler) -> StatisticsClient:
    http_client = httpx.Client(transport=httpx.MockTransport(handler))
    return StatisticsClient(base_url="http://statistics.test/", http_client=http_client)


def test_post_sends_user_id_as_json_body():
    """Test POST users carries the JSON-encoded user ID"""
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"id": json.loads(request.content), "income": 20000})

    client = make_client(handler)
    response = client.send_request(LookupRequest("POST", "users", USER_ID))

    assert response == LookupResponse(200, {"id": USER_ID, "income": 20000})
    assert seen[0].method == "POST"
    assert str(seen[0].url) == "http://statistics.test/users"
    assert seen[0].content == f'"{USER_ID}"'.encode()


def test_get_addresses_user_resource():
    """Test GET users looks up /users/<id>"""
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.path == f"/users/{USER_ID}"
        return httpx.Response(200, json={"id": USER_ID, "income": None})

    response = make_client(handler).send_request(LookupRequest("GET", "users", USER_ID))

    assert response.body == {"id": USER_ID, "income": None}


def test_error_status_returned_not_raised():
    """Test non-200 responses come back with their message body"""
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(409, json={"code": 409, "message": "User Account exists."})

    response = make_client(handler).send_request(LookupRequest("POST", "users", USER_ID))

    assert response.status_code == 409
    assert response.body["message"] == "User Account exists."


def test_plain_text_error_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="Service Unavailable")

    response = make_client(handler).send_request(LookupRequest("POST", "users", USER_ID))

    assert response == LookupResponse(503, "Service Unavailable")


def test_timeout_raises_remote_lookup_error():
    """Test timeouts surface as RemoteLookupError without a status"""
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("timed out", request=request)

    with pytest.raises(RemoteLookupError) as exc_info:
        make_client(handler).send_request(LookupRequest("POST", "users", USER_ID))

    assert exc_info.value.status_code is None
    assert "timeout" in exc_info.value.message
    assert isinstance(exc_info.value.__cause__, httpx.TimeoutException)


def test_connection_error_raises_remote_lookup_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(RemoteLookupError) as exc_info:
        make_client(handler).send_request(LookupRequest("POST", "users", USER_ID))

    assert exc_info.value.status_code is None
    assert "unavailable" in exc_info.value.message


def test_defaults_from_settings():
    client = StatisticsClient()
    assert client.base_url == "http://localhost:8001"
    assert client.timeout == 5.0
    assert client.http_client is None
