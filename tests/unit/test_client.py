from __future__ import annotations

from typing import Callable, List

import httpx
import pytest

from randomuser_mcp.errors import UpstreamDataShapeError, UpstreamTransportError
from randomuser_mcp.infrastructure.client import RandomUserClient, UserSource

BASE_URL = "https://randomuser.test/api/"


def _client(handler: Callable[[httpx.Request], httpx.Response]) -> RandomUserClient:
    http_client = httpx.Client(base_url=BASE_URL, transport=httpx.MockTransport(handler))
    return RandomUserClient(http_client=http_client)


def test_fetch_users_returns_results_and_sends_params(sample_user):
    seen: List[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"results": [sample_user], "info": {"results": 1}})

    client = _client(handler)
    results = client.fetch_users({"gender": "female", "nat": "GB", "results": 1, "inc": None})

    assert results == [sample_user]
    (request,) = seen
    assert request.method == "GET"
    assert request.url.path == "/api/"
    assert dict(request.url.params) == {"gender": "female", "nat": "GB", "results": "1"}


def test_client_satisfies_user_source_protocol():
    assert isinstance(_client(lambda request: httpx.Response(200, json={"results": []})), UserSource)


def test_http_error_surfaces_upstream_message():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(500, json={"error": "Uh oh, something has gone wrong."})

    with pytest.raises(UpstreamTransportError) as excinfo:
        _client(handler).fetch_users({})
    assert excinfo.value.message == "API Error: Uh oh, something has gone wrong."


def test_http_error_without_body_uses_transport_message():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, text="Service Unavailable")

    with pytest.raises(UpstreamTransportError, match="503"):
        _client(handler).fetch_users({})


def test_error_member_in_successful_response():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"error": "Nationality not supported"})

    with pytest.raises(UpstreamTransportError, match="API Error: Nationality not supported"):
        _client(handler).fetch_users({"nat": "US"})


def test_transport_failure():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(UpstreamTransportError, match="API Error: connection refused"):
        _client(handler).fetch_users({})


def test_non_json_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>maintenance</html>")

    with pytest.raises(UpstreamTransportError, match="invalid JSON"):
        _client(handler).fetch_users({})


def test_missing_results_is_a_shape_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"info": {"seed": "abc"}})

    with pytest.raises(UpstreamDataShapeError):
        _client(handler).fetch_users({})


def test_context_manager_leaves_injected_client_open():
    http_client = httpx.Client(
        base_url=BASE_URL,
        transport=httpx.MockTransport(lambda request: httpx.Response(200, json={"results": []})),
    )
    with RandomUserClient(http_client=http_client) as client:
        assert client.fetch_users({}) == []
    assert http_client.is_closed is False


def test_owned_client_is_closed_on_exit():
    client = RandomUserClient(base_url=BASE_URL, timeout=1.0)
    with client:
        pass
    assert client._client.is_closed is True
