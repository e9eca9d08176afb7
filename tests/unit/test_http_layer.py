# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import asyncio
import dataclasses

import httpx
import pytest

from crudhttp.config import HttpSettings
from crudhttp.http.adapters import StubTransport
from crudhttp.http.builder import NO_BODY, build_request, default_headers, serialize_body
from crudhttp.http.headers import header_pairs, header_value, normalize_headers
from crudhttp.http.models import UNSET, CreateMethod, HttpMethod, HttpRequest, HttpResponse, RetryConfig
from crudhttp.http.retry import RetryingTransport, build_default_retry_config
from crudhttp.http.transport import HttpxTransport


class SequenceTransport:
    def __init__(self, outcomes):
        self._outcomes = list(outcomes)
        self.calls = 0

    async def __call__(self, request: HttpRequest):  # noqa: ARG002
        outcome = self._outcomes[min(self.calls, len(self._outcomes) - 1)]
        self.calls += 1
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


@pytest.fixture
def no_sleep(monkeypatch):
    delays = []

    async def fake_sleep(delay):
        delays.append(delay)

    monkeypatch.setattr(asyncio, "sleep", fake_sleep)
    return delays


def test_header_helpers_are_case_insensitive_and_keep_order():
    headers = [("Content-Type", "application/json"), ("X-Trace", "1")]
    assert header_pairs(headers) == (("Content-Type", "application/json"), ("X-Trace", "1"))
    assert header_value(headers, "content-type") == "application/json"
    assert header_value({"CONTENT-TYPE": " text/plain "}, "Content-Type") == "text/plain"
    assert header_value({}, "content-type") is None
    assert header_value({"Accept": "x"}, "content-type", "fallback") == "fallback"
    assert normalize_headers(httpx.Headers({"X-A": "1"})) == {"x-a": "1"}


def test_header_pairs_keeps_duplicate_httpx_headers():
    headers = httpx.Headers([("Set-Cookie", "a=1"), ("Set-Cookie", "b=2")])
    assert header_pairs(headers) == (("set-cookie", "a=1"), ("set-cookie", "b=2"))


def test_http_request_is_immutable_and_normalized():
    request = HttpRequest(url="/x", method="post", headers={"Content-Type": "application/json"}, body=bytearray(b"{}"))
    assert request.method is HttpMethod.POST
    assert request.headers == (("Content-Type", "application/json"),)
    assert request.body == b"{}"
    assert request.text == "{}"
    with pytest.raises(dataclasses.FrozenInstanceError):
        request.url = "/y"  # type: ignore[misc]


@pytest.mark.parametrize("method", ["", None, "   "])
def test_http_request_requires_method(method):
    with pytest.raises(ValueError, match="must be set"):
        HttpRequest(url="/x", method=method)


def test_http_method_coerces_create_method():
    assert HttpMethod.coerce(CreateMethod.POST) is HttpMethod.POST
    with pytest.raises(ValueError, match="Unsupported"):
        HttpMethod.coerce("BREW")


def test_default_headers_by_method():
    for method in ("GET", "HEAD", "PUT", "POST"):
        assert default_headers(method) == {"Content-Type": "application/json"}
    assert default_headers("DELETE") == {}


def test_serialize_body_is_compact_json():
    assert serialize_body({"name": "John Henry"}) == b'{"name":"John Henry"}'
    assert serialize_body("text") == b'"text"'
    assert serialize_body(42) == b"42"
    assert serialize_body({"city": "Zürich"}) == '{"city":"Zürich"}'.encode()
    assert serialize_body(b"raw") == b"raw"


def test_build_request_applies_defaults_and_serializes():
    request = build_request(CreateMethod.PUT, "/hello", body={"name": "John Henry"})
    assert request.method is HttpMethod.PUT
    assert request.header("content-type") == "application/json"
    assert request.body == b'{"name":"John Henry"}'

    explicit = build_request("GET", "/hello", {}, NO_BODY)
    assert explicit.headers == ()
    assert explicit.body is None

    null_body = build_request("POST", "/hello", body=None)
    assert null_body.body == b"null"


def test_build_request_ignores_declared_content_type():
    request = build_request("POST", "/hello", {"Content-Type": "text/plain"}, {"a": 1})
    assert request.body == b'{"a":1}'


def test_http_response_envelope_properties():
    raw = httpx.Response(200, content=b"abc")
    resp = HttpResponse(raw=raw, status_code=200, status_text="OK", headers=httpx.Headers({"X-A": "1"}))
    assert resp.ok is True
    assert resp.parsed_body is UNSET
    assert not UNSET
    assert repr(UNSET) == "UNSET"
    assert resp.has_parsed_body is False
    assert resp.content == b"abc"
    assert resp.header("x-a") == "1"

    with_null = dataclasses.replace(resp, parsed_body=None)
    assert with_null.has_parsed_body is True


def test_retry_config_from_settings_clamps_minimum():
    settings = HttpSettings(max_retries=0)
    retry = RetryConfig.from_settings(settings)
    assert retry.max_attempts == 1
    assert retry.backoff_factor == settings.backoff_factor


def test_build_default_retry_config_sets_expected_defaults():
    cfg = build_default_retry_config()
    assert cfg.max_attempts >= 1


@pytest.mark.asyncio
async def test_retrying_transport_success_after_retry(no_sleep):
    ok = httpx.Response(200)
    inner = SequenceTransport([httpx.ConnectError("refused"), ok])
    transport = RetryingTransport(inner, RetryConfig(max_attempts=3, backoff_factor=2.0, initial_delay=0.5))

    result = await transport(HttpRequest(url="http://example"))

    assert result is ok
    assert inner.calls == 2
    assert no_sleep == [0.5]


@pytest.mark.asyncio
async def test_retrying_transport_reraises_when_exhausted(no_sleep):
    inner = SequenceTransport([httpx.ConnectError("refused")])
    transport = RetryingTransport(inner, RetryConfig(max_attempts=3, backoff_factor=2.0, initial_delay=1.0))

    with pytest.raises(httpx.ConnectError, match="refused"):
        await transport(HttpRequest(url="http://example"))

    assert inner.calls == 3
    assert no_sleep == [1.0, 2.0]


@pytest.mark.asyncio
async def test_retrying_transport_does_not_retry_status_failures(no_sleep):
    inner = SequenceTransport([httpx.Response(500), httpx.Response(200)])
    transport = RetryingTransport(inner, RetryConfig(max_attempts=3))

    result = await transport(HttpRequest(url="http://example"))

    assert result.status_code == 500
    assert inner.calls == 1
    assert no_sleep == []


@pytest.mark.asyncio
async def test_retrying_transport_respects_retry_on(no_sleep):
    inner = SequenceTransport([KeyError("bug"), httpx.Response(200)])
    transport = RetryingTransport(inner, RetryConfig(max_attempts=3), retry_on=(httpx.TransportError,))

    with pytest.raises(KeyError):
        await transport(HttpRequest(url="http://example"))
    assert inner.calls == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "error,expected_calls",
    [
        (httpx.ReadTimeout("slow"), 3),
        (ConnectionResetError("reset"), 3),
        (ValueError("bug in transport"), 1),
        (KeyError("bug"), 1),
    ],
)
async def test_retrying_transport_default_retries_only_network_categories(no_sleep, error, expected_calls):
    inner = SequenceTransport([error])
    transport = RetryingTransport(inner, RetryConfig(max_attempts=3, initial_delay=0.1))

    with pytest.raises(type(error)):
        await transport(HttpRequest(url="http://example"))

    assert inner.calls == expected_calls
    assert len(no_sleep) == expected_calls - 1


@pytest.mark.asyncio
async def test_retrying_transport_wraps_sync_stub():
    stub = StubTransport({"http://example": httpx.Response(204)})
    transport = RetryingTransport(stub, RetryConfig(max_attempts=1))
    result = await transport(HttpRequest(url="http://example"))
    assert result.status_code == 204
    await transport.aclose()


@pytest.mark.asyncio
async def test_httpx_transport_maps_request_fields():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["request"] = request
        captured["timeout"] = request.extensions.get("timeout")
        return httpx.Response(201, json={"id": 1})

    client = httpx.AsyncClient(base_url="http://testserver", transport=httpx.MockTransport(handler))
    transport = HttpxTransport(HttpSettings(user_agent="UA/1.0", timeout=3.0), client=client)

    request = build_request("POST", "/hello", body={"name": "John Henry"}, timeout=1.5)
    response = await transport(request)
    await client.aclose()

    sent = captured["request"]
    assert response.status_code == 201
    assert sent.method == "POST"
    assert str(sent.url) == "http://testserver/hello"
    assert sent.content == b'{"name":"John Henry"}'
    assert sent.headers["Content-Type"] == "application/json"
    assert sent.headers["User-Agent"] == "UA/1.0"
    assert captured["timeout"]["read"] == 1.5


@pytest.mark.asyncio
async def test_httpx_transport_keeps_caller_user_agent_and_settings_timeout():
    captured = {}

    def handler(request: httpx.Request) -> httpx.Response:
        captured["request"] = request
        captured["timeout"] = request.extensions.get("timeout")
        return httpx.Response(204)

    client = httpx.AsyncClient(base_url="http://testserver", transport=httpx.MockTransport(handler))
    async with HttpxTransport(HttpSettings(user_agent="UA/1.0", timeout=3.0), client=client) as transport:
        await transport(build_request("GET", "/home", {"User-Agent": "Mine/2.0"}))
    assert client.is_closed is False
    await client.aclose()

    assert captured["request"].headers["User-Agent"] == "Mine/2.0"
    assert captured["timeout"]["read"] == 3.0


@pytest.mark.asyncio
async def test_httpx_transport_owns_default_client():
    transport = HttpxTransport(HttpSettings())
    await transport.aclose()
    assert transport._client.is_closed is True


def test_stub_transport_records_and_matches_by_method():
    stub = StubTransport()
    get_resp = httpx.Response(200)
    any_resp = httpx.Response(202)
    stub.add("/x", get_resp, method="GET")
    stub.add("/x", any_resp)

    assert stub(HttpRequest(url="/x")) is get_resp
    assert stub(HttpRequest(url="/x", method="POST")) is any_resp
    with pytest.raises(httpx.ConnectError):
        stub(HttpRequest(url="/missing"))
    assert stub.calls == 3
    assert stub.last_request.url == "/missing"
