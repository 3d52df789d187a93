from __future__ import annotations

import asyncio

import httpx
import pytest

from ghreleases.core.errors import RateLimitedError, RequestError, WrongStatusError
from ghreleases.core.transport import (
    GITHUB_JSON_ACCEPT,
    ServiceType,
    Transport,
    mime_type,
)

URL = "https://api.github.com/repos/octo/hello/releases/latest"


def run_request(handler, **kwargs):
    async def scenario():
        transport = Transport(
            timeout=7.0, user_agent="ghreleases-tests", transport=httpx.MockTransport(handler)
        )
        try:
            return await transport.request(URL, **kwargs)
        finally:
            await transport.aclose()

    return asyncio.run(scenario())


def test_request_headers_and_extensions() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, content=b'{"ok": true}')

    data, response = run_request(handler, service_type=ServiceType.BACKGROUND)

    request = seen[0]
    assert request.method == "GET"
    assert request.headers["Accept"] == GITHUB_JSON_ACCEPT
    assert request.headers["User-Agent"] == "ghreleases-tests"
    assert "Cache-Control" not in request.headers
    assert request.extensions["service_type"] == "background"
    assert request.extensions["timeout"]["read"] == 7.0
    assert data == b'{"ok": true}'
    assert response.status_code == 200


def test_validate_cache_forces_revalidation() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200)

    run_request(handler, validate_cache=True, accept=None)

    assert seen[0].headers["Cache-Control"] == "no-cache"
    assert seen[0].headers["Accept"] == "*/*"


def test_status_mismatch_is_wrong_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={"message": "Not Found"})

    with pytest.raises(WrongStatusError) as exc_info:
        run_request(handler)

    error = exc_info.value
    assert error.expected_status == 200
    assert error.status_code == 404
    assert error.response.json() == {"message": "Not Found"}


def test_expected_status_other_than_200() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(204)

    _, response = run_request(handler, expected_status=204)

    assert response.status_code == 204


def test_403_is_rate_limited_not_wrong_status() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(403, json={"message": "API rate limit exceeded"})

    with pytest.raises(RateLimitedError) as exc_info:
        run_request(handler)

    assert exc_info.value.url == URL
    assert exc_info.value.response.status_code == 403


def test_transport_failure_is_request_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("timed out", request=request)

    with pytest.raises(RequestError) as exc_info:
        run_request(handler)

    error = exc_info.value
    assert error.url == URL
    assert isinstance(error.cause, httpx.ConnectTimeout)
    assert error.response is None


def test_mime_type() -> None:
    response = httpx.Response(200, headers={"Content-Type": "Application/JSON; charset=utf-8"})

    assert mime_type(response) == "application/json"
    assert mime_type(httpx.Response(200)) is None
