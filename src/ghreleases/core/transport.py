"""HTTP transport for the GitHub API client."""

import logging
from contextlib import asynccontextmanager
from enum import Enum
from typing import AsyncIterator

import httpx

from ghreleases.core.errors import RequestError, WrongStatusError
from ghreleases.core.rate_limit import check_rate_limited

log = logging.getLogger(__name__)

GITHUB_JSON_ACCEPT = "application/vnd.github.v3+json"
OCTET_STREAM = "application/octet-stream"


class ServiceType(str, Enum):
    """Hint about the kind of traffic a request carries.

    Passed through to the transport as the ``service_type`` request extension.
    """

    DEFAULT = "default"
    BACKGROUND = "background"
    RESPONSIVE_DATA = "responsive_data"
    VIDEO = "video"
    VOICE = "voice"


def mime_type(response: httpx.Response) -> str | None:
    """Get the MIME type of a response without its parameters."""
    content_type = response.headers.get("content-type")
    if not content_type:
        return None
    return content_type.split(";", 1)[0].strip().lower() or None


class Transport:
    """Issues GET requests and checks the response status.

    Requests share nothing but the connection pool of the underlying
    ``httpx.AsyncClient``, so concurrent calls are safe.
    """

    def __init__(
        self,
        timeout: float,
        user_agent: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        headers = {"User-Agent": user_agent} if user_agent else None
        self.timeout = timeout
        self.client = httpx.AsyncClient(
            headers=headers,
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )

    async def aclose(self) -> None:
        await self.client.aclose()

    def build_request(
        self,
        url: str,
        accept: str | None = GITHUB_JSON_ACCEPT,
        service_type: ServiceType = ServiceType.DEFAULT,
        validate_cache: bool = False,
    ) -> httpx.Request:
        """Build a GET request with the cache policy and service type applied."""
        headers = {}
        if accept is not None:
            headers["Accept"] = accept
        if validate_cache:
            headers["Cache-Control"] = "no-cache"
        return self.client.build_request(
            "GET",
            url,
            headers=headers,
            extensions={"service_type": ServiceType(service_type).value},
        )

    async def _send(
        self,
        url: str,
        accept: str | None,
        service_type: ServiceType,
        validate_cache: bool,
        stream: bool,
    ) -> httpx.Response:
        try:
            # httpx rejects some identifiers (control characters) when building the URL
            request = self.build_request(url, accept, service_type, validate_cache)
            log.debug("GET %s", request.url)
            return await self.client.send(request, stream=stream)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise RequestError(url, cause=e) from e

    async def request(
        self,
        url: str,
        expected_status: int = 200,
        accept: str | None = GITHUB_JSON_ACCEPT,
        service_type: ServiceType = ServiceType.DEFAULT,
        validate_cache: bool = False,
    ) -> tuple[bytes, httpx.Response]:
        """Get a resource.

        Returns the body and the response. Raises ``RateLimitedError`` for a
        rate limited response, else ``WrongStatusError`` unless the status is
        exactly ``expected_status``.
        """
        response = await self._send(
            url, accept, service_type, validate_cache, stream=False
        )
        log.debug("HTTP %d from %s", response.status_code, response.url)

        rate_limited = check_rate_limited(response)
        if rate_limited is not None:
            raise rate_limited
        if response.status_code != expected_status:
            raise WrongStatusError(response, expected_status)
        return response.content, response

    @asynccontextmanager
    async def stream(
        self,
        url: str,
        expected_status: int = 200,
        accept: str | None = OCTET_STREAM,
        service_type: ServiceType = ServiceType.DEFAULT,
        validate_cache: bool = False,
    ) -> AsyncIterator[httpx.Response]:
        """Open a streamed response with the expected status.

        The response is closed when the context exits.
        """
        response = await self._send(url, accept, service_type, validate_cache, stream=True)
        try:
            log.debug("HTTP %d from %s", response.status_code, response.url)
            if response.status_code != expected_status:
                # Keep the error body readable from the raised error.
                try:
                    await response.aread()
                except httpx.HTTPError as e:
                    raise RequestError(str(response.url), cause=e, response=response) from e
                raise WrongStatusError(response, expected_status)
            yield response
        finally:
            await response.aclose()
