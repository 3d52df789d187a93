"""GitHub API client for fetching releases and release assets."""

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator, Callable, TypeVar

import httpx

from ghreleases.core.config import DEFAULT_TIMEOUT
from ghreleases.core.decoder import (
    check_json_response,
    decode,
    parse_release,
    parse_release_list,
)
from ghreleases.core.downloader import download_asset
from ghreleases.core.endpoints import (
    Endpoint,
    LatestRelease,
    ListReleases,
    TaggedRelease,
    resolve,
)
from ghreleases.core.transport import GITHUB_JSON_ACCEPT, ServiceType, Transport
from ghreleases.models.manifest import ManifestAsset
from ghreleases.models.release import Asset, Release

log = logging.getLogger(__name__)

T = TypeVar("T")


class GitHubAPIController:
    """Client for the GitHub Releases API.

    Every method is an independent coroutine; one controller can serve
    concurrent callers. Errors are subclasses of ``GitHubAPIError`` and are
    never retried here.
    """

    def __init__(
        self,
        request_timeout: float = DEFAULT_TIMEOUT,
        user_agent: str | None = None,
        download_dir: Path | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.request_timeout = request_timeout
        self.download_dir = download_dir
        self.transport = Transport(request_timeout, user_agent, transport=transport)

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.aclose()

    async def aclose(self) -> None:
        await self.transport.aclose()

    async def list_releases(
        self,
        owner: str,
        repo: str,
        service_type: ServiceType = ServiceType.DEFAULT,
        validate_cache: bool = False,
    ) -> list[Release]:
        """Get the releases of a repository (first page)."""
        return await self._get_decoded(
            ListReleases(owner, repo), parse_release_list, service_type, validate_cache
        )

    async def latest_release(
        self,
        owner: str,
        repo: str,
        service_type: ServiceType = ServiceType.DEFAULT,
        validate_cache: bool = False,
    ) -> Release:
        """Get the latest published, non-prerelease release."""
        return await self._get_decoded(
            LatestRelease(owner, repo), parse_release, service_type, validate_cache
        )

    async def tagged_release(
        self,
        owner: str,
        repo: str,
        tag: str,
        service_type: ServiceType = ServiceType.DEFAULT,
        validate_cache: bool = False,
    ) -> Release:
        """Get a specific release by tag name."""
        return await self._get_decoded(
            TaggedRelease(owner, repo, tag), parse_release, service_type, validate_cache
        )

    async def download_release_asset(
        self,
        asset: Asset | ManifestAsset,
        service_type: ServiceType = ServiceType.DEFAULT,
        validate_cache: bool = False,
        show_progress: bool = False,
    ) -> Path:
        """Download a release asset.

        Returns the path of a temporary file the caller must move or remove.
        See ``downloaded_asset`` for a version that cleans up by itself.
        """
        return await download_asset(
            self.transport,
            asset,
            dest=self.download_dir,
            service_type=service_type,
            validate_cache=validate_cache,
            show_progress=show_progress,
        )

    @asynccontextmanager
    async def downloaded_asset(
        self, asset: Asset | ManifestAsset, **kwargs: Any
    ) -> AsyncIterator[Path]:
        """Download a release asset and remove the file when the context exits.

        Moving the file away inside the context is fine.
        """
        path = await self.download_release_asset(asset, **kwargs)
        try:
            yield path
        finally:
            path.unlink(missing_ok=True)

    async def _get_decoded(
        self,
        endpoint: Endpoint,
        parse: Callable[[Any], T],
        service_type: ServiceType,
        validate_cache: bool,
    ) -> T:
        """Get an endpoint's JSON resource and decode it."""
        url = resolve(endpoint)
        data, response = await self.transport.request(
            url,
            expected_status=200,
            accept=GITHUB_JSON_ACCEPT,
            service_type=service_type,
            validate_cache=validate_cache,
        )
        check_json_response(response)
        log.debug("Decoding %d bytes from %s", len(data), url)
        return decode(url, data, parse)
