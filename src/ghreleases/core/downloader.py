"""Download of release assets with progress reporting."""

import logging
import os
import tempfile
from pathlib import Path

import aiofiles
import httpx
from rich.progress import (
    Progress,
    BarColumn,
    DownloadColumn,
    TransferSpeedColumn,
    TimeRemainingColumn,
)

from ghreleases.core.errors import RequestError
from ghreleases.core.transport import OCTET_STREAM, ServiceType, Transport
from ghreleases.models.manifest import ManifestAsset
from ghreleases.models.release import Asset

log = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024


async def _write_body(
    response: httpx.Response, f, progress: Progress | None = None, task=None
) -> int:
    written = 0
    try:
        async for chunk in response.aiter_bytes(chunk_size=CHUNK_SIZE):
            await f.write(chunk)
            written += len(chunk)
            if progress is not None:
                progress.update(task, advance=len(chunk))
    except httpx.HTTPError as e:
        raise RequestError(str(response.url), cause=e, response=response) from e
    return written


async def download_asset(
    transport: Transport,
    asset: Asset | ManifestAsset,
    dest: Path | None = None,
    service_type: ServiceType = ServiceType.DEFAULT,
    validate_cache: bool = False,
    show_progress: bool = False,
) -> Path:
    """Download a release asset to a temporary file.

    Args:
        transport: Transport to issue the request with
        asset: Asset to download from its download URL
        dest: Directory for the temporary file (defaults to the system temp dir)
        service_type: Service type hint for the request
        validate_cache: Whether to force cache revalidation
        show_progress: Whether to show progress bar

    Returns:
        Path to the downloaded file. The caller owns it and must remove it.
    """
    async with transport.stream(
        asset.download_url,
        expected_status=200,
        accept=OCTET_STREAM,
        service_type=service_type,
        validate_cache=validate_cache,
    ) as response:
        # Only created once the status is known to be good.
        fd, name = tempfile.mkstemp(prefix="ghreleases-", suffix=".download", dir=dest)
        os.close(fd)
        file_path = Path(name)
        try:
            async with aiofiles.open(file_path, "wb") as f:
                length = response.headers.get("content-length", "")
                total = int(length) if length.isdigit() else 0
                if show_progress and total > 0:
                    with Progress(
                        "[progress.description]{task.description}",
                        BarColumn(),
                        DownloadColumn(),
                        TransferSpeedColumn(),
                        TimeRemainingColumn(),
                    ) as progress:
                        task = progress.add_task(f"Downloading {asset.name}", total=total)
                        written = await _write_body(response, f, progress, task)
                else:
                    written = await _write_body(response, f)
        except BaseException:
            # Includes cancellation: no temp file survives a failed download.
            file_path.unlink(missing_ok=True)
            raise

    log.debug("Downloaded %s (%d bytes) to %s", asset.name, written, file_path)
    return file_path
