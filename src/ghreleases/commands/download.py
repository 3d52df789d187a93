"""Download command implementation."""

import asyncio
import shutil
from pathlib import Path

import click
from rich.console import Console

from ghreleases.core.config import get_config
from ghreleases.core.errors import GitHubAPIError
from ghreleases.core.github import GitHubAPIController
from ghreleases.core.manifest import ManifestError, find_asset, read_manifest
from ghreleases.models.manifest import ManifestAsset
from ghreleases.models.release import Asset

console = Console()


class AssetNotFoundError(Exception):
    """The named release asset does not exist."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Named release asset does not exist: {name}")


async def _find_asset(
    client: GitHubAPIController,
    owner: str | None,
    repo: str | None,
    tag: str | None,
    name: str,
    manifest_file: Path | None,
) -> Asset | ManifestAsset:
    if manifest_file is not None:
        found = find_asset(read_manifest(manifest_file), name, tag)
        if found is None:
            raise AssetNotFoundError(name)
        return found[1]

    if tag:
        release = await client.tagged_release(owner, repo, tag)
    else:
        release = await client.latest_release(owner, repo)
    asset = release.find_asset(name)
    if asset is None:
        raise AssetNotFoundError(name)
    return asset


async def download_named_asset(
    owner: str | None,
    repo: str | None,
    tag: str | None,
    name: str,
    output: Path,
    manifest_file: Path | None = None,
    show_progress: bool = True,
) -> Path:
    """Download a named release asset to ``output``."""
    config = get_config()
    async with GitHubAPIController(
        request_timeout=config.request_timeout,
        user_agent=config.user_agent,
        download_dir=config.download_dir,
    ) as client:
        asset = await _find_asset(client, owner, repo, tag, name, manifest_file)
        async with client.downloaded_asset(asset, show_progress=show_progress) as path:
            shutil.move(path, output)
    return output


@click.command()
@click.option("--owner", help="Repository owner.")
@click.option("--repo", help="Repository name.")
@click.option("--tag", help="Release tag (defaults to the latest release).")
@click.option("--name", required=True, help="File name of the release asset.")
@click.option(
    "--manifest",
    "manifest_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Look the asset up in a release manifest instead of the API.",
)
@click.argument("output", type=click.Path(path_type=Path), required=False)
def download(
    owner: str | None,
    repo: str | None,
    tag: str | None,
    name: str,
    manifest_file: Path | None,
    output: Path | None,
):
    """Download a release asset.

    OUTPUT defaults to the asset name in the current directory.
    """
    if manifest_file is None and not (owner and repo):
        raise click.UsageError("--owner and --repo are required without --manifest")

    output = output or Path(name)
    try:
        path = asyncio.run(
            download_named_asset(owner, repo, tag, name, output, manifest_file)
        )
    except (GitHubAPIError, AssetNotFoundError, ManifestError, OSError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    console.print(f"[green]✓[/green] Downloaded [cyan]{name}[/cyan] to {path}")
