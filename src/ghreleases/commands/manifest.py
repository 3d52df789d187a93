"""Manifest command implementation."""

import asyncio
from pathlib import Path

import click
from rich.console import Console

from ghreleases.core.config import get_config
from ghreleases.core.errors import GitHubAPIError
from ghreleases.core.github import GitHubAPIController
from ghreleases.core.manifest import (
    FORMAT_PLIST,
    FORMAT_YAML,
    ManifestError,
    to_manifest,
    write_manifest,
)
from ghreleases.models.release import Release

console = Console()


async def fetch_releases(owner: str, repo: str) -> list[Release]:
    config = get_config()
    async with GitHubAPIController(
        request_timeout=config.request_timeout,
        user_agent=config.user_agent,
        download_dir=config.download_dir,
    ) as client:
        return await client.list_releases(owner, repo)


@click.command()
@click.option("--owner", required=True, help="Repository owner.")
@click.option("--repo", required=True, help="Repository name.")
@click.option("--nocompression", is_flag=True, help="Write an uncompressed .plist.")
@click.option(
    "--format",
    "fmt",
    type=click.Choice([FORMAT_PLIST, FORMAT_YAML]),
    default=FORMAT_PLIST,
    show_default=True,
    help="Manifest file format.",
)
@click.argument(
    "output", type=click.Path(dir_okay=False, path_type=Path), default="release-manifest"
)
def manifest(owner: str, repo: str, nocompression: bool, fmt: str, output: Path):
    """Make a release manifest.

    OUTPUT gets the extension .bin (compressed), .plist or .yaml.
    """
    try:
        releases = asyncio.run(fetch_releases(owner, repo))
    except GitHubAPIError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    try:
        path = write_manifest(
            to_manifest(releases), output, compress=not nocompression, fmt=fmt
        )
    except (ManifestError, OSError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    console.print(
        f"[green]✓[/green] Wrote {len(releases)} releases of "
        f"[bold]{owner}/{repo}[/bold] to {path}"
    )
