"""Releases command implementation."""

import asyncio
import json

import click
from rich.console import Console
from rich.table import Table

from ghreleases.commands.manifest import fetch_releases
from ghreleases.core.errors import GitHubAPIError, RateLimitedError

console = Console()


@click.command()
@click.option("--owner", required=True, help="Repository owner.")
@click.option("--repo", required=True, help="Repository name.")
@click.option("--json", "as_json", is_flag=True, help="Print the releases as JSON.")
def releases(owner: str, repo: str, as_json: bool):
    """List the releases of a repository."""
    try:
        found = asyncio.run(fetch_releases(owner, repo))
    except RateLimitedError as e:
        console.print(f"[red]Error:[/red] {e}")
        console.print(f"[dim]Try again after {e.reset_at:%Y-%m-%d %H:%M} UTC[/dim]")
        raise SystemExit(1)
    except GitHubAPIError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise SystemExit(1)

    if as_json:
        click.echo(json.dumps([r.to_dict() for r in found], indent=2))
        return

    if not found:
        console.print(f"No releases found for {owner}/{repo}")
        return

    table = Table(show_header=True, header_style="bold")
    table.add_column("Tag")
    table.add_column("Name")
    table.add_column("Published")
    table.add_column("Assets")

    for release in found:
        tag = release.tag_name
        if release.prerelease:
            tag += " [yellow](prerelease)[/yellow]"
        if release.draft:
            tag += " [dim](draft)[/dim]"
        published = release.published_at
        table.add_row(
            tag,
            release.name or "",
            published.strftime("%Y-%m-%d") if published else "",
            str(len(release.assets)),
        )

    console.print(table)
