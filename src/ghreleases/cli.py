"""CLI entry point for ghreleases."""

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from ghreleases import __version__
from ghreleases.commands import download, manifest, releases
from ghreleases.core.config import get_config

console = Console()


def setup_logging(verbose: bool) -> None:
    """Send log records to stderr through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[
            RichHandler(
                console=Console(stderr=True),
                rich_tracebacks=True,
                show_path=False,
            )
        ],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)


@click.group()
@click.version_option(version=__version__, prog_name="ghreleases")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging.")
@click.option(
    "--timeout",
    type=float,
    default=None,
    help="Request timeout in seconds (default: $GHRELEASES_TIMEOUT or 60).",
)
def main(verbose: bool, timeout: float | None):
    """ghreleases - Work with GitHub release metadata and assets.

    Build a compact manifest of a repository's releases, or download a
    named release asset.

    Examples:

        ghreleases manifest --owner junegunn --repo fzf

        ghreleases download --owner junegunn --repo fzf --name fzf-0.44.1-linux_amd64.tar.gz

        ghreleases releases --owner BurntSushi --repo ripgrep
    """
    setup_logging(verbose)
    if timeout is not None:
        get_config().request_timeout = timeout


# Register commands
main.add_command(manifest.manifest)
main.add_command(download.download)
main.add_command(releases.releases)


if __name__ == "__main__":
    main()
