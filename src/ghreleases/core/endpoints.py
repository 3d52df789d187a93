"""Endpoints of the GitHub Releases API."""

from dataclasses import dataclass

GITHUB_API_BASE = "https://api.github.com/"


@dataclass(frozen=True)
class ListReleases:
    """GET returns a JSON array of releases."""

    owner: str
    repo: str

    @property
    def path(self) -> str:
        return f"repos/{self.owner}/{self.repo}/releases"


@dataclass(frozen=True)
class LatestRelease:
    """GET returns the JSON object of the latest release."""

    owner: str
    repo: str

    @property
    def path(self) -> str:
        return f"repos/{self.owner}/{self.repo}/releases/latest"


@dataclass(frozen=True)
class TaggedRelease:
    """GET returns the JSON object of the release for a tag."""

    owner: str
    repo: str
    tag: str

    @property
    def path(self) -> str:
        return f"repos/{self.owner}/{self.repo}/releases/tags/{self.tag}"


@dataclass(frozen=True)
class GetReleaseAsset:
    """GET returns the binary content of a release asset."""

    owner: str
    repo: str
    asset_id: int

    @property
    def path(self) -> str:
        return f"repos/{self.owner}/{self.repo}/releases/assets/{self.asset_id}"


Endpoint = ListReleases | LatestRelease | TaggedRelease | GetReleaseAsset


def resolve(endpoint: Endpoint) -> str:
    """Get the absolute URL of an endpoint.

    Path segments are interpolated as given; quoting is left to the HTTP
    client so nothing is encoded twice.
    """
    return GITHUB_API_BASE + endpoint.path
