"""GitHub release data models."""

from enum import Enum

from pydantic import AwareDatetime, BaseModel, ConfigDict, StrictBool, StrictInt, StrictStr


class AssetState(str, Enum):
    """Upload state of a release asset."""

    UPLOADED = "uploaded"
    OPEN = "open"


class Asset(BaseModel):
    """Represents a GitHub release asset."""

    model_config = ConfigDict(frozen=True)

    id: StrictInt
    node_id: StrictStr
    url: StrictStr
    browser_download_url: StrictStr
    name: StrictStr
    label: StrictStr | None = None
    state: AssetState
    content_type: StrictStr
    size: StrictInt
    download_count: StrictInt
    created_at: AwareDatetime
    updated_at: AwareDatetime

    @classmethod
    def from_api_response(cls, data: dict) -> "Asset":
        """Create Asset from GitHub API response."""
        return cls.model_validate(data)

    @property
    def download_url(self) -> str:
        return self.browser_download_url

    def to_dict(self) -> dict:
        """Convert to the GitHub API JSON shape."""
        return self.model_dump(mode="json")


class Release(BaseModel):
    """Represents a GitHub release."""

    model_config = ConfigDict(frozen=True)

    id: StrictInt
    node_id: StrictStr
    url: StrictStr
    html_url: StrictStr
    assets_url: StrictStr
    upload_url: StrictStr
    tarball_url: StrictStr | None = None
    zipball_url: StrictStr | None = None
    discussion_url: StrictStr | None = None
    tag_name: StrictStr
    target_commitish: StrictStr
    name: StrictStr | None = None
    body: StrictStr | None = None
    draft: StrictBool
    prerelease: StrictBool
    created_at: AwareDatetime
    published_at: AwareDatetime | None = None
    assets: tuple[Asset, ...]

    @classmethod
    def from_api_response(cls, data: dict) -> "Release":
        """Create Release from GitHub API response."""
        return cls.model_validate(data)

    def to_dict(self) -> dict:
        """Convert to the GitHub API JSON shape."""
        return self.model_dump(mode="json")

    def find_asset(self, name: str) -> Asset | None:
        """Get an asset by file name."""
        for asset in self.assets:
            if asset.name == name:
                return asset
        return None
