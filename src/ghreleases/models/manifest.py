"""Release manifest data models."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


def _to_utc(value: datetime) -> datetime:
    """Naive UTC datetime, as property lists store them."""
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def _from_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@dataclass(frozen=True)
class ManifestAsset:
    """Represents a release asset in the manifest."""

    github_id: int
    url: str  # browser download URL
    name: str
    size: int
    updated_at: datetime
    label: str | None = None

    @property
    def download_url(self) -> str:
        return self.url

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization. None values are omitted."""
        data = {
            "gitHubID": self.github_id,
            "url": self.url,
            "name": self.name,
            "size": self.size,
            "updatedAt": _to_utc(self.updated_at),
        }
        if self.label is not None:
            data["label"] = self.label
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ManifestAsset":
        """Create ManifestAsset from dictionary."""
        return cls(
            github_id=data["gitHubID"],
            url=data["url"],
            name=data["name"],
            size=data["size"],
            updated_at=_from_utc(data["updatedAt"]),
            label=data.get("label"),
        )


@dataclass(frozen=True)
class ManifestRelease:
    """Represents a release in the manifest."""

    github_id: int
    info_url: str  # html URL of the release page
    tag_name: str
    prerelease: bool
    created_at: datetime
    discussion_url: str | None = None
    name: str | None = None
    body: str | None = None
    published_at: datetime | None = None
    assets: tuple[ManifestAsset, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization. None values are omitted."""
        data = {
            "gitHubID": self.github_id,
            "infoUrl": self.info_url,
            "tagName": self.tag_name,
            "prerelease": self.prerelease,
            "createdAt": _to_utc(self.created_at),
            "assets": [a.to_dict() for a in self.assets],
        }
        optional = {
            "discussionUrl": self.discussion_url,
            "name": self.name,
            "body": self.body,
            "publishedAt": _to_utc(self.published_at) if self.published_at else None,
        }
        data.update((k, v) for k, v in optional.items() if v is not None)
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "ManifestRelease":
        """Create ManifestRelease from dictionary."""
        published_at = data.get("publishedAt")
        return cls(
            github_id=data["gitHubID"],
            info_url=data["infoUrl"],
            tag_name=data["tagName"],
            prerelease=data["prerelease"],
            created_at=_from_utc(data["createdAt"]),
            discussion_url=data.get("discussionUrl"),
            name=data.get("name"),
            body=data.get("body"),
            published_at=_from_utc(published_at) if published_at else None,
            assets=tuple(ManifestAsset.from_dict(a) for a in data.get("assets", [])),
        )
