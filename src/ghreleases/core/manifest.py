"""Release manifest files: compact records of a repository's releases."""

import logging
import lzma
import plistlib
from pathlib import Path

import yaml

from ghreleases.models.manifest import ManifestAsset, ManifestRelease
from ghreleases.models.release import Release

log = logging.getLogger(__name__)

MANIFEST_VERSION = 1

FORMAT_PLIST = "plist"
FORMAT_YAML = "yaml"

COMPRESSED_SUFFIX = ".bin"
PLIST_SUFFIX = ".plist"
YAML_SUFFIXES = (".yaml", ".yml")


class ManifestError(Exception):
    """Error reading or writing a manifest file."""

    pass


def to_manifest(releases: list[Release]) -> list[ManifestRelease]:
    """Project API releases into manifest records."""
    return [
        ManifestRelease(
            github_id=r.id,
            info_url=r.html_url,
            discussion_url=r.discussion_url,
            tag_name=r.tag_name,
            name=r.name,
            body=r.body,
            prerelease=r.prerelease,
            created_at=r.created_at,
            published_at=r.published_at,
            assets=tuple(
                ManifestAsset(
                    github_id=a.id,
                    url=a.browser_download_url,
                    name=a.name,
                    label=a.label,
                    size=a.size,
                    updated_at=a.updated_at,
                )
                for a in r.assets
            ),
        )
        for r in releases
    ]


def manifest_path(output: Path, compress: bool = True, fmt: str = FORMAT_PLIST) -> Path:
    """Get the path a manifest is written to, with its extension replaced."""
    if fmt == FORMAT_YAML:
        return output.with_suffix(YAML_SUFFIXES[0])
    return output.with_suffix(COMPRESSED_SUFFIX if compress else PLIST_SUFFIX)


def encode_manifest(
    releases: list[ManifestRelease], compress: bool = True, fmt: str = FORMAT_PLIST
) -> bytes:
    """Serialize manifest records.

    Property lists are binary and xz-compressed unless ``compress`` is
    false. YAML is never compressed.
    """
    records = [r.to_dict() for r in releases]
    if fmt == FORMAT_YAML:
        data = {"version": MANIFEST_VERSION, "releases": records}
        return yaml.safe_dump(data, default_flow_style=False, sort_keys=False).encode()
    if fmt != FORMAT_PLIST:
        raise ManifestError(f"Unknown manifest format: {fmt}")

    data = plistlib.dumps(records, fmt=plistlib.FMT_BINARY)
    if compress:
        data = lzma.compress(data)
    return data


def write_manifest(
    releases: list[ManifestRelease],
    output: Path,
    compress: bool = True,
    fmt: str = FORMAT_PLIST,
) -> Path:
    """Write manifest records to a file. Returns the path written."""
    path = manifest_path(output, compress, fmt)
    data = encode_manifest(releases, compress, fmt)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    log.debug("Wrote %d releases to %s", len(releases), path)
    return path


def read_manifest(path: Path) -> list[ManifestRelease]:
    """Load manifest records from a file, by its extension."""
    suffix = path.suffix.lower()
    try:
        raw = path.read_bytes()
        if suffix in YAML_SUFFIXES:
            data = yaml.safe_load(raw) or {}
            records = data.get("releases", [])
        elif suffix == COMPRESSED_SUFFIX:
            records = plistlib.loads(lzma.decompress(raw))
        elif suffix == PLIST_SUFFIX:
            records = plistlib.loads(raw)
        else:
            raise ManifestError(f"Unknown manifest file type: {path}")
        return [ManifestRelease.from_dict(r) for r in records]
    except ManifestError:
        raise
    except (
        OSError,
        lzma.LZMAError,
        plistlib.InvalidFileException,
        yaml.YAMLError,
        KeyError,
        TypeError,
        AttributeError,
        ValueError,
    ) as e:
        raise ManifestError(f"Could not read manifest {path}: {e}") from e


def find_asset(
    releases: list[ManifestRelease], name: str, tag: str | None = None
) -> tuple[ManifestRelease, ManifestAsset] | None:
    """Find a named asset.

    With a tag, only that release is searched. Otherwise the first
    non-prerelease release in manifest order (newest first) is used.
    """
    if tag is not None:
        candidates = [r for r in releases if r.tag_name == tag]
    else:
        candidates = [r for r in releases if not r.prerelease][:1]

    for release in candidates:
        for asset in release.assets:
            if asset.name == name:
                return release, asset
    return None
