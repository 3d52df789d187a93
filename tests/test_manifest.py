from __future__ import annotations

import lzma
import plistlib
from datetime import datetime, timezone
from pathlib import Path

import pytest
import yaml

from ghreleases.core.manifest import (
    ManifestError,
    find_asset,
    manifest_path,
    read_manifest,
    to_manifest,
    write_manifest,
)
from ghreleases.models.release import Release


@pytest.fixture
def releases(release_payload: dict, prerelease_payload: dict) -> list[Release]:
    return [
        Release.from_api_response(prerelease_payload),
        Release.from_api_response(release_payload),
    ]


def test_to_manifest_projects_fields(releases: list[Release]) -> None:
    records = to_manifest(releases)

    rc, stable = records
    assert stable.github_id == 501
    assert stable.info_url == "https://github.com/octo/hello/releases/tag/v1.2.0"
    assert stable.tag_name == "v1.2.0"
    assert stable.published_at == datetime(2024, 1, 2, 3, tzinfo=timezone.utc)
    assert rc.discussion_url == "https://github.com/octo/hello/discussions/7"
    assert rc.prerelease is True

    asset = stable.assets[0]
    assert asset.github_id == 1001
    assert asset.url == releases[1].assets[0].browser_download_url
    assert asset.size == 11
    assert asset.label is None
    assert rc.assets[0].label == "Linux build"


@pytest.mark.parametrize(
    ("output", "compress", "fmt", "expected"),
    [
        ("release-manifest", True, "plist", "release-manifest.bin"),
        ("release-manifest", False, "plist", "release-manifest.plist"),
        ("out/manifest.json", True, "plist", "out/manifest.bin"),
        ("release-manifest", True, "yaml", "release-manifest.yaml"),
    ],
)
def test_manifest_path(output: str, compress: bool, fmt: str, expected: str) -> None:
    assert manifest_path(Path(output), compress, fmt) == Path(expected)


def test_compressed_plist_round_trip(tmp_path: Path, releases: list[Release]) -> None:
    records = to_manifest(releases)

    path = write_manifest(records, tmp_path / "release-manifest")

    assert path == tmp_path / "release-manifest.bin"
    assert path.read_bytes()[:6] == b"\xfd7zXZ\x00"
    assert read_manifest(path) == records


def test_uncompressed_plist_omits_missing_values(
    tmp_path: Path, releases: list[Release]
) -> None:
    records = to_manifest(releases)

    path = write_manifest(records, tmp_path / "release-manifest", compress=False)

    raw = path.read_bytes()
    assert raw.startswith(b"bplist00")
    rc = plistlib.loads(raw)[0]
    assert "name" not in rc
    assert "publishedAt" not in rc
    assert "label" in rc["assets"][0]
    assert rc["tagName"] == "v1.3.0-rc1"
    assert read_manifest(path) == records


def test_yaml_round_trip(tmp_path: Path, releases: list[Release]) -> None:
    records = to_manifest(releases)

    path = write_manifest(records, tmp_path / "release-manifest", fmt="yaml")

    data = yaml.safe_load(path.read_text())
    assert data["version"] == 1
    assert [r["tagName"] for r in data["releases"]] == ["v1.3.0-rc1", "v1.2.0"]
    assert read_manifest(path) == records


def test_unknown_format_is_rejected(tmp_path: Path, releases: list[Release]) -> None:
    with pytest.raises(ManifestError):
        write_manifest(to_manifest(releases), tmp_path / "m", fmt="toml")


def test_read_unknown_extension(tmp_path: Path) -> None:
    path = tmp_path / "manifest.txt"
    path.write_text("hello")

    with pytest.raises(ManifestError, match="Unknown manifest file type"):
        read_manifest(path)


@pytest.mark.parametrize(
    ("name", "content"),
    [
        ("manifest.bin", b"not xz"),
        ("manifest.bin", lzma.compress(b"not a plist")),
        ("manifest.plist", plistlib.dumps([{"tagName": "v1"}], fmt=plistlib.FMT_BINARY)),
        ("manifest.yaml", b"releases: [: bad"),
        ("missing.plist", None),
    ],
)
def test_read_corrupt_manifest(tmp_path: Path, name: str, content: bytes | None) -> None:
    path = tmp_path / name
    if content is not None:
        path.write_bytes(content)

    with pytest.raises(ManifestError, match="Could not read manifest"):
        read_manifest(path)


def test_find_asset(releases: list[Release]) -> None:
    records = to_manifest(releases)

    release, asset = find_asset(records, "hello-linux.tar.gz")
    assert release.tag_name == "v1.2.0"
    assert asset.github_id == 1001

    release, asset = find_asset(records, "hello-rc-linux.tar.gz", tag="v1.3.0-rc1")
    assert release.prerelease
    assert asset.label == "Linux build"

    # the latest release skips prereleases
    assert find_asset(records, "hello-rc-linux.tar.gz") is None
    assert find_asset(records, "hello-linux.tar.gz", tag="v0.1.0") is None
