from __future__ import annotations

import copy
from pathlib import Path

import pytest

from ghreleases.core.config import GHReleasesConfig, set_config

ASSET_PAYLOAD = {
    "id": 1001,
    "node_id": "RA_kwDOAAABc84AAAPp",
    "url": "https://api.github.com/repos/octo/hello/releases/assets/1001",
    "browser_download_url": "https://github.com/octo/hello/releases/download/v1.2.0/hello-linux.tar.gz",
    "name": "hello-linux.tar.gz",
    "label": None,
    "state": "uploaded",
    "content_type": "application/gzip",
    "size": 11,
    "download_count": 42,
    "created_at": "2024-01-02T03:04:05Z",
    "updated_at": "2024-01-02T03:05:00Z",
    "uploader": {"login": "octocat", "id": 1},
}

RELEASE_PAYLOAD = {
    "id": 501,
    "node_id": "RE_kwDOAAABc84AAAH1",
    "url": "https://api.github.com/repos/octo/hello/releases/501",
    "html_url": "https://github.com/octo/hello/releases/tag/v1.2.0",
    "assets_url": "https://api.github.com/repos/octo/hello/releases/501/assets",
    "upload_url": "https://uploads.github.com/repos/octo/hello/releases/501/assets{?name,label}",
    "tarball_url": "https://api.github.com/repos/octo/hello/tarball/v1.2.0",
    "zipball_url": "https://api.github.com/repos/octo/hello/zipball/v1.2.0",
    "discussion_url": None,
    "tag_name": "v1.2.0",
    "target_commitish": "main",
    "name": "Hello 1.2.0",
    "body": "Bug fixes.",
    "draft": False,
    "prerelease": False,
    "created_at": "2024-01-01T12:00:00Z",
    "published_at": "2024-01-02T03:00:00Z",
    "author": {"login": "octocat", "id": 1},
    "assets": [ASSET_PAYLOAD],
}


@pytest.fixture
def asset_payload() -> dict:
    return copy.deepcopy(ASSET_PAYLOAD)


@pytest.fixture
def release_payload() -> dict:
    return copy.deepcopy(RELEASE_PAYLOAD)


@pytest.fixture
def prerelease_payload() -> dict:
    payload = copy.deepcopy(RELEASE_PAYLOAD)
    payload.update(
        id=502,
        tag_name="v1.3.0-rc1",
        name=None,
        body=None,
        prerelease=True,
        published_at=None,
        discussion_url="https://github.com/octo/hello/discussions/7",
    )
    payload["assets"][0].update(
        id=1002,
        name="hello-rc-linux.tar.gz",
        label="Linux build",
        browser_download_url="https://github.com/octo/hello/releases/download/v1.3.0-rc1/hello-rc-linux.tar.gz",
    )
    return payload


@pytest.fixture(autouse=True)
def config(tmp_path: Path):
    download_dir = tmp_path / "downloads"
    download_dir.mkdir()
    cfg = GHReleasesConfig(
        request_timeout=5.0, download_dir=download_dir, user_agent="ghreleases-tests"
    )
    set_config(cfg)
    yield cfg
    set_config(None)
