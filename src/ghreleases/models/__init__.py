"""Data models for ghreleases."""

from ghreleases.models.manifest import ManifestAsset, ManifestRelease
from ghreleases.models.release import Asset, AssetState, Release

__all__ = ["Asset", "AssetState", "Release", "ManifestAsset", "ManifestRelease"]
