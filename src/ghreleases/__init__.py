"""Fetch GitHub release metadata, build release manifests and download assets."""

__version__ = "0.1.0"
