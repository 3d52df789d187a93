"""Configuration for ghreleases."""

from pathlib import Path
from dataclasses import dataclass
import logging
import os
import tempfile

from ghreleases import __version__


DEFAULT_TIMEOUT = 60.0

log = logging.getLogger(__name__)


def _timeout_from_env(value: str | None) -> float:
    if not value:
        return DEFAULT_TIMEOUT
    try:
        timeout = float(value)
    except ValueError:
        timeout = 0.0
    if timeout > 0:
        return timeout
    log.warning(
        "Ignoring invalid GHRELEASES_TIMEOUT=%r, using %ss", value, DEFAULT_TIMEOUT
    )
    return DEFAULT_TIMEOUT


@dataclass
class GHReleasesConfig:
    """Configuration for the GitHub releases client."""

    request_timeout: float
    download_dir: Path
    user_agent: str

    @classmethod
    def default(cls) -> "GHReleasesConfig":
        """Create config from the environment, falling back to defaults."""
        timeout = os.environ.get("GHRELEASES_TIMEOUT")
        download_dir = os.environ.get("GHRELEASES_DOWNLOAD_DIR")
        return cls(
            request_timeout=_timeout_from_env(timeout),
            download_dir=Path(download_dir or tempfile.gettempdir()),
            user_agent=f"ghreleases/{__version__}",
        )


# Global config instance
_config: GHReleasesConfig | None = None


def get_config() -> GHReleasesConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = GHReleasesConfig.default()
    return _config


def set_config(config: GHReleasesConfig | None) -> None:
    """Set a custom configuration (useful for testing)."""
    global _config
    _config = config
