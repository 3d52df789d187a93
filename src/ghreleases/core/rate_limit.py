"""Detection of GitHub API rate limiting."""

import logging
from datetime import datetime, timedelta, timezone

import httpx

from ghreleases.core.errors import RateLimitedError

log = logging.getLogger(__name__)

RATE_LIMIT_RESET_HEADER = "X-RateLimit-Reset"

# Reset time already passed: assume clock drift.
CLOCK_DRIFT_DELAY = timedelta(minutes=5)
# Header missing, or the request is actually forbidden.
UNKNOWN_RESET_DELAY = timedelta(minutes=60)


def _parse_reset(value: str | None) -> datetime | None:
    if value is None:
        return None
    try:
        return datetime.fromtimestamp(float(value), tz=timezone.utc)
    except (ValueError, OverflowError, OSError):
        return None


def check_rate_limited(
    response: httpx.Response, now: datetime | None = None
) -> RateLimitedError | None:
    """Classify a response as rate limited.

    Only HTTP 403 responses are considered. The reset time comes from the
    ``X-RateLimit-Reset`` header, replaced by a conservative estimate when
    it is in the past or cannot be read.
    """
    if response.status_code != 403:
        return None

    now = now or datetime.now(timezone.utc)
    reset_at = _parse_reset(response.headers.get(RATE_LIMIT_RESET_HEADER))
    if reset_at is None:
        reset_at = now + UNKNOWN_RESET_DELAY
    elif reset_at < now:
        reset_at = now + CLOCK_DRIFT_DELAY

    log.warning("Rate limited on %s until %s", response.url, reset_at.isoformat())
    return RateLimitedError(url=str(response.url), reset_at=reset_at, response=response)
