"""Errors raised by the GitHub API client.

Every error carries the context needed to diagnose it. ``RateLimitedError``
is the only recoverable kind: wait until ``reset_at`` and try again.
"""

from datetime import datetime

import httpx


class GitHubAPIError(Exception):
    """Base error from the GitHub API client."""


class RequestError(GitHubAPIError):
    """The request could not be completed (DNS, connection, timeout)."""

    def __init__(
        self, url: str, cause: Exception, response: httpx.Response | None = None
    ):
        self.url = url
        self.cause = cause
        self.response = response
        super().__init__(f"Request to {url} failed: {cause}")


class RateLimitedError(GitHubAPIError):
    """The request failed due to rate limiting."""

    def __init__(self, url: str, reset_at: datetime, response: httpx.Response):
        self.url = url
        self.reset_at = reset_at
        self.response = response
        super().__init__(
            f"GitHub API rate limit exceeded for {url}; "
            f"retry after {reset_at.isoformat(timespec='seconds')}"
        )


class WrongStatusError(GitHubAPIError):
    """The response status differs from the expected one."""

    def __init__(self, response: httpx.Response, expected_status: int):
        self.response = response
        self.expected_status = expected_status
        super().__init__(
            f"Unexpected HTTP {response.status_code} from {response.url} "
            f"(expected {expected_status})"
        )

    @property
    def status_code(self) -> int:
        return self.response.status_code


class UnacceptableResponseError(GitHubAPIError):
    """The response declared an unexpected MIME type."""

    def __init__(self, response: httpx.Response, mime_type: str):
        self.response = response
        self.mime_type = mime_type
        super().__init__(f"Unacceptable content type {mime_type!r} from {response.url}")


class ResourceUninterpretableError(GitHubAPIError):
    """The response body could not be decoded."""

    def __init__(self, url: str, data: bytes, cause: Exception | None = None):
        self.url = url
        self.data = data
        self.cause = cause
        super().__init__(f"Could not interpret resource at {url}: {cause}")
