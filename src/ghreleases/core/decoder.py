"""Decoding of GitHub API JSON responses into models."""

import json
from typing import Any, Callable, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from ghreleases.core.errors import ResourceUninterpretableError, UnacceptableResponseError
from ghreleases.core.transport import mime_type
from ghreleases.models.release import Release

T = TypeVar("T")

JSON_MIME_TYPE = "application/json"

_release_list = TypeAdapter(list[Release])


def check_json_response(response: httpx.Response) -> None:
    """Reject a response that declares a MIME type other than JSON.

    A response without a MIME type is accepted.
    """
    declared = mime_type(response)
    if declared is not None and declared != JSON_MIME_TYPE:
        raise UnacceptableResponseError(response, declared)


def decode(url: str, data: bytes, parse: Callable[[Any], T]) -> T:
    """Parse a JSON body with ``parse``.

    Any failure, from malformed JSON to a missing field, raises
    ``ResourceUninterpretableError``; nothing is partially decoded.
    """
    try:
        return parse(json.loads(data))
    except (ValidationError, ValueError, RecursionError) as e:
        raise ResourceUninterpretableError(url, data, e) from e


def parse_release(payload: Any) -> Release:
    return Release.model_validate(payload)


def parse_release_list(payload: Any) -> list[Release]:
    return _release_list.validate_python(payload)
