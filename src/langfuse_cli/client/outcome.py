"""Classification of a request's result into a closed set of outcomes.

Every HTTP round trip ends in exactly one of the variants below.
:func:`classify_response` and :func:`classify_transport_error` build them;
:func:`raise_for_outcome` turns the failure variants into the matching
exception from :mod:`langfuse_cli.client.errors`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union, assert_never

import httpx

from langfuse_cli.client.errors import (
    APIError,
    AuthenticationError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    RequestTimeoutError,
)


@dataclass(frozen=True)
class Success:
    response: httpx.Response


@dataclass(frozen=True)
class AuthenticationFailure:
    status_code: int


@dataclass(frozen=True)
class NotFound:
    path: str
    body_text: str


@dataclass(frozen=True)
class RateLimited:
    pass


@dataclass(frozen=True)
class Timeout:
    description: str


@dataclass(frozen=True)
class NetworkFailure:
    description: str


@dataclass(frozen=True)
class ApiFailure:
    status_code: int
    body_text: str


Outcome = Union[
    Success,
    AuthenticationFailure,
    NotFound,
    RateLimited,
    Timeout,
    NetworkFailure,
    ApiFailure,
]


def classify_response(response: httpx.Response, path: str) -> Outcome:
    """Classify a completed HTTP response by status code."""
    status = response.status_code
    if response.is_success:
        return Success(response)
    if status in (401, 403):
        return AuthenticationFailure(status)
    if status == 404:
        return NotFound(path, response.text)
    if status == 429:
        return RateLimited()
    return ApiFailure(status, response.text)


def classify_transport_error(exc: httpx.TransportError | httpx.InvalidURL) -> Outcome:
    """Classify a request that never produced a response."""
    if isinstance(exc, httpx.TimeoutException):
        return Timeout(str(exc) or type(exc).__name__)
    return NetworkFailure(str(exc) or type(exc).__name__)


def raise_for_outcome(outcome: Outcome) -> httpx.Response:
    """Return the response of a ``Success``; raise the mapped error otherwise."""
    if isinstance(outcome, Success):
        return outcome.response
    if isinstance(outcome, AuthenticationFailure):
        raise AuthenticationError(outcome.status_code)
    if isinstance(outcome, NotFound):
        raise NotFoundError(outcome.path, outcome.body_text)
    if isinstance(outcome, RateLimited):
        raise RateLimitError()
    if isinstance(outcome, Timeout):
        raise RequestTimeoutError(f"Request timed out: {outcome.description}")
    if isinstance(outcome, NetworkFailure):
        raise NetworkError(f"Network error: {outcome.description}")
    if isinstance(outcome, ApiFailure):
        raise APIError(outcome.status_code, outcome.body_text)
    assert_never(outcome)
