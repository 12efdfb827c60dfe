"""Langfuse HTTP client — authenticated requests and page aggregation."""

from __future__ import annotations

import functools
import logging
from typing import Any, TypeVar

import httpx
from pydantic import TypeAdapter, ValidationError

from langfuse_cli import __version__
from langfuse_cli.client.errors import ConfigInvalidError, DecodeError
from langfuse_cli.client.outcome import (
    Outcome,
    classify_response,
    classify_transport_error,
    raise_for_outcome,
)
from langfuse_cli.config.constants import (
    API_BASE,
    CONNECT_TIMEOUT,
    MAX_PAGE_SIZE,
    REQUEST_TIMEOUT,
)
from langfuse_cli.config.models import EffectiveConfig
from langfuse_cli.models.common import Page

T = TypeVar("T")

logger = logging.getLogger(__name__)


@functools.lru_cache(maxsize=None)
def _adapter(model: Any) -> TypeAdapter[Any]:
    return TypeAdapter(model)


def _present(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, (str, list, tuple)) and len(value) == 0:
        return False
    return True


class LangfuseClient:
    """Synchronous HTTP client for the Langfuse public API.

    One instance serves one command invocation. Requests are issued
    sequentially and are never retried.
    """

    def __init__(self, config: EffectiveConfig) -> None:
        if not config.is_valid():
            raise ConfigInvalidError()
        self.host = config.host
        self.base_url = f"{config.host}{API_BASE}"
        self._client = httpx.Client(
            auth=httpx.BasicAuth(config.public_key, config.secret_key),
            timeout=httpx.Timeout(REQUEST_TIMEOUT, connect=CONNECT_TIMEOUT),
            headers={
                "Accept": "application/json",
                "User-Agent": f"langfuse-cli/{__version__}",
            },
        )

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> LangfuseClient:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def send(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
    ) -> Outcome:
        """Issue one request and classify its result without raising."""
        url = f"{self.base_url}{path}"
        logger.debug("%s %s params=%s", method, url, params or {})
        try:
            response = self._client.request(method, url, params=params, json=json)
        except (httpx.TransportError, httpx.InvalidURL) as exc:
            logger.debug("%s %s failed: %s", method, url, type(exc).__name__)
            return classify_transport_error(exc)
        logger.debug("%s %s -> %s", method, url, response.status_code)
        return classify_response(response, path)

    def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        model: Any = None,
    ) -> Any:
        """Issue one request and return its decoded body.

        With *model* set, the body is validated into that type and a
        mismatch raises :class:`DecodeError`. Without it, the parsed JSON
        is returned (``None`` for an empty body).
        """
        response = raise_for_outcome(self.send(method, path, params=params, json=json))
        return self._decode(response, path, model)

    def _decode(self, response: httpx.Response, path: str, model: Any) -> Any:
        if model is None:
            if not response.content:
                return None
            try:
                return response.json()
            except ValueError as exc:
                raise DecodeError(f"Response from {path} is not valid JSON: {exc}") from exc
        try:
            return _adapter(model).validate_json(response.content)
        except ValidationError as exc:
            raise DecodeError(f"Unexpected response shape from {path}: {exc}") from exc

    def get(self, path: str, *, params: dict[str, Any] | None = None, model: Any = None) -> Any:
        return self.request("GET", path, params=params, model=model)

    def post(self, path: str, *, json: Any = None, model: Any = None) -> Any:
        return self.request("POST", path, json=json, model=model)

    def list_all(
        self,
        path: str,
        filters: dict[str, Any] | None = None,
        *,
        model: type[T],
        limit: int,
        page: int = 1,
    ) -> list[T]:
        """Fetch successive pages of *path* until *limit* records are collected.

        Stops at the first of: *limit* reached (result truncated to it), the
        server-reported ``totalPages`` reached, or, when ``totalPages`` is
        not reported, a page shorter than the requested page size. Any page
        failure propagates and the records gathered so far are discarded.
        """
        if limit < 1:
            raise ValueError("limit must be at least 1")
        page_size = min(limit, MAX_PAGE_SIZE)
        caller_params = {k: v for k, v in (filters or {}).items() if _present(v)}
        records: list[T] = []
        current = page
        while True:
            params = {**caller_params, "limit": page_size, "page": current}
            result: Page[T] = self.request("GET", path, params=params, model=Page[model])  # type: ignore[valid-type]
            records.extend(result.data)
            logger.debug(
                "%s page %d: %d records (%d total)", path, current, len(result.data), len(records),
            )
            if len(records) >= limit:
                return records[:limit]
            total_pages = result.meta.totalPages if result.meta else None
            if total_pages is not None:
                if current >= total_pages:
                    break
            elif len(result.data) < page_size:
                break
            current += 1
        return records

    def test_connection(self) -> None:
        """Raise the classified error if the API cannot be reached with these keys."""
        self.request("GET", "/traces", params={"limit": 1})
