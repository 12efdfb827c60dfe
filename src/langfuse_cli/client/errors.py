"""Typed exceptions and error handling decorator."""

from __future__ import annotations

import functools
from typing import Any, Callable, TypeVar

from rich.console import Console
from rich.markup import escape

F = TypeVar("F", bound=Callable[..., Any])

err_console = Console(stderr=True)


class LangfuseCLIError(Exception):
    """Base exception for langfuse-cli."""

    exit_code: int = 1


class ConfigInvalidError(LangfuseCLIError):
    """Credentials could not be resolved."""

    exit_code = 2

    def __init__(self, message: str = "") -> None:
        super().__init__(
            message
            or "Missing credentials. Run 'lf config setup' or set "
            "LANGFUSE_PUBLIC_KEY and LANGFUSE_SECRET_KEY."
        )


class ConfigCorruptError(LangfuseCLIError):
    """The credential store exists but cannot be parsed."""

    exit_code = 3


class StoreIOError(LangfuseCLIError):
    """Filesystem failure while reading or writing the credential store."""

    exit_code = 4

    def __init__(self, message: str, cause: OSError) -> None:
        self.cause = cause
        super().__init__(f"{message}: {cause}")


class AuthenticationError(LangfuseCLIError):
    """Authentication failed (401/403)."""

    exit_code = 5

    def __init__(self, status_code: int) -> None:
        self.status_code = status_code
        super().__init__(
            f"Authentication failed ({status_code}). Check your public and secret keys."
        )


class NotFoundError(LangfuseCLIError):
    """Resource not found (404)."""

    exit_code = 6

    def __init__(self, path: str, detail: str = "") -> None:
        self.path = path
        self.detail = detail
        msg = f"Resource not found: {path}"
        if detail:
            msg += f" ({detail})"
        super().__init__(msg)


class RateLimitError(LangfuseCLIError):
    """Rate limit exceeded (429). Never retried automatically."""

    exit_code = 7

    def __init__(self) -> None:
        super().__init__("Rate limit exceeded. Please try again later.")


class RequestTimeoutError(LangfuseCLIError):
    """Connect or overall request timeout elapsed."""

    exit_code = 8


class NetworkError(LangfuseCLIError):
    """Transport-level failure other than a timeout."""

    exit_code = 9


class DecodeError(LangfuseCLIError):
    """Response body did not match the expected shape."""

    exit_code = 10


class APIError(LangfuseCLIError):
    """Any other non-2xx response from the API."""

    exit_code = 11

    def __init__(self, status_code: int, detail: str = "") -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"API returned {status_code}: {detail}")


def error_handler(func: F) -> F:
    """Decorator that catches LangfuseCLIError and prints user-friendly messages."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except LangfuseCLIError as exc:
            err_console.print(f"[bold red]Error:[/] {escape(str(exc))}")
            raise SystemExit(exc.exit_code)
        except ValueError as exc:
            err_console.print(f"[bold red]Error:[/] {escape(str(exc))}")
            raise SystemExit(1)

    return wrapper  # type: ignore[return-value]
