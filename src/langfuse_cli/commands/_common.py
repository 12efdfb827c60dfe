"""Shared helpers for CLI commands — option aliases, config, client factory, input parsing."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Annotated, Any
from urllib.parse import quote

import typer

from langfuse_cli.client.api import LangfuseClient
from langfuse_cli.config.models import EffectiveConfig, OutputFormat
from langfuse_cli.config.resolver import resolve_config
from langfuse_cli.config.store import CredentialStore, ProfileStore
from langfuse_cli.utils.log import configure_logging

# Shared Typer option type aliases
ProfileOpt = Annotated[
    str | None,
    typer.Option("--profile", help="Profile name"),
]
HostOpt = Annotated[
    str | None,
    typer.Option("--host", help="Langfuse host URL"),
]
PublicKeyOpt = Annotated[
    str | None,
    typer.Option("--public-key", help="Langfuse public key"),
]
SecretKeyOpt = Annotated[
    str | None,
    typer.Option("--secret-key", help="Langfuse secret key"),
]
FormatOpt = Annotated[
    OutputFormat | None,
    typer.Option("--format", "-f", help="Output format"),
]
OutputOpt = Annotated[
    str | None,
    typer.Option("--output", "-o", help="Write output to this file"),
]
VerboseOpt = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Verbose output"),
]
LimitOpt = Annotated[
    int,
    typer.Option("--limit", "-l", min=1, help="Maximum number of results"),
]
PageOpt = Annotated[
    int,
    typer.Option("--page", "-p", min=1, help="Page number to start from"),
]
FromOpt = Annotated[
    str | None,
    typer.Option("--from", help="Filter from timestamp (ISO 8601)"),
]
ToOpt = Annotated[
    str | None,
    typer.Option("--to", help="Filter to timestamp (ISO 8601)"),
]


def get_store() -> ProfileStore:
    return CredentialStore()


def make_config(
    profile: str | None = None,
    host: str | None = None,
    public_key: str | None = None,
    secret_key: str | None = None,
    *,
    fmt: OutputFormat | None = None,
    limit: int | None = None,
    page: int | None = None,
    output_path: str | None = None,
    verbose: bool = False,
) -> EffectiveConfig:
    """Resolve the effective config from CLI options, env vars, and the stored profile."""
    configure_logging(verbose)
    return resolve_config(
        get_store(),
        profile=profile,
        host=host,
        public_key=public_key,
        secret_key=secret_key,
        output_format=fmt,
        limit=limit,
        page=page,
        output_path=output_path,
        verbose=verbose,
    )


def make_client(config: EffectiveConfig) -> LangfuseClient:
    """Create a LangfuseClient; raises ConfigInvalidError when credentials are missing."""
    return LangfuseClient(config)


def segment(value: str) -> str:
    """Quote a user-supplied identifier for use as one URL path segment."""
    return quote(value, safe="")


def read_content(file: Path | None) -> str:
    """Read text from *file*, or from stdin when no file is given."""
    if file is not None:
        return file.read_text(encoding="utf-8")
    return sys.stdin.read()


def parse_json(value: str | None, option: str) -> Any:
    """Parse a JSON-valued option, naming the option in the error."""
    if value is None:
        return None
    try:
        return json.loads(value)
    except json.JSONDecodeError as exc:
        raise ValueError(f"{option} is not valid JSON: {exc}") from exc
