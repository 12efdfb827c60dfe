"""Observation commands — list and get generations, spans, and events."""

from __future__ import annotations

from enum import Enum
from typing import Annotated

import typer

from langfuse_cli.client.errors import error_handler
from langfuse_cli.commands._common import (
    FormatOpt,
    HostOpt,
    LimitOpt,
    OutputOpt,
    PageOpt,
    ProfileOpt,
    PublicKeyOpt,
    SecretKeyOpt,
    VerboseOpt,
    make_client,
    make_config,
    segment,
)
from langfuse_cli.models import Observation
from langfuse_cli.output.formatter import output

app = typer.Typer(name="observations", help="Query observations.", no_args_is_help=True)

OBSERVATION_COLUMNS = ["id", "traceId", "type", "name", "startTime", "model"]


class ObservationType(str, Enum):
    GENERATION = "GENERATION"
    SPAN = "SPAN"
    EVENT = "EVENT"


@app.command("list")
@error_handler
def list_observations(
    trace_id: Annotated[str | None, typer.Option("--trace-id", help="Filter by trace ID")] = None,
    name: Annotated[str | None, typer.Option("--name", "-n", help="Filter by name")] = None,
    observation_type: Annotated[
        ObservationType | None,
        typer.Option("--type", case_sensitive=False, help="Filter by observation type"),
    ] = None,
    user_id: Annotated[str | None, typer.Option("--user-id", "-u", help="Filter by user ID")] = None,
    from_start: Annotated[
        str | None, typer.Option("--from", help="Filter from start time (ISO 8601)"),
    ] = None,
    to_start: Annotated[
        str | None, typer.Option("--to", help="Filter to start time (ISO 8601)"),
    ] = None,
    limit: LimitOpt = 50,
    page: PageOpt = 1,
    fmt: FormatOpt = None,
    output_path: OutputOpt = None,
    profile: ProfileOpt = None,
    public_key: PublicKeyOpt = None,
    secret_key: SecretKeyOpt = None,
    host: HostOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """List observations with optional filters."""
    config = make_config(
        profile, host, public_key, secret_key,
        fmt=fmt, limit=limit, page=page, output_path=output_path, verbose=verbose,
    )
    filters = {
        "traceId": trace_id,
        "name": name,
        "type": observation_type.value if observation_type else None,
        "userId": user_id,
        "fromStartTime": from_start,
        "toStartTime": to_start,
    }
    with make_client(config) as client:
        observations = client.list_all(
            "/observations", filters,
            model=Observation, limit=config.page_limit, page=config.page_number,
        )
    output(
        observations, config.output_format,
        columns=OBSERVATION_COLUMNS, title="Observations", output_path=config.output_path,
    )


@app.command()
@error_handler
def get(
    observation_id: Annotated[str, typer.Argument(help="Observation ID")],
    fmt: FormatOpt = None,
    output_path: OutputOpt = None,
    profile: ProfileOpt = None,
    public_key: PublicKeyOpt = None,
    secret_key: SecretKeyOpt = None,
    host: HostOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Get a specific observation by ID."""
    config = make_config(
        profile, host, public_key, secret_key,
        fmt=fmt, output_path=output_path, verbose=verbose,
    )
    with make_client(config) as client:
        observation = client.get(f"/observations/{segment(observation_id)}", model=Observation)
    output(
        observation, config.output_format,
        title=f"Observation: {observation_id}", output_path=config.output_path,
    )
