"""Trace commands — list and get."""

from __future__ import annotations

from typing import Annotated

import typer

from langfuse_cli.client.errors import error_handler
from langfuse_cli.commands._common import (
    FormatOpt,
    FromOpt,
    HostOpt,
    LimitOpt,
    OutputOpt,
    PageOpt,
    ProfileOpt,
    PublicKeyOpt,
    SecretKeyOpt,
    ToOpt,
    VerboseOpt,
    make_client,
    make_config,
    segment,
)
from langfuse_cli.models import Observation, Trace
from langfuse_cli.output.formatter import output

app = typer.Typer(name="traces", help="Query traces.", no_args_is_help=True)

TRACE_COLUMNS = ["id", "name", "userId", "sessionId", "timestamp", "tags"]

# Observations fetched alongside a single trace
TRACE_OBSERVATION_LIMIT = 100


@app.command("list")
@error_handler
def list_traces(
    name: Annotated[str | None, typer.Option("--name", "-n", help="Filter by trace name")] = None,
    user_id: Annotated[str | None, typer.Option("--user-id", "-u", help="Filter by user ID")] = None,
    session_id: Annotated[
        str | None, typer.Option("--session-id", "-s", help="Filter by session ID"),
    ] = None,
    tags: Annotated[
        list[str] | None,
        typer.Option("--tags", "-t", help="Filter by tag (repeatable)"),
    ] = None,
    from_ts: FromOpt = None,
    to_ts: ToOpt = None,
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
    """List traces with optional filters."""
    config = make_config(
        profile, host, public_key, secret_key,
        fmt=fmt, limit=limit, page=page, output_path=output_path, verbose=verbose,
    )
    filters = {
        "name": name,
        "userId": user_id,
        "sessionId": session_id,
        "tags": tags,
        "fromTimestamp": from_ts,
        "toTimestamp": to_ts,
    }
    with make_client(config) as client:
        traces = client.list_all(
            "/traces", filters, model=Trace, limit=config.page_limit, page=config.page_number,
        )
    output(
        traces, config.output_format,
        columns=TRACE_COLUMNS, title="Traces", output_path=config.output_path,
    )


@app.command()
@error_handler
def get(
    trace_id: Annotated[str, typer.Argument(help="Trace ID")],
    with_observations: Annotated[
        bool, typer.Option("--with-observations", help="Include the trace's observations"),
    ] = False,
    fmt: FormatOpt = None,
    output_path: OutputOpt = None,
    profile: ProfileOpt = None,
    public_key: PublicKeyOpt = None,
    secret_key: SecretKeyOpt = None,
    host: HostOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Get a specific trace by ID."""
    config = make_config(
        profile, host, public_key, secret_key,
        fmt=fmt, output_path=output_path, verbose=verbose,
    )
    with make_client(config) as client:
        trace: Trace = client.get(f"/traces/{segment(trace_id)}", model=Trace)
        if with_observations:
            trace.observations = client.list_all(
                "/observations",
                {"traceId": trace_id},
                model=Observation,
                limit=TRACE_OBSERVATION_LIMIT,
            )
    output(trace, config.output_format, title=f"Trace: {trace_id}", output_path=config.output_path)
