"""Session commands — list and show."""

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
from langfuse_cli.models import Session, Trace
from langfuse_cli.output.formatter import output

app = typer.Typer(name="sessions", help="Query sessions.", no_args_is_help=True)

SESSION_COLUMNS = ["id", "createdAt", "projectId"]

SESSION_TRACE_LIMIT = 100


@app.command("list")
@error_handler
def list_sessions(
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
    """List sessions with optional filters."""
    config = make_config(
        profile, host, public_key, secret_key,
        fmt=fmt, limit=limit, page=page, output_path=output_path, verbose=verbose,
    )
    with make_client(config) as client:
        sessions = client.list_all(
            "/sessions",
            {"fromTimestamp": from_ts, "toTimestamp": to_ts},
            model=Session,
            limit=config.page_limit,
            page=config.page_number,
        )
    output(
        sessions, config.output_format,
        columns=SESSION_COLUMNS, title="Sessions", output_path=config.output_path,
    )


@app.command()
@error_handler
def show(
    session_id: Annotated[str, typer.Argument(help="Session ID")],
    with_traces: Annotated[
        bool, typer.Option("--with-traces", help="Include the session's traces"),
    ] = False,
    fmt: FormatOpt = None,
    output_path: OutputOpt = None,
    profile: ProfileOpt = None,
    public_key: PublicKeyOpt = None,
    secret_key: SecretKeyOpt = None,
    host: HostOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Show details of a specific session."""
    config = make_config(
        profile, host, public_key, secret_key,
        fmt=fmt, output_path=output_path, verbose=verbose,
    )
    with make_client(config) as client:
        session: Session = client.get(f"/sessions/{segment(session_id)}", model=Session)
        if with_traces:
            session.traces = client.list_all(
                "/traces", {"sessionId": session_id}, model=Trace, limit=SESSION_TRACE_LIMIT,
            )
    output(
        session, config.output_format,
        title=f"Session: {session_id}", output_path=config.output_path,
    )
