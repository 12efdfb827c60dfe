"""Score commands — create, list, get."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any

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
from langfuse_cli.config.models import OutputFormat
from langfuse_cli.models import CreatedScore, Score
from langfuse_cli.output.formatter import output

app = typer.Typer(name="scores", help="Create and query scores.", no_args_is_help=True)

SCORE_COLUMNS = ["id", "name", "value", "source", "traceId", "timestamp"]


class ScoreDataType(str, Enum):
    NUMERIC = "NUMERIC"
    CATEGORICAL = "CATEGORICAL"
    BOOLEAN = "BOOLEAN"


@app.command()
@error_handler
def create(
    name: Annotated[str, typer.Option("--name", "-n", help="Score name (e.g. accuracy)")],
    value: Annotated[float, typer.Option("--value", help="Score value (numeric)")],
    trace_id: Annotated[str | None, typer.Option("--trace-id", help="Trace to score")] = None,
    observation_id: Annotated[
        str | None, typer.Option("--observation-id", help="Observation to score"),
    ] = None,
    session_id: Annotated[str | None, typer.Option("--session-id", help="Session to score")] = None,
    data_type: Annotated[
        ScoreDataType | None,
        typer.Option("--data-type", case_sensitive=False, help="Score data type"),
    ] = None,
    comment: Annotated[str | None, typer.Option("--comment", "-c", help="Comment")] = None,
    fmt: FormatOpt = None,
    output_path: OutputOpt = None,
    profile: ProfileOpt = None,
    public_key: PublicKeyOpt = None,
    secret_key: SecretKeyOpt = None,
    host: HostOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Create a new score."""
    if not (trace_id or observation_id or session_id):
        raise ValueError("One of --trace-id, --observation-id or --session-id is required")
    config = make_config(
        profile, host, public_key, secret_key,
        fmt=fmt or OutputFormat.json, output_path=output_path, verbose=verbose,
    )
    body: dict[str, Any] = {"name": name, "value": value}
    optional = {
        "traceId": trace_id,
        "observationId": observation_id,
        "sessionId": session_id,
        "dataType": data_type.value if data_type else None,
        "comment": comment,
    }
    body.update({k: v for k, v in optional.items() if v is not None})
    with make_client(config) as client:
        created = client.post("/scores", json=body, model=CreatedScore)
    output(created, config.output_format, output_path=config.output_path)


@app.command("list")
@error_handler
def list_scores(
    name: Annotated[str | None, typer.Option("--name", "-n", help="Filter by score name")] = None,
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
    """List scores with optional filters."""
    config = make_config(
        profile, host, public_key, secret_key,
        fmt=fmt, limit=limit, page=page, output_path=output_path, verbose=verbose,
    )
    with make_client(config) as client:
        scores = client.list_all(
            "/scores",
            {"name": name, "fromTimestamp": from_ts, "toTimestamp": to_ts},
            model=Score,
            limit=config.page_limit,
            page=config.page_number,
        )
    output(
        scores, config.output_format,
        columns=SCORE_COLUMNS, title="Scores", output_path=config.output_path,
    )


@app.command()
@error_handler
def get(
    score_id: Annotated[str, typer.Argument(help="Score ID")],
    fmt: FormatOpt = None,
    output_path: OutputOpt = None,
    profile: ProfileOpt = None,
    public_key: PublicKeyOpt = None,
    secret_key: SecretKeyOpt = None,
    host: HostOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Get a specific score by ID."""
    config = make_config(
        profile, host, public_key, secret_key,
        fmt=fmt, output_path=output_path, verbose=verbose,
    )
    with make_client(config) as client:
        score = client.get(f"/scores/{segment(score_id)}", model=Score)
    output(score, config.output_format, title=f"Score: {score_id}", output_path=config.output_path)
