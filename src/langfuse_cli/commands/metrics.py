"""Metrics command — aggregate queries over traces or observations."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any

import typer

from langfuse_cli.client.errors import error_handler
from langfuse_cli.commands._common import (
    FormatOpt,
    FromOpt,
    HostOpt,
    OutputOpt,
    ProfileOpt,
    PublicKeyOpt,
    SecretKeyOpt,
    ToOpt,
    VerboseOpt,
    make_client,
    make_config,
)
from langfuse_cli.models import MetricsResult
from langfuse_cli.output.formatter import output

app = typer.Typer(name="metrics", help="Query metrics with aggregations.", no_args_is_help=True)


class MetricsView(str, Enum):
    traces = "traces"
    observations = "observations"


class Measure(str, Enum):
    count = "count"
    latency = "latency"
    input_tokens = "inputTokens"
    output_tokens = "outputTokens"
    total_tokens = "totalTokens"
    input_cost = "inputCost"
    output_cost = "outputCost"
    total_cost = "totalCost"


class Aggregation(str, Enum):
    count = "count"
    sum = "sum"
    avg = "avg"
    p50 = "p50"
    p95 = "p95"
    p99 = "p99"
    histogram = "histogram"


class Granularity(str, Enum):
    auto = "auto"
    minute = "minute"
    hour = "hour"
    day = "day"
    week = "week"
    month = "month"


def build_query(
    view: MetricsView,
    measure: Measure,
    aggregation: Aggregation,
    dimensions: list[str] | None = None,
    from_ts: str | None = None,
    to_ts: str | None = None,
    granularity: Granularity | None = None,
    limit: int | None = None,
) -> dict[str, Any]:
    """Build the metrics request body; absent options are left out."""
    body: dict[str, Any] = {
        "view": view.value,
        "measure": measure.value,
        "aggregation": aggregation.value,
    }
    if dimensions:
        body["dimensions"] = [{"field": d} for d in dimensions]
    if from_ts:
        body["fromTimestamp"] = from_ts
    if to_ts:
        body["toTimestamp"] = to_ts
    if granularity:
        body["granularity"] = granularity.value
    if limit is not None:
        body["limit"] = limit
    return body


@app.command()
@error_handler
def query(
    view: Annotated[MetricsView, typer.Option("--view", help="View to query")] = MetricsView.traces,
    measure: Annotated[Measure, typer.Option("--measure", "-m", help="Measure to aggregate")] = Measure.count,
    aggregation: Annotated[
        Aggregation, typer.Option("--aggregation", "-a", help="Aggregation function"),
    ] = Aggregation.count,
    dimensions: Annotated[
        list[str] | None,
        typer.Option("--dimension", "-d", help="Group by field (repeatable)"),
    ] = None,
    from_ts: FromOpt = None,
    to_ts: ToOpt = None,
    granularity: Annotated[
        Granularity | None, typer.Option("--granularity", "-g", help="Time bucket size"),
    ] = None,
    limit: Annotated[int | None, typer.Option("--limit", "-l", min=1, help="Maximum rows")] = None,
    fmt: FormatOpt = None,
    output_path: OutputOpt = None,
    profile: ProfileOpt = None,
    public_key: PublicKeyOpt = None,
    secret_key: SecretKeyOpt = None,
    host: HostOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Query metrics with aggregations."""
    config = make_config(
        profile, host, public_key, secret_key,
        fmt=fmt, output_path=output_path, verbose=verbose,
    )
    body = build_query(view, measure, aggregation, dimensions, from_ts, to_ts, granularity, limit)
    with make_client(config) as client:
        result: MetricsResult = client.post("/metrics", json=body, model=MetricsResult)
    output(result.data, config.output_format, title="Metrics", output_path=config.output_path)
