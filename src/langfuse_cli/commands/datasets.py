"""Dataset commands — datasets, their items, and evaluation runs."""

from __future__ import annotations

from typing import Annotated, Any

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
    parse_json,
    segment,
)
from langfuse_cli.config.models import OutputFormat
from langfuse_cli.models import Dataset, DatasetItem, DatasetRun
from langfuse_cli.output.formatter import output

app = typer.Typer(name="datasets", help="Manage datasets.", no_args_is_help=True)

DATASET_COLUMNS = ["name", "description", "createdAt", "updatedAt"]
ITEM_COLUMNS = ["id", "status", "sourceTraceId", "createdAt"]
RUN_COLUMNS = ["name", "description", "createdAt"]

MetadataOpt = Annotated[
    str | None, typer.Option("--metadata", help="Metadata as a JSON string"),
]


@app.command("list")
@error_handler
def list_datasets(
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
    """List datasets."""
    config = make_config(
        profile, host, public_key, secret_key,
        fmt=fmt, limit=limit, page=page, output_path=output_path, verbose=verbose,
    )
    with make_client(config) as client:
        datasets = client.list_all(
            "/v2/datasets", model=Dataset, limit=config.page_limit, page=config.page_number,
        )
    output(
        datasets, config.output_format,
        columns=DATASET_COLUMNS, title="Datasets", output_path=config.output_path,
    )


@app.command()
@error_handler
def get(
    name: Annotated[str, typer.Argument(help="Dataset name")],
    fmt: FormatOpt = None,
    output_path: OutputOpt = None,
    profile: ProfileOpt = None,
    public_key: PublicKeyOpt = None,
    secret_key: SecretKeyOpt = None,
    host: HostOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Get a dataset by name."""
    config = make_config(
        profile, host, public_key, secret_key,
        fmt=fmt, output_path=output_path, verbose=verbose,
    )
    with make_client(config) as client:
        dataset = client.get(f"/v2/datasets/{segment(name)}", model=Dataset)
    output(dataset, config.output_format, title=f"Dataset: {name}", output_path=config.output_path)


@app.command()
@error_handler
def create(
    name: Annotated[str, typer.Argument(help="Dataset name")],
    description: Annotated[
        str | None, typer.Option("--description", "-d", help="Dataset description"),
    ] = None,
    metadata: MetadataOpt = None,
    fmt: FormatOpt = None,
    output_path: OutputOpt = None,
    profile: ProfileOpt = None,
    public_key: PublicKeyOpt = None,
    secret_key: SecretKeyOpt = None,
    host: HostOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Create a dataset."""
    config = make_config(
        profile, host, public_key, secret_key,
        fmt=fmt or OutputFormat.json, output_path=output_path, verbose=verbose,
    )
    body: dict[str, Any] = {"name": name}
    if description:
        body["description"] = description
    meta = parse_json(metadata, "--metadata")
    if meta is not None:
        body["metadata"] = meta
    with make_client(config) as client:
        dataset = client.post("/v2/datasets", json=body, model=Dataset)
    output(dataset, config.output_format, title=f"Dataset: {name}", output_path=config.output_path)


@app.command()
@error_handler
def items(
    name: Annotated[str, typer.Argument(help="Dataset name")],
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
    """List the items of a dataset."""
    config = make_config(
        profile, host, public_key, secret_key,
        fmt=fmt, limit=limit, page=page, output_path=output_path, verbose=verbose,
    )
    with make_client(config) as client:
        dataset_items = client.list_all(
            "/dataset-items",
            {"datasetName": name},
            model=DatasetItem,
            limit=config.page_limit,
            page=config.page_number,
        )
    output(
        dataset_items, config.output_format,
        columns=ITEM_COLUMNS, title=f"Items: {name}", output_path=config.output_path,
    )


@app.command("item-get")
@error_handler
def item_get(
    item_id: Annotated[str, typer.Argument(help="Dataset item ID")],
    fmt: FormatOpt = None,
    output_path: OutputOpt = None,
    profile: ProfileOpt = None,
    public_key: PublicKeyOpt = None,
    secret_key: SecretKeyOpt = None,
    host: HostOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Get a dataset item by ID."""
    config = make_config(
        profile, host, public_key, secret_key,
        fmt=fmt, output_path=output_path, verbose=verbose,
    )
    with make_client(config) as client:
        item = client.get(f"/dataset-items/{segment(item_id)}", model=DatasetItem)
    output(item, config.output_format, title=f"Item: {item_id}", output_path=config.output_path)


@app.command("item-create")
@error_handler
def item_create(
    name: Annotated[str, typer.Argument(help="Dataset name")],
    input_json: Annotated[str, typer.Option("--input", help="Item input as JSON")],
    expected_json: Annotated[
        str | None, typer.Option("--expected-output", help="Expected output as JSON"),
    ] = None,
    metadata: MetadataOpt = None,
    trace_id: Annotated[
        str | None, typer.Option("--source-trace-id", help="Trace this item was taken from"),
    ] = None,
    observation_id: Annotated[
        str | None,
        typer.Option("--source-observation-id", help="Observation this item was taken from"),
    ] = None,
    fmt: FormatOpt = None,
    output_path: OutputOpt = None,
    profile: ProfileOpt = None,
    public_key: PublicKeyOpt = None,
    secret_key: SecretKeyOpt = None,
    host: HostOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Add an item to a dataset."""
    config = make_config(
        profile, host, public_key, secret_key,
        fmt=fmt or OutputFormat.json, output_path=output_path, verbose=verbose,
    )
    body: dict[str, Any] = {"datasetName": name, "input": parse_json(input_json, "--input")}
    optional = {
        "expectedOutput": parse_json(expected_json, "--expected-output"),
        "metadata": parse_json(metadata, "--metadata"),
        "sourceTraceId": trace_id,
        "sourceObservationId": observation_id,
    }
    body.update({k: v for k, v in optional.items() if v is not None})
    with make_client(config) as client:
        item = client.post("/dataset-items", json=body, model=DatasetItem)
    output(item, config.output_format, title=f"Item: {item.id}", output_path=config.output_path)


@app.command()
@error_handler
def runs(
    name: Annotated[str, typer.Argument(help="Dataset name")],
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
    """List evaluation runs of a dataset."""
    config = make_config(
        profile, host, public_key, secret_key,
        fmt=fmt, limit=limit, page=page, output_path=output_path, verbose=verbose,
    )
    with make_client(config) as client:
        dataset_runs = client.list_all(
            f"/datasets/{segment(name)}/runs",
            model=DatasetRun,
            limit=config.page_limit,
            page=config.page_number,
        )
    output(
        dataset_runs, config.output_format,
        columns=RUN_COLUMNS, title=f"Runs: {name}", output_path=config.output_path,
    )


@app.command("run-get")
@error_handler
def run_get(
    name: Annotated[str, typer.Argument(help="Dataset name")],
    run_name: Annotated[str, typer.Argument(help="Run name")],
    fmt: FormatOpt = None,
    output_path: OutputOpt = None,
    profile: ProfileOpt = None,
    public_key: PublicKeyOpt = None,
    secret_key: SecretKeyOpt = None,
    host: HostOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Get a dataset run, including its run items."""
    config = make_config(
        profile, host, public_key, secret_key,
        fmt=fmt, output_path=output_path, verbose=verbose,
    )
    with make_client(config) as client:
        run = client.get(f"/datasets/{segment(name)}/runs/{segment(run_name)}", model=DatasetRun)
    output(run, config.output_format, title=f"Run: {run_name}", output_path=config.output_path)
