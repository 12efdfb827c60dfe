"""Root Typer app — global options and command group registration."""

from __future__ import annotations

from typing import Optional

import typer
from dotenv import load_dotenv

from langfuse_cli import __version__
from langfuse_cli.commands import (
    config_cmd,
    datasets,
    metrics,
    observations,
    prompts,
    scores,
    sessions,
    traces,
)

app = typer.Typer(
    name="lf",
    help="Command-line client for the Langfuse observability API.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool) -> None:
    if value:
        print(f"lf {__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Optional[bool] = typer.Option(
        None, "--version", "-V", callback=version_callback, is_eager=True, help="Show version and exit."
    ),
) -> None:
    """Langfuse CLI — query traces, sessions, scores, prompts, and datasets."""


# Register command groups
app.add_typer(config_cmd.app, name="config")
app.add_typer(traces.app, name="traces")
app.add_typer(sessions.app, name="sessions")
app.add_typer(observations.app, name="observations")
app.add_typer(scores.app, name="scores")
app.add_typer(metrics.app, name="metrics")
app.add_typer(prompts.app, name="prompts")
app.add_typer(datasets.app, name="datasets")


def main() -> None:
    load_dotenv(override=False)
    app()
