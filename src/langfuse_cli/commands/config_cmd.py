"""Config commands — manage credential profiles."""

from __future__ import annotations

import os
from typing import Annotated

import typer
from rich.prompt import Confirm, Prompt

from langfuse_cli.client.api import LangfuseClient
from langfuse_cli.client.errors import ConfigInvalidError, err_console, error_handler
from langfuse_cli.commands._common import FormatOpt, VerboseOpt, get_store
from langfuse_cli.config.constants import (
    DEFAULT_HOST,
    DEFAULT_PROFILE,
    ENV_HOST,
    ENV_PUBLIC_KEY,
    ENV_SECRET_KEY,
)
from langfuse_cli.config.models import OutputFormat, StoredProfile
from langfuse_cli.config.resolver import resolve_config
from langfuse_cli.config.store import MemoryStore, ProfileStore, mask_secret
from langfuse_cli.output.formatter import output
from langfuse_cli.utils.log import configure_logging

app = typer.Typer(name="config", help="Manage credential profiles.", no_args_is_help=True)
console = err_console

ProfileNameOpt = Annotated[str, typer.Option("--profile", help="Profile name")]


def _get_store() -> ProfileStore:
    return get_store()


def _check_connection(profile: StoredProfile) -> None:
    """Raise the classified error if *profile* cannot reach the API."""
    config = resolve_config(
        MemoryStore({DEFAULT_PROFILE: profile}), environ={},
    )
    console.print(f"Testing connection to [bold]{config.host}[/]...")
    with LangfuseClient(config) as client:
        client.test_connection()
    console.print("[green]Connection successful.[/]")


@app.command()
@error_handler
def setup(
    profile: ProfileNameOpt = DEFAULT_PROFILE,
    non_interactive: Annotated[
        bool,
        typer.Option("--non-interactive", help="Read credentials from environment variables"),
    ] = False,
    verbose: VerboseOpt = False,
) -> None:
    """Set up a profile, interactively or from LANGFUSE_* environment variables."""
    configure_logging(verbose)
    store = _get_store()
    existing = store.get_profile(profile) or StoredProfile()

    if non_interactive:
        host = os.environ.get(ENV_HOST) or existing.host or DEFAULT_HOST
        public_key = os.environ.get(ENV_PUBLIC_KEY) or ""
        secret_key = os.environ.get(ENV_SECRET_KEY) or ""
        if not (public_key and secret_key):
            raise ConfigInvalidError(
                f"{ENV_PUBLIC_KEY} and {ENV_SECRET_KEY} must be set for --non-interactive setup."
            )
    else:
        console.print("[bold]Langfuse CLI Setup[/]\n")
        host = Prompt.ask("Langfuse host", default=existing.host or DEFAULT_HOST, console=console)
        public_key = Prompt.ask(
            "Public key (pk-lf-...)", default=existing.public_key, console=console,
        )
        secret_key = Prompt.ask(
            "Secret key (sk-lf-...)", password=True, default=existing.secret_key, console=console,
        )

    candidate = StoredProfile(
        host=host.rstrip("/"), public_key=public_key, secret_key=secret_key,
    )
    _check_connection(candidate)
    store.set_profile(
        profile,
        host=candidate.host,
        public_key=candidate.public_key,
        secret_key=candidate.secret_key,
    )
    console.print(f"[green]Profile '{profile}' saved.[/]")


@app.command("set")
@error_handler
def set_profile(
    profile: ProfileNameOpt = DEFAULT_PROFILE,
    public_key: Annotated[str | None, typer.Option("--public-key", help="Langfuse public key")] = None,
    secret_key: Annotated[str | None, typer.Option("--secret-key", help="Langfuse secret key")] = None,
    host: Annotated[str | None, typer.Option("--host", help="Langfuse host URL")] = None,
    verbose: VerboseOpt = False,
) -> None:
    """Update fields of a profile; fields not given keep their stored values."""
    configure_logging(verbose)
    if public_key is None and secret_key is None and host is None:
        raise ValueError("Nothing to set. Pass --public-key, --secret-key or --host.")
    store = _get_store()
    existing = store.get_profile(profile) or StoredProfile()
    candidate = existing.model_copy(
        update={
            key: value
            for key, value in (
                ("host", host.rstrip("/") if host else None),
                ("public_key", public_key),
                ("secret_key", secret_key),
            )
            if value is not None
        }
    )
    _check_connection(candidate)
    store.set_profile(
        profile,
        host=candidate.host,
        public_key=candidate.public_key,
        secret_key=candidate.secret_key,
    )
    console.print(f"[green]Profile '{profile}' updated.[/]")


@app.command()
@error_handler
def show(
    profile: ProfileNameOpt = DEFAULT_PROFILE,
    fmt: FormatOpt = None,
) -> None:
    """Show a profile with its keys masked."""
    stored = _get_store().get_profile(profile)
    if stored is None:
        console.print(f"[red]Profile '{profile}' not found.[/]")
        raise typer.Exit(1)

    data = {
        "profile": profile,
        "host": stored.host or DEFAULT_HOST,
        "public_key": stored.public_key or "",
        "secret_key": mask_secret(stored.secret_key) if stored.secret_key else "",
    }
    output(
        data, fmt or OutputFormat.table,
        columns=["profile", "host", "public_key", "secret_key"], title=f"Profile: {profile}",
    )


@app.command("list")
@error_handler
def list_profiles(fmt: FormatOpt = None) -> None:
    """List all configured profiles."""
    profiles = _get_store().load()
    if not profiles:
        console.print("[yellow]No profiles configured. Run 'lf config setup' to get started.[/]")
        return

    rows = [
        {"profile": name, "host": p.host or DEFAULT_HOST, "has_keys": bool(p.public_key and p.secret_key)}
        for name, p in sorted(profiles.items())
    ]
    output(rows, fmt or OutputFormat.table, columns=["profile", "host", "has_keys"], title="Profiles")


@app.command()
@error_handler
def remove(
    name: Annotated[str, typer.Argument(help="Profile name to remove")],
    force: Annotated[bool, typer.Option("--force", help="Skip confirmation")] = False,
) -> None:
    """Remove a profile."""
    store = _get_store()
    if store.get_profile(name) is None:
        console.print(f"[red]Profile '{name}' not found.[/]")
        raise typer.Exit(1)

    if not force:
        if not Confirm.ask(f"Remove profile '{name}'?", console=console):
            console.print("Cancelled.")
            return

    store.remove_profile(name)
    console.print(f"[green]Profile '{name}' removed.[/]")
