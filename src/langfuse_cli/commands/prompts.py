"""Prompt commands — list, get, create, label, delete.

Prompt management lives under the v2 API.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any

import typer
from pydantic import TypeAdapter, ValidationError

from langfuse_cli.client.errors import err_console, error_handler
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
    read_content,
    segment,
)
from langfuse_cli.config.models import OutputFormat
from langfuse_cli.models import ChatMessage, Prompt, PromptMeta
from langfuse_cli.output.formatter import output, output_raw

app = typer.Typer(name="prompts", help="Manage prompts.", no_args_is_help=True)

PROMPT_COLUMNS = ["name", "versions", "labels", "tags", "lastUpdatedAt"]

FileOpt = Annotated[
    Path | None,
    typer.Option("--file", exists=True, dir_okay=False, help="Read content from file (stdin if omitted)"),
]
MessageOpt = Annotated[
    str | None, typer.Option("--message", "-m", help="Commit message for this version"),
]
LabelsOpt = Annotated[
    list[str] | None, typer.Option("--label", help="Label to apply (repeatable)"),
]
TagsOpt = Annotated[
    list[str] | None, typer.Option("--tag", help="Tag to apply (repeatable)"),
]
ConfigJsonOpt = Annotated[
    str | None, typer.Option("--config", help="Model config as a JSON string"),
]

_chat_messages = TypeAdapter(list[ChatMessage])


def _prompt_body(
    prompt_type: str,
    name: str,
    prompt: Any,
    labels: list[str] | None,
    tags: list[str] | None,
    config_json: str | None,
    message: str | None,
) -> dict[str, Any]:
    body: dict[str, Any] = {
        "type": prompt_type,
        "name": name,
        "prompt": prompt,
        "labels": labels or [],
        "tags": tags or [],
    }
    model_config = parse_json(config_json, "--config")
    if model_config is not None:
        body["config"] = model_config
    if message:
        body["commitMessage"] = message
    return body


@app.command("list")
@error_handler
def list_prompts(
    name: Annotated[str | None, typer.Option("--name", "-n", help="Filter by prompt name")] = None,
    label: Annotated[str | None, typer.Option("--label", help="Filter by label")] = None,
    tag: Annotated[str | None, typer.Option("--tag", help="Filter by tag")] = None,
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
    """List prompts with optional filters."""
    config = make_config(
        profile, host, public_key, secret_key,
        fmt=fmt, limit=limit, page=page, output_path=output_path, verbose=verbose,
    )
    with make_client(config) as client:
        prompts = client.list_all(
            "/v2/prompts",
            {"name": name, "label": label, "tag": tag},
            model=PromptMeta,
            limit=config.page_limit,
            page=config.page_number,
        )
    output(
        prompts, config.output_format,
        columns=PROMPT_COLUMNS, title="Prompts", output_path=config.output_path,
    )


@app.command()
@error_handler
def get(
    name: Annotated[str, typer.Argument(help="Prompt name")],
    version: Annotated[int | None, typer.Option("--version", help="Specific version number")] = None,
    label: Annotated[
        str | None, typer.Option("--label", help="Fetch by label (server default: production)"),
    ] = None,
    raw: Annotated[bool, typer.Option("--raw", help="Output prompt content only, for piping")] = False,
    fmt: FormatOpt = None,
    output_path: OutputOpt = None,
    profile: ProfileOpt = None,
    public_key: PublicKeyOpt = None,
    secret_key: SecretKeyOpt = None,
    host: HostOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Get a prompt by name, optionally pinned to a version or label."""
    config = make_config(
        profile, host, public_key, secret_key,
        fmt=fmt or OutputFormat.json, output_path=output_path, verbose=verbose,
    )
    params = {k: v for k, v in (("version", version), ("label", label)) if v is not None}
    with make_client(config) as client:
        prompt: Prompt = client.get(
            f"/v2/prompts/{segment(name)}", params=params or None, model=Prompt,
        )
    if raw:
        if isinstance(prompt.prompt, str):
            content = prompt.prompt
        else:
            content = json.dumps(
                [m.model_dump(mode="json") for m in prompt.prompt], indent=2, ensure_ascii=False,
            )
        output_raw(content, config.output_path)
        return
    output(prompt, config.output_format, title=f"Prompt: {name}", output_path=config.output_path)


@app.command("create-text")
@error_handler
def create_text(
    name: Annotated[str, typer.Argument(help="Prompt name")],
    file: FileOpt = None,
    message: MessageOpt = None,
    labels: LabelsOpt = None,
    tags: TagsOpt = None,
    config_json: ConfigJsonOpt = None,
    fmt: FormatOpt = None,
    output_path: OutputOpt = None,
    profile: ProfileOpt = None,
    public_key: PublicKeyOpt = None,
    secret_key: SecretKeyOpt = None,
    host: HostOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Create a new version of a text prompt."""
    config = make_config(
        profile, host, public_key, secret_key,
        fmt=fmt, output_path=output_path, verbose=verbose,
    )
    content = read_content(file)
    body = _prompt_body("text", name, content, labels, tags, config_json, message)
    with make_client(config) as client:
        prompt = client.post("/v2/prompts", json=body, model=Prompt)
    output(prompt, config.output_format, title=f"Prompt: {name}", output_path=config.output_path)


@app.command("create-chat")
@error_handler
def create_chat(
    name: Annotated[str, typer.Argument(help="Prompt name")],
    file: FileOpt = None,
    message: MessageOpt = None,
    labels: LabelsOpt = None,
    tags: TagsOpt = None,
    config_json: ConfigJsonOpt = None,
    fmt: FormatOpt = None,
    output_path: OutputOpt = None,
    profile: ProfileOpt = None,
    public_key: PublicKeyOpt = None,
    secret_key: SecretKeyOpt = None,
    host: HostOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Create a new version of a chat prompt from a JSON list of messages."""
    config = make_config(
        profile, host, public_key, secret_key,
        fmt=fmt, output_path=output_path, verbose=verbose,
    )
    content = read_content(file)
    try:
        messages = _chat_messages.validate_json(content)
    except ValidationError as exc:
        raise ValueError(f"Chat messages must be a JSON list of {{role, content}} objects: {exc}") from exc
    body = _prompt_body(
        "chat", name, [m.model_dump() for m in messages], labels, tags, config_json, message,
    )
    with make_client(config) as client:
        prompt = client.post("/v2/prompts", json=body, model=Prompt)
    output(prompt, config.output_format, title=f"Prompt: {name}", output_path=config.output_path)


@app.command()
@error_handler
def label(
    name: Annotated[str, typer.Argument(help="Prompt name")],
    version: Annotated[int, typer.Argument(help="Version number")],
    labels: Annotated[list[str], typer.Argument(help="Labels to set on this version")],
    fmt: FormatOpt = None,
    output_path: OutputOpt = None,
    profile: ProfileOpt = None,
    public_key: PublicKeyOpt = None,
    secret_key: SecretKeyOpt = None,
    host: HostOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Set labels on a prompt version."""
    config = make_config(
        profile, host, public_key, secret_key,
        fmt=fmt, output_path=output_path, verbose=verbose,
    )
    with make_client(config) as client:
        prompt = client.request(
            "PATCH",
            f"/v2/prompts/{segment(name)}/versions/{version}",
            json={"newLabels": labels},
            model=Prompt,
        )
    output(prompt, config.output_format, title=f"Prompt: {name}", output_path=config.output_path)


@app.command()
@error_handler
def delete(
    name: Annotated[str, typer.Argument(help="Prompt name")],
    version: Annotated[int | None, typer.Option("--version", help="Delete this version only")] = None,
    label: Annotated[
        str | None, typer.Option("--label", help="Delete versions with this label only"),
    ] = None,
    force: Annotated[bool, typer.Option("--force", help="Skip confirmation")] = False,
    profile: ProfileOpt = None,
    public_key: PublicKeyOpt = None,
    secret_key: SecretKeyOpt = None,
    host: HostOpt = None,
    verbose: VerboseOpt = False,
) -> None:
    """Delete a prompt, or only some of its versions."""
    config = make_config(profile, host, public_key, secret_key, verbose=verbose)
    if not force:
        typer.confirm(f"Delete prompt '{name}'?", abort=True)
    params = {k: v for k, v in (("version", version), ("label", label)) if v is not None}
    with make_client(config) as client:
        client.request("DELETE", f"/v2/prompts/{segment(name)}", params=params or None)
    err_console.print(f"[green]Prompt '{name}' deleted.[/]")
