"""Prompt management models."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from langfuse_cli.models.common import Record


class ChatMessage(Record):
    """One message of a chat prompt."""

    role: str
    content: str


class PromptMeta(Record):
    """Prompt summary as returned by the prompt listing."""

    name: str
    versions: list[int] = Field(default_factory=list)
    labels: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    lastUpdatedAt: str | None = None


class Prompt(Record):
    """A single prompt version. ``prompt`` is text or a list of chat messages."""

    name: str
    version: int
    type: str | None = None
    prompt: str | list[ChatMessage]
    config: Any = None
    labels: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    commitMessage: str | None = None
    createdAt: str | None = None
    updatedAt: str | None = None
