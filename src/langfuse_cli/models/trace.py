"""Trace, observation, and session models."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from langfuse_cli.models.common import Record


class Usage(Record):
    """Token and cost usage for an observation."""

    input: int | None = None
    output: int | None = None
    total: int | None = None
    unit: str | None = None
    inputCost: float | None = None
    outputCost: float | None = None
    totalCost: float | None = None


class Observation(Record):
    """A generation, span, or event within a trace."""

    id: str
    traceId: str | None = None
    type: str | None = None
    name: str | None = None
    startTime: str | None = None
    endTime: str | None = None
    model: str | None = None
    modelParameters: Any = None
    input: Any = None
    output: Any = None
    metadata: Any = None
    usage: Usage | None = None
    level: str | None = None
    statusMessage: str | None = None
    parentObservationId: str | None = None
    completionStartTime: str | None = None


class Trace(Record):
    """A trace."""

    id: str
    name: str | None = None
    userId: str | None = None
    sessionId: str | None = None
    release: str | None = None
    version: str | None = None
    metadata: Any = None
    tags: list[str] | None = None
    input: Any = None
    output: Any = None
    timestamp: str | None = None
    observations: list[Any] = Field(default_factory=list)


class Session(Record):
    """A session grouping related traces."""

    id: str
    createdAt: str | None = None
    projectId: str | None = None
    traces: list[Trace] = Field(default_factory=list)
