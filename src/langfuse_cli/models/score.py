"""Score and metrics models."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from langfuse_cli.models.common import Record


class Score(Record):
    """An evaluation score attached to a trace, observation, or session."""

    id: str
    traceId: str | None = None
    observationId: str | None = None
    sessionId: str | None = None
    name: str | None = None
    value: Any = None
    source: str | None = None
    comment: str | None = None
    timestamp: str | None = None
    dataType: str | None = None
    stringValue: str | None = None


class CreatedScore(Record):
    """Response to a score creation request."""

    id: str


class MetricsResult(BaseModel):
    """Metrics query result rows."""

    data: list[dict[str, Any]] = Field(default_factory=list)
