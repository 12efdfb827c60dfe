"""Dataset models."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from langfuse_cli.models.common import Record


class Dataset(Record):
    """An evaluation dataset."""

    id: str | None = None
    name: str
    description: str | None = None
    metadata: Any = None
    projectId: str | None = None
    createdAt: str | None = None
    updatedAt: str | None = None


class DatasetItem(Record):
    """One input/expected-output pair in a dataset."""

    id: str
    datasetId: str | None = None
    datasetName: str | None = None
    input: Any = None
    expectedOutput: Any = None
    metadata: Any = None
    sourceTraceId: str | None = None
    sourceObservationId: str | None = None
    status: str | None = None
    createdAt: str | None = None
    updatedAt: str | None = None


class DatasetRun(Record):
    """An evaluation run over a dataset."""

    id: str | None = None
    name: str
    description: str | None = None
    metadata: Any = None
    datasetId: str | None = None
    datasetName: str | None = None
    createdAt: str | None = None
    updatedAt: str | None = None
    datasetRunItems: list[Any] = Field(default_factory=list)
