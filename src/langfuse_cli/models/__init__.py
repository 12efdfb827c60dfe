"""Pydantic data models for the Langfuse public API."""

from langfuse_cli.models.common import Page, PageMeta, Record
from langfuse_cli.models.dataset import Dataset, DatasetItem, DatasetRun
from langfuse_cli.models.prompt import ChatMessage, Prompt, PromptMeta
from langfuse_cli.models.score import CreatedScore, MetricsResult, Score
from langfuse_cli.models.trace import Observation, Session, Trace, Usage

__all__ = [
    "ChatMessage",
    "CreatedScore",
    "Dataset",
    "DatasetItem",
    "DatasetRun",
    "MetricsResult",
    "Observation",
    "Page",
    "PageMeta",
    "Prompt",
    "PromptMeta",
    "Record",
    "Score",
    "Session",
    "Trace",
    "Usage",
]
