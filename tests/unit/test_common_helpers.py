"""Tests for shared command helpers."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from langfuse_cli.commands._common import make_config, parse_json, read_content, segment
from langfuse_cli.commands.metrics import (
    Aggregation,
    Granularity,
    Measure,
    MetricsView,
    build_query,
)
from langfuse_cli.config.models import OutputFormat
from langfuse_cli.config.store import CredentialStore


class TestSegment:
    def test_plain(self):
        assert segment("tr-1") == "tr-1"

    def test_slash_and_space_quoted(self):
        assert segment("team/my prompt") == "team%2Fmy%20prompt"


class TestParseJson:
    def test_none(self):
        assert parse_json(None, "--config") is None

    def test_object(self):
        assert parse_json('{"temperature": 0.1}', "--config") == {"temperature": 0.1}

    def test_invalid_names_option(self):
        with pytest.raises(ValueError, match="--metadata is not valid JSON"):
            parse_json("{nope", "--metadata")


class TestReadContent:
    def test_from_file(self, tmp_path: Path):
        path = tmp_path / "p.txt"
        path.write_text("hello", encoding="utf-8")
        assert read_content(path) == "hello"

    def test_from_stdin(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("piped"))
        assert read_content(None) == "piped"


class TestMakeConfig:
    def test_reads_stored_profile(self, tmp_config: Path):
        CredentialStore(tmp_config).set_profile(
            "default", host="https://stored.test", public_key="pk", secret_key="sk",
        )
        config = make_config(fmt=OutputFormat.json, limit=5)
        assert config.host == "https://stored.test"
        assert config.is_valid()
        assert config.output_format is OutputFormat.json
        assert config.page_limit == 5

    def test_options_win(self, tmp_config: Path):
        CredentialStore(tmp_config).set_profile("default", public_key="pk", secret_key="sk")
        config = make_config(public_key="pk-opt")
        assert config.public_key == "pk-opt"


class TestBuildQuery:
    def test_minimal(self):
        body = build_query(MetricsView.traces, Measure.count, Aggregation.count)
        assert body == {"view": "traces", "measure": "count", "aggregation": "count"}

    def test_full(self):
        body = build_query(
            MetricsView.observations,
            Measure.total_cost,
            Aggregation.sum,
            dimensions=["name", "model"],
            from_ts="2024-01-01T00:00:00Z",
            to_ts="2024-02-01T00:00:00Z",
            granularity=Granularity.day,
            limit=10,
        )
        assert body == {
            "view": "observations",
            "measure": "totalCost",
            "aggregation": "sum",
            "dimensions": [{"field": "name"}, {"field": "model"}],
            "fromTimestamp": "2024-01-01T00:00:00Z",
            "toTimestamp": "2024-02-01T00:00:00Z",
            "granularity": "day",
            "limit": 10,
        }
