"""Integration tests for score and metrics commands."""

from __future__ import annotations

import json

import httpx
import respx
from conftest import BASE, page
from typer.testing import CliRunner

from langfuse_cli.app import app

runner = CliRunner()


class TestScoreCommands:
    @respx.mock
    def test_create(self, creds):
        route = respx.post(f"{BASE}/scores").mock(
            return_value=httpx.Response(200, json={"id": "sc-1"})
        )
        result = runner.invoke(app, [
            "scores", "create", "--name", "accuracy", "--value", "0.9",
            "--trace-id", "tr-1", "--comment", "good", *creds,
        ])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == {"id": "sc-1"}
        body = json.loads(route.calls.last.request.content)
        assert body == {"name": "accuracy", "value": 0.9, "traceId": "tr-1", "comment": "good"}

    @respx.mock
    def test_create_with_data_type(self, creds):
        route = respx.post(f"{BASE}/scores").mock(
            return_value=httpx.Response(200, json={"id": "sc-2"})
        )
        result = runner.invoke(app, [
            "scores", "create", "-n", "ok", "--value", "1",
            "--session-id", "sess-1", "--data-type", "boolean", *creds,
        ])
        assert result.exit_code == 0
        body = json.loads(route.calls.last.request.content)
        assert body["dataType"] == "BOOLEAN"
        assert body["sessionId"] == "sess-1"

    def test_create_requires_target(self, creds):
        result = runner.invoke(app, ["scores", "create", "--name", "x", "--value", "1", *creds])
        assert result.exit_code == 1
        assert "--trace-id" in result.output

    @respx.mock
    def test_list(self, creds):
        route = respx.get(f"{BASE}/scores").mock(
            return_value=httpx.Response(200, json=page(
                [{"id": "sc-1", "name": "accuracy", "value": 0.9}], total_pages=1,
            ))
        )
        result = runner.invoke(app, ["scores", "list", "--name", "accuracy", "-f", "json", *creds])
        assert result.exit_code == 0
        assert json.loads(result.stdout)[0]["value"] == 0.9
        assert route.calls.last.request.url.params["name"] == "accuracy"

    @respx.mock
    def test_get(self, creds):
        respx.get(f"{BASE}/scores/sc-1").mock(
            return_value=httpx.Response(200, json={"id": "sc-1", "name": "accuracy"})
        )
        result = runner.invoke(app, ["scores", "get", "sc-1", *creds])
        assert result.exit_code == 0
        assert "sc-1" in result.output


class TestMetricsCommands:
    @respx.mock
    def test_query(self, creds):
        route = respx.post(f"{BASE}/metrics").mock(
            return_value=httpx.Response(200, json={"data": [{"name": "chat", "count_count": 12}]})
        )
        result = runner.invoke(app, [
            "metrics", "query", "--view", "observations", "-m", "totalCost", "-a", "sum",
            "-d", "name", "-g", "day", "-f", "json", *creds,
        ])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == [{"name": "chat", "count_count": 12}]
        body = json.loads(route.calls.last.request.content)
        assert body["view"] == "observations"
        assert body["measure"] == "totalCost"
        assert body["aggregation"] == "sum"
        assert body["dimensions"] == [{"field": "name"}]
        assert body["granularity"] == "day"

    @respx.mock
    def test_query_defaults(self, creds):
        route = respx.post(f"{BASE}/metrics").mock(
            return_value=httpx.Response(200, json={"data": []})
        )
        result = runner.invoke(app, ["metrics", "query", *creds])
        assert result.exit_code == 0
        assert "No data to display" in result.output
        body = json.loads(route.calls.last.request.content)
        assert body == {"view": "traces", "measure": "count", "aggregation": "count"}

    def test_invalid_measure(self, creds):
        result = runner.invoke(app, ["metrics", "query", "-m", "bogus", *creds])
        assert result.exit_code == 2
