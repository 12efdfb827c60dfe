"""Integration tests for dataset commands."""

from __future__ import annotations

import json

import httpx
import respx
from conftest import BASE, page
from typer.testing import CliRunner

from langfuse_cli.app import app

runner = CliRunner()


class TestDatasetCommands:
    @respx.mock
    def test_list(self, creds):
        respx.get(f"{BASE}/v2/datasets").mock(
            return_value=httpx.Response(200, json=page(
                [{"name": "qa-golden", "description": "Golden set"}], total_pages=1,
            ))
        )
        result = runner.invoke(app, ["datasets", "list", *creds])
        assert result.exit_code == 0
        assert "qa-golden" in result.output

    @respx.mock
    def test_get(self, creds):
        respx.get(f"{BASE}/v2/datasets/qa-golden").mock(
            return_value=httpx.Response(200, json={"id": "ds-1", "name": "qa-golden"})
        )
        result = runner.invoke(app, ["datasets", "get", "qa-golden", "-f", "json", *creds])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["id"] == "ds-1"

    @respx.mock
    def test_create(self, creds):
        route = respx.post(f"{BASE}/v2/datasets").mock(
            return_value=httpx.Response(200, json={"id": "ds-1", "name": "qa-golden"})
        )
        result = runner.invoke(app, [
            "datasets", "create", "qa-golden", "-d", "Golden set",
            "--metadata", '{"owner": "eval"}', *creds,
        ])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["name"] == "qa-golden"
        assert json.loads(route.calls.last.request.content) == {
            "name": "qa-golden",
            "description": "Golden set",
            "metadata": {"owner": "eval"},
        }

    @respx.mock
    def test_items(self, creds):
        route = respx.get(f"{BASE}/dataset-items").mock(
            return_value=httpx.Response(200, json=page(
                [{"id": "it-1", "input": {"q": "2+2"}, "status": "ACTIVE"}], total_pages=1,
            ))
        )
        result = runner.invoke(app, ["datasets", "items", "qa-golden", "-f", "json", *creds])
        assert result.exit_code == 0
        assert json.loads(result.stdout)[0]["input"] == {"q": "2+2"}
        assert route.calls.last.request.url.params["datasetName"] == "qa-golden"

    @respx.mock
    def test_item_get(self, creds):
        respx.get(f"{BASE}/dataset-items/it-1").mock(
            return_value=httpx.Response(200, json={"id": "it-1", "expectedOutput": "4"})
        )
        result = runner.invoke(app, ["datasets", "item-get", "it-1", "-f", "json", *creds])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["expectedOutput"] == "4"

    @respx.mock
    def test_item_create(self, creds):
        route = respx.post(f"{BASE}/dataset-items").mock(
            return_value=httpx.Response(200, json={"id": "it-2", "datasetName": "qa-golden"})
        )
        result = runner.invoke(app, [
            "datasets", "item-create", "qa-golden",
            "--input", '{"q": "2+2"}', "--expected-output", '"4"',
            "--source-trace-id", "tr-1", *creds,
        ])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["id"] == "it-2"
        assert json.loads(route.calls.last.request.content) == {
            "datasetName": "qa-golden",
            "input": {"q": "2+2"},
            "expectedOutput": "4",
            "sourceTraceId": "tr-1",
        }

    def test_item_create_invalid_input(self, creds):
        result = runner.invoke(app, ["datasets", "item-create", "qa-golden", "--input", "nope", *creds])
        assert result.exit_code == 1
        assert "--input is not valid JSON" in result.output

    @respx.mock
    def test_runs(self, creds):
        respx.get(f"{BASE}/datasets/qa-golden/runs").mock(
            return_value=httpx.Response(200, json=page([{"name": "run-1"}], total_pages=1))
        )
        result = runner.invoke(app, ["datasets", "runs", "qa-golden", *creds])
        assert result.exit_code == 0
        assert "run-1" in result.output

    @respx.mock
    def test_run_get(self, creds):
        respx.get(f"{BASE}/datasets/qa-golden/runs/run-1").mock(
            return_value=httpx.Response(200, json={
                "name": "run-1", "datasetRunItems": [{"id": "ri-1", "traceId": "tr-1"}],
            })
        )
        result = runner.invoke(app, ["datasets", "run-get", "qa-golden", "run-1", "-f", "json", *creds])
        assert result.exit_code == 0
        assert json.loads(result.stdout)["datasetRunItems"][0]["traceId"] == "tr-1"

    @respx.mock
    def test_server_error(self, creds):
        respx.get(f"{BASE}/v2/datasets").mock(return_value=httpx.Response(500, text="boom"))
        result = runner.invoke(app, ["datasets", "list", *creds])
        assert result.exit_code == 11
        assert "API returned 500" in result.output
