"""Integration tests for prompt commands."""

from __future__ import annotations

import json
from pathlib import Path

import httpx
import respx
from conftest import BASE, page
from typer.testing import CliRunner

from langfuse_cli.app import app

runner = CliRunner()


class TestPromptCommands:
    @respx.mock
    def test_list(self, creds):
        route = respx.get(f"{BASE}/v2/prompts").mock(
            return_value=httpx.Response(200, json=page(
                [{"name": "greeting", "versions": [1, 2, 3], "labels": ["production"]}],
                total_pages=1,
            ))
        )
        result = runner.invoke(app, ["prompts", "list", "--label", "production", *creds])
        assert result.exit_code == 0
        assert "greeting" in result.output
        assert route.calls.last.request.url.params["label"] == "production"

    @respx.mock
    def test_get_defaults_to_json(self, creds, sample_prompt):
        respx.get(f"{BASE}/v2/prompts/greeting").mock(
            return_value=httpx.Response(200, json=sample_prompt)
        )
        result = runner.invoke(app, ["prompts", "get", "greeting", *creds])
        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["version"] == 3
        assert data["prompt"] == "Hello {{name}}!"

    @respx.mock
    def test_get_version_and_label(self, creds, sample_prompt):
        route = respx.get(f"{BASE}/v2/prompts/greeting").mock(
            return_value=httpx.Response(200, json=sample_prompt)
        )
        result = runner.invoke(
            app, ["prompts", "get", "greeting", "--version", "3", "--label", "staging", *creds],
        )
        assert result.exit_code == 0
        params = route.calls.last.request.url.params
        assert params["version"] == "3"
        assert params["label"] == "staging"

    @respx.mock
    def test_get_raw_text(self, creds, sample_prompt):
        respx.get(f"{BASE}/v2/prompts/greeting").mock(
            return_value=httpx.Response(200, json=sample_prompt)
        )
        result = runner.invoke(app, ["prompts", "get", "greeting", "--raw", *creds])
        assert result.exit_code == 0
        assert result.stdout == "Hello {{name}}!\n"

    @respx.mock
    def test_get_raw_chat(self, creds):
        respx.get(f"{BASE}/v2/prompts/assistant").mock(
            return_value=httpx.Response(200, json={
                "name": "assistant",
                "version": 1,
                "type": "chat",
                "prompt": [{"role": "system", "content": "Be brief."}],
            })
        )
        result = runner.invoke(app, ["prompts", "get", "assistant", "--raw", *creds])
        assert result.exit_code == 0
        assert json.loads(result.stdout) == [{"role": "system", "content": "Be brief."}]

    @respx.mock
    def test_create_text_from_file(self, creds, sample_prompt, tmp_path: Path):
        path = tmp_path / "greeting.txt"
        path.write_text("Hello {{name}}!", encoding="utf-8")
        route = respx.post(f"{BASE}/v2/prompts").mock(
            return_value=httpx.Response(200, json=sample_prompt)
        )
        result = runner.invoke(app, [
            "prompts", "create-text", "greeting", "--file", str(path),
            "--label", "production", "--tag", "onboarding", "-m", "first",
            "--config", '{"temperature": 0.2}', "-f", "json", *creds,
        ])
        assert result.exit_code == 0
        body = json.loads(route.calls.last.request.content)
        assert body == {
            "type": "text",
            "name": "greeting",
            "prompt": "Hello {{name}}!",
            "labels": ["production"],
            "tags": ["onboarding"],
            "config": {"temperature": 0.2},
            "commitMessage": "first",
        }

    @respx.mock
    def test_create_text_from_stdin(self, creds, sample_prompt):
        route = respx.post(f"{BASE}/v2/prompts").mock(
            return_value=httpx.Response(200, json=sample_prompt)
        )
        result = runner.invoke(
            app, ["prompts", "create-text", "greeting", *creds], input="Hi there",
        )
        assert result.exit_code == 0
        assert json.loads(route.calls.last.request.content)["prompt"] == "Hi there"

    def test_create_text_invalid_config(self, creds):
        result = runner.invoke(
            app, ["prompts", "create-text", "greeting", "--config", "{bad", *creds], input="x",
        )
        assert result.exit_code == 1
        assert "--config is not valid JSON" in result.output

    @respx.mock
    def test_create_chat(self, creds):
        messages = [{"role": "system", "content": "Be brief."}, {"role": "user", "content": "{{q}}"}]
        route = respx.post(f"{BASE}/v2/prompts").mock(
            return_value=httpx.Response(200, json={
                "name": "assistant", "version": 1, "type": "chat", "prompt": messages,
            })
        )
        result = runner.invoke(
            app, ["prompts", "create-chat", "assistant", "-f", "json", *creds],
            input=json.dumps(messages),
        )
        assert result.exit_code == 0
        body = json.loads(route.calls.last.request.content)
        assert body["type"] == "chat"
        assert body["prompt"] == messages

    def test_create_chat_rejects_bad_messages(self, creds):
        result = runner.invoke(
            app, ["prompts", "create-chat", "assistant", *creds], input='{"role": "user"}',
        )
        assert result.exit_code == 1
        assert "Chat messages" in result.output

    @respx.mock
    def test_label(self, creds, sample_prompt):
        route = respx.patch(f"{BASE}/v2/prompts/greeting/versions/3").mock(
            return_value=httpx.Response(200, json=sample_prompt)
        )
        result = runner.invoke(
            app, ["prompts", "label", "greeting", "3", "production", "latest", "-f", "json", *creds],
        )
        assert result.exit_code == 0
        assert json.loads(route.calls.last.request.content) == {"newLabels": ["production", "latest"]}

    @respx.mock
    def test_delete_version(self, creds):
        route = respx.delete(f"{BASE}/v2/prompts/greeting").mock(
            return_value=httpx.Response(204)
        )
        result = runner.invoke(
            app, ["prompts", "delete", "greeting", "--version", "2", "--force", *creds],
        )
        assert result.exit_code == 0
        assert "deleted" in result.output
        assert route.calls.last.request.url.params["version"] == "2"

    def test_delete_cancelled(self, creds):
        result = runner.invoke(app, ["prompts", "delete", "greeting", *creds], input="n\n")
        assert result.exit_code == 1
