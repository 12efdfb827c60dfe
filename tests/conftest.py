"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from langfuse_cli.config.models import EffectiveConfig
from langfuse_cli.config.store import CredentialStore

HOST = "https://lf.test"
BASE = f"{HOST}/api/public"
PK = "pk-lf-1234567890"
SK = "sk-lf-abcdefghijkl"


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the credential store at a temp file and clear LANGFUSE_* variables."""
    for var in (
        "LANGFUSE_HOST",
        "LANGFUSE_PUBLIC_KEY",
        "LANGFUSE_SECRET_KEY",
        "LANGFUSE_PROFILE",
    ):
        monkeypatch.delenv(var, raising=False)
    config_path = tmp_path / "lf" / "config.toml"
    monkeypatch.setenv("LANGFUSE_CONFIG_FILE", str(config_path))
    return config_path


@pytest.fixture
def tmp_config(isolated_env: Path) -> Path:
    """Return the temporary config file path."""
    return isolated_env


@pytest.fixture
def store(tmp_config: Path) -> CredentialStore:
    """Return a CredentialStore pointed at the temp config file."""
    return CredentialStore(config_path=tmp_config)


@pytest.fixture
def config() -> EffectiveConfig:
    """Return a valid effective config for the test host."""
    return EffectiveConfig(host=HOST, public_key=PK, secret_key=SK)


@pytest.fixture
def creds() -> list[str]:
    """CLI options carrying credentials for the test host."""
    return ["--host", HOST, "--public-key", PK, "--secret-key", SK]


@pytest.fixture
def sample_trace() -> dict:
    """Sample trace as returned by GET /traces/{id}."""
    return {
        "id": "tr-1",
        "name": "chat-completion",
        "userId": "user-1",
        "sessionId": "sess-1",
        "timestamp": "2024-05-01T10:00:00Z",
        "tags": ["prod"],
        "observations": ["obs-1", "obs-2"],
    }


@pytest.fixture
def sample_prompt() -> dict:
    """Sample text prompt version."""
    return {
        "name": "greeting",
        "version": 3,
        "type": "text",
        "prompt": "Hello {{name}}!",
        "labels": ["production"],
        "tags": [],
        "config": {"temperature": 0.2},
    }


def page(data: list[dict], *, page_no: int = 1, total_pages: int | None = None) -> dict:
    """Build a paginated response envelope."""
    meta: dict = {"page": page_no, "limit": 50, "totalItems": len(data)}
    if total_pages is not None:
        meta["totalPages"] = total_pages
    return {"data": data, "meta": meta}
