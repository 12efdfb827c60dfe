"""Default paths, environment variable names, and constants."""

from __future__ import annotations

import platformdirs

APP_NAME = "langfuse-cli"

CONFIG_DIR = platformdirs.user_config_path(APP_NAME)
CONFIG_FILE = CONFIG_DIR / "config.toml"

# Environment variable names
ENV_HOST = "LANGFUSE_HOST"
ENV_PUBLIC_KEY = "LANGFUSE_PUBLIC_KEY"
ENV_SECRET_KEY = "LANGFUSE_SECRET_KEY"
ENV_PROFILE = "LANGFUSE_PROFILE"
ENV_CONFIG_FILE = "LANGFUSE_CONFIG_FILE"

DEFAULT_PROFILE = "default"
DEFAULT_HOST = "https://cloud.langfuse.com"

# API defaults
API_BASE = "/api/public"
CONNECT_TIMEOUT = 10.0
REQUEST_TIMEOUT = 30.0
MAX_PAGE_SIZE = 100
DEFAULT_LIMIT = 50
