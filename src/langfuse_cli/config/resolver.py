"""Resolve the effective configuration from arguments, environment, and profiles."""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping

from langfuse_cli.config.constants import (
    DEFAULT_HOST,
    DEFAULT_LIMIT,
    DEFAULT_PROFILE,
    ENV_HOST,
    ENV_PROFILE,
    ENV_PUBLIC_KEY,
    ENV_SECRET_KEY,
)
from langfuse_cli.config.models import EffectiveConfig, OutputFormat
from langfuse_cli.config.store import ProfileStore

logger = logging.getLogger(__name__)


def _first(*candidates: str | None) -> str | None:
    """Return the first candidate that is neither ``None`` nor empty."""
    for value in candidates:
        if value:
            return value
    return None


def resolve_config(
    store: ProfileStore,
    *,
    profile: str | None = None,
    host: str | None = None,
    public_key: str | None = None,
    secret_key: str | None = None,
    output_format: OutputFormat | None = None,
    limit: int | None = None,
    page: int | None = None,
    output_path: str | None = None,
    verbose: bool = False,
    environ: Mapping[str, str] | None = None,
) -> EffectiveConfig:
    """Merge configuration tiers into one :class:`EffectiveConfig`.

    Precedence, per field: explicit arguments > environment variables >
    stored profile > built-in defaults. Only ``host`` has a default;
    unresolved credentials yield an invalid (but well-formed) config.
    """
    env = os.environ if environ is None else environ

    profile_name = _first(profile, env.get(ENV_PROFILE)) or DEFAULT_PROFILE
    stored = store.get_profile(profile_name)

    resolved_host = _first(
        host, env.get(ENV_HOST), stored.host if stored else None,
    ) or DEFAULT_HOST
    resolved_public = _first(
        public_key, env.get(ENV_PUBLIC_KEY), stored.public_key if stored else None,
    ) or ""
    resolved_secret = _first(
        secret_key, env.get(ENV_SECRET_KEY), stored.secret_key if stored else None,
    ) or ""

    logger.debug(
        "Resolved profile=%s host=%s stored_profile=%s",
        profile_name, resolved_host, stored is not None,
    )
    return EffectiveConfig(
        host=resolved_host,
        public_key=resolved_public,
        secret_key=resolved_secret,
        active_profile=profile_name,
        output_format=output_format or OutputFormat.table,
        page_limit=limit if limit is not None else DEFAULT_LIMIT,
        page_number=page if page is not None else 1,
        output_path=output_path,
        verbose=verbose,
    )
