"""Credential store — profile-keyed TOML file with owner-only permissions."""

from __future__ import annotations

import os
import secrets
import subprocess
import sys
import tomllib
from pathlib import Path

import tomli_w
from pydantic import ValidationError

from langfuse_cli.client.errors import ConfigCorruptError, StoreIOError
from langfuse_cli.config.constants import CONFIG_FILE, DEFAULT_PROFILE, ENV_CONFIG_FILE
from langfuse_cli.config.models import StoredProfile

MASK = "********"


def mask_secret(secret: str) -> str:
    """Return a display-only rendering of *secret*: first 8 chars plus a mask."""
    if len(secret) <= 8:
        return "*" * len(secret)
    return secret[:8] + MASK


def default_config_path() -> Path:
    override = os.environ.get(ENV_CONFIG_FILE)
    return Path(override) if override else CONFIG_FILE


class ProfileStore:
    """Keyed persistent map of profile name to :class:`StoredProfile`.

    Subclasses provide ``load`` and ``save``; every mutation is a full
    load/merge/save cycle.
    """

    def load(self) -> dict[str, StoredProfile]:
        raise NotImplementedError

    def save(self, profiles: dict[str, StoredProfile]) -> None:
        raise NotImplementedError

    def get_profile(self, name: str = DEFAULT_PROFILE) -> StoredProfile | None:
        return self.load().get(name)

    def profile_names(self) -> list[str]:
        return sorted(self.load())

    def set_profile(
        self,
        name: str = DEFAULT_PROFILE,
        *,
        host: str | None = None,
        public_key: str | None = None,
        secret_key: str | None = None,
    ) -> StoredProfile:
        """Merge the provided fields into *name*, creating it if absent."""
        profiles = self.load()
        current = profiles.get(name, StoredProfile())
        updates = {
            key: value
            for key, value in (
                ("host", host),
                ("public_key", public_key),
                ("secret_key", secret_key),
            )
            if value is not None
        }
        profiles[name] = current.model_copy(update=updates)
        self.save(profiles)
        return profiles[name]

    def remove_profile(self, name: str) -> bool:
        profiles = self.load()
        if name not in profiles:
            return False
        del profiles[name]
        self.save(profiles)
        return True


class MemoryStore(ProfileStore):
    """In-memory store, used where no file should be touched."""

    def __init__(self, profiles: dict[str, StoredProfile] | None = None) -> None:
        self._profiles = {k: v.model_copy() for k, v in (profiles or {}).items()}

    def load(self) -> dict[str, StoredProfile]:
        return {k: v.model_copy() for k, v in self._profiles.items()}

    def save(self, profiles: dict[str, StoredProfile]) -> None:
        self._profiles = {k: v.model_copy() for k, v in profiles.items()}


class CredentialStore(ProfileStore):
    """Profile store backed by a single TOML file readable only by its owner."""

    def __init__(self, config_path: Path | None = None) -> None:
        self.config_path = config_path or default_config_path()

    def load(self) -> dict[str, StoredProfile]:
        try:
            raw = self.config_path.read_bytes()
        except FileNotFoundError:
            return {}
        except OSError as exc:
            raise StoreIOError(f"Cannot read config file {self.config_path}", exc) from exc
        try:
            data = tomllib.loads(raw.decode())
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
            raise ConfigCorruptError(
                f"Config file {self.config_path} is not valid TOML: {exc}"
            ) from exc
        section = data.get("profiles", {})
        if not isinstance(section, dict):
            raise ConfigCorruptError(
                f"Config file {self.config_path}: 'profiles' must be a table"
            )
        try:
            return {
                name: StoredProfile.model_validate(values)
                for name, values in section.items()
            }
        except ValidationError as exc:
            raise ConfigCorruptError(
                f"Config file {self.config_path} has an invalid profile: {exc}"
            ) from exc

    def save(self, profiles: dict[str, StoredProfile]) -> None:
        data = {
            "profiles": {
                name: profile.model_dump(exclude_none=True)
                for name, profile in sorted(profiles.items())
            }
        }
        payload = tomli_w.dumps(data).encode()
        directory = self.config_path.parent
        # Atomic write: owner-only temp file in the same directory, then rename
        temp = directory / f".{self.config_path.name}.{secrets.token_hex(4)}.tmp"
        try:
            directory.mkdir(mode=0o700, parents=True, exist_ok=True)
            if sys.platform == "win32":
                # New files inherit this ACL, so the temp file is private from creation
                _restrict_to_current_user(directory)
            fd = os.open(str(temp), os.O_WRONLY | os.O_CREAT | os.O_EXCL, 0o600)
            try:
                with os.fdopen(fd, "wb") as f:
                    f.write(payload)
                    f.flush()
                    os.fsync(f.fileno())
                os.replace(temp, self.config_path)
            except BaseException:
                temp.unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StoreIOError(f"Cannot write config file {self.config_path}", exc) from exc


def _restrict_to_current_user(path: Path) -> None:
    """Drop inherited ACEs on directory *path* and grant the current account full control.

    The grant propagates to files and folders created under *path*.
    """
    user = os.environ.get("USERNAME") or os.getlogin()
    grant = f"{user}:(OI)(CI)F"
    result = subprocess.run(
        ["icacls", str(path), "/inheritance:r", "/grant:r", grant],
        capture_output=True,
        text=True,
        check=False,
    )
    if result.returncode != 0:
        raise PermissionError(f"icacls failed for {path}: {result.stderr.strip()}")
