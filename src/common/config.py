"""Configuration resolution for supamarker.

Settings come from three places, highest priority first:

1. A TOML config file (``--config`` path, ``./config.toml`` or the per-user
   config directory; the first file found wins).
2. Environment variables (``SUPABASE_URL``, ``SUPABASE_SERVICE_KEY``,
   ``SUPABASE_BUCKET``, ``SUPABASE_TABLE``), optionally seeded from ``.env``.
3. Built-in defaults for ``bucket`` and ``table``.

Every function here takes the working directory and environment explicitly;
only the CLI looks at ``os.environ`` and ``Path.cwd()``.
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Mapping, Optional

from pydantic import BaseModel, ValidationError, field_validator

logger = logging.getLogger(__name__)

APP_NAME = "supamarker"
CONFIG_FILENAME = "config.toml"

DEFAULT_BUCKET = "blog"
DEFAULT_TABLE = "posts"
DEFAULT_TIMEOUT = 30.0

SAMPLE_CONFIG = """\
supabase_url = "https://xxxxx.supabase.co"
supabase_service_key = "service_role_key"
bucket = "blog"
table = "posts"
"""


class ConfigError(ValueError):
    """Configuration is missing, unreadable or invalid."""


class FileConfig(BaseModel):
    """Keys accepted in config.toml. All optional."""
    supabase_url: Optional[str] = None
    supabase_service_key: Optional[str] = None
    bucket: Optional[str] = None
    table: Optional[str] = None


class ResolvedConfig(BaseModel):
    """Settings for a single invocation, after merging every source."""
    supabase_url: str
    service_key: str
    bucket: str = DEFAULT_BUCKET
    table: str = DEFAULT_TABLE
    timeout: float = DEFAULT_TIMEOUT

    @field_validator("supabase_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")


# === Paths ===


def user_config_dir(env: Mapping[str, str], os_name: str = os.name) -> Path | None:
    """Return the per-user supamarker config directory, or None if unknown.

    POSIX: $XDG_CONFIG_HOME/supamarker, else $HOME/.config/supamarker.
    Windows: %APPDATA%, %LOCALAPPDATA%, then %USERPROFILE%\\.config.
    """
    if os_name == "nt":
        for var in ("APPDATA", "LOCALAPPDATA"):
            if base := env.get(var):
                return Path(base) / APP_NAME
        if profile := env.get("USERPROFILE"):
            return Path(profile) / ".config" / APP_NAME
        return None

    if xdg := env.get("XDG_CONFIG_HOME"):
        return Path(xdg) / APP_NAME
    if home := env.get("HOME"):
        return Path(home) / ".config" / APP_NAME
    return None


def default_config_path(env: Mapping[str, str], os_name: str = os.name) -> Path:
    """Path that ``gen-config`` writes to."""
    config_dir = user_config_dir(env, os_name)
    if config_dir is None:
        if os_name == "nt":
            hint = "APPDATA, LOCALAPPDATA or USERPROFILE"
        else:
            hint = "XDG_CONFIG_HOME or HOME"
        raise ConfigError(f"{hint} not set; cannot determine default config path")
    return config_dir / CONFIG_FILENAME


def candidate_config_paths(
    cli_path: Optional[str],
    cwd: Path,
    env: Mapping[str, str],
    os_name: str = os.name,
) -> list[Path]:
    """Config file locations to try, in priority order.

    An explicit ``--config`` path replaces the search entirely.
    """
    if cli_path:
        return [Path(cli_path)]

    paths = [cwd / CONFIG_FILENAME]
    config_dir = user_config_dir(env, os_name)
    if config_dir is not None:
        paths.append(config_dir / CONFIG_FILENAME)
    return paths


# === Loading ===


def read_config_file(path: Path) -> FileConfig:
    """Parse a TOML config file."""
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        raise ConfigError(f"reading config at {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"parsing TOML config {path}: {e}") from e

    try:
        return FileConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"invalid config {path}: {e}") from e


def find_config_file(candidates: list[Path], explicit: bool = False) -> FileConfig | None:
    """Load the first existing candidate.

    Args:
        candidates: Paths from ``candidate_config_paths``.
        explicit: True when the single candidate came from ``--config``;
            a missing file is then an error instead of a skip.
    """
    for path in candidates:
        if path.is_file():
            logger.debug("Using config file %s", path)
            return read_config_file(path)
        if explicit:
            raise ConfigError(f"config file not found: {path}")
    logger.debug("No config file found in %s", [str(p) for p in candidates])
    return None


def _first_set(*values: Optional[str]) -> Optional[str]:
    for value in values:
        if value:
            return value
    return None


def resolve_config(
    file_config: FileConfig | None,
    env: Mapping[str, str],
) -> ResolvedConfig:
    """Merge file values, environment values and defaults.

    File values take precedence over the environment. Empty strings count
    as unset.

    Raises:
        ConfigError: supabase_url or the service key is missing everywhere.
    """
    fc = file_config or FileConfig()

    supabase_url = _first_set(fc.supabase_url, env.get("SUPABASE_URL"))
    if not supabase_url:
        raise ConfigError(
            "Missing supabase_url. Set it in a config file or SUPABASE_URL env var."
        )

    service_key = _first_set(fc.supabase_service_key, env.get("SUPABASE_SERVICE_KEY"))
    if not service_key:
        raise ConfigError(
            "Missing supabase_service_key. Set it in a config file or "
            "SUPABASE_SERVICE_KEY env var."
        )

    bucket = _first_set(fc.bucket, env.get("SUPABASE_BUCKET")) or DEFAULT_BUCKET
    table = _first_set(fc.table, env.get("SUPABASE_TABLE")) or DEFAULT_TABLE

    timeout = DEFAULT_TIMEOUT
    if raw_timeout := env.get("SUPABASE_TIMEOUT"):
        try:
            timeout = float(raw_timeout)
        except ValueError as e:
            raise ConfigError(f"SUPABASE_TIMEOUT must be a number, got {raw_timeout!r}") from e

    return ResolvedConfig(
        supabase_url=supabase_url,
        service_key=service_key,
        bucket=bucket,
        table=table,
        timeout=timeout,
    )


def load_config(
    cli_path: Optional[str],
    cwd: Path,
    env: Mapping[str, str],
    os_name: str = os.name,
) -> ResolvedConfig:
    """Discover the config file and resolve the final settings."""
    candidates = candidate_config_paths(cli_path, cwd, env, os_name)
    file_config = find_config_file(candidates, explicit=bool(cli_path))
    config = resolve_config(file_config, env)
    logger.debug(
        "Resolved config: url=%s bucket=%s table=%s",
        config.supabase_url, config.bucket, config.table,
    )
    return config


# === Sample config ===


def gen_config(path: Path) -> Path:
    """Write the sample config to ``path``.

    Raises:
        ConfigError: A file already exists there. It is left unchanged.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigError(f"creating config directory {path.parent}: {e}") from e

    try:
        with open(path, "x", encoding="utf-8") as f:
            f.write(SAMPLE_CONFIG)
    except FileExistsError as e:
        raise ConfigError(
            f"Config already exists at {path}. Delete or move it to regenerate."
        ) from e
    except OSError as e:
        raise ConfigError(f"writing config to {path}: {e}") from e

    logger.info("Sample config written: %s", path)
    return path
