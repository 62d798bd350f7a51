"""Application configuration helpers."""
from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Iterator, Mapping

from .converters import DEFAULT_BASE_CURRENCY
from .models import DEFAULT_BUY_ACTIONS, DEFAULT_SELL_ACTIONS

DEFAULT_DOWNLOADS_DIR = "downloads"
DEFAULT_API_PREFIX = "/api"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 6000
DEFAULT_LOG_LEVEL = "INFO"


def _env_file_candidates(name: str) -> Iterator[Path]:
    """Yield where a profile file called ``name`` may live, most specific first."""

    path = Path(name)
    if path.is_absolute():
        yield path
        return
    yield Path.cwd() / name
    package_dir = Path(__file__).resolve().parent
    for folder in (package_dir, *package_dir.parents):
        yield folder / name


def _read_env_file(path: Path) -> dict[str, str]:
    """Read ``KEY=value`` lines, ignoring comments and ``export`` prefixes."""

    values: dict[str, str] = {}
    for line in path.read_text().splitlines():
        key, sep, value = line.strip().removeprefix("export ").partition("=")
        if not sep or key.startswith("#"):
            continue
        values[key.strip()] = value.strip().strip("\"'")
    return values


def _profile_env(env: Mapping[str, str]) -> dict[str, str]:
    """Values from ``PIE_FILTER_ENV_FILE`` or ``.env.<PIE_FILTER_ENV>``, if present."""

    name = env.get("PIE_FILTER_ENV_FILE") or f".env.{env.get('PIE_FILTER_ENV', 'local')}"
    for candidate in _env_file_candidates(name):
        if candidate.is_file():
            return _read_env_file(candidate)
    return {}


def _split_labels(value: str | None, default: tuple[str, ...]) -> tuple[str, ...]:
    if not value:
        return default
    labels = tuple(chunk.strip() for chunk in value.split(",") if chunk.strip())
    return labels or default


def _parse_port(value: str | None) -> int:
    if not value:
        return DEFAULT_PORT
    try:
        port = int(value)
    except ValueError as exc:
        raise RuntimeError(f"PIE_FILTER_PORT must be an integer, got {value!r}") from exc
    if not 0 < port < 65536:
        raise RuntimeError(f"PIE_FILTER_PORT out of range: {port}")
    return port


def _normalize_prefix(value: str | None) -> str:
    if value is None:
        return DEFAULT_API_PREFIX
    value = value.strip().rstrip("/")
    if value and not value.startswith("/"):
        value = "/" + value
    return value


@dataclass(frozen=True)
class Settings:
    """Runtime configuration."""

    downloads_dir: Path
    base_currency: str = DEFAULT_BASE_CURRENCY
    buy_actions: tuple[str, ...] = DEFAULT_BUY_ACTIONS
    sell_actions: tuple[str, ...] = DEFAULT_SELL_ACTIONS
    api_prefix: str = DEFAULT_API_PREFIX
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    log_level: str = DEFAULT_LOG_LEVEL

    @staticmethod
    def load(env: Mapping[str, str] | None = None) -> "Settings":
        """Load settings from environment variables."""

        base_env = dict(os.environ if env is None else env)
        file_env = _profile_env(base_env)
        # Environment variables set in the shell take precedence over the file.
        merged_env = {**file_env, **base_env}

        downloads = merged_env.get("PIE_FILTER_DOWNLOADS_DIR") or DEFAULT_DOWNLOADS_DIR
        base_currency = (merged_env.get("PIE_FILTER_BASE_CURRENCY") or DEFAULT_BASE_CURRENCY).strip()

        return Settings(
            downloads_dir=Path(downloads).expanduser().resolve(),
            base_currency=base_currency.upper(),
            buy_actions=_split_labels(merged_env.get("PIE_FILTER_BUY_ACTIONS"), DEFAULT_BUY_ACTIONS),
            sell_actions=_split_labels(
                merged_env.get("PIE_FILTER_SELL_ACTIONS"), DEFAULT_SELL_ACTIONS
            ),
            api_prefix=_normalize_prefix(merged_env.get("PIE_FILTER_API_PREFIX")),
            host=merged_env.get("PIE_FILTER_HOST") or DEFAULT_HOST,
            port=_parse_port(merged_env.get("PIE_FILTER_PORT")),
            log_level=merged_env.get("PIE_FILTER_LOG_LEVEL") or DEFAULT_LOG_LEVEL,
        )


__all__ = ["Settings"]
