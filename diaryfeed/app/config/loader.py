"""Profile-based configuration loader for the diary feed service."""

from __future__ import annotations

import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

DEFAULT_ENVIRONMENT = "dev"
DEFAULT_UPSTREAM_ENDPOINT = (
    "https://asia-northeast1-wywiwya.cloudfunctions.net/fetchPublicDiaries"
)
DEFAULT_CACHE_TTL_SECONDS = 60
DEFAULT_SITE_URL = "https://wywiwya.smallkirby.xyz"
DEFAULT_TITLE_SUFFIX = "WYWIWYA"
DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_PROFILE_DICT: dict[str, Any] = {
    "environment": DEFAULT_ENVIRONMENT,
    "upstream": {
        "endpoint": DEFAULT_UPSTREAM_ENDPOINT,
        "cache_ttl_seconds": DEFAULT_CACHE_TTL_SECONDS,
        "timeout_seconds": None,
    },
    "feed": {
        "site_url": DEFAULT_SITE_URL,
        "title_suffix": DEFAULT_TITLE_SUFFIX,
    },
    "logging": {"level": DEFAULT_LOG_LEVEL, "json": True},
}
CONFIG_PROFILE_ENV = "DIARYFEED_CONFIG_PROFILE"
CONFIG_DIR_ENV = "DIARYFEED_CONFIG_DIR"
UPSTREAM_ENDPOINT_ENV = "DIARYFEED_UPSTREAM_ENDPOINT"
LOG_LEVEL_ENV = "DIARYFEED_LOG_LEVEL"
DEFAULT_PROFILE = "dev"
DEFAULT_CONFIG_ROOT = Path(__file__).resolve().parents[3] / "config" / "profiles"
CONFIG_EXTENSIONS = (".yaml", ".yml")


@dataclass(frozen=True)
class UpstreamConfig:
    endpoint: str = DEFAULT_UPSTREAM_ENDPOINT
    cache_ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS
    timeout_seconds: Optional[float] = None


@dataclass(frozen=True)
class FeedConfig:
    site_url: str = DEFAULT_SITE_URL
    title_suffix: str = DEFAULT_TITLE_SUFFIX

    def user_link(self, user_id: str) -> str:
        return f"{self.site_url}/users/{user_id}"

    def entry_link(self, entry_id: str) -> str:
        return f"{self.site_url}/view/{entry_id}"

    def title_for(self, user_id: str) -> str:
        return f"{user_id} -- {self.title_suffix}"


@dataclass
class Settings:
    environment: str = DEFAULT_ENVIRONMENT
    upstream: UpstreamConfig = field(default_factory=UpstreamConfig)
    feed: FeedConfig = field(default_factory=FeedConfig)
    logging: dict[str, Any] = field(
        default_factory=lambda: dict(DEFAULT_PROFILE_DICT["logging"])
    )
    raw: dict[str, Any] = field(default_factory=dict)

    @property
    def log_level(self) -> str:
        """Return the configured root log level name."""

        return str(self.logging.get("level") or DEFAULT_LOG_LEVEL).upper()


def load_settings(
    profile: str | None = None, config_dir: str | Path | None = None
) -> Settings:
    """Load settings from the requested profile or fall back to defaults."""

    profile_name = profile or os.getenv(CONFIG_PROFILE_ENV, DEFAULT_PROFILE)
    config_root = Path(
        config_dir or os.getenv(CONFIG_DIR_ENV, DEFAULT_CONFIG_ROOT)
    ).expanduser()
    config_data = _load_profile_dict(profile_name, config_root)
    if not config_data:
        config_data = copy.deepcopy(DEFAULT_PROFILE_DICT)

    environment = str(config_data.get("environment", DEFAULT_ENVIRONMENT))
    upstream = _build_upstream_config(config_data.get("upstream"))
    feed = _build_feed_config(config_data.get("feed"))

    logging_cfg = dict(DEFAULT_PROFILE_DICT["logging"])
    logging_cfg.update(config_data.get("logging") or {})
    level_override = os.getenv(LOG_LEVEL_ENV)
    if level_override:
        logging_cfg["level"] = level_override.strip().upper()

    return Settings(
        environment=environment,
        upstream=upstream,
        feed=feed,
        logging=logging_cfg,
        raw=config_data,
    )


def _load_profile_dict(profile_name: str, config_root: Path) -> dict[str, Any]:
    """Load the YAML profile if available, otherwise return an empty dict."""

    if not config_root.exists():
        return {}

    for extension in CONFIG_EXTENSIONS:
        candidate = config_root / f"{profile_name}{extension}"
        if not candidate.exists():
            continue
        try:
            with candidate.open("r", encoding="utf-8") as handle:
                loaded = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise RuntimeError(
                f"Failed to parse config profile {candidate}: {exc}"
            ) from exc
        if not isinstance(loaded, dict):
            raise RuntimeError(
                f"Config profile {candidate} must be a mapping at the root"
            )
        return loaded

    return {}


def _build_upstream_config(upstream_cfg: dict[str, Any] | None) -> UpstreamConfig:
    upstream_cfg = upstream_cfg or {}
    endpoint = os.getenv(
        UPSTREAM_ENDPOINT_ENV,
        upstream_cfg.get("endpoint") or DEFAULT_UPSTREAM_ENDPOINT,
    )
    cache_ttl = int(upstream_cfg.get("cache_ttl_seconds", DEFAULT_CACHE_TTL_SECONDS))
    if cache_ttl < 0:
        raise RuntimeError("upstream.cache_ttl_seconds must not be negative")

    raw_timeout = upstream_cfg.get("timeout_seconds")
    timeout = None if raw_timeout is None else float(raw_timeout)
    if timeout is not None and timeout <= 0:
        raise RuntimeError("upstream.timeout_seconds must be positive when set")

    return UpstreamConfig(
        endpoint=str(endpoint),
        cache_ttl_seconds=cache_ttl,
        timeout_seconds=timeout,
    )


def _build_feed_config(feed_cfg: dict[str, Any] | None) -> FeedConfig:
    feed_cfg = feed_cfg or {}
    site_url = str(feed_cfg.get("site_url") or DEFAULT_SITE_URL).rstrip("/")
    return FeedConfig(
        site_url=site_url,
        title_suffix=str(feed_cfg.get("title_suffix") or DEFAULT_TITLE_SUFFIX),
    )
