"""
Configuration management and loading.

Settings are read once from environment variables at startup. Any invalid
value raises ConfigError and the process does not start.
"""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .services.copilot.client import DEFAULT_API_URL
from .services.copilot.descriptors import MetricsMode

DEFAULT_PORT = 8082
DEFAULT_REFRESH_INTERVAL = 3600  # one hour
METRICS_ENDPOINT = "/metrics"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


class ConfigError(ValueError):
    """Invalid or missing configuration."""
    pass


@dataclass(frozen=True)
class Settings:
    """Complete exporter configuration."""
    github_token: str
    organization: str = ""
    team: str = ""
    enterprise: str = ""
    api_url: str = DEFAULT_API_URL
    port: int = DEFAULT_PORT
    metrics_mode: MetricsMode = MetricsMode.FULL
    cache_enabled: bool = False
    refresh_interval: int = DEFAULT_REFRESH_INTERVAL
    log_level: str = "INFO"

    def __post_init__(self):
        """Validate required selectors and numeric ranges."""
        if not self.github_token:
            raise ConfigError("GITHUB_TOKEN environment variable is required")
        if not self.organization and not self.enterprise:
            raise ConfigError("Either GITHUB_ORG or GITHUB_ENTERPRISE environment variable is required")
        if not 0 < self.port < 65536:
            raise ConfigError(f"PORT must be between 1 and 65535, got {self.port}")
        if self.refresh_interval <= 0:
            raise ConfigError("REFRESH_INTERVAL must be > 0")
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ConfigError(f"Unknown LOG_LEVEL: {self.log_level}")

    @property
    def org_label(self) -> str:
        return self.enterprise or self.organization


def _parse_int(environ: Mapping[str, str], name: str, default: int) -> int:
    raw = environ.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}")


def _parse_bool(environ: Mapping[str, str], name: str, default: bool) -> bool:
    raw = environ.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigError(f"{name} must be a boolean, got {raw!r}")


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Load and validate settings from environment variables.

    Args:
        environ: Mapping to read from (defaults to os.environ)

    Returns:
        Validated Settings object

    Raises:
        ConfigError: If configuration is invalid
    """
    env = os.environ if environ is None else environ

    mode_raw = env.get("METRICS_MODE", MetricsMode.FULL.value).strip().lower()
    try:
        mode = MetricsMode(mode_raw)
    except ValueError:
        valid_modes = [m.value for m in MetricsMode]
        raise ConfigError(f"METRICS_MODE must be one of: {valid_modes}")

    return Settings(
        github_token=env.get("GITHUB_TOKEN", "").strip(),
        organization=env.get("GITHUB_ORG", "").strip(),
        team=env.get("GITHUB_TEAM", "").strip(),
        enterprise=env.get("GITHUB_ENTERPRISE", "").strip(),
        api_url=env.get("GITHUB_API_URL", "").strip() or DEFAULT_API_URL,
        port=_parse_int(env, "PORT", DEFAULT_PORT),
        metrics_mode=mode,
        cache_enabled=_parse_bool(env, "CACHE_ENABLED", False),
        refresh_interval=_parse_int(env, "REFRESH_INTERVAL", DEFAULT_REFRESH_INTERVAL),
        log_level=env.get("LOG_LEVEL", "INFO").strip().upper() or "INFO",
    )
