"""Server configuration.

Loads from config.yaml if present, with environment variable overrides.
Environment variables use the pattern: GPSFEED_<SECTION>_<KEY> (uppercase).
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

__all__ = [
    "AppConfig",
    "DispatchConfig",
    "LoggingConfig",
    "ServerConfig",
    "UpstreamConfig",
    "load_config",
]

_SUPPORTED_FORMATS = ("nmea",)


@dataclass
class UpstreamConfig:
    host: str = "localhost"
    service: str = "5001"  # port number or service name
    format: str = "nmea"
    connect_timeout_s: float = 2.0


@dataclass
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8000


@dataclass
class DispatchConfig:
    tick_interval_ms: int = 100
    default_period_ms: int = 2000
    max_subscriptions: int = 1024


@dataclass
class LoggingConfig:
    level: str = "info"
    format: str = "console"  # "console" or "json"


@dataclass
class AppConfig:
    upstream: UpstreamConfig = field(default_factory=UpstreamConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    dispatch: DispatchConfig = field(default_factory=DispatchConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def _apply_env_overrides(config: AppConfig) -> None:
    """Override config values from environment variables."""
    mapping = {
        "GPSFEED_UPSTREAM_HOST": lambda v: setattr(config.upstream, "host", v),
        "GPSFEED_UPSTREAM_SERVICE": lambda v: setattr(config.upstream, "service", v),
        "GPSFEED_UPSTREAM_FORMAT": lambda v: setattr(config.upstream, "format", v),
        "GPSFEED_UPSTREAM_CONNECT_TIMEOUT_S": lambda v: setattr(config.upstream, "connect_timeout_s", float(v)),
        "GPSFEED_SERVER_HOST": lambda v: setattr(config.server, "host", v),
        "GPSFEED_SERVER_PORT": lambda v: setattr(config.server, "port", int(v)),
        "GPSFEED_DISPATCH_TICK_INTERVAL_MS": lambda v: setattr(config.dispatch, "tick_interval_ms", int(v)),
        "GPSFEED_DISPATCH_DEFAULT_PERIOD_MS": lambda v: setattr(config.dispatch, "default_period_ms", int(v)),
        "GPSFEED_DISPATCH_MAX_SUBSCRIPTIONS": lambda v: setattr(config.dispatch, "max_subscriptions", int(v)),
        "GPSFEED_LOG_LEVEL": lambda v: setattr(config.logging, "level", v),
        "GPSFEED_LOG_FORMAT": lambda v: setattr(config.logging, "format", v),
    }
    for env_key, setter in mapping.items():
        val = os.environ.get(env_key)
        if val is not None:
            setter(val)


def _validate(config: AppConfig) -> None:
    if config.upstream.format not in _SUPPORTED_FORMATS:
        raise ValueError(f"unsupported upstream format: {config.upstream.format!r}")
    if config.dispatch.tick_interval_ms <= 0:
        raise ValueError("dispatch.tick_interval_ms must be positive")
    if config.upstream.connect_timeout_s <= 0:
        raise ValueError("upstream.connect_timeout_s must be positive")


def load_config(config_path: str | Path | None = None) -> AppConfig:
    """Load configuration from YAML file + environment overrides.

    Raises:
        ValueError: If the resulting configuration is not usable.
    """
    config = AppConfig()

    if config_path is None:
        config_path = Path("config.yaml")
    else:
        config_path = Path(config_path)

    if config_path.exists():
        with open(config_path) as f:
            raw = yaml.safe_load(f) or {}

        for section in ("upstream", "server", "dispatch", "logging"):
            target = getattr(config, section)
            for k, v in (raw.get(section) or {}).items():
                if hasattr(target, k):
                    setattr(target, k, v)

    # Environment overrides always win
    _apply_env_overrides(config)
    _validate(config)
    return config
