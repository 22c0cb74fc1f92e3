"""Configuration loader with type-safe dataclasses."""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml


class ConfigError(Exception):
    """Raised when configuration is invalid or cannot be loaded."""

    pass


DEFAULT_INTERVAL = 10
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 10000


@dataclass(frozen=True)
class MonitorConfig:
    """Configuration for the sweep loop."""

    interval: int = DEFAULT_INTERVAL  # seconds between sweeps

    def __post_init__(self) -> None:
        if self.interval < 1:
            raise ConfigError(f"Monitor interval must be at least 1 second (got {self.interval})")


@dataclass(frozen=True)
class ServerConfig:
    """Configuration for the dashboard and realtime server."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT

    def __post_init__(self) -> None:
        if not self.host:
            raise ConfigError("Server host cannot be empty")
        if self.port < 1 or self.port > 65535:
            raise ConfigError(f"Server port must be between 1 and 65535, got {self.port}")


@dataclass(frozen=True)
class Config:
    """Main configuration container.

    ``urls`` keeps the order of the configuration file; it is the order in
    which endpoints are probed and reported.
    """

    urls: list[str]
    monitor: MonitorConfig = field(default_factory=MonitorConfig)
    server: ServerConfig = field(default_factory=ServerConfig)

    def __post_init__(self) -> None:
        if not self.urls:
            raise ConfigError("At least one URL must be configured")
        for url in self.urls:
            if not url.startswith(("http://", "https://")):
                raise ConfigError(f"URL must start with http:// or https://, got '{url}'")
        duplicates = [url for url in self.urls if self.urls.count(url) > 1]
        if duplicates:
            raise ConfigError(f"Duplicate URLs found: {set(duplicates)}")


def _parse_url_entry(data: object, index: int) -> str | None:
    """Parse a single entry of the ``urls`` list.

    Entries may be plain strings or mappings with a ``url`` key. Blank
    entries yield None and are dropped by the caller.
    """
    if data is None:
        return None
    if isinstance(data, dict):
        if "url" not in data:
            raise ConfigError(f"URL entry {index} is missing 'url' field")
        data = data["url"]
        if data is None:
            return None
    if not isinstance(data, str):
        raise ConfigError(f"URL entry {index} must be a string or a dictionary with a 'url' field")
    return data.strip() or None


def _parse_monitor_config(data: dict | None) -> MonitorConfig:
    """Parse monitor configuration section."""
    if data is None:
        return MonitorConfig()
    if not isinstance(data, dict):
        raise ConfigError("'monitor' section must be a dictionary")

    try:
        interval = int(data.get("interval", DEFAULT_INTERVAL))
    except (TypeError, ValueError):
        raise ConfigError(f"Monitor interval must be an integer, got {data.get('interval')!r}")
    return MonitorConfig(interval=interval)


def _parse_server_config(data: dict | None) -> ServerConfig:
    """Parse server configuration section."""
    if data is None:
        return ServerConfig()
    if not isinstance(data, dict):
        raise ConfigError("'server' section must be a dictionary")

    try:
        port = int(data.get("port", DEFAULT_PORT))
    except (TypeError, ValueError):
        raise ConfigError(f"Server port must be an integer, got {data.get('port')!r}")

    # "host:" with no value parses as None
    host = data.get("host")
    if host is None:
        host = DEFAULT_HOST
    elif not isinstance(host, str):
        raise ConfigError(f"Server host must be a string, got {host!r}")
    return ServerConfig(host=host, port=port)


def _apply_env_overrides(config_data: dict) -> dict:
    """Apply environment variable overrides to configuration.

    Supported overrides:
    - SITEWATCH_MONITOR_INTERVAL: Override monitor.interval
    - SITEWATCH_SERVER_HOST: Override server.host
    - SITEWATCH_SERVER_PORT: Override server.port
    - PORT: Override server.port when SITEWATCH_SERVER_PORT is not set
    """
    for section in ("monitor", "server"):
        if config_data.get(section) is None:
            config_data[section] = {}
        elif not isinstance(config_data[section], dict):
            raise ConfigError(f"'{section}' section must be a dictionary")

    monitor_interval = os.environ.get("SITEWATCH_MONITOR_INTERVAL")
    if monitor_interval is not None:
        config_data["monitor"]["interval"] = monitor_interval

    server_host = os.environ.get("SITEWATCH_SERVER_HOST")
    if server_host is not None:
        config_data["server"]["host"] = server_host

    server_port = os.environ.get("SITEWATCH_SERVER_PORT", os.environ.get("PORT"))
    if server_port is not None:
        config_data["server"]["port"] = server_port

    return config_data


def load_config(config_path: str) -> Config:
    """Load and validate configuration from a YAML file.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        Validated Config object.

    Raises:
        ConfigError: If the file cannot be read or configuration is invalid.
    """
    path = Path(config_path)

    if not path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Failed to parse YAML configuration: {e}")
    except OSError as e:
        raise ConfigError(f"Failed to read configuration file: {e}")

    if data is None:
        raise ConfigError("Configuration file is empty")

    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a YAML dictionary")

    urls_data = data.get("urls")
    if urls_data is None:
        raise ConfigError("Configuration must contain a 'urls' section")
    if not isinstance(urls_data, list):
        raise ConfigError("'urls' must be a list")

    urls = [_parse_url_entry(entry, i) for i, entry in enumerate(urls_data)]

    data = _apply_env_overrides(data)

    return Config(
        urls=[url for url in urls if url is not None],
        monitor=_parse_monitor_config(data.get("monitor")),
        server=_parse_server_config(data.get("server")),
    )
