"""Configuration utilities for the datasetsync CLI.

The saved configuration is a flat JSON object in ``~/.datasetsync/config.json``:

    {
      "api_url": "https://kubernetes.default.svc",
      "token": "...",
      "kubectl": "kubectl"
    }
"""

from __future__ import annotations

import json
from pathlib import Path

from datasetsync.core.config import ClusterConfig

API_URL_KEY = "api_url"
TOKEN_KEY = "token"
KUBECTL_KEY = "kubectl"
DEFAULT_KUBECTL = "kubectl"


class ConfigError(Exception):
    """Saved configuration is missing or unusable."""


def get_config_dir() -> Path:
    """Get the configuration directory for datasetsync.

    Returns:
        Path to ~/.datasetsync.
    """
    return Path.home() / ".datasetsync"


def get_config_file() -> Path:
    return get_config_dir() / "config.json"


def load_config() -> dict[str, str]:
    """Load configuration from config file.

    Raises:
        ConfigError: If the file is not a JSON object.
    """
    config_file = get_config_file()
    if not config_file.exists():
        return {}
    try:
        data = json.loads(config_file.read_text())
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid config file {config_file}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Invalid config file {config_file}: expected an object")
    return {str(k): str(v) for k, v in data.items()}


def save_config(config: dict[str, str]) -> None:
    config_file = get_config_file()
    config_file.parent.mkdir(parents=True, exist_ok=True)
    config_file.write_text(json.dumps(config, indent=2))


def get_cluster_config(config: dict[str, str]) -> ClusterConfig:
    """Build the API server settings from the saved configuration.

    Raises:
        ConfigError: If the API URL or token was never configured.
    """
    missing = [k for k in (API_URL_KEY, TOKEN_KEY) if not config.get(k)]
    if missing:
        raise ConfigError(
            f"API server not configured (missing {', '.join(missing)}). "
            "Run 'datasetsync configure' first."
        )
    return ClusterConfig(api_url=config[API_URL_KEY], token=config[TOKEN_KEY])


def get_kubectl(config: dict[str, str]) -> str:
    """kubectl binary used to exec into master pods."""
    return config.get(KUBECTL_KEY) or DEFAULT_KUBECTL
