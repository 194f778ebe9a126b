"""Centralized configuration loading for kubeobj.

Settings come from a JSON file (``config.json`` by default) with environment
variable fallbacks and built-in defaults, e.g.::

    {"kubectl": {"binary": "/usr/local/bin/kubectl", "timeout_seconds": 30}}
"""

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

DEFAULT_CONFIG_PATH = "config.json"


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> Dict[str, Any]:
    """Load configuration from JSON file.

    Returns empty dict if file doesn't exist or is invalid.

    Args:
        config_path: Path to the JSON config file (default: "config.json")

    Returns:
        Configuration dictionary, or empty dict if file not found/invalid
    """
    path = Path(config_path)

    if not path.exists():
        return {}

    try:
        with open(path, "r") as f:
            data = json.load(f)
    except (json.JSONDecodeError, IOError):
        # Unreadable config behaves like no config, defaults apply
        return {}

    if not isinstance(data, dict):
        return {}
    return data


def get_config_value(
    keys: List[str], default: Any = None, config: Optional[Dict[str, Any]] = None
) -> Any:
    """Get nested configuration value with fallback to environment variable.

    ``["kubectl", "timeout_seconds"]`` is looked up in the config file first and
    then in the ``KUBECTL_TIMEOUT_SECONDS`` environment variable.

    Args:
        keys: List of keys to traverse
        default: Default value if key not found
        config: Optional config dict (uses load_config() if not provided)

    Returns:
        Configuration value, or default if not found
    """
    if config is None:
        config = load_config()

    value: Any = config
    for key in keys:
        if isinstance(value, dict):
            value = value.get(key)
            if value is None:
                break
        else:
            value = None
            break

    if value is not None:
        return value

    env_key = "_".join(k.upper() for k in keys)
    env_value = os.environ.get(env_key)
    if env_value is not None:
        return env_value

    return default


@dataclass(frozen=True)
class KubectlSettings:
    """Resolved kubectl settings.

    Attributes:
        binary: kubectl executable name or path
        timeout_seconds: Per-invocation timeout, None for no limit
        context: kubectl context to use instead of looking it up by cluster name
    """

    binary: str = "kubectl"
    timeout_seconds: Optional[float] = None
    context: Optional[str] = None


def get_kubectl_settings(config: Optional[Dict[str, Any]] = None) -> KubectlSettings:
    """Build :class:`KubectlSettings` from config file and environment."""
    if config is None:
        config = load_config()

    timeout = get_config_value(["kubectl", "timeout_seconds"], config=config)
    return KubectlSettings(
        binary=str(get_config_value(["kubectl", "binary"], default="kubectl", config=config)),
        timeout_seconds=float(timeout) if timeout not in (None, "") else None,
        context=get_config_value(["kubectl", "context"], config=config) or None,
    )
